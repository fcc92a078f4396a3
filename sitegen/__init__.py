"""Static site generation from Markdown source trees and manifests."""

from .errors import (
    ConfigError,
    CopyError,
    DuplicateEntryError,
    GenerateError,
    HookError,
    MinifyError,
    OptionError,
    PipelineError,
    SiteError,
    SitegenError,
    WriteError,
    WriteErrors,
)
from .manifest import Flags, ManifestError, apply_from_manifest, apply_manifest
from .models import CopyTarget, OutputFile, ReplaceTarget, SiteConfig, Stage
from .options import Options
from .pipeline import BreakPipelines, SkipCore, chain
from .site import Site, build_site, generate_site

__all__ = [
    "BreakPipelines",
    "ConfigError",
    "CopyError",
    "CopyTarget",
    "DuplicateEntryError",
    "Flags",
    "GenerateError",
    "HookError",
    "ManifestError",
    "MinifyError",
    "OptionError",
    "Options",
    "OutputFile",
    "PipelineError",
    "ReplaceTarget",
    "Site",
    "SiteConfig",
    "SiteError",
    "SitegenError",
    "SkipCore",
    "Stage",
    "WriteError",
    "WriteErrors",
    "apply_from_manifest",
    "apply_manifest",
    "build_site",
    "chain",
    "generate_site",
]
