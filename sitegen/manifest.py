"""Manifest-driven orchestration of the cleanup, copy and build stages."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from .config import Manifest, load_manifest
from .copies import copy_site, remove_all
from .errors import SitegenError
from .index import index_generator
from .logging import get_logger, stage_logger
from .minify import minifiers, minify_hook, minify_html_generate
from .models import OutputFile, SiteConfig, Stage
from .options import Options
from .pipeline import Hook, HookGenerate, chain_hooks
from .replace import replacer
from .site import Site

_LOGGER = get_logger("manifest")


class ManifestError(SitegenError):
    """A failure while applying one stage of a manifest to one site."""

    def __init__(
        self,
        key: str,
        stage: Stage,
        msg: str,
        cause: Optional[BaseException] = None,
    ) -> None:
        text = f"[{stage.label} {key}] {msg}"
        if cause is not None:
            text = f"{text}: {cause}"
        super().__init__(text)
        self.key = key
        self.stage = stage
        self.msg = msg
        self.cause = cause


@dataclass
class Flags:
    """Command-line switches that alter how a manifest is applied."""

    no_cleanup: bool = False
    no_copy: bool = False
    no_build: bool = False
    no_replace: bool = False
    no_generate_index: bool = False
    minify_html: bool = False
    minify_html_copy: bool = False
    minify_css: bool = False
    minify_js: bool = False
    minify_json: bool = False

    def stage(self) -> Stage:
        stages = Stage.ALL
        if self.no_cleanup:
            stages = stages.skip(Stage.CLEANUP)
        if self.no_copy:
            stages = stages.skip(Stage.COPY)
        if self.no_build:
            stages = stages.skip(Stage.BUILD)
        return stages

    def hook(self) -> Optional[Hook]:
        """The minifier hook selected by the ``minify_*`` switches, if any."""
        return minify_hook(
            minifiers(
                html=self.minify_html_copy,
                css=self.minify_css,
                js=self.minify_js,
                json_=self.minify_json,
            )
        )

    def hook_generate(self) -> Optional[HookGenerate]:
        """The post-render hook minifying converted pages, when ``minify_html`` is set."""
        if not self.minify_html:
            return None
        return minify_html_generate()


def collect(manifest: Manifest) -> Dict[str, List[str]]:
    """Gather every copy target per site, rejecting targets claimed twice."""
    seen: Dict[str, str] = {}
    targets: Dict[str, List[str]] = {}
    for key, config in manifest.items():
        log = stage_logger(_LOGGER, Stage.COLLECT.label, key, config.url)
        site_targets = targets.setdefault(key, [])
        for src, copy_targets in config.copies.items():
            for target in copy_targets:
                normalized = os.path.normpath(target.target)
                if normalized in seen:
                    log.error("duplicate write target %s (src %s, first claimed by %s)", target.target, src, seen[normalized])
                    raise ManifestError(
                        key,
                        Stage.COLLECT,
                        "duplicate write target",
                        SitegenError(f"duplicate target '{target.target}'"),
                    )
                seen[normalized] = key
                site_targets.append(target.target)
    return targets


def cleanup(manifest: Manifest, targets: Dict[str, List[str]]) -> None:
    """Remove the collected copy targets of every site that opted in."""
    for key, config in manifest.items():
        if not config.cleanup:
            continue
        log = stage_logger(_LOGGER, Stage.CLEANUP.label, key, config.url)
        for target in targets.get(key, []):
            log.info("cleaning up %s", target)
            try:
                removed = remove_all(target)
            except Exception as exc:
                raise ManifestError(key, Stage.CLEANUP, "failed to cleanup", exc) from exc
            if not removed:
                log.debug("%s already absent", target)


def copy(manifest: Manifest) -> None:
    for key, config in manifest.items():
        log = stage_logger(_LOGGER, Stage.COPY.label, key, config.url)
        try:
            written = copy_site(config.copies, log)
        except Exception as exc:
            raise ManifestError(key, Stage.COPY, "failed to copy", exc) from exc
        log.debug("copied %d file(s)", len(written))


def new_site(config: SiteConfig, flags: Flags) -> Site:
    """Create the site for one manifest entry with its hooks and pipelines installed."""
    options = Options().with_writers_from_env()

    hooks: List[Optional[Hook]] = []
    if config.replaces and not flags.no_replace:
        hooks.append(replacer(config.replaces))
    hooks.append(flags.hook())
    hook = chain_hooks(*hooks)
    if hook is not None:
        options.with_hook(hook)
    hook_generate = flags.hook_generate()
    if hook_generate is not None:
        options.with_hook_generate(hook_generate)

    site = Site(config.src, config.dst, config.title, config.url, options)
    if config.generate_index and not flags.no_generate_index:
        options.with_pipelines(index_generator(site, config.generate_index_mode))
    return site


def build(manifest: Manifest, flags: Flags) -> Dict[str, List[OutputFile]]:
    results: Dict[str, List[OutputFile]] = {}
    for key, config in manifest.items():
        log = stage_logger(_LOGGER, Stage.BUILD.label, key, config.url)
        log.info("building site %s -> %s", config.src, config.dst)
        try:
            site = new_site(config, flags)
            results[key] = site.generate()
        except Exception as exc:
            raise ManifestError(key, Stage.BUILD, "failed to build", exc) from exc
    return results


def apply_manifest(
    manifest: Manifest,
    stages: Stage = Stage.ALL,
    flags: Optional[Flags] = None,
) -> Dict[str, List[OutputFile]]:
    """Run the enabled stages over every site in ``manifest``, in order.

    Collect always runs first and fails before anything on disk is touched.
    Returns the written outputs per site key when the build stage ran.
    """
    flags = flags or Flags()
    _LOGGER.info(
        "stages cleanup=%s copy=%s build=%s",
        stages.ok(Stage.CLEANUP),
        stages.ok(Stage.COPY),
        stages.ok(Stage.BUILD),
    )

    targets = collect(manifest)

    if stages.ok(Stage.CLEANUP):
        cleanup(manifest, targets)
    else:
        _LOGGER.info("skipping stage cleanup")

    if stages.ok(Stage.COPY):
        copy(manifest)
    else:
        _LOGGER.info("skipping stage copy")

    if not stages.ok(Stage.BUILD):
        _LOGGER.info("skipping stage build")
        return {}
    return build(manifest, flags)


def apply_from_manifest(
    path: Path | str,
    stages: Stage = Stage.ALL,
    flags: Optional[Flags] = None,
) -> Dict[str, List[OutputFile]]:
    """Load the manifest at ``path`` and apply it."""
    _LOGGER.info("parsing manifest %s", path)
    manifest = load_manifest(path)
    return apply_manifest(manifest, stages, flags)


__all__ = [
    "Flags",
    "ManifestError",
    "apply_from_manifest",
    "apply_manifest",
    "build",
    "cleanup",
    "collect",
    "copy",
    "new_site",
]
