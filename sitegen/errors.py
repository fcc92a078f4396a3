"""Exception hierarchy shared by sitegen components."""

from __future__ import annotations

from typing import List, Sequence


class SitegenError(RuntimeError):
    """Base class for errors raised by sitegen."""


class SiteError(SitegenError):
    """Raised when a site is misconfigured or its source tree is inconsistent."""


class DuplicateEntryError(SiteError):
    """Raised when a per-directory store already has an entry for a directory."""

    def __init__(self, directory: str) -> None:
        super().__init__(f"found duplicate path '{directory}'")
        self.directory = directory


class OptionError(SitegenError):
    """Raised when build options are combined in an unsupported way."""


class PipelineError(SitegenError):
    """Raised when a pipeline stage fails with anything other than a control signal."""

    def __init__(self, index: int, cause: BaseException) -> None:
        super().__init__(f"[pipeline {index}] error: {cause}")
        self.index = index
        self.cause = cause


class HookError(SitegenError):
    """Raised when a pre-conversion or post-render hook fails for a path."""

    def __init__(self, kind: str, path: str, cause: BaseException) -> None:
        super().__init__(f"{kind} error when building {path}: {cause}")
        self.kind = kind
        self.path = path
        self.cause = cause


class WriteError(SitegenError):
    """A single output that could not be persisted."""

    def __init__(self, target: str, cause: BaseException) -> None:
        super().__init__(f"WriteError({target}): {cause}")
        self.target = target
        self.cause = cause


class WriteErrors(SitegenError):
    """Aggregate of every write failure from one streaming write."""

    def __init__(self, errors: Sequence[WriteError]) -> None:
        self.errors: List[WriteError] = list(errors)
        joined = "\n".join(str(error) for error in self.errors)
        super().__init__(joined)


class GenerateError(SitegenError):
    """Raised when both the walk and the writers failed during one generation."""

    def __init__(self, build_error: BaseException, write_error: BaseException) -> None:
        super().__init__(
            f"streaming_build_error='{build_error}' streaming_write_error='{write_error}'"
        )
        self.build_error = build_error
        self.write_error = write_error


class ConfigError(SitegenError):
    """Raised when a manifest cannot be parsed or has fields of the wrong shape."""


class CopyError(SitegenError):
    """Raised when a declared copy cannot be performed."""


class MinifyError(SitegenError):
    """Raised when a minifier rejects its input."""


__all__ = [
    "ConfigError",
    "CopyError",
    "DuplicateEntryError",
    "GenerateError",
    "HookError",
    "MinifyError",
    "OptionError",
    "PipelineError",
    "SiteError",
    "SitegenError",
    "WriteError",
    "WriteErrors",
]
