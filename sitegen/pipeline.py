"""Pipeline and hook contracts invoked by the source walker.

A pipeline receives ``(path, data, entry)`` for every walked input and
returns a possibly rewritten triple. It may instead raise one of two control
signals:

``SkipCore``
    Drop the input entirely: no conversion and no output.
``BreakPipelines``
    Stop running the remaining pipelines but still convert the current
    triple. A pipeline may attach the triple it wants converted; without
    one, the triple it was called with is used.

Any other exception aborts the build.
"""

from __future__ import annotations

import os
from typing import Callable, Optional, Sequence, Tuple

from .errors import PipelineError

Triple = Tuple[str, bytes, os.DirEntry]
Pipeline = Callable[[str, bytes, os.DirEntry], Triple]
Hook = Callable[[str, bytes], bytes]
HookGenerate = Callable[[bytes], bytes]


class PipelineSignal(Exception):
    """Base for control-flow signals raised by pipelines."""


class SkipCore(PipelineSignal):
    """Skip the core converter for the current input."""


class BreakPipelines(PipelineSignal):
    """Stop pipeline iteration, converting ``triple`` when given."""

    def __init__(self, triple: Optional[Triple] = None) -> None:
        super().__init__("break pipelines")
        self.triple = triple


def run_pipelines(pipelines: Sequence[Pipeline], path: str, data: bytes, entry: os.DirEntry) -> Optional[Triple]:
    """Apply ``pipelines`` in order; return None when the input must be skipped."""
    for index, pipe in enumerate(pipelines):
        try:
            path, data, entry = pipe(path, data, entry)
        except SkipCore:
            return None
        except BreakPipelines as signal:
            if signal.triple is not None:
                path, data, entry = signal.triple
            break
        except Exception as exc:
            raise PipelineError(index, exc) from exc
    return path, data, entry


def chain(*pipelines: Pipeline) -> Pipeline:
    """Compose pipelines left to right into one pipeline.

    Control signals pass through untouched; other failures are wrapped with
    the index of the failing sub-pipeline.
    """

    def _chained(path: str, data: bytes, entry: os.DirEntry) -> Triple:
        for index, pipe in enumerate(pipelines):
            try:
                path, data, entry = pipe(path, data, entry)
            except BreakPipelines as signal:
                if signal.triple is None:
                    signal.triple = (path, data, entry)
                raise
            except SkipCore:
                raise
            except Exception as exc:
                raise PipelineError(index, exc) from exc
        return path, data, entry

    return _chained


def chain_hooks(*hooks: Optional[Hook]) -> Optional[Hook]:
    """Compose pre-conversion hooks into one, skipping missing ones."""
    active = [hook for hook in hooks if hook is not None]
    if not active:
        return None
    if len(active) == 1:
        return active[0]

    def _chained(path: str, data: bytes) -> bytes:
        for hook in active:
            data = hook(path, data)
        return data

    return _chained


__all__ = [
    "BreakPipelines",
    "Hook",
    "HookGenerate",
    "Pipeline",
    "PipelineSignal",
    "SkipCore",
    "Triple",
    "chain",
    "chain_hooks",
    "run_pipelines",
]
