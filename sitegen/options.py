"""Build options for a single site generation."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import OptionError
from .logging import get_logger
from .pipeline import Hook, HookGenerate, Pipeline

WRITERS_ENV_KEY = "SITEGEN_WRITERS"
WRITERS_DEFAULT = 20

_LOGGER = get_logger("options")


def writers_from_env() -> int:
    """Return the writer concurrency from the environment, or the default."""
    raw = os.environ.get(WRITERS_ENV_KEY, "")
    try:
        writers = int(raw.strip())
    except ValueError:
        return WRITERS_DEFAULT
    if writers <= 0:
        return WRITERS_DEFAULT
    return writers


@dataclass
class Options:
    """Hooks, pipelines and writer settings applied to one site.

    Only one hook of each kind may be installed; pipelines accumulate in
    registration order.
    """

    hook: Optional[Hook] = None
    hook_generate: Optional[HookGenerate] = None
    pipelines: List[Pipeline] = field(default_factory=list)
    writers: int = 0
    caching: bool = False

    def with_hook(self, hook: Hook) -> "Options":
        """Install the pre-conversion hook applied to every file's raw bytes."""
        if self.hook is not None:
            raise OptionError(f"a pre-conversion hook is already installed ({_name(self.hook)})")
        _LOGGER.debug("Installing hook %s", _name(hook))
        self.hook = hook
        return self

    def with_hook_generate(self, hook: HookGenerate) -> "Options":
        """Install the post-render hook applied to assembled HTML pages."""
        if self.hook_generate is not None:
            raise OptionError(
                f"a post-render hook is already installed ({_name(self.hook_generate)})"
            )
        _LOGGER.debug("Installing generate hook %s", _name(hook))
        self.hook_generate = hook
        return self

    def with_pipelines(self, *pipelines: Pipeline) -> "Options":
        for pipe in pipelines:
            if not callable(pipe):
                raise OptionError(f"pipeline {pipe!r} is not callable")
            _LOGGER.debug("Registering pipeline %s", _name(pipe))
            self.pipelines.append(pipe)
        return self

    def with_writers(self, writers: int) -> "Options":
        """Set the writer concurrency; values below 1 defer to the environment default."""
        if writers < 0:
            _LOGGER.debug("Ignoring negative writer count %d", writers)
            writers = 0
        self.writers = writers
        return self

    def with_writers_from_env(self) -> "Options":
        self.writers = writers_from_env()
        return self

    def with_caching(self, enabled: bool = True) -> "Options":
        self.caching = enabled
        return self

    def effective_writers(self) -> int:
        return self.writers if self.writers > 0 else writers_from_env()


def _name(obj: object) -> str:
    return getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None) or repr(obj)


__all__ = ["Options", "WRITERS_DEFAULT", "WRITERS_ENV_KEY", "writers_from_env"]
