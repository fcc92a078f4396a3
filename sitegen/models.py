"""Core data models shared across sitegen components."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, List

DEFAULT_PERM = 0o644


class TitleFrom(enum.Enum):
    """Where a header takes the document title from."""

    NONE = 0
    FROM_H1 = 1
    FROM_TAG = 2


class Stage(enum.IntFlag):
    """Manifest stages; COLLECT always runs and cannot be skipped by users."""

    COLLECT = 1
    CLEANUP = 2
    COPY = 4
    BUILD = 8
    ALL = COLLECT | CLEANUP | COPY | BUILD

    def skip(self, *targets: "Stage") -> "Stage":
        """Return a copy of this stage set with ``targets`` cleared."""
        bits = int(self)
        for target in targets:
            bits &= ~int(target)
        return Stage(bits & int(Stage.ALL))

    def ok(self, *targets: "Stage") -> bool:
        """Return True only when every one of ``targets`` is enabled."""
        for target in targets:
            if not self & target:
                return False
        return True

    @property
    def label(self) -> str:
        names = {
            Stage.COLLECT: "collect",
            Stage.CLEANUP: "cleanup",
            Stage.COPY: "copy",
            Stage.BUILD: "build",
        }
        return names.get(self, "BAD_STAGE")


@dataclass(frozen=True)
class Header:
    """A header template and the title extraction mode detected in it."""

    data: bytes
    title_from: TitleFrom = TitleFrom.NONE


@dataclass(frozen=True)
class OutputFile:
    """A single rendered or copied file waiting to be written."""

    target: str
    originator: str = ""
    data: bytes = b""
    perm: int = 0

    def mode(self) -> int:
        """Permission bits to write with, falling back to the default when unset."""
        perm = self.perm & 0o777
        return perm if perm else DEFAULT_PERM

    def without_data(self) -> "OutputFile":
        return OutputFile(target=self.target, originator=self.originator, perm=self.perm)


@dataclass(frozen=True)
class CopyTarget:
    """Destination of a manifest copy entry."""

    target: str
    force: bool = False

    def __str__(self) -> str:
        if self.force:
            return f"{self.target} (force)"
        return self.target


@dataclass(frozen=True)
class ReplaceTarget:
    """Replacement text for a ``${{ key }}`` placeholder; count 0 replaces all."""

    text: str
    count: int = 0


@dataclass
class SiteConfig:
    """One site entry of a manifest."""

    key: str
    src: str
    dst: str
    title: str = ""
    url: str = ""
    cleanup: bool = False
    copies: Dict[str, List[CopyTarget]] = field(default_factory=dict)
    replaces: Dict[str, ReplaceTarget] = field(default_factory=dict)
    generate_index: bool = False
    generate_index_mode: str = ""


__all__ = [
    "CopyTarget",
    "DEFAULT_PERM",
    "Header",
    "OutputFile",
    "ReplaceTarget",
    "SiteConfig",
    "Stage",
    "TitleFrom",
]
