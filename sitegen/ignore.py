"""Gitignore-style matching for ``.sitegenignore`` files."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path
from typing import List, Sequence

IGNORE_FILENAME = ".sitegenignore"


@dataclass
class IgnoreRule:
    """A single pattern line from an ignore file."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False

        parts = rel_path.split("/")
        for depth, part in enumerate(parts, start=1):
            # Patterns with a slash match from the root; others match any single component.
            # Matching an ancestor also matches everything below it.
            if self.anchored or self.has_slash:
                candidate = "/".join(parts[:depth])
            else:
                candidate = part
            if not fnmatchcase(candidate, self.pattern):
                continue
            # A directory-only pattern matching a leaf file is not a match.
            if self.directory_only and depth == len(parts) and not is_dir:
                continue
            return True
        return False


def parse_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
    )


def parse_lines(lines: Sequence[str]) -> List[IgnoreRule]:
    rules: List[IgnoreRule] = []
    for raw_line in lines:
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        if negate:
            line = line[1:]
        rule = parse_rule(line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


@dataclass
class IgnoreRules:
    """Ignore rules rooted at a source directory."""

    root: str
    rules: List[IgnoreRule] = field(default_factory=list)

    @classmethod
    def from_file(cls, root: str, path: Path | None = None) -> "IgnoreRules":
        """Load rules from ``root/.sitegenignore``; a missing file yields no rules."""
        ignore_file = path or Path(root) / IGNORE_FILENAME
        try:
            text = ignore_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            return cls(root=root)
        return cls(root=root, rules=parse_lines(text.splitlines()))

    def __bool__(self) -> bool:
        return bool(self.rules)

    def ignore(self, path: str, is_dir: bool = False) -> bool:
        """Return True when ``path`` (under root) is excluded by the rules."""
        if not self.rules:
            return False
        rel_path = os.path.relpath(path, self.root).replace(os.sep, "/")
        if rel_path == "." or rel_path.startswith("../"):
            return False
        ignored = False
        for rule in self.rules:
            if rule.matches(rel_path, is_dir):
                ignored = not rule.negate
        return ignored


__all__ = ["IGNORE_FILENAME", "IgnoreRule", "IgnoreRules", "parse_lines", "parse_rule"]
