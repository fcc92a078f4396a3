"""Per-directory override stores for headers and footers."""

from __future__ import annotations

import os
from typing import Dict, Generic, TypeVar

from .errors import DuplicateEntryError

T = TypeVar("T")


class PerDirectory(Generic[T]):
    """Maps directories to values, resolving files to their closest ancestor entry."""

    def __init__(self, default: T) -> None:
        self.default = default
        self._values: Dict[str, T] = {}

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, directory: object) -> bool:
        return directory in self._values

    def add(self, directory: str, value: T) -> None:
        """Register ``value`` for ``directory``; a second entry for it is an error."""
        if directory in self._values:
            raise DuplicateEntryError(directory)
        self._values[directory] = value

    def choose(self, path: str) -> T:
        """Return the value registered for the deepest directory containing ``path``."""
        exact = self._values.get(path)
        if exact is not None:
            return exact
        parent = self._values.get(os.path.dirname(path))
        if parent is not None:
            return parent
        return longest_prefix(path, self._values, self.default)


def longest_prefix(path: str, values: Dict[str, T], default: T) -> T:
    """Pick the entry whose key is the longest component-wise prefix of ``path``.

    Keys are compared by raw string length, so ``a/bb`` beats ``a/b`` only
    when both are prefixes, which cannot happen for distinct directories.
    """
    parts = path.split(os.sep)
    chosen, longest = default, -1
    for prefix, value in values.items():
        prefix_parts = prefix.split(os.sep)
        if parts[: len(prefix_parts)] != prefix_parts:
            continue
        if len(prefix) < longest:
            continue
        chosen, longest = value, len(prefix)
    return chosen


__all__ = ["PerDirectory", "longest_prefix"]
