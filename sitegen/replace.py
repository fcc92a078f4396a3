"""``${{ key }}`` placeholder substitution."""

from __future__ import annotations

from typing import Dict, Mapping

from .models import ReplaceTarget
from .pipeline import Hook


def placeholder(key: str) -> str:
    return f"${{{{ {key} }}}}"


def replace(data: bytes, holder: bytes, target: ReplaceTarget) -> bytes:
    """Replace ``holder`` with ``target.text``; a zero count replaces every occurrence."""
    text = target.text.encode("utf-8")
    if target.count == 0:
        return data.replace(holder, text)
    return data.replace(holder, text, target.count)


def replacer(replaces: Mapping[str, ReplaceTarget]) -> Hook:
    """Build a pre-conversion hook applying every configured replacement."""
    holders: Dict[str, bytes] = {key: placeholder(key).encode("utf-8") for key in replaces}

    def _hook(path: str, data: bytes) -> bytes:
        for key, target in replaces.items():
            data = replace(data, holders[key], target)
        return data

    return _hook


__all__ = ["placeholder", "replace", "replacer"]
