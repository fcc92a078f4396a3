"""Document title extraction for header templates."""

from __future__ import annotations

from typing import Optional, Tuple

from .models import TitleFrom

KEY_FROM_H1 = b"# "
KEY_FROM_TAG = b":title "
TARGET_FROM_H1 = b"{{from-h1}}"
TARGET_FROM_TAG = b"{{from-tag}}"
PLACEHOLDER_FROM_H1 = b"<title>" + TARGET_FROM_H1 + b"</title>"
PLACEHOLDER_FROM_TAG = b"<title>" + TARGET_FROM_TAG + b"</title>"


def title_from(header: bytes) -> TitleFrom:
    """Detect which title placeholder, if any, a header template carries."""
    if PLACEHOLDER_FROM_H1 in header:
        return TitleFrom.FROM_H1
    if PLACEHOLDER_FROM_TAG in header:
        return TitleFrom.FROM_TAG
    return TitleFrom.NONE


def _find_keyed_line(markdown: bytes, key: bytes) -> Optional[Tuple[int, bytes]]:
    lines = markdown.splitlines()
    for index, line in enumerate(lines):
        if not line.startswith(key):
            continue
        # Lines like "# a # b" are ambiguous and never used as titles.
        if line.count(key) != 1:
            continue
        return index, line[len(key):]
    return None


def get_title_from_h1(markdown: bytes) -> bytes:
    """Return the text of the first level-1 heading, or an empty string."""
    found = _find_keyed_line(markdown, KEY_FROM_H1)
    if found is None:
        return b""
    return found[1].rstrip()


def get_title_from_tag(markdown: bytes) -> bytes:
    """Return the text of the first ``:title`` directive, or an empty string."""
    found = _find_keyed_line(markdown, KEY_FROM_TAG)
    if found is None:
        return b""
    return found[1].rstrip()


def add_title_from_h1(default: bytes, header: bytes, markdown: bytes) -> bytes:
    """Fill the from-h1 placeholder of ``header`` using the markdown's first h1."""
    title = get_title_from_h1(markdown) or default
    return header.replace(TARGET_FROM_H1, title, 1)


def add_title_from_tag(default: bytes, header: bytes, markdown: bytes) -> Tuple[bytes, bytes]:
    """Fill the from-tag placeholder and strip the directive from the markdown.

    The directive line is removed together with the blank line that follows it.
    """
    found = _find_keyed_line(markdown, KEY_FROM_TAG)
    if found is None:
        return header.replace(TARGET_FROM_TAG, default, 1), markdown

    index, title = found
    lines = markdown.splitlines(keepends=True)
    del lines[index]
    if index < len(lines) and not lines[index].strip():
        del lines[index]

    header = header.replace(TARGET_FROM_TAG, title.rstrip(), 1)
    return header, b"".join(lines)


__all__ = [
    "PLACEHOLDER_FROM_H1",
    "PLACEHOLDER_FROM_TAG",
    "add_title_from_h1",
    "add_title_from_tag",
    "get_title_from_h1",
    "get_title_from_tag",
    "title_from",
]
