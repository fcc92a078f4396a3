"""Markdown to HTML rendering."""

from __future__ import annotations

import markdown

MARKDOWN_EXTENSIONS = ("extra", "toc", "sane_lists")


def to_html(source: bytes) -> bytes:
    """Render a Markdown document body to HTML bytes.

    Headings get ids through the ``toc`` extension, tables, fenced code and
    footnotes through ``extra``. Bytes that are not valid UTF-8 pass through
    unchanged.
    """
    text = source.decode("utf-8", errors="surrogateescape")
    rendered = markdown.markdown(text, extensions=list(MARKDOWN_EXTENSIONS), output_format="html")
    if rendered and not rendered.endswith("\n"):
        rendered += "\n"
    return rendered.encode("utf-8", errors="surrogateescape")


__all__ = ["MARKDOWN_EXTENSIONS", "to_html"]
