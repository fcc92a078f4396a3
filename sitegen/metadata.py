"""Auxiliary files written next to a generated site."""

from __future__ import annotations

import datetime as _dt
import os
from pathlib import Path
from typing import List, Sequence

from .logging import get_logger
from .models import DEFAULT_PERM, OutputFile

SITEMAP_FILENAME = "sitemap.xml"
FILES_FILENAME = ".files"

SITEMAP_HEAD = """<?xml version="1.0" encoding="UTF-8"?>
<urlset
xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
xsi:schemaLocation="http://www.sitemaps.org/schemas/sitemap/0.9
http://www.sitemaps.org/schemas/sitemap/0.9/sitemap.xsd"
xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
"""
SITEMAP_TAIL = "</urlset>"

_LOGGER = get_logger("metadata")


def sitemap_location(url: str, target: str) -> str:
    """Return the public URL of ``target`` (relative to the site root)."""
    target = target.replace(os.sep, "/")
    base = url.rstrip("/")
    if os.path.basename(target) == "index.html":
        directory = os.path.dirname(target)
        return f"{base}/{directory}/" if directory else f"{base}/"
    return f"{base}/{target}"


def sitemap(dst: str, url: str, date: _dt.date, outputs: Sequence[OutputFile]) -> str:
    """Render a sitemap for the HTML pages among ``outputs``.

    Entries are sorted by target so the file is stable across runs.
    """
    lastmod = date.strftime("%Y-%m-%d")
    targets = sorted(
        os.path.relpath(output.target, dst)
        for output in outputs
        if output.target.endswith(".html")
    )
    lines = [SITEMAP_HEAD]
    for target in targets:
        lines.append(
            f"<url><loc>{sitemap_location(url, target)}</loc>"
            f"<lastmod>{lastmod}</lastmod><priority>1.0</priority></url>\n"
        )
    lines.append(SITEMAP_TAIL)
    return "".join(lines)


def dot_files(src: str, files: Sequence[str]) -> str:
    """One ``./relative/path`` line per discovered input."""
    lines = []
    for path in files:
        rel = os.path.relpath(path, src).replace(os.sep, "/")
        lines.append(f"./{rel}\n")
    return "".join(lines)


def generate_metadata(
    src: str,
    dst: str,
    url: str,
    files: Sequence[str],
    outputs: Sequence[OutputFile],
    mtime: float,
) -> List[str]:
    """Write ``sitemap.xml`` (only when ``url`` is set) and ``.files`` under ``dst``.

    Returns the paths written.
    """
    root = Path(dst)
    root.mkdir(parents=True, exist_ok=True)
    written: List[str] = []

    if url:
        date = _dt.datetime.fromtimestamp(mtime).date()
        target = root / SITEMAP_FILENAME
        target.write_text(sitemap(dst, url, date, outputs), encoding="utf-8")
        os.chmod(target, DEFAULT_PERM)
        written.append(str(target))

    target = root / FILES_FILENAME
    target.write_text(dot_files(src, files), encoding="utf-8")
    os.chmod(target, DEFAULT_PERM)
    written.append(str(target))

    _LOGGER.debug("Wrote metadata %s", ", ".join(written))
    return written


__all__ = [
    "FILES_FILENAME",
    "SITEMAP_FILENAME",
    "dot_files",
    "generate_metadata",
    "sitemap",
    "sitemap_location",
]
