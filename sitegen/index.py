"""Index page generation for directories marked with ``_index.sitegen``.

The marker's own content, when non-empty, becomes the top of the generated
``index.md``; otherwise a ``# Index of <dir>`` heading is used. One link is
added per Markdown or HTML sibling and per sub-directory that has an index.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, List

from .errors import SiteError
from .logging import get_logger
from .pipeline import Pipeline, Triple
from .site import MARKER_FOOTER, MARKER_HEADER, Site, change_ext
from .title import get_title_from_h1, get_title_from_tag

MARKER_INDEX = "_index.sitegen"

MODE_DEFAULT = "default"
MODE_REVERSE = "reverse"
MODE_MODTIME = "modtime"

_MODE_ALIASES = {
    "reverse": MODE_REVERSE,
    "rev": MODE_REVERSE,
    "r": MODE_REVERSE,
    "modtime": MODE_MODTIME,
    "mod-time": MODE_MODTIME,
    "updated_at": MODE_MODTIME,
    "u": MODE_MODTIME,
}

_INDEX_NAMES = ("index.html", "index.md")

_LOGGER = get_logger("index")


def index_mode(mode: str) -> str:
    """Normalise a manifest mode string; unknown values select the default order."""
    return _MODE_ALIASES.get((mode or "").strip().lower(), MODE_DEFAULT)


def order_entries(entries: List[os.DirEntry], mode: str) -> List[os.DirEntry]:
    mode = index_mode(mode)
    if mode == MODE_REVERSE:
        return sorted(entries, key=lambda entry: entry.name, reverse=True)
    if mode == MODE_MODTIME:
        return sorted(
            entries,
            key=lambda entry: (entry.stat(follow_symlinks=False).st_mtime, entry.name),
        )
    return sorted(entries, key=lambda entry: entry.name)


def extract_title(path: str) -> str:
    """Title of a Markdown file: its ``:title`` directive, else its first h1."""
    data = Path(path).read_bytes()
    title = get_title_from_tag(data) or get_title_from_h1(data)
    return title.decode("utf-8", errors="surrogateescape")


def _directory_link_title(path: str, name: str) -> str | None:
    """Link title for a sub-directory, or None when it has nothing to link to."""
    with os.scandir(path) as iterator:
        nephews = sorted(iterator, key=lambda entry: entry.name)
    for nephew in nephews:
        if nephew.is_dir(follow_symlinks=False):
            continue
        if nephew.name == MARKER_INDEX or nephew.name == "index.html":
            return name
        if nephew.name == "index.md":
            return extract_title(nephew.path) or name
    return None


def generate_index(
    src: str,
    ignore: Callable[[str, bool], bool],
    parent: str,
    siblings: List[os.DirEntry],
    template: str,
) -> str:
    """Render the Markdown link list for ``parent``."""
    content = template or f"# Index of {os.path.basename(parent)}\n\n"
    rel = os.path.relpath(parent, src)

    for sibling in siblings:
        name = sibling.name
        is_dir = sibling.is_dir(follow_symlinks=False)

        if name in _INDEX_NAMES and not is_dir:
            raise SiteError(f"parent {parent} already had index {name}")
        if name in (MARKER_INDEX, MARKER_HEADER, MARKER_FOOTER) or name.startswith("."):
            continue

        ext = os.path.splitext(name)[1]
        if not is_dir and ext not in (".md", ".html"):
            continue
        if ignore(sibling.path, is_dir):
            continue

        link_title = name
        if is_dir:
            found = _directory_link_title(sibling.path, name)
            if found is None:
                continue
            link_title = found
        elif ext == ".md":
            link_title = extract_title(sibling.path) or name
            name = change_ext(name, ".md", ".html")

        link = name if rel == "." else f"{rel}/{name}"
        link = link.replace(os.sep, "/")
        if is_dir:
            link += "/"
        content += f"- [{link_title}](/{link})\n\n"

    return content


def index_generator(site: Site, mode: str = "") -> Pipeline:
    """Pipeline replacing each index marker with a generated ``index.md``."""
    resolved = index_mode(mode)

    def _pipeline(path: str, data: bytes, entry: os.DirEntry) -> Triple:
        if entry.is_dir(follow_symlinks=False) or os.path.basename(path) != MARKER_INDEX:
            return path, data, entry

        parent = os.path.dirname(path)
        _LOGGER.info("found index-generator marker: marker=%s parent=%s", path, parent)

        with os.scandir(parent) as iterator:
            siblings = order_entries(list(iterator), resolved)

        template = data.decode("utf-8", errors="surrogateescape")
        index = generate_index(site.src, site.ignore, parent, siblings, template)
        return os.path.join(parent, "index.md"), index.encode("utf-8", errors="surrogateescape"), entry

    _pipeline.__qualname__ = f"index_generator[{resolved}]"
    return _pipeline


__all__ = [
    "MARKER_INDEX",
    "MODE_DEFAULT",
    "MODE_MODTIME",
    "MODE_REVERSE",
    "extract_title",
    "generate_index",
    "index_generator",
    "index_mode",
    "order_entries",
]
