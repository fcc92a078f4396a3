"""Source walking and Markdown conversion for a single site."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, List, Optional, Set, Tuple

from .errors import HookError, SiteError
from .ignore import IGNORE_FILENAME, IgnoreRules
from .logging import get_logger
from .models import Header, OutputFile, TitleFrom
from .options import Options
from .pipeline import run_pipelines
from .render import to_html
from .resolver import PerDirectory
from .title import add_title_from_h1, add_title_from_tag, title_from

MARKER_HEADER = "_header.html"
MARKER_FOOTER = "_footer.html"

HEADER_DEFAULT = b"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<title>{{from-h1}}</title>
</head>
<body>
"""

FOOTER_DEFAULT = b"""</body>
</html>
"""

Emit = Callable[[OutputFile], None]


def change_ext(path: str, old: str, new: str) -> str:
    if path.endswith(old):
        path = path[: -len(old)]
    return path + new


class Site:
    """A source tree, its destination, and the state of one walk over it."""

    def __init__(
        self,
        src: str,
        dst: str,
        title: str = "",
        url: str = "",
        options: Options | None = None,
    ) -> None:
        if not src:
            raise SiteError("empty src")
        if not dst:
            raise SiteError("empty dst")
        src = os.path.normpath(src)
        dst = os.path.normpath(dst)
        if src == dst:
            raise SiteError(f"src is identical to dst: '{src}'")

        self.src = src
        self.dst = dst
        self.title = title
        self.url = url
        self.options = options or Options()
        self.logger = get_logger("site")

        self.ignores = IgnoreRules.from_file(src)
        self._reset()

    def _reset(self) -> None:
        self.headers: PerDirectory[Header] = PerDirectory(
            Header(data=HEADER_DEFAULT, title_from=TitleFrom.FROM_H1)
        )
        self.footers: PerDirectory[bytes] = PerDirectory(FOOTER_DEFAULT)
        self.preferred: Set[str] = set()
        self.files: List[str] = []
        self.cache: List[OutputFile] = []

    def __repr__(self) -> str:
        return f"Site(src={self.src!r}, dst={self.dst!r}, url={self.url!r})"

    def ignore(self, path: str, is_dir: bool = False) -> bool:
        return self.ignores.ignore(path, is_dir)

    # ------------------------------------------------------------------
    # Walking

    def walk(self, emit: Emit) -> List[str]:
        """Walk the source tree, sending every output to ``emit``.

        Returns the discovered input paths in walk order.
        """
        if not os.path.isdir(self.src):
            raise SiteError(f"src is not a directory: '{self.src}'")
        self._reset()
        self.logger.debug("Walking %s", self.src)
        self._walk_dir(self.src, emit)
        return self.files

    def build(self) -> Tuple[List[str], List[OutputFile]]:
        """Walk without writing, returning discovered inputs and cached outputs."""
        self.options.with_caching()
        self.walk(lambda output: None)
        return self.files, self.cache

    def generate(self) -> List[OutputFile]:
        """Build from ``src`` and write the outputs under ``dst``."""
        from .writer import generate

        return generate(self)

    def _walk_dir(self, directory: str, emit: Emit) -> None:
        with os.scandir(directory) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)

        self._collect(directory, entries)

        for entry in entries:
            if self._skip(entry):
                continue
            if entry.is_dir(follow_symlinks=False):
                self._walk_dir(entry.path, emit)
                continue
            if entry.name in (MARKER_HEADER, MARKER_FOOTER, IGNORE_FILENAME):
                continue
            self._process(entry, emit)

    def _skip(self, entry: os.DirEntry) -> bool:
        if entry.name.startswith("."):
            return True
        if entry.is_symlink():
            return True
        return self.ignore(entry.path, entry.is_dir(follow_symlinks=False))

    def _collect(self, directory: str, entries: List[os.DirEntry]) -> None:
        """Register header/footer overrides and preferred HTML files of a directory."""
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                continue
            if entry.name == MARKER_HEADER:
                data = Path(entry.path).read_bytes()
                self.headers.add(directory, Header(data=data, title_from=title_from(data)))
                self.logger.debug("Registered header for %s", directory)
                continue
            if entry.name == MARKER_FOOTER:
                self.footers.add(directory, Path(entry.path).read_bytes())
                self.logger.debug("Registered footer for %s", directory)
                continue
            if os.path.splitext(entry.name)[1] != ".html":
                continue
            if entry.path in self.preferred:
                raise SiteError(f"duplicate html file {entry.path}")
            self.preferred.add(entry.path)

    def _process(self, entry: os.DirEntry, emit: Emit) -> None:
        data = Path(entry.path).read_bytes()
        self.files.append(entry.path)

        triple = run_pipelines(self.options.pipelines, entry.path, data, entry)
        if triple is None:
            self.logger.debug("Pipelines skipped %s", entry.path)
            return

        output = self.core(*triple)
        if output is not None:
            self.add_outputs(emit, output)

    def add_outputs(self, emit: Emit, *outputs: OutputFile) -> None:
        """Cache outputs when caching is enabled and hand them to ``emit``."""
        for output in outputs:
            if self.options.caching:
                self.cache.append(output)
            emit(output)

    # ------------------------------------------------------------------
    # Conversion

    def core(self, path: str, data: bytes, entry: os.DirEntry) -> Optional[OutputFile]:
        """Convert one input into an output; None when a preferred HTML file wins."""
        ext = os.path.splitext(path)[1]
        perm = entry.stat(follow_symlinks=False).st_mode & 0o777
        data = self._apply_hook(path, data)

        if ext == ".md" and change_ext(path, ".md", ".html") in self.preferred:
            self.logger.debug("Skipping %s in favour of existing HTML", path)
            return None

        target = self.mirror_path(path)

        if ext != ".md":
            return OutputFile(target=target, originator=path, data=data, perm=perm)

        header = self.headers.choose(path)
        footer = self.footers.choose(path)

        header_text = header.data
        default_title = self.title.encode("utf-8")
        if header.title_from is TitleFrom.FROM_H1:
            header_text = add_title_from_h1(default_title, header_text, data)
        elif header.title_from is TitleFrom.FROM_TAG:
            header_text, data = add_title_from_tag(default_title, header_text, data)

        page = header_text + to_html(data) + footer

        hook_generate = self.options.hook_generate
        if hook_generate is not None:
            try:
                page = hook_generate(page)
            except Exception as exc:
                raise HookError("hook_generate", path, exc) from exc

        return OutputFile(
            target=change_ext(target, ".md", ".html"),
            originator=path,
            data=page,
            perm=perm,
        )

    def mirror_path(self, path: str) -> str:
        """Map a path under ``src`` to the same relative path under ``dst``."""
        return os.path.join(self.dst, os.path.relpath(path, self.src))

    def _apply_hook(self, path: str, data: bytes) -> bytes:
        hook = self.options.hook
        if hook is None:
            return data
        try:
            return hook(path, data)
        except Exception as exc:
            raise HookError("hook", path, exc) from exc


def build_site(src: str, dst: str, title: str = "", url: str = "", options: Options | None = None) -> Tuple[List[str], List[OutputFile]]:
    """Return the inputs and outputs of ``src`` without writing anything."""
    return Site(src, dst, title, url, options).build()


def generate_site(src: str, dst: str, title: str = "", url: str = "", options: Options | None = None) -> List[OutputFile]:
    """Build and write a one-off site right away."""
    return Site(src, dst, title, url, options).generate()


__all__ = [
    "FOOTER_DEFAULT",
    "HEADER_DEFAULT",
    "MARKER_FOOTER",
    "MARKER_HEADER",
    "Site",
    "build_site",
    "change_ext",
    "generate_site",
]
