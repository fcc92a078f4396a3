"""Per-extension minifiers packaged as pre-conversion and post-render hooks."""

from __future__ import annotations

import json
import os
from typing import Callable, Dict, Mapping, Optional

import csscompressor
import minify_html as html_minifier
import rjsmin

from .errors import MinifyError
from .pipeline import Hook, HookGenerate

MinifyFn = Callable[[bytes], bytes]


def minify_html(data: bytes) -> bytes:
    return html_minifier.minify(data.decode("utf-8")).encode("utf-8")


def minify_css(data: bytes) -> bytes:
    return csscompressor.compress(data.decode("utf-8")).encode("utf-8")


def minify_js(data: bytes) -> bytes:
    return rjsmin.jsmin(data.decode("utf-8")).encode("utf-8")


def minify_json(data: bytes) -> bytes:
    try:
        document = json.loads(data.decode("utf-8"))
    except ValueError as exc:
        raise MinifyError(f"invalid json: {exc}") from exc
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


MINIFIERS: Dict[str, MinifyFn] = {
    ".html": minify_html,
    ".css": minify_css,
    ".js": minify_js,
    ".json": minify_json,
}


def minifiers(
    *, html: bool = False, css: bool = False, js: bool = False, json_: bool = False
) -> Dict[str, MinifyFn]:
    """Select the minifiers enabled by the given switches, keyed by extension."""
    selected: Dict[str, MinifyFn] = {}
    if html:
        selected[".html"] = minify_html
    if css:
        selected[".css"] = minify_css
    if js:
        selected[".js"] = minify_js
    if json_:
        selected[".json"] = minify_json
    return selected


def minify_hook(mapping: Mapping[str, MinifyFn]) -> Optional[Hook]:
    """Return a hook minifying files whose extension is in ``mapping``, or None."""
    if not mapping:
        return None
    table = dict(mapping)

    def _hook(path: str, data: bytes) -> bytes:
        ext = os.path.splitext(path)[1]
        fn = table.get(ext)
        if fn is None:
            return data
        try:
            return fn(data)
        except MinifyError:
            raise
        except Exception as exc:
            raise MinifyError(f"error from minifier for '{ext}': {exc}") from exc

    return _hook


def minify_html_generate() -> HookGenerate:
    """Post-render hook minifying every page converted from Markdown."""

    def _hook_generate(page: bytes) -> bytes:
        try:
            return minify_html(page)
        except Exception as exc:
            raise MinifyError(f"error from html minifier: {exc}") from exc

    return _hook_generate


__all__ = [
    "MINIFIERS",
    "MinifyFn",
    "minifiers",
    "minify_css",
    "minify_hook",
    "minify_html",
    "minify_html_generate",
    "minify_js",
    "minify_json",
]
