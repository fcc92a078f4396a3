"""Tests for sitegen.minify."""

from __future__ import annotations

import pytest

from sitegen.errors import HookError, MinifyError
from sitegen.minify import (
    minifiers,
    minify_css,
    minify_hook,
    minify_html,
    minify_html_generate,
    minify_js,
    minify_json,
)
from sitegen.options import Options
from tests._fixtures.site_builder import SiteBuilder


def test_minify_css_strips_whitespace() -> None:
    out = minify_css(b"body {\n    color: red;\n}\n\n/* note */\n")

    assert b"color:red" in out
    assert b"note" not in out
    assert b"\n" not in out.strip()


def test_minify_js_strips_comments() -> None:
    out = minify_js(b"var a = 1;\n// comment\nvar b = 2;\n")

    assert b"comment" not in out
    assert b"var a=1" in out
    assert b"var b=2" in out


def test_minify_json_compacts_and_rejects_invalid() -> None:
    assert minify_json(b'{ "a": [1, 2],\n  "b": "\xc3\xa9" }') == '{"a":[1,2],"b":"é"}'.encode("utf-8")

    with pytest.raises(MinifyError):
        minify_json(b"{not json")


def test_minify_hook_dispatches_by_extension() -> None:
    assert minify_hook({}) is None

    hook = minify_hook(minifiers(json_=True))
    assert hook is not None
    assert hook("data.json", b'{ "a": 1 }') == b'{"a":1}'
    assert hook("page.md", b"# keep   spacing\n") == b"# keep   spacing\n"


def test_minifier_failures_surface_as_hook_errors(site_builder: SiteBuilder) -> None:
    site_builder.write({"broken.json": "{oops\n"})
    hook = minify_hook(minifiers(css=True, js=True, json_=True))
    assert hook is not None

    with pytest.raises(HookError) as excinfo:
        site_builder.site(options=Options().with_hook(hook)).build()

    assert isinstance(excinfo.value.cause, MinifyError)


def test_minify_html_collapses_whitespace_and_comments() -> None:
    source = b"<div>\n  <!-- note -->\n  <p>hello    world</p>\n</div>\n"

    out = minify_html(source)

    assert b"note" not in out
    assert b"hello world" in out
    assert len(out) < len(source)


def test_html_minifiers_cover_copied_and_generated_pages(site_builder: SiteBuilder) -> None:
    site_builder.write(
        {
            "copied.html": "<div>\n  <p>kept    page</p>\n</div>\n",
            "post.md": "# Post\n\nsome    text\n",
        }
    )
    hook = minify_hook(minifiers(html=True))
    assert hook is not None
    options = Options().with_hook(hook).with_hook_generate(minify_html_generate())

    _, outputs = site_builder.site(options=options).build()

    by_name = {output.target.rsplit("/", 1)[-1]: output.data for output in outputs}
    assert b"kept page" in by_name["copied.html"]
    assert b"\n  " not in by_name["copied.html"]
    assert b"Post" in by_name["post.html"]
    assert b"some text" in by_name["post.html"]
    assert b"\n\n" not in by_name["post.html"]
