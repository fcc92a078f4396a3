"""Tests for sitegen.render."""

from __future__ import annotations

from sitegen.render import to_html


def test_to_html_renders_extra_syntax() -> None:
    html = to_html(b"# Title\n\n| a | b |\n|---|---|\n| 1 | 2 |\n\n```\ncode\n```\n").decode("utf-8")

    assert '<h1 id="title">Title</h1>' in html
    assert "<table>" in html
    assert "<code>code" in html
    assert html.endswith("\n")


def test_to_html_empty_document() -> None:
    assert to_html(b"") == b""


def test_to_html_passes_non_utf8_bytes_through() -> None:
    html = to_html(b"# Caf\xe9\n\nna\xefve\n")

    assert b"Caf\xe9</h1>" in html
    assert b"<p>na\xefve</p>" in html
