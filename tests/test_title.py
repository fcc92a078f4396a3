"""Tests for sitegen.title."""

from __future__ import annotations

from sitegen.models import TitleFrom
from sitegen.title import (
    add_title_from_h1,
    add_title_from_tag,
    get_title_from_h1,
    get_title_from_tag,
    title_from,
)

HEADER_H1 = b"<html><head><title>{{from-h1}}</title></head><body>\n"
HEADER_TAG = b"<html><head><title>{{from-tag}}</title></head><body>\n"


def test_title_from_detects_placeholders() -> None:
    assert title_from(HEADER_H1) is TitleFrom.FROM_H1
    assert title_from(HEADER_TAG) is TitleFrom.FROM_TAG
    assert title_from(b"<html><title>Fixed</title>") is TitleFrom.NONE


def test_get_title_from_h1_takes_first_level_one_heading() -> None:
    markdown = b"intro\n## Not this\n# Hello World  \n# Second\n"

    assert get_title_from_h1(markdown) == b"Hello World"


def test_get_title_from_h1_skips_ambiguous_lines() -> None:
    markdown = b"# a # b\n# Real\n"

    assert get_title_from_h1(markdown) == b"Real"
    assert get_title_from_h1(b"no heading here\n") == b""


def test_add_title_from_h1_falls_back_to_default() -> None:
    assert add_title_from_h1(b"Site", HEADER_H1, b"# Page\n") == (
        b"<html><head><title>Page</title></head><body>\n"
    )
    assert add_title_from_h1(b"Site", HEADER_H1, b"plain\n") == (
        b"<html><head><title>Site</title></head><body>\n"
    )


def test_add_title_from_tag_removes_directive_and_blank_line() -> None:
    markdown = b":title Foo\n\n# Heading\n\nBody\n"

    header, body = add_title_from_tag(b"Site", HEADER_TAG, markdown)

    assert header == b"<html><head><title>Foo</title></head><body>\n"
    assert body == b"# Heading\n\nBody\n"
    assert get_title_from_tag(markdown) == b"Foo"


def test_add_title_from_tag_only_directive() -> None:
    header, body = add_title_from_tag(b"Site", HEADER_TAG, b":title Foo")

    assert b"<title>Foo</title>" in header
    assert body == b""


def test_add_title_from_tag_without_directive_uses_default() -> None:
    markdown = b"# Heading\n"

    header, body = add_title_from_tag(b"Site", HEADER_TAG, markdown)

    assert b"<title>Site</title>" in header
    assert body == markdown
