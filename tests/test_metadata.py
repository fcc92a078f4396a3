"""Tests for sitegen.metadata."""

from __future__ import annotations

import datetime as dt
from pathlib import Path

from sitegen.metadata import dot_files, generate_metadata, sitemap, sitemap_location
from sitegen.models import OutputFile


def test_sitemap_location_for_index_and_pages() -> None:
    assert sitemap_location("https://example.com", "index.html") == "https://example.com/"
    assert sitemap_location("https://example.com/", "blog/index.html") == "https://example.com/blog/"
    assert sitemap_location("https://example.com", "blog/post.html") == "https://example.com/blog/post.html"


def test_sitemap_lists_sorted_html_targets() -> None:
    outputs = [
        OutputFile(target="/out/z.html"),
        OutputFile(target="/out/style.css"),
        OutputFile(target="/out/a/index.html"),
    ]

    document = sitemap("/out", "https://example.com", dt.date(2024, 10, 4), outputs)

    assert document.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert document.endswith("</urlset>")
    entries = [line for line in document.splitlines() if line.startswith("<url>")]
    assert entries == [
        "<url><loc>https://example.com/a/</loc><lastmod>2024-10-04</lastmod><priority>1.0</priority></url>",
        "<url><loc>https://example.com/z.html</loc><lastmod>2024-10-04</lastmod><priority>1.0</priority></url>",
    ]


def test_dot_files_lists_relative_inputs() -> None:
    assert dot_files("/src", ["/src/a.md", "/src/b/c.txt"]) == "./a.md\n./b/c.txt\n"


def test_generate_metadata_writes_files(tmp_path: Path) -> None:
    dst = tmp_path / "out"
    written = generate_metadata(
        str(tmp_path / "src"),
        str(dst),
        "https://example.com",
        [str(tmp_path / "src" / "index.md")],
        [OutputFile(target=str(dst / "index.html"))],
        0.0,
    )

    assert written == [str(dst / "sitemap.xml"), str(dst / ".files")]
    assert "<loc>https://example.com/</loc>" in (dst / "sitemap.xml").read_text(encoding="utf-8")
    assert (dst / ".files").read_text(encoding="utf-8") == "./index.md\n"
