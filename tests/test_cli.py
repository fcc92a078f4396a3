"""CLI parser and entrypoint tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from sitegen.cli import _build_parser, _flags_from_args, _stages_for, main
from sitegen.models import Stage


def test_cli_accepts_verbose_before_and_after_command() -> None:
    parser = _build_parser()

    assert parser.parse_args(["--verbose", "build"]).verbose is True
    args = parser.parse_args(["build", "--verbose"])
    assert args.verbose is True
    assert args.command == "build"


def test_cli_build_flags() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        ["build", "--no-cleanup", "--no-gen-index", "--min-css", "--min-json", "a.json", "b.yml"]
    )
    flags = _flags_from_args(args)

    assert args.manifests == ["a.json", "b.yml"]
    assert flags.no_cleanup is True
    assert flags.no_generate_index is True
    assert flags.minify_css is True
    assert flags.minify_json is True
    assert flags.minify_js is False
    assert not _stages_for("build", flags).ok(Stage.CLEANUP)
    assert _stages_for("build", flags).ok(Stage.COPY, Stage.BUILD)


@pytest.mark.parametrize(
    ("command", "stage"),
    [("copy", Stage.COPY), ("clean", Stage.CLEANUP), ("cleanup", Stage.CLEANUP)],
)
def test_cli_single_stage_commands(command: str, stage: Stage) -> None:
    args = _build_parser().parse_args([command])

    assert args.manifests == []
    assert _stages_for(command, _flags_from_args(args)) is stage


def test_main_generate_builds_single_site(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = tmp_path / "src"
    src.mkdir()
    (src / "index.md").write_text("# Home\n", encoding="utf-8")
    dst = tmp_path / "dst"

    main(["generate", str(src), str(dst), "--url", "https://example.com"])

    assert (dst / "index.html").exists()
    assert (dst / "sitemap.xml").exists()
    assert "Wrote 1 file(s)" in capsys.readouterr().out


def test_main_build_runs_manifest(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = tmp_path / "src"
    src.mkdir()
    (src / "index.md").write_text("# Home\n", encoding="utf-8")
    manifest = tmp_path / "manifest.json"
    manifest.write_text(
        json.dumps({"home": {"src": str(src), "dst": str(tmp_path / "dist")}}),
        encoding="utf-8",
    )

    main(["build", str(manifest)])

    assert (tmp_path / "dist" / "index.html").exists()
    assert "home: wrote 1 file(s)" in capsys.readouterr().out


def test_main_exits_non_zero_on_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(tmp_path / "missing.json")])

    assert excinfo.value.code == 1
    assert "sitegen build failed" in capsys.readouterr().err


def test_cli_html_minify_flags() -> None:
    args = _build_parser().parse_args(["build", "--min-html", "--min-html-copy"])
    flags = _flags_from_args(args)

    assert flags.minify_html is True
    assert flags.minify_html_copy is True
    assert flags.hook() is not None
    assert flags.hook_generate() is not None
    assert _flags_from_args(_build_parser().parse_args(["build"])).hook_generate() is None
