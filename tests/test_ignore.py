"""Tests for sitegen.ignore."""

from __future__ import annotations

from pathlib import Path

from sitegen.ignore import IGNORE_FILENAME, IgnoreRules, parse_lines


def _rules(root: Path, text: str) -> IgnoreRules:
    (root / IGNORE_FILENAME).write_text(text, encoding="utf-8")
    return IgnoreRules.from_file(str(root))


def test_missing_ignore_file_yields_no_rules(tmp_path: Path) -> None:
    rules = IgnoreRules.from_file(str(tmp_path))

    assert not rules
    assert rules.ignore(str(tmp_path / "anything.md")) is False


def test_patterns_match_components_and_globs(tmp_path: Path) -> None:
    rules = _rules(tmp_path, "# comment\n*.log\ndrafts/\n/top.md\nassets/raw\n")

    assert rules.ignore(str(tmp_path / "build.log"))
    assert rules.ignore(str(tmp_path / "deep" / "nested" / "debug.log"))
    assert rules.ignore(str(tmp_path / "drafts"), is_dir=True)
    assert rules.ignore(str(tmp_path / "blog" / "drafts" / "post.md"))
    assert rules.ignore(str(tmp_path / "top.md"))
    assert not rules.ignore(str(tmp_path / "blog" / "top.md"))
    assert rules.ignore(str(tmp_path / "assets" / "raw" / "big.png"))
    assert not rules.ignore(str(tmp_path / "assets" / "logo.png"))


def test_directory_only_rule_skips_files(tmp_path: Path) -> None:
    rules = _rules(tmp_path, "cache/\n")

    assert not rules.ignore(str(tmp_path / "cache"), is_dir=False)
    assert rules.ignore(str(tmp_path / "cache"), is_dir=True)


def test_negation_uses_last_matching_rule(tmp_path: Path) -> None:
    rules = _rules(tmp_path, "*.md\n!keep.md\n")

    assert rules.ignore(str(tmp_path / "drop.md"))
    assert not rules.ignore(str(tmp_path / "keep.md"))


def test_parse_lines_skips_blank_and_comments() -> None:
    rules = parse_lines(["", "  ", "# note", "!/docs/", "*.tmp"])

    assert [(rule.pattern, rule.negate, rule.anchored, rule.directory_only) for rule in rules] == [
        ("docs", True, True, True),
        ("*.tmp", False, False, False),
    ]
