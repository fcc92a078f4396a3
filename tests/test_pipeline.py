"""Tests for sitegen.pipeline and sitegen.options."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from sitegen.errors import OptionError, PipelineError
from sitegen.options import WRITERS_DEFAULT, WRITERS_ENV_KEY, Options, writers_from_env
from sitegen.pipeline import BreakPipelines, SkipCore, chain, chain_hooks, run_pipelines


@pytest.fixture
def entry(tmp_path: Path) -> os.DirEntry:
    (tmp_path / "file.txt").write_text("x", encoding="utf-8")
    with os.scandir(tmp_path) as iterator:
        return next(iter(iterator))


def _append(suffix: bytes):
    def _pipe(path: str, data: bytes, entry: os.DirEntry):
        return path, data + suffix, entry

    return _pipe


def test_run_pipelines_applies_in_order(entry: os.DirEntry) -> None:
    result = run_pipelines([_append(b"1"), _append(b"2")], "p", b"", entry)

    assert result is not None
    assert result[1] == b"12"


def test_run_pipelines_skip_returns_none(entry: os.DirEntry) -> None:
    def skip(path: str, data: bytes, entry: os.DirEntry):
        raise SkipCore()

    assert run_pipelines([skip, _append(b"never")], "p", b"", entry) is None


def test_chain_keeps_progress_on_break(entry: os.DirEntry) -> None:
    def stop(path: str, data: bytes, entry: os.DirEntry):
        raise BreakPipelines()

    chained = chain(_append(b"a"), stop, _append(b"b"))
    result = run_pipelines([chained, _append(b"c")], "p", b"", entry)

    assert result is not None
    assert result[1] == b"a"


def test_chain_wraps_errors_with_sub_index(entry: os.DirEntry) -> None:
    def fail(path: str, data: bytes, entry: os.DirEntry):
        raise KeyError("missing")

    chained = chain(_append(b"a"), fail)

    with pytest.raises(PipelineError) as excinfo:
        chained("p", b"", entry)
    assert excinfo.value.index == 1

    with pytest.raises(PipelineError) as outer:
        run_pipelines([_append(b"x"), chained], "p", b"", entry)
    assert outer.value.index == 1
    assert isinstance(outer.value.cause, PipelineError)


def test_chain_hooks_composes_present_hooks() -> None:
    assert chain_hooks(None, None) is None

    def first(path: str, data: bytes) -> bytes:
        return data + b"1"

    assert chain_hooks(None, first) is first

    combined = chain_hooks(first, None, lambda path, data: data + b"2")
    assert combined is not None
    assert combined("p", b"") == b"12"


def test_options_reject_second_hook() -> None:
    options = Options().with_hook(lambda path, data: data)

    with pytest.raises(OptionError):
        options.with_hook(lambda path, data: data)

    options.with_hook_generate(lambda page: page)
    with pytest.raises(OptionError):
        options.with_hook_generate(lambda page: page)


def test_options_validate_pipelines_and_writers() -> None:
    options = Options()

    with pytest.raises(OptionError):
        options.with_pipelines("not callable")  # type: ignore[arg-type]
    assert options.with_writers(-1).writers == 0
    assert options.effective_writers() == writers_from_env()

    options.with_pipelines(_append(b"a"), _append(b"b")).with_writers(3).with_caching()
    assert len(options.pipelines) == 2
    assert options.effective_writers() == 3
    assert options.caching is True


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("7", 7), (" 4 ", 4), ("0", WRITERS_DEFAULT), ("-2", WRITERS_DEFAULT), ("many", WRITERS_DEFAULT), ("", WRITERS_DEFAULT)],
)
def test_writers_from_env(monkeypatch: pytest.MonkeyPatch, raw: str, expected: int) -> None:
    monkeypatch.setenv(WRITERS_ENV_KEY, raw)

    assert writers_from_env() == expected
    assert Options().effective_writers() == expected
