"""Streaming, bounded-concurrency output writer."""

from __future__ import annotations

import os
import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional

from .errors import GenerateError, SiteError, WriteError, WriteErrors
from .logging import get_logger
from .metadata import generate_metadata
from .models import OutputFile

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .site import Site

QUEUE_MULTIPLIER = 2

_CLOSED = object()
_LOGGER = get_logger("writer")


class OutputStream:
    """Bounded hand-off between the walking thread and the writers.

    ``put`` blocks while the stream is full; iteration ends after ``close``.
    """

    def __init__(self, capacity: int) -> None:
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=max(capacity, 1))

    def put(self, output: OutputFile) -> None:
        self._queue.put(output)

    def close(self) -> None:
        self._queue.put(_CLOSED)

    def drain(self) -> int:
        """Discard everything up to the close marker; returns the discarded count."""
        return sum(1 for _ in self)

    def __iter__(self) -> Iterator[OutputFile]:
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                return
            yield item  # type: ignore[misc]


def write_output(output: OutputFile) -> None:
    """Persist one output, creating parent directories as needed."""
    target = Path(output.target)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(output.data)
    os.chmod(target, output.mode())


def write_out_streaming(outputs: Iterable[OutputFile], writers: int) -> List[OutputFile]:
    """Write every output from ``outputs`` with at most ``writers`` in flight.

    Failures do not stop other writes; they are collected and raised together
    as :class:`WriteErrors` once ``outputs`` is exhausted. Returns the written
    outputs without their data, in completion order.
    """
    if writers <= 0:
        writers = 1

    written: List[OutputFile] = []
    written_lock = threading.Lock()
    guard = threading.Semaphore(writers)
    sink: "queue.SimpleQueue[object]" = queue.SimpleQueue()
    failures: List[WriteError] = []

    def _collect() -> None:
        while True:
            item = sink.get()
            if item is _CLOSED:
                return
            failures.append(item)  # type: ignore[arg-type]

    def _write(output: OutputFile) -> None:
        try:
            write_output(output)
        except Exception as exc:
            _LOGGER.debug("Failed to write %s: %s", output.target, exc)
            sink.put(WriteError(output.target, exc))
            return
        finally:
            guard.release()

        with written_lock:
            written.append(output.without_data())
        _LOGGER.debug("Wrote %s", output.target)

    collector = threading.Thread(target=_collect, name="sitegen-write-errors", daemon=True)
    collector.start()
    try:
        with ThreadPoolExecutor(max_workers=writers, thread_name_prefix="sitegen-writer") as pool:
            for output in outputs:
                guard.acquire()
                pool.submit(_write, output)
    finally:
        sink.put(_CLOSED)
        collector.join()

    if failures:
        raise WriteErrors(failures)
    return written


def generate(site: "Site") -> List[OutputFile]:
    """Walk ``site`` on a producer thread while writers persist its outputs.

    On success the site metadata is emitted and the written outputs are
    returned. When both sides fail a :class:`GenerateError` names both.
    """
    try:
        stat = os.stat(site.src)
    except OSError as exc:
        raise SiteError(f"failed to stat src '{site.src}': {exc}") from exc

    writers = site.options.effective_writers()
    stream = OutputStream(writers * QUEUE_MULTIPLIER)
    build_error: Optional[BaseException] = None
    write_error: Optional[BaseException] = None
    written: List[OutputFile] = []

    def _produce() -> None:
        nonlocal build_error
        try:
            site.walk(stream.put)
        except Exception as exc:
            build_error = exc
        finally:
            stream.close()

    producer = threading.Thread(target=_produce, name="sitegen-walker", daemon=True)
    _LOGGER.debug("Generating %s -> %s with %d writer(s)", site.src, site.dst, writers)
    producer.start()

    try:
        written = write_out_streaming(stream, writers)
    except Exception as exc:
        write_error = exc
        if not isinstance(exc, WriteErrors):
            # The dispatcher stopped early; unblock the producer.
            stream.drain()
    producer.join()

    if build_error is not None and write_error is not None:
        raise GenerateError(build_error, write_error) from build_error
    if build_error is not None:
        raise build_error
    if write_error is not None:
        raise write_error

    metadata = generate_metadata(site.src, site.dst, site.url, site.files, written, stat.st_mtime)
    _LOGGER.info("wrote %d file(s) to %s", len(written) + len(metadata), site.dst)
    return written


__all__ = [
    "OutputStream",
    "QUEUE_MULTIPLIER",
    "generate",
    "write_out_streaming",
    "write_output",
]
