"""Logging utilities for sitegen commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, MutableMapping

_LOGGER_NAME = "sitegen"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the sitegen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class StageLogger(logging.LoggerAdapter):
    """Prefixes records with the manifest stage and site key being processed."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        extra = self.extra or {}
        stage = extra.get("stage", "-")
        key = extra.get("key", "-")
        return f"[{stage} {key}] {msg}", kwargs


def stage_logger(logger: logging.Logger, stage: str, key: str, url: str = "") -> StageLogger:
    """Return an adapter that tags messages with a stage name and site key."""
    return StageLogger(logger, {"stage": stage, "key": key, "url": url})


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the sitegen logger with console output and an optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers so repeated CLI invocations in one process do not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[sitegen] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(threadName)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["StageLogger", "configure_logging", "get_logger", "stage_logger"]
