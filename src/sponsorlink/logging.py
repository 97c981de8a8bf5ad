"""Logger hierarchy and CLI log setup for sponsor diagnostics."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "sponsorlink"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``sponsorlink.<name>``, or the package logger when ``name`` is empty."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route sponsorlink records to stderr and, when given, to ``log_file``.

    Warnings only by default; ``verbose`` also shows skipped override files
    and duplicate-report decisions.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter("[sponsorlink] %(levelname)s %(message)s"))
    handlers: list[logging.Handler] = [stream_handler]

    # Opened first so a bad path raises before the current handlers are touched.
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # One set of handlers per process, however often main() runs.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    for handler in handlers:
        handler.setLevel(level)
        logger.addHandler(handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
