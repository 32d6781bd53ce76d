"""Diagnostics for uidocs.

Extracted records go to stdout, so every log line goes to stderr or to the
optional log file. Extractors stay silent; sources, the library facade and
the service log under ``uidocs.<area>``.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "uidocs"
_CONSOLE_FORMAT = "[uidocs] %(levelname)s %(message)s"
_VERBOSE_CONSOLE_FORMAT = "[uidocs] %(levelname)s %(area)s: %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _AreaFilter(logging.Filter):
    """Expose the logger name without the ``uidocs.`` prefix as ``area``."""

    def filter(self, record: logging.LogRecord) -> bool:
        area = record.name[len(_LOGGER_NAME) + 1 :] if record.name.startswith(f"{_LOGGER_NAME}.") else ""
        record.area = area or _LOGGER_NAME
        return True


def get_logger(area: str | None = None) -> logging.Logger:
    """Return the logger for one area, e.g. ``sources`` or ``service``."""
    return logging.getLogger(f"{_LOGGER_NAME}.{area}" if area else _LOGGER_NAME)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route uidocs diagnostics to stderr and, optionally, to ``log_file``.

    Verbose mode lowers the level to DEBUG and names the area of each line.
    Calling this again replaces the previous handlers.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.addFilter(_AreaFilter())
    console.setFormatter(logging.Formatter(_VERBOSE_CONSOLE_FORMAT if verbose else _CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(level)
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(sink)

    return logger


__all__ = ["configure_logging", "get_logger"]
