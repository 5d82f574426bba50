"""Logging configuration."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Poll intervals are sub-second and each test thread drives its own tab.
LOG_FORMAT = "%(asctime)s.%(msecs)03d | %(levelname)-8s | %(threadName)s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def setup_logging(
    level: str | int = "INFO",
    name: str = "driver_helper",
    stream: TextIO = sys.stderr,
) -> logging.Logger:
    """Send the helper's wait, navigation and gesture logs to ``stream``.

    The logger gets one handler of its own and stops propagating, so the
    lines are not duplicated by a test runner's root handler. Calling it
    again for a configured logger only changes the level, on the logger
    and on its handler.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL) or number.
            Unknown names fall back to INFO.
        name: Logger name.
        stream: Output stream for log messages.

    Returns:
        Configured Logger instance.
    """
    logger = logging.getLogger(name)
    numeric_level = _resolve_level(level)
    logger.setLevel(numeric_level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(numeric_level)
        return logger

    handler = logging.StreamHandler(stream)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    logger.addHandler(handler)
    logger.propagate = False

    return logger
