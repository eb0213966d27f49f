"""Logging setup for workplan."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOGGER_NAME = "workplan"

VERBOSITY_QUIET = 0  # warnings and errors only
VERBOSITY_INFO = 1  # run summaries
VERBOSITY_DEBUG = 2  # per-task scheduling decisions


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child of it when *name* is given."""
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Configure the package logger for a verbosity level.

    Can be called repeatedly; existing handlers are replaced.

    Args:
        verbosity: 0=warnings only, 1=info, 2 or more=debug
        stream: output stream (defaults to sys.stderr)
    """
    logger = get_logger()
    logger.handlers.clear()

    if verbosity >= VERBOSITY_DEBUG:
        level = logging.DEBUG
    elif verbosity == VERBOSITY_INFO:
        level = logging.INFO
    else:
        level = logging.WARNING
    logger.setLevel(level)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Drop handlers and restore defaults (used by tests)."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
