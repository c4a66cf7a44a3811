"""Loguru sink setup for the mindflow CLI."""

from __future__ import annotations

import sys

from loguru import logger

_FORMAT = "<level>{level: <8}</level> <dim>{name}:{line}</dim> {message}"


def configure_logging(level: str = "WARNING") -> int:
    """Replace loguru's default sink with a single stderr sink at *level*.

    Returns the handler id so callers (tests) can remove it again.
    """
    logger.remove()
    return logger.add(sys.stderr, level=level.upper(), format=_FORMAT)
