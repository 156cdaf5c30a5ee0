"""Centralised Loguru logger shared by every layer of the project."""
from __future__ import annotations

import sys

from loguru import logger

_DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> None:
    """Replace the default Loguru sink with a stderr sink at ``level``.

    Entry points call this once after reading the configuration so library code
    can log freely without deciding where records end up.
    """

    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=_DEFAULT_FORMAT)


__all__ = ["configure_logging", "logger"]
