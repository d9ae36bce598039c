"""Loguru configuration for the app entry point."""

from __future__ import annotations

import os
import sys

from loguru import logger

LOG_LEVEL_ENV = "INTERVALFLOW_LOG_LEVEL"
DEFAULT_LEVEL = "INFO"

_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str | None = None) -> None:
    """Replace loguru's default sink with one stderr sink at *level*.

    *level* falls back to ``$INTERVALFLOW_LOG_LEVEL``, then INFO.
    """
    level = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LEVEL).upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=_FORMAT)
