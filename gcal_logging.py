"""Loguru setup for the command-line entry points."""

from __future__ import annotations

import sys
from typing import Optional

from loguru import logger

from gcal_settings import OAuthSettings

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{line} - {message}"


def configure_logging(level: Optional[str] = None) -> None:
    """Replace loguru's default sink with one stderr sink at GCAL_LOG_LEVEL (or ``level``)."""
    level = (level or OAuthSettings().gcal_log_level).upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT, colorize=sys.stderr.isatty())
