"""Logging setup for processes embedding the rotating resource."""

from __future__ import annotations

import logging

from app.core.config import Settings


def configure_logging(settings: Settings) -> logging.Logger:
    """Set the `rotating` logger level; handlers belong to the embedding process."""
    logger = logging.getLogger("rotating")
    logger.setLevel(settings.log_level)
    return logger
