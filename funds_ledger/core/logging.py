"""Logging setup for the ledger package."""

from __future__ import annotations

import logging

from funds_ledger.core.config import Settings

PACKAGE_LOGGER = "funds_ledger"


def configure_logging(settings: Settings) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling this more than once only updates the level, so the container can
    be rebuilt in tests without stacking handlers.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logging.DEBUG if settings.debug else settings.logging.level.upper()
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(settings.logging.format))
        logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "PACKAGE_LOGGER"]
