"""Logging utilities for checkphone application."""

from __future__ import annotations

import logging
import sys

from config import LOG_LEVEL, LOG_FORMAT

ROOT_LOGGER = 'checkphone'


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger for a module, e.g. 'checkphone.catalog'."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(LOG_LEVEL)
        logger.propagate = False  # Each module logger has its own handler
    return logger


def set_level(level: int) -> None:
    """Set the level of every checkphone logger created so far."""
    for name in list(logging.Logger.manager.loggerDict):
        if name == ROOT_LOGGER or name.startswith(f'{ROOT_LOGGER}.'):
            logging.getLogger(name).setLevel(level)
