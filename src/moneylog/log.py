"""Logging setup for moneylog."""

import logging
from typing import Optional

LOGGER_NAME = "moneylog"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def configure_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Calling this again only changes the level; handlers are never duplicated.
    """
    global _handler

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: '{level}'")
        level = resolved

    logger = logging.getLogger(LOGGER_NAME)
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if _handler not in logger.handlers:
        logger.addHandler(_handler)
    logger.setLevel(level)
    return logger
