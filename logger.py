"""Logging utilities for the scenario drill engine."""

from __future__ import annotations

import logging
from typing import Optional

_LOGGERS: dict[str, logging.Logger] = {}

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str = "scenario-drill", level: int = logging.INFO) -> logging.Logger:
    """Return a cached logger with a single stream handler attached."""
    if name in _LOGGERS:
        return _LOGGERS[name]

    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    _LOGGERS[name] = logger
    return logger


def reset_logger(name: str) -> None:
    """Remove cached loggers, useful for testing."""
    existing: Optional[logging.Logger] = _LOGGERS.pop(name, None)
    if existing:
        for handler in list(existing.handlers):
            existing.removeHandler(handler)
            handler.close()
