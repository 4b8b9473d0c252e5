"""Logging setup for the sip_tracker package."""

from __future__ import annotations

import logging
from typing import Union

__all__ = ["LOGGER_NAME", "configure_logging", "get_logger"]

LOGGER_NAME = "sip_tracker"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Safe to call more than once; later calls only change the level.
    """
    logger = get_logger()
    logger.setLevel(level)

    if not any(getattr(handler, "_sip_tracker", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._sip_tracker = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
