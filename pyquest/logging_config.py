"""Minimal logging helpers for applications using pyquest.

The library itself only emits DEBUG records through module loggers and never
configures handlers; call :func:`configure_logging` to see them.
"""

from __future__ import annotations

import logging

__all__ = ["CONSOLE_HANDLER_NAME", "DEFAULT_FORMAT", "configure_logging", "get_logger"]

DEFAULT_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
CONSOLE_HANDLER_NAME = "pyquest-console"


def configure_logging(level: int | str = logging.INFO, *, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """Attaches a console handler to the ``pyquest`` logger.

    Calling it again only updates the level and format; no duplicate handler
    is added.

    Returns:
        The ``pyquest`` package logger.
    """
    logger = logging.getLogger("pyquest")
    logger.setLevel(level)
    handler = next(
        (h for h in logger.handlers if h.get_name() == CONSOLE_HANDLER_NAME),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(CONSOLE_HANDLER_NAME)
        logger.addHandler(handler)
    handler.setFormatter(logging.Formatter(fmt))
    return logger


def get_logger(name: str, *, level: int | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
