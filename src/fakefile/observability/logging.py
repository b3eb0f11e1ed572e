"""Shared logging utilities for fakefile.

Usage example:
    from fakefile.observability.logging import get_logger, set_log_level

    logger = get_logger("fakefile.tree")
    set_log_level("DEBUG")
    logger.debug("Added %s at %s", "file", "/tmp/a.txt")
"""

from __future__ import annotations

import logging
import time

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
_ROOT_NAME = "fakefile"
_DEFAULT_LEVEL = logging.WARNING


def get_logger(name: str) -> logging.Logger:
    """Return a standard logger configured for UTC timestamps.

    Args:
        name: Logger name (use a stable module-qualified name).

    Returns:
        A logger with a single stream handler and a consistent UTC format.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)
        formatter.converter = time.gmtime
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(_DEFAULT_LEVEL)
        logger.propagate = False
    return logger


def set_log_level(level: int | str, *, prefix: str = _ROOT_NAME) -> None:
    """Apply ``level`` to every logger whose name starts with ``prefix``.

    Loggers are created per module without propagation, so the level has to be
    pushed to each of them rather than to a shared parent.
    """
    if isinstance(level, str):
        resolved = logging.getLevelNamesMapping().get(level.strip().upper())
    else:
        resolved = level
    if resolved is None:
        raise ValueError(f"Unknown log level: {level}")
    for name in list(logging.Logger.manager.loggerDict):
        if name == prefix or name.startswith(f"{prefix}."):
            logging.getLogger(name).setLevel(resolved)
