"""Logging helpers for the task tracker."""
import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "ttrack"

_LEVEL_ALIASES = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def _resolve_level(level: Optional[Union[str, int]]) -> int:
    if level is None:
        return logging.WARNING
    if isinstance(level, int):
        return level
    return _LEVEL_ALIASES.get(level.strip().upper(), logging.WARNING)


def configure_logging(level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Configure and return the package logger.

    Each call swaps in a fresh stderr handler bound to the current
    sys.stderr. The previous handler is detached without being flushed,
    since the stream it wrote to may already be closed.

    Args:
        level: Level name or number. Defaults to WARNING.

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    formatter = logging.Formatter(fmt="%(asctime)s %(levelname)s %(name)s | %(message)s")
    resolved = _resolve_level(level)

    for old in [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]:
        logger.removeHandler(old)

    handler = logging.StreamHandler(sys.stderr)
    logger.addHandler(handler)
    handler.setLevel(resolved)
    handler.setFormatter(formatter)
    logger.setLevel(resolved)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a child logger under the package root."""
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)
