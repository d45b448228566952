"""
Logging setup for SleepTracker.

Thin wrapper around loguru so every module can do::

    from sleeptracker.logger import get_logger
    logger = get_logger(__name__)
"""

import sys

from loguru import logger as _logger

from sleeptracker.config import CONFIG

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)

_logger.configure(extra={"name": "sleeptracker"})


def setup_logging(level: str | None = None):
    """Replace loguru's default sink with a single stderr sink at ``level``."""
    level = (level or CONFIG.log_level).upper()
    _logger.remove()
    _logger.add(sys.stderr, level=level, format=_FORMAT)


def get_logger(name: str):
    """Return a loguru logger bound to the given module name."""
    return _logger.bind(name=name)
