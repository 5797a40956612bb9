"""
Centralized logging configuration.
All modules should use get_logger() instead of print().
"""

import logging
import sys
from typing import Optional, TextIO

# Cache for logger instances
_loggers = {}

ROOT_LOGGER_NAME = 'nuanced_rating'

DEFAULT_FORMAT = '%(asctime)s [%(name)s] %(levelname)s: %(message)s'
SIMPLE_FORMAT = '[%(name)s] %(levelname)s: %(message)s'


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None,
                  stream: Optional[TextIO] = None):
    """
    Configure the root logger for the application.
    Call this once at application startup.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path for log output
        stream: Console stream, stdout by default. Scripts that print
            rating JSON on stdout pass sys.stderr here.
    """
    # Default to INFO if not specified
    if level is None:
        level = 'INFO'

    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(log_level)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (usually a component name like 'TTLCache', 'Fetcher', etc.)

    Returns:
        Configured logger instance

    Usage:
        logger = get_logger('RatingService')
        logger.info("Computing rating...")
        logger.error(f"Failed: {e}")
    """
    if name not in _loggers:
        logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
        _loggers[name] = logger

    return _loggers[name]
