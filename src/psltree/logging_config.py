"""Logging configuration for applications embedding psltree."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .constants import (
    PACKAGE_NAME,
    LOG_FORMAT,
    LOG_MAX_BYTES,
    LOG_BACKUP_COUNT,
)


def setup_logging(debug_mode: bool = False, log_file: Path | None = None) -> logging.Logger:
    """
    Configure the package logger.

    Sets up up to two log targets:
    1. Console: WARNING and above, or DEBUG in debug mode
    2. Log file: Rotating file handler with DEBUG level (only if log_file is given)

    Args:
        debug_mode: If True, output DEBUG to console
        log_file: Optional path of a rotating debug log

    Returns:
        The configured package logger
    """
    package_logger = logging.getLogger(PACKAGE_NAME)
    package_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if debug_mode else logging.WARNING)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(file_handler)

    return package_logger
