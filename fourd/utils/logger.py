"""Utility logging setup."""

import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

ROOT_LOGGER_NAME = 'fourd'


def _file_handler(log_file: str, max_size_mb: int = 10, backup_count: int = 5) -> RotatingFileHandler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        log_file,
        maxBytes=max_size_mb * 1024 * 1024,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def get_logger(name: str, log_file: Optional[str] = None) -> logging.Logger:
    """
    Get configured logger instance.

    Loggers under the ``fourd`` namespace propagate to the package root
    logger, which owns the handlers (see ``configure_logging``); for those
    names ``log_file`` is attached to the package root logger.

    Args:
        name: Logger name (usually __name__)
        log_file: Optional log file path

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    if name.startswith(ROOT_LOGGER_NAME + '.'):
        if log_file:
            configure_logging(logging.getLevelName(_ensure_root_handlers().level), log_file)
        else:
            _ensure_root_handlers()
        return logger

    logger.setLevel(logging.INFO)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)

    # File handler (if specified)
    if log_file:
        logger.addHandler(_file_handler(log_file))

    return logger


def _ensure_root_handlers() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        root.setLevel(logging.INFO)
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(console_handler)
    return root


def configure_logging(
    level: str = 'INFO',
    log_file: Optional[str] = None,
    max_size_mb: int = 10,
    backup_count: int = 3
) -> logging.Logger:
    """Apply level and optional rotating file output to the package logger."""
    root = _ensure_root_handlers()
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    root.setLevel(numeric_level)
    for handler in root.handlers:
        if not isinstance(handler, RotatingFileHandler):
            handler.setLevel(numeric_level)

    if log_file:
        target = os.path.abspath(log_file)
        already = any(
            isinstance(h, RotatingFileHandler) and h.baseFilename == target
            for h in root.handlers
        )
        if not already:
            root.addHandler(_file_handler(log_file, max_size_mb, backup_count))

    return root
