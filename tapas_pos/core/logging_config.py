"""
Logging Configuration Module.

This module provides centralized logging configuration for the Tapas POS
persistence layer. It sets up console logging (and optionally file logging)
with per-module levels so SQL driver noise stays out of the application log.

Features:
- Configurable log levels per module
- Console and file logging
- Simple, detailed and JSON-like formats
"""

import logging
from pathlib import Path
from typing import Optional

from tapas_pos.core.config import settings

_logging_settings = settings.logging
LOG_LEVEL = _logging_settings.level.upper()
LOG_FORMAT = _logging_settings.format
LOG_FILE_DIR = _logging_settings.file_dir
ENABLE_FILE_LOGGING = _logging_settings.enable_file


# Define log formats
SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
    '"module": "%(filename)s", "function": "%(funcName)s", "line": %(lineno)d, '
    '"message": "%(message)s"}'
)

_FORMATS = {
    "json": JSON_FORMAT,
    "simple": SIMPLE_FORMAT,
    "detailed": DETAILED_FORMAT,
}


# Module-specific log levels
MODULE_LOG_LEVELS = {
    "tapas_pos": "INFO",
    "tapas_pos.persistence": "DEBUG",
    "tapas_pos.core": "INFO",
    # Third-party libraries (reduce noise)
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "aiosqlite": "WARNING",
    "alembic": "INFO",
    "asyncio": "WARNING",
}


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: Optional[bool] = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Override default log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Override default format (simple, detailed, json)
        enable_file: Override whether the log is also written to ``LOG_FILE_DIR``
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT
    to_file = ENABLE_FILE_LOGGING if enable_file is None else enable_file

    formatter = logging.Formatter(_FORMATS.get(fmt, DETAILED_FORMAT), datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all levels, filter at handler level

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if to_file:
        Path(LOG_FILE_DIR).mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(Path(LOG_FILE_DIR) / "tapas_pos.log")
        file_handler.setLevel(logging.DEBUG)  # Always log DEBUG to file
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info(f"Logging configured: level={level}, format={fmt}, file_logging={to_file}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The module name (typically __name__)

    Returns:
        A configured logger instance
    """
    return logging.getLogger(name)
