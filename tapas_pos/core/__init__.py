"""Cross-cutting infrastructure: settings and logging setup."""

from .config import Settings, settings
from .logging_config import get_logger, setup_logging

__all__ = [
    "Settings",
    "get_logger",
    "settings",
    "setup_logging",
]
