"""Unit tests for logging configuration module.

Tests verify that the logging configuration functions work correctly with different
scenarios including various log levels, formats, and file logging options.
"""

import logging
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from tapas_pos.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    get_logger,
    setup_logging,
)


def _console_handler():
    root_logger = logging.getLogger()
    return next(
        (
            h
            for h in root_logger.handlers
            if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        ),
        None,
    )


def _file_handler():
    root_logger = logging.getLogger()
    return next((h for h in root_logger.handlers if isinstance(h, logging.FileHandler)), None)


@pytest.fixture(autouse=True)
def _close_file_handlers():
    yield
    handler = _file_handler()
    if handler is not None:
        logging.getLogger().removeHandler(handler)
        handler.close()


class TestSetupLoggingLogLevels:
    """Test setup_logging with different log levels."""

    @pytest.mark.parametrize(
        "log_level,expected_level",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("CRITICAL", logging.CRITICAL),
            ("debug", logging.DEBUG),  # Test lowercase
            ("info", logging.INFO),
        ],
    )
    def test_setup_logging_with_different_levels(self, log_level, expected_level):
        """Test setup_logging configures correct log level."""
        setup_logging(log_level=log_level, enable_file=False)

        console_handler = _console_handler()

        assert console_handler is not None
        assert console_handler.level == expected_level


class TestSetupLoggingFormats:
    """Test setup_logging with different log formats."""

    @pytest.mark.parametrize(
        "log_format,expected_format",
        [
            ("simple", SIMPLE_FORMAT),
            ("detailed", DETAILED_FORMAT),
            ("json", JSON_FORMAT),
        ],
    )
    def test_setup_logging_with_different_formats(self, log_format, expected_format):
        """Test setup_logging configures correct format."""
        setup_logging(log_format=log_format, enable_file=False)

        console_handler = _console_handler()

        assert console_handler is not None
        assert console_handler.formatter._fmt == expected_format

    def test_unknown_format_falls_back_to_detailed(self):
        setup_logging(log_format="fancy", enable_file=False)

        assert _console_handler().formatter._fmt == DETAILED_FORMAT

    def test_setup_logging_format_with_timestamp(self):
        """Test that formatter includes timestamp."""
        setup_logging(log_format="detailed", enable_file=False)

        console_handler = _console_handler()

        assert console_handler is not None
        assert console_handler.formatter.datefmt == "%Y-%m-%d %H:%M:%S"


class TestSetupLoggingFileHandling:
    """Test setup_logging file logging functionality."""

    def test_setup_logging_with_file_enabled(self):
        """Test setup_logging creates a DEBUG file handler when enabled."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with patch("tapas_pos.core.logging_config.LOG_FILE_DIR", tmpdir):
                setup_logging(log_level="ERROR", enable_file=True)

                file_handler = _file_handler()

                assert file_handler is not None
                assert file_handler.level == logging.DEBUG
                assert Path(file_handler.baseFilename) == Path(tmpdir).resolve() / "tapas_pos.log"

                logging.getLogger().removeHandler(file_handler)
                file_handler.close()

    def test_setup_logging_with_file_disabled(self):
        """Test setup_logging does not create file handler when disabled."""
        setup_logging(enable_file=False)

        assert _file_handler() is None

    def test_setup_logging_creates_log_directory(self):
        """Test setup_logging creates log directory if it doesn't exist."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_dir = Path(tmpdir) / "new_logs"
            assert not log_dir.exists()

            with patch("tapas_pos.core.logging_config.LOG_FILE_DIR", str(log_dir)):
                with patch("tapas_pos.core.logging_config.ENABLE_FILE_LOGGING", True):
                    setup_logging()

                    assert log_dir.exists()

                    file_handler = _file_handler()
                    logging.getLogger().removeHandler(file_handler)
                    file_handler.close()


class TestSetupLoggingHandlerManagement:
    """Test setup_logging handler management."""

    def test_setup_logging_removes_existing_handlers(self):
        """Test setup_logging removes existing handlers to avoid duplicates."""
        setup_logging(enable_file=False)
        setup_logging(enable_file=False)

        root_logger = logging.getLogger()
        consoles = [
            h
            for h in root_logger.handlers
            if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        ]
        assert len(consoles) == 1

    def test_module_levels_are_applied(self):
        setup_logging(enable_file=False)

        for module_name, module_level in MODULE_LOG_LEVELS.items():
            assert logging.getLogger(module_name).level == logging.getLevelName(module_level)

    def test_sql_driver_loggers_are_quiet(self):
        assert MODULE_LOG_LEVELS["sqlalchemy.engine"] == "WARNING"
        assert MODULE_LOG_LEVELS["aiosqlite"] == "WARNING"


class TestGetLogger:
    def test_get_logger_returns_named_logger(self):
        logger = get_logger("tapas_pos.persistence.sql")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "tapas_pos.persistence.sql"
