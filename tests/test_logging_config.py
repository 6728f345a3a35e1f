"""
Tests for structured JSON logging configuration.

This module tests:
- JSONFormatter (JSON log output)
- setup_logging() (logging configuration)
- get_logger() (logger factory)

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

import io
import json
import logging

import pytest

from trial_management.core.logging_config import (
    JSONFormatter,
    setup_logging,
    get_logger,
)


def _json_logger(name: str, level: int = logging.INFO):
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers = []
    logger.propagate = False

    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    return logger, stream


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way the test found it."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level

    yield root_logger

    root_logger.handlers = handlers
    root_logger.setLevel(level)


class TestJSONFormatter:
    """Tests for JSON log formatter."""

    def test_json_formatter_basic_message(self):
        """
        Test JSONFormatter outputs valid JSON.

        Arrange: Create logger with JSONFormatter
        Act: Log a message
        Assert: Output is valid JSON with required fields
        """
        # Arrange
        logger, stream = _json_logger("test_logger")

        # Act
        logger.info("Test message")

        # Assert
        log_data = json.loads(stream.getvalue().strip())

        assert log_data["level"] == "INFO"
        assert log_data["message"] == "Test message"
        assert "timestamp" in log_data
        assert log_data["logger"] == "test_logger"

    def test_json_formatter_with_operation_field(self):
        """
        Test JSONFormatter includes the repository operation extra.

        Arrange: Create logger with JSONFormatter
        Act: Log an error the way the repository does
        Assert: Operation name and raw message land in the JSON output
        """
        # Arrange
        logger, stream = _json_logger("test_logger_operation")

        # Act
        logger.error(
            "UNIQUE constraint failed: organizations.id",
            extra={"operation": "add_organization"}
        )

        # Assert
        log_data = json.loads(stream.getvalue().strip())

        assert log_data["level"] == "ERROR"
        assert log_data["message"] == "UNIQUE constraint failed: organizations.id"
        assert log_data["operation"] == "add_organization"

    def test_json_formatter_with_exception(self):
        """
        Test JSONFormatter includes exception details.

        Arrange: Create logger with JSONFormatter
        Act: Log exception
        Assert: Exception info included in JSON output
        """
        # Arrange
        logger, stream = _json_logger("test_logger_exc", logging.ERROR)

        # Act
        try:
            raise ValueError("Test exception")
        except ValueError:
            logger.error("Error occurred", exc_info=True)

        # Assert
        log_data = json.loads(stream.getvalue().strip())

        assert log_data["message"] == "Error occurred"
        assert "ValueError: Test exception" in log_data["exception"]

    def test_json_formatter_serializes_non_json_values(self):
        """Values json can't encode fall back to str()."""
        logger, stream = _json_logger("test_logger_default")

        logger.info("Fetched", extra={"entity": object()})

        log_data = json.loads(stream.getvalue().strip())
        assert log_data["entity"].startswith("<object object")


class TestSetupLogging:
    """Tests for logging setup function."""

    def test_setup_logging_configures_root_logger(self, restore_root_logger):
        """
        Test setup_logging configures root logger.

        Arrange: None
        Act: Call setup_logging()
        Assert: Root logger has correct level and a JSON handler
        """
        # Act
        setup_logging(level="INFO", json_format=True)

        # Assert
        assert restore_root_logger.level == logging.INFO
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)

    def test_setup_logging_with_debug_level(self, restore_root_logger):
        """Test setup_logging with DEBUG level."""
        setup_logging(level="debug", json_format=True)

        assert restore_root_logger.level == logging.DEBUG

    def test_setup_logging_with_simple_format(self, restore_root_logger):
        """
        Test setup_logging with simple (non-JSON) format.

        Arrange: None
        Act: Call setup_logging(json_format=False)
        Assert: Handler has plain Formatter (not JSONFormatter)
        """
        setup_logging(level="INFO", json_format=False)

        handler = restore_root_logger.handlers[0]
        assert not isinstance(handler.formatter, JSONFormatter)
        assert isinstance(handler.formatter, logging.Formatter)

    def test_setup_logging_quiets_sqlalchemy(self, restore_root_logger):
        setup_logging(level="DEBUG")

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_setup_logging_defaults_from_settings(
        self, restore_root_logger, monkeypatch
    ):
        """
        Test setup_logging falls back to LOG_LEVEL and LOG_JSON settings.

        Arrange: Settings ask for WARNING and plain text
        Act: Call setup_logging() with no arguments
        Assert: Root logger uses the configured level and formatter
        """
        # Arrange
        from trial_management.core.config import settings

        monkeypatch.setattr(settings, "log_level", "WARNING")
        monkeypatch.setattr(settings, "log_json", False)

        # Act
        setup_logging()

        # Assert
        assert restore_root_logger.level == logging.WARNING
        assert not isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)


class TestGetLogger:
    """Tests for get_logger factory."""

    def test_get_logger_returns_named_logger(self):
        logger = get_logger("trial_management.tests")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "trial_management.tests"
        assert logger is logging.getLogger("trial_management.tests")
