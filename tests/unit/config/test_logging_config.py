"""Tests for centralized logging configuration."""

import json
import logging
import os
from unittest.mock import patch

import pytest

from congestion_tax.config.logging_config import (
    JSONFormatter,
    LoggingConfig,
    configure_logging,
    get_logger,
    reset_logging,
)
from congestion_tax.utils.logging_utils import LogContext


class TestLoggingConfig:
    """Test LoggingConfig class."""

    def test_default_configuration(self):
        """Test default logging configuration."""
        config = LoggingConfig()

        assert config.log_level == "INFO"
        assert config.log_format == "standard"
        assert config.log_file is None
        assert config.enable_console is True
        assert config.enable_file is False
        assert config.max_file_size == 10 * 1024 * 1024  # 10MB
        assert config.backup_count == 5

    def test_environment_variable_override(self):
        """Test configuration from environment variables."""
        with patch.dict(
            os.environ,
            {
                "LOG_LEVEL": "DEBUG",
                "LOG_FORMAT": "json",
                "LOG_FILE": "/tmp/congestion.log",
                "LOG_MAX_FILE_SIZE": "5242880",  # 5MB
                "LOG_BACKUP_COUNT": "3",
            },
        ):
            config = LoggingConfig.from_env()

            assert config.log_level == "DEBUG"
            assert config.log_format == "json"
            assert config.log_file == "/tmp/congestion.log"
            assert config.max_file_size == 5242880
            assert config.backup_count == 3

    def test_from_env_default_level(self, monkeypatch):
        """Test the fallback level when LOG_LEVEL is unset."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        assert LoggingConfig.from_env(default_level="WARNING").log_level == "WARNING"

    def test_level_is_uppercased(self):
        assert LoggingConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        """Test invalid log level raises error."""
        with pytest.raises(ValueError, match="Invalid log level"):
            LoggingConfig(log_level="INVALID")

    def test_invalid_log_format(self):
        """Test invalid log format raises error."""
        with pytest.raises(ValueError, match="Invalid log format"):
            LoggingConfig(log_format="xml")

    def test_file_logging_requires_path(self):
        with pytest.raises(ValueError, match="log_file must be specified"):
            LoggingConfig(enable_file=True)


class TestConfigureLogging:
    """Test installing handlers on the root logger."""

    def test_console_handler(self):
        configure_logging(LoggingConfig(log_level="DEBUG"))

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_reconfiguring_does_not_duplicate_handlers(self):
        configure_logging(LoggingConfig())
        configure_logging(LoggingConfig())

        assert len(logging.getLogger().handlers) == 1

    def test_json_formatter_selected(self):
        configure_logging(LoggingConfig(log_format="json"))

        assert isinstance(logging.getLogger().handlers[0].formatter, JSONFormatter)

    def test_file_logging(self, tmp_path):
        log_file = tmp_path / "logs" / "congestion.log"
        configure_logging(
            LoggingConfig(
                log_format="json",
                log_file=str(log_file),
                enable_console=False,
                enable_file=True,
            )
        )

        with LogContext(correlation_id="abc-123", vehicle_type="car"):
            get_logger("congestion_tax.test").info("Calculated charge")
        for handler in logging.getLogger().handlers:
            handler.flush()

        entry = json.loads(log_file.read_text().splitlines()[-1])
        assert entry["message"] == "Calculated charge"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "congestion_tax.test"
        assert entry["correlation_id"] == "abc-123"
        assert entry["vehicle_type"] == "car"

    def test_reset_logging(self):
        configure_logging(LoggingConfig(log_level="DEBUG"))

        reset_logging()

        root = logging.getLogger()
        assert root.handlers == []
        assert root.level == logging.WARNING


class TestJSONFormatter:
    """Test the JSON log formatter."""

    def _record(self, **extra):
        record = logging.LogRecord(
            name="congestion_tax.calculators",
            level=logging.WARNING,
            pathname=__file__,
            lineno=42,
            msg="Charge capped at %s",
            args=("60",),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_basic_fields(self):
        entry = json.loads(JSONFormatter().format(self._record()))

        assert entry["message"] == "Charge capped at 60"
        assert entry["level"] == "WARNING"
        assert entry["line"] == 42
        assert "timestamp" in entry

    def test_extra_fields_are_included(self):
        entry = json.loads(JSONFormatter().format(self._record(vehicle_id="ABC123")))

        assert entry["vehicle_id"] == "ABC123"

    def test_non_serialisable_values_use_str(self):
        from decimal import Decimal

        entry = json.loads(JSONFormatter().format(self._record(total=Decimal("97"))))

        assert entry["total"] == "97"

    def test_exception_is_formatted(self):
        try:
            raise ValueError("bad timestamp")
        except ValueError:
            import sys

            record = self._record()
            record.exc_info = sys.exc_info()

        entry = json.loads(JSONFormatter().format(record))

        assert "ValueError: bad timestamp" in entry["exception"]
