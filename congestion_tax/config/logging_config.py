"""Centralized logging configuration for the congestion tax calculator."""

import json
import logging
import logging.handlers
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from congestion_tax.utils.logging_utils import _ContextFilter

STANDARD_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
STANDARD_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else came from extra= or LogContext
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Formats log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES and not key.startswith("_"):
                log_data[key] = value

        return json.dumps(log_data, default=str)


@dataclass
class LoggingConfig:
    """
    Logging settings.

    Attributes:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_format: 'standard' or 'json'
        log_file: Path of the log file, required when enable_file is set
        enable_console: Log to stderr
        enable_file: Log to a rotating file
        max_file_size: Bytes before the log file rotates
        backup_count: Rotated files to keep
    """

    VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
    VALID_FORMATS = ("standard", "json")

    log_level: str = "INFO"
    log_format: str = "standard"
    log_file: Optional[str] = None
    enable_console: bool = True
    enable_file: bool = False
    max_file_size: int = 10 * 1024 * 1024
    backup_count: int = 5

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if self.log_level not in self.VALID_LEVELS:
            raise ValueError(
                f"Invalid log level: {self.log_level}. "
                f"Must be one of {', '.join(self.VALID_LEVELS)}"
            )
        if self.log_format not in self.VALID_FORMATS:
            raise ValueError(
                f"Invalid log format: {self.log_format}. "
                f"Must be one of {', '.join(self.VALID_FORMATS)}"
            )
        if self.enable_file and not self.log_file:
            raise ValueError("log_file must be specified when enable_file is True")

    @classmethod
    def from_env(cls, default_level: str = "INFO") -> "LoggingConfig":
        """
        Build the configuration from LOG_LEVEL, LOG_FORMAT, LOG_FILE,
        LOG_CONSOLE, LOG_FILE_ENABLED, LOG_MAX_FILE_SIZE and LOG_BACKUP_COUNT.

        Args:
            default_level: Level used when LOG_LEVEL is not set
        """
        return cls(
            log_level=os.getenv("LOG_LEVEL", default_level),
            log_format=os.getenv("LOG_FORMAT", "standard"),
            log_file=os.getenv("LOG_FILE"),
            enable_console=os.getenv("LOG_CONSOLE", "true").lower() == "true",
            enable_file=os.getenv("LOG_FILE_ENABLED", "false").lower() == "true",
            max_file_size=int(os.getenv("LOG_MAX_FILE_SIZE", str(10 * 1024 * 1024))),
            backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
        )


def configure_logging(config: LoggingConfig) -> None:
    """
    Install handlers on the root logger according to the configuration.

    Existing root handlers are removed first, so calling this twice does not
    duplicate output.
    """
    reset_logging()

    root_logger = logging.getLogger()
    level = getattr(logging, config.log_level)
    root_logger.setLevel(level)

    if config.log_format == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt=STANDARD_DATE_FORMAT)

    handlers = []
    if config.enable_console:
        handlers.append(logging.StreamHandler())

    if config.enable_file and config.log_file:
        Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                filename=config.log_file,
                maxBytes=config.max_file_size,
                backupCount=config.backup_count,
            )
        )

    context_filter = _ContextFilter()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass __name__)."""
    return logging.getLogger(name)


def reset_logging() -> None:
    """Remove all root handlers and restore the default WARNING level."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(logging.WARNING)
