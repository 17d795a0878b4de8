"""
Configuration management for the congestion tax calculator.
"""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from congestion_tax.config.logging_config import LoggingConfig

DATASTORE_DIR = Path(__file__).resolve().parent.parent / "datastore"
DEFAULT_PRICES_FILE = DATASTORE_DIR / "congestion_charges.json"
DEFAULT_RULES_FILE = DATASTORE_DIR / "tax_rules.json"

ENVIRONMENTS = ("development", "testing", "production")


class CongestionTaxConfig(BaseSettings):
    """Configuration settings for the congestion tax calculator."""

    # Tariff files
    prices_file: Path = Field(
        default=DEFAULT_PRICES_FILE, alias="CONGESTION_PRICES_FILE"
    )
    rules_file: Path = Field(default=DEFAULT_RULES_FILE, alias="CONGESTION_RULES_FILE")

    # Output
    currency_symbol: str = Field(default="kr", alias="CURRENCY_SYMBOL")

    # Application Configuration
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("currency_symbol")
    @classmethod
    def validate_currency_symbol(cls, v):
        """Ensure the currency symbol is not blank."""
        if not v.strip():
            raise ValueError("Currency symbol cannot be empty")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.strip().upper()
        if level not in LoggingConfig.VALID_LEVELS:
            raise ValueError(
                f"Log level must be one of: {', '.join(LoggingConfig.VALID_LEVELS)}"
            )
        return level

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Only development, testing and production are recognised."""
        environment = v.strip().lower()
        if environment not in ENVIRONMENTS:
            raise ValueError(f"Environment must be one of: {', '.join(ENVIRONMENTS)}")
        return environment


def load_config(env_file: Optional[str] = None) -> CongestionTaxConfig:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return CongestionTaxConfig()


# Global configuration instance
_config: Optional[CongestionTaxConfig] = None


def get_config() -> CongestionTaxConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> CongestionTaxConfig:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
