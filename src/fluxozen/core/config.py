#!/usr/bin/env python3
"""
Configuration Management for FluxoZen

Handles environment-based configuration with defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
import tempfile
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .money import Money

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class LedgerConfig:
    """Ledger storage configuration."""

    store_dir: Path


@dataclass
class AnomalyConfig:
    """Thresholds and account lists for the anomaly rules."""

    corporate_account_ids: list = field(default_factory=lambda: ["acc_1", "acc_2"])
    outlier_high: Money = field(default_factory=lambda: Money.from_decimal(10000))
    outlier_medium: Money = field(default_factory=lambda: Money.from_decimal(3000))
    catch_all_category: str = "Other"


@dataclass
class ImportConfig:
    """Statement import configuration."""

    category_name: str = "CSV Import"


@dataclass
class Config:
    """
    Main configuration class for FluxoZen.

    Loads configuration from environment variables with defaults
    and validation for each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path
    output_dir: Path

    # Component configurations
    ledger: LedgerConfig
    anomaly: AnomalyConfig
    importing: ImportConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"
    config_errors: list = field(default_factory=list)

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("FLUXOZEN_ENV", "development"))
        errors: list[str] = []

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_fluxozen"
            base_dir = Path(os.getenv("FLUXOZEN_DATA_DIR", str(default_test_dir)))
        else:
            base_dir = Path(os.getenv("FLUXOZEN_DATA_DIR", "./data")).expanduser().resolve()

        data_dir = base_dir
        output_dir = data_dir / "reports"

        for directory in [data_dir, output_dir]:
            directory.mkdir(parents=True, exist_ok=True)

        ledger = LedgerConfig(store_dir=data_dir / "ledger")

        anomaly = AnomalyConfig(
            corporate_account_ids=_parse_list(os.getenv("ANOMALY_CORPORATE_ACCOUNTS", "acc_1,acc_2")),
            outlier_high=_parse_money("ANOMALY_OUTLIER_HIGH", "10000", errors),
            outlier_medium=_parse_money("ANOMALY_OUTLIER_MEDIUM", "3000", errors),
            catch_all_category=os.getenv("ANOMALY_CATCH_ALL_CATEGORY", "Other"),
        )

        importing = ImportConfig(
            category_name=os.getenv("IMPORT_CATEGORY_NAME", "CSV Import"),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            output_dir=output_dir,
            ledger=ledger,
            anomaly=anomaly,
            importing=importing,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            config_errors=errors,
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = list(self.config_errors)

        if not self.data_dir.exists():
            errors.append(f"data_dir does not exist: {self.data_dir}")

        if self.anomaly.outlier_medium.to_cents() <= 0:
            errors.append("ANOMALY_OUTLIER_MEDIUM must be positive")
        if self.anomaly.outlier_high < self.anomaly.outlier_medium:
            errors.append("ANOMALY_OUTLIER_HIGH must not be below ANOMALY_OUTLIER_MEDIUM")
        if not self.anomaly.catch_all_category.strip():
            errors.append("ANOMALY_CATCH_ALL_CATEGORY must not be empty")
        if not self.importing.category_name.strip():
            errors.append("IMPORT_CATEGORY_NAME must not be empty")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a plain dictionary for display."""
        return {
            "environment": self.environment.value,
            "data_dir": str(self.data_dir),
            "output_dir": str(self.output_dir),
            "ledger": {"store_dir": str(self.ledger.store_dir)},
            "anomaly": {
                "corporate_account_ids": list(self.anomaly.corporate_account_ids),
                "outlier_high": str(self.anomaly.outlier_high),
                "outlier_medium": str(self.anomaly.outlier_medium),
                "catch_all_category": self.anomaly.catch_all_category,
            },
            "importing": {"category_name": self.importing.category_name},
            "debug": self.debug,
            "log_level": self.log_level,
        }


def _parse_list(value: str, delimiter: str = ",") -> list:
    """Parse comma-separated string into list, handling empty values."""
    if not value:
        return []
    return [item.strip() for item in value.split(delimiter) if item.strip()]


def _parse_money(variable: str, default: str, errors: list[str]) -> Money:
    """Read a plain decimal amount from the environment, recording bad values."""
    raw = os.getenv(variable, default)
    try:
        return Money.from_decimal(Decimal(raw.strip()))
    except (InvalidOperation, ValueError):
        errors.append(f"{variable} must be a decimal amount, got {raw!r}")
        return Money.from_decimal(Decimal(default))


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def get_data_dir() -> Path:
    """Get the data directory path."""
    return get_config().data_dir


def is_development() -> bool:
    """Check if running in development environment."""
    return get_config().environment == Environment.DEVELOPMENT


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().environment == Environment.PRODUCTION
