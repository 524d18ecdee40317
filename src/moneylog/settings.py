"""Settings sourced from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_CURRENCY = "USD"
DEFAULT_LOG_LEVEL = "WARNING"


def default_database_path() -> str:
    """Return ~/.moneylog/moneylog.db."""
    return str(Path.home() / ".moneylog" / "moneylog.db")


@dataclass(frozen=True)
class Settings:
    """Application settings.

    Attributes:
        database_path: SQLite database file location.
        currency_code: ISO 4217 code used when formatting amounts.
        log_level: Name of the logging level for the moneylog logger.
    """

    database_path: str
    currency_code: str = DEFAULT_CURRENCY
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from MONEYLOG_* environment variables."""
        database_path = os.environ.get("MONEYLOG_DB_PATH") or default_database_path()
        currency_code = os.environ.get("MONEYLOG_CURRENCY", DEFAULT_CURRENCY).strip().upper()
        log_level = os.environ.get("MONEYLOG_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
        return cls(
            database_path=database_path,
            currency_code=currency_code or DEFAULT_CURRENCY,
            log_level=log_level or DEFAULT_LOG_LEVEL,
        )
