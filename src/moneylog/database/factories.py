"""Database factory functions for creating database instances."""

from pathlib import Path
from typing import Optional

from moneylog.database.sqlalchemy_db import SQLAlchemyDatabase
from moneylog.settings import Settings


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks MONEYLOG_DB_PATH
            environment variable, then defaults to ~/.moneylog/moneylog.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = Settings.from_env().database_path

    Path(database_path).expanduser().parent.mkdir(parents=True, exist_ok=True)
    database_url = f"sqlite:///{Path(database_path).expanduser()}"
    return SQLAlchemyDatabase(database_url)


def create_memory_database() -> SQLAlchemyDatabase:
    """Create a throwaway in-memory SQLite database."""
    return SQLAlchemyDatabase("sqlite://")
