"""Database layer for moneylog application."""

from moneylog.database.base import (
    AccountRepository,
    CategoryRepository,
    Database,
    TransactionRepository,
)
from moneylog.database.factories import create_memory_database, create_sqlite_database

__all__ = [
    "AccountRepository",
    "CategoryRepository",
    "Database",
    "TransactionRepository",
    "create_memory_database",
    "create_sqlite_database",
]
