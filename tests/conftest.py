"""Shared pytest fixtures for moneylog tests."""

import os
import tempfile
from datetime import datetime
from decimal import Decimal

import pytest

from moneylog.database.factories import create_sqlite_database
from moneylog.domain.account import AccountService
from moneylog.domain.category import CategoryService
from moneylog.domain.entities import Transaction, TransactionType, new_id
from moneylog.domain.events import EventBus
from moneylog.domain.statistics import StatisticsService
from moneylog.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db, event_bus):
    """Create a TransactionService publishing to the test event bus."""
    return TransactionService(temp_db, event_bus=event_bus)


@pytest.fixture
def statistics_service(temp_db):
    return StatisticsService(temp_db)


@pytest.fixture
def sample_account(account_service):
    """Create a default account with an opening balance of 100."""
    return account_service.create_account(
        name="Test Account", balance=Decimal("100.00"), is_default=True
    )


@pytest.fixture
def sample_categories(category_service):
    """Seed the default categories and return them keyed by name."""
    category_service.seed_defaults_if_needed()
    return {cat.name: cat for cat in category_service.list_categories()}


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


def make_transaction(
    amount,
    kind=TransactionType.EXPENSE,
    when=datetime(2024, 3, 15, 12, 0),
    category_id="food",
    account_id="acc",
    note="",
) -> Transaction:
    """Build an in-memory transaction for pure aggregation tests."""
    return Transaction(
        id=new_id(),
        amount=Decimal(str(amount)),
        type=kind,
        category_id=category_id,
        account_id=account_id,
        date=when,
        note=note,
    )


@pytest.fixture
def make_txn():
    """Factory fixture for in-memory transactions."""
    return make_transaction
