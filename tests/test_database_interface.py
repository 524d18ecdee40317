"""Tests for the SQLAlchemy repositories returning domain models."""

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal

import pytest

from moneylog.database import Database, create_memory_database
from moneylog.domain import entities
from moneylog.domain.entities import AccountType, Period, TransactionType, new_id
from moneylog.domain.errors import NotFoundError


@pytest.fixture
def memory_db():
    db = create_memory_database()
    db.connect()
    db.initialize_schema()
    yield db
    db.disconnect()


def _account(name="Checking", **kwargs):
    return entities.Account(id=new_id(), name=name, type=AccountType.CHECKING, **kwargs)


def _category(name="Food", kinds=(TransactionType.EXPENSE,)):
    return entities.Category(
        id=new_id(), name=name, icon="tag.fill", color_hex="808080", applicable_types=frozenset(kinds)
    )


def _transaction(account, category, amount="10", when=datetime(2024, 3, 15, 12, 0)):
    return entities.Transaction(
        id=new_id(),
        amount=Decimal(amount),
        type=TransactionType.EXPENSE,
        category_id=category.id,
        account_id=account.id,
        date=when,
    )


class TestDatabaseInterface:
    def test_memory_database_is_a_database(self, memory_db):
        assert isinstance(memory_db, Database)

    def test_account_round_trip(self, memory_db):
        account = _account(balance=Decimal("10.50"), is_default=True)
        memory_db.add_account(account)

        stored = memory_db.get_account(account.id)

        assert isinstance(stored, entities.Account)
        assert stored == account
        assert memory_db.get_default_account().id == account.id
        assert memory_db.count_accounts() == 1

    def test_update_balance(self, memory_db):
        account = _account(balance=Decimal("10"))
        memory_db.add_account(account)

        memory_db.update_balance(account.id, Decimal("-2.25"))

        assert memory_db.get_account(account.id).balance == Decimal("7.75")

    def test_update_balance_of_missing_account(self, memory_db):
        with pytest.raises(NotFoundError):
            memory_db.update_balance("missing", Decimal("1"))

    def test_total_balance_empty(self, memory_db):
        assert memory_db.total_balance() == Decimal("0")

    def test_accounts_are_ordered(self, memory_db):
        memory_db.add_account(_account("B", sort_order=1))
        memory_db.add_account(_account("A", sort_order=1))
        memory_db.add_account(_account("C", sort_order=0))

        assert [acc.name for acc in memory_db.list_accounts()] == ["C", "A", "B"]

    def test_categories_by_kind(self, memory_db):
        memory_db.add_category(_category("Food"))
        memory_db.add_category(_category("Salary", (TransactionType.INCOME,)))

        names = [cat.name for cat in memory_db.list_categories(TransactionType.INCOME)]

        assert names == ["Salary"]
        assert memory_db.get_category_by_name("SALARY").name == "Salary"

    def test_transactions_filtering(self, memory_db):
        account = _account()
        category = _category()
        memory_db.add_account(account)
        memory_db.add_category(category)
        inside = _transaction(account, category, "5", datetime(2024, 3, 31, 23, 0))
        outside = _transaction(account, category, "7", datetime(2024, 4, 1, 0, 0))
        memory_db.add_transactions([inside, outside])

        march = Period.for_dates(date(2024, 3, 1), date(2024, 3, 31))

        assert [txn.id for txn in memory_db.list_transactions(period=march)] == [inside.id]
        assert [txn.id for txn in memory_db.list_transactions(limit=1)] == [outside.id]
        assert memory_db.count_transactions(category_id=category.id) == 2
        assert memory_db.transaction_exists(inside.id)

    def test_update_and_delete_transaction(self, memory_db):
        account = _account()
        category = _category()
        memory_db.add_account(account)
        memory_db.add_category(category)
        txn = _transaction(account, category)
        memory_db.add_transaction(txn)

        memory_db.update_transaction(replace(txn, note="edited"))
        assert memory_db.get_transaction(txn.id).note == "edited"

        memory_db.delete_transaction(txn.id)
        assert memory_db.get_transaction(txn.id) is None
        with pytest.raises(NotFoundError):
            memory_db.delete_transaction(txn.id)

    def test_delete_all_transactions(self, memory_db):
        account = _account()
        category = _category()
        memory_db.add_account(account)
        memory_db.add_category(category)
        memory_db.add_transactions([_transaction(account, category), _transaction(account, category)])

        memory_db.delete_all_transactions()

        assert memory_db.count_transactions() == 0
