"""Tests for database mappers."""

from datetime import datetime
from decimal import Decimal

from moneylog.database.mappers import (
    account_to_domain,
    account_to_orm,
    category_to_domain,
    category_to_orm,
    decode_types,
    encode_types,
    transaction_to_domain,
)
from moneylog.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Transaction as ORMTransaction,
)
from moneylog.domain.entities import (
    Account,
    AccountType,
    Category,
    Transaction,
    TransactionType,
)


def test_encode_types_is_stable():
    both = frozenset({TransactionType.INCOME, TransactionType.EXPENSE})

    assert encode_types(both) == "expense,income"
    assert decode_types("expense,income") == both
    assert decode_types("") == frozenset()


class TestAccountMapper:
    def test_account_to_domain(self):
        orm_account = ORMAccount(
            id="a1",
            name="Wallet",
            type="cash",
            balance=Decimal("12.30"),
            currency_code="EUR",
            color_hex="00FF00",
            sort_order=2,
            is_default=True,
            include_in_total=False,
        )

        account = account_to_domain(orm_account)

        assert isinstance(account, Account)
        assert account.type is AccountType.CASH
        assert account.balance == Decimal("12.30")
        assert account.currency_code == "EUR"
        assert account.is_default is True
        assert account.include_in_total is False

    def test_account_to_orm_updates_existing_row(self):
        row = ORMAccount(id="a1", name="Old", type="checking", balance=Decimal("5"))
        account = Account(id="a1", name="New", type=AccountType.SAVINGS, balance=Decimal("7"))

        result = account_to_orm(account, row)

        assert result is row
        assert row.name == "New"
        assert row.type == "savings"
        assert row.balance == Decimal("7")


class TestCategoryMapper:
    def test_category_round_trip_fields(self):
        category = Category(
            id="c1",
            name="Other",
            icon="ellipsis",
            color_hex="95A5A6",
            applicable_types=frozenset({TransactionType.INCOME, TransactionType.EXPENSE}),
            sort_order=99,
            is_system=True,
        )

        row = category_to_orm(category)

        assert isinstance(row, ORMCategory)
        assert row.applicable_types == "expense,income"
        assert category_to_domain(row) == category


class TestTransactionMapper:
    def test_transaction_to_domain(self):
        created = datetime(2024, 3, 15, 12, 5)
        orm_transaction = ORMTransaction(
            id="t1",
            amount=Decimal("9.99"),
            type="expense",
            category_id="c1",
            account_id="a1",
            date=datetime(2024, 3, 15, 12, 0),
            note=None,
            created_at=created,
        )

        txn = transaction_to_domain(orm_transaction)

        assert isinstance(txn, Transaction)
        assert txn.type is TransactionType.EXPENSE
        assert txn.amount == Decimal("9.99")
        assert txn.note == ""
        assert txn.created_at == created
