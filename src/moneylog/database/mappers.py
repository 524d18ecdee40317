"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay free
of persistence concerns.
"""

from decimal import Decimal

from moneylog.domain import entities as domain
from moneylog.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Transaction as ORMTransaction,
)


def encode_types(types: frozenset[domain.TransactionType]) -> str:
    """Serialize a set of transaction types for storage, in a stable order."""
    return ",".join(sorted(t.value for t in types))


def decode_types(raw: str) -> frozenset[domain.TransactionType]:
    return frozenset(domain.TransactionType(part) for part in raw.split(",") if part)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
        balance=Decimal(orm_account.balance),
        currency_code=orm_account.currency_code,
        color_hex=orm_account.color_hex,
        sort_order=orm_account.sort_order,
        is_default=orm_account.is_default,
        include_in_total=orm_account.include_in_total,
    )


def account_to_orm(account: domain.Account, orm_account: ORMAccount | None = None) -> ORMAccount:
    """Copy a domain Account onto a (new or existing) ORM row."""
    if orm_account is None:
        orm_account = ORMAccount(id=account.id)
    orm_account.name = account.name
    orm_account.type = account.type.value
    orm_account.balance = account.balance
    orm_account.currency_code = account.currency_code
    orm_account.color_hex = account.color_hex
    orm_account.sort_order = account.sort_order
    orm_account.is_default = account.is_default
    orm_account.include_in_total = account.include_in_total
    return orm_account


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        icon=orm_category.icon,
        color_hex=orm_category.color_hex,
        applicable_types=decode_types(orm_category.applicable_types),
        sort_order=orm_category.sort_order,
        is_system=orm_category.is_system,
    )


def category_to_orm(category: domain.Category, orm_category: ORMCategory | None = None) -> ORMCategory:
    """Copy a domain Category onto a (new or existing) ORM row."""
    if orm_category is None:
        orm_category = ORMCategory(id=category.id, is_system=category.is_system)
    orm_category.name = category.name
    orm_category.icon = category.icon
    orm_category.color_hex = category.color_hex
    orm_category.applicable_types = encode_types(category.applicable_types)
    orm_category.sort_order = category.sort_order
    return orm_category


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        amount=Decimal(orm_transaction.amount),
        type=domain.TransactionType(orm_transaction.type),
        category_id=orm_transaction.category_id,
        account_id=orm_transaction.account_id,
        date=orm_transaction.date,
        note=orm_transaction.note or "",
        created_at=orm_transaction.created_at,
    )


def transaction_to_orm(
    transaction: domain.Transaction, orm_transaction: ORMTransaction | None = None
) -> ORMTransaction:
    """Copy a domain Transaction onto a (new or existing) ORM row."""
    if orm_transaction is None:
        orm_transaction = ORMTransaction(id=transaction.id, created_at=transaction.created_at)
    orm_transaction.amount = transaction.amount
    orm_transaction.type = transaction.type.value
    orm_transaction.category_id = transaction.category_id
    orm_transaction.account_id = transaction.account_id
    orm_transaction.date = transaction.date
    orm_transaction.note = transaction.note
    return orm_transaction
