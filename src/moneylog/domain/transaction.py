"""Transaction domain service."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from moneylog.database.base import Database
from moneylog.domain.entities import (
    MAX_TRANSACTION_AMOUNT,
    Period,
    Transaction,
    TransactionType,
    new_id,
    to_cents,
)
from moneylog.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_applicable,
    category_not_found,
    invalid_amount,
    transaction_not_found,
)
from moneylog.domain.events import (
    TRANSACTION_ADDED,
    TRANSACTION_DELETED,
    TRANSACTIONS_CHANGED,
    EventBus,
)

logger = logging.getLogger(__name__)

RECENT_TRANSACTIONS_LIMIT = 5


class TransactionService:
    """Service for managing transactions.

    Adding or deleting a transaction also moves the owning account's
    balance by the transaction's signed amount.
    """

    def __init__(self, db: Database, event_bus: Optional[EventBus] = None):
        """Initialize transaction service.

        Args:
            db: Database instance
            event_bus: Optional bus notified after every change
        """
        self.db = db
        self.event_bus = event_bus

    def _publish(self, name: str, transaction: Optional[Transaction]) -> None:
        if self.event_bus is None:
            return
        payload = {}
        if transaction is not None:
            payload = {
                "id": transaction.id,
                "amount": transaction.amount,
                "type": transaction.type,
                "account_id": transaction.account_id,
                "category_id": transaction.category_id,
            }
        self.event_bus.publish(name, payload)
        self.event_bus.publish(TRANSACTIONS_CHANGED, payload)

    def _build_transaction(
        self,
        amount: Decimal,
        transaction_type: TransactionType,
        category_id: str,
        account_id: str,
        date: Optional[datetime],
        note: str,
    ) -> Transaction:
        if amount is None or Decimal(amount) <= 0:
            raise ValidationError(invalid_amount())
        # Balances move by the stored amount, which is rounded to cents.
        if to_cents(min(Decimal(amount), MAX_TRANSACTION_AMOUNT)) == 0:
            raise ValidationError(invalid_amount())

        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        if not category.applies_to(transaction_type):
            raise ValidationError(category_not_applicable(category.name, transaction_type.value))

        return Transaction(
            id=new_id(),
            amount=Decimal(amount),
            type=transaction_type,
            category_id=category_id,
            account_id=account_id,
            date=date if date is not None else datetime.now(),
            note=note.strip(),
        )

    def add_transaction(
        self,
        amount: Decimal,
        transaction_type: TransactionType,
        category_id: str,
        account_id: str,
        date: Optional[datetime] = None,
        note: str = "",
    ) -> Transaction:
        """Create a transaction and apply it to the account balance.

        Args:
            amount: Transaction amount (positive)
            transaction_type: Income or expense
            category_id: Category ID
            account_id: Account ID
            date: When the transaction happened (defaults to now)
            note: Optional note

        Returns:
            Created transaction

        Raises:
            ValidationError: If the amount is not positive or the category
                does not apply to the transaction type
            NotFoundError: If the account or category doesn't exist
        """
        transaction = self._build_transaction(
            amount, transaction_type, category_id, account_id, date, note
        )
        self.db.add_transaction(transaction)
        self.db.update_balance(account_id, transaction.signed_amount)
        logger.info(
            "Added %s of %s to account %s", transaction.type.value, transaction.amount, account_id
        )
        self._publish(TRANSACTION_ADDED, transaction)
        return transaction

    def add_batch(self, entries: Iterable[dict]) -> list[Transaction]:
        """Create several transactions at once.

        Every entry is validated before anything is stored.

        Args:
            entries: Dicts with the keyword arguments of add_transaction

        Returns:
            Created transactions, in input order
        """
        transactions = [
            self._build_transaction(
                entry["amount"],
                entry["transaction_type"],
                entry["category_id"],
                entry["account_id"],
                entry.get("date"),
                entry.get("note", ""),
            )
            for entry in entries
        ]
        if not transactions:
            return []

        self.db.add_transactions(transactions)
        deltas: dict[str, Decimal] = {}
        for txn in transactions:
            deltas[txn.account_id] = deltas.get(txn.account_id, Decimal("0")) + txn.signed_amount
        for account_id, delta in deltas.items():
            self.db.update_balance(account_id, delta)

        logger.info("Added batch of %d transactions", len(transactions))
        self._publish(TRANSACTION_ADDED, None)
        return transactions

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def delete_transaction(self, transaction_id: str) -> Transaction:
        """Delete a transaction and reverse its balance effect.

        Args:
            transaction_id: Transaction ID to delete

        Returns:
            The deleted transaction

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        self.db.update_balance(transaction.account_id, -transaction.signed_amount)
        self.db.delete_transaction(transaction_id)
        logger.info("Deleted transaction %s", transaction_id)
        self._publish(TRANSACTION_DELETED, transaction)
        return transaction

    def delete_all(self) -> None:
        """Delete every transaction without touching account balances."""
        self.db.delete_all_transactions()
        logger.warning("Deleted all transactions")
        self._publish(TRANSACTION_DELETED, None)

    def list_transactions(
        self,
        period: Optional[Period] = None,
        account_id: Optional[str] = None,
        category_id: Optional[str] = None,
        transaction_type: Optional[TransactionType] = None,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions with filters, most recent first.

        Args:
            period: Optional period filter
            account_id: Optional account ID filter
            category_id: Optional category ID filter
            transaction_type: Optional income/expense filter
            limit: Optional maximum number of results

        Returns:
            List of transaction entities
        """
        if transaction_type is None:
            return self.db.list_transactions(
                period=period, account_id=account_id, category_id=category_id, limit=limit
            )

        transactions = [
            txn
            for txn in self.db.list_transactions(
                period=period, account_id=account_id, category_id=category_id
            )
            if txn.type is transaction_type
        ]
        return transactions[:limit] if limit is not None else transactions

    def recent_transactions(self, limit: int = RECENT_TRANSACTIONS_LIMIT) -> list[Transaction]:
        return self.db.list_transactions(limit=limit)

    def count_transactions(self) -> int:
        return self.db.count_transactions()
