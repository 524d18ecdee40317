"""Abstract repository interfaces."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from moneylog.domain.entities import (
    Account,
    Category,
    Period,
    Transaction,
    TransactionType,
)


class AccountRepository(ABC):
    """Account storage operations."""

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts, ordered by sort order."""
        pass

    @abstractmethod
    def get_account(self, account_id: str) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_default_account(self) -> Optional[Account]:
        """Get the account flagged as default, if any."""
        pass

    @abstractmethod
    def count_accounts(self) -> int:
        pass

    @abstractmethod
    def total_balance(self) -> Decimal:
        """Sum of balances of accounts included in totals."""
        pass

    @abstractmethod
    def add_account(self, account: Account) -> None:
        """Insert an account. A default account clears any other default flag."""
        pass

    @abstractmethod
    def update_account(self, account: Account) -> None:
        """Replace stored fields of an existing account."""
        pass

    @abstractmethod
    def update_balance(self, account_id: str, delta: Decimal) -> None:
        """Add a signed delta to the stored balance of an account."""
        pass

    @abstractmethod
    def delete_account(self, account_id: str) -> None:
        pass


class CategoryRepository(ABC):
    """Category storage operations."""

    @abstractmethod
    def list_categories(self, kind: Optional[TransactionType] = None) -> list[Category]:
        """List categories ordered by sort order, optionally only those applicable to kind."""
        pass

    @abstractmethod
    def get_category(self, category_id: str) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        pass

    @abstractmethod
    def count_categories(self) -> int:
        pass

    @abstractmethod
    def add_category(self, category: Category) -> None:
        pass

    @abstractmethod
    def update_category(self, category: Category) -> None:
        pass

    @abstractmethod
    def delete_category(self, category_id: str) -> None:
        pass


class TransactionRepository(ABC):
    """Transaction storage operations."""

    @abstractmethod
    def list_transactions(
        self,
        period: Optional[Period] = None,
        account_id: Optional[str] = None,
        category_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters, most recent first.

        Args:
            period: Optional half-open date interval
            account_id: Optional account ID filter
            category_id: Optional category ID filter
            limit: Optional maximum number of rows
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def transaction_exists(self, transaction_id: str) -> bool:
        pass

    @abstractmethod
    def count_transactions(
        self, account_id: Optional[str] = None, category_id: Optional[str] = None
    ) -> int:
        pass

    @abstractmethod
    def add_transaction(self, transaction: Transaction) -> None:
        pass

    @abstractmethod
    def add_transactions(self, transactions: list[Transaction]) -> None:
        """Insert several transactions in one commit."""
        pass

    @abstractmethod
    def update_transaction(self, transaction: Transaction) -> None:
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> None:
        pass

    @abstractmethod
    def delete_all_transactions(self) -> None:
        pass


class Database(AccountRepository, CategoryRepository, TransactionRepository):
    """A store providing all three repositories."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass
