"""Account domain service."""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Optional

from moneylog.database.base import Database
from moneylog.domain.entities import Account, AccountType, new_id, to_cents
from moneylog.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_delete_blocked,
    account_not_found,
)

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNT_NAME = "Main Account"


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_name_available(self, name: str, exclude_id: Optional[str] = None) -> None:
        for acc in self.db.list_accounts():
            if acc.id != exclude_id and acc.name == name:
                raise ConflictError(f"Account with name '{name}' already exists")

    def create_account(
        self,
        name: str,
        account_type: AccountType = AccountType.CHECKING,
        balance: Decimal = Decimal("0"),
        currency_code: str = "USD",
        color_hex: str = "007AFF",
        is_default: bool = False,
        include_in_total: bool = True,
        sort_order: Optional[int] = None,
    ) -> Account:
        """Create a new account.

        Args:
            name: Account name
            account_type: Kind of account
            balance: Opening balance
            currency_code: ISO 4217 currency code
            color_hex: Display color
            is_default: Make this the default account (clears any other default)
            include_in_total: Whether the balance counts towards the total balance
            sort_order: Display order (defaults to after the existing accounts)

        Returns:
            Created account

        Raises:
            ValidationError: If the name is empty
            ConflictError: If account name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name cannot be empty")
        self._check_name_available(name)

        if sort_order is None:
            sort_order = self.db.count_accounts()

        account = Account(
            id=new_id(),
            name=name,
            type=account_type,
            balance=to_cents(balance),
            currency_code=currency_code.upper(),
            color_hex=color_hex,
            sort_order=sort_order,
            is_default=is_default,
            include_in_total=include_in_total,
        )
        self.db.add_account(account)
        logger.info("Created account %s (%s)", account.name, account.id)
        return account

    def get_account(self, account_id: str) -> Optional[Account]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: str) -> Account:
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self) -> list[Account]:
        """List all accounts, in display order."""
        return self.db.list_accounts()

    def get_default_account(self) -> Optional[Account]:
        """Return the default account, falling back to the first account."""
        account = self.db.get_default_account()
        if account is not None:
            return account
        accounts = self.db.list_accounts()
        return accounts[0] if accounts else None

    def set_default_account(self, account_id: str) -> None:
        """Make an account the default; any previous default is cleared."""
        account = self.require_account(account_id)
        self.db.update_account(replace(account, is_default=True))
        logger.info("Default account set to %s", account.name)

    def update_account(self, account: Account) -> None:
        """Persist edited account fields.

        The balance is owned by the transaction write path and is never
        overwritten here.

        Raises:
            NotFoundError: If the account does not exist
            ConflictError: If the new name is taken
        """
        stored = self.require_account(account.id)
        self._check_name_available(account.name, exclude_id=account.id)
        self.db.update_account(replace(account, balance=stored.balance))

    def rename_account(self, account_id: str, name: str) -> None:
        """Rename an account.

        Raises:
            NotFoundError: If account not found
            ConflictError: If name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name cannot be empty")
        account = self.require_account(account_id)
        self._check_name_available(name, exclude_id=account_id)
        self.db.update_account(replace(account, name=name))

    def delete_account(self, account_id: str) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If account not found
            DependencyError: If the account still has transactions
        """
        self.require_account(account_id)

        transaction_count = self.db.count_transactions(account_id=account_id)
        if transaction_count > 0:
            raise DependencyError(account_delete_blocked(account_id, transaction_count))

        self.db.delete_account(account_id)
        logger.info("Deleted account %s", account_id)

    def total_balance(self) -> Decimal:
        """Sum of balances of the accounts included in totals."""
        return self.db.total_balance()

    def create_default_if_needed(self) -> Optional[Account]:
        """Create the default account when no account exists.

        Returns:
            The created account, or None if accounts already exist
        """
        if self.db.count_accounts() > 0:
            return None
        return self.create_account(
            name=DEFAULT_ACCOUNT_NAME,
            account_type=AccountType.CHECKING,
            is_default=True,
        )
