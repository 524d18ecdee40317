"""Generic SQLAlchemy database implementation."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from moneylog.database.base import Database
from moneylog.database.models import (
    Account,
    Category,
    Transaction,
    create_session_factory,
)
from moneylog.database.mappers import (
    account_to_domain,
    account_to_orm,
    category_to_domain,
    category_to_orm,
    transaction_to_domain,
    transaction_to_orm,
)
from moneylog.domain.entities import (
    Account as DomainAccount,
    Category as DomainCategory,
    Period,
    Transaction as DomainTransaction,
    TransactionType,
)
from moneylog.domain.errors import (
    NotFoundError,
    account_not_found,
    category_not_found,
    transaction_not_found,
)


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of the repository interfaces."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def _require(self, model, row_id: str, message: str):
        row = self._get_session().get(model, row_id)
        if row is None:
            raise NotFoundError(message)
        return row

    # Account operations
    def list_accounts(self) -> list[DomainAccount]:
        session = self._get_session()
        accounts = session.query(Account).order_by(Account.sort_order, Account.name).all()
        return [account_to_domain(acc) for acc in accounts]

    def get_account(self, account_id: str) -> Optional[DomainAccount]:
        account = self._get_session().get(Account, account_id)
        if account is None:
            return None
        return account_to_domain(account)

    def get_default_account(self) -> Optional[DomainAccount]:
        session = self._get_session()
        account = session.query(Account).filter(Account.is_default.is_(True)).first()
        if account is None:
            return None
        return account_to_domain(account)

    def count_accounts(self) -> int:
        return self._get_session().query(Account).count()

    def total_balance(self) -> Decimal:
        session = self._get_session()
        total = (
            session.query(func.coalesce(func.sum(Account.balance), 0))
            .filter(Account.include_in_total.is_(True))
            .scalar()
        )
        return Decimal(str(total)).quantize(Decimal("0.01"))

    def _clear_default_flags(self, keep_id: str) -> None:
        session = self._get_session()
        session.query(Account).filter(Account.id != keep_id, Account.is_default.is_(True)).update(
            {Account.is_default: False}, synchronize_session="fetch"
        )

    def add_account(self, account: DomainAccount) -> None:
        session = self._get_session()
        if account.is_default:
            self._clear_default_flags(account.id)
        session.add(account_to_orm(account))
        session.commit()

    def update_account(self, account: DomainAccount) -> None:
        session = self._get_session()
        row = self._require(Account, account.id, account_not_found(account.id))
        if account.is_default:
            self._clear_default_flags(account.id)
        account_to_orm(account, row)
        session.commit()

    def update_balance(self, account_id: str, delta: Decimal) -> None:
        session = self._get_session()
        row = self._require(Account, account_id, account_not_found(account_id))
        row.balance = Decimal(row.balance) + delta
        session.commit()

    def delete_account(self, account_id: str) -> None:
        session = self._get_session()
        row = self._require(Account, account_id, account_not_found(account_id))
        session.delete(row)
        session.commit()

    # Category operations
    def list_categories(self, kind: Optional[TransactionType] = None) -> list[DomainCategory]:
        session = self._get_session()
        categories = session.query(Category).order_by(Category.sort_order, Category.name).all()
        result = [category_to_domain(cat) for cat in categories]
        if kind is not None:
            result = [cat for cat in result if cat.applies_to(kind)]
        return result

    def get_category(self, category_id: str) -> Optional[DomainCategory]:
        cat = self._get_session().get(Category, category_id)
        if cat is None:
            return None
        return category_to_domain(cat)

    def get_category_by_name(self, name: str) -> Optional[DomainCategory]:
        session = self._get_session()
        cat = session.query(Category).filter(func.lower(Category.name) == name.strip().lower()).first()
        if cat is None:
            return None
        return category_to_domain(cat)

    def count_categories(self) -> int:
        return self._get_session().query(Category).count()

    def add_category(self, category: DomainCategory) -> None:
        session = self._get_session()
        session.add(category_to_orm(category))
        session.commit()

    def update_category(self, category: DomainCategory) -> None:
        session = self._get_session()
        row = self._require(Category, category.id, category_not_found(category.id))
        category_to_orm(category, row)
        session.commit()

    def delete_category(self, category_id: str) -> None:
        session = self._get_session()
        row = self._require(Category, category_id, category_not_found(category_id))
        session.delete(row)
        session.commit()

    # Transaction operations
    def list_transactions(
        self,
        period: Optional[Period] = None,
        account_id: Optional[str] = None,
        category_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[DomainTransaction]:
        session = self._get_session()
        query = session.query(Transaction)

        if period is not None:
            query = query.filter(Transaction.date >= period.start, Transaction.date < period.end)
        if account_id is not None:
            query = query.filter(Transaction.account_id == account_id)
        if category_id is not None:
            query = query.filter(Transaction.category_id == category_id)

        query = query.order_by(Transaction.date.desc(), Transaction.created_at.desc())
        if limit is not None:
            query = query.limit(limit)
        return [transaction_to_domain(txn) for txn in query.all()]

    def get_transaction(self, transaction_id: str) -> Optional[DomainTransaction]:
        txn = self._get_session().get(Transaction, transaction_id)
        if txn is None:
            return None
        return transaction_to_domain(txn)

    def transaction_exists(self, transaction_id: str) -> bool:
        session = self._get_session()
        return session.query(Transaction).filter(Transaction.id == transaction_id).count() > 0

    def count_transactions(
        self, account_id: Optional[str] = None, category_id: Optional[str] = None
    ) -> int:
        query = self._get_session().query(Transaction)
        if account_id is not None:
            query = query.filter(Transaction.account_id == account_id)
        if category_id is not None:
            query = query.filter(Transaction.category_id == category_id)
        return query.count()

    def add_transaction(self, transaction: DomainTransaction) -> None:
        session = self._get_session()
        session.add(transaction_to_orm(transaction))
        session.commit()

    def add_transactions(self, transactions: list[DomainTransaction]) -> None:
        session = self._get_session()
        session.add_all([transaction_to_orm(txn) for txn in transactions])
        session.commit()

    def update_transaction(self, transaction: DomainTransaction) -> None:
        session = self._get_session()
        row = self._require(Transaction, transaction.id, transaction_not_found(transaction.id))
        transaction_to_orm(transaction, row)
        session.commit()

    def delete_transaction(self, transaction_id: str) -> None:
        session = self._get_session()
        row = self._require(Transaction, transaction_id, transaction_not_found(transaction_id))
        session.delete(row)
        session.commit()

    def delete_all_transactions(self) -> None:
        session = self._get_session()
        session.query(Transaction).delete()
        session.commit()
