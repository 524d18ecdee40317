"""SQLAlchemy models for the moneylog database."""

from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Financial account model."""

    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True)
    name = Column(String, unique=True, nullable=False)
    type = Column(String, nullable=False)
    balance = Column(Numeric(14, 2), default=0, nullable=False)
    currency_code = Column(String(3), default="USD", nullable=False)
    color_hex = Column(String(6), default="007AFF", nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)
    include_in_total = Column(Boolean, default=True, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="account")


class Category(Base):
    """Category model."""

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True)
    name = Column(String, nullable=False)
    icon = Column(String, nullable=False)
    color_hex = Column(String(6), nullable=False)
    # Comma separated transaction types, e.g. "expense,income"
    applicable_types = Column(String, nullable=False, default="expense")
    sort_order = Column(Integer, default=0, nullable=False)
    is_system = Column(Boolean, default=False, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="category")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True)
    amount = Column(Numeric(14, 2), nullable=False)
    type = Column(String, nullable=False)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=False)
    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    note = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions")
    category = relationship("Category", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
