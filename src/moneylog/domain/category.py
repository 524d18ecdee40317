"""Category domain service."""

import logging
from typing import Iterable, Optional

from moneylog.database.base import Database
from moneylog.domain.entities import Category, TransactionType, new_id
from moneylog.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    category_delete_blocked,
    category_name_not_found,
    category_not_found,
    system_category_delete_blocked,
)

logger = logging.getLogger(__name__)

EXPENSE = TransactionType.EXPENSE
INCOME = TransactionType.INCOME

# (name, icon, color, applicable types, sort order)
DEFAULT_CATEGORIES = [
    ("Food & Dining", "fork.knife", "FF6B6B", {EXPENSE}, 0),
    ("Transportation", "car.fill", "4ECDC4", {EXPENSE}, 1),
    ("Shopping", "bag.fill", "9B59B6", {EXPENSE}, 2),
    ("Entertainment", "gamecontroller.fill", "F39C12", {EXPENSE}, 3),
    ("Bills & Utilities", "bolt.fill", "3498DB", {EXPENSE}, 4),
    ("Health", "heart.fill", "E74C3C", {EXPENSE}, 5),
    ("Education", "book.fill", "1ABC9C", {EXPENSE}, 6),
    ("Other", "ellipsis.circle.fill", "95A5A6", {EXPENSE, INCOME}, 99),
    ("Salary", "briefcase.fill", "00D09C", {INCOME}, 0),
    ("Freelance", "laptopcomputer", "00B386", {INCOME}, 1),
    ("Investments", "chart.line.uptrend.xyaxis", "2ECC71", {INCOME}, 2),
    ("Gifts", "gift.fill", "E91E63", {INCOME}, 3),
]


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        name: str,
        icon: str = "tag.fill",
        color_hex: str = "808080",
        applicable_types: Iterable[TransactionType] = (TransactionType.EXPENSE,),
        sort_order: Optional[int] = None,
        is_system: bool = False,
    ) -> Category:
        """Create a category.

        Args:
            name: Category name
            icon: Icon token
            color_hex: Display color as hex string
            applicable_types: Transaction kinds the category can be used for
            sort_order: Display order (defaults to after the existing categories)
            is_system: Whether the category is protected from deletion

        Returns:
            Created category

        Raises:
            ValidationError: If the name is empty or no kind is given
            ConflictError: If a category with the same name exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Category name cannot be empty")
        types = frozenset(applicable_types)
        if not types:
            raise ValidationError("Category must apply to income, expense, or both")
        if self.db.get_category_by_name(name) is not None:
            raise ConflictError(f"Category with name '{name}' already exists")

        if sort_order is None:
            sort_order = self.db.count_categories()

        category = Category(
            id=new_id(),
            name=name,
            icon=icon,
            color_hex=color_hex.lstrip("#").upper(),
            applicable_types=types,
            sort_order=sort_order,
            is_system=is_system,
        )
        self.db.add_category(category)
        logger.info("Created category %s (%s)", category.name, category.id)
        return category

    def get_category(self, category_id: str) -> Optional[Category]:
        """Get category by ID.

        Args:
            category_id: Category ID

        Returns:
            Category entity or None if not found
        """
        return self.db.get_category(category_id)

    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name (case-insensitive)."""
        return self.db.get_category_by_name(name)

    def require_category_by_name(self, name: str) -> Category:
        category = self.db.get_category_by_name(name)
        if category is None:
            raise NotFoundError(category_name_not_found(name))
        return category

    def list_categories(self, kind: Optional[TransactionType] = None) -> list[Category]:
        """List categories.

        Args:
            kind: Optional transaction kind; only categories applicable to it are returned

        Returns:
            List of categories in display order
        """
        return self.db.list_categories(kind=kind)

    def update_category(self, category: Category) -> None:
        """Persist edited category fields.

        Raises:
            NotFoundError: If the category does not exist
            ConflictError: If the new name is taken by another category
        """
        if self.db.get_category(category.id) is None:
            raise NotFoundError(category_not_found(category.id))
        existing = self.db.get_category_by_name(category.name)
        if existing is not None and existing.id != category.id:
            raise ConflictError(f"Category with name '{category.name}' already exists")
        if not category.applicable_types:
            raise ValidationError("Category must apply to income, expense, or both")
        self.db.update_category(category)

    def delete_category(self, category_id: str) -> None:
        """Delete a user-defined category.

        Raises:
            NotFoundError: If the category does not exist
            DependencyError: If it is a system category or still has transactions
        """
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        if category.is_system:
            raise DependencyError(system_category_delete_blocked(category.name))

        transaction_count = self.db.count_transactions(category_id=category_id)
        if transaction_count > 0:
            raise DependencyError(category_delete_blocked(category.name, transaction_count))

        self.db.delete_category(category_id)
        logger.info("Deleted category %s", category.name)

    def seed_defaults_if_needed(self) -> int:
        """Create the default system categories when no category exists.

        Returns:
            Number of categories created
        """
        if self.db.count_categories() > 0:
            return 0

        for name, icon, color_hex, types, sort_order in DEFAULT_CATEGORIES:
            self.db.add_category(
                Category(
                    id=new_id(),
                    name=name,
                    icon=icon,
                    color_hex=color_hex,
                    applicable_types=frozenset(types),
                    sort_order=sort_order,
                    is_system=True,
                )
            )
        logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))
        return len(DEFAULT_CATEGORIES)
