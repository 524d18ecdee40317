"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def account_not_found(account_id: str) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: str) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_name_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def invalid_amount() -> str:
    return "Amount must be greater than zero"


def category_not_applicable(name: str, kind: str) -> str:
    """Return message when a category cannot be used for a transaction kind."""
    return f"Category '{name}' cannot be used for {kind} transactions"


def system_category_delete_blocked(name: str) -> str:
    return f"Cannot delete category '{name}': system categories cannot be deleted"


def category_delete_blocked(name: str, transaction_count: int) -> str:
    """Return message when a category still has transactions."""
    return (
        f"Cannot delete category '{name}': it has {transaction_count} "
        f"transaction{'s' if transaction_count != 1 else ''}. "
        "Please delete them first."
    )


def account_delete_blocked(account_id: str, transaction_count: int) -> str:
    """Return message when account has dependent transactions."""
    return (
        f"Cannot delete account {account_id}: it has {transaction_count} "
        f"transaction{'s' if transaction_count != 1 else ''}. "
        "Please delete them first."
    )
