"""Utility for resolving account names to IDs."""

from moneylog.domain.account import AccountService


def resolve_account(account_service: AccountService, account: str) -> str:
    """Resolve account name, ID, or ID prefix to an account ID.

    Args:
        account_service: AccountService instance
        account: Account name, full ID, or a unique prefix of an ID

    Returns:
        Account ID

    Raises:
        ValueError: If account is not found or the prefix is ambiguous
    """
    account = account.strip()
    if account_service.get_account(account) is not None:
        return account

    accounts = account_service.list_accounts()
    for acc in accounts:
        if acc.name == account:
            return acc.id

    # Case-insensitive name match, then ID prefix
    for acc in accounts:
        if acc.name.lower() == account.lower():
            return acc.id

    matches = [acc for acc in accounts if acc.id.startswith(account)] if account else []
    if len(matches) == 1:
        return matches[0].id
    if len(matches) > 1:
        raise ValueError(f"Account ID prefix '{account}' is ambiguous")

    raise ValueError(f"Account '{account}' not found")
