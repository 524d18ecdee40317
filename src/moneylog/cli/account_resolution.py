"""CLI helpers for account resolution and error handling."""

from __future__ import annotations

import click

from moneylog.cli.error_handling import handle_domain_error
from moneylog.domain.account import AccountService
from moneylog.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | None
) -> str:
    """Resolve account name or ID, or exit with a CLI error.

    Without an account the default account is used.
    """
    if account is None:
        default = account_service.get_default_account()
        if default is None:
            click.echo("Error: No accounts found. Run 'moneylog init' first.", err=True)
            ctx.exit(1)
        return default.id

    try:
        return resolve_account(account_service, account)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
