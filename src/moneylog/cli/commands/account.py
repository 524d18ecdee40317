"""Account management commands."""

import click

from moneylog.cli.account_resolution import resolve_account_or_exit
from moneylog.cli.error_handling import handle_domain_error
from moneylog.domain.account import AccountService
from moneylog.domain.entities import AccountType
from moneylog.domain.errors import DomainError
from moneylog.utils.amount_parser import parse_amount
from moneylog.utils.currency import format_currency


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice([t.value for t in AccountType], case_sensitive=False),
    default=AccountType.CHECKING.value,
    help="Account type (default: checking)",
)
@click.option("--balance", default="0", help="Opening balance (default: 0)")
@click.option("--currency", help="Currency code (defaults to MONEYLOG_CURRENCY)")
@click.option("--color", default="007AFF", help="Display color as hex (default: 007AFF)")
@click.option("--default", "is_default", is_flag=True, help="Make this the default account")
@click.option("--exclude-from-total", is_flag=True, help="Do not count this account in the total balance")
@click.pass_context
def create_account(
    ctx,
    name: str,
    account_type: str,
    balance: str,
    currency: str | None,
    color: str,
    is_default: bool,
    exclude_from_total: bool,
):
    """Create a new account.

    Examples:
        moneylog account create "Main Checking" --default
        moneylog account create "Savings" --type savings --balance 1500
        moneylog account create "Wallet" --type cash --exclude-from-total
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    currency_code = currency or ctx.obj["settings"].currency_code

    try:
        opening_balance = parse_amount(balance)
    except ValueError as e:
        click.echo(f"Error: Invalid balance: {e}", err=True)
        ctx.exit(1)

    try:
        account = service.create_account(
            name=name,
            account_type=AccountType(account_type.lower()),
            balance=opening_balance,
            currency_code=currency_code,
            color_hex=color.lstrip("#").upper(),
            is_default=is_default,
            include_in_total=not exclude_from_total,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created account '{account.name}' (ID: {account.id})")
    if is_default:
        click.echo("Set as default account")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        flags = []
        if acc.is_default:
            flags.append("default")
        if not acc.include_in_total:
            flags.append("excluded")
        flag_str = f" [{', '.join(flags)}]" if flags else ""
        balance_str = format_currency(acc.balance, acc.currency_code)
        click.echo(
            f"{acc.id[:8]} | {acc.name:20s} | {acc.type.display_name:12s} | {balance_str:>15}{flag_str}"
        )


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_account(ctx, account: str, new_name: str) -> None:
    """Rename an account.

    ACCOUNT can be an account name or ID.

    Examples:
        moneylog account rename "Main Account" "Checking"
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        service.rename_account(account_id=account_id, name=new_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed account to '{new_name.strip()}'")


@account_group.command("set-default")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def set_default_account(ctx, account: str) -> None:
    """Make ACCOUNT the default account for new transactions."""
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)

    service.set_default_account(account_id)
    click.echo(f"Default account is now '{service.get_account(account_id).name}'")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if it has no transactions.
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}'?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{account_obj.name}'")


@account_group.command("balance")
@click.pass_context
def total_balance(ctx) -> None:
    """Show the total balance of accounts included in totals."""
    db = ctx.obj["db"]
    service = AccountService(db)
    currency_code = ctx.obj["settings"].currency_code

    click.echo(f"Total balance: {format_currency(service.total_balance(), currency_code)}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
