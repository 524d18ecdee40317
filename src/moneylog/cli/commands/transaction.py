"""Transaction management commands."""

import click

from moneylog.cli.date_filters import period_options, resolve_cli_period
from moneylog.cli.error_handling import handle_domain_error
from moneylog.domain.account import AccountService
from moneylog.domain.category import CategoryService
from moneylog.domain.entities import TransactionType
from moneylog.domain.errors import DomainError, NotFoundError
from moneylog.domain.transaction import RECENT_TRANSACTIONS_LIMIT, TransactionService
from moneylog.utils.account_resolver import resolve_account
from moneylog.utils.currency import format_currency


def format_transaction_row(txn, category_names: dict[str, str], currency_code: str) -> str:
    """One line per transaction: date, id prefix, category, signed amount and note."""
    category_name = category_names.get(txn.category_id, "Unknown")
    amount = format_currency(txn.signed_amount, currency_code, show_positive_sign=True)
    line = f"{txn.date:%Y-%m-%d} | {txn.id[:8]} | {category_name:20s} | {amount:>14}"
    if txn.note:
        line += f" | {txn.note}"
    return line


def category_name_map(db) -> dict[str, str]:
    return {cat.id: cat.name for cat in CategoryService(db).list_categories()}


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'yesterday', '3 days ago')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.option("--category", help="Category name")
@click.option("--account", help="Account name or ID")
@click.option(
    "--type",
    "kind",
    type=click.Choice(["income", "expense"], case_sensitive=False),
    help="Only show income or only expenses",
)
@click.option("--limit", type=click.IntRange(min=1), help="Maximum number of transactions")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    time_frame: str | None,
    previous: bool,
    category: str | None,
    account: str | None,
    kind: str | None,
    limit: int | None,
):
    """View transactions, most recent first.

    Examples:
        moneylog transaction list --month
        moneylog transaction list --week --last --type expense
        moneylog transaction list --start-date 2024-01-01 --category Salary
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    category_service = CategoryService(db)
    account_service = AccountService(db)
    currency_code = ctx.obj["settings"].currency_code

    period = resolve_cli_period(
        ctx, start_date=start_date, end_date=end_date, time_frame=time_frame, previous=previous
    )

    account_id = None
    if account:
        try:
            account_id = resolve_account(account_service, account)
        except ValueError as e:
            handle_domain_error(ctx, e)

    category_id = None
    if category:
        try:
            category_id = category_service.require_category_by_name(category).id
        except DomainError as e:
            handle_domain_error(ctx, e)

    transactions = service.list_transactions(
        period=period,
        account_id=account_id,
        category_id=category_id,
        transaction_type=TransactionType(kind.lower()) if kind else None,
        limit=limit,
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    names = category_name_map(db)
    click.echo(f"\n{'Date':10s} | {'ID':8s} | {'Category':20s} | {'Amount':>14}")
    click.echo("-" * 80)
    for txn in transactions:
        click.echo(format_transaction_row(txn, names, currency_code))
    click.echo(f"\n{len(transactions)} transaction(s)")


@transaction_group.command("recent")
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=RECENT_TRANSACTIONS_LIMIT,
    show_default=True,
    help="Number of transactions to show",
)
@click.pass_context
def recent_transactions(ctx, limit: int):
    """Show the most recent transactions."""
    db = ctx.obj["db"]
    service = TransactionService(db)
    currency_code = ctx.obj["settings"].currency_code

    transactions = service.recent_transactions(limit=limit)
    if not transactions:
        click.echo("No transactions yet.")
        return

    names = category_name_map(db)
    for txn in transactions:
        click.echo(format_transaction_row(txn, names, currency_code))


def resolve_transaction_id(service: TransactionService, value: str) -> str:
    """Accept a full transaction ID or a unique ID prefix."""
    if service.get_transaction(value) is not None:
        return value
    matches = [txn.id for txn in service.list_transactions() if txn.id.startswith(value)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        raise NotFoundError(f"Transaction ID prefix '{value}' is ambiguous")
    raise NotFoundError(f"Transaction {value} not found")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool):
    """Delete a transaction and reverse its effect on the account balance.

    TRANSACTION_ID can be the full ID or a unique prefix, as shown by
    'moneylog transaction list'.
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    currency_code = ctx.obj["settings"].currency_code

    try:
        resolved = resolve_transaction_id(service, transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    txn = service.get_transaction(resolved)
    amount = format_currency(txn.signed_amount, currency_code, show_positive_sign=True)
    if not yes and not click.confirm(f"Delete {txn.type.value} of {amount} on {txn.date:%Y-%m-%d}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(resolved)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {resolved}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
