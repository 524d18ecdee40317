"""Add income and expense commands."""

import click

from moneylog.cli.account_resolution import resolve_account_or_exit
from moneylog.cli.error_handling import handle_domain_error
from moneylog.domain.account import AccountService
from moneylog.domain.category import CategoryService
from moneylog.domain.entities import TransactionType
from moneylog.domain.errors import DomainError
from moneylog.domain.transaction import TransactionService
from moneylog.utils.amount_parser import parse_amount
from moneylog.utils.currency import format_currency
from moneylog.utils.date_parser import parse_datetime


def _add(ctx, kind: TransactionType, amount: str, category: str, account: str | None, when: str, note: str | None):
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    account_service = AccountService(db)
    category_service = CategoryService(db)

    account_id = resolve_account_or_exit(ctx, account_service, account)
    account_obj = account_service.get_account(account_id)

    try:
        txn_date = parse_datetime(when)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        category_obj = category_service.require_category_by_name(category)
        transaction = transaction_service.add_transaction(
            amount=txn_amount,
            transaction_type=kind,
            category_id=category_obj.id,
            account_id=account_id,
            date=txn_date,
            note=note or "",
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added {kind.value} {transaction.id}")
    click.echo(f"  Account: {account_obj.name}")
    click.echo(f"  Date: {transaction.date:%Y-%m-%d %H:%M}")
    click.echo(
        f"  Amount: {format_currency(transaction.signed_amount, account_obj.currency_code, show_positive_sign=True)}"
    )
    click.echo(f"  Category: {category_obj.name}")
    if transaction.note:
        click.echo(f"  Note: {transaction.note}")


def transaction_options(func):
    func = click.option("--note", help="Free-form note")(func)
    func = click.option(
        "--date",
        "when",
        default="now",
        help="When it happened (YYYY-MM-DD, 'YYYY-MM-DD HH:MM', 'today', 'yesterday'; default: now)",
    )(func)
    func = click.option("--account", help="Account name or ID (default: the default account)")(func)
    func = click.option("--category", required=True, help="Category name")(func)
    func = click.option("--amount", required=True, help="Positive amount (e.g., 42.50)")(func)
    return func


@click.group()
def add_group():
    """Record income or an expense."""
    pass


@add_group.command("income")
@transaction_options
@click.pass_context
def add_income(ctx, amount, category, account, when, note):
    """Record income.

    Examples:
        moneylog add income --amount 2500 --category Salary
        moneylog add income --amount 120 --category Freelance --date yesterday
    """
    _add(ctx, TransactionType.INCOME, amount, category, account, when, note)


@add_group.command("expense")
@transaction_options
@click.pass_context
def add_expense(ctx, amount, category, account, when, note):
    """Record an expense.

    Examples:
        moneylog add expense --amount 12.50 --category "Food & Dining" --note Lunch
        moneylog add expense --amount 60 --category Transportation --account Wallet
    """
    _add(ctx, TransactionType.EXPENSE, amount, category, account, when, note)


def register_commands(cli):
    """Register add commands with main CLI."""
    cli.add_command(add_group, name="add")
