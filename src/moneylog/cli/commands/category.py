"""Category management commands."""

import click

from moneylog.cli.error_handling import handle_domain_error
from moneylog.domain.category import CategoryService
from moneylog.domain.entities import TransactionType
from moneylog.domain.errors import DomainError

KIND_CHOICES = {
    "expense": (TransactionType.EXPENSE,),
    "income": (TransactionType.INCOME,),
    "both": (TransactionType.EXPENSE, TransactionType.INCOME),
}


def describe_kinds(category) -> str:
    kinds = sorted(kind.value for kind in category.applicable_types)
    return "/".join(kinds)


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option(
    "--type",
    "kind",
    type=click.Choice(["expense", "income"], case_sensitive=False),
    help="Only show categories usable for this transaction type",
)
@click.pass_context
def list_categories(ctx, kind: str | None):
    """List categories in display order."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories(TransactionType(kind.lower()) if kind else None)
    if not categories:
        click.echo("No categories found. Run 'moneylog init' to create default categories.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        system = " [system]" if cat.is_system else ""
        click.echo(f"{cat.name:20s} | {describe_kinds(cat):14s} | #{cat.color_hex}{system}")


@category_group.command("create")
@click.argument("name")
@click.option(
    "--type",
    "kind",
    type=click.Choice(list(KIND_CHOICES), case_sensitive=False),
    default="expense",
    help="Transaction types the category applies to (default: expense)",
)
@click.option("--icon", default="tag.fill", help="Icon name")
@click.option("--color", default="808080", help="Display color as hex (default: 808080)")
@click.pass_context
def create_category(ctx, name: str, kind: str, icon: str, color: str):
    """Create a new category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category = service.create_category(
            name=name,
            icon=icon,
            color_hex=color,
            applicable_types=KIND_CHOICES[kind.lower()],
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{category.name}' (ID: {category.id})")


@category_group.command("delete")
@click.argument("name")
@click.pass_context
def delete_category(ctx, name: str):
    """Delete a user-defined category that has no transactions."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category = service.require_category_by_name(name)
        service.delete_category(category.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted category '{category.name}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
