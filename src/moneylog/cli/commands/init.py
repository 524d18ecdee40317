"""Initialize default categories and the default account."""

import click

from moneylog.domain.account import AccountService
from moneylog.domain.category import CategoryService


@click.command("init")
@click.pass_context
def init(ctx):
    """Create the default categories and a default account if none exist."""
    db = ctx.obj["db"]
    category_service = CategoryService(db)
    account_service = AccountService(db)

    created = category_service.seed_defaults_if_needed()
    if created:
        click.echo(f"Created {created} default categories.")
    else:
        click.echo("Categories already exist.")

    account = account_service.create_default_if_needed()
    if account is not None:
        click.echo(f"Created default account '{account.name}'.")
    else:
        click.echo("Accounts already exist.")


def register_commands(cli):
    """Register init command with main CLI."""
    cli.add_command(init)
