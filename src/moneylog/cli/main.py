"""Main CLI entry point."""

import click

from moneylog.database.factories import create_sqlite_database
from moneylog.log import configure_logging
from moneylog.settings import Settings

# Import and register all commands at module level
from moneylog.cli.commands import (
    account,
    add,
    category,
    dashboard,
    init,
    stats,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(dir_okay=False),
    help="Path to database file (overrides MONEYLOG_DB_PATH environment variable)",
    envvar="MONEYLOG_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity (overrides MONEYLOG_LOG_LEVEL environment variable)",
    envvar="MONEYLOG_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Moneylog - personal income and expense tracking.

    Log income and expenses against accounts and categories, and view
    dashboard and statistics summaries.
    """
    ctx.ensure_object(dict)
    settings = Settings.from_env()
    configure_logging(log_level or settings.log_level)
    ctx.obj["settings"] = settings

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path or settings.database_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
init.register_commands(cli)
account.register_commands(cli)
category.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
stats.register_commands(cli)
dashboard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
