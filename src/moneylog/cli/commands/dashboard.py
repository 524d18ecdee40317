"""Dashboard command."""

import click

from moneylog.cli.commands.transaction import category_name_map, format_transaction_row
from moneylog.cli.date_filters import period_options, resolve_time_frame
from moneylog.domain.dashboard import Dashboard, DashboardState
from moneylog.domain.entities import TransactionType
from moneylog.utils.currency import format_compact, format_currency, format_percentage

CHART_WIDTH = 30
TOP_CATEGORIES = 5


def render_chart(state: DashboardState, currency_code: str) -> list[str]:
    """Horizontal bar chart of the trailing seven days."""
    peak = max((point.value for point in state.chart_data), default=0.0)
    lines = []
    for point in state.chart_data:
        width = round(point.value / peak * CHART_WIDTH) if peak > 0 else 0
        marker = "*" if point.is_current_period else " "
        bar = "#" * width
        lines.append(
            f"  {point.label}{marker} {bar:<{CHART_WIDTH}} {format_compact(point.value, currency_code)}"
        )
    return lines


def render_dashboard(state: DashboardState, currency_code: str, category_names: dict[str, str]) -> None:
    click.echo(f"\nTotal balance: {format_currency(state.total_balance, currency_code)}")

    click.echo(f"\n{state.time_frame.display_name}")
    click.echo("-" * 60)
    click.echo(f"{'Income':<30} {format_currency(state.period_income, currency_code):>14}")
    click.echo(f"{'Expenses':<30} {format_currency(state.period_expenses, currency_code):>14}")
    click.echo(
        f"{'Net change':<30} "
        f"{format_currency(state.period_net_change, currency_code, show_positive_sign=True):>14}"
    )
    click.echo(f"{'Change vs previous period':<30} {format_percentage(state.percentage_change):>14}")
    click.echo(f"{'Average daily spending':<30} {format_currency(state.daily_average, currency_code):>14}")

    if state.category_breakdown:
        click.echo("\nTop spending categories:")
        for item in state.category_breakdown[:TOP_CATEGORIES]:
            click.echo(
                f"  {item.category_name:<28} {format_currency(item.amount, currency_code):>14}"
                f"  {format_percentage(item.percentage, False):>7}"
            )

    click.echo(f"\nLast 7 days ({state.selected_type.display_name.lower()}):")
    for line in render_chart(state, currency_code):
        click.echo(line)

    click.echo("\nRecent transactions:")
    if not state.recent_transactions:
        click.echo("  No transactions yet.")
    for txn in state.recent_transactions:
        click.echo(f"  {format_transaction_row(txn, category_names, currency_code)}")


@click.command("dashboard")
@period_options
@click.option(
    "--type",
    "kind",
    type=click.Choice(["expense", "income"], case_sensitive=False),
    default="expense",
    help="Transaction type shown in the seven day chart (default: expense)",
)
@click.pass_context
def dashboard(ctx, time_frame: str | None, previous: bool, kind: str):
    """Show balance, period summary, spending chart and recent activity.

    Examples:
        moneylog dashboard
        moneylog dashboard --week --type income
    """
    if previous:
        click.echo("Error: The dashboard always shows the current period; --last is not supported.", err=True)
        ctx.exit(1)

    db = ctx.obj["db"]
    currency_code = ctx.obj["settings"].currency_code

    board = Dashboard(db, time_frame=resolve_time_frame(time_frame))
    board.select_type(TransactionType(kind.lower()))
    state = board.load()
    if state.error is not None:
        click.echo(f"Error: Could not load dashboard: {state.error}", err=True)
        ctx.exit(1)

    render_dashboard(state, currency_code, category_name_map(db))


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
