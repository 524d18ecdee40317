"""Statistics command."""

from datetime import timedelta

import click

from moneylog.cli.date_filters import period_options, resolve_cli_period, resolve_time_frame
from moneylog.domain.entities import Statistics, TransactionType
from moneylog.domain.statistics import StatisticsService
from moneylog.utils.currency import format_currency, format_percentage


def _display_breakdown(stats: Statistics, kind: TransactionType, currency_code: str) -> None:
    items = stats.breakdown_for(kind)
    if not items:
        return
    click.echo(f"\n{kind.display_name} by category:")
    for item in items:
        amount = format_currency(item.amount, currency_code)
        click.echo(
            f"  {item.category_name:<30} {amount:>14}  {format_percentage(item.percentage, False):>7}"
            f"  ({item.transaction_count})"
        )


def display_statistics(stats: Statistics, currency_code: str, title: str) -> None:
    """Print totals, averages and the per-category breakdown."""
    period = stats.period
    last_day = period.end - timedelta(microseconds=1)
    span = f"{period.start:%Y-%m-%d} to {last_day:%Y-%m-%d}"
    click.echo(f"\n{title}: {span}")
    click.echo("-" * 60)
    click.echo(f"{'Income':<30} {format_currency(stats.total_income, currency_code):>14}")
    click.echo(f"{'Expenses':<30} {format_currency(stats.total_expenses, currency_code):>14}")
    click.echo(
        f"{'Net change':<30} {format_currency(stats.net_change, currency_code, show_positive_sign=True):>14}"
    )
    click.echo(f"{'Change vs previous period':<30} {format_percentage(stats.percentage_change):>14}")
    if stats.savings_rate is not None:
        click.echo(f"{'Savings rate':<30} {format_percentage(stats.savings_rate, False):>14}")
    click.echo(f"{'Transactions':<30} {stats.transaction_count:>14}")

    averages = stats.daily_averages
    click.echo(f"\nDaily averages over {averages.days_in_period} day(s):")
    click.echo(f"  {'Income':<28} {format_currency(averages.average_income, currency_code):>14}")
    click.echo(f"  {'Expenses':<28} {format_currency(averages.average_expense, currency_code):>14}")
    click.echo(
        f"  {'Net change':<28} "
        f"{format_currency(averages.average_net_change, currency_code, show_positive_sign=True):>14}"
    )

    _display_breakdown(stats, TransactionType.EXPENSE, currency_code)
    _display_breakdown(stats, TransactionType.INCOME, currency_code)


@click.command("stats")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.pass_context
def stats(ctx, start_date: str | None, end_date: str | None, time_frame: str | None, previous: bool):
    """Show income, expense and category statistics for a period.

    Without options the current month is shown. The change percentage
    compares the period's net change with the period before it.

    Examples:
        moneylog stats
        moneylog stats --year
        moneylog stats --month --last
        moneylog stats --start-date 2024-03-01 --end-date 2024-03-31
    """
    db = ctx.obj["db"]
    service = StatisticsService(db)
    currency_code = ctx.obj["settings"].currency_code

    if previous or start_date or end_date:
        period = resolve_cli_period(
            ctx, start_date=start_date, end_date=end_date, time_frame=time_frame, previous=previous
        )
        result = service.get_statistics(period)
        title = "Statistics"
    else:
        frame = resolve_time_frame(time_frame)
        result = service.get_statistics_for(frame)
        title = frame.display_name

    if result.transaction_count == 0:
        click.echo("No transactions found.")
        return

    display_statistics(result, currency_code, title)


def register_commands(cli):
    """Register stats command with main CLI."""
    cli.add_command(stats)
