"""CLI helpers for period resolution."""

from datetime import date

import click

from moneylog.domain.entities import Period, StatisticsPeriod
from moneylog.domain.errors import ValidationError
from moneylog.utils.date_parser import get_date_range, parse_date


def period_options(func):
    """Add the --week/--month/--quarter/--year/--all-time/--last flags to a command."""
    func = click.option("--last", "previous", is_flag=True, help="Use the previous period instead of the current one")(func)
    func = click.option("--all-time", "time_frame", flag_value="all_time", help="Last ten years")(func)
    func = click.option("--year", "time_frame", flag_value="year", help="Current year")(func)
    func = click.option("--quarter", "time_frame", flag_value="quarter", help="Current quarter")(func)
    func = click.option("--month", "time_frame", flag_value="month", help="Current month (default)")(func)
    func = click.option("--week", "time_frame", flag_value="week", help="Current week")(func)
    return func


def resolve_time_frame(time_frame: str | None) -> StatisticsPeriod:
    return StatisticsPeriod(time_frame) if time_frame else StatisticsPeriod.MONTH


def resolve_cli_period(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    time_frame: str | None,
    previous: bool = False,
    today: date | None = None,
) -> Period | None:
    """Resolve a CLI period from time frame flags or explicit dates.

    Returns None when no filter was requested.
    """
    if time_frame and (start_date or end_date):
        click.echo(
            "Error: Period options (--week, --month, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if time_frame or previous:
        prefix = "last-" if previous else ""
        try:
            return get_date_range(prefix + (time_frame or "month"), reference=today)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)

    if not start_date and not end_date:
        return None

    start = None
    end = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    if start is None:
        start = date.min
    if end is None:
        end = today or date.today()

    try:
        return Period.for_dates(start, end)
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
