"""Date parsing utilities."""

import re
from datetime import date, datetime, time, timedelta

from dateutil import parser as date_parser
from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta

from moneylog.domain.entities import Period, StatisticsPeriod

WEEKDAYS = {
    "monday": MO,
    "tuesday": TU,
    "wednesday": WE,
    "thursday": TH,
    "friday": FR,
    "saturday": SA,
    "sunday": SU,
}

AGO_PATTERN = re.compile(r"^(\d+) (day|week|month|year)s? ago$")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative days: "today", "yesterday", "tomorrow", "3 days ago", "2 weeks ago"
    - Weekdays: "last monday" (most recent Monday before today)
    - Period starts: "this week", "last month", "this quarter", "last year"

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    shortcuts = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in shortcuts:
        return shortcuts[text]

    match = AGO_PATTERN.match(text)
    if match:
        count, unit = int(match.group(1)), match.group(2)
        return today - relativedelta(**{f"{unit}s": count})

    prefix, _, rest = text.partition(" ")
    if prefix in ("this", "last") and rest:
        if prefix == "last" and rest in WEEKDAYS:
            return today + relativedelta(days=-1, weekday=WEEKDAYS[rest](-1))
        try:
            time_frame = StatisticsPeriod(rest)
        except ValueError:
            time_frame = None
        if time_frame is not None and time_frame is not StatisticsPeriod.ALL_TIME:
            if prefix == "this":
                return time_frame.date_interval(today).start.date()
            return time_frame.previous_interval(today).start.date()

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str.strip()}': {e}")


def parse_datetime(date_str: str) -> datetime:
    """Parse a date or date-time string.

    Bare dates (including relative ones like "yesterday") resolve to noon of
    that day, except "now".
    """
    cleaned = date_str.strip().lower()
    if cleaned == "now":
        return datetime.now().replace(microsecond=0)
    if ":" in cleaned:
        try:
            return date_parser.parse(cleaned)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Could not parse date '{date_str}': {e}")
    return datetime.combine(parse_date(cleaned), time(12, 0))


def get_date_range(period: str, reference: date | None = None) -> Period:
    """Get the period for a named time frame.

    Args:
        period: One of week, month, quarter, year, all-time (optionally
            prefixed with "this-"), or last-week, last-month, last-quarter, last-year
        reference: Day the time frame is relative to (defaults to today)

    Returns:
        Half-open Period

    Raises:
        ValueError: If period string is not recognized
    """
    name = period.strip().lower().replace("_", "-")
    previous = False
    if name.startswith("this-"):
        name = name[5:]
    elif name.startswith("last-"):
        name = name[5:]
        previous = True

    try:
        time_frame = StatisticsPeriod(name.replace("-", "_"))
    except ValueError:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: week, month, quarter, year, all-time, "
            "last-week, last-month, last-quarter, last-year"
        )

    if previous:
        if time_frame is StatisticsPeriod.ALL_TIME:
            raise ValueError("Unknown period: 'last-all-time'")
        return time_frame.previous_interval(reference)
    return time_frame.date_interval(reference)
