"""Statistics aggregation.

The module-level functions are pure: they take snapshots of transactions and
categories and return new derived records. They never raise for degenerate
input; empty or zero totals produce zero-valued results.

StatisticsService is the use case on top of them that fetches the inputs
from the repositories.
"""

import logging
from collections import defaultdict
from dataclasses import replace
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from moneylog.database.base import Database
from moneylog.domain.entities import (
    Category,
    CategoryStatistic,
    ChartDataPoint,
    DailyAverages,
    Period,
    Statistics,
    StatisticsPeriod,
    Transaction,
    TransactionType,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CHART_DAYS = 7

UNKNOWN_CATEGORY_NAME = "Unknown"
UNKNOWN_CATEGORY_ICON = "questionmark.circle"
UNKNOWN_CATEGORY_COLOR = "808080"


def filter_period(transactions: Iterable[Transaction], period: Period) -> list[Transaction]:
    """Return the transactions dated inside the half-open period."""
    return [txn for txn in transactions if period.contains(txn.date)]


def compute_totals(transactions: Iterable[Transaction]) -> tuple[Decimal, Decimal]:
    """Return (total income, total expenses)."""
    income = ZERO
    expenses = ZERO
    for txn in transactions:
        if txn.type is TransactionType.INCOME:
            income += txn.amount
        else:
            expenses += txn.amount
    return income, expenses


def compute_net(transactions: Iterable[Transaction]) -> Decimal:
    income, expenses = compute_totals(transactions)
    return income - expenses


def share(amount: Decimal, total: Decimal) -> Decimal:
    """Percentage of total represented by amount; 0 when total is zero."""
    if total <= 0:
        return ZERO
    return amount / total * HUNDRED


def compute_category_breakdown(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    total_income: Decimal,
    total_expenses: Decimal,
) -> tuple[CategoryStatistic, ...]:
    """Group transactions per category and kind.

    A category that accepts both kinds yields one entry per kind, so the
    percentages of one kind add up to 100 whenever that kind has a total.
    Entries are sorted by amount (highest first), then name, then ID.
    """
    category_lookup = {cat.id: cat for cat in categories}
    groups: dict[tuple[str, TransactionType], dict] = defaultdict(
        lambda: {"amount": ZERO, "count": 0}
    )

    for txn in transactions:
        group = groups[(txn.category_id, txn.type)]
        group["amount"] += txn.amount
        group["count"] += 1

    breakdown = []
    for (category_id, kind), data in groups.items():
        category = category_lookup.get(category_id)
        total = total_income if kind is TransactionType.INCOME else total_expenses
        breakdown.append(
            CategoryStatistic(
                category_id=category_id,
                category_name=category.name if category else UNKNOWN_CATEGORY_NAME,
                category_icon=category.icon if category else UNKNOWN_CATEGORY_ICON,
                category_color_hex=category.color_hex if category else UNKNOWN_CATEGORY_COLOR,
                type=kind,
                amount=data["amount"],
                transaction_count=data["count"],
                percentage=share(data["amount"], total),
            )
        )

    breakdown.sort(key=lambda item: (-item.amount, item.category_name, item.category_id, item.type.value))
    return tuple(breakdown)


def compute_daily_averages(
    total_income: Decimal, total_expenses: Decimal, period: Period
) -> DailyAverages:
    days = period.days
    return DailyAverages(
        average_income=total_income / days,
        average_expense=total_expenses / days,
        average_net_change=(total_income - total_expenses) / days,
        days_in_period=days,
    )


def percentage_change(current_net: Decimal, prior_net: Decimal) -> Decimal:
    """Change of net against the prior period, in percent.

    When the prior net is zero the ratio is undefined, so the result is +100
    for a positive current net, -100 for a negative one, and 0 otherwise.
    """
    if prior_net != 0:
        return (current_net - prior_net) / abs(prior_net) * HUNDRED
    if current_net > 0:
        return HUNDRED
    if current_net < 0:
        return -HUNDRED
    return ZERO


def compute_statistics(
    transactions: Iterable[Transaction],
    period: Period,
    prior_period_net: Decimal = ZERO,
    categories: Iterable[Category] = (),
) -> Statistics:
    """Build the Statistics summary of the transactions inside period.

    Args:
        transactions: Transaction snapshot; entries outside period are ignored
        period: Half-open interval to summarize
        prior_period_net: Net (income - expenses) of the period to compare against
        categories: Category snapshot used for names, icons and colors

    Returns:
        Statistics for the period
    """
    in_period = filter_period(transactions, period)
    if not in_period:
        return replace(
            Statistics.empty(period),
            percentage_change=percentage_change(ZERO, Decimal(prior_period_net)),
        )
    total_income, total_expenses = compute_totals(in_period)

    return Statistics(
        period=period,
        total_income=total_income,
        total_expenses=total_expenses,
        transaction_count=len(in_period),
        category_breakdown=compute_category_breakdown(
            in_period, categories, total_income, total_expenses
        ),
        daily_averages=compute_daily_averages(total_income, total_expenses, period),
        percentage_change=percentage_change(total_income - total_expenses, Decimal(prior_period_net)),
    )


def day_label(day: date) -> str:
    """Single letter weekday label, e.g. 'M' for Monday."""
    return day.strftime("%a")[:1]


def compute_chart_series(
    transactions: Sequence[Transaction],
    kind: TransactionType,
    today: date,
) -> tuple[ChartDataPoint, ...]:
    """Daily totals of one kind for the seven days ending today, oldest first.

    Each bucket covers [day 00:00, next day 00:00). The last point (today)
    is flagged as the current period. Values are floats for rendering.
    """
    if isinstance(today, datetime):
        today = today.date()

    points = []
    for offset in range(CHART_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        bucket = Period(
            start=datetime.combine(day, time.min),
            end=datetime.combine(day + timedelta(days=1), time.min),
        )
        total = sum(
            (txn.amount for txn in transactions if txn.type is kind and bucket.contains(txn.date)),
            ZERO,
        )
        points.append(
            ChartDataPoint(
                label=day_label(day),
                value=float(total),
                is_current_period=offset == 0,
                day=day,
            )
        )
    return tuple(points)


class StatisticsService:
    """Service computing statistics from stored transactions."""

    def __init__(self, db: Database):
        """Initialize statistics service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_statistics(
        self,
        period: Period,
        prior_period: Optional[Period] = None,
    ) -> Statistics:
        """Compute statistics for a period.

        Args:
            period: Period to analyze
            prior_period: Period whose net the change is measured against
                (defaults to the same-length interval just before period)

        Returns:
            Computed statistics
        """
        if prior_period is None:
            prior_period = period.previous()

        transactions = self.db.list_transactions(period=period)
        if not transactions:
            logger.debug("No transactions between %s and %s", period.start, period.end)

        prior_net = compute_net(self.db.list_transactions(period=prior_period))
        categories = self.db.list_categories()
        return compute_statistics(transactions, period, prior_net, categories)

    def get_statistics_for(
        self, time_frame: StatisticsPeriod, reference: Optional[date] = None
    ) -> Statistics:
        """Compute statistics for a predefined time frame.

        The change is measured against the same elapsed span of the
        previous unit, so month-to-date is compared with the start of last month.
        """
        return self.get_statistics(
            period=time_frame.date_interval(reference),
            prior_period=time_frame.comparison_interval(reference),
        )

    def get_chart_series(
        self, kind: TransactionType, today: Optional[date] = None
    ) -> tuple[ChartDataPoint, ...]:
        """Trailing seven day series for one kind, read from the store."""
        if today is None:
            today = date.today()
        window = Period.for_dates(today - timedelta(days=CHART_DAYS - 1), today)
        return compute_chart_series(self.db.list_transactions(period=window), kind, today)
