"""Domain model entities for moneylog.

These are pure data classes representing business concepts, independent of
database schema. Money is always carried as Decimal; the only float values
are chart points, which exist for rendering.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from dateutil.relativedelta import relativedelta

from moneylog.domain.errors import ValidationError

MAX_TRANSACTION_AMOUNT = Decimal("999999999999.99")
CENT = Decimal("0.01")


def to_cents(value) -> Decimal:
    """Round a money value to whole cents, halves away from zero."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def new_id() -> str:
    """Return a new opaque identifier."""
    return str(uuid.uuid4())


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def balance_multiplier(self) -> Decimal:
        """1 for income (adds to balance), -1 for expense."""
        return Decimal(1) if self is TransactionType.INCOME else Decimal(-1)


class AccountType(str, Enum):
    """Kind of financial account."""

    CHECKING = "checking"
    SAVINGS = "savings"
    CASH = "cash"
    CREDIT_CARD = "credit_card"
    INVESTMENT = "investment"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


@dataclass(frozen=True)
class Account:
    """Financial account domain entity."""

    id: str
    name: str
    type: AccountType
    balance: Decimal = Decimal("0")
    currency_code: str = "USD"
    color_hex: str = "007AFF"
    sort_order: int = 0
    is_default: bool = False
    include_in_total: bool = True


@dataclass(frozen=True)
class Category:
    """Transaction category domain entity."""

    id: str
    name: str
    icon: str
    color_hex: str
    applicable_types: frozenset[TransactionType] = frozenset({TransactionType.EXPENSE})
    sort_order: int = 0
    is_system: bool = False

    def applies_to(self, kind: TransactionType) -> bool:
        """Return True if transactions of this kind may use the category."""
        return kind in self.applicable_types


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    The amount is always stored as a non-negative value; the direction is
    carried by ``type`` only.
    """

    id: str
    amount: Decimal
    type: TransactionType
    category_id: str
    account_id: str
    date: datetime
    note: str = ""
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        amount = to_cents(min(abs(Decimal(self.amount)), MAX_TRANSACTION_AMOUNT))
        object.__setattr__(self, "amount", amount)

    @property
    def signed_amount(self) -> Decimal:
        """Positive for income, negative for expense."""
        return self.amount * self.type.balance_multiplier


@dataclass(frozen=True)
class Period:
    """Half-open datetime interval ``[start, end)``."""

    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start > self.end:
            raise ValidationError(
                f"Period start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )

    @classmethod
    def for_dates(cls, start_date: date, end_date: date) -> "Period":
        """Build a period covering whole days from start_date through end_date."""
        return cls(
            start=datetime.combine(start_date, time.min),
            end=datetime.combine(end_date + timedelta(days=1), time.min),
        )

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment < self.end

    @property
    def days(self) -> int:
        """Number of calendar days touched by the period, at least 1."""
        last = self.end.date()
        if self.end.time() == time.min:
            last -= timedelta(days=1)
        return max((last - self.start.date()).days + 1, 1)

    def previous(self) -> "Period":
        """Return the interval of the same length that ends where this one starts."""
        try:
            start = self.start - (self.end - self.start)
        except OverflowError:
            start = datetime.min
        return Period(start=start, end=self.start)


class StatisticsPeriod(str, Enum):
    """Common time frames for statistics."""

    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    ALL_TIME = "all_time"

    @property
    def display_name(self) -> str:
        if self is StatisticsPeriod.ALL_TIME:
            return "All Time"
        return f"This {self.value.capitalize()}"

    def _unit_start(self, reference: date) -> date:
        if self is StatisticsPeriod.WEEK:
            return reference - timedelta(days=reference.weekday())
        if self is StatisticsPeriod.MONTH:
            return reference.replace(day=1)
        if self is StatisticsPeriod.QUARTER:
            first_month = 3 * ((reference.month - 1) // 3) + 1
            return reference.replace(month=first_month, day=1)
        if self is StatisticsPeriod.YEAR:
            return reference.replace(month=1, day=1)
        return reference - relativedelta(years=10)

    def _unit_length(self) -> relativedelta:
        return {
            StatisticsPeriod.WEEK: relativedelta(weeks=1),
            StatisticsPeriod.MONTH: relativedelta(months=1),
            StatisticsPeriod.QUARTER: relativedelta(months=3),
            StatisticsPeriod.YEAR: relativedelta(years=1),
            StatisticsPeriod.ALL_TIME: relativedelta(years=10),
        }[self]

    def date_interval(self, reference: Optional[date] = None) -> Period:
        """Period from the start of the current unit through the reference day."""
        if reference is None:
            reference = date.today()
        elif isinstance(reference, datetime):
            reference = reference.date()
        return Period.for_dates(self._unit_start(reference), reference)

    def previous_interval(self, reference: Optional[date] = None) -> Period:
        """The full calendar unit immediately before the current one."""
        current = self.date_interval(reference)
        start = current.start - self._unit_length()
        return Period(start=start, end=current.start)

    def comparison_interval(self, reference: Optional[date] = None) -> Period:
        """The start of the previous unit, as long as the current unit so far.

        Capped at the end of the previous unit, so the 31st of a month is
        compared with the whole of a shorter previous month.
        """
        current = self.date_interval(reference)
        start = current.start - self._unit_length()
        return Period(start=start, end=min(start + (current.end - current.start), current.start))


@dataclass(frozen=True)
class CategoryStatistic:
    """Summed amount of one category and kind within a period."""

    category_id: str
    category_name: str
    category_icon: str
    category_color_hex: str
    type: TransactionType
    amount: Decimal
    transaction_count: int
    percentage: Decimal = Decimal("0")


@dataclass(frozen=True)
class DailyAverages:
    """Per-day averages over a period."""

    average_income: Decimal
    average_expense: Decimal
    average_net_change: Decimal
    days_in_period: int


@dataclass(frozen=True)
class Statistics:
    """Computed statistics for a period. Derived, never persisted."""

    period: Period
    total_income: Decimal
    total_expenses: Decimal
    transaction_count: int
    category_breakdown: tuple[CategoryStatistic, ...]
    daily_averages: DailyAverages
    percentage_change: Decimal = Decimal("0")

    @property
    def net_change(self) -> Decimal:
        return self.total_income - self.total_expenses

    @property
    def savings_rate(self) -> Optional[Decimal]:
        """Share of income kept, as a percentage; None without income."""
        if self.total_income <= 0:
            return None
        return (self.total_income - self.total_expenses) / self.total_income * 100

    @property
    def is_positive(self) -> bool:
        return self.net_change >= 0

    def breakdown_for(self, kind: TransactionType) -> tuple[CategoryStatistic, ...]:
        return tuple(item for item in self.category_breakdown if item.type is kind)

    @classmethod
    def empty(cls, period: Period) -> "Statistics":
        return cls(
            period=period,
            total_income=Decimal("0"),
            total_expenses=Decimal("0"),
            transaction_count=0,
            category_breakdown=(),
            daily_averages=DailyAverages(
                average_income=Decimal("0"),
                average_expense=Decimal("0"),
                average_net_change=Decimal("0"),
                days_in_period=period.days,
            ),
        )


@dataclass(frozen=True)
class ChartDataPoint:
    """A single bar of the trailing seven day chart."""

    label: str
    value: float
    is_current_period: bool
    day: Optional[date] = None
