"""Tests for domain entities."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from moneylog.domain.entities import (
    MAX_TRANSACTION_AMOUNT,
    Account,
    AccountType,
    Category,
    Period,
    Statistics,
    StatisticsPeriod,
    Transaction,
    TransactionType,
)
from moneylog.domain.errors import DomainError, ValidationError


def test_account_defaults():
    account = Account(id="a1", name="Checking", type=AccountType.CHECKING)

    assert account.balance == Decimal("0")
    assert account.currency_code == "USD"
    assert account.include_in_total is True
    assert account.is_default is False
    assert AccountType.CREDIT_CARD.display_name == "Credit Card"


def test_entities_are_immutable():
    account = Account(id="a1", name="Checking", type=AccountType.CHECKING)

    with pytest.raises(AttributeError):
        account.name = "Other"


def test_category_applies_to():
    category = Category(
        id="c1",
        name="Other",
        icon="ellipsis",
        color_hex="95A5A6",
        applicable_types=frozenset({TransactionType.INCOME, TransactionType.EXPENSE}),
    )
    food = Category(id="c2", name="Food", icon="fork.knife", color_hex="FF6B6B")

    assert category.applies_to(TransactionType.INCOME)
    assert category.applies_to(TransactionType.EXPENSE)
    assert food.applies_to(TransactionType.EXPENSE)
    assert not food.applies_to(TransactionType.INCOME)


class TestTransaction:
    def _txn(self, amount, kind=TransactionType.EXPENSE):
        return Transaction(
            id="t1",
            amount=amount,
            type=kind,
            category_id="c1",
            account_id="a1",
            date=datetime(2024, 3, 15, 12, 0),
        )

    def test_amount_is_stored_as_magnitude(self):
        assert self._txn(Decimal("-42.50")).amount == Decimal("42.50")

    def test_amount_is_clamped(self):
        assert self._txn(Decimal("1e15")).amount == MAX_TRANSACTION_AMOUNT

    def test_amount_is_rounded_to_cents(self):
        assert self._txn(Decimal("0.005")).amount == Decimal("0.01")
        assert self._txn(Decimal("0.015")).amount == Decimal("0.02")
        assert self._txn(Decimal("12.344")).amount == Decimal("12.34")
        assert self._txn(Decimal("-2.675")).signed_amount == Decimal("-2.68")

    def test_signed_amount(self):
        assert self._txn(Decimal("10"), TransactionType.INCOME).signed_amount == Decimal("10")
        assert self._txn(Decimal("10"), TransactionType.EXPENSE).signed_amount == Decimal("-10")

    def test_type_values(self):
        assert TransactionType("income") is TransactionType.INCOME
        assert TransactionType.EXPENSE.display_name == "Expense"


class TestPeriod:
    def test_start_after_end_is_rejected(self):
        with pytest.raises(ValidationError):
            Period(start=datetime(2024, 3, 2), end=datetime(2024, 3, 1))

    def test_validation_error_is_a_value_error(self):
        assert issubclass(ValidationError, DomainError)
        assert issubclass(DomainError, ValueError)

    def test_for_dates_is_inclusive_of_last_day(self):
        period = Period.for_dates(date(2024, 3, 1), date(2024, 3, 31))

        assert period.start == datetime(2024, 3, 1)
        assert period.end == datetime(2024, 4, 1)
        assert period.days == 31

    def test_contains_is_half_open(self):
        period = Period.for_dates(date(2024, 3, 1), date(2024, 3, 1))

        assert period.contains(datetime(2024, 3, 1, 0, 0))
        assert period.contains(datetime(2024, 3, 1, 23, 59, 59))
        assert not period.contains(datetime(2024, 3, 2, 0, 0))

    def test_days_is_at_least_one(self):
        moment = datetime(2024, 3, 1, 12, 0)

        assert Period(start=moment, end=moment).days == 1

    def test_days_counts_partial_days(self):
        period = Period(start=datetime(2024, 3, 1, 18, 0), end=datetime(2024, 3, 2, 6, 0))

        assert period.days == 2

    def test_previous(self):
        period = Period.for_dates(date(2024, 3, 8), date(2024, 3, 14))

        previous = period.previous()

        assert previous.start == datetime(2024, 3, 1)
        assert previous.end == datetime(2024, 3, 8)


class TestStatisticsPeriod:
    def test_week_starts_on_monday(self):
        period = StatisticsPeriod.WEEK.date_interval(date(2024, 3, 13))

        assert period.start == datetime(2024, 3, 11)
        assert period.end == datetime(2024, 3, 14)

    def test_month(self):
        period = StatisticsPeriod.MONTH.date_interval(date(2024, 3, 13))

        assert period.start == datetime(2024, 3, 1)
        assert period.days == 13

    def test_quarter(self):
        period = StatisticsPeriod.QUARTER.date_interval(date(2024, 5, 10))

        assert period.start == datetime(2024, 4, 1)

    def test_year(self):
        period = StatisticsPeriod.YEAR.date_interval(date(2024, 5, 10))

        assert period.start == datetime(2024, 1, 1)
        assert period.end == datetime(2024, 5, 11)

    def test_all_time_covers_ten_years(self):
        period = StatisticsPeriod.ALL_TIME.date_interval(date(2024, 5, 10))

        assert period.start == datetime(2014, 5, 10)

    def test_accepts_datetime_reference(self):
        period = StatisticsPeriod.MONTH.date_interval(datetime(2024, 3, 13, 18, 45))

        assert period.end == datetime(2024, 3, 14)

    def test_previous_interval_is_full_previous_unit(self):
        previous = StatisticsPeriod.MONTH.previous_interval(date(2024, 3, 13))

        assert previous.start == datetime(2024, 2, 1)
        assert previous.end == datetime(2024, 3, 1)

    def test_previous_week(self):
        previous = StatisticsPeriod.WEEK.previous_interval(date(2024, 3, 13))

        assert previous.start == datetime(2024, 3, 4)
        assert previous.end == datetime(2024, 3, 11)

    def test_comparison_interval_matches_elapsed_span(self):
        comparison = StatisticsPeriod.MONTH.comparison_interval(date(2024, 3, 13))

        assert comparison.start == datetime(2024, 2, 1)
        assert comparison.end == datetime(2024, 2, 14)

    def test_comparison_interval_for_week(self):
        comparison = StatisticsPeriod.WEEK.comparison_interval(date(2024, 3, 13))

        assert comparison.start == datetime(2024, 3, 4)
        assert comparison.end == datetime(2024, 3, 7)

    def test_comparison_interval_is_capped_at_previous_unit(self):
        comparison = StatisticsPeriod.MONTH.comparison_interval(date(2024, 3, 31))

        assert comparison == StatisticsPeriod.MONTH.previous_interval(date(2024, 3, 31))

    def test_display_name(self):
        assert StatisticsPeriod.MONTH.display_name == "This Month"
        assert StatisticsPeriod.ALL_TIME.display_name == "All Time"


def test_statistics_empty():
    period = Period.for_dates(date(2024, 3, 1), date(2024, 3, 7))

    stats = Statistics.empty(period)

    assert stats.net_change == 0
    assert stats.is_positive
    assert stats.savings_rate is None
    assert stats.daily_averages.days_in_period == 7
    assert stats.breakdown_for(TransactionType.EXPENSE) == ()
