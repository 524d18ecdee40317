"""Tests for date parser with relative dates."""

from datetime import date, datetime, timedelta

import pytest

from moneylog.utils.date_parser import get_date_range, parse_date, parse_datetime


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_today():
    assert parse_date("today") == date.today()


def test_parse_yesterday():
    assert parse_date(" Yesterday ") == date.today() - timedelta(days=1)


def test_parse_last_week():
    """'last week' is the Monday of the previous week."""
    result = parse_date("last week")

    today = date.today()
    assert result == today - timedelta(days=today.weekday() + 7)
    assert result.weekday() == 0


def test_parse_this_month():
    assert parse_date("this month") == date.today().replace(day=1)


def test_parse_last_weekday():
    result = parse_date("last friday")

    assert result.weekday() == 4
    assert 1 <= (date.today() - result).days <= 7


def test_parse_days_ago():
    assert parse_date("3 days ago") == date.today() - timedelta(days=3)
    assert parse_date("1 week ago") == date.today() - timedelta(weeks=1)


def test_parse_last_quarter_is_a_quarter_start():
    result = parse_date("last quarter")

    assert result.day == 1
    assert result.month in (1, 4, 7, 10)
    assert result < date.today()


def test_parse_invalid_date():
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not a date")


def test_parse_datetime_with_time():
    assert parse_datetime("2024-03-15 08:30") == datetime(2024, 3, 15, 8, 30)


def test_parse_datetime_bare_date_is_noon():
    assert parse_datetime("2024-03-15") == datetime(2024, 3, 15, 12, 0)


def test_parse_datetime_now():
    before = datetime.now().replace(microsecond=0)

    assert before <= parse_datetime("now") <= datetime.now()


class TestGetDateRange:
    REFERENCE = date(2024, 3, 13)

    def test_this_month(self):
        period = get_date_range("this-month", reference=self.REFERENCE)

        assert period.start == datetime(2024, 3, 1)
        assert period.end == datetime(2024, 3, 14)

    def test_bare_name_means_current(self):
        assert get_date_range("month", self.REFERENCE) == get_date_range("this-month", self.REFERENCE)

    def test_last_month(self):
        period = get_date_range("last-month", reference=self.REFERENCE)

        assert period.start == datetime(2024, 2, 1)
        assert period.end == datetime(2024, 3, 1)

    def test_last_year(self):
        period = get_date_range("last_year", reference=self.REFERENCE)

        assert period.start == datetime(2023, 1, 1)
        assert period.end == datetime(2024, 1, 1)

    def test_quarter(self):
        period = get_date_range("quarter", reference=date(2024, 8, 20))

        assert period.start == datetime(2024, 7, 1)

    def test_all_time(self):
        period = get_date_range("all-time", reference=self.REFERENCE)

        assert period.start == datetime(2014, 3, 13)

    def test_last_all_time_is_rejected(self):
        with pytest.raises(ValueError):
            get_date_range("last-all-time", reference=self.REFERENCE)

    def test_unknown_period(self):
        with pytest.raises(ValueError, match="Unknown period"):
            get_date_range("fortnight")
