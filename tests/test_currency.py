"""Tests for currency formatting."""

from decimal import Decimal

from moneylog.utils.currency import currency_symbol, format_compact, format_currency, format_percentage


def test_currency_symbol():
    assert currency_symbol("usd") == "$"
    assert currency_symbol("EUR") == "€"
    assert currency_symbol("XYZ") == "XYZ"


def test_format_currency():
    assert format_currency(Decimal("1234.5")) == "$1,234.50"
    assert format_currency(Decimal("-1234.5")) == "-$1,234.50"
    assert format_currency(Decimal("0.005")) == "$0.01"
    assert format_currency(Decimal("12"), "EUR") == "€12.00"


def test_format_currency_positive_sign():
    assert format_currency(Decimal("5"), show_positive_sign=True) == "+$5.00"
    assert format_currency(Decimal("0"), show_positive_sign=True) == "$0.00"


def test_format_compact():
    assert format_compact(Decimal("1250")) == "$1.3K"
    assert format_compact(Decimal("1000000")) == "$1M"
    assert format_compact(Decimal("-2500000000")) == "-$2.5B"
    assert format_compact(Decimal("999")) == "$999.00"


def test_format_percentage():
    assert format_percentage(Decimal("12.345")) == "+12.3%"
    assert format_percentage(Decimal("-50")) == "-50.0%"
    assert format_percentage(Decimal("0")) == "0.0%"
    assert format_percentage(Decimal("60"), show_positive_sign=False) == "60.0%"
