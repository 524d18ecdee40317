"""Utility functions for moneylog."""

from moneylog.utils.date_parser import get_date_range, parse_date, parse_datetime
from moneylog.utils.amount_parser import parse_amount
from moneylog.utils.currency import format_compact, format_currency, format_percentage

__all__ = [
    "get_date_range",
    "parse_date",
    "parse_datetime",
    "parse_amount",
    "format_compact",
    "format_currency",
    "format_percentage",
]
