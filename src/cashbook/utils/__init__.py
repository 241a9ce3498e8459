"""Utility functions for cashbook."""

from cashbook.utils.date_parser import parse_date, business_today
from cashbook.utils.amount_parser import parse_amount
from cashbook.utils.money import decimal_sum, format_currency, to_decimal

__all__ = [
    "parse_date",
    "business_today",
    "parse_amount",
    "decimal_sum",
    "format_currency",
    "to_decimal",
]
