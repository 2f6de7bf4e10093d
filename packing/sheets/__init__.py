"""Spreadsheet addressing and cell coercion helpers."""

from .coercion import coerce_quantity, normalize_date, parse_calendar_day, parse_datetime
from .columns import index_to_letter, is_column_letter, letter_to_index

__all__ = [
    "letter_to_index",
    "index_to_letter",
    "is_column_letter",
    "coerce_quantity",
    "normalize_date",
    "parse_datetime",
    "parse_calendar_day",
]
