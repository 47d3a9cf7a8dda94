"""Formatting and date helpers."""

from fintrack.utils.dates import current_month, month_start, shift_month
from fintrack.utils.formatters import (
    format_currency,
    format_date,
    format_full_date,
    format_month_year,
    format_percentage,
    format_signed_currency,
)

__all__ = [
    "current_month",
    "format_currency",
    "format_date",
    "format_full_date",
    "format_month_year",
    "format_percentage",
    "format_signed_currency",
    "month_start",
    "shift_month",
]
