"""
Display formatting (pt-BR conventions).

Amounts use "." for thousands and "," for decimals: R$ 1.234,56.
"""

from datetime import date
from typing import Optional


MONTH_NAMES = [
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
]

MONTH_ABBREVIATIONS = [name[:3] for name in MONTH_NAMES]


def format_currency(value: float, symbol: Optional[str] = "R$") -> str:
    """format_currency(1234.5) -> 'R$ 1.234,50'; negatives as '-R$ 10,00'."""
    digits = f"{abs(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    sign = "-" if round(value, 2) < 0 else ""
    if symbol:
        return f"{sign}{symbol} {digits}"
    return f"{sign}{digits}"


def format_signed_currency(value: float, symbol: Optional[str] = "R$") -> str:
    """Like format_currency but always shows the sign: '+R$ 1,00'."""
    if round(value, 2) > 0:
        return "+" + format_currency(value, symbol)
    return format_currency(value, symbol)


def format_date(value: date) -> str:
    """Day and short month: '15 jan'."""
    return f"{value.day:02d} {MONTH_ABBREVIATIONS[value.month - 1]}"


def format_full_date(value: date) -> str:
    """'15 de janeiro de 2024'."""
    return f"{value.day:02d} de {MONTH_NAMES[value.month - 1]} de {value.year}"


def format_month_year(value: date) -> str:
    """'janeiro de 2024'."""
    return f"{MONTH_NAMES[value.month - 1]} de {value.year}"


def format_percentage(value: float) -> str:
    """One decimal place: '12.5%'."""
    return f"{value:.1f}%"
