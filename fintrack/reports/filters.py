"""
Statement view filters.

Search, type and category filters over the full transaction list,
newest first, grouped by month for display.
"""

from typing import Iterable, Optional, Union

from fintrack.models.finance import Transaction, TransactionType
from fintrack.utils.formatters import format_month_year


ALL = "all"


def filter_transactions(
    transactions: Iterable[Transaction],
    search: str = "",
    type_filter: Union[TransactionType, str, None] = None,
    category_id: Optional[str] = None,
) -> list[Transaction]:
    """
    Transactions matching every active filter, newest first.

    search is a case-insensitive substring of the description;
    "all" (or None) disables the type and category filters.
    """
    needle = (search or "").strip().lower()
    wanted_type = None if type_filter in (None, ALL) else TransactionType(type_filter)
    wanted_category = None if category_id in (None, ALL) else category_id

    matches = [
        t for t in transactions
        if needle in t.description.lower()
        and (wanted_type is None or t.type == wanted_type)
        and (wanted_category is None or t.category_id == wanted_category)
    ]
    return sorted(matches, key=lambda t: t.date, reverse=True)


def has_active_filters(
    search: str = "",
    type_filter: Union[TransactionType, str, None] = None,
    category_id: Optional[str] = None,
) -> bool:
    return bool(search) or type_filter not in (None, ALL) or category_id not in (None, ALL)


def group_by_month(transactions: Iterable[Transaction]) -> dict[str, list[Transaction]]:
    """Group by month label ('janeiro de 2024'), keeping input order."""
    groups: dict[str, list[Transaction]] = {}
    for t in transactions:
        groups.setdefault(format_month_year(t.date), []).append(t)
    return groups
