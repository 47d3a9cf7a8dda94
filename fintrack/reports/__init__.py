"""Monthly summaries and statement filters."""

from fintrack.reports.aggregator import (
    MonthlyAggregator,
    expenses_by_category,
    monthly_balance,
    monthly_transactions,
    recent_transactions,
)
from fintrack.reports.filters import (
    filter_transactions,
    group_by_month,
    has_active_filters,
)

__all__ = [
    "MonthlyAggregator",
    "expenses_by_category",
    "filter_transactions",
    "group_by_month",
    "has_active_filters",
    "monthly_balance",
    "monthly_transactions",
    "recent_transactions",
]
