"""
Monthly Aggregation

DESIGN DECISION: Summaries are DERIVED, never stored.
Every figure on the dashboard is recomputed from the full transaction
list whenever the list or the selected month changes.

GUARANTEES:
- A month is a calendar month (year + month match), not a rolling window
- Results do not depend on the order of the transaction list
- Transactions whose category no longer exists are left out of the
  category breakdown without raising
"""

from typing import Iterable, Optional, Sequence

from fintrack.logger import get_logger
from fintrack.models.defaults import CHART_COLORS
from fintrack.models.finance import (
    Category,
    CategoryExpense,
    MonthlyBalance,
    MonthlySummary,
    Transaction,
    TransactionType,
)


logger = get_logger(__name__)


def monthly_transactions(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
) -> list[Transaction]:
    """Transactions dated in the given calendar month."""
    return [
        t for t in transactions
        if t.date.year == year and t.date.month == month
    ]


def _sum_amounts(transactions: Iterable[Transaction], kind: TransactionType) -> float:
    return sum((t.amount for t in transactions if t.type == kind), 0.0)


def monthly_balance(transactions: Iterable[Transaction]) -> MonthlyBalance:
    """
    Income, expenses and balance of a set of transactions.

    Pass the output of monthly_transactions() for a monthly figure.
    """
    transactions = list(transactions)
    income = _sum_amounts(transactions, TransactionType.INCOME)
    expenses = _sum_amounts(transactions, TransactionType.EXPENSE)
    return MonthlyBalance(
        income=income,
        expenses=expenses,
        balance=income - expenses,
    )


def expenses_by_category(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    palette: Sequence[str] = CHART_COLORS,
) -> list[CategoryExpense]:
    """
    Expense breakdown by category, largest first.

    percentage = amount / total expenses * 100 (0 when there are no
    expenses). Colours cycle through the palette in order of first
    appearance. Category ids that do not resolve are skipped, but
    their amounts still count towards the total.
    """
    expenses = [t for t in transactions if t.type == TransactionType.EXPENSE]
    total_expenses = sum((t.amount for t in expenses), 0.0)

    # dict keeps first-appearance order
    amounts_by_category: dict[str, float] = {}
    for t in expenses:
        amounts_by_category[t.category_id] = amounts_by_category.get(t.category_id, 0.0) + t.amount

    categories_by_id = {c.id: c for c in categories}
    result = []
    skipped = []
    color_index = 0

    for category_id, amount in amounts_by_category.items():
        category = categories_by_id.get(category_id)
        if category is None:
            skipped.append(category_id)
            continue
        result.append(CategoryExpense(
            category_id=category_id,
            category_name=category.name,
            category_icon=category.icon,
            amount=amount,
            percentage=(amount / total_expenses) * 100 if total_expenses > 0 else 0.0,
            color=palette[color_index % len(palette)],
        ))
        color_index += 1

    if skipped:
        logger.debug("breakdown_skipped_unresolved_categories", category_ids=skipped)

    return sorted(result, key=lambda e: e.amount, reverse=True)


def recent_transactions(
    transactions: Iterable[Transaction],
    limit: int = 10,
) -> list[Transaction]:
    """The newest transactions across all months."""
    return sorted(transactions, key=lambda t: t.date, reverse=True)[:limit]


class MonthlyAggregator:
    """
    Builds dashboard summaries from the full transaction set.

    Holds no state beyond its inputs; create a new one (or call
    summarize again) whenever transactions or categories change.
    """

    def __init__(
        self,
        transactions: Iterable[Transaction],
        categories: Iterable[Category],
        palette: Optional[Sequence[str]] = None,
    ):
        self._transactions = list(transactions)
        self._categories = list(categories)
        self._palette = palette or CHART_COLORS

    def summarize(self, year: int, month: int) -> MonthlySummary:
        """Transactions, balance and category breakdown for one month."""
        in_month = monthly_transactions(self._transactions, year, month)
        summary = MonthlySummary(
            year=year,
            month=month,
            transactions=in_month,
            balance=monthly_balance(in_month),
            expenses_by_category=expenses_by_category(
                in_month, self._categories, self._palette
            ),
        )
        logger.debug(
            "monthly_summary_built",
            year=year,
            month=month,
            transactions=len(in_month),
            income=summary.balance.income,
            expenses=summary.balance.expenses,
        )
        return summary

    def recent(self, limit: int = 10) -> list[Transaction]:
        return recent_transactions(self._transactions, limit)
