"""Tests for monthly summaries and the category breakdown."""

from datetime import date

import pytest

from fintrack.models import CHART_COLORS, DEFAULT_CATEGORIES, Transaction, TransactionType
from fintrack.reports import (
    MonthlyAggregator,
    expenses_by_category,
    monthly_balance,
    monthly_transactions,
    recent_transactions,
)


def tx(tx_id, amount, kind, day, category_id="cat-20"):
    return Transaction(
        id=tx_id,
        description=f"Transaction {tx_id}",
        amount=amount,
        type=kind,
        date=day,
        category_id=category_id,
        payment_method_id="pm-1",
    )


INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE


@pytest.fixture
def transactions():
    return [
        tx("tr-1", 5000, INCOME, date(2024, 1, 5), "cat-50"),
        tx("tr-2", 1500, EXPENSE, date(2024, 1, 10), "cat-1"),
        tx("tr-3", 300, EXPENSE, date(2024, 1, 12), "cat-20"),
        tx("tr-4", 200, EXPENSE, date(2024, 1, 31), "cat-20"),
        tx("tr-5", 999, EXPENSE, date(2024, 2, 1), "cat-20"),
        tx("tr-6", 777, EXPENSE, date(2023, 1, 15), "cat-20"),
    ]


class TestMonthlyTotals:
    """Tests for calendar-month filtering and totals."""

    def test_only_the_selected_month(self, transactions):
        """Test that other months and other years are excluded."""
        in_month = monthly_transactions(transactions, 2024, 1)
        assert [t.id for t in in_month] == ["tr-1", "tr-2", "tr-3", "tr-4"]

    def test_balance(self, transactions):
        """Test income, expenses and balance for a month."""
        balance = monthly_balance(monthly_transactions(transactions, 2024, 1))
        assert balance.income == 5000
        assert balance.expenses == 2000
        assert balance.balance == 3000

    def test_empty_month(self, transactions):
        """Test a month with no transactions."""
        summary = MonthlyAggregator(transactions, DEFAULT_CATEGORIES).summarize(2024, 6)
        assert summary.transactions == []
        assert summary.balance.balance == 0
        assert summary.expenses_by_category == []

    def test_order_does_not_matter(self, transactions):
        """Test that totals are the same for any order of the list."""
        forward = MonthlyAggregator(transactions, DEFAULT_CATEGORIES).summarize(2024, 1)
        backward = MonthlyAggregator(list(reversed(transactions)), DEFAULT_CATEGORIES).summarize(2024, 1)
        assert forward.balance == backward.balance
        assert (
            {e.category_id: e.amount for e in forward.expenses_by_category}
            == {e.category_id: e.amount for e in backward.expenses_by_category}
        )

    def test_negative_balance(self):
        """Test a month where expenses exceed income."""
        balance = monthly_balance([
            tx("tr-1", 100, INCOME, date(2024, 1, 1), "cat-50"),
            tx("tr-2", 250, EXPENSE, date(2024, 1, 2)),
        ])
        assert balance.balance == -150


class TestExpensesByCategory:
    """Tests for the category breakdown."""

    def test_grouped_and_sorted(self, transactions):
        """Test grouping by category, largest first."""
        breakdown = expenses_by_category(
            monthly_transactions(transactions, 2024, 1), DEFAULT_CATEGORIES
        )
        assert [(e.category_id, e.amount) for e in breakdown] == [("cat-1", 1500), ("cat-20", 500)]
        assert breakdown[0].category_name == "Aluguel"
        assert breakdown[0].percentage == pytest.approx(75)
        assert breakdown[1].percentage == pytest.approx(25)

    def test_percentages_sum_to_100(self, transactions):
        """Test that resolved percentages add up to 100."""
        breakdown = expenses_by_category(transactions, DEFAULT_CATEGORIES)
        assert sum(e.percentage for e in breakdown) == pytest.approx(100)

    def test_income_is_ignored(self, transactions):
        """Test that income categories never appear."""
        breakdown = expenses_by_category(transactions, DEFAULT_CATEGORIES)
        assert "cat-50" not in {e.category_id for e in breakdown}

    def test_zero_expenses_give_zero_percentages(self):
        """Test that a zero total doesn't divide by zero."""
        breakdown = expenses_by_category(
            [tx("tr-1", 0, EXPENSE, date(2024, 1, 1))], DEFAULT_CATEGORIES
        )
        assert len(breakdown) == 1
        assert breakdown[0].percentage == 0

    def test_colors_follow_first_appearance(self):
        """Test that colours are assigned in order of first appearance."""
        breakdown = expenses_by_category(
            [
                tx("tr-1", 10, EXPENSE, date(2024, 1, 1), "cat-20"),
                tx("tr-2", 90, EXPENSE, date(2024, 1, 2), "cat-1"),
            ],
            DEFAULT_CATEGORIES,
        )
        colors = {e.category_id: e.color for e in breakdown}
        assert colors == {"cat-20": CHART_COLORS[0], "cat-1": CHART_COLORS[1]}

    def test_colors_cycle(self):
        """Test that the palette wraps around."""
        expense_categories = [c for c in DEFAULT_CATEGORIES if c.type == EXPENSE][:3]
        breakdown = expenses_by_category(
            [
                tx(f"tr-{n}", 10 * (n + 1), EXPENSE, date(2024, 1, 1), c.id)
                for n, c in enumerate(expense_categories)
            ],
            DEFAULT_CATEGORIES,
            palette=["red", "blue"],
        )
        colors = {e.category_id: e.color for e in breakdown}
        assert colors[expense_categories[2].id] == "red"

    def test_unresolved_category_is_skipped(self):
        """Test that a deleted category leaves the breakdown but not the total."""
        breakdown = expenses_by_category(
            [
                tx("tr-1", 75, EXPENSE, date(2024, 1, 1), "cat-20"),
                tx("tr-2", 25, EXPENSE, date(2024, 1, 2), "cat-deleted"),
            ],
            DEFAULT_CATEGORIES,
        )
        assert [e.category_id for e in breakdown] == ["cat-20"]
        assert breakdown[0].percentage == pytest.approx(75)
        assert breakdown[0].color == CHART_COLORS[0]


class TestRecentTransactions:
    """Tests for the dashboard's recent list."""

    def test_newest_first_across_months(self, transactions):
        """Test that recent transactions span all months."""
        recent = recent_transactions(transactions, limit=3)
        assert [t.id for t in recent] == ["tr-5", "tr-4", "tr-3"]

    def test_default_limit(self):
        """Test that at most ten are returned by default."""
        many = [tx(f"tr-{n}", 1, EXPENSE, date(2024, 1, n + 1)) for n in range(15)]
        assert len(recent_transactions(many)) == 10

    def test_aggregator_recent(self, transactions):
        """Test the aggregator shortcut."""
        aggregator = MonthlyAggregator(transactions, DEFAULT_CATEGORIES)
        assert len(aggregator.recent(2)) == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
