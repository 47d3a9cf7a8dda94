"""
Data Models Package

This package contains all Pydantic models used by the finance tracker.
Everything that is persisted must conform to these schemas.
"""

from fintrack.models.finance import (
    Category,
    CategoryExpense,
    ExpenseType,
    FinanceDocument,
    MonthlyBalance,
    MonthlySummary,
    PaymentMethod,
    PaymentMethodType,
    Transaction,
    TransactionItem,
    TransactionType,
    TransactionView,
    generate_id,
)
from fintrack.models.validation import ValidationIssue, ValidationResult
from fintrack.models.defaults import (
    CHART_COLORS,
    DEFAULT_CATEGORIES,
    DEFAULT_PAYMENT_METHODS,
    UNRESOLVED_CATEGORY_ICON,
    UNRESOLVED_CATEGORY_LABEL,
)

__all__ = [
    # Records
    "Category",
    "ExpenseType",
    "FinanceDocument",
    "PaymentMethod",
    "PaymentMethodType",
    "Transaction",
    "TransactionItem",
    "TransactionType",
    "generate_id",
    # Derived views
    "CategoryExpense",
    "MonthlyBalance",
    "MonthlySummary",
    "TransactionView",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    # Defaults
    "CHART_COLORS",
    "DEFAULT_CATEGORIES",
    "DEFAULT_PAYMENT_METHODS",
    "UNRESOLVED_CATEGORY_ICON",
    "UNRESOLVED_CATEGORY_LABEL",
]
