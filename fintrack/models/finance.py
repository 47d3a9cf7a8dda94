"""
Core Data Models for the Finance Tracker

These models define the records stored in the finance document.
They are designed to:
1. Be immutable values (updates produce new records)
2. Relate to each other by id only, never by embedded objects
3. Serialize to the camelCase JSON shape of the data file
4. Load older documents without migration

DESIGN DECISION: Amounts are plain floats. The tracker is a personal
tool and the stored document has always used JSON numbers.
"""

import time
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of money flow. Also the kind of a category."""
    INCOME = "income"
    EXPENSE = "expense"


class ExpenseType(str, Enum):
    """Whether a category is a recurring (fixed) or occasional one."""
    FIXED = "fixed"
    VARIABLE = "variable"


class PaymentMethodType(str, Enum):
    """Supported payment method kinds."""
    CREDIT_CARD = "credit_card"
    CASH = "cash"
    BANK_ACCOUNT = "bank_account"


# =============================================================================
# ID GENERATION
# =============================================================================

def generate_id(prefix: str, existing: Iterable[str] = ()) -> str:
    """
    Create a timestamp-based id such as ``tr-1705312800000``.

    Records created within the same millisecond would collide, so the
    numeric part is bumped until it is not in ``existing``.
    """
    taken = set(existing)
    stamp = time.time_ns() // 1_000_000
    candidate = f"{prefix}-{stamp}"
    while candidate in taken:
        stamp += 1
        candidate = f"{prefix}-{stamp}"
    return candidate


def _local_date(value: datetime) -> date:
    """Calendar date of a datetime as seen in local time."""
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.date()


# =============================================================================
# STORED RECORDS
# =============================================================================

class FinanceRecord(BaseModel):
    """
    Base for every persisted record.

    Python attributes are snake_case; the JSON document uses camelCase.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class Category(FinanceRecord):
    """A user-visible category for income or expense transactions."""

    id: str
    name: str = Field(..., min_length=1, max_length=100)
    icon: str = Field(
        default="MoreHorizontal",
        description="Icon tag shown next to the category"
    )
    type: TransactionType
    expense_type: Optional[ExpenseType] = None


class PaymentMethod(FinanceRecord):
    """
    How a transaction was paid.

    Credit card fields are informational only; closing and due days
    are not checked against the calendar.
    """

    id: str
    name: str = Field(..., min_length=1, max_length=100)
    type: PaymentMethodType
    limit: Optional[float] = None
    closing_day: Optional[int] = None
    due_day: Optional[int] = None


class TransactionItem(FinanceRecord):
    """
    A single priced line within an expense (a receipt line).

    CRITICAL: total_price is derived from quantity, unit price and
    discount. It is never stored independently; any value present in
    the input is ignored and recomputed.
    """

    id: str
    name: str
    quantity: float = 1.0
    unit_price: float = 0.0
    discount: Optional[float] = None
    category_id: Optional[str] = None

    @computed_field(alias="totalPrice")
    @property
    def total_price(self) -> float:
        """max(0, quantity * unit_price - discount)."""
        subtotal = self.quantity * self.unit_price
        return max(0.0, subtotal - (self.discount or 0.0))


class Transaction(FinanceRecord):
    """
    An income or expense entry.

    For expenses recorded with the item editor, category_id mirrors the
    first item's category so that older views keep working.
    """

    id: str
    description: str
    amount: float
    type: TransactionType
    date: date
    category_id: str = ""
    payment_method_id: str = ""
    notes: Optional[str] = None
    items: Optional[list[TransactionItem]] = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_stored_date(cls, value: Any) -> Any:
        """
        Accept both plain dates and the ISO datetimes written by
        earlier versions of the data file.
        """
        if isinstance(value, datetime):
            return _local_date(value)
        if isinstance(value, str) and "T" in value:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
            return _local_date(parsed)
        return value

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    @property
    def has_items(self) -> bool:
        return bool(self.items)


class FinanceDocument(FinanceRecord):
    """
    The whole persisted data set.

    Written wholesale on every save and read wholesale on load.
    There is no schema version.
    """

    categories: list[Category] = Field(default_factory=list)
    payment_methods: list[PaymentMethod] = Field(default_factory=list)
    transactions: list[Transaction] = Field(default_factory=list)
    last_saved: Optional[str] = None

    def to_json_dict(self) -> dict:
        """Serialize to the on-disk JSON shape (camelCase, no nulls)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# DERIVED VIEWS (never persisted)
# =============================================================================

class MonthlyBalance(BaseModel):
    """Income, expenses and balance for one calendar month."""
    model_config = ConfigDict(frozen=True)

    income: float = 0.0
    expenses: float = 0.0
    balance: float = 0.0


class CategoryExpense(BaseModel):
    """One slice of the monthly expense breakdown."""
    model_config = ConfigDict(frozen=True)

    category_id: str
    category_name: str
    category_icon: str
    amount: float
    percentage: float
    color: str


class MonthlySummary(BaseModel):
    """Everything the dashboard shows for a selected month."""
    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(..., ge=1, le=12)
    transactions: list[Transaction] = Field(default_factory=list)
    balance: MonthlyBalance = Field(default_factory=MonthlyBalance)
    expenses_by_category: list[CategoryExpense] = Field(default_factory=list)


class TransactionView(BaseModel):
    """
    A transaction with its references resolved for display.

    Deleting a category or payment method does not touch transactions,
    so either reference may be unresolved.
    """
    model_config = ConfigDict(frozen=True)

    transaction: Transaction
    category_name: str
    category_icon: str
    category_resolved: bool
    payment_method_name: Optional[str] = None
    payment_method_resolved: bool = False
