"""
Item Reconciliation

An itemised expense has two totals: the amount the user typed (what the
receipt says was paid) and the sum of its item lines. This module computes
item totals, compares the two, and lets the user overwrite the declared
amount with the item sum.

IMPORTANT: A mismatch is reported, never fixed silently. Only an explicit
sync_total() changes the declared amount, with one exception: the first
item added to an empty list sets the declared amount to that item's total.
"""

import re
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict

from fintrack.models.finance import TransactionItem, generate_id


# Differences at or below one cent are treated as a match
MISMATCH_TOLERANCE = 0.01

EDITABLE_ITEM_FIELDS = ("name", "quantity", "unit_price", "discount", "category_id")

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(value: Any, default: float = 0.0) -> float:
    """
    Lenient numeric parsing for form input.

    Takes the leading number of a string ("12.5kg" -> 12.5) and falls
    back to ``default`` for blanks and garbage.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value) if value == value else default
    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return default
    return float(match.group(1))


def calculate_item_total(
    quantity: float,
    unit_price: float,
    discount: Optional[float] = None,
) -> float:
    """max(0, quantity * unit_price - discount). Never negative."""
    subtotal = quantity * unit_price
    return max(0.0, subtotal - (discount or 0.0))


def items_total(items: Iterable[TransactionItem]) -> float:
    """Sum of item totals."""
    return sum((item.total_price for item in items), 0.0)


def total_discount(items: Iterable[TransactionItem]) -> float:
    """Sum of item discounts."""
    return sum((item.discount or 0.0 for item in items), 0.0)


class Reconciliation(BaseModel):
    """Comparison of summed item totals against a declared total."""
    model_config = ConfigDict(frozen=True)

    items_total: float
    total_discount: float
    target_total: float
    difference: float
    has_mismatch: bool


def reconcile(items: Iterable[TransactionItem], target_total: float) -> Reconciliation:
    """
    Compare the items of a transaction with its declared total.

    difference = target_total - items_total; a mismatch is flagged when
    the absolute difference is above one cent.
    """
    items = list(items)
    summed = items_total(items)
    difference = target_total - summed
    return Reconciliation(
        items_total=summed,
        total_discount=total_discount(items),
        target_total=target_total,
        difference=difference,
        has_mismatch=abs(difference) > MISMATCH_TOLERANCE,
    )


class ItemListEditor:
    """
    Editing session over the items of one expense.

    Holds the item list and the declared total the way the transaction
    form does: items are replaced (never mutated) on every change, and
    total_price is recomputed from quantity, unit price and discount.
    """

    def __init__(
        self,
        items: Optional[Iterable[TransactionItem]] = None,
        target_total: float = 0.0,
    ):
        self._items: list[TransactionItem] = list(items or [])
        self.target_total = target_total

    @property
    def items(self) -> list[TransactionItem]:
        return list(self._items)

    @property
    def reconciliation(self) -> Reconciliation:
        return reconcile(self._items, self.target_total)

    def _find_index(self, item_id: str) -> Optional[int]:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        return None

    def add_item(
        self,
        name: str,
        unit_price: Any,
        quantity: Any = 1,
        discount: Any = None,
        category_id: Optional[str] = None,
    ) -> Optional[TransactionItem]:
        """
        Append a new item.

        Returns None (and changes nothing) when the name is blank or the
        price is missing. A missing or zero quantity counts as 1.
        """
        if not name or not name.strip():
            return None
        if unit_price is None or (isinstance(unit_price, str) and not unit_price.strip()):
            return None

        qty = parse_number(quantity) or 1.0
        price = parse_number(unit_price)
        disc = parse_number(discount)

        item = TransactionItem(
            id=generate_id("item", (i.id for i in self._items)),
            name=name.strip(),
            quantity=qty,
            unit_price=price,
            discount=disc if disc > 0 else None,
            category_id=category_id or None,
        )

        was_empty = not self._items
        self._items.append(item)

        if was_empty:
            self.target_total = item.total_price

        return item

    def update_item(self, item_id: str, field: str, value: Any) -> Optional[TransactionItem]:
        """
        Replace one field of an item.

        Numeric fields parse leniently (unparsable input becomes 0).
        Returns the updated item, or None if the id is unknown.
        """
        if field not in EDITABLE_ITEM_FIELDS:
            raise ValueError(f"Item field cannot be edited: {field}")

        index = self._find_index(item_id)
        if index is None:
            return None

        if field == "name":
            new_value = "" if value is None else str(value)
        elif field == "category_id":
            new_value = value or None
        else:
            new_value = parse_number(value)

        current = self._items[index]
        updated = TransactionItem(**{**current.model_dump(), field: new_value})
        self._items[index] = updated
        return updated

    def remove_item(self, item_id: str) -> bool:
        index = self._find_index(item_id)
        if index is None:
            return False
        del self._items[index]
        return True

    def sync_total(self) -> float:
        """Overwrite the declared total with the sum of the items."""
        self.target_total = items_total(self._items)
        return self.target_total
