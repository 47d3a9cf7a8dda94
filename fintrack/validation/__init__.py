"""Transaction validation and item reconciliation."""

from fintrack.validation.reconciler import (
    MISMATCH_TOLERANCE,
    ItemListEditor,
    Reconciliation,
    calculate_item_total,
    items_total,
    parse_number,
    reconcile,
    total_discount,
)
from fintrack.validation.validator import TransactionDraft, TransactionValidator

__all__ = [
    "MISMATCH_TOLERANCE",
    "ItemListEditor",
    "Reconciliation",
    "TransactionDraft",
    "TransactionValidator",
    "calculate_item_total",
    "items_total",
    "parse_number",
    "reconcile",
    "total_discount",
]
