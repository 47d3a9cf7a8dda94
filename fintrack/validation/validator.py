"""
Transaction Form Validation

DESIGN DECISION: A transaction is edited as a mutable draft and only
becomes an immutable Transaction once it passes validation.

RULES (latest revision):
- Expenses are itemised: at least one item, and every item needs a category.
  The transaction's own category is taken from the first item.
- Income has no items and needs a category of its own.
- Description, a positive amount and a payment method are always required.

IMPORTANT: Validation never raises. An invalid draft is simply not built;
the caller shows the issues and lets the user try again.
"""

import datetime as dt
import re
from typing import Any, Iterable, Optional

from pydantic import BaseModel, Field

from fintrack.logger import get_logger
from fintrack.models.finance import (
    Category,
    Transaction,
    TransactionItem,
    TransactionType,
)
from fintrack.models.validation import ValidationIssue, ValidationResult
from fintrack.validation.reconciler import ItemListEditor, parse_number


logger = get_logger(__name__)

_AMOUNT_CHARS = re.compile(r"[^0-9.]")


def _amount_to_text(amount: float) -> str:
    text = f"{amount:.2f}"
    return text.rstrip("0").rstrip(".") if "." in text else text


class TransactionDraft(BaseModel):
    """
    The state of the transaction form.

    amount is kept as text, exactly as typed, until the draft is built.
    """

    type: TransactionType = TransactionType.EXPENSE
    description: str = ""
    amount: str = ""
    category_id: str = ""
    payment_method_id: str = ""
    date: dt.date = Field(default_factory=dt.date.today)
    notes: str = ""
    items: list[TransactionItem] = Field(default_factory=list)

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "TransactionDraft":
        """Start editing an existing transaction."""
        return cls(
            type=transaction.type,
            description=transaction.description,
            amount=_amount_to_text(transaction.amount),
            category_id=transaction.category_id,
            payment_method_id=transaction.payment_method_id,
            date=transaction.date,
            notes=transaction.notes or "",
            items=list(transaction.items or []),
        )

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    @property
    def amount_value(self) -> float:
        return parse_number(self.amount)

    def set_type(
        self,
        new_type: TransactionType,
        categories: Iterable[Category] = (),
    ) -> None:
        """
        Switch between income and expense.

        Clears the items when switching to income, and the category when
        it belongs to the other type.
        """
        self.type = TransactionType(new_type)
        current = next((c for c in categories if c.id == self.category_id), None)
        if current is not None and current.type != self.type:
            self.category_id = ""
        if self.type == TransactionType.INCOME:
            self.items = []

    def set_amount_text(self, text: str) -> bool:
        """
        Accept typed amount text.

        Keeps digits and a single decimal point with at most two decimals.
        Returns False (amount unchanged) for anything else.
        """
        cleaned = _AMOUNT_CHARS.sub("", text or "")
        parts = cleaned.split(".")
        if len(parts) > 2:
            return False
        if len(parts) == 2 and len(parts[1]) > 2:
            return False
        self.amount = cleaned
        return True

    def items_editor(self) -> ItemListEditor:
        """An item editor over this draft's items and declared amount."""
        return ItemListEditor(self.items, target_total=self.amount_value)

    def apply_items(self, editor: ItemListEditor) -> None:
        """Take back the items (and possibly a new total) from an editor."""
        self.items = editor.items
        if editor.target_total != self.amount_value:
            self.amount = f"{editor.target_total:.2f}"


class TransactionValidator:
    """
    Validates transaction drafts and turns valid ones into transaction fields.
    """

    def validate(self, draft: TransactionDraft) -> ValidationResult:
        """Check a draft against the submission rules."""
        issues = []

        if draft.is_expense:
            if not draft.items:
                issues.append(ValidationIssue(
                    field="items",
                    issue_type="missing",
                    message="Add at least one item to record an expense",
                ))
            elif not all(item.category_id for item in draft.items):
                missing = [item.name or "(unnamed)" for item in draft.items if not item.category_id]
                issues.append(ValidationIssue(
                    field="items",
                    issue_type="missing_category",
                    message=f"Every item needs a category (missing: {', '.join(missing)})",
                ))
        elif not draft.category_id:
            issues.append(ValidationIssue(
                field="category_id",
                issue_type="missing",
                message="Choose a category",
            ))

        if not draft.description.strip():
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Description is required",
            ))

        if not draft.amount.strip():
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
            ))
        elif draft.amount_value <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
            ))

        if not draft.payment_method_id:
            issues.append(ValidationIssue(
                field="payment_method_id",
                issue_type="missing",
                message="Choose a payment method",
            ))

        if draft.is_expense and draft.items:
            reconciliation = draft.items_editor().reconciliation
            if reconciliation.has_mismatch:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="items_mismatch",
                    message=(
                        f"Items add up to {reconciliation.items_total:.2f}, "
                        f"which differs from the amount by {reconciliation.difference:+.2f}"
                    ),
                    severity="warning",
                ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return ValidationResult(is_valid=is_valid, issues=issues)

    def build(self, draft: TransactionDraft) -> Optional[dict[str, Any]]:
        """
        Turn a valid draft into Transaction fields (everything but the id).

        Returns None when the draft is invalid.
        """
        result = self.validate(draft)
        if not result.is_valid:
            logger.info(
                "transaction_submission_blocked",
                type=draft.type.value,
                fields=sorted(result.fields_with_errors()),
            )
            return None

        if draft.is_expense:
            main_category_id = draft.items[0].category_id or draft.category_id
        else:
            main_category_id = draft.category_id

        return {
            "description": draft.description.strip(),
            "amount": draft.amount_value,
            "type": draft.type,
            "date": draft.date,
            "category_id": main_category_id,
            "payment_method_id": draft.payment_method_id,
            "notes": draft.notes.strip() or None,
            "items": list(draft.items) if draft.is_expense and draft.items else None,
        }

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Advisory text shown next to the form."""
        if result.is_valid and not result.warnings:
            return "✅ Ready to save."

        lines = []

        if not result.is_valid:
            lines.append("❌ This transaction can't be saved yet:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please check:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
