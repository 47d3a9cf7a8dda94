"""Tests for transaction drafts and submission validation."""

from datetime import date

import pytest

from fintrack.models import (
    DEFAULT_CATEGORIES,
    Transaction,
    TransactionItem,
    TransactionType,
)
from fintrack.validation import ItemListEditor, TransactionDraft, TransactionValidator


def item(item_id="item-1", quantity=1, unit_price=50, category_id="cat-20", discount=None):
    return TransactionItem(
        id=item_id,
        name=f"Item {item_id}",
        quantity=quantity,
        unit_price=unit_price,
        discount=discount,
        category_id=category_id,
    )


def expense_draft(**overrides) -> TransactionDraft:
    data = {
        "type": TransactionType.EXPENSE,
        "description": "Mercado",
        "amount": "50",
        "payment_method_id": "pm-1",
        "date": date(2024, 1, 15),
        "items": [item()],
    }
    data.update(overrides)
    return TransactionDraft(**data)


def income_draft(**overrides) -> TransactionDraft:
    data = {
        "type": TransactionType.INCOME,
        "description": "Salário",
        "amount": "5000",
        "category_id": "cat-50",
        "payment_method_id": "pm-5",
        "date": date(2024, 1, 5),
    }
    data.update(overrides)
    return TransactionDraft(**data)


@pytest.fixture
def validator():
    return TransactionValidator()


class TestExpenseValidation:
    """Tests for the itemised expense rules."""

    def test_valid_expense(self, validator):
        """Test that a complete expense passes."""
        result = validator.validate(expense_draft())
        assert result.is_valid is True
        assert result.issues == []

    def test_expense_without_items_is_rejected(self, validator):
        """Test that an expense needs at least one item."""
        draft = expense_draft(items=[], category_id="cat-20")
        result = validator.validate(draft)
        assert result.is_valid is False
        assert "items" in result.fields_with_errors()
        assert validator.build(draft) is None

    def test_item_without_category_is_rejected(self, validator):
        """Test that every item needs a category."""
        draft = expense_draft(items=[item(), item("item-2", category_id=None)])
        result = validator.validate(draft)
        assert result.is_valid is False
        assert any(i.issue_type == "missing_category" for i in result.issues)

    def test_expense_category_comes_from_first_item(self, validator):
        """Test that the transaction category mirrors the first item."""
        draft = expense_draft(
            category_id="cat-1",
            items=[item("item-1", category_id="cat-21"), item("item-2", category_id="cat-20")],
            amount="100",
        )
        fields = validator.build(draft)
        assert fields["category_id"] == "cat-21"
        assert len(fields["items"]) == 2

    def test_items_mismatch_is_a_warning(self, validator):
        """Test that a declared amount different from the items still saves."""
        draft = expense_draft(
            amount="25",
            items=[item("a", quantity=2, unit_price=10), item("b", quantity=1, unit_price=5, discount=1)],
        )
        result = validator.validate(draft)
        assert result.is_valid is True
        assert len(result.warnings) == 1
        assert validator.build(draft)["amount"] == 25


class TestIncomeValidation:
    """Tests for income rules."""

    def test_valid_income(self, validator):
        """Test that income needs no items."""
        fields = validator.build(income_draft())
        assert fields is not None
        assert fields["category_id"] == "cat-50"
        assert fields["items"] is None

    def test_income_requires_category(self, validator):
        """Test that income needs a category of its own."""
        result = validator.validate(income_draft(category_id=""))
        assert result.is_valid is False
        assert result.fields_with_errors() == {"category_id"}


class TestCommonRules:
    """Tests for rules shared by both types."""

    def test_description_required(self, validator):
        """Test that a blank description is rejected."""
        result = validator.validate(income_draft(description="   "))
        assert "description" in result.fields_with_errors()

    def test_amount_required(self, validator):
        """Test that a missing amount is rejected."""
        result = validator.validate(income_draft(amount=""))
        assert any(
            i.field == "amount" and i.issue_type == "missing" for i in result.issues
        )

    def test_amount_must_be_positive(self, validator):
        """Test that zero is not an amount."""
        result = validator.validate(income_draft(amount="0"))
        assert any(
            i.field == "amount" and i.issue_type == "invalid_value" for i in result.issues
        )

    def test_payment_method_required(self, validator):
        """Test that a payment method must be chosen."""
        result = validator.validate(income_draft(payment_method_id=""))
        assert result.fields_with_errors() == {"payment_method_id"}

    def test_build_cleans_fields(self, validator):
        """Test trimming and empty notes."""
        fields = validator.build(income_draft(description="  Salário  ", notes="   "))
        assert fields["description"] == "Salário"
        assert fields["notes"] is None
        assert fields["amount"] == 5000.0
        assert fields["date"] == date(2024, 1, 5)

    def test_built_fields_make_a_transaction(self, validator):
        """Test that built fields are accepted by the Transaction model."""
        fields = validator.build(expense_draft(notes="feira"))
        transaction = Transaction(id="tr-1", **fields)
        assert transaction.notes == "feira"
        assert transaction.items[0].category_id == "cat-20"

    def test_summary_messages(self, validator):
        """Test the advisory text."""
        assert validator.get_user_friendly_summary(validator.validate(income_draft())).startswith("✅")

        blocked = validator.get_user_friendly_summary(
            validator.validate(income_draft(description=""))
        )
        assert blocked.startswith("❌")
        assert "Description is required" in blocked


class TestTransactionDraft:
    """Tests for the editable form state."""

    def test_switch_to_income_clears_items_and_expense_category(self):
        """Test switching type drops what doesn't belong to the new type."""
        draft = expense_draft(category_id="cat-1")
        draft.set_type(TransactionType.INCOME, DEFAULT_CATEGORIES)
        assert draft.type == TransactionType.INCOME
        assert draft.items == []
        assert draft.category_id == ""

    def test_switch_keeps_matching_category(self):
        """Test that a category of the new type is kept."""
        draft = income_draft()
        draft.set_type(TransactionType.INCOME, DEFAULT_CATEGORIES)
        assert draft.category_id == "cat-50"

    @pytest.mark.parametrize("text,accepted,amount", [
        ("12.34", True, "12.34"),
        ("R$ 12", True, "12"),
        ("12.", True, "12."),
        ("12.345", False, "50"),
        ("1.2.3", False, "50"),
    ])
    def test_amount_text(self, text, accepted, amount):
        """Test digit and two-decimal amount entry."""
        draft = expense_draft()
        assert draft.set_amount_text(text) is accepted
        assert draft.amount == amount

    def test_from_transaction(self):
        """Test loading an existing transaction into the form."""
        transaction = Transaction(
            id="tr-1",
            description="Mercado",
            amount=12.5,
            type=TransactionType.EXPENSE,
            date=date(2024, 2, 1),
            category_id="cat-20",
            payment_method_id="pm-2",
            items=[item(unit_price=12.5)],
        )
        draft = TransactionDraft.from_transaction(transaction)
        assert draft.amount == "12.5"
        assert draft.notes == ""
        assert draft.items == transaction.items

    def test_apply_items_after_sync(self):
        """Test that syncing in the editor updates the draft amount."""
        draft = expense_draft(amount="25", items=[])
        editor = draft.items_editor()
        assert isinstance(editor, ItemListEditor)
        editor.add_item("Arroz", unit_price=10, quantity=2)
        editor.add_item("Feijão", unit_price=4)
        editor.sync_total()
        draft.apply_items(editor)
        assert len(draft.items) == 2
        assert draft.amount == "24.00"
        assert draft.amount_value == 24


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
