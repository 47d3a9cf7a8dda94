"""
Transaction Store

The in-memory data set of the tracker: categories, payment methods and
transactions, in insertion order. Every change replaces whole records
(they are immutable) and, once the store has been loaded, schedules a
debounced save of the complete document.

INTEGRITY RULES:
- Ids are generated here, timestamp based, and never change
- Deleting a category or payment method never touches transactions;
  the references simply stop resolving
- No tombstones: deleted records are gone
"""

from typing import Any, Optional, TypeVar

from fintrack.logger import get_logger
from fintrack.models.defaults import (
    DEFAULT_CATEGORIES,
    DEFAULT_PAYMENT_METHODS,
    UNRESOLVED_CATEGORY_ICON,
    UNRESOLVED_CATEGORY_LABEL,
)
from fintrack.models.finance import (
    Category,
    FinanceDocument,
    FinanceRecord,
    PaymentMethod,
    Transaction,
    TransactionView,
    generate_id,
)
from fintrack.services.storage import DebouncedSaver, FinanceStorageInterface


logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=FinanceRecord)


def _replace(record: RecordT, updates: dict[str, Any]) -> RecordT:
    """A copy of record with some fields replaced (and re-validated)."""
    model = type(record)
    unknown = set(updates) - set(model.model_fields)
    if unknown:
        raise ValueError(f"Unknown {model.__name__} fields: {sorted(unknown)}")
    data = record.model_dump()
    data.update(updates)
    data["id"] = record.id
    return model(**data)


class FinanceStore:
    """
    Ordered collections of categories, payment methods and transactions.

    Args:
        saver: Receives the whole document after every change. Changes made
            before load_document()/load_from() are not saved, so defaults
            never overwrite a data file that has not been read yet.
    """

    def __init__(self, saver: Optional[DebouncedSaver] = None):
        self._saver = saver
        self._categories: list[Category] = list(DEFAULT_CATEGORIES)
        self._payment_methods: list[PaymentMethod] = list(DEFAULT_PAYMENT_METHODS)
        self._transactions: list[Transaction] = []
        self._initialized = False

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    @property
    def payment_methods(self) -> list[PaymentMethod]:
        return list(self._payment_methods)

    @property
    def transactions(self) -> list[Transaction]:
        return list(self._transactions)

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def saver(self) -> Optional[DebouncedSaver]:
        return self._saver

    def _all_ids(self) -> set[str]:
        ids = {c.id for c in self._categories}
        ids.update(m.id for m in self._payment_methods)
        ids.update(t.id for t in self._transactions)
        return ids

    def _changed(self, event: str, **context: Any) -> None:
        logger.debug(event, **context)
        if self._initialized and self._saver is not None:
            self._saver.schedule(self.to_document())

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load_document(self, document: Optional[FinanceDocument]) -> None:
        """
        Replace the in-memory data with a loaded document.

        Empty category or payment method lists keep the current ones
        (the defaults, for a fresh store). Marks the store as initialized.
        """
        if document is not None:
            if document.categories:
                self._categories = list(document.categories)
            if document.payment_methods:
                self._payment_methods = list(document.payment_methods)
            self._transactions = list(document.transactions)
        self._initialized = True
        logger.info(
            "store_loaded",
            categories=len(self._categories),
            payment_methods=len(self._payment_methods),
            transactions=len(self._transactions),
        )

    def load_from(self, storage: FinanceStorageInterface) -> Optional[FinanceDocument]:
        """Read the document from storage and load it."""
        document = storage.read_document()
        self.load_document(document)
        return document

    def to_document(self) -> FinanceDocument:
        return FinanceDocument(
            categories=list(self._categories),
            payment_methods=list(self._payment_methods),
            transactions=list(self._transactions),
        )

    def clear_all_data(self) -> None:
        """Remove every transaction and restore default categories and payment methods."""
        self._transactions = []
        self._categories = list(DEFAULT_CATEGORIES)
        self._payment_methods = list(DEFAULT_PAYMENT_METHODS)
        self._changed("store_cleared")

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def add_transaction(self, **fields: Any) -> Transaction:
        """Create a transaction from its fields (everything but the id)."""
        fields.pop("id", None)
        transaction = Transaction(id=generate_id("tr", self._all_ids()), **fields)
        self._transactions.append(transaction)
        self._changed("transaction_added", transaction_id=transaction.id)
        return transaction

    def update_transaction(self, transaction_id: str, **updates: Any) -> Optional[Transaction]:
        """Replace some fields of a transaction. Unknown ids are ignored."""
        for index, existing in enumerate(self._transactions):
            if existing.id == transaction_id:
                updated = _replace(existing, updates)
                self._transactions[index] = updated
                self._changed("transaction_updated", transaction_id=transaction_id)
                return updated
        return None

    def delete_transaction(self, transaction_id: str) -> bool:
        remaining = [t for t in self._transactions if t.id != transaction_id]
        if len(remaining) == len(self._transactions):
            return False
        self._transactions = remaining
        self._changed("transaction_deleted", transaction_id=transaction_id)
        return True

    def get_transaction_by_id(self, transaction_id: str) -> Optional[Transaction]:
        return next((t for t in self._transactions if t.id == transaction_id), None)

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def add_category(self, **fields: Any) -> Category:
        fields.pop("id", None)
        category = Category(id=generate_id("cat", self._all_ids()), **fields)
        self._categories.append(category)
        self._changed("category_added", category_id=category.id)
        return category

    def update_category(self, category_id: str, **updates: Any) -> Optional[Category]:
        for index, existing in enumerate(self._categories):
            if existing.id == category_id:
                updated = _replace(existing, updates)
                self._categories[index] = updated
                self._changed("category_updated", category_id=category_id)
                return updated
        return None

    def delete_category(self, category_id: str) -> bool:
        """Delete a category. Transactions that use it are kept as they are."""
        remaining = [c for c in self._categories if c.id != category_id]
        if len(remaining) == len(self._categories):
            return False
        self._categories = remaining
        orphaned = sum(1 for t in self._transactions if t.category_id == category_id)
        self._changed("category_deleted", category_id=category_id, orphaned_transactions=orphaned)
        return True

    def get_category_by_id(self, category_id: str) -> Optional[Category]:
        return next((c for c in self._categories if c.id == category_id), None)

    # -------------------------------------------------------------------------
    # Payment methods
    # -------------------------------------------------------------------------

    def add_payment_method(self, **fields: Any) -> PaymentMethod:
        fields.pop("id", None)
        method = PaymentMethod(id=generate_id("pm", self._all_ids()), **fields)
        self._payment_methods.append(method)
        self._changed("payment_method_added", payment_method_id=method.id)
        return method

    def update_payment_method(self, method_id: str, **updates: Any) -> Optional[PaymentMethod]:
        for index, existing in enumerate(self._payment_methods):
            if existing.id == method_id:
                updated = _replace(existing, updates)
                self._payment_methods[index] = updated
                self._changed("payment_method_updated", payment_method_id=method_id)
                return updated
        return None

    def delete_payment_method(self, method_id: str) -> bool:
        remaining = [m for m in self._payment_methods if m.id != method_id]
        if len(remaining) == len(self._payment_methods):
            return False
        self._payment_methods = remaining
        self._changed("payment_method_deleted", payment_method_id=method_id)
        return True

    def get_payment_method_by_id(self, method_id: str) -> Optional[PaymentMethod]:
        return next((m for m in self._payment_methods if m.id == method_id), None)

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def describe_transaction(self, transaction: Transaction) -> TransactionView:
        """Resolve a transaction's category and payment method for display."""
        category = self.get_category_by_id(transaction.category_id)
        method = self.get_payment_method_by_id(transaction.payment_method_id)
        return TransactionView(
            transaction=transaction,
            category_name=category.name if category else UNRESOLVED_CATEGORY_LABEL,
            category_icon=category.icon if category else UNRESOLVED_CATEGORY_ICON,
            category_resolved=category is not None,
            payment_method_name=method.name if method else None,
            payment_method_resolved=method is not None,
        )
