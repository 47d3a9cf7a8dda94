"""In-memory storage, used by tests and as the last-resort fallback."""

from typing import Optional

from fintrack.models.finance import FinanceDocument
from fintrack.services.storage.interface import FinanceStorageInterface
from fintrack.services.storage.json_file import utc_timestamp


class InMemoryStorage(FinanceStorageInterface):
    """Keeps the last written document in memory. Nothing survives a restart."""

    def __init__(self, document: Optional[FinanceDocument] = None):
        self._document = document
        self.write_count = 0

    def describe(self) -> str:
        return "memory (not persisted)"

    def read_document(self) -> Optional[FinanceDocument]:
        return self._document

    def write_document(self, document: FinanceDocument) -> FinanceDocument:
        self._document = document.model_copy(update={"last_saved": utc_timestamp()})
        self.write_count += 1
        return self._document
