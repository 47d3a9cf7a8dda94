"""
Fallback Storage

DESIGN DECISION: Storage problems never stop the application.
If the primary backend fails (permission denied, unreadable file,
missing directory), we switch to the fallback backend for the rest
of the session and keep an advisory message for the UI.

Fallbacks compose: FallbackStorage(FallbackStorage(file, local), memory)
degrades file -> local store -> memory.
"""

from typing import Optional

from fintrack.logger import get_logger
from fintrack.models.finance import FinanceDocument
from fintrack.services.storage.interface import (
    FinanceStorageInterface,
    StorageError,
)


logger = get_logger(__name__)


class FallbackStorage(FinanceStorageInterface):
    """
    Primary backend with a fallback.

    The switch is one-way: once the primary has failed we stop using it,
    so reads and writes never alternate between two documents.
    """

    def __init__(
        self,
        primary: FinanceStorageInterface,
        fallback: FinanceStorageInterface,
    ):
        self._primary = primary
        self._fallback = fallback
        self._active = primary
        self.error: Optional[str] = None

    @property
    def active(self) -> FinanceStorageInterface:
        return self._active

    @property
    def using_fallback(self) -> bool:
        return self._active is self._fallback

    @property
    def advisory(self) -> Optional[str]:
        """The first advisory message found in this chain, if any."""
        if self.error:
            return self.error
        for backend in (self._primary, self._fallback):
            if isinstance(backend, FallbackStorage) and backend.advisory:
                return backend.advisory
        return None

    def describe(self) -> str:
        return self._active.describe()

    def _engage_fallback(self, error: StorageError, operation: str) -> None:
        self.error = (
            f"Could not use {self._primary.describe()} ({error}). "
            f"Your data is being kept in {self._fallback.describe()}."
        )
        logger.warning(
            "storage_fallback_engaged",
            operation=operation,
            primary=self._primary.describe(),
            fallback=self._fallback.describe(),
            error=str(error),
        )
        self._active = self._fallback

    def read_document(self) -> Optional[FinanceDocument]:
        if not self.using_fallback:
            try:
                return self._primary.read_document()
            except StorageError as e:
                self._engage_fallback(e, "read")
        return self._fallback.read_document()

    def write_document(self, document: FinanceDocument) -> FinanceDocument:
        if not self.using_fallback:
            try:
                return self._primary.write_document(document)
            except StorageError as e:
                self._engage_fallback(e, "write")
        return self._fallback.write_document(document)
