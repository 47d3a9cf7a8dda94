"""
Abstract Storage Interface

DESIGN DECISION: The finance document is read and written through a
single storage port. This allows us to:
1. Keep the store, aggregator and reconciler storage-agnostic
2. Use in-memory storage for testing
3. Fall back to a local store when the chosen file cannot be used
4. Add new backends without touching business logic

The interface is intentionally tiny - the whole data set is one
document, read wholesale on load and written wholesale on save.
"""

from abc import ABC, abstractmethod
from typing import Optional

from fintrack.models.finance import FinanceDocument


class FinanceStorageInterface(ABC):
    """
    Abstract interface for finance document storage.

    Any storage implementation (JSON file, local store, memory)
    must implement these methods.
    """

    @abstractmethod
    def read_document(self) -> Optional[FinanceDocument]:
        """
        Read the whole finance document.

        Returns:
            The stored document, or None if nothing has been saved yet

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def write_document(self, document: FinanceDocument) -> FinanceDocument:
        """
        Replace the stored document.

        Args:
            document: The complete data set to persist

        Returns:
            The document as written (with last_saved set)

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable name of where data lives."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StoragePermissionError(StorageError):
    """The backend refused access to the document."""
    pass


class CorruptDocumentError(StorageError):
    """The stored document could not be parsed."""
    pass


class StorageUnavailableError(StorageError):
    """The backend's location could not be read from or written to."""
    pass
