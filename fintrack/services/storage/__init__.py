"""
Storage Services Package

Provides the storage port and its implementations for the finance
document: a user-selected JSON file, a local fallback store and an
in-memory store, plus fallback chaining and debounced saving.
"""

from fintrack.services.storage.interface import (
    CorruptDocumentError,
    FinanceStorageInterface,
    StorageError,
    StoragePermissionError,
    StorageUnavailableError,
)
from fintrack.services.storage.json_file import JsonFileStorage, LocalStorage
from fintrack.services.storage.memory import InMemoryStorage
from fintrack.services.storage.fallback import FallbackStorage
from fintrack.services.storage.debounce import DebouncedSaver
from fintrack.services.storage.registry import DataFileRegistry

__all__ = [
    # Interface
    "FinanceStorageInterface",
    # Exceptions
    "CorruptDocumentError",
    "StorageError",
    "StoragePermissionError",
    "StorageUnavailableError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
    "LocalStorage",
    "FallbackStorage",
    # Helpers
    "DataFileRegistry",
    "DebouncedSaver",
]
