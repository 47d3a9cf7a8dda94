"""Services package."""

from fintrack.services.storage import (
    CorruptDocumentError,
    DataFileRegistry,
    DebouncedSaver,
    FallbackStorage,
    FinanceStorageInterface,
    InMemoryStorage,
    JsonFileStorage,
    LocalStorage,
    StorageError,
    StoragePermissionError,
    StorageUnavailableError,
)

__all__ = [
    # Storage services
    "CorruptDocumentError",
    "DataFileRegistry",
    "DebouncedSaver",
    "FallbackStorage",
    "FinanceStorageInterface",
    "InMemoryStorage",
    "JsonFileStorage",
    "LocalStorage",
    "StorageError",
    "StoragePermissionError",
    "StorageUnavailableError",
]
