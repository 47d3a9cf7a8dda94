"""
Main Orchestrator for the Finance Tracker

This module ties the components together and defines the flows the
UI drives:
1. Startup (settings → storage chain → load document → store)
2. Transaction submission (draft → validate → add or update)
3. Data file connect / disconnect

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing is written before the stored document has been loaded
- An invalid draft never reaches the store
- Storage problems degrade to the fallback store, never to an error page
"""

from pathlib import Path
from typing import Optional, Union

from fintrack.config import Settings, get_settings
from fintrack.logger import configure_logging, get_logger
from fintrack.models.finance import Transaction
from fintrack.models.validation import ValidationResult
from fintrack.services.storage import (
    DataFileRegistry,
    DebouncedSaver,
    FallbackStorage,
    FinanceStorageInterface,
    InMemoryStorage,
    JsonFileStorage,
    LocalStorage,
)
from fintrack.store import FinanceStore
from fintrack.validation import TransactionDraft, TransactionValidator


logger = get_logger(__name__)


class TransactionFlow:
    """
    Orchestrates transaction submission.

    Flow:
    1. Validate → the draft is checked against the form rules
    2. Build → valid drafts become transaction fields
    3. Save → added to (or updated in) the store, which schedules the write

    Invalid drafts stop at step 1 and come back with their issues.
    """

    def __init__(
        self,
        store: FinanceStore,
        validator: Optional[TransactionValidator] = None,
    ):
        self._store = store
        self._validator = validator or TransactionValidator()

    @property
    def validator(self) -> TransactionValidator:
        return self._validator

    def submit(
        self,
        draft: TransactionDraft,
        transaction_id: Optional[str] = None,
    ) -> tuple[Optional[Transaction], ValidationResult]:
        """
        Save a draft as a new transaction, or over an existing one.

        Returns:
            (transaction, validation_result)

        transaction is None when validation failed or the transaction
        to update no longer exists.
        """
        result = self._validator.validate(draft)
        fields = self._validator.build(draft) if result.is_valid else None
        if fields is None:
            return None, result

        if transaction_id:
            transaction = self._store.update_transaction(transaction_id, **fields)
            if transaction is None:
                logger.warning("transaction_update_missing", transaction_id=transaction_id)
        else:
            transaction = self._store.add_transaction(**fields)

        if transaction is not None:
            logger.info(
                "transaction_saved",
                transaction_id=transaction.id,
                type=transaction.type.value,
                items=len(transaction.items or []),
            )
        return transaction, result

    def delete(self, transaction_id: str) -> bool:
        return self._store.delete_transaction(transaction_id)


def get_registry(settings: Optional[Settings] = None) -> DataFileRegistry:
    """The registry remembering the selected data file."""
    settings = settings or get_settings()
    storage_settings = settings.storage
    return DataFileRegistry(storage_settings.local_path / storage_settings.registry_file)


def resolve_data_file(settings: Optional[Settings] = None) -> Optional[Path]:
    """The configured data file, or else the remembered one."""
    settings = settings or get_settings()
    configured = settings.storage.data_file
    if configured:
        return Path(configured).expanduser()
    return get_registry(settings).recall()


def build_storage(
    settings: Optional[Settings] = None,
    data_file: Optional[Union[str, Path]] = None,
) -> FallbackStorage:
    """
    The storage chain: data file → local store → memory.

    Without a data file the chain starts at the local store.
    """
    settings = settings or get_settings()
    storage_settings = settings.storage

    local = LocalStorage(storage_settings.local_path, storage_settings.local_key)
    chain = FallbackStorage(local, InMemoryStorage())
    if data_file is not None:
        chain = FallbackStorage(JsonFileStorage(data_file), chain)
    return chain


def create_app_components(
    settings: Optional[Settings] = None,
    data_file: Optional[Union[str, Path]] = None,
    use_storage: bool = True,
) -> tuple[FinanceStore, TransactionFlow, FinanceStorageInterface]:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use (defaults to get_settings())
        data_file: Data file to open; defaults to the configured or
            remembered one
        use_storage: Whether to persist at all.
                    Set to False for testing without touching disk.

    Returns:
        (store, transaction_flow, storage)
    """
    settings = settings or get_settings()
    configure_logging(settings.app.log_level)

    if use_storage:
        if data_file is None:
            data_file = resolve_data_file(settings)
        storage: FinanceStorageInterface = build_storage(settings, data_file)
    else:
        storage = InMemoryStorage()

    saver = DebouncedSaver(storage, delay_seconds=settings.storage.debounce_seconds)
    store = FinanceStore(saver=saver)
    store.load_from(storage)

    logger.info(
        "app_components_created",
        backend=storage.describe(),
        environment=settings.app.app_environment,
    )
    return store, TransactionFlow(store), storage


def connect_data_file(
    current: FinanceStore,
    data_file: Union[str, Path],
    settings: Optional[Settings] = None,
) -> tuple[FinanceStore, TransactionFlow, FinanceStorageInterface]:
    """
    Switch to a user-selected data file and remember it.

    If the file already holds data, that data is loaded. Otherwise the
    current data is written to it so nothing is lost in the switch.
    """
    settings = settings or get_settings()
    if current.saver is not None:
        current.saver.flush()

    path = get_registry(settings).remember(data_file)
    store, flow, storage = create_app_components(settings, data_file=path)

    if storage.read_document() is None:
        document = storage.write_document(current.to_document())
        store.load_document(document)
        logger.info("data_file_initialized", path=str(path))
    return store, flow, storage


def disconnect_data_file(
    current: FinanceStore,
    settings: Optional[Settings] = None,
) -> tuple[FinanceStore, TransactionFlow, FinanceStorageInterface]:
    """Forget the selected data file and go back to the local store."""
    settings = settings or get_settings()
    if current.saver is not None:
        current.saver.flush()

    get_registry(settings).forget()
    storage = build_storage(settings)
    saver = DebouncedSaver(storage, delay_seconds=settings.storage.debounce_seconds)
    store = FinanceStore(saver=saver)
    store.load_from(storage)
    return store, TransactionFlow(store), storage
