"""
Debounced Save

Rapid successive edits coalesce into one write: every schedule() call
restarts the timer, and only the most recent document is written once
the quiet period elapses.

There is no retry. A failed write is logged and kept in last_error;
the next change schedules a fresh attempt.
"""

import threading
from typing import Callable, Optional

from fintrack.logger import get_logger
from fintrack.models.finance import FinanceDocument
from fintrack.services.storage.interface import (
    FinanceStorageInterface,
    StorageError,
)


logger = get_logger(__name__)


class DebouncedSaver:
    """
    Writes the finance document after a quiet period.

    Args:
        storage: Backend that receives the write
        delay_seconds: Quiet period before writing (default 500ms)
        on_saved: Optional callback with the document as written
    """

    def __init__(
        self,
        storage: FinanceStorageInterface,
        delay_seconds: float = 0.5,
        on_saved: Optional[Callable[[FinanceDocument], None]] = None,
    ):
        self._storage = storage
        self._delay = delay_seconds
        self._on_saved = on_saved
        self._lock = threading.Lock()
        # held for the whole take-and-write, so writes land in schedule order
        self._write_lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[FinanceDocument] = None
        self._idle = threading.Event()
        self._idle.set()
        self.last_error: Optional[str] = None
        self.last_saved: Optional[str] = None

    @property
    def storage(self) -> FinanceStorageInterface:
        return self._storage

    @property
    def has_pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def schedule(self, document: FinanceDocument) -> None:
        """Request a save; resets the timer if one is already running."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = document
            self._idle.clear()
            self._timer = threading.Timer(self._delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def flush(self) -> bool:
        """
        Write the pending document now.

        Waits for a write already in progress, then writes whatever is
        pending. Returns True if a document was written, False if nothing
        was pending or the write failed.
        """
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        return self._write_pending()

    def cancel(self) -> None:
        """Drop the pending document without writing it."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._pending = None
        self._idle.set()

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Block until no write is pending. Returns False on timeout."""
        return self._idle.wait(timeout)

    def _fire(self) -> None:
        with self._lock:
            self._timer = None
        self._write_pending()

    def _write_pending(self) -> bool:
        with self._write_lock:
            with self._lock:
                document = self._pending
                self._pending = None
            if document is None:
                self._release_idle()
                return False
            return self._write(document)

    def _release_idle(self) -> None:
        with self._lock:
            if self._pending is None:
                self._idle.set()

    def _write(self, document: FinanceDocument) -> bool:
        try:
            try:
                written = self._storage.write_document(document)
            except StorageError as e:
                self.last_error = str(e)
                logger.error(
                    "debounced_save_failed",
                    backend=self._storage.describe(),
                    error=str(e),
                )
                return False

            self.last_error = None
            self.last_saved = written.last_saved
            logger.debug(
                "debounced_save_completed",
                backend=self._storage.describe(),
                last_saved=written.last_saved,
            )
            if self._on_saved is not None:
                self._on_saved(written)
            return True
        finally:
            self._release_idle()
