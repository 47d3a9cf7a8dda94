"""Tests for debounced saving."""

import time
from datetime import date

import pytest

from fintrack.models import FinanceDocument, Transaction, TransactionType
from fintrack.services.storage import (
    DebouncedSaver,
    FinanceStorageInterface,
    InMemoryStorage,
    StoragePermissionError,
)


class BrokenStorage(FinanceStorageInterface):
    """Backend whose writes always fail."""

    def describe(self) -> str:
        return "broken file"

    def read_document(self):
        return None

    def write_document(self, document):
        raise StoragePermissionError("permission denied")


class SlowStorage(InMemoryStorage):
    """In-memory backend whose writes take a while."""

    def __init__(self, seconds: float):
        super().__init__()
        self.seconds = seconds

    def write_document(self, document):
        time.sleep(self.seconds)
        return super().write_document(document)


def document_with(n: int) -> FinanceDocument:
    return FinanceDocument(transactions=[
        Transaction(
            id=f"tr-{i}",
            description=f"Compra {i}",
            amount=10,
            type=TransactionType.EXPENSE,
            date=date(2024, 1, 1),
        )
        for i in range(n)
    ])


class TestDebouncedSaver:
    """Tests for coalescing bursts of changes into one write."""

    def test_burst_writes_once(self):
        """Test that only the last document of a burst is written."""
        storage = InMemoryStorage()
        saver = DebouncedSaver(storage, delay_seconds=0.2)
        for n in range(1, 4):
            saver.schedule(document_with(n))

        assert saver.wait_idle(timeout=5) is True
        assert storage.write_count == 1
        assert len(storage.read_document().transactions) == 3
        assert saver.last_saved is not None

    def test_nothing_written_before_delay(self):
        """Test that scheduling alone doesn't write."""
        storage = InMemoryStorage()
        saver = DebouncedSaver(storage, delay_seconds=60)
        saver.schedule(document_with(1))
        assert storage.write_count == 0
        assert saver.has_pending is True
        saver.cancel()

    def test_flush_writes_now(self):
        """Test writing the pending document immediately."""
        storage = InMemoryStorage()
        saver = DebouncedSaver(storage, delay_seconds=60)
        saver.schedule(document_with(2))
        assert saver.flush() is True
        assert storage.write_count == 1
        assert saver.has_pending is False
        assert saver.wait_idle(timeout=0) is True

    def test_flush_without_pending(self):
        """Test that flushing nothing writes nothing."""
        storage = InMemoryStorage()
        saver = DebouncedSaver(storage, delay_seconds=60)
        assert saver.flush() is False
        assert storage.write_count == 0

    def test_cancel_drops_pending(self):
        """Test that a cancelled save never happens."""
        storage = InMemoryStorage()
        saver = DebouncedSaver(storage, delay_seconds=60)
        saver.schedule(document_with(1))
        saver.cancel()
        assert saver.has_pending is False
        assert saver.wait_idle(timeout=0) is True
        assert saver.flush() is False
        assert storage.write_count == 0

    def test_failed_write_is_reported(self):
        """Test that a failed write is logged and kept, not raised."""
        saver = DebouncedSaver(BrokenStorage(), delay_seconds=60)
        saver.schedule(document_with(1))
        assert saver.flush() is False
        assert "permission denied" in saver.last_error
        assert saver.wait_idle(timeout=0) is True

    def test_success_clears_last_error(self):
        """Test that a later successful write clears the error."""
        saver = DebouncedSaver(InMemoryStorage(), delay_seconds=60)
        saver.last_error = "earlier failure"
        saver.schedule(document_with(1))
        assert saver.flush() is True
        assert saver.last_error is None

    def test_on_saved_callback(self):
        """Test that the callback receives the document as written."""
        written = []
        saver = DebouncedSaver(InMemoryStorage(), delay_seconds=60, on_saved=written.append)
        saver.schedule(document_with(1))
        saver.flush()
        assert len(written) == 1
        assert written[0].last_saved is not None

    def test_flush_during_slow_write_keeps_newest(self):
        """Test that a write in progress can't overwrite a newer flushed document."""
        storage = SlowStorage(0.3)
        saver = DebouncedSaver(storage, delay_seconds=0.05)
        saver.schedule(document_with(1))
        time.sleep(0.1)

        saver.schedule(document_with(2))
        assert saver.flush() is True
        assert saver.wait_idle(timeout=5) is True

        assert storage.write_count == 2
        assert len(storage.read_document().transactions) == 2

    def test_writes_never_overlap(self):
        """Test that a timer write and a flush run one after the other."""
        active = []
        overlaps = []

        class TrackingStorage(SlowStorage):
            def write_document(self, document):
                if active:
                    overlaps.append(document)
                active.append(document)
                try:
                    return super().write_document(document)
                finally:
                    active.pop()

        saver = DebouncedSaver(TrackingStorage(0.2), delay_seconds=0.01)
        saver.schedule(document_with(1))
        time.sleep(0.05)
        saver.schedule(document_with(2))
        saver.flush()
        assert saver.wait_idle(timeout=5) is True
        assert overlaps == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
