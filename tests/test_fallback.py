"""Tests for falling back when the primary storage can't be used."""

from typing import Optional

import pytest

from fintrack.models import FinanceDocument
from fintrack.services.storage import (
    FallbackStorage,
    FinanceStorageInterface,
    InMemoryStorage,
    JsonFileStorage,
    LocalStorage,
    StoragePermissionError,
)


class BrokenStorage(FinanceStorageInterface):
    """Backend that refuses every operation, counting attempts."""

    def __init__(self):
        self.calls = 0

    def describe(self) -> str:
        return "broken file"

    def read_document(self) -> Optional[FinanceDocument]:
        self.calls += 1
        raise StoragePermissionError("permission denied")

    def write_document(self, document: FinanceDocument) -> FinanceDocument:
        self.calls += 1
        raise StoragePermissionError("permission denied")


class TestFallbackStorage:
    """Tests for the one-way switch to the fallback backend."""

    def test_healthy_primary_is_used(self):
        """Test that nothing changes while the primary works."""
        primary, fallback = InMemoryStorage(), InMemoryStorage()
        storage = FallbackStorage(primary, fallback)
        storage.write_document(FinanceDocument())
        assert primary.write_count == 1
        assert fallback.write_count == 0
        assert storage.using_fallback is False
        assert storage.advisory is None

    def test_read_failure_switches(self):
        """Test that a failed read is answered by the fallback."""
        stored = FinanceDocument(last_saved="2024-01-01T00:00:00.000Z")
        storage = FallbackStorage(BrokenStorage(), InMemoryStorage(stored))
        assert storage.read_document() == stored
        assert storage.using_fallback is True
        assert "broken file" in storage.advisory
        assert "memory" in storage.advisory

    def test_write_failure_switches(self):
        """Test that a failed write lands in the fallback."""
        fallback = InMemoryStorage()
        storage = FallbackStorage(BrokenStorage(), fallback)
        written = storage.write_document(FinanceDocument())
        assert written.last_saved is not None
        assert fallback.write_count == 1
        assert storage.active is fallback

    def test_switch_is_permanent(self):
        """Test that the failed primary is not retried."""
        primary = BrokenStorage()
        storage = FallbackStorage(primary, InMemoryStorage())
        storage.read_document()
        storage.write_document(FinanceDocument())
        storage.write_document(FinanceDocument())
        assert primary.calls == 1

    def test_nested_chain_reports_inner_advisory(self):
        """Test that an advisory from an inner chain reaches the outer one."""
        inner = FallbackStorage(BrokenStorage(), InMemoryStorage())
        outer = FallbackStorage(inner, InMemoryStorage())
        outer.write_document(FinanceDocument())
        assert outer.using_fallback is False
        assert outer.error is None
        assert "broken file" in outer.advisory

    def test_chain_degrades_to_memory(self):
        """Test file -> local -> memory when both files fail."""
        chain = FallbackStorage(BrokenStorage(), FallbackStorage(BrokenStorage(), InMemoryStorage()))
        written = chain.write_document(FinanceDocument())
        assert written.last_saved is not None
        assert chain.describe() == "memory (not persisted)"
        assert chain.advisory is not None

    def test_corrupt_file_falls_back_to_local_store(self, tmp_path):
        """Test the real chain with an unparsable data file."""
        data_file = tmp_path / "finapp-dados.json"
        data_file.write_text("garbage", encoding="utf-8")
        local = LocalStorage(tmp_path / "local")
        local.write_document(FinanceDocument(last_saved="x"))

        storage = FallbackStorage(JsonFileStorage(data_file), local)
        document = storage.read_document()
        assert document is not None
        assert storage.describe() == local.describe()
        # the damaged file is left untouched
        assert data_file.read_text(encoding="utf-8") == "garbage"


    def test_non_utf8_file_falls_back(self, tmp_path):
        """Test that a data file with invalid bytes is answered by the fallback."""
        data_file = tmp_path / "finapp-dados.json"
        data_file.write_bytes(b'{"categories": [], "x": "\xff\xfe"}')
        stored = FinanceDocument(last_saved="2024-01-01T00:00:00.000Z")

        storage = FallbackStorage(JsonFileStorage(data_file), InMemoryStorage(stored))
        assert storage.read_document() == stored
        assert storage.using_fallback is True
        assert "finapp-dados.json" in storage.advisory

if __name__ == "__main__":
    pytest.main([__file__, "-v"])
