"""
JSON File Storage Implementation

DESIGN DECISION: The finance document lives in a single JSON file that
the user picks (and can open, copy or back up themselves). The same
format backs the local fallback store, which just uses a fixed
location inside the app data directory.

TRADEOFFS:
- The whole document is rewritten on every save (fine for personal use)
- No locking; the last write wins
- The write goes through a temporary file and os.replace(), so a crash
  leaves either the old or the new document, never half of one
"""

import contextlib
import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from fintrack.logger import get_logger
from fintrack.models.finance import FinanceDocument
from fintrack.services.storage.interface import (
    CorruptDocumentError,
    FinanceStorageInterface,
    StoragePermissionError,
    StorageUnavailableError,
)


logger = get_logger(__name__)


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-15T10:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class JsonFileStorage(FinanceStorageInterface):
    """
    Stores the finance document in a user-selected JSON file.

    A missing or empty file reads as "nothing saved yet".
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def file_name(self) -> str:
        return self._path.name

    def describe(self) -> str:
        return f"file {self._path}"

    def read_document(self) -> Optional[FinanceDocument]:
        """Read and parse the data file."""
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            raise CorruptDocumentError(
                f"{self._path} is not UTF-8 text: {e.reason} at byte {e.start}"
            ) from e
        except PermissionError as e:
            raise StoragePermissionError(
                f"Permission denied reading {self._path}"
            ) from e
        except OSError as e:
            raise StorageUnavailableError(f"Failed to read {self._path}: {e}") from e

        if not text.strip():
            return None

        try:
            document = FinanceDocument.model_validate_json(text)
        except ValidationError as e:
            raise CorruptDocumentError(
                f"{self._path} is not a valid finance document: {e.error_count()} error(s)"
            ) from e

        logger.debug(
            "document_read",
            path=str(self._path),
            transactions=len(document.transactions),
        )
        return document

    def write_document(self, document: FinanceDocument) -> FinanceDocument:
        """Write the whole document, stamping lastSaved."""
        stamped = document.model_copy(update={"last_saved": utc_timestamp()})
        payload = json.dumps(stamped.to_json_dict(), indent=2, ensure_ascii=False)

        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            if isinstance(e, PermissionError):
                raise StoragePermissionError(
                    f"Permission denied writing {self._path}"
                ) from e
            raise StorageUnavailableError(f"Failed to write {self._path}: {e}") from e

        logger.debug(
            "document_written",
            path=str(self._path),
            transactions=len(stamped.transactions),
            last_saved=stamped.last_saved,
        )
        return stamped


class LocalStorage(JsonFileStorage):
    """
    The fallback store: one document per key inside the app data directory.

    Used when no data file has been chosen or the chosen file
    cannot be read or written.
    """

    def __init__(self, directory: Union[str, Path], key: str = "finapp-data"):
        self._key = key
        super().__init__(Path(directory).expanduser() / f"{key}.json")

    @property
    def key(self) -> str:
        return self._key

    def describe(self) -> str:
        return f"local store '{self._key}'"
