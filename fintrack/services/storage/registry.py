"""
Remembered data file.

Stores the path of the data file the user selected so the next session
reconnects to it. Lives in the app data directory, next to the
fallback store.
"""

import json
import os
from pathlib import Path
from typing import Optional, Union

from fintrack.logger import get_logger


logger = get_logger(__name__)


class DataFileRegistry:
    """Remembers (and forgets) the selected data file."""

    def __init__(self, registry_path: Union[str, Path]):
        self._registry_path = Path(registry_path).expanduser()

    def _load(self) -> dict:
        """Returns {} on missing or corrupt registry."""
        try:
            with open(self._registry_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict) -> None:
        self._registry_path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._registry_path.with_name(self._registry_path.name + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp, self._registry_path)

    def remember(self, data_file: Union[str, Path]) -> Path:
        """Record the selected data file for future sessions."""
        path = Path(data_file).expanduser().resolve()
        data = self._load()
        data["data_file"] = str(path)
        self._save(data)
        logger.info("data_file_remembered", path=str(path))
        return path

    def recall(self) -> Optional[Path]:
        """
        The remembered data file, if we still have access to it.

        A file we can no longer read and write is treated as not
        remembered; the user has to select it again.
        """
        stored = self._load().get("data_file")
        if not stored:
            return None

        path = Path(stored)
        if path.exists():
            accessible = os.access(path, os.R_OK | os.W_OK)
        else:
            accessible = path.parent.is_dir() and os.access(path.parent, os.W_OK)

        if not accessible:
            logger.info("data_file_not_accessible", path=stored)
            return None
        return path

    def forget(self) -> None:
        """Disconnect from the current data file."""
        data = self._load()
        if data.pop("data_file", None) is not None:
            self._save(data)
            logger.info("data_file_forgotten")
