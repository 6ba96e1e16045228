"""Durable key-value string storage.

The client persists a handful of string values (session token, last
activity, image caches) between runs. Stores are synchronous and only
ever hold ``str`` values.
"""

import json
import logging
import os
from pathlib import Path
from typing import Protocol

from inventory_client.exceptions import StorageError

logger = logging.getLogger(__name__)

# The file holds the bearer token; keep it readable by the owner only.
FILE_MODE = 0o600


def _private_opener(path: str, flags: int) -> int:
    return os.open(path, flags, FILE_MODE)


class KeyValueStore(Protocol):
    """Synchronous string key-value store."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    """Non-durable store, used in tests and for throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """Store values in a single JSON object on disk."""

    def __init__(self, path: str | Path) -> None:
        """Initialize JSON file store.

        Parameters
        ----------
        path : str | Path
            File holding the JSON object. Parent directories are created
            on first write.
        """
        self.path = Path(path)
        self._data: dict[str, str] = self._read()

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)
        self._write()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._write()

    def _read(self) -> dict[str, str]:
        """Load the JSON object, treating a missing or corrupt file as empty."""
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable storage file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: not a JSON object", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _write(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8", opener=_private_opener) as f:
                json.dump(self._data, f, indent=2, ensure_ascii=False)
            self.path.chmod(FILE_MODE)
        except OSError as exc:
            raise StorageError(f"Could not write {self.path}: {exc}") from exc
