"""Tests for durable key-value stores."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from inventory_client.exceptions import StorageError
from inventory_client.storage import JsonFileStore, MemoryStore


class TestMemoryStore:
    """Tests for MemoryStore."""

    def test_set_get_remove(self) -> None:
        store = MemoryStore()
        store.set("k", "v")
        assert store.get("k") == "v"
        store.remove("k")
        assert store.get("k") is None

    def test_initial_values(self) -> None:
        assert MemoryStore({"a": "1"}).get("a") == "1"

    def test_remove_missing_is_noop(self) -> None:
        MemoryStore().remove("missing")


class TestJsonFileStore:
    """Tests for JsonFileStore."""

    def test_persists_between_instances(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "storage.json"
        JsonFileStore(path).set("vitoriacestas_token", "abc")

        assert JsonFileStore(path).get("vitoriacestas_token") == "abc"
        assert json.loads(path.read_text(encoding="utf-8")) == {"vitoriacestas_token": "abc"}

    def test_remove_rewrites_file(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"
        store = JsonFileStore(path)
        store.set("a", "1")
        store.set("b", "2")
        store.remove("a")

        assert json.loads(path.read_text(encoding="utf-8")) == {"b": "2"}

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert JsonFileStore(tmp_path / "none.json").get("a") is None

    def test_corrupt_file_is_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"
        path.write_text("{not json", encoding="utf-8")

        assert JsonFileStore(path).get("a") is None

    def test_non_object_is_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"
        path.write_text("[1, 2]", encoding="utf-8")

        assert JsonFileStore(path).get("a") is None

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_file_readable_by_owner_only(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"

        JsonFileStore(path).set("vitoriacestas_token", "secret")

        assert path.stat().st_mode & 0o777 == 0o600

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_existing_file_permissions_tightened(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"
        path.write_text("{}", encoding="utf-8")
        path.chmod(0o644)

        JsonFileStore(path).set("vitoriacestas_token", "secret")

        assert path.stat().st_mode & 0o777 == 0o600

    def test_write_failure_raises_storage_error(self, tmp_path: Path) -> None:
        store = JsonFileStore(tmp_path / "storage.json")

        with patch("builtins.open", side_effect=PermissionError("denied")):
            with pytest.raises(StorageError):
                store.set("a", "1")
