"""Tests for the in-memory key-value store."""

from __future__ import annotations

import pytest

from idlequest.core.exceptions import StorageError
from idlequest.storage import KeyValueStore, MemoryStore


class TestMemoryStore:
    """Tests for MemoryStore."""

    def test_set_and_get(self) -> None:
        """Stored values come back equal."""
        store = MemoryStore()

        store.set("a", {"gold": 5, "materials": {"wood": 2}})

        assert store.get("a") == {"gold": 5, "materials": {"wood": 2}}
        assert store.get("missing") is None

    def test_values_are_copied(self) -> None:
        """Mutating a value after storing it does not change the store."""
        store = MemoryStore()
        value = {"levels": {"forge": 1}}
        store.set("town", value)

        value["levels"]["forge"] = 9

        assert store.get("town") == {"levels": {"forge": 1}}

    def test_non_json_value(self) -> None:
        """Values must be JSON-compatible."""
        store = MemoryStore()

        with pytest.raises(StorageError) as exc_info:
            store.set("bad", {"value": object()})

        assert exc_info.value.details["key"] == "bad"
        assert len(store) == 0

    def test_delete(self) -> None:
        """Delete reports whether the key existed."""
        store = MemoryStore()
        store.set("a", 1)

        assert store.delete("a")
        assert not store.delete("a")

    def test_keys_by_prefix(self) -> None:
        """Keys are filtered by prefix and sorted."""
        store = MemoryStore()
        for key in ("save:b", "save:a", "other"):
            store.set(key, True)

        assert store.keys("save:") == ["save:a", "save:b"]
        assert len(store.keys()) == 3

    def test_satisfies_protocol(self) -> None:
        """MemoryStore is a KeyValueStore."""
        assert isinstance(MemoryStore(), KeyValueStore)
