"""Tests for the key-value storage helpers."""

from app.services.storage import (
    InMemoryStore,
    read_json_storage,
    read_storage_value,
    write_json_storage,
)


def test_in_memory_store():
    store = InMemoryStore({"a": "1"})
    store.set("b", "2")
    assert store.get("a") == "1"
    assert sorted(store.keys()) == ["a", "b"]

    store.delete("a")
    store.delete("missing")
    assert store.get("a") is None


def test_initial_data_is_copied():
    initial = {"a": "1"}
    store = InMemoryStore(initial)
    store.set("a", "2")
    assert initial["a"] == "1"


def test_legacy_value_is_migrated_forward():
    store = InMemoryStore({"old-key": "[1]"})
    assert read_storage_value(store, "new-key", "old-key") == "[1]"
    assert store.get("new-key") == "[1]"


def test_current_key_wins_over_legacy():
    store = InMemoryStore({"new-key": "current", "old-key": "stale"})
    assert read_storage_value(store, "new-key", "old-key") == "current"


def test_missing_value():
    store = InMemoryStore()
    assert read_storage_value(store, "new-key", "old-key") is None
    assert read_json_storage(store, "new-key") is None


def test_unparseable_json_reads_as_none():
    store = InMemoryStore({"k": "{broken"})
    assert read_json_storage(store, "k") is None


def test_json_roundtrip_keeps_unicode():
    store = InMemoryStore()
    write_json_storage(store, "k", {"name": "Köln"})
    assert "Köln" in store.get("k")
    assert read_json_storage(store, "k") == {"name": "Köln"}
