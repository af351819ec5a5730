"""
Key-value persistence used for custom calendars and vacation date sets.

The core never decides where data lives; callers inject any object with
``get``/``set``/``delete``. ``InMemoryStore`` backs the API process and the
tests. Values are JSON strings so stores written by the browser frontend
(localStorage) can be imported as-is.
"""

import json
import logging
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)

# Storage keys, with the legacy namespace kept for migration
STORAGE_KEYS = {
    "custom_calendars": "vacation-planner-custom-calendars",
    "vacation": "vacation-planner-vacation",
    "state": "vacation-planner-state",
}

LEGACY_STORAGE_KEYS = {
    "custom_calendars": "holiday-planner-custom-calendars",
    "vacation": "holiday-planner-vacation",
    "state": "holiday-planner-state",
}


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryStore:
    """Process-local dict-backed store."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


def read_storage_value(
    store: KeyValueStore, key: str, legacy_key: Optional[str] = None
) -> Optional[str]:
    """Read a raw value, copying a legacy-key value forward on first read."""
    value = store.get(key)
    if value is not None or not legacy_key:
        return value

    value = store.get(legacy_key)
    if value is not None:
        logger.info("Migrating storage key %s -> %s", legacy_key, key)
        store.set(key, value)
    return value


def read_json_storage(store: KeyValueStore, key: str, legacy_key: Optional[str] = None) -> Any:
    """Parsed JSON value, or None when missing or unparseable."""
    raw = read_storage_value(store, key, legacy_key)
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Ignoring unparseable JSON under storage key %s", key)
        return None


def write_json_storage(store: KeyValueStore, key: str, value: Any) -> None:
    store.set(key, json.dumps(value, ensure_ascii=False))
