"""Key-value store interface and the in-memory implementation."""

from __future__ import annotations

import json
from typing import Any, Protocol, runtime_checkable

from idlequest.core.exceptions import StorageError


@runtime_checkable
class KeyValueStore(Protocol):
    """Persistence transport the save manager writes through.

    Values are JSON-compatible Python objects.
    """

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> bool: ...

    def keys(self, prefix: str = "") -> list[str]: ...


def encode_value(key: str, value: Any) -> str:
    """Serialize a value to JSON.

    Raises:
        StorageError: If the value is not JSON-compatible.
    """
    try:
        return json.dumps(value, sort_keys=True)
    except (TypeError, ValueError) as exc:
        raise StorageError(f"Value for {key!r} is not JSON-serializable: {exc}", key=key) from exc


def decode_value(key: str, raw: str) -> Any:
    """Parse a stored JSON value.

    Raises:
        StorageError: If the stored text is not valid JSON.
    """
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise StorageError(f"Stored value for {key!r} is corrupt: {exc}", key=key) from exc


class MemoryStore:
    """Dictionary-backed store.

    Values are held as JSON text, so callers never share mutable objects
    with the store and non-serializable values fail the same way they
    would on disk.
    """

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return None if raw is None else decode_value(key, raw)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = encode_value(key, value)

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self, prefix: str = "") -> list[str]:
        return sorted(k for k in self._data if k.startswith(prefix))

    def __len__(self) -> int:
        return len(self._data)


__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "encode_value",
    "decode_value",
]
