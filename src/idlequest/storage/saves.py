"""Save game manager.

A save is one record per GameState component, keyed
``<prefix>:<slot>:<component>``, plus a ``meta`` record written last.
A slot without its meta record is treated as absent, so an interrupted
save never loads as a half-written game.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from idlequest.core.config import StorageSettings
from idlequest.core.exceptions import StorageError
from idlequest.core.logging import get_logger
from idlequest.models.game_state import SAVE_VERSION, GameState
from idlequest.storage.database import SQLiteStore
from idlequest.storage.store import KeyValueStore, MemoryStore


logger = get_logger(__name__)

COMPONENT_KEYS = ("character", "ledger", "town", "zones", "quests", "analytics", "meta_upgrades")
META_KEY = "meta"
DEFAULT_SLOT = "default"


class SaveManager:
    """Writes GameState records to a key-value store and reads them back."""

    def __init__(self, store: KeyValueStore, *, key_prefix: str = "idlequest") -> None:
        """Initialize the manager.

        Args:
            store: Persistence transport.
            key_prefix: Prefix applied to every record key.
        """
        self._store = store
        self._prefix = key_prefix

    @property
    def store(self) -> KeyValueStore:
        """The underlying store."""
        return self._store

    def _key(self, slot: str, component: str) -> str:
        return f"{self._prefix}:{slot}:{component}"

    def save(self, state: GameState, slot: str = DEFAULT_SLOT) -> None:
        """Persist every component of a game state.

        Transient fields are excluded by the models themselves.

        Raises:
            StorageError: If the store rejects a record.
        """
        record = state.model_dump(mode="json")
        self._store.delete(self._key(slot, META_KEY))
        for component in COMPONENT_KEYS:
            self._store.set(self._key(slot, component), record[component])
        self._store.set(
            self._key(slot, META_KEY),
            {"version": state.version, "saved_at": datetime.now().isoformat()},
        )
        logger.info("Game saved", slot=slot)

    def load(self, slot: str = DEFAULT_SLOT) -> GameState | None:
        """Load a saved game state.

        Returns:
            The state, or None if the slot holds no complete save.

        Raises:
            StorageError: If a record is missing or fails validation.
        """
        meta = self._store.get(self._key(slot, META_KEY))
        if meta is None:
            return None
        version = meta.get("version") if isinstance(meta, dict) else None
        if version != SAVE_VERSION:
            raise StorageError(
                f"Unsupported save version {version!r}",
                key=self._key(slot, META_KEY),
                details={"expected": SAVE_VERSION},
            )

        record: dict[str, Any] = {"version": version}
        for component in COMPONENT_KEYS:
            key = self._key(slot, component)
            value = self._store.get(key)
            if value is None:
                raise StorageError(f"Save slot {slot!r} is missing {component}", key=key)
            record[component] = value

        try:
            state = GameState.model_validate(record)
        except PydanticValidationError as exc:
            raise StorageError(f"Save slot {slot!r} is invalid: {exc}", details={"slot": slot}) from exc
        logger.info("Game loaded", slot=slot)
        return state

    def exists(self, slot: str = DEFAULT_SLOT) -> bool:
        """Check whether a slot holds a complete save."""
        return self._store.get(self._key(slot, META_KEY)) is not None

    def delete(self, slot: str = DEFAULT_SLOT) -> bool:
        """Delete every record of a slot.

        Returns:
            True if anything was deleted.
        """
        deleted = False
        for component in (META_KEY, *COMPONENT_KEYS):
            deleted = self._store.delete(self._key(slot, component)) or deleted
        if deleted:
            logger.info("Save deleted", slot=slot)
        return deleted

    def list_slots(self) -> list[str]:
        """Slots that hold a complete save, sorted."""
        suffix = f":{META_KEY}"
        prefix = f"{self._prefix}:"
        return sorted(
            key[len(prefix) : -len(suffix)]
            for key in self._store.keys(prefix)
            if key.endswith(suffix)
        )


def create_store(settings: StorageSettings) -> KeyValueStore:
    """Build the store selected by the storage settings."""
    if settings.backend == "memory":
        return MemoryStore()
    return SQLiteStore(settings.database_path)


def create_save_manager(settings: StorageSettings) -> SaveManager:
    """Build a save manager from the storage settings."""
    return SaveManager(create_store(settings), key_prefix=settings.key_prefix)


__all__ = [
    "COMPONENT_KEYS",
    "DEFAULT_SLOT",
    "SaveManager",
    "create_store",
    "create_save_manager",
]
