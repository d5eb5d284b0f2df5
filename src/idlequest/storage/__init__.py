"""Storage module for IdleQuest persistence.

Provides:
- A key-value store interface with in-memory and SQLite implementations
- A save manager that writes one record per game state component
"""

from idlequest.storage.database import SQLiteStore
from idlequest.storage.saves import (
    COMPONENT_KEYS,
    DEFAULT_SLOT,
    SaveManager,
    create_save_manager,
    create_store,
)
from idlequest.storage.store import KeyValueStore, MemoryStore

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "SQLiteStore",
    "COMPONENT_KEYS",
    "DEFAULT_SLOT",
    "SaveManager",
    "create_save_manager",
    "create_store",
]
