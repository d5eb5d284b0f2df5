"""SQLite key-value store.

One table of JSON records keyed by string. Every operation opens its own
connection, commits on success and rolls back on error.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from idlequest.core.exceptions import StorageError
from idlequest.core.logging import get_logger
from idlequest.storage.store import decode_value, encode_value


logger = get_logger(__name__)


class SQLiteStore:
    """Key-value store persisted in a SQLite database file."""

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path) -> None:
        """Open (and create if needed) the database.

        Args:
            db_path: Path to the database file. ``":memory:"`` is not
                supported because every operation uses a new connection.

        Raises:
            StorageError: If the database cannot be created.
        """
        self.db_path = Path(db_path)
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create database directory: {exc}") from exc

        self._init_schema()
        logger.info("Database initialized", path=str(self.db_path))

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with proper cleanup."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot open database {self.db_path}: {exc}") from exc
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StorageError(f"Database operation failed: {exc}") from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS records (
                    key TEXT PRIMARY KEY,
                    value_json TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            cursor.execute("""
                INSERT OR REPLACE INTO schema_version (version) VALUES (?)
            """, (self.SCHEMA_VERSION,))

    # =========================================================================
    # Key-Value Operations
    # =========================================================================

    def get(self, key: str) -> Any | None:
        """Get a stored value, or None if the key is absent."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT value_json FROM records WHERE key = ?", (key,))
            row = cursor.fetchone()
        return None if row is None else decode_value(key, row[0])

    def set(self, key: str, value: Any) -> None:
        """Insert or replace a value."""
        value_json = encode_value(key, value)
        with self._get_connection() as conn:
            conn.execute("""
                INSERT OR REPLACE INTO records (key, value_json, updated_at)
                VALUES (?, ?, ?)
            """, (key, value_json, datetime.now().isoformat()))

    def set_many(self, items: dict[str, Any]) -> None:
        """Write several values in one transaction."""
        encoded = [(key, encode_value(key, value)) for key, value in items.items()]
        now = datetime.now().isoformat()
        with self._get_connection() as conn:
            conn.executemany("""
                INSERT OR REPLACE INTO records (key, value_json, updated_at)
                VALUES (?, ?, ?)
            """, [(key, value_json, now) for key, value_json in encoded])

    def delete(self, key: str) -> bool:
        """Delete a key.

        Returns:
            True if deleted, False if not found.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM records WHERE key = ?", (key,))
            return cursor.rowcount > 0

    def keys(self, prefix: str = "") -> list[str]:
        """Stored keys starting with ``prefix``, sorted."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT key FROM records WHERE substr(key, 1, ?) = ? ORDER BY key",
                (len(prefix), prefix),
            )
            return [row[0] for row in cursor.fetchall()]

    def count(self) -> int:
        """Number of stored records."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM records")
            return cursor.fetchone()[0]


__all__ = ["SQLiteStore"]
