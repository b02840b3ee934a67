"""Durable string key-value stores."""

import sqlite3
from pathlib import Path
from typing import Protocol

from ftracker.store.schema import get_db_path, init_database


class KeyValueStore(Protocol):
    """Minimal string store the ledger persists through."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryKeyValueStore:
    """In-process store backed by a dict."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class SqliteKeyValueStore:
    """Store kept in the kv table of a SQLite database.

    Each set() is one committed statement, so a reader sees either the old
    value or the new one.
    """

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path if db_path is not None else get_db_path()
        init_database(self.db_path)

    def _connect(self) -> sqlite3.Connection:
        """Create a database connection."""
        return sqlite3.connect(self.db_path)

    def get(self, key: str) -> str | None:
        """Get the value stored under key.

        Raises:
            sqlite3.Error: If database operation fails.
        """
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return row[0] if row else None
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        """Replace the value stored under key.

        Raises:
            sqlite3.Error: If database operation fails.
        """
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    """
                    INSERT INTO kv (key, value, updated_at) VALUES (?, ?, datetime('now'))
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                    """,
                    (key, value),
                )
        finally:
            conn.close()
