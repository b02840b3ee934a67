"""Tests for ftracker.store key-value stores and schema."""

import sqlite3
from pathlib import Path

from ftracker.store.kv import MemoryKeyValueStore, SqliteKeyValueStore
from ftracker.store.schema import database_exists, get_db_path, init_database


class TestSchema:
    """Tests for schema helpers."""

    def test_init_creates_kv_table(self, tmp_path: Path) -> None:
        """Should create the database file and kv table."""
        db_path = tmp_path / "nested" / "ftracker.db"

        init_database(db_path)

        assert database_exists(db_path)
        conn = sqlite3.connect(db_path)
        try:
            tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
        finally:
            conn.close()
        assert "kv" in tables

    def test_init_is_idempotent(self, tmp_path: Path) -> None:
        """Should be safe to run twice."""
        db_path = tmp_path / "ftracker.db"

        init_database(db_path)
        init_database(db_path)

        assert database_exists(db_path)

    def test_db_path_env_override(self, tmp_path: Path, monkeypatch) -> None:
        """Should honour FTRACKER_DB."""
        monkeypatch.setenv("FTRACKER_DB", str(tmp_path / "custom.db"))

        assert get_db_path() == tmp_path / "custom.db"

    def test_db_path_uses_xdg(self, tmp_path: Path, monkeypatch) -> None:
        """Should live under XDG_DATA_HOME by default."""
        monkeypatch.delenv("FTRACKER_DB", raising=False)
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        assert get_db_path() == tmp_path / "ftracker" / "ftracker.db"


class TestMemoryKeyValueStore:
    """Tests for MemoryKeyValueStore."""

    def test_get_missing_returns_none(self) -> None:
        """Should return None for unknown keys."""
        assert MemoryKeyValueStore().get("nope") is None

    def test_set_replaces(self) -> None:
        """Should replace existing values."""
        kv = MemoryKeyValueStore({"k": "old"})

        kv.set("k", "new")

        assert kv.get("k") == "new"


class TestSqliteKeyValueStore:
    """Tests for SqliteKeyValueStore."""

    def test_round_trip_and_replace(self, tmp_path: Path) -> None:
        """Should persist values and replace them on set."""
        kv = SqliteKeyValueStore(tmp_path / "ftracker.db")

        assert kv.get("transactions:u1") is None
        kv.set("transactions:u1", "[]")
        kv.set("transactions:u1", '[{"id": "1"}]')

        assert kv.get("transactions:u1") == '[{"id": "1"}]'

    def test_values_survive_reopen(self, tmp_path: Path) -> None:
        """Should keep values across store instances."""
        SqliteKeyValueStore(tmp_path / "ftracker.db").set("k", "v")

        assert SqliteKeyValueStore(tmp_path / "ftracker.db").get("k") == "v"
