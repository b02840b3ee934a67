"""Store layer - provides persistence for the application.

This module re-exports the public storage types and functions for easy importing.
"""

from ftracker.store.kv import KeyValueStore, MemoryKeyValueStore, SqliteKeyValueStore
from ftracker.store.schema import database_exists, get_db_path, init_database
from ftracker.store.transactions import TransactionStore, storage_key

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Key-value stores
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SqliteKeyValueStore",
    # Ledger persistence
    "TransactionStore",
    "storage_key",
]
