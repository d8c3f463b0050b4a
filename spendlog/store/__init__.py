"""Store layer - provides persistence for the application.

This module re-exports the public store API for easy importing.
"""

from spendlog.store.persistence import DEFAULT_STORAGE_KEY, RecordPersistence
from spendlog.store.records import RecordStore, open_store
from spendlog.store.schema import database_exists, get_db_path, init_database
from spendlog.store.storage import KeyValueStorage, MemoryStorage, SqliteStorage

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Storage backends
    "KeyValueStorage",
    "MemoryStorage",
    "SqliteStorage",
    # Records
    "DEFAULT_STORAGE_KEY",
    "RecordPersistence",
    "RecordStore",
    "open_store",
]
