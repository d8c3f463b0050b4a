"""Key-value storage backends for the persistence adapter."""

import sqlite3
from pathlib import Path
from typing import Protocol

from spendlog.errors import PersistenceError
from spendlog.store.queries import delete_value, get_value, set_value


class KeyValueStorage(Protocol):
    """Text blobs stored under string keys."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class SqliteStorage:
    """Key-value storage in the spendlog SQLite database."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path

    def get(self, key: str) -> str | None:
        try:
            return get_value(key, self.db_path)
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not read '{key}': {e}") from e

    def set(self, key: str, value: str) -> None:
        try:
            set_value(key, value, self.db_path)
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not write '{key}': {e}") from e

    def delete(self, key: str) -> None:
        try:
            delete_value(key, self.db_path)
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not delete '{key}': {e}") from e


class MemoryStorage:
    """Key-value storage held in a dictionary."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)
