"""Key-value query functions."""

import sqlite3
from pathlib import Path

from spendlog.store.schema import get_db_path


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection.
    """
    if db_path is None:
        db_path = get_db_path()
    return sqlite3.connect(db_path)


def get_value(key: str, db_path: Path | None = None) -> str | None:
    """Read the text stored under a key.

    Args:
        key: Storage key.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Stored text, or None if the key is absent.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    conn = _connect(db_path)
    try:
        cursor = conn.cursor()
        cursor.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
        row = cursor.fetchone()
        return row[0] if row else None
    finally:
        conn.close()


def set_value(key: str, value: str, db_path: Path | None = None) -> None:
    """Store text under a key, replacing any previous value.

    Args:
        key: Storage key.
        value: Text to store.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    conn = _connect(db_path)
    cursor = conn.cursor()

    try:
        cursor.execute(
            "INSERT INTO kv_store (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            (key, value),
        )
        conn.commit()
    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()


def delete_value(key: str, db_path: Path | None = None) -> None:
    """Remove a key if present.

    Args:
        key: Storage key.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    conn = _connect(db_path)
    cursor = conn.cursor()

    try:
        cursor.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        conn.commit()
    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()
