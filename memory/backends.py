import os
import sqlite3
from typing import Protocol


class StorageError(Exception):
    """Raised by a backend when a read, write or delete does not land."""


class Backend(Protocol):
    def load(self, key: str) -> str | None: ...

    def save(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class SQLiteBackend:
    """Key-value namespace in a single SQLite table, one text value per key."""

    def __init__(self, db_path: str = "~/.helix/store.db"):
        db_path = os.path.expanduser(db_path)
        parent = os.path.dirname(db_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        self.conn = sqlite3.connect(db_path)
        self._init_db()

    def _init_db(self) -> None:
        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)
        self.conn.commit()

    def load(self, key: str) -> str | None:
        try:
            cursor = self.conn.execute("SELECT value FROM kv WHERE key = ?", (key,))
            row = cursor.fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"read of {key!r} failed: {e}") from e
        return row[0] if row else None

    def save(self, key: str, value: str) -> None:
        try:
            with self.conn:
                self.conn.execute(
                    "INSERT INTO kv (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (key, value),
                )
        except sqlite3.Error as e:
            raise StorageError(f"write of {key!r} failed: {e}") from e

    def delete(self, key: str) -> None:
        try:
            with self.conn:
                self.conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        except sqlite3.Error as e:
            raise StorageError(f"delete of {key!r} failed: {e}") from e

    def close(self) -> None:
        self.conn.close()


class MemoryBackend:
    """Process-local stand-in for SQLiteBackend. ``fail_writes`` makes save/delete raise."""

    def __init__(self, data: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(data or {})
        self.fail_writes = False

    def load(self, key: str) -> str | None:
        return self.data.get(key)

    def save(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError(f"write of {key!r} failed")
        self.data[key] = value

    def delete(self, key: str) -> None:
        if self.fail_writes:
            raise StorageError(f"delete of {key!r} failed")
        self.data.pop(key, None)
