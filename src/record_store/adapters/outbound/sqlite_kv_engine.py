"""SQLite-based Key-Value Engine implementation.

Stores pairs in a single two-column table. SQLite's B-tree keeps BLOB keys
ordered, so scan() is a plain ORDER BY.

Table schema:
    kv:
        - key BLOB PRIMARY KEY
        - value BLOB NOT NULL
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Iterator

from record_store.domain.errors import StorageIOError, StoreClosedError
from record_store.infrastructure.logging import get_logger

logger = get_logger(__name__)

SCHEMA = "CREATE TABLE IF NOT EXISTS kv (key BLOB PRIMARY KEY, value BLOB NOT NULL)"


class SqliteKeyValueEngine:
    """SQLite implementation of the KeyValueEngine protocol.

    Each write is committed immediately (autocommit); flush() only commits
    a transaction left open by a caller-level BEGIN.
    """

    def __init__(self, file_path: str | Path, create: bool = True) -> None:
        """Open the database file.

        Args:
            file_path: Path to the database file.
            create: If True, create the file if it doesn't exist.

        Raises:
            StorageIOError: If the file cannot be opened or initialized.
        """
        self._file_path = Path(file_path)
        self._conn: sqlite3.Connection | None = None

        if self._file_path.is_dir():
            raise StorageIOError(f"Database path is a directory: {self._file_path}")
        if not create and not self._file_path.exists():
            raise StorageIOError(f"Database file not found: {self._file_path}")

        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(
                str(self._file_path),
                check_same_thread=False,
                isolation_level=None,
            )
            self._conn.execute(SCHEMA)
        except (sqlite3.Error, OSError) as exc:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
            raise StorageIOError(f"Cannot open database {self._file_path}: {exc}") from exc

        logger.debug("sqlite_kv_opened", path=str(self._file_path))

    @property
    def file_path(self) -> Path:
        return self._file_path

    @contextmanager
    def _guard(self, action: str) -> Generator[sqlite3.Connection, None, None]:
        if self._conn is None:
            raise StoreClosedError(f"Database is closed: {self._file_path}")
        try:
            yield self._conn
        except sqlite3.Error as exc:
            raise StorageIOError(f"Failed to {action} {self._file_path}: {exc}") from exc

    def get(self, key: bytes) -> bytes | None:
        with self._guard("read") as conn:
            row = conn.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
        return None if row is None else bytes(row[0])

    def put(self, key: bytes, value: bytes) -> None:
        with self._guard("write") as conn:
            conn.execute("INSERT OR REPLACE INTO kv(key, value) VALUES(?, ?)", (key, value))

    def delete(self, key: bytes) -> bool:
        with self._guard("write") as conn:
            cur = conn.execute("DELETE FROM kv WHERE key=?", (key,))
        return cur.rowcount > 0

    def scan(self) -> Iterator[tuple[bytes, bytes]]:
        with self._guard("scan") as conn:
            rows = conn.execute("SELECT key, value FROM kv ORDER BY key").fetchall()
        for key, value in rows:
            yield bytes(key), bytes(value)

    def flush(self) -> None:
        with self._guard("flush") as conn:
            if conn.in_transaction:
                conn.commit()

    def close(self) -> None:
        """Commit and close. Safe to call more than once."""
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        try:
            if conn.in_transaction:
                conn.commit()
        except sqlite3.Error as exc:
            raise StorageIOError(f"Failed to close {self._file_path}: {exc}") from exc
        finally:
            conn.close()
        logger.debug("sqlite_kv_closed", path=str(self._file_path))
