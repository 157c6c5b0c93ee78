"""dbm-based Key-Value Engine implementation.

This adapter implements the KeyValueEngine protocol on top of the standard
library dbm family (the same engine shelve uses). dbm.open() picks whichever
backend is available (gnu, ndbm, sqlite3 or the portable dumb format) and
detects the format of an existing file on reopen.

dbm files are unordered; scan() sorts keys so iteration is in ascending
byte order, which for big-endian integer keys is numeric order.
"""

from __future__ import annotations

import dbm
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Iterator

from record_store.domain.errors import StorageIOError, StoreClosedError
from record_store.infrastructure.logging import get_logger

logger = get_logger(__name__)

_ENGINE_ERRORS = (OSError,) + tuple(dbm.error)


class DbmEngine:
    """dbm implementation of the KeyValueEngine protocol.

    Attributes:
        file_path: Path passed to dbm.open (some backends add suffixes).
    """

    def __init__(self, file_path: str | Path, create: bool = True) -> None:
        """Open (and optionally create) the dbm file.

        Args:
            file_path: Path to the database file.
            create: If True, create the file if it doesn't exist.

        Raises:
            StorageIOError: If the path is a directory, its parent cannot be
                created, or the file cannot be opened.
        """
        self._file_path = Path(file_path)
        self._db: Any = None

        if self._file_path.is_dir():
            raise StorageIOError(f"Database path is a directory: {self._file_path}")

        try:
            if create:
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._db = dbm.open(str(self._file_path), "c" if create else "w")
        except _ENGINE_ERRORS as exc:
            raise StorageIOError(f"Cannot open database {self._file_path}: {exc}") from exc

        logger.debug("dbm_opened", path=str(self._file_path), backend=dbm.whichdb(str(self._file_path)))

    @property
    def file_path(self) -> Path:
        return self._file_path

    @contextmanager
    def _guard(self, action: str) -> Generator[Any, None, None]:
        if self._db is None:
            raise StoreClosedError(f"Database is closed: {self._file_path}")
        try:
            yield self._db
        except _ENGINE_ERRORS as exc:
            raise StorageIOError(f"Failed to {action} {self._file_path}: {exc}") from exc

    def get(self, key: bytes) -> bytes | None:
        with self._guard("read") as db:
            return db.get(key)

    def put(self, key: bytes, value: bytes) -> None:
        with self._guard("write") as db:
            db[key] = value

    def delete(self, key: bytes) -> bool:
        with self._guard("write") as db:
            try:
                del db[key]
            except KeyError:
                return False
            return True

    def scan(self) -> Iterator[tuple[bytes, bytes]]:
        """Iterate over all pairs in ascending key order.

        Keys are snapshotted up front; a key deleted mid-iteration is skipped.
        """
        with self._guard("scan") as db:
            keys = sorted(db.keys())
        for key in keys:
            with self._guard("scan") as db:
                value = db.get(key)
            if value is not None:
                yield key, value

    def flush(self) -> None:
        """Sync the file if the backend buffers writes (gnu, dumb)."""
        with self._guard("flush") as db:
            sync = getattr(db, "sync", None)
            if sync is not None:
                sync()

    def close(self) -> None:
        """Flush and close. Safe to call more than once."""
        if self._db is None:
            return
        db, self._db = self._db, None
        try:
            sync = getattr(db, "sync", None)
            if sync is not None:
                sync()
            db.close()
        except _ENGINE_ERRORS as exc:
            raise StorageIOError(f"Failed to close {self._file_path}: {exc}") from exc
        logger.debug("dbm_closed", path=str(self._file_path))
