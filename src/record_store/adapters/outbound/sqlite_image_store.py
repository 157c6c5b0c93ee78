"""SQLite image store - the relational flavour of the record store.

Keeps images in a single fixed-schema table of a SQLite file. Ids are
assigned by SQLite (INTEGER PRIMARY KEY is the rowid), so no id generator
or record codec is involved; rows are mapped to ImageRecord and validated
on the way out.

Table schema:
    images:
        - id INTEGER PRIMARY KEY
        - title VARCHAR(255) NOT NULL
        - data BLOB NOT NULL
        - type VARCHAR(50) NOT NULL

SQLite does not enforce VARCHAR lengths, so a row written by another tool
may fail ImageRecord validation. Such rows are skipped by get_all() unless
strict reads are requested, and make get() raise SerializationError.
"""

from __future__ import annotations

import sqlite3
import weakref
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from pydantic import ValidationError

from record_store.domain.entities import ImageRecord
from record_store.domain.errors import (
    RecordNotFoundError,
    SerializationError,
    StorageIOError,
    StoreClosedError,
)
from record_store.infrastructure.instrumentation import track_operation
from record_store.infrastructure.logging import get_logger
from record_store.infrastructure.metrics import MetricsRegistry, get_metrics

CREATE_IMAGE_TABLE = (
    "CREATE TABLE IF NOT EXISTS images ("
    " id INTEGER PRIMARY KEY,"
    " title VARCHAR(255) NOT NULL,"
    " data BLOB NOT NULL,"
    " type VARCHAR(50) NOT NULL)"
)


def _release(conn: sqlite3.Connection, metrics: MetricsRegistry) -> None:
    try:
        if conn.in_transaction:
            conn.commit()
    finally:
        conn.close()
        metrics.open_stores.dec()


class SqliteImageStore:
    """RecordStore implementation for ImageRecord over a SQLite file.

    The connection is opened in the constructor and released by close(),
    on context-manager exit, or when the store is garbage-collected.

    Thread Safety:
        The connection is created with check_same_thread=False; callers
        must still serialize access.
    """

    def __init__(
        self,
        file_path: str | Path,
        metrics: MetricsRegistry | None = None,
        name: str = "images",
        strict_reads: bool = False,
    ) -> None:
        """Open the image database and make sure the table exists.

        Args:
            file_path: Path to the SQLite file (created if missing).
            metrics: Metrics registry (default: the global one).
            name: Store name used in logs and metric labels.
            strict_reads: Default for get_all(strict=...).

        Raises:
            StorageIOError: If the path is invalid or the file is not a
                usable SQLite database.
        """
        self._file_path = Path(file_path)
        self._name = name
        self._strict_reads = strict_reads
        self._metrics = metrics or get_metrics()
        self._logger = get_logger(__name__, store=name)

        if self._file_path.is_dir():
            raise StorageIOError(f"Database path is a directory: {self._file_path}")

        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(
                str(self._file_path),
                check_same_thread=False,
                isolation_level=None,
            )
        except (sqlite3.Error, OSError) as exc:
            raise StorageIOError(f"Cannot open database {self._file_path}: {exc}") from exc

        conn.row_factory = sqlite3.Row
        self._conn: sqlite3.Connection | None = conn
        self._metrics.open_stores.inc()
        self._finalizer = weakref.finalize(self, _release, conn, self._metrics)

        try:
            self.create_image_table()
        except StorageIOError:
            self.close()
            raise

        self._logger.info("store_opened", path=str(self._file_path))

    def __enter__(self) -> SqliteImageStore:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def closed(self) -> bool:
        return self._conn is None

    @contextmanager
    def _guard(self, action: str) -> Generator[sqlite3.Connection, None, None]:
        if self._conn is None:
            raise StoreClosedError(f"Store is closed: {self._file_path}")
        try:
            yield self._conn
        except sqlite3.Error as exc:
            raise StorageIOError(f"Failed to {action} {self._file_path}: {exc}") from exc

    @staticmethod
    def _to_image(row: sqlite3.Row) -> ImageRecord:
        try:
            return ImageRecord(
                id=row["id"],
                title=row["title"],
                data=row["data"],
                file_type=row["type"],
            )
        except ValidationError as exc:
            raise SerializationError(f"Invalid image row {row['id']}: {exc}") from exc

    def create_image_table(self) -> None:
        """Create the images table if it does not exist. Idempotent."""
        with self._guard("create table in") as conn:
            conn.execute(CREATE_IMAGE_TABLE)

    def insert(self, record: ImageRecord) -> int:
        """Insert an image, or replace the one with the same id.

        Returns:
            The id assigned by SQLite, or the record's own id if it had one.
        """
        if not isinstance(record, ImageRecord):
            raise SerializationError(f"Expected ImageRecord, got {type(record).__name__}")

        with track_operation(self._metrics, self._name, "insert"):
            with self._guard("write") as conn:
                if record.id is None:
                    cur = conn.execute(
                        "INSERT INTO images (title, data, type) VALUES (?, ?, ?)",
                        (record.title, record.data, record.file_type),
                    )
                    image_id = int(cur.lastrowid)
                else:
                    conn.execute(
                        "INSERT OR REPLACE INTO images (id, title, data, type) VALUES (?, ?, ?, ?)",
                        (record.id, record.title, record.data, record.file_type),
                    )
                    image_id = record.id
            self._logger.debug("record_inserted", key=image_id)
            return image_id

    def get(self, key: int) -> ImageRecord | None:
        with track_operation(self._metrics, self._name, "get"):
            with self._guard("read") as conn:
                row = conn.execute(
                    "SELECT id, title, data, type FROM images WHERE id = ?", (key,)
                ).fetchone()
            return None if row is None else self._to_image(row)

    def get_all(self, strict: bool | None = None) -> list[ImageRecord]:
        """Return all images; invalid rows are skipped unless strict."""
        strict = self._strict_reads if strict is None else strict
        with track_operation(self._metrics, self._name, "get_all"):
            with self._guard("scan") as conn:
                rows = conn.execute("SELECT id, title, data, type FROM images").fetchall()

            images: list[ImageRecord] = []
            for row in rows:
                try:
                    images.append(self._to_image(row))
                except SerializationError as exc:
                    if strict:
                        raise
                    self._metrics.records_skipped_total.labels(store=self._name).inc()
                    self._logger.warning("record_skipped", key=row["id"], error=str(exc))
            return images

    def delete(self, key: int) -> None:
        with track_operation(self._metrics, self._name, "delete"):
            with self._guard("write") as conn:
                cur = conn.execute("DELETE FROM images WHERE id = ?", (key,))
            if cur.rowcount == 0:
                raise RecordNotFoundError(key)
            self._logger.debug("record_deleted", key=key)

    def count(self) -> int:
        with self._guard("read") as conn:
            return int(conn.execute("SELECT COUNT(1) FROM images").fetchone()[0])

    def close(self) -> None:
        """Commit and close the connection. Safe to call more than once."""
        if self._conn is None:
            return
        self._conn = None
        try:
            self._finalizer()
        except sqlite3.Error as exc:
            raise StorageIOError(f"Failed to close {self._file_path}: {exc}") from exc
        self._logger.info("store_closed", path=str(self._file_path))
