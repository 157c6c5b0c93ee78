"""Store Manager - the generic CRUD facade over a key-value engine.

This module provides StoreManager, which turns an embedded byte store into
a record store: it assigns identifiers, encodes records through a codec,
and translates every failure into the shared StoreError taxonomy.

Usage:
    from record_store.application import StoreManager
    from record_store.domain.entities import VerseRecord

    with StoreManager.open("data/verses.db", VerseRecord, ids="uuid") as store:
        key = store.insert(VerseRecord(book="John", chapter=3, verse=16, text="..."))
        assert store.get(key).reference() == "John 3:16"
        store.delete(key)

Durability:
    The manager owns exactly one engine handle. close() flushes and releases
    it; it also runs on context-manager exit and, as a last resort, when the
    manager is garbage-collected.
"""

from __future__ import annotations

import weakref
from pathlib import Path
from typing import Generic, Literal, TypeVar, get_args

from record_store.adapters.outbound.dbm_engine import DbmEngine
from record_store.adapters.outbound.pydantic_codec import PydanticRecordCodec
from record_store.adapters.outbound.sqlite_kv_engine import SqliteKeyValueEngine
from record_store.domain.entities import Identifiable, Record
from record_store.domain.errors import RecordNotFoundError, SerializationError, StoreClosedError
from record_store.domain.services import SequentialIdGenerator, UuidIdGenerator
from record_store.domain.value_objects import SEQUENCE_KEY, RecordKey, encode_key
from record_store.infrastructure.instrumentation import track_operation
from record_store.infrastructure.logging import get_logger
from record_store.infrastructure.metrics import MetricsRegistry, get_metrics
from record_store.ports.outbound import IdGenerator, KeyValueEngine, RecordCodec

R = TypeVar("R", bound=Identifiable)
RecordT = TypeVar("RecordT", bound=Record)

EngineName = Literal["dbm", "sqlite"]
IdStrategy = Literal["sequential", "uuid"]

_ID_STRATEGY_KEY_TYPES: dict[str, type] = {"sequential": int, "uuid": str}


def _release(engine: KeyValueEngine, metrics: MetricsRegistry) -> None:
    try:
        engine.close()
    finally:
        metrics.open_stores.dec()


def _check_id_strategy(record_type: type[Record], ids: IdStrategy) -> None:
    """Reject an id strategy whose keys the record's ``id`` field cannot hold."""
    field = record_type.model_fields.get("id")
    if field is None:
        return
    accepted = get_args(field.annotation) or (field.annotation,)
    key_type = _ID_STRATEGY_KEY_TYPES[ids]
    if key_type not in accepted:
        raise ValueError(
            f"{record_type.__name__}.id does not accept {ids} ({key_type.__name__}) ids"
        )


def open_engine(path: str | Path, engine: EngineName = "dbm") -> KeyValueEngine:
    """Open a file-backed key-value engine by name.

    Raises:
        ValueError: If the engine name is unknown.
        StorageIOError: If the file cannot be opened.
    """
    if engine == "dbm":
        return DbmEngine(path)
    if engine == "sqlite":
        return SqliteKeyValueEngine(path)
    raise ValueError(f"Unknown engine: {engine!r}")


class StoreManager(Generic[R]):
    """Record store over a single KeyValueEngine handle.

    Keys are the records' own identifiers, encoded as 8-byte big-endian
    integers or UTF-8 strings. Records without an identifier get one from
    the id generator on insert.

    Thread Safety:
        None. The manager relies on the engine for per-call safety and on
        callers for mutual exclusion.
    """

    def __init__(
        self,
        engine: KeyValueEngine,
        codec: RecordCodec[R],
        id_generator: IdGenerator,
        name: str = "records",
        sync_on_write: bool = False,
        strict_reads: bool = False,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Wrap an already-open engine.

        Args:
            engine: Engine handle; the manager takes ownership and closes it.
            codec: Codec for the stored record type.
            id_generator: Source of identifiers for records that lack one.
            name: Store name used in logs and metric labels.
            sync_on_write: Flush the engine after every insert and delete.
            strict_reads: Default for get_all(strict=...).
            metrics: Metrics registry (default: the global one).
        """
        self._engine: KeyValueEngine | None = engine
        self._codec = codec
        self._ids = id_generator
        self._name = name
        self._sync_on_write = sync_on_write
        self._strict_reads = strict_reads
        self._metrics = metrics or get_metrics()
        self._logger = get_logger(__name__, store=name)

        self._metrics.open_stores.inc()
        self._finalizer = weakref.finalize(self, _release, engine, self._metrics)

    @classmethod
    def open(
        cls,
        path: str | Path,
        record_type: type[RecordT],
        ids: IdStrategy = "sequential",
        engine: EngineName = "dbm",
        name: str | None = None,
        sync_on_write: bool = False,
        strict_reads: bool = False,
        metrics: MetricsRegistry | None = None,
    ) -> StoreManager[RecordT]:
        """Open (creating if needed) a store file for one record type.

        Args:
            path: Store file path; parent directories are created.
            record_type: pydantic record class implementing Identifiable.
            ids: "sequential" integer ids or "uuid" string ids.
            engine: "dbm" or "sqlite".
            name: Store name (default: the file stem).

        Raises:
            StorageIOError: If the path is invalid or cannot be opened.
            ValueError: If ids or engine is unknown, or record_type's id
                field cannot hold the keys the id strategy generates.
        """
        if ids not in _ID_STRATEGY_KEY_TYPES:
            raise ValueError(f"Unknown id strategy: {ids!r}")
        _check_id_strategy(record_type, ids)

        kv = open_engine(path, engine)
        try:
            id_generator: IdGenerator = (
                SequentialIdGenerator(kv) if ids == "sequential" else UuidIdGenerator()
            )
        except Exception:
            kv.close()
            raise

        store = cls(
            kv,
            PydanticRecordCodec(record_type),
            id_generator,
            name=name or Path(path).stem,
            sync_on_write=sync_on_write,
            strict_reads=strict_reads,
            metrics=metrics,
        )
        store._logger.info("store_opened", path=str(path), engine=engine, ids=ids)
        return store

    def __enter__(self) -> StoreManager[R]:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def name(self) -> str:
        return self._name

    @property
    def closed(self) -> bool:
        return self._engine is None

    def _require_engine(self) -> KeyValueEngine:
        if self._engine is None:
            raise StoreClosedError(f"Store {self._name!r} is closed")
        return self._engine

    def insert(self, record: R) -> RecordKey:
        """Insert or replace a record, assigning an identifier if it has none.

        Returns:
            The identifier the record is stored under.
        """
        with track_operation(self._metrics, self._name, "insert"):
            engine = self._require_engine()
            key = record.record_id
            supplied = key is not None
            if key is None:
                key = self._ids.next_id()
                record = record.with_record_id(key)

            engine.put(encode_key(key), self._codec.encode(record))
            # only a stored id may advance the sequence
            if supplied:
                self._ids.observe(key)
            if self._sync_on_write:
                engine.flush()

            self._logger.debug("record_inserted", key=key)
            return key

    def get(self, key: RecordKey) -> R | None:
        """Fetch a record; None if absent."""
        with track_operation(self._metrics, self._name, "get"):
            data = self._require_engine().get(encode_key(key))
            if data is None:
                return None
            return self._codec.decode(data)

    def get_all(self, strict: bool | None = None) -> list[R]:
        """Return all records.

        Records that fail to decode are skipped, logged and counted in
        record_store_records_skipped_total; with strict=True the first
        failure is raised instead.
        """
        strict = self._strict_reads if strict is None else strict
        with track_operation(self._metrics, self._name, "get_all"):
            records: list[R] = []
            for raw_key, data in self._require_engine().scan():
                if raw_key == SEQUENCE_KEY:
                    continue
                try:
                    records.append(self._codec.decode(data))
                except SerializationError as exc:
                    if strict:
                        raise
                    self._metrics.records_skipped_total.labels(store=self._name).inc()
                    self._logger.warning("record_skipped", key=raw_key.hex(), error=str(exc))
            return records

    def delete(self, key: RecordKey) -> None:
        """Delete a record.

        Raises:
            RecordNotFoundError: If no record has this identifier.
        """
        with track_operation(self._metrics, self._name, "delete"):
            engine = self._require_engine()
            if not engine.delete(encode_key(key)):
                raise RecordNotFoundError(key)
            if self._sync_on_write:
                engine.flush()
            self._logger.debug("record_deleted", key=key)

    def count(self) -> int:
        """Number of stored records (undecodable ones included)."""
        return sum(1 for raw_key, _ in self._require_engine().scan() if raw_key != SEQUENCE_KEY)

    def flush(self) -> None:
        """Force buffered writes to durable storage."""
        self._require_engine().flush()

    def close(self) -> None:
        """Flush and release the engine. Safe to call more than once."""
        if self._engine is None:
            return
        self._engine = None
        self._finalizer()
        self._logger.info("store_closed")
