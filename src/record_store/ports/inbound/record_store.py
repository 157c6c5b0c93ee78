"""Record Store port: the CRUD facade offered to callers.

Both store flavours (key-value and relational) implement this protocol, so
callers and tests can be written once against it.

Example:
    with StoreManager.open(path, VerseRecord, ids="uuid") as store:
        key = store.insert(VerseRecord(book="John", chapter=3, verse=16, text="..."))
        verse = store.get(key)
        store.delete(key)
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol, TypeVar

from record_store.domain.value_objects import RecordKey

R = TypeVar("R")


class RecordStore(Protocol[R]):
    """Protocol for a record store bound to one on-disk file.

    Thread Safety:
        No internal locking. Share a store across threads only behind
        external mutual exclusion.
    """

    @property
    @abstractmethod
    def closed(self) -> bool:
        """True once close() has been called."""
        ...

    @abstractmethod
    def insert(self, record: R) -> RecordKey:
        """Insert or replace a record.

        A record without an identifier receives a newly generated one.
        A record with an identifier overwrites any record stored under it.

        Returns:
            The identifier the record is stored under.

        Raises:
            SerializationError: If the record cannot be encoded.
            StorageIOError: If the write fails or the store is closed.
        """
        ...

    @abstractmethod
    def get(self, key: RecordKey) -> R | None:
        """Fetch a record by identifier.

        Returns:
            The record, or None if no record has this identifier.

        Raises:
            SerializationError: If the stored record cannot be decoded.
            StorageIOError: If the read fails or the store is closed.
        """
        ...

    @abstractmethod
    def get_all(self, strict: bool | None = None) -> list[R]:
        """Return every stored record (order unspecified).

        Args:
            strict: Raise on the first undecodable record instead of skipping
                it. None uses the store's configured default.

        Raises:
            SerializationError: Only with strict=True.
            StorageIOError: If the scan fails or the store is closed.
        """
        ...

    @abstractmethod
    def delete(self, key: RecordKey) -> None:
        """Delete a record by identifier.

        Raises:
            RecordNotFoundError: If no record has this identifier.
            StorageIOError: If the write fails or the store is closed.
        """
        ...

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored records."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Flush to durable storage and release the handle. Idempotent."""
        ...
