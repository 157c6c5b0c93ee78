"""Key-Value Engine port for embedded, file-backed byte stores.

This outbound port defines the contract the store manager needs from an
embedded engine. Durability, atomicity of single writes and on-disk layout
all belong to the engine; the manager never looks inside.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Iterator, Protocol


class KeyValueEngine(Protocol):
    """Protocol for an embedded key-value file store.

    Keys and values are opaque bytes.

    Thread Safety:
        Implementations perform no locking of their own; callers that
        share an engine across threads must serialize access.
    """

    @abstractmethod
    def get(self, key: bytes) -> bytes | None:
        """Return the value stored under key, or None if absent.

        Raises:
            StorageIOError: If the read fails.
        """
        ...

    @abstractmethod
    def put(self, key: bytes, value: bytes) -> None:
        """Store value under key, replacing any previous value.

        Raises:
            StorageIOError: If the write fails.
        """
        ...

    @abstractmethod
    def delete(self, key: bytes) -> bool:
        """Remove key.

        Returns:
            True if the key existed, False otherwise.

        Raises:
            StorageIOError: If the write fails.
        """
        ...

    @abstractmethod
    def scan(self) -> Iterator[tuple[bytes, bytes]]:
        """Iterate over all (key, value) pairs in ascending key order.

        Raises:
            StorageIOError: If the read fails.
        """
        ...

    @abstractmethod
    def flush(self) -> None:
        """Force buffered writes to durable storage."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Flush and release the underlying file handle.

        After calling close(), the engine should not be used.
        """
        ...
