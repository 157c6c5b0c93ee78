"""In-memory Key-Value Engine for tests and ephemeral stores.

Nothing is persisted; flush() is a no-op and close() drops the data.
"""

from __future__ import annotations

from typing import Iterator

from record_store.domain.errors import StoreClosedError


class InMemoryEngine:
    """Dict-backed implementation of the KeyValueEngine protocol."""

    def __init__(self) -> None:
        self._data: dict[bytes, bytes] | None = {}

    def _require_open(self) -> dict[bytes, bytes]:
        if self._data is None:
            raise StoreClosedError("In-memory database is closed")
        return self._data

    def get(self, key: bytes) -> bytes | None:
        return self._require_open().get(key)

    def put(self, key: bytes, value: bytes) -> None:
        self._require_open()[bytes(key)] = bytes(value)

    def delete(self, key: bytes) -> bool:
        return self._require_open().pop(key, None) is not None

    def scan(self) -> Iterator[tuple[bytes, bytes]]:
        data = self._require_open()
        for key in sorted(data):
            yield key, data[key]

    def flush(self) -> None:
        self._require_open()

    def close(self) -> None:
        self._data = None
