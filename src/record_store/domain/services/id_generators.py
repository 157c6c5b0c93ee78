"""Identifier generators for newly inserted records.

SequentialIdGenerator hands out 1, 2, 3, ... and persists the high-water
mark inside the engine itself under SEQUENCE_KEY, so an id is never handed
out twice for the same file, even after the highest record was deleted and
the store reopened. UuidIdGenerator needs no state.
"""

from __future__ import annotations

import uuid

from record_store.domain.value_objects import (
    INT_KEY_SIZE,
    SEQUENCE_KEY,
    RecordKey,
    decode_int_key,
    encode_key,
)
from record_store.ports.outbound.key_value_engine import KeyValueEngine


def _is_text_key(key: bytes) -> bool:
    """True for an 8-byte key that is a printable UTF-8 string id, not an integer."""
    try:
        return key.decode("utf-8").isprintable()
    except UnicodeDecodeError:
        return False


class SequentialIdGenerator:
    """Monotonically increasing integer ids backed by a persisted counter.

    Attributes:
        last_id: The most recently issued id (0 if none yet).
    """

    def __init__(self, engine: KeyValueEngine) -> None:
        """Load the high-water mark from the engine.

        If the counter key is missing (e.g. a file written by another tool),
        the mark is recovered from the largest integer key present.
        """
        self._engine = engine
        stored = engine.get(SEQUENCE_KEY)
        if stored is not None:
            self._last_id = decode_int_key(stored)
        else:
            self._last_id = self._recover_high_water()

    def _recover_high_water(self) -> int:
        highest = 0
        for key, _ in self._engine.scan():
            if len(key) == INT_KEY_SIZE and not _is_text_key(key):
                highest = max(highest, decode_int_key(key))
        return highest

    @property
    def last_id(self) -> int:
        return self._last_id

    def next_id(self) -> int:
        """Return the next id and persist the new high-water mark."""
        next_id = self._last_id + 1
        self._engine.put(SEQUENCE_KEY, encode_key(next_id))
        self._last_id = next_id
        return next_id

    def observe(self, key: RecordKey) -> None:
        """Raise the high-water mark past a caller-supplied integer id."""
        if isinstance(key, int) and not isinstance(key, bool) and key > self._last_id:
            self._engine.put(SEQUENCE_KEY, encode_key(key))
            self._last_id = key


class UuidIdGenerator:
    """Random UUID4 string ids."""

    def next_id(self) -> str:
        return str(uuid.uuid4())

    def observe(self, key: RecordKey) -> None:
        pass
