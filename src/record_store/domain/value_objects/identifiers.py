"""Record identifiers and their on-disk key encoding.

Integer keys are stored as 8-byte big-endian unsigned values so that the
byte order of keys matches their numeric order. String keys are stored as
UTF-8.
"""

from __future__ import annotations

import struct
from typing import Union

from record_store.domain.errors import SerializationError


RecordKey = Union[int, str]
"""Identifier of a stored record: an auto-generated integer or a string (e.g. UUID)."""

INT_KEY_FORMAT = ">Q"  # uint64, big-endian
INT_KEY_SIZE = struct.calcsize(INT_KEY_FORMAT)

# Reserved engine key holding the sequential id high-water mark.
# Never a valid encoded int key (wrong length) and never returned by scans.
SEQUENCE_KEY = b"__sequence__"


def encode_key(key: RecordKey) -> bytes:
    """Encode a record key to engine bytes.

    Raises:
        SerializationError: If the key is not an int or str, is a negative or
            oversized int, or collides with the reserved sequence key.
    """
    # bool is an int subclass; a True/False key is almost certainly a bug
    if isinstance(key, bool):
        raise SerializationError(f"Unsupported key type: {type(key).__name__}")

    if isinstance(key, int):
        try:
            return struct.pack(INT_KEY_FORMAT, key)
        except struct.error as exc:
            raise SerializationError(f"Integer key out of range: {key}") from exc

    if isinstance(key, str):
        encoded = key.encode("utf-8")
        if encoded == SEQUENCE_KEY:
            raise SerializationError(f"Key {key!r} is reserved")
        return encoded

    raise SerializationError(f"Unsupported key type: {type(key).__name__}")


def decode_int_key(data: bytes) -> int:
    """Decode an 8-byte big-endian key.

    Raises:
        SerializationError: If data is not exactly 8 bytes.
    """
    if len(data) != INT_KEY_SIZE:
        raise SerializationError(f"Integer key requires {INT_KEY_SIZE} bytes, got {len(data)}")
    return struct.unpack(INT_KEY_FORMAT, data)[0]


def decode_str_key(data: bytes) -> str:
    """Decode a UTF-8 key.

    Raises:
        SerializationError: If data is not valid UTF-8.
    """
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SerializationError(f"Invalid UTF-8 key: {data!r}") from exc
