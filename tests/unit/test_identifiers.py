"""Unit tests for record keys and their byte encoding."""

from __future__ import annotations

import pytest

from record_store.domain.errors import ErrorKind, SerializationError
from record_store.domain.value_objects import (
    INT_KEY_SIZE,
    SEQUENCE_KEY,
    decode_int_key,
    decode_str_key,
    encode_key,
)


@pytest.mark.unit
class TestEncodeKey:
    """Tests for encode_key."""

    def test_int_key_is_big_endian(self) -> None:
        """Integers encode as 8-byte big-endian."""
        assert encode_key(1) == b"\x00\x00\x00\x00\x00\x00\x00\x01"
        assert encode_key(256) == b"\x00\x00\x00\x00\x00\x00\x01\x00"
        assert len(encode_key(2**64 - 1)) == INT_KEY_SIZE

    def test_int_key_order_matches_byte_order(self) -> None:
        """Sorting encoded keys sorts the integers numerically."""
        values = [300, 2, 70000, 1, 255, 256]
        encoded = sorted(encode_key(v) for v in values)
        assert [decode_int_key(e) for e in encoded] == sorted(values)

    def test_str_key_is_utf8(self) -> None:
        """Strings encode as UTF-8."""
        assert encode_key("genesis-1-1") == b"genesis-1-1"
        assert encode_key("café") == "café".encode("utf-8")

    @pytest.mark.parametrize("key", [-1, 2**64])
    def test_int_out_of_range(self, key: int) -> None:
        """Negative and oversized integers are rejected."""
        with pytest.raises(SerializationError, match="out of range"):
            encode_key(key)

    @pytest.mark.parametrize("key", [True, 1.5, b"raw", None])
    def test_unsupported_types(self, key: object) -> None:
        """Only int and str keys are accepted."""
        with pytest.raises(SerializationError, match="Unsupported key type"):
            encode_key(key)  # type: ignore[arg-type]

    def test_reserved_key(self) -> None:
        """The sequence key cannot be used as a record key."""
        with pytest.raises(SerializationError) as exc_info:
            encode_key(SEQUENCE_KEY.decode("utf-8"))
        assert exc_info.value.kind is ErrorKind.SERIALIZATION_FAILED


@pytest.mark.unit
class TestDecodeKey:
    """Tests for decode_int_key and decode_str_key."""

    def test_decode_int(self) -> None:
        assert decode_int_key(encode_key(42)) == 42

    def test_decode_int_wrong_length(self) -> None:
        with pytest.raises(SerializationError, match="requires 8 bytes"):
            decode_int_key(b"\x01\x02")

    def test_decode_str(self) -> None:
        assert decode_str_key("verse-1".encode("utf-8")) == "verse-1"

    def test_decode_str_invalid_utf8(self) -> None:
        with pytest.raises(SerializationError, match="Invalid UTF-8"):
            decode_str_key(b"\xff\xfe")
