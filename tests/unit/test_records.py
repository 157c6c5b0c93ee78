"""Unit tests for record entities and the pydantic codec."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from record_store.adapters.outbound import PydanticRecordCodec
from record_store.domain.entities import Identifiable, ImageRecord, VerseRecord
from record_store.domain.errors import SerializationError


def make_image(**overrides) -> ImageRecord:
    fields = {
        "title": "Test Image",
        "data": bytes([0, 1, 2, 3, 4, 5]),
        "file_type": "image/png",
    }
    fields.update(overrides)
    return ImageRecord(**fields)


@pytest.mark.unit
class TestImageRecord:
    """Tests for ImageRecord."""

    def test_new_image_has_no_id(self) -> None:
        image = make_image()
        assert image.record_id is None
        assert image.size == 6

    def test_with_record_id_returns_copy(self) -> None:
        """Assigning an id leaves the original untouched."""
        image = make_image()
        stored = image.with_record_id(7)

        assert stored.record_id == 7
        assert image.record_id is None
        assert stored.title == image.title
        assert stored.data == image.data

    def test_records_are_immutable(self) -> None:
        image = make_image()
        with pytest.raises(ValidationError):
            image.title = "changed"  # type: ignore[misc]

    def test_title_length_limit(self) -> None:
        make_image(title="x" * 255)
        with pytest.raises(ValidationError):
            make_image(title="x" * 256)

    def test_file_type_length_limit(self) -> None:
        with pytest.raises(ValidationError):
            make_image(file_type="t" * 51)

    def test_unknown_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            make_image(width=10)

    def test_with_record_id_rejects_string_key(self) -> None:
        with pytest.raises(SerializationError, match="ImageRecord cannot carry id"):
            make_image().with_record_id("3f2a-uuid")

    def test_satisfies_identifiable(self) -> None:
        assert isinstance(make_image(), Identifiable)


@pytest.mark.unit
class TestVerseRecord:
    """Tests for VerseRecord."""

    def test_reference(self) -> None:
        verse = VerseRecord(book="John", chapter=3, verse=16, text="For God so loved the world")
        assert verse.reference() == "John 3:16"

    def test_caller_supplied_id(self) -> None:
        verse = VerseRecord(id="john-3-16", book="John", chapter=3, verse=16, text="...")
        assert verse.record_id == "john-3-16"

    def test_with_record_id_rejects_integer_key(self) -> None:
        verse = VerseRecord(book="John", chapter=3, verse=16, text="...")
        with pytest.raises(SerializationError, match="VerseRecord cannot carry id 1"):
            verse.with_record_id(1)

    @pytest.mark.parametrize("field,value", [("chapter", 0), ("verse", -1), ("book", "")])
    def test_invalid_values(self, field: str, value: object) -> None:
        fields = {"book": "John", "chapter": 3, "verse": 16, "text": "..."}
        fields[field] = value
        with pytest.raises(ValidationError):
            VerseRecord(**fields)


@pytest.mark.unit
class TestPydanticRecordCodec:
    """Tests for PydanticRecordCodec."""

    def test_round_trip_binary_payload(self) -> None:
        """Non-UTF-8 bytes survive encoding."""
        codec = PydanticRecordCodec(ImageRecord)
        image = make_image(data=b"\x89PNG\r\n\x1a\n\xff\x00").with_record_id(1)

        assert codec.decode(codec.encode(image)) == image

    def test_encode_is_json_bytes(self) -> None:
        codec = PydanticRecordCodec(VerseRecord)
        data = codec.encode(VerseRecord(id="v1", book="Ruth", chapter=1, verse=16, text="..."))
        assert isinstance(data, bytes)
        assert b'"book":"Ruth"' in data

    def test_encode_wrong_type(self) -> None:
        codec = PydanticRecordCodec(VerseRecord)
        with pytest.raises(SerializationError, match="Expected VerseRecord"):
            codec.encode(make_image())  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "payload",
        [b"not json", b"\xff\xfe\x00", b'{"id": 1, "title": "missing fields"}', b"[]"],
    )
    def test_decode_invalid(self, payload: bytes) -> None:
        codec = PydanticRecordCodec(ImageRecord)
        with pytest.raises(SerializationError, match="Cannot decode ImageRecord"):
            codec.decode(payload)

    def test_record_type(self) -> None:
        assert PydanticRecordCodec(VerseRecord).record_type is VerseRecord
