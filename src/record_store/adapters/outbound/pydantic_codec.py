"""Record codec backed by pydantic JSON serialization.

Records are pydantic models, so their own schema drives both directions:
model_dump_json() to encode and model_validate_json() to decode (with full
validation). Bytes fields are base64 in the JSON payload.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from record_store.domain.errors import SerializationError

M = TypeVar("M", bound=BaseModel)


class PydanticRecordCodec(Generic[M]):
    """RecordCodec for one pydantic model type.

    Example:
        >>> codec = PydanticRecordCodec(VerseRecord)
        >>> codec.decode(codec.encode(verse)) == verse
        True
    """

    def __init__(self, record_type: type[M]) -> None:
        self._record_type = record_type

    @property
    def record_type(self) -> type[M]:
        return self._record_type

    def encode(self, record: M) -> bytes:
        """Serialize a record to UTF-8 JSON bytes.

        Raises:
            SerializationError: If record is not an instance of the codec's
                type or pydantic cannot serialize it.
        """
        if not isinstance(record, self._record_type):
            raise SerializationError(
                f"Expected {self._record_type.__name__}, got {type(record).__name__}"
            )
        try:
            return record.model_dump_json().encode("utf-8")
        except PydanticSerializationError as exc:
            raise SerializationError(
                f"Cannot serialize {self._record_type.__name__}: {exc}"
            ) from exc

    def decode(self, data: bytes) -> M:
        """Deserialize and validate a record.

        Raises:
            SerializationError: If data is not valid JSON for the record type.
        """
        try:
            return self._record_type.model_validate_json(data)
        except ValueError as exc:
            # pydantic.ValidationError and UnicodeDecodeError are both ValueErrors
            raise SerializationError(
                f"Cannot decode {self._record_type.__name__}: {exc}"
            ) from exc
