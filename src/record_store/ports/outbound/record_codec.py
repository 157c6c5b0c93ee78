"""Record Codec port: binary encoding of records."""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol, TypeVar

R = TypeVar("R")


class RecordCodec(Protocol[R]):
    """Protocol for turning records into bytes and back."""

    @abstractmethod
    def encode(self, record: R) -> bytes:
        """Serialize a record.

        Raises:
            SerializationError: If the record cannot be encoded.
        """
        ...

    @abstractmethod
    def decode(self, data: bytes) -> R:
        """Deserialize a record.

        Raises:
            SerializationError: If data is not a valid encoded record.
        """
        ...
