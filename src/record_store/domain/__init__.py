"""Domain layer - records, identifiers, errors and id generation."""

from record_store.domain.errors import (
    ErrorKind,
    RecordNotFoundError,
    SerializationError,
    StorageIOError,
    StoreClosedError,
    StoreError,
)

__all__ = [
    "ErrorKind",
    "RecordNotFoundError",
    "SerializationError",
    "StorageIOError",
    "StoreClosedError",
    "StoreError",
]
