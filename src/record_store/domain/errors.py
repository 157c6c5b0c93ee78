"""Error taxonomy shared by every store flavour.

All failures surface synchronously as a subclass of StoreError. Each carries
an ErrorKind so callers can branch on the category without caring which
engine raised it. The engine's own exception is always chained as __cause__.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Categories of store failures."""

    NOT_FOUND = "not_found"
    SERIALIZATION_FAILED = "serialization_failed"
    IO_FAILURE = "io_failure"


class StoreError(Exception):
    """Base class for all record store errors."""

    kind: ErrorKind = ErrorKind.IO_FAILURE


class RecordNotFoundError(StoreError):
    """Raised when a record with the requested key does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, key: Any) -> None:
        super().__init__(f"Record not found: {key!r}")
        self.key = key


class SerializationError(StoreError):
    """Raised when a record or key cannot be encoded or decoded."""

    kind = ErrorKind.SERIALIZATION_FAILED


class StorageIOError(StoreError):
    """Raised when the underlying engine fails to open, read or write."""

    kind = ErrorKind.IO_FAILURE


class StoreClosedError(StorageIOError):
    """Raised when an operation is attempted on a closed store."""

    pass
