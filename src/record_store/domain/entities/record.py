"""Base record type and the identifier capability every stored record has.

A store only needs two things from a record: the identifier it carries (if
any) and a way to get a copy carrying a freshly generated one. Anything that
offers both satisfies Identifiable; the pydantic Record base class below is
the stock implementation and also gives records a serializable shape.
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, ConfigDict, ValidationError

from record_store.domain.errors import SerializationError
from record_store.domain.value_objects import RecordKey

R = TypeVar("R", bound="Identifiable")


@runtime_checkable
class Identifiable(Protocol):
    """Capability of carrying a record identifier."""

    @property
    def record_id(self) -> RecordKey | None:
        """The record's identifier, or None if not yet assigned."""
        ...

    def with_record_id(self: R, key: RecordKey) -> R:
        """Return a copy of this record carrying the given identifier."""
        ...


class Record(BaseModel):
    """Immutable, serializable record keyed by its ``id`` field.

    Subclasses narrow ``id`` to ``int | None`` or ``str | None`` and add
    payload fields. Bytes fields round-trip through JSON as base64.

    Example:
        >>> class Note(Record):
        ...     id: str | None = None
        ...     text: str
        >>> note = Note(text="hi").with_record_id("n-1")
        >>> note.record_id
        'n-1'
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )

    id: RecordKey | None = None

    @property
    def record_id(self) -> RecordKey | None:
        """The record's identifier, or None if not yet assigned."""
        return self.id

    def with_record_id(self, key: RecordKey) -> Record:
        """Return a validated copy of this record carrying the given identifier.

        Raises:
            SerializationError: If the ``id`` field does not accept the key
                (e.g. an integer for a string-keyed record).
        """
        try:
            return type(self).model_validate({**self.model_dump(), "id": key})
        except ValidationError as exc:
            raise SerializationError(
                f"{type(self).__name__} cannot carry id {key!r}: {exc}"
            ) from exc
