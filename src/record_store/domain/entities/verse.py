"""Scripture verse record keyed by a string identifier."""

from __future__ import annotations

from pydantic import Field

from record_store.domain.entities.record import Record


class VerseRecord(Record):
    """A single verse.

    The identifier is either supplied by the caller (e.g. "john-3-16") or
    generated as a UUID string on insert.
    """

    id: str | None = None
    book: str = Field(min_length=1)
    chapter: int = Field(ge=1)
    verse: int = Field(ge=1)
    text: str

    def reference(self) -> str:
        """Human-readable reference, e.g. ``"John 3:16"``."""
        return f"{self.book} {self.chapter}:{self.verse}"
