"""Image record stored in the relational ``images`` table or a key-value store."""

from __future__ import annotations

from pydantic import Field

from record_store.domain.entities.record import Record

TITLE_MAX_LENGTH = 255
FILE_TYPE_MAX_LENGTH = 50


class ImageRecord(Record):
    """An image blob with its title and MIME/file type.

    Attributes:
        id: Auto-increment integer assigned on insert (None before that)
        title: Display title, at most 255 characters
        data: Raw image bytes
        file_type: MIME type or extension (e.g. "image/png"), at most 50 characters
    """

    id: int | None = None
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    data: bytes
    file_type: str = Field(max_length=FILE_TYPE_MAX_LENGTH)

    @property
    def size(self) -> int:
        """Size of the image payload in bytes."""
        return len(self.data)
