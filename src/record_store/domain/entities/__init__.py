"""Domain entities for the record store.

Exports:
    - Identifiable: capability protocol (record_id / with_record_id)
    - Record: pydantic base class implementing Identifiable
    - ImageRecord: title/data/file_type image record (integer ids)
    - VerseRecord: book/chapter/verse record (string ids)
"""

from record_store.domain.entities.image import ImageRecord
from record_store.domain.entities.record import Identifiable, Record
from record_store.domain.entities.verse import VerseRecord

__all__ = [
    "Identifiable",
    "ImageRecord",
    "Record",
    "VerseRecord",
]
