"""Domain services for the record store.

Exports:
    - SequentialIdGenerator: persisted auto-increment integer ids
    - UuidIdGenerator: random UUID string ids
"""

from record_store.domain.services.id_generators import SequentialIdGenerator, UuidIdGenerator

__all__ = [
    "SequentialIdGenerator",
    "UuidIdGenerator",
]
