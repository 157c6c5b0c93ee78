"""Inbound ports - APIs offered to clients."""

from record_store.ports.inbound.record_store import RecordStore

__all__ = [
    "RecordStore",
]
