"""Outbound ports - interfaces for external dependencies.

Outbound ports define contracts for what the store manager depends on:
the embedded engine, the record codec and id generation.
"""

from record_store.ports.outbound.id_generator import IdGenerator
from record_store.ports.outbound.key_value_engine import KeyValueEngine
from record_store.ports.outbound.record_codec import RecordCodec

__all__ = [
    "IdGenerator",
    "KeyValueEngine",
    "RecordCodec",
]
