"""Outbound adapters - implementations of outbound ports.

These adapters wrap the embedded engines (dbm, SQLite), the pydantic
record codec, and the relational image store.
"""

from record_store.adapters.outbound.dbm_engine import DbmEngine
from record_store.adapters.outbound.memory_engine import InMemoryEngine
from record_store.adapters.outbound.pydantic_codec import PydanticRecordCodec
from record_store.adapters.outbound.sqlite_image_store import SqliteImageStore
from record_store.adapters.outbound.sqlite_kv_engine import SqliteKeyValueEngine

__all__ = [
    "DbmEngine",
    "InMemoryEngine",
    "PydanticRecordCodec",
    "SqliteImageStore",
    "SqliteKeyValueEngine",
]
