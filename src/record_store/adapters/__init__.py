"""Adapters layer - concrete implementations of port interfaces.

Only outbound adapters exist: the embedded engines and the codec. The
store has no inbound surface (no network protocol, no CLI).
"""

from record_store.adapters.outbound import (
    DbmEngine,
    InMemoryEngine,
    PydanticRecordCodec,
    SqliteImageStore,
    SqliteKeyValueEngine,
)

__all__ = [
    "DbmEngine",
    "InMemoryEngine",
    "PydanticRecordCodec",
    "SqliteImageStore",
    "SqliteKeyValueEngine",
]
