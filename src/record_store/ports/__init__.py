"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: APIs offered to clients (RecordStore)
- Outbound ports: Dependencies on external systems (KeyValueEngine,
  RecordCodec, IdGenerator)

Adapters implement these ports with concrete functionality.
"""

from record_store.ports.inbound import RecordStore
from record_store.ports.outbound import IdGenerator, KeyValueEngine, RecordCodec

__all__ = [
    # Inbound ports
    "RecordStore",
    # Outbound ports
    "IdGenerator",
    "KeyValueEngine",
    "RecordCodec",
]
