"""Value objects for the record store domain.

Exports:
    Identifiers:
        - RecordKey: int or str record identifier
        - encode_key, decode_int_key, decode_str_key: engine key codec
        - SEQUENCE_KEY: reserved key for the id high-water mark
"""

from record_store.domain.value_objects.identifiers import (
    INT_KEY_SIZE,
    SEQUENCE_KEY,
    RecordKey,
    decode_int_key,
    decode_str_key,
    encode_key,
)

__all__ = [
    "INT_KEY_SIZE",
    "SEQUENCE_KEY",
    "RecordKey",
    "decode_int_key",
    "decode_str_key",
    "encode_key",
]
