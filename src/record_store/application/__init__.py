"""Application layer - store managers and the factories that open them.

Exports:
    - StoreManager: generic record store over a key-value engine
    - open_engine: open a dbm or SQLite key-value engine by name
    - open_image_store: open the relational image store from config
    - open_record_store: open a generic record store from config
"""

from record_store.application.factory import open_image_store, open_record_store
from record_store.application.store_manager import StoreManager, open_engine

__all__ = [
    "StoreManager",
    "open_engine",
    "open_image_store",
    "open_record_store",
]
