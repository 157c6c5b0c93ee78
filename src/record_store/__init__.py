"""
Record Store - embedded-database record wrapper

A thin CRUD facade over embedded, file-backed engines (SQLite and the dbm
family). Handles id generation, record (de)serialization and error
translation; persistence and durability belong to the wrapped engine.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
