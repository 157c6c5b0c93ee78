"""Factories that open stores from configuration.

Stores are created explicitly and handed to their users; configuration and
metrics come from a Container so tests can inject their own.
"""

from __future__ import annotations

from record_store.adapters.outbound.sqlite_image_store import SqliteImageStore
from record_store.application.store_manager import IdStrategy, RecordT, StoreManager
from record_store.infrastructure.config import Config
from record_store.infrastructure.container import Container, build_container
from record_store.infrastructure.metrics import MetricsRegistry


def open_image_store(container: Container | None = None) -> SqliteImageStore:
    """Open the relational image store named by storage.image_db_name.

    Args:
        container: Source of Config and MetricsRegistry (default: built from
            the environment).
    """
    container = container or build_container()
    config = container.resolve(Config)
    config.ensure_directories()
    return SqliteImageStore(
        config.store_path(config.storage.image_db_name),
        metrics=container.resolve(MetricsRegistry),
        strict_reads=config.storage.strict_reads,
    )


def open_record_store(
    record_type: type[RecordT],
    name: str,
    ids: IdStrategy = "sequential",
    container: Container | None = None,
) -> StoreManager[RecordT]:
    """Open a generic key-value record store inside the data directory.

    Args:
        record_type: pydantic record class to store.
        name: File name of the store inside storage.data_dir.
        ids: "sequential" integer ids or "uuid" string ids.
        container: Source of Config and MetricsRegistry.
    """
    container = container or build_container()
    config = container.resolve(Config)
    config.ensure_directories()
    return StoreManager.open(
        config.store_path(name),
        record_type,
        ids=ids,
        engine=config.storage.engine,
        name=name,
        sync_on_write=config.storage.sync_on_write,
        strict_reads=config.storage.strict_reads,
        metrics=container.resolve(MetricsRegistry),
    )
