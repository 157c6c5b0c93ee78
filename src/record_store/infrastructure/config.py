"""Configuration management for the record store."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageConfig(BaseModel):
    """Storage configuration."""

    data_dir: Path = Field(default=Path("data"), description="Directory holding store files")
    engine: Literal["dbm", "sqlite"] = Field(
        default="dbm", description="Embedded engine backing generic record stores"
    )
    image_db_name: str = Field(
        default="images.db", min_length=1, description="File name of the image database"
    )
    sync_on_write: bool = Field(
        default=False, description="Flush the engine after every insert/delete"
    )
    strict_reads: bool = Field(
        default=False, description="Fail full scans on undecodable records instead of skipping"
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="record_store", description="Service name for tracing")
    metrics_port: int = Field(default=8001, ge=1, le=65535, description="Prometheus metrics port")


class Config(BaseSettings):
    """Main configuration for the record store."""

    model_config = SettingsConfigDict(
        env_prefix="RECORD_STORE_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    storage: StorageConfig = Field(default_factory=StorageConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    def ensure_directories(self) -> None:
        """Ensure the data directory exists."""
        self.storage.data_dir.mkdir(parents=True, exist_ok=True)

    def store_path(self, name: str) -> Path:
        """Return the path of a store file inside the data directory."""
        return self.storage.data_dir / name


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    config = Config()
    config.ensure_directories()
    return config
