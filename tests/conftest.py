"""Pytest configuration and fixtures for record_store tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from record_store.infrastructure.config import Config, StorageConfig
from record_store.infrastructure.container import Container, build_container
from record_store.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_dir: Path) -> Config:
    """Provide a test configuration rooted in a temporary directory."""
    return Config(
        storage=StorageConfig(
            data_dir=temp_dir / "data",
            engine="dbm",
        ),
    )


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid duplicate-metric errors between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def container(test_config: Config, metrics_registry: MetricsRegistry) -> Generator[Container, None, None]:
    """Provide a container wired with the test config and metrics."""
    c = build_container(test_config, metrics_registry)
    yield c
    c.clear()


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
