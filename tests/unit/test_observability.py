"""Unit tests for logging, tracing and per-operation instrumentation."""

from __future__ import annotations

import io
import json
from typing import Iterator

import pytest
import structlog
import structlog.testing
from prometheus_client import CollectorRegistry

from record_store import __version__
from record_store.domain.errors import RecordNotFoundError
from record_store.infrastructure.config import Config, ObservabilityConfig
from record_store.infrastructure.instrumentation import track_operation
from record_store.infrastructure.logging import get_logger, setup_logging
from record_store.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from record_store.infrastructure.observability import setup_observability
from record_store.infrastructure.tracing import get_tracer, setup_tracing, store_span


@pytest.fixture
def log_stream() -> Iterator[io.StringIO]:
    """Capture structlog output, restoring the default configuration afterwards."""
    stream = io.StringIO()
    yield stream
    structlog.reset_defaults()


@pytest.mark.unit
class TestLogging:
    """Tests for structlog setup."""

    @pytest.mark.parametrize("log_format", ["json", "console"])
    def test_setup_logging(self, log_format: str, log_stream: io.StringIO) -> None:
        setup_logging(level="INFO", log_format=log_format, stream=log_stream)
        assert structlog.is_configured()

    def test_json_output(self, log_stream: io.StringIO) -> None:
        setup_logging(level="INFO", log_format="json", stream=log_stream)
        get_logger("test", store="verses").warning("record_skipped", key=b"\x00\x2a")

        entry = json.loads(log_stream.getvalue().strip().splitlines()[-1])
        assert entry["event"] == "record_skipped"
        assert entry["store"] == "verses"
        assert entry["key"] == "002a"
        assert entry["level"] == "warning"
        assert "timestamp" in entry

    def test_level_filtering(self, log_stream: io.StringIO) -> None:
        setup_logging(level="WARNING", log_format="json", stream=log_stream)
        get_logger("test").debug("record_inserted")

        assert "record_inserted" not in log_stream.getvalue()

    def test_logger_binds_initial_context(self) -> None:
        with structlog.testing.capture_logs() as logs:
            get_logger("test", store="images").info("store_opened", path="/tmp/x.db")

        assert logs == [
            {"event": "store_opened", "store": "images", "path": "/tmp/x.db", "log_level": "info"}
        ]


@pytest.mark.unit
class TestTracking:
    """Tests for track_operation."""

    def test_success_is_counted(self, metrics_registry: MetricsRegistry) -> None:
        with track_operation(metrics_registry, "images", "insert"):
            pass

        sample = metrics_registry.registry.get_sample_value
        assert sample("record_store_operations_total", {"operation": "insert", "status": "success"}) == 1.0
        assert sample("record_store_operation_latency_seconds_count", {"operation": "insert"}) == 1.0

    def test_error_is_counted_and_reraised(self, metrics_registry: MetricsRegistry) -> None:
        with pytest.raises(RecordNotFoundError):
            with track_operation(metrics_registry, "images", "delete"):
                raise RecordNotFoundError(3)

        assert metrics_registry.registry.get_sample_value(
            "record_store_operations_total", {"operation": "delete", "status": "error"}
        ) == 1.0

    def test_store_span_yields_span(self) -> None:
        with store_span("get", "images", key=7) as span:
            assert span is not None


@pytest.mark.unit
class TestSetup:
    """Tests for the metrics exporter and tracer provider setup."""

    def test_setup_metrics(self) -> None:
        registry = CollectorRegistry(auto_describe=True)
        metrics = setup_metrics(port=0, registry=registry)

        assert get_metrics() is metrics
        assert registry.get_sample_value(
            "record_store_info", {"version": __version__}
        ) == 1.0

    def test_setup_tracing(self) -> None:
        tracer = setup_tracing(service_name="record_store_test")

        assert get_tracer() is tracer
        with store_span("setup", "images") as span:
            assert span is not None

    def test_setup_observability(self, log_stream: io.StringIO) -> None:
        registry = CollectorRegistry(auto_describe=True)
        config = Config(observability=ObservabilityConfig(log_level="DEBUG", log_format="console"))

        metrics = setup_observability(config, registry=registry)

        assert metrics.registry is registry
        assert structlog.is_configured()
