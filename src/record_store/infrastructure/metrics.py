"""Prometheus metrics for the record store."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all record store metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        self.operations_total = Counter(
            "record_store_operations_total",
            "Total number of store operations",
            ["operation", "status"],  # status: success, error
            registry=self._registry,
        )

        self.operation_latency_seconds = Histogram(
            "record_store_operation_latency_seconds",
            "Store operation latency in seconds",
            ["operation"],  # insert, get, get_all, delete
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
            registry=self._registry,
        )

        self.records_skipped_total = Counter(
            "record_store_records_skipped_total",
            "Records skipped during full scans because they failed to decode",
            ["store"],
            registry=self._registry,
        )

        self.open_stores = Gauge(
            "record_store_open_stores",
            "Number of store handles currently open",
            registry=self._registry,
        )

        self.info = Info(
            "record_store",
            "Record store information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        """The underlying collector registry."""
        return self._registry


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from record_store import __version__
    _metrics.info.info({
        "version": __version__,
    })

    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
