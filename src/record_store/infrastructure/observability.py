"""One-call observability setup driven by Config.observability."""

from __future__ import annotations

from prometheus_client import CollectorRegistry

from record_store.infrastructure.config import Config
from record_store.infrastructure.logging import get_logger, setup_logging
from record_store.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from record_store.infrastructure.tracing import setup_tracing


def setup_observability(
    config: Config,
    serve_metrics: bool = False,
    registry: CollectorRegistry | None = None,
) -> MetricsRegistry:
    """
    Configure logging and tracing, and optionally the metrics exporter.

    Args:
        config: Configuration whose ``observability`` section is applied
        serve_metrics: Start the Prometheus HTTP exporter on metrics_port
        registry: Collector registry for the returned metrics

    Returns:
        The metrics registry stores should report to
    """
    obs = config.observability
    setup_logging(level=obs.log_level, log_format=obs.log_format)
    setup_tracing(service_name=obs.otel_service_name, otlp_endpoint=obs.otel_endpoint)

    if serve_metrics:
        metrics = setup_metrics(port=obs.metrics_port, registry=registry)
    elif registry is not None:
        metrics = MetricsRegistry(registry)
    else:
        metrics = get_metrics()

    get_logger(__name__).info(
        "observability_configured",
        log_level=obs.log_level,
        log_format=obs.log_format,
        otel_endpoint=obs.otel_endpoint,
        serve_metrics=serve_metrics,
    )
    return metrics
