"""OpenTelemetry tracing configuration.

Every store operation becomes one span named ``record_store.<operation>``
with the store name and operation as attributes. Without setup_tracing()
the spans go to OpenTelemetry's no-op provider.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

SPAN_PREFIX = "record_store"

_tracer: trace.Tracer | None = None


def setup_tracing(
    service_name: str = "record_store",
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> trace.Tracer:
    """
    Set up OpenTelemetry tracing.

    Args:
        service_name: Name of the service for tracing
        otlp_endpoint: OTLP collector endpoint (e.g., "http://localhost:4317")
        console_export: Whether to also export to console (for debugging)

    Returns:
        Configured tracer instance
    """
    global _tracer

    from record_store import __version__

    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": service_name,
                "service.version": __version__,
            }
        )
    )

    if otlp_endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
        )
    if console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)

    # Take the tracer from our provider; a global provider may already have been set
    _tracer = provider.get_tracer(service_name, __version__)
    return _tracer


def get_tracer() -> trace.Tracer:
    """Get the global tracer instance."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(SPAN_PREFIX)
    return _tracer


@contextmanager
def store_span(
    operation: str,
    store: str,
    **attributes: Any,
) -> Generator[trace.Span, None, None]:
    """
    Open a span for one store operation.

    Args:
        operation: Operation name (insert, get, get_all, delete, ...)
        store: Store name
        **attributes: Extra span attributes

    Yields:
        The created span
    """
    with get_tracer().start_as_current_span(f"{SPAN_PREFIX}.{operation}") as span:
        span.set_attribute(f"{SPAN_PREFIX}.store", store)
        span.set_attribute(f"{SPAN_PREFIX}.operation", operation)
        for key, value in attributes.items():
            span.set_attribute(f"{SPAN_PREFIX}.{key}", value)
        yield span
