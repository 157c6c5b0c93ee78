"""Per-operation instrumentation shared by all store implementations.

Every public store operation runs inside track_operation(), which opens a
trace span, times the call into the latency histogram and counts it by
outcome.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Generator

from record_store.infrastructure.metrics import MetricsRegistry
from record_store.infrastructure.tracing import store_span


@contextmanager
def track_operation(
    metrics: MetricsRegistry,
    store: str,
    operation: str,
) -> Generator[None, None, None]:
    """
    Instrument one store operation.

    Args:
        metrics: Registry receiving the counter and latency samples
        store: Store name, recorded as a span attribute
        operation: Operation name (insert, get, get_all, delete, ...)
    """
    start = time.perf_counter()
    status = "success"
    with store_span(operation, store):
        try:
            yield
        except BaseException:
            status = "error"
            raise
        finally:
            metrics.operation_latency_seconds.labels(operation=operation).observe(
                time.perf_counter() - start
            )
            metrics.operations_total.labels(operation=operation, status=status).inc()
