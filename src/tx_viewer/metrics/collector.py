"""Metrics collector — Prometheus counters and histograms.

- ``txviewer_upstream_request_histogram`` — duration of provider lookups
- ``txviewer_upstream_failures_total`` — provider lookups that ended in the
  generic proxy error
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

from prometheus_client import CollectorRegistry, Counter, Histogram

if TYPE_CHECKING:
    from collections.abc import Iterator


_PREFIX = "txviewer"


class MetricsCollector:
    """Low-level Prometheus collector that owns the registry.

    Use :class:`ProxyMetrics` for the high-level tracking interface.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self._registry = registry or CollectorRegistry()

    @property
    def registry(self) -> CollectorRegistry:
        """Return the underlying Prometheus registry."""
        return self._registry

    def histogram(self, name: str, doc: str, labels: tuple[str, ...] = ()) -> Histogram:
        """Register and return a Histogram."""
        return Histogram(name, doc, labels, registry=self._registry)

    def counter(self, name: str, doc: str, labels: tuple[str, ...] = ()) -> Counter:
        """Register and return a Counter."""
        return Counter(name, doc, labels, registry=self._registry)


class ProxyMetrics:
    """Metrics for the proxy endpoint's upstream calls."""

    def __init__(self, collector: MetricsCollector | None = None) -> None:
        self._collector = collector or MetricsCollector()

        self._upstream_request = self._collector.histogram(
            f"{_PREFIX}_upstream_request_histogram",
            "Duration of upstream transaction lookups",
        )
        self._upstream_failures = self._collector.counter(
            f"{_PREFIX}_upstream_failures",
            "Upstream transaction lookups that failed",
            ("reason",),
        )

    @property
    def registry(self) -> CollectorRegistry:
        """Return the underlying Prometheus registry."""
        return self._collector.registry

    def record_failure(self, reason: str) -> None:
        """Count a failed upstream lookup, labelled by error code."""
        self._upstream_failures.labels(reason=reason).inc()

    @contextmanager
    def track_upstream_request(self) -> Iterator[None]:
        """Track the duration of an upstream lookup."""
        start = time.monotonic()
        try:
            yield
        finally:
            self._upstream_request.observe(time.monotonic() - start)
