"""Prometheus HTTP request metrics middleware for FastAPI.

Tracks, labelled by route template rather than raw URL so that every
``/transaction/{id}`` lookup lands in one series:

- ``http_request_total`` (counter) — requests by method, route, status
- ``http_request_duration_seconds`` (histogram) — duration by method, route

Scrapes of the metrics endpoint itself are not recorded.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware

if TYPE_CHECKING:
    from collections.abc import Callable

    from prometheus_client import CollectorRegistry
    from starlette.requests import Request
    from starlette.responses import Response

DEFAULT_APP_LABEL = "tx-viewer"
EXCLUDED_PATHS = frozenset({"/metrics"})


def _route_label(request: Request) -> str:
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path if isinstance(path, str) else request.url.path


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that records request count and duration.

    A handler that raises is counted with status ``500`` before the
    exception propagates.
    """

    def __init__(
        self,
        app: object,
        *,
        registry: CollectorRegistry,
        app_label: str = DEFAULT_APP_LABEL,
    ) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._app_label = app_label
        self._requests = Counter(
            "http_request_total",
            "Total HTTP requests",
            ("method", "path", "status_code", "app"),
            registry=registry,
        )
        self._duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ("method", "path", "app"),
            registry=registry,
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:  # type: ignore[type-arg]
        if request.url.path in EXCLUDED_PATHS:
            return await call_next(request)

        start = time.monotonic()
        status = "500"
        try:
            response: Response = await call_next(request)
            status = str(response.status_code)
            return response
        finally:
            self._observe(request, status, time.monotonic() - start)

    def _observe(self, request: Request, status: str, duration: float) -> None:
        path = _route_label(request)
        self._requests.labels(
            method=request.method, path=path, status_code=status, app=self._app_label
        ).inc()
        self._duration.labels(method=request.method, path=path, app=self._app_label).observe(
            duration
        )
