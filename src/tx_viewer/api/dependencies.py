"""FastAPI dependency injection helpers.

Objects are placed on ``app.state`` by the lifespan in
:mod:`tx_viewer.api.app`; these callables fetch them for route handlers.
"""

from __future__ import annotations

from datetime import tzinfo  # noqa: TC003 - FastAPI resolves annotations at runtime

from fastapi import Request

from tx_viewer.errors.definitions import ErrProviderNotReady, ErrViewerNotReady
from tx_viewer.metrics.collector import ProxyMetrics  # noqa: TC001
from tx_viewer.provider.client import CryptoAPIsClient  # noqa: TC001
from tx_viewer.viewer.client import ProxyClient  # noqa: TC001


def get_provider(request: Request) -> CryptoAPIsClient:
    """Retrieve the connected upstream client from ``app.state``.

    Raises:
        ErrProviderNotReady: If the lifespan has not run.
    """
    provider: CryptoAPIsClient | None = getattr(request.app.state, "provider", None)
    if provider is None or not provider.is_connected:
        raise ErrProviderNotReady
    return provider


def get_metrics(request: Request) -> ProxyMetrics:
    return request.app.state.metrics


def get_proxy_client(request: Request) -> ProxyClient:
    """Retrieve the viewer's proxy client from ``app.state``.

    Raises:
        ErrViewerNotReady: If the lifespan has not run.
    """
    client: ProxyClient | None = getattr(request.app.state, "proxy_client", None)
    if client is None or not client.is_connected:
        raise ErrViewerNotReady
    return client


def get_timezone(request: Request) -> tzinfo | None:
    return request.app.state.timezone
