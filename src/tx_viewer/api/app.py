"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest
from starlette.responses import Response

from tx_viewer import __version__
from tx_viewer.api.middleware.cors import setup_cors
from tx_viewer.api.proxy import router as proxy_router
from tx_viewer.api.viewer import router as viewer_router
from tx_viewer.config.settings import AppConfig
from tx_viewer.errors.viewer_errors import ViewerError
from tx_viewer.metrics.collector import ProxyMetrics
from tx_viewer.metrics.middleware import PrometheusMiddleware
from tx_viewer.provider.client import CryptoAPIsClient
from tx_viewer.viewer.client import ProxyClient
from tx_viewer.viewer.formatting import resolve_timezone

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

# Base URL used for in-process requests from the viewer to the proxy.
_IN_PROCESS_URL = "http://tx-viewer.local"


def _build_proxy_client(app: FastAPI, config: AppConfig) -> ProxyClient:
    """Point the viewer at a remote proxy, or at this app when none is set."""
    if config.viewer.proxy_url:
        return ProxyClient(config.viewer.proxy_url, timeout=config.viewer.timeout)
    return ProxyClient(
        _IN_PROCESS_URL,
        timeout=config.viewer.timeout,
        transport=httpx.ASGITransport(app=app),
    )


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle hooks.

    Connects the upstream provider client and the viewer's proxy client on
    startup and closes both on exit.
    """
    config: AppConfig = app.state.config
    provider: CryptoAPIsClient = app.state.provider
    proxy_client = _build_proxy_client(app, config)

    if not config.provider.api_key:
        logger.warning("No provider API key configured; upstream lookups will be rejected")

    try:
        await provider.connect()
        await proxy_client.connect()
        app.state.proxy_client = proxy_client
        logger.info(
            "Transaction viewer started (provider=%s, network=%s)",
            provider.blockchain,
            provider.network,
        )
        yield
    finally:
        await proxy_client.close()
        await provider.close()
        logger.info("Transaction viewer shut down")


def create_app(
    *,
    config: AppConfig | None = None,
    provider: CryptoAPIsClient | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        config: Optional AppConfig. If *None*, a default config is created
            from environment variables.
        provider: Optional upstream client. If *None*, one is built from
            ``config.provider``.
    """
    if config is None:
        config = AppConfig()

    app = FastAPI(
        title="tx-viewer",
        version=__version__,
        description="Blockchain transaction detail viewer and provider proxy",
        lifespan=_lifespan,
    )

    app.state.config = config
    app.state.provider = provider or CryptoAPIsClient(config.provider)
    app.state.metrics = ProxyMetrics()
    app.state.timezone = resolve_timezone(config.viewer.timezone)

    # -- Middleware --
    setup_cors(app)
    if config.metrics.enabled:
        app.add_middleware(PrometheusMiddleware, registry=app.state.metrics.registry)

    # -- Error handler --
    @app.exception_handler(ViewerError)
    async def _viewer_error_handler(request: Request, exc: ViewerError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
        )

    # -- Base routes --
    @app.get("/health", tags=["base"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    if config.metrics.enabled:

        @app.get("/metrics", tags=["base"], include_in_schema=False)
        async def metrics_endpoint() -> Response:
            """Prometheus metrics endpoint."""
            return Response(
                content=generate_latest(app.state.metrics.registry),
                media_type="text/plain; version=0.0.4; charset=utf-8",
            )

    app.include_router(proxy_router)
    app.include_router(viewer_router)

    return app
