"""Proxy endpoint — relay a transaction lookup to the upstream provider."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from tx_viewer.api.dependencies import get_metrics, get_provider
from tx_viewer.errors.definitions import INTERNAL_SERVER_ERROR_BODY
from tx_viewer.errors.provider_errors import UpstreamError
from tx_viewer.metrics.collector import ProxyMetrics  # noqa: TC001
from tx_viewer.provider.client import CryptoAPIsClient  # noqa: TC001

logger = logging.getLogger(__name__)

router = APIRouter(tags=["proxy"])


@router.get("/transaction/{transaction_id:path}")
async def get_transaction(
    transaction_id: str,
    provider: Annotated[CryptoAPIsClient, Depends(get_provider)],
    metrics: Annotated[ProxyMetrics, Depends(get_metrics)],
) -> Response:
    """Return the provider's body for *transaction_id* unchanged.

    Any upstream failure becomes ``500 {"error": "Internal Server Error"}``.
    """
    try:
        with metrics.track_upstream_request():
            upstream = await provider.get_transaction_raw(transaction_id)
    except UpstreamError as exc:
        logger.error("Error fetching transaction data for %r: %s", transaction_id, exc.message)
        metrics.record_failure(exc.code)
        return JSONResponse(status_code=500, content=INTERNAL_SERVER_ERROR_BODY)

    return Response(content=upstream.content, media_type="application/json")
