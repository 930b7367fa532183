"""Viewer page — the lookup form and the rendered transaction."""

from __future__ import annotations

from datetime import tzinfo  # noqa: TC003 - FastAPI resolves annotations at runtime
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from tx_viewer.api.dependencies import get_proxy_client, get_timezone
from tx_viewer.viewer.client import ProxyClient  # noqa: TC001
from tx_viewer.viewer.controller import TransactionViewer
from tx_viewer.viewer.page import render_page
from tx_viewer.viewer.state import Idle

router = APIRouter(tags=["viewer"])


@router.get("/", response_class=HTMLResponse)
async def viewer_page(
    client: Annotated[ProxyClient, Depends(get_proxy_client)],
    tz: Annotated[tzinfo | None, Depends(get_timezone)],
    transaction_id: str | None = None,
) -> HTMLResponse:
    """Render the form, plus the lookup result when ``transaction_id`` is given."""
    if transaction_id is None:
        return HTMLResponse(render_page(Idle(), tz))

    viewer = TransactionViewer(client)
    state = await viewer.lookup(transaction_id)
    return HTMLResponse(render_page(state, tz))
