"""HTTP client the viewer uses to reach the proxy endpoint."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx

from tx_viewer.errors.provider_errors import ProxyFetchError
from tx_viewer.models.transaction import decode_envelope

if TYPE_CHECKING:
    from tx_viewer.models.transaction import TransactionRecord


class ProxyClient:
    """Async client for ``GET /transaction/{id}`` on the proxy.

    Pass *transport* to route requests somewhere other than the network,
    e.g. ``httpx.ASGITransport(app=app)`` for the in-process proxy.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Create the underlying HTTP client."""
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Accept": "application/json"},
            timeout=self._timeout,
            transport=self._transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def fetch_transaction(self, transaction_id: str) -> TransactionRecord:
        """Look up *transaction_id* through the proxy.

        Raises:
            ProxyFetchError: On transport errors, non-200 statuses or a
                non-JSON body.
            MalformedResponseError: If the body is not a transaction envelope.
        """
        client = self._ensure_connected()

        try:
            response = await client.get(f"/transaction/{quote(transaction_id, safe='')}")
        except httpx.HTTPError as exc:
            raise ProxyFetchError(f"proxy request failed: {exc}") from exc

        if response.status_code != 200:
            msg = f"proxy returned HTTP {response.status_code}"
            raise ProxyFetchError(msg, status_code=response.status_code)

        try:
            payload = json.loads(response.content)
        except (ValueError, RecursionError) as exc:
            raise ProxyFetchError("proxy returned a non-JSON body") from exc

        return decode_envelope(payload).record

    def _ensure_connected(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "proxy client is not connected, call connect() first"
            raise ProxyFetchError(msg, status_code=500)
        return self._client
