"""Crypto APIs REST client — transaction lookup by ID.

Async HTTP client for the blockchain-data API:
- GET /blockchain-data/<blockchain>/<network>/transactions/<transaction_id>

Every request carries the configured ``X-API-Key`` header.  The transaction
ID is percent-encoded as a single path segment, so IDs containing ``/``,
``?`` or ``#`` reach the provider intact rather than altering the URL.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from tx_viewer.errors.provider_errors import UpstreamError
from tx_viewer.models.transaction import TransactionEnvelope, decode_envelope

if TYPE_CHECKING:
    from tx_viewer.config.settings import ProviderConfig


@dataclass(frozen=True)
class UpstreamResponse:
    """A successful provider response.

    ``content`` is the body exactly as received; ``payload`` is its JSON
    decoding.
    """

    status_code: int
    content: bytes
    payload: Any


def transaction_path(transaction_id: str) -> str:
    """Return the provider path for *transaction_id* (relative to the base URL)."""
    return f"/transactions/{quote(transaction_id, safe='')}"


class CryptoAPIsClient:
    """Async HTTP client for the Crypto APIs blockchain-data endpoints.

    Usage::

        provider = CryptoAPIsClient(config)
        await provider.connect()
        try:
            envelope = await provider.get_transaction("4b66...")
        finally:
            await provider.close()
    """

    def __init__(
        self,
        config: ProviderConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the provider client.

        Args:
            config: Provider configuration (url, api_key, network, etc.).
            transport: Optional httpx transport, used in place of the network.
        """
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Create the underlying HTTP client."""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Content-Type": "application/json",
                "X-API-Key": self._config.api_key,
            },
            timeout=self._config.timeout,
            transport=self._transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def is_connected(self) -> bool:
        """Check if the HTTP client is active."""
        return self._client is not None

    @property
    def base_url(self) -> str:
        """Provider URL scoped to the configured blockchain and network."""
        root = self._config.url.rstrip("/")
        return f"{root}/blockchain-data/{self._config.blockchain}/{self._config.network.value}"

    @property
    def network(self) -> str:
        return self._config.network.value

    @property
    def blockchain(self) -> str:
        return self._config.blockchain

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_transaction_raw(self, transaction_id: str) -> UpstreamResponse:
        """Fetch a transaction and return the provider body untouched.

        Args:
            transaction_id: Opaque transaction identifier, forwarded as-is.

        Returns:
            UpstreamResponse with the raw body and its JSON decoding.

        Raises:
            UpstreamError: On transport errors, non-200 statuses or a body
                that is not JSON.
        """
        client = self._ensure_connected()

        try:
            response = await client.get(transaction_path(transaction_id))
        except httpx.HTTPError as exc:
            raise UpstreamError(f"provider request failed: {exc}") from exc

        if response.status_code != 200:
            msg = f"provider returned HTTP {response.status_code}"
            raise UpstreamError(msg, status_code=response.status_code)

        try:
            payload = json.loads(response.content)
        except (ValueError, RecursionError) as exc:
            raise UpstreamError("provider returned a non-JSON body") from exc

        return UpstreamResponse(
            status_code=response.status_code,
            content=response.content,
            payload=payload,
        )

    async def get_transaction(self, transaction_id: str) -> TransactionEnvelope:
        """Fetch and decode a transaction.

        Raises:
            UpstreamError: See :meth:`get_transaction_raw`.
            MalformedResponseError: If the body is not a transaction envelope.
        """
        upstream = await self.get_transaction_raw(transaction_id)
        return decode_envelope(upstream.payload)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _ensure_connected(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "provider client is not connected, call connect() first"
            raise UpstreamError(msg, status_code=500)
        return self._client
