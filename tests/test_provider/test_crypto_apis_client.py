"""Tests for the Crypto APIs provider client — uses httpx mock transport."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import unquote

import httpx
import pytest
from sample_data import TEST_API_KEY, TEST_PROVIDER_URL, TX_ID, UPSTREAM_PREFIX

from tx_viewer.config.settings import Network, ProviderConfig
from tx_viewer.errors.provider_errors import MalformedResponseError, UpstreamError
from tx_viewer.models.transaction import TransactionEnvelope
from tx_viewer.provider.client import CryptoAPIsClient, UpstreamResponse, transaction_path

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _config(**overrides: Any) -> ProviderConfig:
    defaults: dict[str, Any] = {"url": TEST_PROVIDER_URL, "api_key": TEST_API_KEY}
    defaults.update(overrides)
    return ProviderConfig(**defaults)


async def _connected(handler: Any, **overrides: Any) -> CryptoAPIsClient:
    provider = CryptoAPIsClient(_config(**overrides), transport=httpx.MockTransport(handler))
    await provider.connect()
    return provider


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:
    async def test_not_connected_by_default(self) -> None:
        assert CryptoAPIsClient(_config()).is_connected is False

    async def test_connect_and_close(self) -> None:
        provider = CryptoAPIsClient(_config())
        await provider.connect()
        assert provider.is_connected is True
        await provider.close()
        assert provider.is_connected is False

    async def test_close_idempotent(self) -> None:
        provider = CryptoAPIsClient(_config())
        await provider.close()
        assert provider.is_connected is False

    async def test_not_connected_raises(self) -> None:
        provider = CryptoAPIsClient(_config())
        with pytest.raises(UpstreamError, match="not connected") as exc_info:
            await provider.get_transaction_raw(TX_ID)
        assert exc_info.value.status_code == 500

    def test_base_url(self) -> None:
        provider = CryptoAPIsClient(_config(url="https://provider.test/v2/"))
        assert provider.base_url == "https://provider.test/v2/blockchain-data/bitcoin/testnet"

    def test_network_and_blockchain(self) -> None:
        provider = CryptoAPIsClient(_config(network=Network.MAINNET, blockchain="litecoin"))
        assert provider.network == "mainnet"
        assert provider.blockchain == "litecoin"
        assert provider.base_url.endswith("/blockchain-data/litecoin/mainnet")


# ---------------------------------------------------------------------------
# Request shape
# ---------------------------------------------------------------------------


class TestRequest:
    async def test_sends_api_key_and_path(self, tx_payload: dict[str, Any]) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=tx_payload)

        provider = await _connected(handler)
        await provider.get_transaction_raw(TX_ID)
        await provider.close()

        (request,) = seen
        assert request.method == "GET"
        assert request.headers["X-API-Key"] == TEST_API_KEY
        assert request.headers["Content-Type"] == "application/json"
        assert request.url.host == "provider.test"
        assert request.url.raw_path == f"{UPSTREAM_PREFIX}{TX_ID}".encode()

    @pytest.mark.parametrize("transaction_id", ["abc/def", "abc?def=1", "a/b?c#d", "100%", "a b"])
    async def test_reserved_characters_stay_in_one_segment(
        self, transaction_id: str, tx_payload: dict[str, Any]
    ) -> None:
        seen: list[bytes] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.raw_path)
            return httpx.Response(200, json=tx_payload)

        provider = await _connected(handler)
        await provider.get_transaction_raw(transaction_id)
        await provider.close()

        raw_path = seen[0].decode()
        assert "?" not in raw_path
        assert raw_path.startswith(UPSTREAM_PREFIX)
        segment = raw_path[len(UPSTREAM_PREFIX) :]
        assert "/" not in segment
        assert unquote(segment) == transaction_id

    def test_transaction_path(self) -> None:
        assert transaction_path("abc") == "/transactions/abc"
        assert transaction_path("a/b?c") == "/transactions/a%2Fb%3Fc"


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class TestResponses:
    async def test_raw_body_preserved(self, tx_payload: dict[str, Any]) -> None:
        body = json.dumps(tx_payload, indent=4).encode()

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=body, headers={"Content-Type": "application/json"})

        provider = await _connected(handler)
        upstream = await provider.get_transaction_raw(TX_ID)
        await provider.close()

        assert isinstance(upstream, UpstreamResponse)
        assert upstream.status_code == 200
        assert upstream.content == body
        assert upstream.payload == tx_payload

    async def test_get_transaction_decodes(self, tx_payload: dict[str, Any]) -> None:
        provider = await _connected(lambda request: httpx.Response(200, json=tx_payload))
        envelope = await provider.get_transaction(TX_ID)
        await provider.close()

        assert isinstance(envelope, TransactionEnvelope)
        assert envelope.record.transaction_id == TX_ID

    @pytest.mark.parametrize("status", [400, 401, 404, 429, 500, 503])
    async def test_non_200_raises(self, status: int) -> None:
        provider = await _connected(
            lambda request: httpx.Response(status, json={"error": {"code": "x"}})
        )
        with pytest.raises(UpstreamError, match=f"HTTP {status}") as exc_info:
            await provider.get_transaction_raw(TX_ID)
        await provider.close()
        assert exc_info.value.status_code == status

    async def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        provider = await _connected(handler)
        with pytest.raises(UpstreamError, match="request failed") as exc_info:
            await provider.get_transaction_raw(TX_ID)
        await provider.close()
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    async def test_timeout_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        provider = await _connected(handler)
        with pytest.raises(UpstreamError):
            await provider.get_transaction_raw(TX_ID)
        await provider.close()

    async def test_non_json_body_raises(self) -> None:
        provider = await _connected(lambda request: httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(UpstreamError, match="non-JSON"):
            await provider.get_transaction_raw(TX_ID)
        await provider.close()

    async def test_deeply_nested_body_raises(self) -> None:
        body = "[" * 100_000 + "]" * 100_000
        provider = await _connected(lambda request: httpx.Response(200, text=body))
        with pytest.raises(UpstreamError, match="non-JSON"):
            await provider.get_transaction_raw(TX_ID)
        await provider.close()

    async def test_malformed_envelope_raises(self) -> None:
        provider = await _connected(lambda request: httpx.Response(200, json={"data": {}}))
        with pytest.raises(MalformedResponseError):
            await provider.get_transaction(TX_ID)
        await provider.close()
