"""Shared test fixtures for the tx-viewer test suite."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

import httpx
import pytest
from sample_data import SAMPLE_ENVELOPE, TEST_API_KEY, TEST_PROVIDER_URL

from tx_viewer.config.settings import AppConfig, ProviderConfig, ViewerConfig

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from fastapi.testclient import TestClient

    from tx_viewer.models.transaction import TransactionRecord


@pytest.fixture
def tx_payload() -> dict[str, Any]:
    """A fresh, mutable copy of the sample provider envelope."""
    return copy.deepcopy(SAMPLE_ENVELOPE)


@pytest.fixture
def tx_record(tx_payload: dict[str, Any]) -> TransactionRecord:
    from tx_viewer.models.transaction import decode_envelope

    return decode_envelope(tx_payload).record


@pytest.fixture
def app_config() -> AppConfig:
    """Provide a test AppConfig with safe defaults."""
    return AppConfig(
        debug=True,
        provider=ProviderConfig(url=TEST_PROVIDER_URL, api_key=TEST_API_KEY),
        viewer=ViewerConfig(timezone="UTC"),
    )


@pytest.fixture
def client_factory(
    app_config: AppConfig,
) -> Iterator[Callable[[Callable[[httpx.Request], httpx.Response]], TestClient]]:
    """Build started TestClients whose upstream provider is a mock handler."""
    from fastapi.testclient import TestClient

    from tx_viewer.api.app import create_app
    from tx_viewer.provider.client import CryptoAPIsClient

    started: list[TestClient] = []

    def _factory(handler: Callable[[httpx.Request], httpx.Response]) -> TestClient:
        provider = CryptoAPIsClient(app_config.provider, transport=httpx.MockTransport(handler))
        app = create_app(config=app_config, provider=provider)
        client = TestClient(app, raise_server_exceptions=False)
        client.__enter__()
        started.append(client)
        return client

    yield _factory

    for client in started:
        client.__exit__(None, None, None)
