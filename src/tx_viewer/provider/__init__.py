"""Upstream blockchain-data provider client."""

from tx_viewer.provider.client import CryptoAPIsClient, UpstreamResponse

__all__ = ["CryptoAPIsClient", "UpstreamResponse"]
