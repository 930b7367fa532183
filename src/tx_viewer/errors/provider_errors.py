"""Upstream provider and proxy fetch errors."""

from __future__ import annotations

from tx_viewer.errors.viewer_errors import ViewerError


class UpstreamError(ViewerError):
    """Error talking to the upstream blockchain-data provider."""

    def __init__(self, message: str, *, status_code: int = 502) -> None:
        super().__init__(message, status_code=status_code, code="upstream-error")


class MalformedResponseError(ViewerError):
    """A response body that does not decode into a transaction record."""

    def __init__(self, message: str, *, status_code: int = 502) -> None:
        super().__init__(message, status_code=status_code, code="malformed-response")


class ProxyFetchError(ViewerError):
    """Error fetching a transaction from the proxy endpoint."""

    def __init__(self, message: str, *, status_code: int = 502) -> None:
        super().__init__(message, status_code=status_code, code="proxy-fetch-error")
