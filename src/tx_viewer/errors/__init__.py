"""Error types shared by the proxy, the provider client and the viewer."""

from tx_viewer.errors.provider_errors import MalformedResponseError, ProxyFetchError, UpstreamError
from tx_viewer.errors.viewer_errors import ViewerError

__all__ = ["MalformedResponseError", "ProxyFetchError", "UpstreamError", "ViewerError"]
