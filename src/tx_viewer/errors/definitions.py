"""Pre-built error instances and fixed error bodies."""

from __future__ import annotations

from tx_viewer.errors.viewer_errors import ViewerError

# -- Proxy -----------------------------------------------------------------

# Body returned by the proxy for every upstream failure, whatever the cause.
INTERNAL_SERVER_ERROR_BODY: dict[str, str] = {"error": "Internal Server Error"}

ErrProviderNotReady = ViewerError(
    "upstream provider client is not initialized", status_code=503, code="provider-not-ready"
)

# -- Viewer ----------------------------------------------------------------

# Static message shown to the user for any failed lookup.
FETCH_ERROR_MESSAGE = "Error fetching transaction data"

ErrViewerNotReady = ViewerError(
    "transaction viewer is not initialized", status_code=503, code="viewer-not-ready"
)
