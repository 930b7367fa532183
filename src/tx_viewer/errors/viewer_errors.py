"""ViewerError — root of the tx-viewer exception hierarchy.

Provider failures, proxy fetch failures and unready app state all derive
from :class:`ViewerError`.  The proxy route answers provider failures with
the fixed generic body; anything else escaping a route is rendered by the
app's exception handler from :meth:`ViewerError.to_dict`.
"""

from __future__ import annotations


class ViewerError(Exception):
    """A failed lookup or an app that cannot serve one yet.

    ``status_code`` is the HTTP status the app answers with when the error
    reaches the exception handler; ``code`` is a stable kebab-case tag that
    also labels the upstream failure metric.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 500,
        code: str = "viewer-error",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code

    def to_dict(self) -> dict[str, str]:
        """JSON body for the app's error responses."""
        return {"code": self.code, "message": self.message}
