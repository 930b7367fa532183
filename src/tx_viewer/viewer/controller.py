"""TransactionViewer — couples the viewer state with the proxy client."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tx_viewer.errors.definitions import FETCH_ERROR_MESSAGE
from tx_viewer.errors.viewer_errors import ViewerError
from tx_viewer.viewer.state import ViewerState

if TYPE_CHECKING:
    from tx_viewer.viewer.client import ProxyClient
    from tx_viewer.viewer.state import State

logger = logging.getLogger(__name__)


class TransactionViewer:
    """Runs lookups and keeps the resulting display state.

    Each :meth:`lookup` is one round trip to the proxy; nothing is cached
    and nothing is retried.  Overlapping lookups resolve last-request-wins.
    """

    def __init__(self, client: ProxyClient, state: ViewerState | None = None) -> None:
        self._client = client
        self._state = state or ViewerState()

    @property
    def state(self) -> State:
        return self._state.current

    async def lookup(self, transaction_id: str) -> State:
        """Fetch *transaction_id* and return the state once it settles.

        The returned state is whatever is current when this call finishes,
        which is a newer lookup's state if one was submitted meanwhile.
        """
        ticket = self._state.submit(transaction_id)
        try:
            record = await self._client.fetch_transaction(transaction_id)
        except ViewerError as exc:
            logger.warning("Error fetching transaction %r: %s", transaction_id, exc.message)
            self._state.fail(ticket, FETCH_ERROR_MESSAGE)
        else:
            self._state.resolve(ticket, record)
        return self._state.current
