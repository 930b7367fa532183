"""Viewer state — ``Idle | Loading | Success | Error`` with last-request-wins.

Every :meth:`ViewerState.submit` hands out a ticket.  Only the most recent
ticket may complete the lookup; completions for older tickets are dropped,
so a slow earlier response never overwrites a newer one.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tx_viewer.models.transaction import TransactionRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    """No lookup submitted yet."""


@dataclass(frozen=True)
class Loading:
    transaction_id: str


@dataclass(frozen=True)
class Success:
    transaction_id: str
    record: TransactionRecord


@dataclass(frozen=True)
class Error:
    transaction_id: str
    message: str


State = Idle | Loading | Success | Error


class ViewerState:
    """Mutable holder for the current viewer state.

    Transitions::

        any      --submit-->            Loading
        Loading  --resolve(current)-->  Success
        Loading  --fail(current)-->     Error
        any      --resolve/fail(stale)-> unchanged
    """

    def __init__(self) -> None:
        self._state: State = Idle()
        self._tickets = itertools.count(1)
        self._current_ticket = 0

    @property
    def current(self) -> State:
        return self._state

    @property
    def is_loading(self) -> bool:
        return isinstance(self._state, Loading)

    def submit(self, transaction_id: str) -> int:
        """Enter ``Loading`` for *transaction_id* and return its ticket."""
        self._current_ticket = next(self._tickets)
        self._state = Loading(transaction_id)
        return self._current_ticket

    def resolve(self, ticket: int, record: TransactionRecord) -> bool:
        """Complete *ticket* successfully.

        Returns:
            False if the ticket was stale and the record was discarded.
        """
        if not self._accepts(ticket):
            return False
        self._state = Success(self._state.transaction_id, record)  # type: ignore[union-attr]
        return True

    def fail(self, ticket: int, message: str) -> bool:
        """Complete *ticket* with an error message.

        Returns:
            False if the ticket was stale and the error was discarded.
        """
        if not self._accepts(ticket):
            return False
        self._state = Error(self._state.transaction_id, message)  # type: ignore[union-attr]
        return True

    def _accepts(self, ticket: int) -> bool:
        if ticket != self._current_ticket or not isinstance(self._state, Loading):
            logger.debug("Dropping stale viewer result for ticket %d", ticket)
            return False
        return True
