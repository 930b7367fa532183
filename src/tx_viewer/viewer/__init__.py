"""Detail viewer — state, formatting, proxy client and HTML rendering."""

from tx_viewer.viewer.client import ProxyClient
from tx_viewer.viewer.controller import TransactionViewer
from tx_viewer.viewer.state import Error, Idle, Loading, Success, ViewerState

__all__ = [
    "Error",
    "Idle",
    "Loading",
    "ProxyClient",
    "Success",
    "TransactionViewer",
    "ViewerState",
]
