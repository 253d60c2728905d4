"""
Admin data browser

Core Components:
- SessionGate: authentication state machine guarding the browser
- QueryController: committed query state and sequenced record fetches
- compute_window: bounded page-navigation markers
- DetailSelector: single inspected record snapshot
- PageJump: validated direct page navigation
"""

from .page_window import DEFAULT_WINDOW_SIZE, compute_window  # noqa: F401
from .detail_selector import DetailSelector  # noqa: F401
from .query_controller import QueryController, RecordSource  # noqa: F401
from .page_jump import PageJump  # noqa: F401
from .session_gate import GateView, GateViewKind, SessionGate  # noqa: F401
from .console import AdminConsole, DataBrowser  # noqa: F401

__all__ = [
    "DEFAULT_WINDOW_SIZE",
    "compute_window",
    "DetailSelector",
    "QueryController",
    "RecordSource",
    "PageJump",
    "GateView",
    "GateViewKind",
    "SessionGate",
    "AdminConsole",
    "DataBrowser",
]
