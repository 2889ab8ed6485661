"""Liquidity Pool Client - wallet session and transaction orchestration for a two-token pool."""

from lpclient.client import create_client, get_default_client
from lpclient.result import ActionResult, ActionStatus
from lpclient.state_machine import SessionStateMachine

__version__ = "0.1.0"
__all__ = [
    "ActionResult",
    "ActionStatus",
    "SessionStateMachine",
    "create_client",
    "get_default_client",
    "__version__",
]
