"""Data models for the pool client."""

from lpclient.models.deployment import PoolDeployment, TokenInfo, TokenPair, load_deployment
from lpclient.models.state import (
    ACTION_FIELDS,
    ActionKind,
    ConnectionStatus,
    PendingAction,
    PoolSnapshot,
    Session,
    SessionState,
)
from lpclient.models.types import Address, is_valid_address, normalize_address

__all__ = [
    # Types
    "Address",
    "is_valid_address",
    "normalize_address",
    # Deployment metadata
    "PoolDeployment",
    "TokenInfo",
    "TokenPair",
    "load_deployment",
    # Session state
    "ACTION_FIELDS",
    "ActionKind",
    "ConnectionStatus",
    "PendingAction",
    "PoolSnapshot",
    "Session",
    "SessionState",
]
