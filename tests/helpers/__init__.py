"""Test helpers module for shared test utilities.

- constants: Addresses and base-unit scaling
- fakes: Fake gateway, wallet provider and recording state
- factories: Deployment and client factory functions
"""

from tests.helpers.constants import ACCOUNT, OTHER_ACCOUNT, POOL, TOKEN_A, TOKEN_B, scaled
from tests.helpers.factories import FAST_CONFIG, connected_client, make_client, make_deployment
from tests.helpers.fakes import (
    HANG,
    READ_POINTS,
    WRITE_POINTS,
    FakeGateway,
    FakeTransactionHandle,
    FakeWalletProvider,
    RecordingSessionState,
)

__all__ = [
    # Constants
    "ACCOUNT",
    "OTHER_ACCOUNT",
    "POOL",
    "TOKEN_A",
    "TOKEN_B",
    "scaled",
    # Fakes
    "HANG",
    "READ_POINTS",
    "WRITE_POINTS",
    "FakeGateway",
    "FakeTransactionHandle",
    "FakeWalletProvider",
    "RecordingSessionState",
    # Factories
    "FAST_CONFIG",
    "connected_client",
    "make_client",
    "make_deployment",
]
