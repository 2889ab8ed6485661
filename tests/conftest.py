"""Pytest configuration and fixtures."""

import json
from pathlib import Path

import pytest

from lpclient.models.deployment import PoolDeployment
from tests.helpers import (
    ACCOUNT,
    FakeGateway,
    FakeWalletProvider,
    RecordingSessionState,
    make_client,
    make_deployment,
)


@pytest.fixture
def deployment() -> PoolDeployment:
    """TK1/TK2 deployment at the test pool address."""
    return make_deployment()


@pytest.fixture
def deployment_file(tmp_path: Path, deployment: PoolDeployment) -> Path:
    """Deployment metadata written the way the deploy tooling writes it."""
    path = tmp_path / "deployment.json"
    path.write_text(json.dumps(deployment.model_dump(by_alias=True, exclude_none=True)))
    return path


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def provider() -> FakeWalletProvider:
    return FakeWalletProvider(accounts=[ACCOUNT])


@pytest.fixture
def state() -> RecordingSessionState:
    return RecordingSessionState()


@pytest.fixture
def client(gateway, provider, state):
    """Disconnected state machine wired to the fake gateway and provider."""
    return make_client(gateway=gateway, provider=provider, state=state)
