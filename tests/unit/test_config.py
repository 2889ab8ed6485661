"""Tests for configuration and client wiring."""

import pytest

from lpclient import client as client_module
from lpclient.client import create_web3_client, get_default_client
from lpclient.config import DEFAULT_ACTION_TIMEOUT, DEFAULT_RPC_URL, ClientConfig
from lpclient.gateway.web3_gateway import Web3PoolGateway
from lpclient.wallet.provider import Signer, Web3WalletProvider
from tests.helpers import ACCOUNT, POOL


class TestClientConfig:
    def test_defaults(self):
        config = ClientConfig()
        assert config.rpc_url == DEFAULT_RPC_URL
        assert config.action_timeout == DEFAULT_ACTION_TIMEOUT
        assert config.auto_connect is True

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LPCLIENT_RPC_URL", "http://node:8545")
        monkeypatch.setenv("LPCLIENT_ACTION_TIMEOUT", "12.5")
        monkeypatch.setenv("LPCLIENT_AUTO_CONNECT", "no")
        monkeypatch.setenv("LPCLIENT_PORT", "9001")
        monkeypatch.setenv("LPCLIENT_DEBUG", "1")

        config = ClientConfig.from_env()

        assert config.rpc_url == "http://node:8545"
        assert config.action_timeout == 12.5
        assert config.auto_connect is False
        assert config.port == 9001
        assert config.debug is True

    @pytest.mark.parametrize("name", ["action_timeout", "receipt_timeout", "refresh_timeout"])
    def test_timeouts_must_be_positive(self, name):
        with pytest.raises(ValueError, match=name):
            ClientConfig(**{name: 0})


class TestCreateWeb3Client:
    def test_requires_deployment_file(self):
        with pytest.raises(ValueError, match="LPCLIENT_DEPLOYMENT_FILE"):
            create_web3_client(ClientConfig())

    def test_wires_web3_components(self, deployment_file):
        client = create_web3_client(ClientConfig(deployment_file=str(deployment_file)))

        assert client.deployment.pool_address == POOL
        assert isinstance(client.wallet.provider, Web3WalletProvider)
        gateway = client.gateway_factory(Signer(address=ACCOUNT))
        assert isinstance(gateway, Web3PoolGateway)
        assert gateway.receipt_timeout == client.config.receipt_timeout

    def test_default_client_is_cached(self, monkeypatch, deployment_file):
        monkeypatch.setenv("LPCLIENT_DEPLOYMENT_FILE", str(deployment_file))
        monkeypatch.setattr(client_module, "_default_client", None)

        assert get_default_client() is get_default_client()
