"""Tests for the wallet session manager and web3 wallet provider."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

from lpclient.models.state import ConnectionStatus, SessionState
from lpclient.wallet.provider import Signer, Web3WalletProvider
from lpclient.wallet.session import NO_PROVIDER_MESSAGE, WalletSessionManager
from tests.helpers import ACCOUNT, OTHER_ACCOUNT, FakeWalletProvider


class TestWalletSessionManager:
    """Connect outcomes."""

    def test_connect_uses_first_account(self):
        state = SessionState()
        manager = WalletSessionManager(
            state, FakeWalletProvider(accounts=[ACCOUNT, OTHER_ACCOUNT])
        )

        session = asyncio.run(manager.connect())

        assert session.status is ConnectionStatus.CONNECTED
        assert manager.current_account() == ACCOUNT
        assert manager.signer == Signer(address=ACCOUNT)

    def test_no_provider(self):
        state = SessionState()
        manager = WalletSessionManager(state, None)

        session = asyncio.run(manager.connect())

        assert session.status is ConnectionStatus.DISCONNECTED
        assert session.error == NO_PROVIDER_MESSAGE
        assert manager.current_account() is None

    def test_user_rejection(self):
        provider = FakeWalletProvider(error=RuntimeError("User rejected the request."))
        manager = WalletSessionManager(SessionState(), provider)

        session = asyncio.run(manager.connect())

        assert session.status is ConnectionStatus.DISCONNECTED
        assert "User rejected the request." in session.error
        assert manager.signer is None

    def test_no_automatic_retry(self):
        provider = FakeWalletProvider(error=RuntimeError("rejected"))
        manager = WalletSessionManager(SessionState(), provider)

        asyncio.run(manager.connect())

        assert provider.requests == 1

    def test_empty_account_list(self):
        manager = WalletSessionManager(SessionState(), FakeWalletProvider(accounts=[]))

        session = asyncio.run(manager.connect())

        assert session.status is ConnectionStatus.DISCONNECTED
        assert session.error == "Wallet returned no accounts"

    def test_invalid_account(self):
        manager = WalletSessionManager(SessionState(), FakeWalletProvider(accounts=["0x12"]))

        session = asyncio.run(manager.connect())

        assert "invalid account" in session.error

    def test_reconnect_after_failure(self):
        provider = FakeWalletProvider(error=RuntimeError("rejected"))
        manager = WalletSessionManager(SessionState(), provider)
        asyncio.run(manager.connect())

        provider.error = None
        provider.accounts = [ACCOUNT]
        session = asyncio.run(manager.connect())

        assert session.is_connected
        assert session.error is None

    def test_connect_when_connected_is_noop(self):
        provider = FakeWalletProvider(accounts=[ACCOUNT])
        manager = WalletSessionManager(SessionState(), provider)
        asyncio.run(manager.connect())

        asyncio.run(manager.connect())

        assert provider.requests == 1


class TestWeb3WalletProvider:
    def test_request_accounts(self):
        w3 = MagicMock()
        w3.manager.coro_request = AsyncMock(return_value=[ACCOUNT])

        accounts = asyncio.run(Web3WalletProvider(w3).request_accounts())

        assert accounts == [ACCOUNT]
        w3.manager.coro_request.assert_awaited_once_with("eth_requestAccounts", [])

    def test_signer_uses_checksum_address(self):
        signer = asyncio.run(Web3WalletProvider(MagicMock()).get_signer("0x" + "ab" * 20))
        assert signer.address.lower() == "0x" + "ab" * 20
        assert signer.address != "0x" + "ab" * 20
