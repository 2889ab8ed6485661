"""Wallet Session Manager: obtains a signing identity from the provider."""

from __future__ import annotations

import structlog

from lpclient.errors import WalletConnectionError, describe
from lpclient.models.state import Session, SessionState
from lpclient.models.types import is_valid_address
from lpclient.wallet.provider import Signer, WalletProvider

logger = structlog.get_logger()

NO_PROVIDER_MESSAGE = "No wallet provider found. Please install a wallet and retry."


class WalletSessionManager:
    """Connects the session to the first account the wallet authorizes.

    The manager never disconnects on its own and never retries; a failed
    connect leaves the session Disconnected with a descriptive error and the
    user reconnects manually.
    """

    def __init__(self, state: SessionState, provider: WalletProvider | None) -> None:
        self.state = state
        self.provider = provider
        self.signer: Signer | None = None

    def current_account(self) -> str | None:
        return self.state.session.account

    async def connect(self) -> Session:
        """Request account access and move the session to Connected.

        Returns the resulting session. If a connect is already in progress or the
        session is already connected, the current session is returned unchanged.
        """
        if not self.state.begin_connect():
            logger.debug("connect_ignored", status=self.state.session.status.value)
            return self.state.session
        return await self.finish_connect()

    async def finish_connect(self) -> Session:
        """Authorize a connect already claimed with SessionState.begin_connect."""
        try:
            account, signer = await self._authorize()
        except WalletConnectionError as e:
            logger.warning("wallet_connect_failed", error=e.message)
            self.state.connect_failed(e.message)
            return self.state.session

        self.signer = signer
        self.state.connect_succeeded(account)
        logger.info("wallet_connected", account=account)
        return self.state.session

    def abort(self, message: str) -> None:
        """Fail an in-flight connect, e.g. when the caller's timeout fires."""
        self.state.connect_failed(message)

    async def _authorize(self) -> tuple[str, Signer]:
        if self.provider is None:
            raise WalletConnectionError(NO_PROVIDER_MESSAGE)

        try:
            accounts = await self.provider.request_accounts()
        except Exception as e:
            raise WalletConnectionError(f"Account access rejected: {describe(e)}") from e

        if not accounts:
            raise WalletConnectionError("Wallet returned no accounts")
        account = accounts[0]
        if not is_valid_address(account):
            raise WalletConnectionError(f"Wallet returned an invalid account: {account}")

        try:
            signer = await self.provider.get_signer(account)
        except Exception as e:
            raise WalletConnectionError(f"Could not obtain signer: {describe(e)}") from e
        return account, signer
