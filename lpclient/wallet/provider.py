"""Wallet provider boundary.

The core only needs two capabilities from a wallet: asking for account
access and obtaining a signer for transactions. Tests plug in a fake; the
web3 implementation talks to an EIP-1193 style JSON-RPC endpoint that
holds the keys and signs eth_sendTransaction requests itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import structlog

if TYPE_CHECKING:
    from web3 import AsyncWeb3

logger = structlog.get_logger()


@dataclass(frozen=True)
class Signer:
    """Signing identity. Transactions are sent from this address."""

    address: str


class WalletProvider(Protocol):
    """Protocol for wallet providers.

    This allows swapping between a real RPC-backed wallet and a fake one for testing.
    """

    async def request_accounts(self) -> list[str]:
        """Request account access.

        Returns:
            Ordered list of authorized account addresses

        Raises:
            Exception: If the user rejects the request or the provider fails
        """
        ...

    async def get_signer(self, account: str) -> Signer:
        """Return a signer for one of the authorized accounts."""
        ...


class Web3WalletProvider:
    """Wallet provider backed by a web3 JSON-RPC endpoint.

    Account access is requested with eth_requestAccounts, which the wallet may
    prompt for; signing is delegated to the wallet through eth_sendTransaction.
    """

    def __init__(self, w3: AsyncWeb3) -> None:
        self.w3 = w3

    @classmethod
    def from_url(cls, rpc_url: str) -> Web3WalletProvider:
        """Create a provider for an HTTP JSON-RPC URL."""
        from web3 import AsyncWeb3

        return cls(AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url)))

    async def request_accounts(self) -> list[str]:
        accounts = await self.w3.manager.coro_request("eth_requestAccounts", [])
        return [str(account) for account in accounts or []]

    async def get_signer(self, account: str) -> Signer:
        from web3 import AsyncWeb3

        return Signer(address=AsyncWeb3.to_checksum_address(account))
