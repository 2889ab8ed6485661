"""Contract gateway protocols.

The gateway is a typed proxy over the pool contract and the pair's token
contracts. Reads return raw base-unit integers. Writes return a handle once
the transaction is submitted; the caller must await ``wait()`` before it
treats the operation as complete. The gateway never retries.
"""

from __future__ import annotations

from typing import Protocol


class TransactionHandle(Protocol):
    """A submitted transaction.

    ``wait()`` returns once the transaction settled successfully and raises
    TransactionFailed on revert, rejection, or when settlement cannot be
    confirmed. There is no third outcome.
    """

    tx_hash: str

    async def wait(self) -> None: ...


class PoolGateway(Protocol):
    """Protocol for pool contract gateways."""

    async def get_reserves(self) -> tuple[int, int]:
        """Pool reserves of token A and token B in base units."""
        ...

    async def total_shares(self) -> int: ...

    async def shares_of(self, account: str) -> int: ...

    async def approve(self, token: str, spender: str, amount: int) -> TransactionHandle:
        """Submit an ERC20 approve(spender, amount) on the token contract."""
        ...

    async def swap(self, amount: int, direction_a_to_b: bool) -> TransactionHandle: ...

    async def add_liquidity(self, amount_a: int, amount_b: int) -> TransactionHandle: ...

    async def remove_liquidity(self, amount: int) -> TransactionHandle: ...
