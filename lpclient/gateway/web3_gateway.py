"""Contract gateway backed by web3's async API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from web3 import AsyncWeb3
from web3.exceptions import TimeExhausted

from lpclient.errors import GatewayError, TransactionFailed, describe
from lpclient.gateway.abi import ERC20_APPROVE_ABI, POOL_ABI
from lpclient.models.deployment import PoolDeployment
from lpclient.wallet.provider import Signer

if TYPE_CHECKING:
    from web3.contract import AsyncContract

logger = structlog.get_logger()

# Receipt status of a successful transaction
TX_STATUS_SUCCESS = 1


class Web3TransactionHandle:
    """Handle for a transaction submitted through web3."""

    def __init__(self, w3: AsyncWeb3, tx_hash: str, label: str, timeout: float) -> None:
        self.w3 = w3
        self.tx_hash = tx_hash
        self.label = label
        self.timeout = timeout

    async def wait(self) -> None:
        """Wait for the receipt and check its status."""
        try:
            receipt = await self.w3.eth.wait_for_transaction_receipt(
                self.tx_hash, timeout=self.timeout
            )
        except TimeExhausted as e:
            raise TransactionFailed(
                f"{self.label} transaction {self.tx_hash} was not confirmed "
                f"within {self.timeout}s; check its status in your wallet",
                tx_hash=self.tx_hash,
            ) from e
        except Exception as e:
            raise TransactionFailed(describe(e), tx_hash=self.tx_hash) from e

        if receipt["status"] != TX_STATUS_SUCCESS:
            raise TransactionFailed(
                f"{self.label} transaction {self.tx_hash} reverted", tx_hash=self.tx_hash
            )
        logger.debug(
            "transaction_settled",
            label=self.label,
            tx_hash=self.tx_hash,
            block=receipt.get("blockNumber"),
        )


class Web3PoolGateway:
    """Real gateway that calls the pool and token contracts via RPC.

    Reads are eth_call requests; writes are eth_sendTransaction requests sent
    from the signer's address, which the wallet signs.
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        deployment: PoolDeployment,
        signer: Signer,
        receipt_timeout: float,
    ) -> None:
        self.w3 = w3
        self.signer = signer
        self.receipt_timeout = receipt_timeout
        self.pool: AsyncContract = w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(deployment.pool_address),
            abi=deployment.abi or POOL_ABI,
        )

    # --- Reads ---

    async def get_reserves(self) -> tuple[int, int]:
        reserve_a, reserve_b = await self._call("getReserves", self.pool.functions.getReserves())
        return int(reserve_a), int(reserve_b)

    async def total_shares(self) -> int:
        return int(await self._call("totalShares", self.pool.functions.totalShares()))

    async def shares_of(self, account: str) -> int:
        fn = self.pool.functions.shares(AsyncWeb3.to_checksum_address(account))
        return int(await self._call("shares", fn))

    async def _call(self, name: str, fn: Any) -> Any:
        try:
            return await fn.call()
        except Exception as e:
            logger.warning("pool_read_failed", function=name, error=describe(e))
            raise GatewayError(f"{name}() failed: {describe(e)}") from e

    # --- Writes ---

    async def approve(self, token: str, spender: str, amount: int) -> Web3TransactionHandle:
        token_contract = self.w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(token), abi=ERC20_APPROVE_ABI
        )
        fn = token_contract.functions.approve(AsyncWeb3.to_checksum_address(spender), amount)
        return await self._transact("approve", fn)

    async def swap(self, amount: int, direction_a_to_b: bool) -> Web3TransactionHandle:
        return await self._transact("swap", self.pool.functions.swap(amount, direction_a_to_b))

    async def add_liquidity(self, amount_a: int, amount_b: int) -> Web3TransactionHandle:
        fn = self.pool.functions.addLiquidity(amount_a, amount_b)
        return await self._transact("addLiquidity", fn)

    async def remove_liquidity(self, amount: int) -> Web3TransactionHandle:
        fn = self.pool.functions.removeLiquidity(amount)
        return await self._transact("removeLiquidity", fn)

    async def _transact(self, name: str, fn: Any) -> Web3TransactionHandle:
        try:
            raw_hash = await fn.transact({"from": self.signer.address})
        except Exception as e:
            # Wallet rejection and pre-flight revert look the same from here
            logger.warning("transaction_submit_failed", function=name, error=describe(e))
            raise TransactionFailed(describe(e)) from e

        tx_hash = AsyncWeb3.to_hex(raw_hash)
        logger.info("transaction_submitted", function=name, tx_hash=tx_hash)
        return Web3TransactionHandle(self.w3, tx_hash, name, self.receipt_timeout)


__all__ = ["Web3PoolGateway", "Web3TransactionHandle", "TX_STATUS_SUCCESS"]
