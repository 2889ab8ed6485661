"""Approval-then-action sequencing for pool operations.

Any operation that makes the pool spend a token first approves exactly the
amount about to be spent, waits for that approval to settle, and only then
submits the pool call:

- swap approves the source token of its direction
- add-liquidity approves token A, then token B, strictly in that order
- remove-liquidity spends no token and needs no approval

If an approval fails the pool call is never submitted. Approvals that did
settle are left in place; the residual allowance stays until it is consumed
or overwritten by a later approval.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import singledispatchmethod

import structlog

from lpclient.errors import ActionError, ApprovalError, describe
from lpclient.gateway.base import PoolGateway, TransactionHandle
from lpclient.models.deployment import PoolDeployment, TokenInfo

logger = structlog.get_logger()


@dataclass(frozen=True)
class SwapOperation:
    """Swap an amount of the source token. Amounts are base units."""

    amount: int
    direction_a_to_b: bool


@dataclass(frozen=True)
class AddLiquidityOperation:
    amount_a: int
    amount_b: int


@dataclass(frozen=True)
class RemoveLiquidityOperation:
    """Burn an amount of pool shares."""

    amount: int


PoolOperation = SwapOperation | AddLiquidityOperation | RemoveLiquidityOperation


@dataclass(frozen=True)
class ApprovalStep:
    """One allowance the pool needs before an operation."""

    token: TokenInfo
    amount: int


class ApprovalSequencer:
    """Drives approvals and the dependent pool call through the gateway.

    Args:
        gateway: Contract gateway bound to the connected signer
        deployment: Pool address (the spender) and token pair
    """

    def __init__(self, gateway: PoolGateway, deployment: PoolDeployment) -> None:
        self.gateway = gateway
        self.deployment = deployment

    @property
    def spender(self) -> str:
        return self.deployment.pool_address

    # --- Planning ---

    @singledispatchmethod
    def approvals_for(self, operation: PoolOperation) -> list[ApprovalStep]:
        """Approvals required before the operation, in submission order."""
        raise TypeError(f"Unknown pool operation: {type(operation).__name__}")

    @approvals_for.register(SwapOperation)
    def _swap_approvals(self, operation: SwapOperation) -> list[ApprovalStep]:
        token = self.deployment.tokens.source_token(operation.direction_a_to_b)
        return [ApprovalStep(token=token, amount=operation.amount)]

    @approvals_for.register(AddLiquidityOperation)
    def _add_approvals(self, operation: AddLiquidityOperation) -> list[ApprovalStep]:
        tokens = self.deployment.tokens
        return [
            ApprovalStep(token=tokens.a, amount=operation.amount_a),
            ApprovalStep(token=tokens.b, amount=operation.amount_b),
        ]

    @approvals_for.register(RemoveLiquidityOperation)
    def _remove_approvals(self, _operation: RemoveLiquidityOperation) -> list[ApprovalStep]:
        return []

    # --- Execution ---

    async def execute(
        self, operation: PoolOperation, settled: list[str] | None = None
    ) -> tuple[str, ...]:
        """Run approvals then the pool call, each awaited to settlement.

        Args:
            operation: The pool operation to perform
            settled: Receives each settled hash as it happens, so a caller
                that cancels execute still knows which transactions landed

        Returns:
            Hashes of every settled transaction, approvals first

        Raises:
            ApprovalError: An approval failed; the pool call was not submitted
            ActionError: The pool call itself failed
        """
        if settled is None:
            settled = []

        for step in self.approvals_for(operation):
            try:
                handle = await self.gateway.approve(step.token.address, self.spender, step.amount)
                await handle.wait()
            except Exception as e:
                logger.warning(
                    "approval_failed",
                    token=step.token.symbol,
                    amount=step.amount,
                    residual_approvals=len(settled),
                    error=describe(e),
                )
                raise ApprovalError(
                    f"Approval of {step.token.symbol} failed: {describe(e)}",
                    tx_hashes=tuple(settled),
                ) from e
            settled.append(handle.tx_hash)
            logger.info(
                "approval_settled",
                token=step.token.symbol,
                amount=step.amount,
                tx_hash=handle.tx_hash,
            )

        try:
            handle = await self._submit(operation)
            await handle.wait()
        except Exception as e:
            logger.warning(
                "pool_action_failed", operation=type(operation).__name__, error=describe(e)
            )
            raise ActionError(describe(e), tx_hashes=tuple(settled)) from e

        settled.append(handle.tx_hash)
        logger.info(
            "pool_action_settled", operation=type(operation).__name__, tx_hash=handle.tx_hash
        )
        return tuple(settled)

    @singledispatchmethod
    async def _submit(self, operation: PoolOperation) -> TransactionHandle:
        raise TypeError(f"Unknown pool operation: {type(operation).__name__}")

    @_submit.register(SwapOperation)
    async def _submit_swap(self, operation: SwapOperation) -> TransactionHandle:
        return await self.gateway.swap(operation.amount, operation.direction_a_to_b)

    @_submit.register(AddLiquidityOperation)
    async def _submit_add(self, operation: AddLiquidityOperation) -> TransactionHandle:
        return await self.gateway.add_liquidity(operation.amount_a, operation.amount_b)

    @_submit.register(RemoveLiquidityOperation)
    async def _submit_remove(self, operation: RemoveLiquidityOperation) -> TransactionHandle:
        return await self.gateway.remove_liquidity(operation.amount)
