"""Tests for approval-then-action sequencing."""

import asyncio

import pytest

from lpclient.errors import ActionError, ApprovalError, ErrorKind
from lpclient.sequencer import (
    AddLiquidityOperation,
    ApprovalSequencer,
    RemoveLiquidityOperation,
    SwapOperation,
)
from tests.helpers import HANG, POOL, TOKEN_A, TOKEN_B, FakeGateway, make_deployment, scaled


@pytest.fixture
def sequencer(gateway) -> ApprovalSequencer:
    return ApprovalSequencer(gateway, make_deployment())


class TestApprovalPlanning:
    """Which tokens are approved for which operation."""

    def test_swap_a_to_b_approves_token_a(self, sequencer):
        steps = sequencer.approvals_for(SwapOperation(amount=scaled(5), direction_a_to_b=True))
        assert [(s.token.address, s.amount) for s in steps] == [(TOKEN_A, scaled(5))]

    def test_swap_b_to_a_approves_token_b(self, sequencer):
        steps = sequencer.approvals_for(SwapOperation(amount=3, direction_a_to_b=False))
        assert [(s.token.address, s.amount) for s in steps] == [(TOKEN_B, 3)]

    def test_add_liquidity_approves_a_then_b(self, sequencer):
        steps = sequencer.approvals_for(AddLiquidityOperation(amount_a=10, amount_b=20))
        assert [(s.token.symbol, s.amount) for s in steps] == [("TK1", 10), ("TK2", 20)]

    def test_remove_liquidity_needs_no_approval(self, sequencer):
        assert sequencer.approvals_for(RemoveLiquidityOperation(amount=1)) == []

    def test_unknown_operation(self, sequencer):
        with pytest.raises(TypeError):
            sequencer.approvals_for(object())


class TestSwapSequence:
    def test_scenario_swap_five_a_to_b(self, sequencer, gateway: FakeGateway):
        """approve(tokenA, pool, scaled(5)) settles, then swap(scaled(5), true)."""
        hashes = asyncio.run(
            sequencer.execute(SwapOperation(amount=scaled(5), direction_a_to_b=True))
        )

        assert gateway.calls[0] == ("approve", TOKEN_A, POOL, scaled(5))
        assert gateway.names() == ["approve", "approve.settled", "swap", "swap.settled"]
        assert gateway.calls[2] == ("swap", scaled(5), True)
        assert len(hashes) == 2

    def test_swap_not_submitted_when_approval_reverts(self, sequencer, gateway):
        gateway.inject("approve.wait", RuntimeError("execution reverted"))

        with pytest.raises(ApprovalError, match="TK1.*execution reverted"):
            asyncio.run(sequencer.execute(SwapOperation(amount=1, direction_a_to_b=True)))

        assert gateway.count("swap") == 0

    def test_swap_failure_is_action_error(self, sequencer, gateway):
        gateway.inject("swap.wait", RuntimeError("insufficient output"))

        with pytest.raises(ActionError) as exc_info:
            asyncio.run(sequencer.execute(SwapOperation(amount=1, direction_a_to_b=True)))

        assert exc_info.value.kind is ErrorKind.ACTION
        # The settled approval is reported, not rolled back
        assert len(exc_info.value.tx_hashes) == 1

    def test_settled_hashes_visible_after_cancellation(self, sequencer, gateway):
        """Hashes land in the caller's list as they settle, even if execute is cancelled."""
        gateway.inject("add_liquidity.wait", HANG)
        settled: list[str] = []

        async def scenario():
            task = asyncio.create_task(
                sequencer.execute(AddLiquidityOperation(amount_a=10, amount_b=20), settled)
            )
            while gateway.count("add_liquidity") == 0:
                await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(scenario())

        approvals = [call[1] for call in gateway.calls if call[0] == "approve.settled"]
        assert settled == approvals
        assert len(settled) == 2


class TestAddLiquiditySequence:
    def test_order_both_approvals_settle_before_add(self, sequencer, gateway):
        asyncio.run(sequencer.execute(AddLiquidityOperation(amount_a=10, amount_b=20)))

        assert gateway.names() == [
            "approve",
            "approve.settled",
            "approve",
            "approve.settled",
            "add_liquidity",
            "add_liquidity.settled",
        ]
        assert gateway.calls[0] == ("approve", TOKEN_A, POOL, 10)
        assert gateway.calls[2] == ("approve", TOKEN_B, POOL, 20)
        assert gateway.calls[4] == ("add_liquidity", 10, 20)

    @pytest.mark.parametrize(
        "point, occurrence",
        [("approve", 1), ("approve.wait", 1), ("approve", 2), ("approve.wait", 2)],
    )
    def test_add_never_issued_after_failed_approval(self, sequencer, gateway, point, occurrence):
        gateway.inject(point, RuntimeError("user rejected"), occurrence=occurrence)

        with pytest.raises(ApprovalError) as exc_info:
            asyncio.run(sequencer.execute(AddLiquidityOperation(amount_a=10, amount_b=20)))

        assert gateway.count("add_liquidity") == 0
        # ApprovalError is an ActionError with its own kind
        assert isinstance(exc_info.value, ActionError)
        assert exc_info.value.kind is ErrorKind.APPROVAL

    def test_token_a_approval_left_in_place_when_b_fails(self, sequencer, gateway):
        gateway.inject("approve.wait", RuntimeError("reverted"), occurrence=2)

        with pytest.raises(ApprovalError, match="TK2") as exc_info:
            asyncio.run(sequencer.execute(AddLiquidityOperation(amount_a=10, amount_b=20)))

        assert gateway.count("approve.settled") == 1
        assert len(exc_info.value.tx_hashes) == 1


class TestRemoveLiquiditySequence:
    def test_remove_skips_approval(self, sequencer, gateway):
        asyncio.run(sequencer.execute(RemoveLiquidityOperation(amount=scaled(2))))

        assert gateway.names() == ["remove_liquidity", "remove_liquidity.settled"]
        assert gateway.calls[0] == ("remove_liquidity", scaled(2))

    def test_submit_failure(self, sequencer, gateway):
        gateway.inject("remove_liquidity", RuntimeError("nonce too low"))

        with pytest.raises(ActionError, match="nonce too low"):
            asyncio.run(sequencer.execute(RemoveLiquidityOperation(amount=1)))
