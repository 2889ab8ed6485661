"""Session State Machine: the single entry point for user commands.

Connection: Disconnected -> Connecting -> Connected, or back to
Disconnected when the connect fails. Orthogonally, one session-wide busy
flag gates every pool action. An action is rejected outright (no calls,
no state change) if the session is not connected, another action is busy,
or its inputs are missing or not positive decimal amounts.

Every path that sets Busy releases it exactly once, including failures,
timeouts and cancellation.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from functools import singledispatchmethod

import structlog

from lpclient.commands import (
    AddLiquidity,
    Command,
    Connect,
    RemoveLiquidity,
    SelectTab,
    SetInput,
    Swap,
    ToggleDirection,
)
from lpclient.config import DEFAULT_CLIENT_CONFIG, ClientConfig
from lpclient.errors import (
    ActionError,
    ActionTimeoutError,
    PoolClientError,
    RefreshError,
    WalletConnectionError,
    describe,
)
from lpclient.gateway.base import PoolGateway
from lpclient.models.deployment import PoolDeployment
from lpclient.models.state import ACTION_FIELDS, ActionKind, ConnectionStatus, SessionState
from lpclient.result import ActionResult
from lpclient.sequencer import (
    AddLiquidityOperation,
    ApprovalSequencer,
    PoolOperation,
    RemoveLiquidityOperation,
    SwapOperation,
)
from lpclient.sync import PoolStateSynchronizer
from lpclient.units import InvalidAmountError, to_base_units
from lpclient.wallet.provider import Signer
from lpclient.wallet.session import WalletSessionManager

logger = structlog.get_logger()

GatewayFactory = Callable[[Signer], PoolGateway]

REJECT_NOT_CONNECTED = "Wallet not connected"
REJECT_BUSY = "Another action is in progress"
REJECT_CANCELLED = "Action cancelled before settlement"


def _positive_amount(name: str, text: str) -> int:
    if not text or not text.strip():
        raise InvalidAmountError(f"Missing {name}")
    amount = to_base_units(text)
    if amount == 0:
        raise InvalidAmountError(f"{name} must be greater than zero")
    return amount


class SessionStateMachine:
    """Owns the session state and serializes every mutation of it.

    Args:
        state: The session state record
        wallet: Wallet session manager bound to the same state
        deployment: Pool deployment metadata
        gateway_factory: Builds a contract gateway for the connected signer
        config: Timeouts
    """

    def __init__(
        self,
        state: SessionState,
        wallet: WalletSessionManager,
        deployment: PoolDeployment,
        gateway_factory: GatewayFactory,
        config: ClientConfig = DEFAULT_CLIENT_CONFIG,
    ) -> None:
        self.state = state
        self.wallet = wallet
        self.deployment = deployment
        self.gateway_factory = gateway_factory
        self.config = config
        self.sequencer: ApprovalSequencer | None = None
        self.synchronizer: PoolStateSynchronizer | None = None

    async def dispatch(self, command: Command) -> ActionResult:
        """Apply one command and return its outcome. Never raises PoolClientError."""
        return await self._handle(command)

    @singledispatchmethod
    async def _handle(self, command: Command) -> ActionResult:
        raise TypeError(f"Unknown command: {type(command).__name__}")

    # --- Connection ---

    @_handle.register(Connect)
    async def _connect(self, _command: Connect) -> ActionResult:
        status = self.state.session.status
        # Claimed before the first await so a concurrent Connect sees Connecting
        if not self.state.begin_connect():
            return ActionResult.rejected(f"Wallet is already {status.value}")

        try:
            session = await asyncio.wait_for(
                self.wallet.finish_connect(), timeout=self.config.action_timeout
            )
        except TimeoutError:
            message = f"Wallet did not respond within {self.config.action_timeout}s"
            logger.warning("wallet_connect_timeout", timeout_seconds=self.config.action_timeout)
            if self.state.session.status is ConnectionStatus.CONNECTING:
                self.wallet.abort(message)
            return ActionResult.failed(WalletConnectionError(message))
        except asyncio.CancelledError:
            if self.state.session.status is ConnectionStatus.CONNECTING:
                self.wallet.abort("Connect cancelled")
            raise

        if not session.is_connected or self.wallet.signer is None:
            return ActionResult.failed(WalletConnectionError(session.error or "Connect failed"))

        # Actions stay gated until the first snapshot is published
        self.state.hold_for_refresh()
        try:
            gateway = self.gateway_factory(self.wallet.signer)
            self.sequencer = ApprovalSequencer(gateway, self.deployment)
            self.synchronizer = PoolStateSynchronizer(
                gateway, self.state, timeout=self.config.refresh_timeout
            )
            refresh_error = await self._refresh()
        finally:
            self.state.end_refresh()
        return ActionResult.settled(refresh_error=refresh_error)

    async def _refresh(self) -> str | None:
        """Refresh the snapshot; returns the fetch error message, if any."""
        account = self.wallet.current_account()
        if self.synchronizer is None or account is None:
            return None
        try:
            await self.synchronizer.refresh(account)
        except RefreshError as e:
            return e.message
        return None

    # --- Form state ---

    @_handle.register(SelectTab)
    async def _select_tab(self, command: SelectTab) -> ActionResult:
        self.state.select_tab(command.kind)
        return ActionResult.settled()

    @_handle.register(ToggleDirection)
    async def _toggle_direction(self, _command: ToggleDirection) -> ActionResult:
        if self.state.busy:
            return ActionResult.rejected(REJECT_BUSY)
        self.state.toggle_direction()
        return ActionResult.settled()

    @_handle.register(SetInput)
    async def _set_input(self, command: SetInput) -> ActionResult:
        if self.state.busy:
            return ActionResult.rejected(REJECT_BUSY)
        try:
            self.state.set_input(command.kind, command.field, command.value)
        except ValueError as e:
            return ActionResult.rejected(str(e))
        return ActionResult.settled()

    # --- Pool actions ---

    @_handle.register(Swap)
    async def _swap(self, command: Swap) -> ActionResult:
        direction = (
            self.state.direction_a_to_b
            if command.direction_a_to_b is None
            else command.direction_a_to_b
        )

        def build(inputs: dict[str, str]) -> SwapOperation:
            return SwapOperation(
                amount=_positive_amount("amount", inputs["amount"]),
                direction_a_to_b=direction,
            )

        result = await self._run_action(ActionKind.SWAP, {"amount": command.amount}, build)
        if not result.is_rejected:
            self.state.set_direction(direction)
        return result

    @_handle.register(AddLiquidity)
    async def _add_liquidity(self, command: AddLiquidity) -> ActionResult:
        def build(inputs: dict[str, str]) -> AddLiquidityOperation:
            return AddLiquidityOperation(
                amount_a=_positive_amount("amount_a", inputs["amount_a"]),
                amount_b=_positive_amount("amount_b", inputs["amount_b"]),
            )

        return await self._run_action(
            ActionKind.ADD_LIQUIDITY,
            {"amount_a": command.amount_a, "amount_b": command.amount_b},
            build,
        )

    @_handle.register(RemoveLiquidity)
    async def _remove_liquidity(self, command: RemoveLiquidity) -> ActionResult:
        def build(inputs: dict[str, str]) -> RemoveLiquidityOperation:
            return RemoveLiquidityOperation(amount=_positive_amount("amount", inputs["amount"]))

        return await self._run_action(
            ActionKind.REMOVE_LIQUIDITY, {"amount": command.amount}, build
        )

    async def _run_action(
        self,
        kind: ActionKind,
        overrides: dict[str, str | None],
        build: Callable[[dict[str, str]], PoolOperation],
    ) -> ActionResult:
        if not self.state.session.is_connected or self.sequencer is None:
            return ActionResult.rejected(REJECT_NOT_CONNECTED)
        if self.state.busy:
            logger.debug("action_rejected_busy", kind=kind.value)
            return ActionResult.rejected(REJECT_BUSY)

        pending = self.state.actions[kind]
        inputs = {
            name: overrides.get(name) or pending.value(name) for name in ACTION_FIELDS[kind]
        }
        try:
            operation = build(inputs)
        except InvalidAmountError as e:
            logger.debug("action_rejected_input", kind=kind.value, reason=str(e))
            return ActionResult.rejected(str(e))

        # No suspension point between the busy check above and this acquire
        if not self.state.try_acquire(kind):
            return ActionResult.rejected(REJECT_BUSY)

        error_message: str | None = REJECT_CANCELLED
        try:
            for name, value in inputs.items():
                self.state.set_input(kind, name, value)
            result = await self._execute(kind, operation)
            error_message = result.error_detail if result.is_failed else None
            return result
        finally:
            self.state.release(kind, error_message)

    async def _execute(self, kind: ActionKind, operation: PoolOperation) -> ActionResult:
        assert self.sequencer is not None
        logger.info("action_started", kind=kind.value, operation=repr(operation))
        # Filled by the sequencer as transactions settle; survives cancellation
        settled: list[str] = []
        try:
            try:
                tx_hashes = await asyncio.wait_for(
                    self.sequencer.execute(operation, settled),
                    timeout=self.config.action_timeout,
                )
            except TimeoutError as e:
                raise ActionTimeoutError(
                    f"{kind.value} did not settle within {self.config.action_timeout}s; "
                    "check the transaction status in your wallet",
                    tx_hashes=tuple(settled),
                ) from e
        except PoolClientError as e:
            logger.warning("action_failed", kind=kind.value, error_kind=e.kind.value, error=e.message)
            return ActionResult.failed(e)
        except Exception as e:
            logger.exception("action_error", kind=kind.value)
            return ActionResult.failed(ActionError(describe(e)))

        refresh_error = await self._refresh()
        self.state.clear_inputs(kind)
        logger.info(
            "action_settled", kind=kind.value, tx_hashes=list(tx_hashes), refresh_error=refresh_error
        )
        return ActionResult.settled(tx_hashes=tx_hashes, refresh_error=refresh_error)
