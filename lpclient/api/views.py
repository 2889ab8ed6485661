"""Pydantic views of the session state for the HTTP surface."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from lpclient.models.state import ActionKind, ConnectionStatus, SessionState
from lpclient.result import ActionResult, ActionStatus
from lpclient.units import format_amount


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SessionView(_CamelModel):
    status: ConnectionStatus
    account: str | None = None
    error: str | None = None


class PoolView(_CamelModel):
    """Display-ready pool metrics."""

    token_a: str = Field(alias="tokenA")
    token_b: str = Field(alias="tokenB")
    reserve_a: str = Field(alias="reserveA")
    reserve_b: str = Field(alias="reserveB")
    total_shares: str = Field(alias="totalShares")
    user_shares: str = Field(alias="userShares")
    share_percent: str = Field(alias="sharePercent")
    refresh_error: str | None = Field(default=None, alias="refreshError")


class ActionView(_CamelModel):
    kind: ActionKind
    inputs: dict[str, str]
    busy: bool
    error: str | None = None
    can_submit: bool = Field(alias="canSubmit")


class StateView(_CamelModel):
    session: SessionView
    pool: PoolView
    busy: bool
    active_tab: ActionKind = Field(alias="activeTab")
    direction_a_to_b: bool = Field(alias="directionAtoB")
    actions: list[ActionView]

    @classmethod
    def from_state(cls, state: SessionState, symbols: tuple[str, str]) -> StateView:
        snapshot = state.snapshot
        return cls(
            session=SessionView(
                status=state.session.status,
                account=state.session.account,
                error=state.session.error,
            ),
            pool=PoolView(
                token_a=symbols[0],
                token_b=symbols[1],
                reserve_a=snapshot.reserve_a_display,
                reserve_b=snapshot.reserve_b_display,
                total_shares=format_amount(snapshot.total_shares),
                user_shares=format_amount(snapshot.user_shares),
                share_percent=snapshot.share_percent_display,
                refresh_error=state.refresh_error,
            ),
            busy=state.busy,
            active_tab=state.active_tab,
            direction_a_to_b=state.direction_a_to_b,
            actions=[
                ActionView(
                    kind=action.kind,
                    inputs=dict(action.inputs),
                    busy=action.busy,
                    error=action.error,
                    can_submit=state.can_submit(action.kind),
                )
                for action in state.actions.values()
            ],
        )


class CommandResponse(_CamelModel):
    """Outcome of one command plus the state after it."""

    status: ActionStatus
    error: str | None = None
    error_detail: str | None = Field(default=None, alias="errorDetail")
    tx_hashes: list[str] = Field(default_factory=list, alias="txHashes")
    refresh_error: str | None = Field(default=None, alias="refreshError")
    state: StateView

    @classmethod
    def from_result(cls, result: ActionResult, state: StateView) -> CommandResponse:
        return cls(
            status=result.status,
            error=result.error.value if result.error else None,
            error_detail=result.error_detail,
            tx_hashes=list(result.tx_hashes),
            refresh_error=result.refresh_error,
            state=state,
        )


# --- Request bodies ---


class SelectTabRequest(_CamelModel):
    tab: ActionKind


class SetInputRequest(_CamelModel):
    field: str
    value: str


class SwapRequest(_CamelModel):
    amount: str | None = None
    direction_a_to_b: bool | None = Field(default=None, alias="directionAtoB")


class AddLiquidityRequest(_CamelModel):
    amount_a: str | None = Field(default=None, alias="amountA")
    amount_b: str | None = Field(default=None, alias="amountB")


class RemoveLiquidityRequest(_CamelModel):
    amount: str | None = None
