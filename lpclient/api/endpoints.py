"""API endpoints for the pool client.

Every endpoint feeds one command to the session state machine and answers
with the outcome and the resulting state. Failures are reported in the
body with status 200; the HTTP status only signals malformed requests.
"""

from fastapi import APIRouter, Depends

from lpclient.api.views import (
    AddLiquidityRequest,
    CommandResponse,
    RemoveLiquidityRequest,
    SelectTabRequest,
    SetInputRequest,
    StateView,
    SwapRequest,
)
from lpclient.client import get_default_client
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
from lpclient.models.state import ActionKind
from lpclient.state_machine import SessionStateMachine

router = APIRouter()


def get_client() -> SessionStateMachine:
    """Dependency provider for the client instance.

    Override this in tests to inject a client built on fakes:
        app.dependency_overrides[get_client] = lambda: client
    """
    return get_default_client()


def _state_view(client: SessionStateMachine) -> StateView:
    tokens = client.deployment.tokens
    return StateView.from_state(client.state, (tokens.a.symbol, tokens.b.symbol))


async def _run(client: SessionStateMachine, command: Command) -> CommandResponse:
    result = await client.dispatch(command)
    return CommandResponse.from_result(result, _state_view(client))


@router.get("/state")
async def get_state(client: SessionStateMachine = Depends(get_client)) -> StateView:
    """Current session, pool snapshot and form state."""
    return _state_view(client)


@router.post("/connect")
async def connect(client: SessionStateMachine = Depends(get_client)) -> CommandResponse:
    return await _run(client, Connect())


@router.post("/tab")
async def select_tab(
    request: SelectTabRequest, client: SessionStateMachine = Depends(get_client)
) -> CommandResponse:
    return await _run(client, SelectTab(kind=request.tab))


@router.put("/inputs/{kind}")
async def set_input(
    kind: ActionKind,
    request: SetInputRequest,
    client: SessionStateMachine = Depends(get_client),
) -> CommandResponse:
    return await _run(client, SetInput(kind=kind, field=request.field, value=request.value))


@router.post("/swap/direction")
async def toggle_direction(client: SessionStateMachine = Depends(get_client)) -> CommandResponse:
    return await _run(client, ToggleDirection())


@router.post("/swap")
async def swap(
    request: SwapRequest, client: SessionStateMachine = Depends(get_client)
) -> CommandResponse:
    """Approve the source token, then swap."""
    return await _run(
        client, Swap(amount=request.amount, direction_a_to_b=request.direction_a_to_b)
    )


@router.post("/liquidity/add")
async def add_liquidity(
    request: AddLiquidityRequest, client: SessionStateMachine = Depends(get_client)
) -> CommandResponse:
    """Approve token A, then token B, then add liquidity."""
    return await _run(client, AddLiquidity(amount_a=request.amount_a, amount_b=request.amount_b))


@router.post("/liquidity/remove")
async def remove_liquidity(
    request: RemoveLiquidityRequest, client: SessionStateMachine = Depends(get_client)
) -> CommandResponse:
    return await _run(client, RemoveLiquidity(amount=request.amount))
