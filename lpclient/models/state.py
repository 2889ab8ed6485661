"""In-memory session state for the pool client.

SessionState is the single owner of the connection session, the latest pool
snapshot and the per-action pending records. Components never assign its
fields directly; they call the transition methods below. All callers run on
one asyncio event loop and no transition awaits, so a check-then-set inside
one method cannot be interleaved with another flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

import structlog

from lpclient.units import format_amount

logger = structlog.get_logger()


class ConnectionStatus(str, Enum):
    """Wallet connection status."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class ActionKind(str, Enum):
    """User actions against the pool. Values double as tab names."""

    SWAP = "swap"
    ADD_LIQUIDITY = "add"
    REMOVE_LIQUIDITY = "remove"


# Input fields required by each action
ACTION_FIELDS: dict[ActionKind, tuple[str, ...]] = {
    ActionKind.SWAP: ("amount",),
    ActionKind.ADD_LIQUIDITY: ("amount_a", "amount_b"),
    ActionKind.REMOVE_LIQUIDITY: ("amount",),
}


@dataclass
class Session:
    """Wallet session. Not persisted."""

    status: ConnectionStatus = ConnectionStatus.DISCONNECTED
    account: str | None = None
    error: str | None = None

    @property
    def is_connected(self) -> bool:
        return self.status is ConnectionStatus.CONNECTED


@dataclass(frozen=True)
class PoolSnapshot:
    """Derived pool metrics in token units.

    Always replaced wholesale by the synchronizer, never patched.
    """

    reserve_a: Decimal = Decimal(0)
    reserve_b: Decimal = Decimal(0)
    total_shares: Decimal = Decimal(0)
    user_shares: Decimal = Decimal(0)
    share_percent: Decimal = Decimal("0.00")

    @property
    def reserve_a_display(self) -> str:
        return format_amount(self.reserve_a)

    @property
    def reserve_b_display(self) -> str:
        return format_amount(self.reserve_b)

    @property
    def share_percent_display(self) -> str:
        return f"{self.share_percent:.2f}"


@dataclass
class PendingAction:
    """Form state of one action kind."""

    kind: ActionKind
    inputs: dict[str, str] = field(default_factory=dict)
    busy: bool = False
    error: str | None = None

    def value(self, name: str) -> str:
        return self.inputs.get(name, "")

    @property
    def has_inputs(self) -> bool:
        """True if every required field is non-empty."""
        return all(self.value(name).strip() for name in ACTION_FIELDS[self.kind])


class SessionState:
    """Single authoritative state record for one client session."""

    def __init__(self) -> None:
        self.session = Session()
        self.snapshot = PoolSnapshot()
        self.refresh_error: str | None = None
        self.actions: dict[ActionKind, PendingAction] = {
            kind: PendingAction(kind=kind) for kind in ActionKind
        }
        self.active_tab = ActionKind.SWAP
        self.direction_a_to_b = True
        self._busy_kind: ActionKind | None = None
        self._refreshing = False

    # --- Derived views ---

    @property
    def busy(self) -> bool:
        """Session-wide busy flag."""
        return self._busy_kind is not None or self._refreshing

    @property
    def busy_kind(self) -> ActionKind | None:
        return self._busy_kind

    def can_submit(self, kind: ActionKind) -> bool:
        """Whether the action button for kind should be enabled."""
        return (
            self.session.is_connected and not self.busy and self.actions[kind].has_inputs
        )

    # --- Connection transitions ---

    def begin_connect(self) -> bool:
        """Disconnected -> Connecting. Returns False if not Disconnected."""
        if self.session.status is not ConnectionStatus.DISCONNECTED:
            return False
        self.session = Session(status=ConnectionStatus.CONNECTING)
        return True

    def connect_succeeded(self, account: str) -> None:
        """Connecting -> Connected."""
        self._expect_status(ConnectionStatus.CONNECTING)
        self.session = Session(status=ConnectionStatus.CONNECTED, account=account)

    def connect_failed(self, message: str) -> None:
        """Connecting -> Disconnected with an error."""
        self._expect_status(ConnectionStatus.CONNECTING)
        self.session = Session(status=ConnectionStatus.DISCONNECTED, error=message)

    def _expect_status(self, expected: ConnectionStatus) -> None:
        if self.session.status is not expected:
            raise RuntimeError(
                f"Invalid connection transition from {self.session.status.value}"
            )

    # --- Busy gate ---

    def try_acquire(self, kind: ActionKind) -> bool:
        """Idle -> Busy for kind. Returns False if not connected or already busy."""
        if not self.session.is_connected or self.busy:
            return False
        self._busy_kind = kind
        action = self.actions[kind]
        action.busy = True
        action.error = None
        logger.debug("busy_acquired", kind=kind.value)
        return True

    def release(self, kind: ActionKind, error: str | None = None) -> None:
        """Busy -> Idle, recording the outcome on the pending action."""
        if self._busy_kind is not kind:
            raise RuntimeError(f"Release of {kind.value} without matching acquire")
        action = self.actions[kind]
        action.busy = False
        action.error = error
        self._busy_kind = None
        logger.debug("busy_released", kind=kind.value, failed=error is not None)

    # --- Snapshot ---

    def hold_for_refresh(self) -> None:
        """Hold the busy gate for a refresh that no action owns."""
        if self.busy:
            raise RuntimeError("Refresh hold while busy")
        self._refreshing = True

    def end_refresh(self) -> None:
        self._refreshing = False


    def publish_snapshot(self, snapshot: PoolSnapshot) -> None:
        self.snapshot = snapshot
        self.refresh_error = None

    def refresh_failed(self, message: str) -> None:
        """Keep the previous snapshot and record the fetch error."""
        self.refresh_error = message

    # --- Form state ---

    def select_tab(self, kind: ActionKind) -> None:
        self.active_tab = kind

    def toggle_direction(self) -> bool:
        return self.set_direction(not self.direction_a_to_b)

    def set_direction(self, direction_a_to_b: bool) -> bool:
        self.direction_a_to_b = direction_a_to_b
        return direction_a_to_b

    def set_input(self, kind: ActionKind, name: str, value: str) -> None:
        if name not in ACTION_FIELDS[kind]:
            raise ValueError(f"Unknown field '{name}' for {kind.value}")
        self.actions[kind].inputs[name] = value

    def clear_inputs(self, kind: ActionKind) -> None:
        self.actions[kind].inputs.clear()
