"""Command objects fed to the session state machine.

Each user interaction is one command. Action commands may carry their
inputs; a field left as None falls back to the value stored by SetInput.
"""

from __future__ import annotations

from dataclasses import dataclass

from lpclient.models.state import ActionKind


@dataclass(frozen=True)
class Connect:
    """Request wallet account access."""


@dataclass(frozen=True)
class SelectTab:
    kind: ActionKind


@dataclass(frozen=True)
class ToggleDirection:
    """Flip the swap direction between A-to-B and B-to-A."""


@dataclass(frozen=True)
class SetInput:
    """Store a raw input string for one field of an action form."""

    kind: ActionKind
    field: str
    value: str


@dataclass(frozen=True)
class Swap:
    amount: str | None = None
    direction_a_to_b: bool | None = None


@dataclass(frozen=True)
class AddLiquidity:
    amount_a: str | None = None
    amount_b: str | None = None


@dataclass(frozen=True)
class RemoveLiquidity:
    amount: str | None = None


Command = Connect | SelectTab | ToggleDirection | SetInput | Swap | AddLiquidity | RemoveLiquidity
