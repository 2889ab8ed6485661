"""Outcome records returned by the session state machine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from lpclient.errors import ErrorKind, PoolClientError, describe


class ActionStatus(Enum):
    """Terminal status of a dispatched command."""

    SETTLED = "settled"
    FAILED = "failed"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ActionResult:
    """Result of a dispatched command.

    A REJECTED result means the command was a no-op (session not connected,
    another action busy, or invalid input). FAILED carries the error kind and
    the provider message. A SETTLED action may still report a refresh error
    when the follow-up pool read failed.

    Examples:
        result = ActionResult.settled(tx_hashes=("0xabc...",))
        assert result.ok

        result = ActionResult.rejected("busy")
        assert result.is_rejected
    """

    status: ActionStatus
    error: ErrorKind | None = None
    error_detail: str | None = None
    tx_hashes: tuple[str, ...] = field(default_factory=tuple)
    refresh_error: str | None = None

    @property
    def ok(self) -> bool:
        """True if the command settled successfully."""
        return self.status is ActionStatus.SETTLED

    @property
    def is_rejected(self) -> bool:
        return self.status is ActionStatus.REJECTED

    @property
    def is_failed(self) -> bool:
        return self.status is ActionStatus.FAILED

    @classmethod
    def settled(
        cls, tx_hashes: tuple[str, ...] = (), refresh_error: str | None = None
    ) -> ActionResult:
        """Create a successful result."""
        return cls(
            status=ActionStatus.SETTLED, tx_hashes=tx_hashes, refresh_error=refresh_error
        )

    @classmethod
    def failed(cls, error: PoolClientError) -> ActionResult:
        """Create a failed result from a surfaced error."""
        return cls(
            status=ActionStatus.FAILED,
            error=error.kind,
            error_detail=describe(error),
            tx_hashes=error.tx_hashes,
        )

    @classmethod
    def rejected(cls, reason: str) -> ActionResult:
        """Create a no-op result."""
        return cls(status=ActionStatus.REJECTED, error_detail=reason)
