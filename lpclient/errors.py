"""Pool client error classes.

Each component boundary converts lower-level failures into one of the
surfaced kinds below before control returns to the session state machine.
"""

from enum import Enum


class ErrorKind(Enum):
    """Kinds of failures surfaced to the user."""

    CONNECTION = "connection"
    APPROVAL = "approval"
    ACTION = "action"
    REFRESH = "refresh"
    TIMEOUT = "timeout"


class PoolClientError(Exception):
    """Base error for pool client operations."""

    kind: ErrorKind = ErrorKind.ACTION

    def __init__(self, message: str, tx_hashes: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.message = message
        # Transactions that did settle before the failure
        self.tx_hashes = tx_hashes


class WalletConnectionError(PoolClientError):
    """No wallet provider is present or the user rejected account access."""

    kind = ErrorKind.CONNECTION


class ActionError(PoolClientError):
    """A swap / add / remove call reverted, ran out of funds, or was rejected."""

    kind = ErrorKind.ACTION


class ApprovalError(ActionError):
    """A token allowance transaction reverted or was rejected.

    The dependent pool action was never submitted.
    """

    kind = ErrorKind.APPROVAL


class ActionTimeoutError(ActionError):
    """An action did not settle within the configured outer timeout."""

    kind = ErrorKind.TIMEOUT


class RefreshError(PoolClientError):
    """A pool state read failed; the displayed snapshot is stale."""

    kind = ErrorKind.REFRESH


class GatewayError(Exception):
    """Provider or network error raised by the contract gateway."""

    pass


class TransactionFailed(GatewayError):
    """A submitted transaction reverted or could not be confirmed."""

    def __init__(self, message: str, tx_hash: str | None = None) -> None:
        super().__init__(message)
        self.tx_hash = tx_hash


def describe(error: BaseException) -> str:
    """Human-readable message for an error, falling back to its type name."""
    message = str(error).strip()
    return message or type(error).__name__
