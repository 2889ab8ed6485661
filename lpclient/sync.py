"""Pool State Synchronizer: derives a fresh PoolSnapshot from contract reads.

A refresh runs after a successful connect and after every successful action,
never on a timer. The three reads are issued concurrently and the snapshot
is published only once all of them returned.
"""

from __future__ import annotations

import asyncio
import decimal
from decimal import ROUND_HALF_UP, Decimal

import structlog

from lpclient.constants import SHARE_PERCENT_PLACES
from lpclient.errors import RefreshError, describe
from lpclient.gateway.base import PoolGateway
from lpclient.models.state import PoolSnapshot, SessionState
from lpclient.units import DECIMAL_HIGH_PREC_CONTEXT, from_base_units

logger = structlog.get_logger()

_HUNDRED = Decimal(100)
_PERCENT_QUANTUM = Decimal(1).scaleb(-SHARE_PERCENT_PLACES)
ZERO_PERCENT = Decimal("0.00")

FETCH_ERROR_MESSAGE = "Failed to fetch pool data. Please check your connection and try again."


def compute_share_percent(user_shares: int, total_shares: int) -> Decimal:
    """User's share of the pool in percent, rounded to 2 places.

    Returns 0.00 for an empty pool. The result is clamped to [0, 100] so a
    stale or inconsistent read can never display an impossible share.
    """
    if total_shares <= 0 or user_shares <= 0:
        return ZERO_PERCENT
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        percent = (Decimal(user_shares) * _HUNDRED / Decimal(total_shares)).quantize(
            _PERCENT_QUANTUM, rounding=ROUND_HALF_UP
        )
    return min(percent, _HUNDRED.quantize(_PERCENT_QUANTUM))


def build_snapshot(reserves: tuple[int, int], total_shares: int, user_shares: int) -> PoolSnapshot:
    """Build a snapshot from raw base-unit reads."""
    reserve_a, reserve_b = reserves
    return PoolSnapshot(
        reserve_a=from_base_units(reserve_a),
        reserve_b=from_base_units(reserve_b),
        total_shares=from_base_units(total_shares),
        user_shares=from_base_units(user_shares),
        share_percent=compute_share_percent(user_shares, total_shares),
    )


class PoolStateSynchronizer:
    """Reads pool metrics through the gateway and publishes them to the state.

    Args:
        gateway: Contract gateway
        state: Session state that receives the snapshot
        timeout: Seconds allowed for the whole refresh
    """

    def __init__(self, gateway: PoolGateway, state: SessionState, timeout: float) -> None:
        self.gateway = gateway
        self.state = state
        self.timeout = timeout

    async def refresh(self, account: str) -> PoolSnapshot:
        """Publish a fresh snapshot for account.

        On any read failure the previous snapshot is kept, the fetch error is
        recorded on the state and RefreshError is raised.
        """
        try:
            snapshot = await asyncio.wait_for(self._read(account), timeout=self.timeout)
        except TimeoutError as e:
            logger.warning("pool_refresh_timeout", timeout_seconds=self.timeout)
            self.state.refresh_failed(FETCH_ERROR_MESSAGE)
            raise RefreshError(f"Pool refresh timed out after {self.timeout}s") from e
        except Exception as e:
            logger.warning("pool_refresh_failed", error=describe(e))
            self.state.refresh_failed(FETCH_ERROR_MESSAGE)
            raise RefreshError(f"{FETCH_ERROR_MESSAGE} ({describe(e)})") from e

        self.state.publish_snapshot(snapshot)
        logger.info(
            "pool_refreshed",
            reserve_a=snapshot.reserve_a_display,
            reserve_b=snapshot.reserve_b_display,
            share_percent=snapshot.share_percent_display,
        )
        return snapshot

    async def _read(self, account: str) -> PoolSnapshot:
        reserves, total_shares, user_shares = await asyncio.gather(
            self.gateway.get_reserves(),
            self.gateway.total_shares(),
            self.gateway.shares_of(account),
        )
        return build_snapshot(reserves, total_shares, user_shares)
