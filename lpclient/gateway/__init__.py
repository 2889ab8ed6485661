"""Contract gateway for the pool and its token pair."""

from lpclient.gateway.abi import ERC20_APPROVE_ABI, POOL_ABI
from lpclient.gateway.base import PoolGateway, TransactionHandle

__all__ = [
    "PoolGateway",
    "TransactionHandle",
    "POOL_ABI",
    "ERC20_APPROVE_ABI",
]
