"""Pydantic models for pool deployment metadata.

Deployment metadata is produced by the contract deployment tooling and
consumed here. Example file:

    {
        "poolAddress": "0x...",
        "tokens": {
            "a": {"symbol": "TK1", "address": "0x..."},
            "b": {"symbol": "TK2", "address": "0x..."}
        },
        "abi": [...]
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lpclient.models.types import Address, is_valid_address, normalize_address


def _validate_token_address(name: str, address: str) -> str:
    """Validate and return a token address.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# Token pair of the reference deployment (validated at import time)
TK1 = _validate_token_address("TK1", "0x50E00bC33d107108D935B07EF7D82594651B1968")
TK2 = _validate_token_address("TK2", "0x3070ef83F647838DB86f276c7D9E58B83559a788")


class TokenInfo(BaseModel):
    """One side of the pool's token pair."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    address: Address


class TokenPair(BaseModel):
    """Token pair descriptor.

    Token A is the source token of an A-to-B swap, token B of a B-to-A swap.
    """

    model_config = ConfigDict(frozen=True)

    a: TokenInfo
    b: TokenInfo

    @model_validator(mode="after")
    def _distinct_tokens(self) -> TokenPair:
        if normalize_address(self.a.address) == normalize_address(self.b.address):
            raise ValueError("Token pair must hold two distinct tokens")
        return self

    def source_token(self, direction_a_to_b: bool) -> TokenInfo:
        """Token spent by a swap in the given direction."""
        return self.a if direction_a_to_b else self.b

    @classmethod
    def default(cls) -> TokenPair:
        """The reference TK1/TK2 pair."""
        return cls(
            a=TokenInfo(symbol="TK1", address=TK1),
            b=TokenInfo(symbol="TK2", address=TK2),
        )


class PoolDeployment(BaseModel):
    """Everything needed to talk to one deployed pool."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pool_address: Address = Field(alias="poolAddress")
    tokens: TokenPair = Field(default_factory=TokenPair.default)
    abi: list[dict[str, Any]] | None = Field(
        default=None,
        description="Pool ABI. If omitted the client's minimal pool ABI is used.",
    )


def load_deployment(path: str | Path) -> PoolDeployment:
    """Load deployment metadata from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the metadata is malformed
    """
    with open(path) as f:
        data = json.load(f)
    return PoolDeployment.model_validate(data)
