"""Address type shared by the deployment metadata and the wallet session."""

import re
from typing import Annotated

from pydantic import Field

_ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"
_ADDRESS_RE = re.compile(_ADDRESS_PATTERN)

# 20-byte account or contract address, 0x-prefixed hex
Address = Annotated[str, Field(pattern=_ADDRESS_PATTERN)]


def is_valid_address(address: object) -> bool:
    """True for a 0x-prefixed, 40 hex digit string (any checksum casing)."""
    return isinstance(address, str) and _ADDRESS_RE.fullmatch(address) is not None


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Lowercase an address and add the 0x prefix if missing.

    Raises:
        ValueError: If validate is set and the result is not a valid address
    """
    normalized = address.lower()
    if not normalized.startswith("0x"):
        normalized = "0x" + normalized
    if validate and not is_valid_address(normalized):
        raise ValueError(f"Invalid address: {address}")
    return normalized
