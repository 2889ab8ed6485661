"""Exact conversion between human decimal strings and 18-decimal base units.

User input is a decimal string in token units ("1.5"). Contract calls take
integers scaled by 10^18. Conversion is done on the digit strings so no
precision is lost; Decimal is only used with a uint256-wide context.
"""

from __future__ import annotations

import decimal
import re
from decimal import Decimal

from lpclient.constants import BASE_UNIT_DECIMALS, UINT256_MAX

# 78 digits of precision, enough for uint256 values (up to ~10^77)
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)

_AMOUNT_PATTERN = re.compile(
    r"^(?:(?P<int>[0-9]+)(?:\.(?P<frac>[0-9]*))?|\.(?P<frac_only>[0-9]+))$"
)


class InvalidAmountError(ValueError):
    """Amount string is empty, non-numeric, or not representable in base units."""

    pass


def _split_amount(text: str) -> tuple[str, str]:
    """Split a decimal string into (integer digits, significant fraction digits)."""
    if not isinstance(text, str):
        raise InvalidAmountError(f"Amount must be a string, got {type(text).__name__}")

    match = _AMOUNT_PATTERN.match(text.strip())
    if match is None:
        raise InvalidAmountError(f"Not a decimal amount: '{text}'")

    integer = match.group("int") or "0"
    fraction = (match.group("frac") or match.group("frac_only") or "").rstrip("0")
    if len(fraction) > BASE_UNIT_DECIMALS:
        raise InvalidAmountError(
            f"Too many decimals in '{text}' (max {BASE_UNIT_DECIMALS})"
        )
    return integer, fraction


def to_base_units(text: str) -> int:
    """Convert a human decimal string to integer base units.

    Examples:
        to_base_units("1.5") == 1_500_000_000_000_000_000
        to_base_units(".25") == 250_000_000_000_000_000

    Raises:
        InvalidAmountError: If the string is not a non-negative decimal with at
            most 18 significant fractional digits, or overflows uint256
    """
    integer, fraction = _split_amount(text)
    value = int(integer + fraction.ljust(BASE_UNIT_DECIMALS, "0"))
    if value > UINT256_MAX:
        raise InvalidAmountError(f"Amount overflows uint256: '{text}'")
    return value


def from_base_units(value: int) -> Decimal:
    """Convert integer base units to a Decimal in token units."""
    if value < 0:
        raise InvalidAmountError(f"Base-unit amount cannot be negative: {value}")
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return Decimal(value).scaleb(-BASE_UNIT_DECIMALS)


def format_amount(value: Decimal) -> str:
    """Format a token amount the way wallets show ether values.

    Trailing zeros are dropped but at least one fractional digit is kept,
    so 100 is shown as "100.0" and 1.50 as "1.5".
    """
    text = format(value, "f")
    if "." not in text:
        return text + ".0"
    text = text.rstrip("0")
    if text.endswith("."):
        text += "0"
    return text


def to_display(value: int) -> str:
    """Convert integer base units to a display string."""
    return format_amount(from_base_units(value))


def normalize(text: str) -> str:
    """Canonical display form of a user-entered amount string."""
    integer, fraction = _split_amount(text)
    integer = integer.lstrip("0") or "0"
    return f"{integer}.{fraction or '0'}"


__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "InvalidAmountError",
    "to_base_units",
    "from_base_units",
    "format_amount",
    "to_display",
    "normalize",
]
