"""Client constants.

Centralizes the fixed-point scale shared by conversions and display.
"""

# Every on-chain amount is an 18-decimal fixed-point integer
BASE_UNIT_DECIMALS = 18
BASE_UNIT_SCALE = 10**BASE_UNIT_DECIMALS

# Maximum uint256 value
UINT256_MAX = 2**256 - 1

# Share percentage is displayed with 2 decimal places
SHARE_PERCENT_PLACES = 2
