"""Minimal ABIs for the pool and token contracts."""

_UINT = "uint256"

# Pool ABI - minimal, just the functions the client calls
POOL_ABI = [
    {
        "name": "getReserves",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {"name": "reserveA", "type": _UINT},
            {"name": "reserveB", "type": _UINT},
        ],
    },
    {
        "name": "totalShares",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": _UINT}],
    },
    {
        "name": "shares",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"name": "", "type": _UINT}],
    },
    {
        "name": "swap",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "amount", "type": _UINT},
            {"name": "directionAtoB", "type": "bool"},
        ],
        "outputs": [],
    },
    {
        "name": "addLiquidity",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "amountA", "type": _UINT},
            {"name": "amountB", "type": _UINT},
        ],
        "outputs": [],
    },
    {
        "name": "removeLiquidity",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "amount", "type": _UINT}],
        "outputs": [],
    },
]

ERC20_APPROVE_ABI = [
    {
        "name": "approve",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "amount", "type": _UINT},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
]

__all__ = ["POOL_ABI", "ERC20_APPROVE_ABI"]
