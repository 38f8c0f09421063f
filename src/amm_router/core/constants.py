"""
amm_router Core Constants (integer domain)
=========================================

Only integer protocol constants and static tables live here. Display helpers
that rely on Decimal are in `fmt.py`.
"""

# NOTE: the pool factory and its init code hash are deployment-specific and
# are always passed in by the caller (`compute_pool_address`, `Fetcher`).

from enum import IntEnum


class ChainId(IntEnum):
    MAINNET = 1
    BSC = 56
    MATIC = 137
    MATICTESTNET = 80001


# ---------------------------------------------------------------------------
# Integer bounds
# ---------------------------------------------------------------------------

#: Largest raw amount a pool can hold (uint256).
MAX_UINT256: int = 2 ** 256 - 1

#: Largest token precision accepted (uint8).
MAX_DECIMALS: int = 255


# ---------------------------------------------------------------------------
# Pool parameters
# ---------------------------------------------------------------------------

#: Fees are quoted in basis points of this denominator.
BPS_DENOMINATOR: int = 10_000

#: 0.20% swap fee.
DEFAULT_FEE_BPS: int = 20

#: Weights are percentages of the first (sorted) asset.
WEIGHT_TOTAL: int = 100
DEFAULT_WEIGHT: int = 50


# ---------------------------------------------------------------------------
# Route search defaults
# ---------------------------------------------------------------------------

DEFAULT_MAX_HOPS: int = 3
DEFAULT_MAX_NUM_RESULTS: int = 3


# ---------------------------------------------------------------------------
# Static tables
# ---------------------------------------------------------------------------

#: chain id -> (address, decimals, symbol, name) of the wrapped native token.
WRAPPED_NATIVE = {
    ChainId.MAINNET: ("0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", 18, "WETH", "Wrapped Ether"),
    ChainId.BSC: ("0xbb4CdB9CBd36B01bD1cBaEBF2De08d9173bc095c", 18, "WBNB", "Wrapped BNB"),
    ChainId.MATIC: ("0x0d500b1d8e8ef31e21c99d1db9a6444d3adf1270", 18, "WMATIC", "Wrapped MATIC"),
    ChainId.MATICTESTNET: ("0x9c3C9283D3e44854697Cd22D3Faa240Cfb032889", 18, "WMATIC", "Wrapped MATIC"),
}

#: Well-known tokens by key, then chain id -> (address, decimals, symbol, name).
NAMED_TOKENS = {
    "WETH": {
        ChainId.MATIC: ("0x7ceb23fd6bc0add59e62ac25578270cff1b9f619", 18, "WETH", "Wrapped ETH"),
    },
    "HOPE": {
        ChainId.MATIC: ("0xd78c475133731cd54dadcb430f7aae4f03c1e660", 18, "HOPE", "Firebird HOPE"),
        ChainId.BSC: ("0xd78c475133731cd54dadcb430f7aae4f03c1e660", 18, "HOPE-P", "Firebird HOPE-P"),
    },
}

#: Tokens whose on-chain decimals() is missing or wrong; consulted before any lookup.
DECIMALS_OVERRIDES = {
    ChainId.MATIC: {
        "0xE0B7927c4aF23765Cb51314A0E0521A9645F0E2A": 9,  # DGD
    },
}


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------

__all__ = [
    "ChainId",
    "MAX_UINT256",
    "MAX_DECIMALS",
    "BPS_DENOMINATOR",
    "DEFAULT_FEE_BPS",
    "WEIGHT_TOTAL",
    "DEFAULT_WEIGHT",
    "DEFAULT_MAX_HOPS",
    "DEFAULT_MAX_NUM_RESULTS",
    "NAMED_TOKENS",
    "WRAPPED_NATIVE",
    "DECIMALS_OVERRIDES",
]
