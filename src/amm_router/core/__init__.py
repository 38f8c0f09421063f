"""
amm_router Core
===============

Unified exports for integer-domain primitives: exact fractions, assets,
amounts and prices. All arithmetic is exact on Python integers; Decimal
helpers are provided *only* for display formatting.
"""

# NOTE:
#   Pool, route and trade logic live one level up (amm_router.pool,
#   amm_router.route, amm_router.trade) and build on these primitives only.

# Integer-domain constants
from .constants import (
    ChainId,
    MAX_UINT256,
    MAX_DECIMALS,
    BPS_DENOMINATOR,
    DEFAULT_FEE_BPS,
    WEIGHT_TOTAL,
    DEFAULT_WEIGHT,
    DEFAULT_MAX_HOPS,
    DEFAULT_MAX_NUM_RESULTS,
)

# Decimal formatting helpers (non-core arithmetic)
from .fmt import (
    Rounding,
    fmt_amount,
    amount_to_decimal,
)

# Rational primitive
from .fraction import ExactFraction, Percent

# Assets
from .address import validate_and_parse_address
from .assets import (
    Native,
    Token,
    Asset,
    NATIVE,
    asset_equals,
    sort_tokens,
    wrapped_native,
    wrapped_asset,
    named_token,
)

# Amounts and prices
from .amounts import Amount
from .price import Price

# Ordering utilities
from .ordering import sorted_insert, stable_sort_best_first

# Core exceptions
from .exc import (
    AmountDomainError,
    InvariantViolation,
    InvalidAddress,
    ChainMismatch,
    IdenticalAssets,
    InvalidRoute,
    DivisionByZero,
    PoolMathError,
    InsufficientReserves,
    InsufficientInputAmount,
    InsufficientOutputAmount,
    RpcError,
    PoolFetchError,
)

__all__ = [
    # constants
    "ChainId",
    "MAX_UINT256",
    "MAX_DECIMALS",
    "BPS_DENOMINATOR",
    "DEFAULT_FEE_BPS",
    "WEIGHT_TOTAL",
    "DEFAULT_WEIGHT",
    "DEFAULT_MAX_HOPS",
    "DEFAULT_MAX_NUM_RESULTS",
    # fmt
    "Rounding",
    "fmt_amount",
    "amount_to_decimal",
    # fractions
    "ExactFraction",
    "Percent",
    # assets
    "validate_and_parse_address",
    "Native",
    "Token",
    "Asset",
    "NATIVE",
    "asset_equals",
    "sort_tokens",
    "wrapped_native",
    "wrapped_asset",
    "named_token",
    # amounts / prices
    "Amount",
    "Price",
    # ordering
    "sorted_insert",
    "stable_sort_best_first",
    # exceptions
    "AmountDomainError",
    "InvariantViolation",
    "InvalidAddress",
    "ChainMismatch",
    "IdenticalAssets",
    "InvalidRoute",
    "DivisionByZero",
    "PoolMathError",
    "InsufficientReserves",
    "InsufficientInputAmount",
    "InsufficientOutputAmount",
    "RpcError",
    "PoolFetchError",
]
