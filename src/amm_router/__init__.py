# Top-level API for amm_router (integer-domain).
"""
Top-level API for amm_router (integer-domain).

This module exposes the stable interface for quoting and routing over
constant-product (optionally weighted) liquidity pools:
  - Pool: reserves + fee + weighting with exact swap math
  - Route: validated chain of pools
  - Trade: realised amounts, execution price and price impact
  - best_trade_exact_in / best_trade_exact_out: bounded graph search

Core data types (ExactFraction, Amount, Price, assets) are fully
integer-domain. The on-chain data collaborator lives in `amm_router.fetcher`
and is **not** imported here, so the core never pulls in network code.
"""

from __future__ import annotations

from .curves import SwapCurve, ConstantProductCurve, WeightedProductCurve, curve_for_weight
from .pool import Pool, compute_pool_address
from .route import Route
from .trade import (
    TradeType,
    Trade,
    BestTradeOptions,
    best_trade_exact_in,
    best_trade_exact_out,
)

# Core data types
from .core import (
    ChainId,
    ExactFraction,
    Percent,
    Rounding,
    Native,
    Token,
    Asset,
    NATIVE,
    Amount,
    Price,
)

__all__ = [
    # pools and routing
    "SwapCurve",
    "ConstantProductCurve",
    "WeightedProductCurve",
    "curve_for_weight",
    "Pool",
    "compute_pool_address",
    "Route",
    "TradeType",
    "Trade",
    "BestTradeOptions",
    "best_trade_exact_in",
    "best_trade_exact_out",
    # core data types
    "ChainId",
    "ExactFraction",
    "Percent",
    "Rounding",
    "Native",
    "Token",
    "Asset",
    "NATIVE",
    "Amount",
    "Price",
]

__version__ = "0.1.0"
