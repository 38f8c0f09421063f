"""Trades over routes, and the best-trade search over a pool graph.

A Trade evaluates one Route for an exact input or an exact output by folding
the pool legs in order (exact input) or in reverse (exact output). Any pool
failure is re-raised attributed to its hop.

The search explores the pool graph depth-first with an explicit stack of
frames (asset amount carried, pools used, hops left). A pool is never reused
within one candidate, so the search terminates on cyclic graphs and parallel
pools. A failing or empty pool only prunes its own branch. Candidates are kept
in a bounded best-first list: exact input ranks by output (descending), exact
output by input (ascending); ties prefer fewer hops, then discovery order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, NamedTuple, Optional, Tuple

from .core import (
    Amount,
    Asset,
    ExactFraction,
    Percent,
    Price,
    Token,
    asset_equals,
    wrapped_asset,
    sorted_insert,
    DEFAULT_MAX_HOPS,
    DEFAULT_MAX_NUM_RESULTS,
)
from .core.exc import AmountDomainError, IdenticalAssets, PoolMathError
from .core.fmt import fmt_amount
from .pool import Pool
from .route import Route

# --- Debug utilities (toggleable) ---
DEBUG_TRADE = False

def _dbg(msg: str) -> None:
    if DEBUG_TRADE:
        print(f"[TRADE] {msg}")


class TradeType(Enum):
    EXACT_INPUT = 0
    EXACT_OUTPUT = 1


def _check_slippage(slippage: ExactFraction) -> None:
    if slippage < 0:
        raise AmountDomainError("slippage tolerance must be >= 0")


@dataclass(frozen=True)
class Trade:
    """Realised amounts of swapping along `route`.

    Use `Trade.exact_in` / `Trade.exact_out` rather than the raw constructor.
    `next_pools` are the post-swap pools in route order.
    """

    route: Route
    trade_type: TradeType
    input_amount: Amount
    output_amount: Amount
    next_pools: Tuple[Pool, ...] = field(default=(), compare=False, repr=False)

    # ------------- constructors -------------

    @classmethod
    def exact_in(cls, route: Route, amount_in: Amount) -> "Trade":
        if not asset_equals(amount_in.asset, route.input):
            raise AmountDomainError(f"amount asset {amount_in.asset!r} is not the route input {route.input!r}")
        current = Amount(wrapped_asset(amount_in.asset, route.chain_id), amount_in.raw)
        next_pools: List[Pool] = []
        for hop, pool in enumerate(route.pools):
            try:
                current, after = pool.get_output_amount(current)
            except PoolMathError as exc:
                raise exc.at_hop(hop) from exc
            next_pools.append(after)
        return cls(route, TradeType.EXACT_INPUT, amount_in, Amount(route.output, current.raw), tuple(next_pools))

    @classmethod
    def exact_out(cls, route: Route, amount_out: Amount) -> "Trade":
        if not asset_equals(amount_out.asset, route.output):
            raise AmountDomainError(f"amount asset {amount_out.asset!r} is not the route output {route.output!r}")
        current = Amount(wrapped_asset(amount_out.asset, route.chain_id), amount_out.raw)
        next_pools: List[Pool] = []
        for hop in range(len(route.pools) - 1, -1, -1):
            pool = route.pools[hop]
            try:
                current, after = pool.get_input_amount(current)
            except PoolMathError as exc:
                raise exc.at_hop(hop) from exc
            next_pools.append(after)
        next_pools.reverse()
        return cls(route, TradeType.EXACT_OUTPUT, Amount(route.input, current.raw), amount_out, tuple(next_pools))

    # ------------- derived values -------------

    @property
    def execution_price(self) -> Price:
        """Average price realised: output per input."""
        return Price.from_amounts(self.input_amount, self.output_amount)

    @property
    def next_mid_price(self) -> Price:
        """Route mid price after this trade has moved the reserves."""
        return Route(self.next_pools, self.route.input, self.route.output).mid_price

    @property
    def price_impact(self) -> Percent:
        """Shortfall of the realised output against the mid-price quote, as a fraction of that quote."""
        exact_quote = self.route.mid_price.raw.multiply(self.input_amount.raw)
        return Percent.of(exact_quote.subtract(self.output_amount.raw).divide(exact_quote))

    def minimum_amount_out(self, slippage: ExactFraction) -> Amount:
        """Least output accepted under `slippage` (exact output trades return the output itself)."""
        _check_slippage(slippage)
        if self.trade_type is TradeType.EXACT_OUTPUT:
            return self.output_amount
        raw = (ExactFraction(1) + slippage).invert().multiply(self.output_amount.raw).quotient()
        return Amount(self.output_amount.asset, raw)

    def maximum_amount_in(self, slippage: ExactFraction) -> Amount:
        """Most input paid under `slippage` (exact input trades return the input itself)."""
        _check_slippage(slippage)
        if self.trade_type is TradeType.EXACT_INPUT:
            return self.input_amount
        raw = (ExactFraction(1) + slippage).multiply(self.input_amount.raw).quotient()
        return Amount(self.input_amount.asset, raw)

    def worst_execution_price(self, slippage: ExactFraction) -> Price:
        return Price.from_amounts(self.maximum_amount_in(slippage), self.minimum_amount_out(slippage))

    def __repr__(self) -> str:
        return (
            f"Trade({self.trade_type.name}, {self.route!r}, "
            f"in={fmt_amount(self.input_amount)}, out={fmt_amount(self.output_amount)})"
        )


# ---------------------------------------------------------------------------
# Best-trade search
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BestTradeOptions:
    """Search bounds.

    max_num_results: how many trades to return at most.
    max_hops: longest route (in pools) to consider.
    """
    max_num_results: int = DEFAULT_MAX_NUM_RESULTS
    max_hops: int = DEFAULT_MAX_HOPS

    def __post_init__(self):
        if not isinstance(self.max_num_results, int) or self.max_num_results <= 0:
            raise ValueError("max_num_results must be a positive int")
        if not isinstance(self.max_hops, int) or self.max_hops <= 0:
            raise ValueError("max_hops must be a positive int")


class _Frame(NamedTuple):
    amount: Amount          # amount carried at this node
    used: Tuple[int, ...]   # candidate indices, in route order
    hops_left: int


def _exact_in_key(trade: Trade):
    return (-trade.output_amount.raw, trade.route.num_hops)


def _exact_out_key(trade: Trade):
    return (trade.input_amount.raw, trade.route.num_hops)


def _search_setup(
    pools: Iterable[Pool], start: Asset, end: Asset
) -> Tuple[List[Pool], Optional[Token], Optional[Token]]:
    pools = list(pools)
    if not pools:
        return [], None, None
    if isinstance(start, Token):
        chain_id = start.chain_id
    elif isinstance(end, Token):
        chain_id = end.chain_id
    else:
        chain_id = pools[0].chain_id
    token_start = wrapped_asset(start, chain_id)
    token_end = wrapped_asset(end, chain_id)
    if token_start.equals(token_end):
        raise IdenticalAssets(f"search endpoints are the same asset {token_start.address}")
    return [p for p in pools if p.chain_id == chain_id], token_start, token_end


def _usable(pool: Pool) -> bool:
    return not (pool.reserve0.is_zero() or pool.reserve1.is_zero())


def best_trade_exact_in(
    pools: Iterable[Pool],
    amount_in: Amount,
    asset_out: Asset,
    options: Optional[BestTradeOptions] = None,
) -> List[Trade]:
    """Best routes spending exactly `amount_in`, ranked by output (highest first)."""
    opts = options or BestTradeOptions()
    candidates, token_in, token_out = _search_setup(pools, amount_in.asset, asset_out)
    best: List[Trade] = []
    if not candidates:
        return best

    stack = [_Frame(Amount(token_in, amount_in.raw), (), opts.max_hops)]
    while stack:
        frame = stack.pop()
        children: List[_Frame] = []
        for idx, pool in enumerate(candidates):
            if idx in frame.used or not pool.involves(frame.amount.asset) or not _usable(pool):
                continue
            try:
                out, _ = pool.get_output_amount(frame.amount)
            except PoolMathError as exc:
                _dbg(f"exact_in: prune pool {idx} at depth {len(frame.used)}: {exc}")
                continue
            used = frame.used + (idx,)
            if out.asset.equals(token_out):
                route = Route([candidates[i] for i in used], amount_in.asset, asset_out)
                trade = Trade.exact_in(route, amount_in)
                sorted_insert(best, trade, max_size=opts.max_num_results, key=_exact_in_key)
                _dbg(f"exact_in: candidate {route!r} out={fmt_amount(trade.output_amount)}")
            elif frame.hops_left > 1:
                children.append(_Frame(out, used, frame.hops_left - 1))
        # reversed so the first pool's subtree is explored first
        stack.extend(reversed(children))
    return best


def best_trade_exact_out(
    pools: Iterable[Pool],
    asset_in: Asset,
    amount_out: Amount,
    options: Optional[BestTradeOptions] = None,
) -> List[Trade]:
    """Best routes delivering exactly `amount_out`, ranked by input (lowest first)."""
    opts = options or BestTradeOptions()
    candidates, token_in, token_out = _search_setup(pools, asset_in, amount_out.asset)
    best: List[Trade] = []
    if not candidates:
        return best

    stack = [_Frame(Amount(token_out, amount_out.raw), (), opts.max_hops)]
    while stack:
        frame = stack.pop()
        children: List[_Frame] = []
        for idx, pool in enumerate(candidates):
            if idx in frame.used or not pool.involves(frame.amount.asset) or not _usable(pool):
                continue
            try:
                needed, _ = pool.get_input_amount(frame.amount)
            except PoolMathError as exc:
                _dbg(f"exact_out: prune pool {idx} at depth {len(frame.used)}: {exc}")
                continue
            used = (idx,) + frame.used
            if needed.asset.equals(token_in):
                route = Route([candidates[i] for i in used], asset_in, amount_out.asset)
                trade = Trade.exact_out(route, amount_out)
                sorted_insert(best, trade, max_size=opts.max_num_results, key=_exact_out_key)
                _dbg(f"exact_out: candidate {route!r} in={fmt_amount(trade.input_amount)}")
            elif frame.hops_left > 1:
                children.append(_Frame(needed, used, frame.hops_left - 1))
        stack.extend(reversed(children))
    return best


__all__ = [
    "TradeType",
    "Trade",
    "BestTradeOptions",
    "best_trade_exact_in",
    "best_trade_exact_out",
]
