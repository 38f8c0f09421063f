"""Demo: exact quoting and best-trade search over constant-product pools.

Scenarios covered:
S1a) Single pool, exact input (1 USDC into 1000 USDC / 1 WETH, 0.20% fee)
S1b) Single pool, exact output (drain request fails with InsufficientReserves)
S2a) Two-hop route A -> B -> C, no fee (legs computed one after the other)
S2b) Disconnected pools rejected as a route
S3a) Best trade exact-in on a triangle (direct vs two-hop)
S3b) Best trade exact-out on the same triangle
S4a) Weighted 80/20 pool vs even pool, same reserves

Optional live mode (--rpc-url): fetch one pool's reserves over JSON-RPC and
quote it.
"""
from __future__ import annotations

from typing import Callable, List, Optional
import argparse
import sys

import amm_router.pool as pool_mod
import amm_router.trade as trade_mod
import amm_router.fetcher as fetcher_mod
from amm_router import (
    Amount,
    BestTradeOptions,
    NATIVE,
    Percent,
    Pool,
    Route,
    Token,
    Trade,
    best_trade_exact_in,
    best_trade_exact_out,
)
from amm_router.core import ChainId, wrapped_native
from amm_router.core.exc import InvalidAddress, InvalidRoute, PoolFetchError, PoolMathError, RpcError
from amm_router.core.fmt import fmt_amount
from amm_router.fetcher import Fetcher, JsonRpcClient

E18 = 10 ** 18
SLIPPAGE = Percent(50, 10000)

# ---------- pretty printers ----------

def brief_pool(p: Pool) -> str:
    return f"{p.token0.symbol}/{p.token1.symbol}: {fmt_amount(p.reserve0)} / {fmt_amount(p.reserve1)} (w0={p.weight0}, fee={p.fee_bps}bps)"


def print_trade(title: str, t: Trade, *, compact: bool = False) -> None:
    print(f"\n=== {title} ===")
    print(f"- {t.route!r}  [{t.trade_type.name}]")
    print(f"- IN={fmt_amount(t.input_amount, places=9)}  OUT={fmt_amount(t.output_amount, places=9)}")
    if compact:
        return
    print(f"- mid price       = {t.route.mid_price.to_significant(6)}")
    print(f"- execution price = {t.execution_price.to_significant(6)}")
    print(f"- next mid price  = {t.next_mid_price.to_significant(6)}")
    print(f"- price impact    = {t.price_impact.to_fixed(2)}%")
    print(f"- min out @0.5%   = {fmt_amount(t.minimum_amount_out(SLIPPAGE), places=9)}")
    print(f"- max in  @0.5%   = {fmt_amount(t.maximum_amount_in(SLIPPAGE), places=9)}")


def print_ranked(title: str, trades: List[Trade]) -> None:
    print(f"\n=== {title} ===")
    if not trades:
        print("(no route)")
    for i, t in enumerate(trades, 1):
        print(f"  {i}. {t.route!r}: IN={fmt_amount(t.input_amount)} OUT={fmt_amount(t.output_amount)}")


def run_scenario(title: str, pools: List[Pool], body: Callable[[], None]) -> None:
    print("\n" + "=" * 80)
    print(f"Scenario: {title}")
    print("Market")
    for p in pools:
        print("- " + brief_pool(p))
    try:
        body()
    except (PoolMathError, InvalidRoute) as e:
        print(f"\nFailed: {type(e).__name__}: {e}")


# ---------- build common fixtures ----------

def mk_token(n: int, symbol: str, decimals: int = 18) -> Token:
    return Token(ChainId.MAINNET, f"0x{n:040x}", decimals, symbol, symbol)


def mk_pool(a: Token, ra: int, b: Token, rb: int, *, fee_bps: int = 20, weight_a: int = 50) -> Pool:
    return Pool(Amount(a, ra), Amount(b, rb), weight0=weight_a, fee_bps=fee_bps)


#
# -------- scenario registry helpers --------
class Scenario:
    def __init__(self, sid: str, fn: Callable[[], None]):
        self.sid = sid
        self.fn = fn

scenarios: List[Scenario] = []

def add(sid: str, fn: Callable[[], None]) -> None:
    scenarios.append(Scenario(sid, fn))


def live_quote(
    rpc_url: str,
    chain_id: int,
    factory: str,
    init_code_hash: str,
    token_a: str,
    token_b: str,
    weight_a: int,
    fee_bps: int,
    amount: str,
) -> int:
    try:
        fetcher = Fetcher(JsonRpcClient(rpc_url), factory=factory, init_code_hash=init_code_hash)
        a = fetcher.fetch_token_data(chain_id, token_a)
        b = fetcher.fetch_token_data(chain_id, token_b)
        pool = fetcher.fetch_pool_data(a, b, weight_a, fee_bps)
    except (PoolFetchError, RpcError, InvalidAddress, ValueError) as e:
        print(f"Fetch failed: {e}")
        return 1
    print("Market")
    print(f"- {pool.address}: " + brief_pool(pool))
    try:
        t = Trade.exact_in(Route([pool], a, b), Amount.from_decimal(a, amount, round_up=True))
    except PoolMathError as e:
        print(f"Quote failed: {e}")
        return 1
    print_trade("Live quote", t)
    return 0


# ---------- run scenarios ----------
if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="AMM routing demo")
    parser.add_argument("--only", type=str, default=None, help="Comma-separated scenario ids to run (e.g., S1a,S3a)")
    parser.add_argument("--skip", type=str, default=None, help="Comma-separated scenario ids to skip")
    parser.add_argument("--compact", action="store_true", help="Compact output: amounts only (no prices, no slippage)")
    parser.add_argument("--debug", action="store_true", help="Enable [POOL]/[TRADE]/[FETCHER] debug prints")
    parser.add_argument("--rpc-url", type=str, default=None, help="Live mode: JSON-RPC endpoint to fetch one pool from")
    parser.add_argument("--chain-id", type=int, default=int(ChainId.MAINNET), help="Live mode: chain id of the tokens")
    parser.add_argument("--factory", type=str, default=None, help="Live mode: pool factory address of the deployment")
    parser.add_argument("--init-code-hash", type=str, default=None, help="Live mode: pool init code hash of the deployment")
    parser.add_argument("--token-a", type=str, default=None, help="Live mode: input token address")
    parser.add_argument("--token-b", type=str, default=None, help="Live mode: output token address")
    parser.add_argument("--weight-a", type=int, default=50, help="Live mode: weight of token A (percent)")
    parser.add_argument("--fee-bps", type=int, default=20, help="Live mode: pool fee in basis points")
    parser.add_argument("--amount", type=str, default="1", help="Live mode: input amount in whole token A units")
    args = parser.parse_args(sys.argv[1:])

    if args.debug:
        pool_mod.DEBUG_POOL = True
        trade_mod.DEBUG_TRADE = True
        fetcher_mod.DEBUG_FETCHER = True

    if args.rpc_url:
        if not (args.token_a and args.token_b and args.factory and args.init_code_hash):
            parser.error("--rpc-url needs --token-a, --token-b, --factory and --init-code-hash")
        sys.exit(live_quote(
            args.rpc_url, args.chain_id, args.factory, args.init_code_hash,
            args.token_a, args.token_b, args.weight_a, args.fee_bps, args.amount,
        ))

    compact = bool(args.compact)
    weth = wrapped_native(ChainId.MAINNET)
    usdc = Token(ChainId.MAINNET, "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48", 6, "USDC", "USD Coin")
    A, B, C, D = mk_token(1, "AAA"), mk_token(2, "BBB"), mk_token(3, "CCC"), mk_token(4, "DDD")

    # --------------- Register scenarios ---------------
    # S1a
    pool_S1 = mk_pool(usdc, 1000 * 10 ** 6, weth, E18)
    add("S1a", lambda: run_scenario(
        "S1a) Single pool, exact input (1 USDC)",
        [pool_S1],
        lambda: print_trade("Quote", Trade.exact_in(Route([pool_S1], usdc, weth), Amount(usdc, 10 ** 6)), compact=compact),
    ))

    # S1b
    add("S1b", lambda: run_scenario(
        "S1b) Single pool, exact output of the whole WETH reserve",
        [pool_S1],
        lambda: print_trade("Quote", Trade.exact_out(Route([pool_S1], usdc, NATIVE), Amount(NATIVE, E18)), compact=compact),
    ))

    # S2a
    pools_S2 = [mk_pool(A, 1000 * E18, B, 1000 * E18, fee_bps=0), mk_pool(B, 1000 * E18, C, 1000 * E18, fee_bps=0)]
    add("S2a", lambda: run_scenario(
        "S2a) Two-hop route, no fee (100 AAA)",
        pools_S2,
        lambda: print_trade("Quote", Trade.exact_in(Route(pools_S2, A), Amount(A, 100 * E18)), compact=compact),
    ))

    # S2b
    pools_S2b = [mk_pool(A, E18, B, E18), mk_pool(C, E18, D, E18)]
    add("S2b", lambda: run_scenario(
        "S2b) Disconnected pools [(A,B), (C,D)]",
        pools_S2b,
        lambda: Route(pools_S2b, A),
    ))

    # S3a / S3b
    pools_S3 = [
        mk_pool(A, 1000 * E18, B, 1000 * E18),
        mk_pool(B, 1000 * E18, C, 1000 * E18),
        mk_pool(A, 1000 * E18, C, 1000 * E18),
        mk_pool(C, 1000 * E18, D, 800 * E18),
    ]
    add("S3a", lambda: run_scenario(
        "S3a) Best trade exact-in, 10 AAA -> CCC",
        pools_S3,
        lambda: print_ranked("Ranked (by output)", best_trade_exact_in(pools_S3, Amount(A, 10 * E18), C)),
    ))
    add("S3b", lambda: run_scenario(
        "S3b) Best trade exact-out, AAA -> 10 DDD (max 2 results)",
        pools_S3,
        lambda: print_ranked(
            "Ranked (by input)",
            best_trade_exact_out(pools_S3, A, Amount(D, 10 * E18), BestTradeOptions(max_num_results=2)),
        ),
    ))

    # S4a
    pool_even = mk_pool(A, 1000 * E18, B, 1000 * E18)
    pool_80 = mk_pool(A, 1000 * E18, B, 1000 * E18, weight_a=80)
    def _s4a() -> None:
        for p in (pool_even, pool_80):
            print_trade(f"w0={p.weight0}", Trade.exact_in(Route([p], A), Amount(A, 50 * E18)), compact=compact)
    add("S4a", lambda: run_scenario("S4a) Weighted 80/20 vs even pool (50 AAA)", [pool_even, pool_80], _s4a))

    only: Optional[set] = set(s.strip() for s in args.only.split(",")) if args.only else None
    skip: set = set(s.strip() for s in args.skip.split(",")) if args.skip else set()
    for sc in scenarios:
        if only is not None and sc.sid not in only:
            continue
        if sc.sid in skip:
            continue
        sc.fn()
