from __future__ import annotations
from typing import Callable

import pytest

# Import project primitives
from amm_router import Amount, Pool, Token
from amm_router.core import ChainId, wrapped_native


# -----------------------------
# Test helpers (pure functions)
# -----------------------------

def _token(n: int, symbol: str, decimals: int = 18, chain_id: int = ChainId.MAINNET) -> Token:
    """Token at the synthetic address 0x00..0n (lowercase, so no checksum needed)."""
    return Token(int(chain_id), f"0x{n:040x}", decimals, symbol, symbol)


# -----------------------------
# Pytest fixtures
# -----------------------------

@pytest.fixture()
def tok_a() -> Token:
    return _token(1, "AAA")


@pytest.fixture()
def tok_b() -> Token:
    return _token(2, "BBB")


@pytest.fixture()
def tok_c() -> Token:
    return _token(3, "CCC")


@pytest.fixture()
def tok_d() -> Token:
    return _token(4, "DDD")


@pytest.fixture()
def tok_bsc() -> Token:
    return _token(5, "BSC", chain_id=ChainId.BSC)


@pytest.fixture()
def weth() -> Token:
    return wrapped_native(ChainId.MAINNET)


@pytest.fixture()
def usdc() -> Token:
    return Token(int(ChainId.MAINNET), "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48", 6, "USDC", "USD Coin")


@pytest.fixture()
def make_pool() -> Callable[..., Pool]:
    """Pool factory taking raw reserves in argument order; fee defaults to 0 for hand-checkable math."""

    def _make(token_a: Token, raw_a: int, token_b: Token, raw_b: int, *, fee_bps: int = 0, weight_a: int = 50) -> Pool:
        return Pool(Amount(token_a, raw_a), Amount(token_b, raw_b), weight0=weight_a, fee_bps=fee_bps)

    return _make


@pytest.fixture()
def deployment() -> dict:
    """Synthetic pool deployment (factory + init code hash) as keyword arguments."""
    return {"factory": "0x" + "11" * 20, "init_code_hash": "0x" + "ab" * 32}
