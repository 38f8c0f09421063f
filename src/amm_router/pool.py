"""
Pool: two token reserves, a swap fee and a weighting, with exact swap math.

Pools are immutable values. A swap never mutates the pool; it returns the
computed amount together with a new Pool carrying the post-swap reserves.
Re-syncing from chain data replaces both reserves wholesale (`with_reserves`).

Orientation: the reserve whose token sorts first (lowercase address) is
always stored as `reserve0`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Optional

from eth_utils import is_hex
from web3 import Web3

from .core import (
    Amount,
    Price,
    Token,
    sort_tokens,
    asset_equals,
    validate_and_parse_address,
    BPS_DENOMINATOR,
    DEFAULT_FEE_BPS,
    DEFAULT_WEIGHT,
    WEIGHT_TOTAL,
    MAX_UINT256,
)
from .core.exc import (
    AmountDomainError,
    ChainMismatch,
    IdenticalAssets,
    InsufficientReserves,
    InsufficientInputAmount,
    InsufficientOutputAmount,
)
from .core.fmt import fmt_amount
from .curves import SwapCurve, curve_for_weight

# --- Debug utilities (toggleable) ---
DEBUG_POOL = False

def _dbg(msg: str) -> None:
    if DEBUG_POOL:
        print(f"[POOL] {msg}")


def _check_params(weight: int, fee_bps: int) -> None:
    if not isinstance(weight, int) or not (0 < weight < WEIGHT_TOTAL):
        raise ValueError(f"weight must satisfy 0 < weight < {WEIGHT_TOTAL}, got {weight}")
    if not isinstance(fee_bps, int) or not (0 <= fee_bps < BPS_DENOMINATOR):
        raise ValueError(f"fee_bps must satisfy 0 ≤ fee_bps < {BPS_DENOMINATOR}, got {fee_bps}")


def _check_init_code_hash(init_code_hash: str) -> bytes:
    if not is_hex(init_code_hash) or len(init_code_hash.removeprefix("0x")) != 64:
        raise ValueError(f"init_code_hash must be 32 bytes of hex, got {init_code_hash!r}")
    return Web3.to_bytes(hexstr=init_code_hash)


def compute_pool_address(
    token_a: Token,
    token_b: Token,
    weight_a: int = DEFAULT_WEIGHT,
    fee_bps: int = DEFAULT_FEE_BPS,
    *,
    factory: str,
    init_code_hash: str,
) -> str:
    """Deterministic CREATE2 address of the (token_a, token_b, weight_a, fee_bps) pool.

    Argument order does not matter: the salt packs the sorted tokens with the
    weight of the token that sorts first. Any change in weight or fee yields a
    different address. `factory` and `init_code_hash` identify the deployment.
    """
    _check_params(weight_a, fee_bps)
    code_hash = _check_init_code_hash(init_code_hash)
    token0, token1 = sort_tokens(token_a, token_b)
    weight0 = weight_a if token0.equals(token_a) else WEIGHT_TOTAL - weight_a
    salt = Web3.solidity_keccak(
        ["address", "address", "uint32", "uint32"],
        [token0.address, token1.address, weight0, fee_bps],
    )
    digest = Web3.keccak(
        b"\xff"
        + Web3.to_bytes(hexstr=validate_and_parse_address(factory))
        + bytes(salt)
        + code_hash
    )
    return Web3.to_checksum_address("0x" + bytes(digest)[12:].hex())


@dataclass(frozen=True)
class Pool:
    """Two-asset pool (reserves sorted by token order).

    Arguments may be given in either token order; `weight0` is the weight of
    the first argument's token and follows it if the pair gets re-ordered.
    `curve` defaults to `curve_for_weight(weight0)`.

    `factory` / `init_code_hash` name the deployment the pool lives in. They
    are needed for `address` only and take no part in equality.
    """

    reserve0: Amount
    reserve1: Amount
    weight0: int = DEFAULT_WEIGHT
    fee_bps: int = DEFAULT_FEE_BPS
    curve: Optional[SwapCurve] = field(default=None, compare=False)
    factory: Optional[str] = field(default=None, compare=False, repr=False)
    init_code_hash: Optional[str] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        a, b = self.reserve0.asset, self.reserve1.asset
        if not isinstance(a, Token) or not isinstance(b, Token):
            raise AmountDomainError("pool reserves must be token amounts (wrap native first)")
        if a.chain_id != b.chain_id:
            raise ChainMismatch(f"pool tokens on different chains: {a.chain_id} vs {b.chain_id}")
        if a.equals(b):
            raise IdenticalAssets(f"pool needs two distinct tokens, got {a.address} twice")
        _check_params(self.weight0, self.fee_bps)
        if not a.sorts_before(b):
            r0, r1 = self.reserve0, self.reserve1
            object.__setattr__(self, "reserve0", r1)
            object.__setattr__(self, "reserve1", r0)
            object.__setattr__(self, "weight0", WEIGHT_TOTAL - self.weight0)
        if self.curve is None:
            object.__setattr__(self, "curve", curve_for_weight(self.weight0))

    # ------------- identity -------------

    @property
    def token0(self) -> Token:
        return self.reserve0.asset

    @property
    def token1(self) -> Token:
        return self.reserve1.asset

    @property
    def chain_id(self) -> int:
        return self.token0.chain_id

    @property
    def weight1(self) -> int:
        return WEIGHT_TOTAL - self.weight0

    @cached_property
    def address(self) -> Optional[str]:
        """CREATE2 address in the pool's deployment; None when no deployment was given."""
        if self.factory is None or self.init_code_hash is None:
            return None
        return compute_pool_address(
            self.token0, self.token1, self.weight0, self.fee_bps,
            factory=self.factory, init_code_hash=self.init_code_hash,
        )

    # ------------- per-asset views -------------

    def involves(self, asset) -> bool:
        return asset_equals(asset, self.token0) or asset_equals(asset, self.token1)

    def _side(self, token) -> int:
        if asset_equals(token, self.token0):
            return 0
        if asset_equals(token, self.token1):
            return 1
        raise AmountDomainError(f"{token!r} is not in pool {self.token0.symbol}/{self.token1.symbol}")

    def reserve_of(self, token: Token) -> Amount:
        return self.reserve0 if self._side(token) == 0 else self.reserve1

    def weight_of(self, token: Token) -> int:
        return self.weight0 if self._side(token) == 0 else self.weight1

    def other_asset(self, token: Token) -> Token:
        return self.token1 if self._side(token) == 0 else self.token0

    # ------------- prices (reserve ratios, no fee) -------------

    @property
    def token0_price(self) -> Price:
        """Price of token0 in token1."""
        return Price.from_reserves(self.token0, self.token1, self.reserve0.raw, self.reserve1.raw)

    @property
    def token1_price(self) -> Price:
        """Price of token1 in token0."""
        return Price.from_reserves(self.token1, self.token0, self.reserve1.raw, self.reserve0.raw)

    def price_of(self, token: Token) -> Price:
        """Mid price of `token` in the other pool asset."""
        return self.token0_price if self._side(token) == 0 else self.token1_price

    # ------------- state -------------

    def with_reserves(self, raw0: int, raw1: int) -> "Pool":
        """Copy with both reserves replaced (sorted order); parameters and deployment unchanged."""
        return Pool(
            Amount(self.token0, raw0),
            Amount(self.token1, raw1),
            weight0=self.weight0,
            fee_bps=self.fee_bps,
            curve=self.curve,
            factory=self.factory,
            init_code_hash=self.init_code_hash,
        )

    def _after_swap(self, token_in: Token, amount_in: int, amount_out: int) -> "Pool":
        if self._side(token_in) == 0:
            raw0, raw1 = self.reserve0.raw + amount_in, self.reserve1.raw - amount_out
        else:
            raw0, raw1 = self.reserve0.raw - amount_out, self.reserve1.raw + amount_in
        if raw0 > MAX_UINT256 or raw1 > MAX_UINT256:
            raise InsufficientReserves("post-swap reserve would exceed uint256", pool=self)
        return self.with_reserves(raw0, raw1)

    # ------------- swap math -------------

    def get_output_amount(self, input_amount: Amount) -> tuple[Amount, "Pool"]:
        """Exact OUT for a given IN; returns (output Amount, post-swap Pool)."""
        token_in = input_amount.asset
        reserve_in = self.reserve_of(token_in)
        token_out = self.other_asset(token_in)
        reserve_out = self.reserve_of(token_out)
        if reserve_in.raw == 0 or reserve_out.raw == 0:
            raise InsufficientReserves("pool has an empty reserve", pool=self)
        if input_amount.raw <= 0:
            raise InsufficientInputAmount("input amount must be > 0", pool=self)

        out_raw = self.curve.amount_out(
            reserve_in.raw,
            reserve_out.raw,
            input_amount.raw,
            fee_bps=self.fee_bps,
            weight_in=self.weight_of(token_in),
            weight_out=self.weight_of(token_out),
        )
        if out_raw <= 0:
            raise InsufficientInputAmount("input too small to produce any output", pool=self)
        output = Amount(token_out, out_raw)
        _dbg(f"out_given_in: in={fmt_amount(input_amount)} -> out={fmt_amount(output)} (fee={self.fee_bps}bps)")
        return output, self._after_swap(token_in, input_amount.raw, out_raw)

    def get_input_amount(self, output_amount: Amount) -> tuple[Amount, "Pool"]:
        """Exact IN required for a given OUT; returns (input Amount, post-swap Pool)."""
        token_out = output_amount.asset
        reserve_out = self.reserve_of(token_out)
        token_in = self.other_asset(token_out)
        reserve_in = self.reserve_of(token_in)
        if reserve_in.raw == 0 or reserve_out.raw == 0 or output_amount.raw >= reserve_out.raw:
            raise InsufficientReserves("requested output would drain the reserve", pool=self)
        if output_amount.raw <= 0:
            raise InsufficientOutputAmount("output amount must be > 0", pool=self)

        in_raw = self.curve.amount_in(
            reserve_in.raw,
            reserve_out.raw,
            output_amount.raw,
            fee_bps=self.fee_bps,
            weight_in=self.weight_of(token_in),
            weight_out=self.weight_of(token_out),
        )
        if in_raw > MAX_UINT256:
            raise InsufficientReserves("required input exceeds uint256", pool=self)
        input_amount = Amount(token_in, in_raw)
        _dbg(f"in_given_out: out={fmt_amount(output_amount)} -> in={fmt_amount(input_amount)} (fee={self.fee_bps}bps)")
        return input_amount, self._after_swap(token_in, in_raw, output_amount.raw)

    def __repr__(self) -> str:
        return (
            f"Pool({fmt_amount(self.reserve0)}, {fmt_amount(self.reserve1)}, "
            f"weight0={self.weight0}, fee_bps={self.fee_bps})"
        )


__all__ = [
    "Pool",
    "compute_pool_address",
]
