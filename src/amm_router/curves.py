"""
Swap curves (invariant strategies): pool math only.

A curve maps (reserves, fee, weights, amount) to the raw amount on the other
side. Pools hold a curve instance and call it; routes and trades only ever
talk to the pool, so a curve can be swapped without touching them.

Rounding direction is fixed for every curve:
- OUT given IN rounds down (never promise more than the pool pays).
- IN given OUT rounds up (never under-price the trader's input).

Fee (basis points) is deducted on the *input* side.
"""

from __future__ import annotations

from math import gcd

from .core.amounts import _ceil_div
from .core.constants import BPS_DENOMINATOR, DEFAULT_WEIGHT
from .core.fraction import ExactFraction


# --- Integer root helpers (exact, no floats) ---

def _iroot_floor(n: int, k: int) -> int:
    """Largest r with r**k <= n (Newton iteration from an overestimate)."""
    if n < 0 or k <= 0:
        raise ValueError("_iroot_floor expects n >= 0 and k > 0")
    if n < 2 or k == 1:
        return n
    x = 1 << -(-n.bit_length() // k)
    while True:
        y = ((k - 1) * x + n // x ** (k - 1)) // k
        if y >= x:
            return x
        x = y


def _iroot_ceil(n: int, k: int) -> int:
    """Smallest r with r**k >= n."""
    r = _iroot_floor(n, k)
    return r if r ** k == n else r + 1


class SwapCurve:
    """Interface for pool invariants.

    Callers (Pool) guarantee: both reserves > 0, amount > 0, and for
    `amount_in`, amount_out < reserve_out.
    """

    name = "abstract"

    def amount_out(self, reserve_in: int, reserve_out: int, amount_in: int, *,
                   fee_bps: int, weight_in: int, weight_out: int) -> int:
        raise NotImplementedError

    def amount_in(self, reserve_in: int, reserve_out: int, amount_out: int, *,
                  fee_bps: int, weight_in: int, weight_out: int) -> int:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ConstantProductCurve(SwapCurve):
    """x * y = k with input-side fee. Weights are ignored."""

    name = "constant-product"

    def amount_out(self, reserve_in, reserve_out, amount_in, *, fee_bps, weight_in=DEFAULT_WEIGHT,
                   weight_out=DEFAULT_WEIGHT):
        in_with_fee = amount_in * (BPS_DENOMINATOR - fee_bps)
        numerator = in_with_fee * reserve_out
        denominator = reserve_in * BPS_DENOMINATOR + in_with_fee
        return ExactFraction(numerator, denominator).quotient()

    def amount_in(self, reserve_in, reserve_out, amount_out, *, fee_bps, weight_in=DEFAULT_WEIGHT,
                  weight_out=DEFAULT_WEIGHT):
        numerator = reserve_in * amount_out * BPS_DENOMINATOR
        denominator = (reserve_out - amount_out) * (BPS_DENOMINATOR - fee_bps)
        return ExactFraction(numerator, denominator).quotient() + 1


class WeightedProductCurve(SwapCurve):
    """x^w_in * y^w_out = k with input-side fee.

    With p/q the reduced weight ratio w_in/w_out:
      remaining_out = rOut * (rIn / (rIn + dx_eff))^(p/q)      (ceil)
      new_in        = rIn  * (rOut / (rOut - dy))^(q/p)        (ceil)
    Both powers are evaluated exactly as integer roots of a rational, so the
    result is the tightest integer on the safe side of the real curve.
    """

    name = "weighted-product"

    @staticmethod
    def _exponents(weight_in: int, weight_out: int) -> tuple[int, int]:
        g = gcd(weight_in, weight_out)
        return weight_in // g, weight_out // g

    def amount_out(self, reserve_in, reserve_out, amount_in, *, fee_bps, weight_in, weight_out):
        p, q = self._exponents(weight_in, weight_out)
        in_with_fee = amount_in * (BPS_DENOMINATOR - fee_bps)
        base_num = reserve_in * BPS_DENOMINATOR
        base_den = base_num + in_with_fee
        # smallest r with r^q >= rOut^q * (base_num/base_den)^p
        remaining = _iroot_ceil(_ceil_div(reserve_out ** q * base_num ** p, base_den ** p), q)
        return max(reserve_out - remaining, 0)

    def amount_in(self, reserve_in, reserve_out, amount_out, *, fee_bps, weight_in, weight_out):
        p, q = self._exponents(weight_in, weight_out)
        num = reserve_in ** p * reserve_out ** q
        den = (reserve_out - amount_out) ** q
        new_in = _iroot_ceil(_ceil_div(num, den), p)
        delta = new_in - reserve_in
        return ExactFraction(delta * BPS_DENOMINATOR, BPS_DENOMINATOR - fee_bps).quotient() + 1


CONSTANT_PRODUCT = ConstantProductCurve()
WEIGHTED_PRODUCT = WeightedProductCurve()


def curve_for_weight(weight: int) -> SwapCurve:
    """Default curve for a pool whose first asset carries `weight` percent."""
    return CONSTANT_PRODUCT if weight == DEFAULT_WEIGHT else WEIGHTED_PRODUCT


__all__ = [
    "SwapCurve",
    "ConstantProductCurve",
    "WeightedProductCurve",
    "CONSTANT_PRODUCT",
    "WEIGHTED_PRODUCT",
    "curve_for_weight",
]
