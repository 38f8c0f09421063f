"""
Formatting helpers (non-core arithmetic).

Core arithmetic uses Python integers and ExactFraction. Decimal here is only
for display and logs; nothing produced in this module is fed back into pool
or price math.
"""

from __future__ import annotations

import decimal
from decimal import Decimal, localcontext
from enum import Enum

from .exc import AmountDomainError

class Rounding(Enum):
    """Display rounding modes (mirror the decimal module's modes of the same name)."""

    ROUND_DOWN = decimal.ROUND_DOWN
    ROUND_HALF_UP = decimal.ROUND_HALF_UP
    ROUND_UP = decimal.ROUND_UP

# ---------------------------------------------------------------------------
# Ratio formatting (exact integer inputs)
# ---------------------------------------------------------------------------

def ratio_to_fixed(
    numerator: int,
    denominator: int,
    decimal_places: int,
    rounding: Rounding = Rounding.ROUND_HALF_UP,
) -> str:
    """Render numerator/denominator with exactly `decimal_places` fractional digits.

    Rounding happens once, in the integer domain, so there is no double
    rounding through an intermediate Decimal quotient.
    """
    if decimal_places < 0:
        raise AmountDomainError(f"decimal_places must be >= 0, got {decimal_places}")
    if denominator <= 0:
        raise AmountDomainError("ratio_to_fixed expects a positive denominator")
    sign = -1 if numerator < 0 else 1
    scaled, rem = divmod(abs(numerator) * 10 ** decimal_places, denominator)
    if rem:
        if rounding is Rounding.ROUND_UP:
            scaled += 1
        elif rounding is Rounding.ROUND_HALF_UP and 2 * rem >= denominator:
            scaled += 1
    d = Decimal(sign * scaled).scaleb(-decimal_places)
    return f"{d:.{decimal_places}f}"

def ratio_to_significant(
    numerator: int,
    denominator: int,
    significant_digits: int,
    rounding: Rounding = Rounding.ROUND_HALF_UP,
) -> str:
    """Render numerator/denominator with at most `significant_digits` digits.

    Trailing zeros are dropped, e.g. 1000/1 at 6 digits -> '1000'.
    """
    if significant_digits <= 0:
        raise AmountDomainError(f"significant_digits must be > 0, got {significant_digits}")
    if denominator <= 0:
        raise AmountDomainError("ratio_to_significant expects a positive denominator")
    if numerator == 0:
        return "0"
    with localcontext() as ctx:
        ctx.prec = significant_digits
        ctx.rounding = rounding.value
        q = (Decimal(numerator) / Decimal(denominator)).normalize()
    return format(q, "f")


# ---------------------------------------------------------------------------
# Amount display helpers
# ---------------------------------------------------------------------------

def amount_to_decimal(a) -> Decimal:
    """Convert an Amount into a Decimal for logging/printing only (exact)."""
    if a is None:
        raise AmountDomainError("amount_to_decimal(): received None")
    raw = getattr(a, "raw", None)
    asset = getattr(a, "asset", None)
    if not isinstance(raw, int) or asset is None:
        raise AmountDomainError("amount_to_decimal(): unsupported amount type")
    if raw < 0:
        raise AmountDomainError("amount_to_decimal(): raw must be >= 0")
    return Decimal(raw).scaleb(-asset.decimals)

def fmt_amount(a, places: int = 6) -> str:
    """Short human-readable rendering, e.g. '0.000998 WETH'."""
    text = ratio_to_fixed(a.raw, 10 ** a.asset.decimals, places, Rounding.ROUND_DOWN)
    symbol = a.asset.symbol or "?"
    return f"{text} {symbol}"



__all__ = [
    "Rounding",
    "ratio_to_fixed",
    "ratio_to_significant",
    "amount_to_decimal",
    "fmt_amount",
]
