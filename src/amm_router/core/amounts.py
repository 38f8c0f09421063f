"""
Amount primitive: an integer quantity of one asset in its smallest unit.

- Non-negative domain: raw is an int in [0, MAX_UINT256]; negatives are rejected at input.
- Arithmetic only between amounts of the *same* asset.
- Rounding semantics at the Decimal bridge: IN rounds up, OUT rounds down.
- `value` is the decimal-adjusted ExactFraction raw / 10^decimals.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_DOWN, ROUND_UP

from .assets import Asset, asset_equals
from .constants import MAX_UINT256
from .exc import AmountDomainError, InvariantViolation
from .fmt import Rounding, ratio_to_fixed, ratio_to_significant
from .fraction import ExactFraction


# ----------------------------
# Integer rounding helpers (centralised)
# ----------------------------

def _ceil_div(a: int, b: int) -> int:
    if a < 0 or b <= 0:
        raise AmountDomainError("_ceil_div expects a>=0 and b>0")
    return 0 if a == 0 else -(-a // b)


def _floor_div(a: int, b: int) -> int:
    if a < 0 or b <= 0:
        raise AmountDomainError("_floor_div expects a>=0 and b>0")
    return a // b


@dataclass(frozen=True)
class Amount:
    """Raw integer amount of `asset` (non-negative domain)."""

    asset: Asset
    raw: int

    def __post_init__(self):
        if not isinstance(self.raw, int) or isinstance(self.raw, bool):
            raise AmountDomainError(f"raw amount must be int, got {type(self.raw).__name__}")
        if self.raw < 0:
            raise AmountDomainError("Amount must be >= 0")
        if self.raw > MAX_UINT256:
            raise AmountDomainError("Amount exceeds uint256")

    # ------------- constructors -------------

    @classmethod
    def zero(cls, asset: Asset) -> "Amount":
        return cls(asset, 0)

    @classmethod
    def from_decimal(cls, asset: Asset, x, *, round_up: bool = False) -> "Amount":
        """Bridge a human-readable value (Decimal/str/int) to raw units.

        OUT-path callers keep the default floor (won't promise more); IN-path
        callers pass round_up=True (won't pay less).
        """
        d = x if isinstance(x, Decimal) else Decimal(str(x))
        if d.is_nan() or d.is_infinite():
            raise AmountDomainError("from_decimal: invalid Decimal")
        if d < 0:
            raise AmountDomainError("from_decimal: negative not allowed")
        q = d.scaleb(asset.decimals).to_integral_value(rounding=ROUND_UP if round_up else ROUND_DOWN)
        return cls(asset, int(q))

    # ------------- predicates / views -------------

    def is_zero(self) -> bool:
        return self.raw == 0

    @property
    def value(self) -> ExactFraction:
        """Decimal-adjusted amount as an exact fraction."""
        return ExactFraction(self.raw, 10 ** self.asset.decimals)

    def _require_same_asset(self, other: "Amount") -> None:
        if not isinstance(other, Amount):
            raise AmountDomainError("Amount arithmetic requires Amount operands")
        if not asset_equals(self.asset, other.asset):
            raise AmountDomainError(f"asset mismatch: {self.asset!r} vs {other.asset!r}")

    # ------------- comparisons (same asset only) -------------

    def __lt__(self, other: "Amount") -> bool:
        self._require_same_asset(other)
        return self.raw < other.raw

    def __le__(self, other: "Amount") -> bool:
        self._require_same_asset(other)
        return self.raw <= other.raw

    def __gt__(self, other: "Amount") -> bool:
        self._require_same_asset(other)
        return self.raw > other.raw

    def __ge__(self, other: "Amount") -> bool:
        self._require_same_asset(other)
        return self.raw >= other.raw

    # ------------- arithmetic (integer domain) -------------

    def __add__(self, other: "Amount") -> "Amount":
        self._require_same_asset(other)
        return Amount(self.asset, self.raw + other.raw)

    def __sub__(self, other: "Amount") -> "Amount":
        self._require_same_asset(other)
        if self.raw < other.raw:
            raise InvariantViolation("Amount subtraction underflow")
        return Amount(self.asset, self.raw - other.raw)

    add = __add__
    subtract = __sub__

    def mul_by_scalar(self, k: int) -> "Amount":
        if k < 0:
            raise AmountDomainError(f"negative scalar not allowed: k={k}")
        return Amount(self.asset, self.raw * k)

    def div_by_scalar_down(self, k: int) -> "Amount":
        if k == 0:
            raise ZeroDivisionError("division by zero scalar")
        if k < 0:
            raise AmountDomainError(f"negative scalar not allowed: k={k}")
        return Amount(self.asset, _floor_div(self.raw, k))

    def div_by_scalar_up(self, k: int) -> "Amount":
        if k == 0:
            raise ZeroDivisionError("division by zero scalar")
        if k < 0:
            raise AmountDomainError(f"negative scalar not allowed: k={k}")
        return Amount(self.asset, _ceil_div(self.raw, k))

    # ------------- display -------------

    def to_fixed(self, decimal_places: int | None = None, rounding: Rounding = Rounding.ROUND_DOWN) -> str:
        places = self.asset.decimals if decimal_places is None else decimal_places
        if places > self.asset.decimals:
            raise AmountDomainError(f"{places} places exceeds asset precision {self.asset.decimals}")
        return ratio_to_fixed(self.raw, 10 ** self.asset.decimals, places, rounding)

    def to_significant(self, significant_digits: int = 6, rounding: Rounding = Rounding.ROUND_DOWN) -> str:
        return ratio_to_significant(self.raw, 10 ** self.asset.decimals, significant_digits, rounding)

    def to_exact(self) -> str:
        """Full-precision decimal string (no rounding)."""
        return self.to_fixed(self.asset.decimals)


__all__ = [
    "Amount",
]
