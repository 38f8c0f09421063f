"""
ExactFraction: arbitrary-precision rational on Python integers.

- Fractions are *not* normalised: callers may hold unreduced pairs, so
  equality and ordering always cross-multiply.
- The denominator is kept strictly positive; a negative denominator is folded
  into the numerator sign at construction.
- `quotient()` truncates toward zero (floor division is only identical for
  non-negative values).
- Decimal is used only by the display helpers (`to_fixed`, `to_significant`).
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from math import gcd
from typing import Union

from .exc import DivisionByZero
from .fmt import Rounding, ratio_to_fixed, ratio_to_significant

FractionLike = Union["ExactFraction", int]

def _truncating_div(n: int, d: int) -> int:
    q = abs(n) // abs(d)
    return q if (n >= 0) == (d > 0) else -q

@dataclass(frozen=True, eq=False)
class ExactFraction:
    """numerator / denominator with exact integer arithmetic."""

    numerator: int
    denominator: int = 1

    def __post_init__(self):
        if not isinstance(self.numerator, int) or not isinstance(self.denominator, int):
            raise TypeError("ExactFraction expects integer numerator and denominator")
        if self.denominator == 0:
            raise DivisionByZero("fraction denominator is zero")
        if self.denominator < 0:
            object.__setattr__(self, "numerator", -self.numerator)
            object.__setattr__(self, "denominator", -self.denominator)

    # ------------- coercion -------------

    @staticmethod
    def _coerce(other: FractionLike) -> "ExactFraction":
        if isinstance(other, ExactFraction):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return ExactFraction(other)
        raise TypeError(f"unsupported operand for ExactFraction: {type(other).__name__}")

    # ------------- integer views -------------

    def quotient(self) -> int:
        """Integer part, truncated toward zero."""
        return _truncating_div(self.numerator, self.denominator)

    def remainder(self) -> "ExactFraction":
        """What `quotient()` dropped, over the same denominator."""
        return ExactFraction(self.numerator - self.quotient() * self.denominator, self.denominator)

    def invert(self) -> "ExactFraction":
        if self.numerator == 0:
            raise DivisionByZero("cannot invert a zero fraction")
        return ExactFraction(self.denominator, self.numerator)

    def reduced(self) -> "ExactFraction":
        g = gcd(self.numerator, self.denominator)
        return ExactFraction(self.numerator // g, self.denominator // g) if g > 1 else self

    def is_zero(self) -> bool:
        return self.numerator == 0

    # ------------- arithmetic (unreduced results) -------------

    def add(self, other: FractionLike) -> "ExactFraction":
        o = self._coerce(other)
        if self.denominator == o.denominator:
            return ExactFraction(self.numerator + o.numerator, self.denominator)
        return ExactFraction(
            self.numerator * o.denominator + o.numerator * self.denominator,
            self.denominator * o.denominator,
        )

    def subtract(self, other: FractionLike) -> "ExactFraction":
        o = self._coerce(other)
        if self.denominator == o.denominator:
            return ExactFraction(self.numerator - o.numerator, self.denominator)
        return ExactFraction(
            self.numerator * o.denominator - o.numerator * self.denominator,
            self.denominator * o.denominator,
        )

    def multiply(self, other: FractionLike) -> "ExactFraction":
        o = self._coerce(other)
        return ExactFraction(self.numerator * o.numerator, self.denominator * o.denominator)

    def divide(self, other: FractionLike) -> "ExactFraction":
        o = self._coerce(other)
        if o.numerator == 0:
            raise DivisionByZero("division by a zero fraction")
        return ExactFraction(self.numerator * o.denominator, self.denominator * o.numerator)

    # ------------- comparisons (cross-multiplication) -------------

    def _cmp(self, other: FractionLike) -> int:
        o = self._coerce(other)
        left = self.numerator * o.denominator
        right = o.numerator * self.denominator
        return (left > right) - (left < right)

    def less_than(self, other: FractionLike) -> bool:
        return self._cmp(other) < 0

    def equal_to(self, other: FractionLike) -> bool:
        return self._cmp(other) == 0

    def greater_than(self, other: FractionLike) -> bool:
        return self._cmp(other) > 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (ExactFraction, int)) or isinstance(other, bool):
            return NotImplemented
        return self._cmp(other) == 0

    def __hash__(self) -> int:
        r = self.reduced()
        if r.denominator == 1:
            return hash(r.numerator)
        return hash((r.numerator, r.denominator))

    def __lt__(self, other: FractionLike) -> bool:
        return self._cmp(other) < 0

    def __le__(self, other: FractionLike) -> bool:
        return self._cmp(other) <= 0

    def __gt__(self, other: FractionLike) -> bool:
        return self._cmp(other) > 0

    def __ge__(self, other: FractionLike) -> bool:
        return self._cmp(other) >= 0

    # Operators delegate to the named methods
    def __add__(self, other: FractionLike) -> "ExactFraction":
        return self.add(other)

    def __radd__(self, other: int) -> "ExactFraction":
        return self._coerce(other).add(self)

    def __sub__(self, other: FractionLike) -> "ExactFraction":
        return self.subtract(other)

    def __rsub__(self, other: int) -> "ExactFraction":
        return self._coerce(other).subtract(self)

    def __mul__(self, other: FractionLike) -> "ExactFraction":
        return self.multiply(other)

    def __rmul__(self, other: int) -> "ExactFraction":
        return self._coerce(other).multiply(self)

    def __truediv__(self, other: FractionLike) -> "ExactFraction":
        return self.divide(other)

    def __rtruediv__(self, other: int) -> "ExactFraction":
        return self._coerce(other).divide(self)

    def __neg__(self) -> "ExactFraction":
        return ExactFraction(-self.numerator, self.denominator)

    # ------------- display / bridges -------------

    def to_fixed(self, decimal_places: int, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return ratio_to_fixed(self.numerator, self.denominator, decimal_places, rounding)

    def to_significant(self, significant_digits: int, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return ratio_to_significant(self.numerator, self.denominator, significant_digits, rounding)

    def as_fraction(self) -> Fraction:
        """Exact stdlib Fraction (reduced), for tests and analysis."""
        return Fraction(self.numerator, self.denominator)

    def __repr__(self) -> str:
        return f"ExactFraction({self.numerator}, {self.denominator})"

class Percent(ExactFraction):
    """A fraction rendered as a percentage: display helpers scale by 100."""

    @classmethod
    def of(cls, f: ExactFraction) -> "Percent":
        return cls(f.numerator, f.denominator)

    def to_fixed(self, decimal_places: int = 2, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return ratio_to_fixed(self.numerator * 100, self.denominator, decimal_places, rounding)

    def to_significant(self, significant_digits: int = 5, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return ratio_to_significant(self.numerator * 100, self.denominator, significant_digits, rounding)

    def __repr__(self) -> str:
        return f"Percent({self.numerator}, {self.denominator})"


__all__ = [
    "ExactFraction",
    "Percent",
    "Rounding",
]
