"""
Price: quote-per-base ratio between two assets (integer/rational domain).

- `raw` is quote raw units per base raw unit (no decimal adjustment).
- `scalar` = 10^base.decimals / 10^quote.decimals converts raw to the
  human-facing `adjusted` value.
- Chained prices compose: (A->B) * (B->C) = (A->C). Routes use this to build
  their mid price hop by hop.
- No Decimal is used in price math; display helpers format at the end.
"""

from __future__ import annotations

from dataclasses import dataclass

from .amounts import Amount
from .assets import Asset, asset_equals
from .exc import AmountDomainError
from .fmt import Rounding
from .fraction import ExactFraction


@dataclass(frozen=True)
class Price:
    """Price of `base` expressed in `quote`."""

    base: Asset
    quote: Asset
    raw: ExactFraction

    @classmethod
    def from_amounts(cls, base_amount: Amount, quote_amount: Amount) -> "Price":
        """Price implied by trading `base_amount` for `quote_amount`."""
        return cls(base_amount.asset, quote_amount.asset, ExactFraction(quote_amount.raw, base_amount.raw))

    @classmethod
    def from_reserves(cls, base: Asset, quote: Asset, base_raw: int, quote_raw: int) -> "Price":
        return cls(base, quote, ExactFraction(quote_raw, base_raw))

    # ------------- views -------------

    @property
    def scalar(self) -> ExactFraction:
        return ExactFraction(10 ** self.base.decimals, 10 ** self.quote.decimals)

    @property
    def adjusted(self) -> ExactFraction:
        """Decimal-adjusted price (quote units per whole base unit)."""
        return self.raw.multiply(self.scalar)

    # ------------- algebra -------------

    def invert(self) -> "Price":
        return Price(self.quote, self.base, self.raw.invert())

    def multiply(self, other: "Price") -> "Price":
        """Compose self (base->quote) with other (quote->other.quote)."""
        if not asset_equals(self.quote, other.base):
            raise AmountDomainError(f"cannot chain prices: {self.quote!r} != {other.base!r}")
        return Price(self.base, other.quote, self.raw.multiply(other.raw))

    def quote_amount(self, amount: Amount) -> Amount:
        """Convert a base Amount into quote units at this price (truncating)."""
        if not asset_equals(amount.asset, self.base):
            raise AmountDomainError(f"amount asset {amount.asset!r} is not the price base {self.base!r}")
        return Amount(self.quote, self.raw.multiply(amount.raw).quotient())

    # ------------- comparisons / display -------------

    def __lt__(self, other: "Price") -> bool:
        return self.raw < other.raw

    def __gt__(self, other: "Price") -> bool:
        return self.raw > other.raw

    def to_significant(self, significant_digits: int = 6, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return self.adjusted.to_significant(significant_digits, rounding)

    def to_fixed(self, decimal_places: int = 4, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return self.adjusted.to_fixed(decimal_places, rounding)


__all__ = [
    "Price",
]
