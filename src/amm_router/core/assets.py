"""
Assets: a tagged variant `Asset = Native | Token`.

- Native: the chain's base currency. No address; equality is identity only,
  so the module-level `NATIVE` singleton is the one to share.
- Token: an ERC20-style asset identified by (chain_id, address). Addresses are
  checksummed at construction and compared case-insensitively.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .address import validate_and_parse_address
from .constants import MAX_DECIMALS, NAMED_TOKENS, WRAPPED_NATIVE
from .exc import AmountDomainError, ChainMismatch, IdenticalAssets


def _check_decimals(decimals: int) -> None:
    if not isinstance(decimals, int) or isinstance(decimals, bool):
        raise AmountDomainError(f"decimals must be an int, got {type(decimals).__name__}")
    if decimals < 0 or decimals > MAX_DECIMALS:
        raise AmountDomainError(f"decimals out of range 0..{MAX_DECIMALS}: {decimals}")


@dataclass(frozen=True, eq=False)
class Native:
    """Chain base currency (identity equality)."""

    decimals: int = 18
    symbol: Optional[str] = "ETH"
    name: Optional[str] = "Ether"

    def __post_init__(self):
        _check_decimals(self.decimals)

    def __repr__(self) -> str:
        return f"Native({self.symbol})"


@dataclass(frozen=True, eq=False)
class Token:
    """Token on a given chain; equal iff same chain and same address."""

    chain_id: int
    address: str
    decimals: int
    symbol: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self):
        _check_decimals(self.decimals)
        object.__setattr__(self, "address", validate_and_parse_address(self.address))

    def equals(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Token):
            return False
        return self.chain_id == other.chain_id and self.address.lower() == other.address.lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (Token, Native)):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((self.chain_id, self.address.lower()))

    def sorts_before(self, other: "Token") -> bool:
        """True if this token's address sorts before `other`'s (lowercase compare).

        Raises ChainMismatch for tokens on different chains and IdenticalAssets
        for the same address; callers must pass distinct same-chain tokens.
        """
        if self.chain_id != other.chain_id:
            raise ChainMismatch(f"cannot order tokens across chains {self.chain_id} and {other.chain_id}")
        a, b = self.address.lower(), other.address.lower()
        if a == b:
            raise IdenticalAssets(f"cannot order identical token {self.address}")
        return a < b

    def __repr__(self) -> str:
        return f"Token({self.chain_id}, {self.address}, {self.symbol or '?'})"


Asset = Union[Native, Token]

#: Shared native marker.
NATIVE = Native()


def asset_equals(a: Asset, b: Asset) -> bool:
    """Mixed equality: tokens by (chain, address), natives by identity."""
    if isinstance(a, Token) and isinstance(b, Token):
        return a.equals(b)
    if isinstance(a, Token) or isinstance(b, Token):
        return False
    return a is b


def sort_tokens(a: Token, b: Token) -> tuple[Token, Token]:
    """Return (a, b) in canonical pool order."""
    return (a, b) if a.sorts_before(b) else (b, a)


WRAPPED_TOKENS: dict[int, Token] = {
    int(cid): Token(int(cid), address, decimals, symbol, name)
    for cid, (address, decimals, symbol, name) in WRAPPED_NATIVE.items()
}


def wrapped_native(chain_id: int) -> Token:
    """Wrapped native token for `chain_id` (ChainMismatch if the chain is unknown)."""
    tok = WRAPPED_TOKENS.get(int(chain_id))
    if tok is None:
        raise ChainMismatch(f"no wrapped native token known for chain {chain_id}")
    return tok


def wrapped_asset(asset: Asset, chain_id: int) -> Token:
    """Token view of `asset` on `chain_id`: Native maps to its wrapped token."""
    if isinstance(asset, Token):
        if asset.chain_id != chain_id:
            raise ChainMismatch(f"token {asset.address} is on chain {asset.chain_id}, not {chain_id}")
        return asset
    return wrapped_native(chain_id)


def named_token(key: str, chain_id: int) -> Token:
    """Well-known token `key` (e.g. "HOPE") on `chain_id`; ChainMismatch if not listed there."""
    per_chain = NAMED_TOKENS.get(key)
    if per_chain is None:
        raise KeyError(f"unknown token {key!r}")
    entry = per_chain.get(chain_id)
    if entry is None:
        raise ChainMismatch(f"no {key} token known for chain {chain_id}")
    address, decimals, symbol, name = entry
    return Token(int(chain_id), address, decimals, symbol, name)


__all__ = [
    "Native",
    "Token",
    "Asset",
    "NATIVE",
    "WRAPPED_TOKENS",
    "asset_equals",
    "sort_tokens",
    "wrapped_native",
    "wrapped_asset",
    "named_token",
]
