"""
Core exception types for amm_router.core.

These are dependency-free and may be imported by all modules, including the
fetcher. None of them is retried or recovered inside the library: every core
operation is a pure function of its inputs, so a failure recurs on the same
inputs.
"""

from __future__ import annotations

__all__ = [
    "AmountDomainError",
    "InvariantViolation",
    "InvalidAddress",
    "ChainMismatch",
    "IdenticalAssets",
    "InvalidRoute",
    "DivisionByZero",
    "PoolMathError",
    "InsufficientReserves",
    "InsufficientInputAmount",
    "InsufficientOutputAmount",
    "RpcError",
    "PoolFetchError",
]


class AmountDomainError(Exception):
    """Raised when inputs violate the non-negative domain or basic preconditions."""
    pass


class InvariantViolation(Exception):
    """Raised when arithmetic would break core invariants (e.g. negative amounts)."""
    pass


class InvalidAddress(Exception):
    """Raised when an address is not a well-formed 20-byte hex identifier."""

    def __init__(self, address):
        super().__init__(f"{address!r} is not a valid address")
        self.address = address


class ChainMismatch(Exception):
    """Raised when an operation mixes assets from different chains."""
    pass


class IdenticalAssets(Exception):
    """Raised when an ordering or routing operation receives two equal assets."""
    pass


class InvalidRoute(Exception):
    """Raised when a pool sequence does not form a connected single-chain path."""
    pass


class DivisionByZero(ZeroDivisionError):
    """Raised on fraction inversion/division by a zero value."""
    pass


class PoolMathError(Exception):
    """Base for swap failures raised by a pool leg.

    Attributes
    ----------
    pool : Any | None
        The pool whose leg failed.
    hop : int | None
        0-based index of that pool in the route being evaluated, when known.
    """

    def __init__(self, message: str = "", *, pool=None, hop=None):
        super().__init__(message)
        self.pool = pool
        self.hop = hop

    def at_hop(self, hop: int) -> "PoolMathError":
        """Return a copy of this error attributed to route position `hop`."""
        base = self.args[0] if self.args else ""
        return type(self)(f"hop {hop}: {base}", pool=self.pool, hop=hop)


class InsufficientReserves(PoolMathError):
    """Raised when a reserve is zero or a withdrawal would not leave a positive remainder."""
    pass


class InsufficientInputAmount(PoolMathError):
    """Raised when the input is non-positive or too small to produce any output."""
    pass


class InsufficientOutputAmount(PoolMathError):
    """Raised when a non-positive output is requested."""
    pass


class RpcError(Exception):
    """Raised when a JSON-RPC call fails or returns a malformed envelope."""
    pass


class PoolFetchError(Exception):
    """Raised when reserves cannot be read for a derived pool address.

    The pool address is a function of the caller's weight/fee guess, so the
    message names both alongside the address.
    """

    def __init__(self, address: str, weight_a: int, fee_bps: int, reason: str = ""):
        msg = (
            f"Could not get reserves. Please verify that {address} is the pool you are "
            f"looking for. Also check weight and fee parameters (weight_a: {weight_a}, "
            f"fee_bps: {fee_bps})"
        )
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.address = address
        self.weight_a = weight_a
        self.fee_bps = fee_bps
