"""
Route: an ordered chain of pools from an input asset to an output asset.

Validation walks the chain once: each pool must hold the asset carried out of
the previous hop (the declared input at hop 0); its other asset is carried
forward and the last carried asset is the route output. A Native endpoint is
carried as the chain's wrapped token.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Optional, Sequence

from .core import Asset, Price, wrapped_asset
from .core.exc import ChainMismatch, InvalidRoute
from .pool import Pool


@dataclass(frozen=True)
class Route:
    """Validated pool chain.

    Fields:
    - pools: pools in traversal order (at least one, all on one chain).
    - input: declared input asset (Native or Token).
    - output: declared output asset; inferred from the chain when omitted.
    - path: tokens visited, len(path) == len(pools) + 1 (set on construction).
    """

    pools: Sequence[Pool]
    input: Asset
    output: Optional[Asset] = None
    path: tuple = field(init=False)

    def __post_init__(self):
        pools = tuple(self.pools)
        object.__setattr__(self, "pools", pools)
        if not pools:
            raise InvalidRoute("route needs at least one pool")
        chain_id = pools[0].chain_id
        if any(p.chain_id != chain_id for p in pools):
            raise InvalidRoute("route pools span more than one chain")

        try:
            carried = wrapped_asset(self.input, chain_id)
        except ChainMismatch as exc:
            raise InvalidRoute(f"input {self.input!r} is not on chain {chain_id}") from exc

        path = [carried]
        for hop, pool in enumerate(pools):
            if not pool.involves(carried):
                raise InvalidRoute(f"pool {hop} ({pool.token0.symbol}/{pool.token1.symbol}) does not hold {carried.symbol or carried.address}")
            carried = pool.other_asset(carried)
            path.append(carried)

        if self.output is None:
            object.__setattr__(self, "output", carried)
        else:
            try:
                wanted = wrapped_asset(self.output, chain_id)
            except ChainMismatch as exc:
                raise InvalidRoute(f"output {self.output!r} is not on chain {chain_id}") from exc
            if not wanted.equals(carried):
                raise InvalidRoute(f"route ends in {carried.symbol or carried.address}, not {wanted.symbol or wanted.address}")
        object.__setattr__(self, "path", tuple(path))

    @property
    def chain_id(self) -> int:
        return self.pools[0].chain_id

    @property
    def num_hops(self) -> int:
        return len(self.pools)

    @cached_property
    def mid_price(self) -> Price:
        """Product of each hop's reserve-ratio price (no fee), input -> output."""
        price = self.pools[0].price_of(self.path[0])
        for pool, token in zip(self.pools[1:], self.path[1:-1]):
            price = price.multiply(pool.price_of(token))
        return Price(self.input, self.output, price.raw)

    def __repr__(self) -> str:
        hops = " -> ".join((t.symbol or t.address) for t in self.path)
        return f"Route({hops})"


__all__ = [
    "Route",
]
