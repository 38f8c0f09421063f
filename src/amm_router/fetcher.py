"""
On-chain data collaborator: token decimals and pool reserves over JSON-RPC.

This module sits outside the pure core. It turns an RPC endpoint into the
plain values the core needs (integer decimals, integer reserves) and builds
Token / Pool values from them. Nothing here is retried: a failed lookup is
reported once, with enough context (address, weight, fee) to diagnose a wrong
pool-parameter guess.

The decimals cache is an explicit object whose lifetime the caller controls;
there is no process-wide cache.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import requests
from eth_abi import decode
from eth_abi.exceptions import DecodingError
from web3 import Web3

from .core import (
    Amount,
    Token,
    sort_tokens,
    validate_and_parse_address,
    DEFAULT_FEE_BPS,
    DEFAULT_WEIGHT,
    WEIGHT_TOTAL,
)
from .core.constants import DECIMALS_OVERRIDES
from .core.exc import ChainMismatch, InvalidAddress, PoolFetchError, RpcError
from .pool import Pool, compute_pool_address

# --- Debug utilities (toggleable) ---
DEBUG_FETCHER = False

def _dbg(msg: str) -> None:
    if DEBUG_FETCHER:
        print(f"[FETCHER] {msg}")


def function_selector(signature: str) -> bytes:
    """First 4 bytes of keccak(signature), e.g. 'decimals()'."""
    return bytes(Web3.keccak(text=signature))[:4]


DECIMALS_SELECTOR = function_selector("decimals()")
GET_RESERVES_SELECTOR = function_selector("getReserves()")


# ---------------------------------------------------------------------------
# Decimals cache
# ---------------------------------------------------------------------------

class DecimalsCache:
    """(chain_id, address) -> decimals, seeded from a static override table."""

    def __init__(self, overrides: Optional[Dict[int, Dict[str, int]]] = None) -> None:
        self._entries: Dict[Tuple[int, str], int] = {}
        table = DECIMALS_OVERRIDES if overrides is None else overrides
        for chain_id, per_chain in table.items():
            for address, decimals in per_chain.items():
                self.put(chain_id, address, decimals)

    @staticmethod
    def _key(chain_id: int, address: str) -> Tuple[int, str]:
        return int(chain_id), address.lower()

    def get(self, chain_id: int, address: str) -> Optional[int]:
        return self._entries.get(self._key(chain_id, address))

    def put(self, chain_id: int, address: str, decimals: int) -> None:
        self._entries[self._key(chain_id, address)] = decimals

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: Tuple[int, str]) -> bool:
        chain_id, address = key
        return self._key(chain_id, address) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# ---------------------------------------------------------------------------
# JSON-RPC transport
# ---------------------------------------------------------------------------

class JsonRpcClient:
    """Minimal Ethereum JSON-RPC client over `requests`."""

    def __init__(self, rpc_url: str, *, timeout: int = 30, session: Optional[requests.Session] = None) -> None:
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self._next_id = 0

    def rpc_call(self, method: str, params: List[Any]) -> Any:
        """
        JSON-RPC call wrapper.
        Returns the 'result' member (not the envelope).
        Raises RpcError for transport errors, error responses and malformed envelopes.
        """
        self._next_id += 1
        payload = {"jsonrpc": "2.0", "id": self._next_id, "method": method, "params": params}
        try:
            r = self.session.post(self.rpc_url, json=payload, timeout=self.timeout)
            r.raise_for_status()
            out = r.json()
        except (requests.RequestException, ValueError) as exc:
            raise RpcError(f"{method} request failed: {exc}") from exc

        if not isinstance(out, dict):
            raise RpcError(f"Bad RPC response (not an object): {out!r}")
        if out.get("error"):
            raise RpcError(f"{method} returned error: {out['error']}")
        if "result" not in out:
            raise RpcError(f"Bad RPC response (no 'result'): {out}")
        return out["result"]

    def eth_call(self, to: str, data: bytes, block: str = "latest") -> bytes:
        result = self.rpc_call("eth_call", [{"to": to, "data": "0x" + data.hex()}, block])
        if not isinstance(result, str) or not result.startswith("0x"):
            raise RpcError(f"eth_call returned non-hex result: {result!r}")
        try:
            return bytes.fromhex(result[2:])
        except ValueError as exc:
            raise RpcError(f"eth_call returned malformed hex: {result!r}") from exc


# ---------------------------------------------------------------------------
# Fetcher
# ---------------------------------------------------------------------------

class Fetcher:
    """Builds Token and Pool values from on-chain data.

    `factory` and `init_code_hash` identify the pool deployment; fetched pools
    carry them, so `pool.address` is the address the reserves were read from.
    """

    def __init__(
        self,
        client: JsonRpcClient,
        *,
        factory: str,
        init_code_hash: str,
        cache: Optional[DecimalsCache] = None,
    ) -> None:
        self.client = client
        self.cache = cache if cache is not None else DecimalsCache()
        self.factory = validate_and_parse_address(factory)
        self.init_code_hash = init_code_hash

    # ------------- tokens -------------

    def resolve_token_decimals(self, chain_id: int, address: str) -> int:
        """Decimals of `address`: the cache first, then `decimals()` on chain."""
        checksummed = validate_and_parse_address(address)
        cached = self.cache.get(chain_id, checksummed)
        if cached is not None:
            _dbg(f"decimals cache hit: {chain_id}/{checksummed} -> {cached}")
            return cached
        raw = self.client.eth_call(checksummed, DECIMALS_SELECTOR)
        try:
            (decimals,) = decode(["uint8"], raw)
        except DecodingError as exc:
            raise RpcError(f"could not decode decimals() of {checksummed}: {exc}") from exc
        self.cache.put(chain_id, checksummed, decimals)
        _dbg(f"decimals fetched: {chain_id}/{checksummed} -> {decimals}")
        return decimals

    def fetch_token_data(
        self,
        chain_id: int,
        address: str,
        symbol: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Token:
        decimals = self.resolve_token_decimals(chain_id, address)
        return Token(chain_id, address, decimals, symbol, name)

    # ------------- pools -------------

    def pool_address(self, token_a: Token, token_b: Token, weight_a: int, fee_bps: int) -> str:
        return compute_pool_address(
            token_a, token_b, weight_a, fee_bps,
            factory=self.factory, init_code_hash=self.init_code_hash,
        )

    def resolve_pool_reserves(self, pool_address: str) -> Tuple[int, int]:
        """(reserve0, reserve1) of the pool, in sorted-token order."""
        checksummed = validate_and_parse_address(pool_address)
        raw = self.client.eth_call(checksummed, GET_RESERVES_SELECTOR)
        try:
            reserve0, reserve1, _ts = decode(["uint112", "uint112", "uint32"], raw)
        except DecodingError as exc:
            raise RpcError(f"could not decode getReserves() of {checksummed}: {exc}") from exc
        return reserve0, reserve1

    def fetch_pool_data(
        self,
        token_a: Token,
        token_b: Token,
        weight_a: int = DEFAULT_WEIGHT,
        fee_bps: int = DEFAULT_FEE_BPS,
    ) -> Pool:
        """Pool for (token_a, token_b, weight_a, fee_bps) with live reserves.

        Weight and fee are part of the pool identity and must be known by the
        caller; a wrong guess points at a pool that does not exist.
        """
        if token_a.chain_id != token_b.chain_id:
            raise ChainMismatch(f"tokens on different chains: {token_a.chain_id} vs {token_b.chain_id}")
        address = self.pool_address(token_a, token_b, weight_a, fee_bps)
        try:
            reserve0, reserve1 = self.resolve_pool_reserves(address)
        except (RpcError, InvalidAddress) as exc:
            raise PoolFetchError(address, weight_a, fee_bps, str(exc)) from exc

        token0, token1 = sort_tokens(token_a, token_b)
        weight0 = weight_a if token0.equals(token_a) else WEIGHT_TOTAL - weight_a
        _dbg(f"pool {address}: reserves=({reserve0}, {reserve1}) weight0={weight0} fee={fee_bps}bps")
        return Pool(
            Amount(token0, reserve0),
            Amount(token1, reserve1),
            weight0=weight0,
            fee_bps=fee_bps,
            factory=self.factory,
            init_code_hash=self.init_code_hash,
        )


__all__ = [
    "DECIMALS_SELECTOR",
    "GET_RESERVES_SELECTOR",
    "function_selector",
    "DecimalsCache",
    "JsonRpcClient",
    "Fetcher",
]
