import pytest

from web3 import Web3

from amm_router import Amount, NATIVE, Pool, compute_pool_address
from amm_router.curves import WeightedProductCurve
from amm_router.core.exc import (
    AmountDomainError,
    ChainMismatch,
    IdenticalAssets,
    InsufficientReserves,
    InsufficientInputAmount,
    InsufficientOutputAmount,
    PoolMathError,
)
from amm_router.core import MAX_UINT256
from amm_router.core.fmt import fmt_amount

E18 = 10 ** 18


# -----------------------------
# Construction
# -----------------------------

def test_reserves_stored_in_sorted_order(tok_a, tok_b):
    p = Pool(Amount(tok_b, 7), Amount(tok_a, 3), weight0=30, fee_bps=20)
    print("[pool-sort]", p)
    assert p.token0 is tok_a and p.reserve0.raw == 3
    assert p.token1 is tok_b and p.reserve1.raw == 7
    # weight follows its token across the re-ordering
    assert p.weight0 == 70 and p.weight_of(tok_b) == 30


def test_curve_defaults_from_weight(tok_a, tok_b, make_pool):
    assert isinstance(make_pool(tok_a, 1, tok_b, 1, weight_a=80).curve, WeightedProductCurve)
    assert make_pool(tok_a, 1, tok_b, 1).curve.name == "constant-product"


@pytest.mark.parametrize("weight,fee", [(0, 20), (100, 20), (50, -1), (50, 10000)])
def test_bad_parameters_rejected(tok_a, tok_b, make_pool, weight, fee):
    print(f"[pool-params] weight={weight}, fee={fee} -> expect ValueError")
    with pytest.raises(ValueError):
        make_pool(tok_a, 1, tok_b, 1, weight_a=weight, fee_bps=fee)


def test_invalid_pairs_rejected(tok_a, tok_bsc, make_pool):
    with pytest.raises(ChainMismatch):
        make_pool(tok_a, 1, tok_bsc, 1)
    with pytest.raises(IdenticalAssets):
        make_pool(tok_a, 1, tok_a, 1)
    with pytest.raises(AmountDomainError):
        Pool(Amount(NATIVE, 1), Amount(tok_a, 1))


# -----------------------------
# Pool address (CREATE2)
# -----------------------------

def test_pool_address_is_order_independent(tok_a, tok_b, deployment):
    forward = compute_pool_address(tok_a, tok_b, 30, 20, **deployment)
    backward = compute_pool_address(tok_b, tok_a, 70, 20, **deployment)
    print("[pool-address]", forward)
    assert forward == backward
    assert Web3.is_checksum_address(forward)


def test_pool_address_depends_on_weight_fee_and_deployment(tok_a, tok_b, deployment):
    base = compute_pool_address(tok_a, tok_b, 50, 20, **deployment)
    assert compute_pool_address(tok_a, tok_b, 60, 20, **deployment) != base
    assert compute_pool_address(tok_a, tok_b, 50, 30, **deployment) != base
    other_factory = dict(deployment, factory="0x" + "22" * 20)
    assert compute_pool_address(tok_a, tok_b, 50, 20, **other_factory) != base
    other_code = dict(deployment, init_code_hash="0x" + "cd" * 32)
    assert compute_pool_address(tok_a, tok_b, 50, 20, **other_code) != base


@pytest.mark.parametrize("init_code_hash", ["0x1234", "0x" + "zz" * 32, "ab" * 31])
def test_pool_address_rejects_bad_init_code_hash(tok_a, tok_b, deployment, init_code_hash):
    with pytest.raises(ValueError):
        compute_pool_address(tok_a, tok_b, **dict(deployment, init_code_hash=init_code_hash))


def test_pool_identity_uses_its_deployment(tok_a, tok_b, deployment):
    p = Pool(Amount(tok_b, 5), Amount(tok_a, 9), weight0=40, fee_bps=25, **deployment)
    print("[pool-identity]", p.address)
    assert p.address == compute_pool_address(tok_a, tok_b, 60, 25, **deployment)
    # deployment is not part of pool equality
    assert p == Pool(Amount(tok_b, 5), Amount(tok_a, 9), weight0=40, fee_bps=25)


def test_pool_without_deployment_has_no_address(tok_a, tok_b, make_pool):
    assert make_pool(tok_a, 5, tok_b, 9).address is None


# -----------------------------
# Swap math
# -----------------------------

def test_usdc_eth_quote(usdc, weth, make_pool):
    pool = make_pool(usdc, 1000 * 10 ** 6, weth, E18, fee_bps=20)
    out, after = pool.get_output_amount(Amount(usdc, 10 ** 6))
    expected = (10 ** 6 * 9980 * E18) // (1000 * 10 ** 6 * 10000 + 10 ** 6 * 9980)
    print("[pool-usdc-eth] 1 USDC ->", fmt_amount(out, places=9), "raw", out.raw)
    assert out.asset is weth
    assert out.raw == expected
    assert 997 * 10 ** 12 < out.raw < 998 * 10 ** 12
    # post-swap pool carries the moved reserves; the original is untouched
    assert after.reserve_of(usdc).raw == 1001 * 10 ** 6
    assert after.reserve_of(weth).raw == E18 - out.raw
    assert pool.reserve_of(usdc).raw == 1000 * 10 ** 6


def test_input_for_output_rounds_up(tok_a, tok_b, make_pool):
    pool = make_pool(tok_a, 1000 * E18, tok_b, 1000 * E18, fee_bps=30)
    need, after = pool.get_input_amount(Amount(tok_b, 10 * E18))
    expected = (1000 * E18 * 10 * E18 * 10000) // ((990 * E18) * 9970) + 1
    print("[pool-in-given-out] 10 B ->", fmt_amount(need))
    assert need.asset is tok_a and need.raw == expected
    assert after.reserve_of(tok_b).raw == 990 * E18


@pytest.mark.parametrize("dy", [1, 999, 10 ** 15, 37 * E18, 500 * E18])
def test_output_of_required_input_covers_request(tok_a, tok_b, make_pool, dy):
    pool = make_pool(tok_a, 1000 * E18, tok_b, 1200 * E18, fee_bps=20)
    need, _ = pool.get_input_amount(Amount(tok_b, dy))
    got, _ = pool.get_output_amount(need)
    print(f"[pool-round-trip] want={dy} need={need.raw} got={got.raw}")
    assert got.raw >= dy


@pytest.mark.parametrize("dx", [10 ** 9, 3 * E18, 250 * E18])
def test_product_never_decreases_without_fee(tok_a, tok_b, make_pool, dx):
    pool = make_pool(tok_a, 1000 * E18, tok_b, 1000 * E18, fee_bps=0)
    _, after = pool.get_output_amount(Amount(tok_a, dx))
    k0 = pool.reserve0.raw * pool.reserve1.raw
    k1 = after.reserve0.raw * after.reserve1.raw
    assert k1 >= k0
    # flooring loses less than one unit of the output reserve
    assert k1 - k0 < after.reserve_of(tok_a).raw


def test_weighted_pool_swaps_both_ways(tok_a, tok_b, make_pool):
    pool = make_pool(tok_a, 1000 * E18, tok_b, 500 * E18, weight_a=80, fee_bps=20)
    out, _ = pool.get_output_amount(Amount(tok_a, 10 * E18))
    need, _ = pool.get_input_amount(out)
    print("[pool-weighted] 10 A ->", fmt_amount(out), "; back-solve ->", fmt_amount(need))
    assert out.asset is tok_b and out.raw > 0
    assert need.raw <= 10 * E18 + 1


def test_mid_prices_ignore_fee_and_weight(tok_a, tok_b, make_pool):
    pool = make_pool(tok_a, 1000, tok_b, 2000, weight_a=80, fee_bps=100)
    assert pool.token0_price.raw == 2
    assert pool.token1_price.raw == pool.token0_price.invert().raw
    assert pool.price_of(tok_b).base is tok_b


# -----------------------------
# Failure modes
# -----------------------------

def test_drain_request_raises(tok_a, tok_b, make_pool):
    pool = make_pool(tok_a, 1000, tok_b, 1000)
    print("[pool-drain] request out == reserve -> expect InsufficientReserves")
    with pytest.raises(InsufficientReserves):
        pool.get_input_amount(Amount(tok_b, 1000))
    with pytest.raises(InsufficientReserves):
        pool.get_input_amount(Amount(tok_b, 5000))


def test_zero_reserve_raises(tok_a, tok_b, make_pool):
    pool = make_pool(tok_a, 0, tok_b, 1000)
    with pytest.raises(InsufficientReserves) as ei:
        pool.get_output_amount(Amount(tok_a, 10))
    assert ei.value.pool is pool
    with pytest.raises(InsufficientReserves):
        pool.get_input_amount(Amount(tok_b, 10))


def test_non_positive_amounts_raise(tok_a, tok_b, make_pool):
    pool = make_pool(tok_a, 1000, tok_b, 1000)
    with pytest.raises(InsufficientInputAmount):
        pool.get_output_amount(Amount(tok_a, 0))
    with pytest.raises(InsufficientOutputAmount):
        pool.get_input_amount(Amount(tok_b, 0))


def test_dust_input_raises(tok_a, tok_b, make_pool):
    pool = make_pool(tok_a, E18, tok_b, 10)
    print("[pool-dust] 1 raw unit into a deep/shallow pool -> expect InsufficientInputAmount")
    with pytest.raises(InsufficientInputAmount):
        pool.get_output_amount(Amount(tok_a, 1))


def test_foreign_asset_raises(tok_a, tok_b, tok_c, make_pool):
    pool = make_pool(tok_a, 1000, tok_b, 1000)
    assert not pool.involves(tok_c)
    with pytest.raises(AmountDomainError):
        pool.get_output_amount(Amount(tok_c, 1))


def test_with_reserves_keeps_parameters(tok_a, tok_b, deployment):
    pool = Pool(Amount(tok_a, 1), Amount(tok_b, 2), weight0=70, fee_bps=45, **deployment)
    synced = pool.with_reserves(100, 200)
    assert (synced.reserve0.raw, synced.reserve1.raw) == (100, 200)
    assert (synced.weight0, synced.fee_bps) == (70, 45)
    assert synced.address == pool.address is not None


def test_swap_keeps_deployment(tok_a, tok_b, deployment):
    pool = Pool(Amount(tok_a, 1000 * E18), Amount(tok_b, 1000 * E18), **deployment)
    _, after = pool.get_output_amount(Amount(tok_a, E18))
    assert after.address == pool.address


def test_reserve_overflow_is_pool_math_error(tok_a, tok_b, make_pool):
    pool = make_pool(tok_a, MAX_UINT256 - 10, tok_b, 1000)
    print("[pool-overflow] input pushes reserve past uint256 -> expect InsufficientReserves")
    with pytest.raises(InsufficientReserves) as ei:
        pool.get_output_amount(Amount(tok_a, MAX_UINT256 // 2))
    assert isinstance(ei.value, PoolMathError) and ei.value.pool is pool
    with pytest.raises(InsufficientReserves):
        pool.get_input_amount(Amount(tok_b, 999))
