import pytest

from amm_router.curves import (
    CONSTANT_PRODUCT,
    WEIGHTED_PRODUCT,
    ConstantProductCurve,
    WeightedProductCurve,
    curve_for_weight,
    _iroot_floor,
    _iroot_ceil,
)

E18 = 10 ** 18


# -----------------------------
# Integer roots
# -----------------------------

@pytest.mark.parametrize(
    "n,k,floor_r,ceil_r",
    [
        (0, 3, 0, 0),
        (1, 4, 1, 1),
        (26, 3, 2, 3),
        (27, 3, 3, 3),
        (28, 3, 3, 4),
        (10 ** 40, 4, 10 ** 10, 10 ** 10),
        (10 ** 40 + 1, 4, 10 ** 10, 10 ** 10 + 1),
    ],
)
def test_iroot_exact(n, k, floor_r, ceil_r):
    print(f"[iroot] n={n}, k={k} -> floor={_iroot_floor(n, k)}, ceil={_iroot_ceil(n, k)}")
    assert _iroot_floor(n, k) == floor_r
    assert _iroot_ceil(n, k) == ceil_r


def test_iroot_large_bounds():
    n = 3 ** 301 + 12345
    r = _iroot_floor(n, 7)
    assert r ** 7 <= n < (r + 1) ** 7


# -----------------------------
# Curve selection
# -----------------------------

def test_curve_for_weight():
    assert curve_for_weight(50) is CONSTANT_PRODUCT
    assert isinstance(curve_for_weight(80), WeightedProductCurve)
    assert isinstance(CONSTANT_PRODUCT, ConstantProductCurve)


# -----------------------------
# Constant product
# -----------------------------

def test_constant_product_matches_formula():
    r_in, r_out, dx, f = 1000 * 10 ** 6, E18, 10 ** 6, 20
    out = CONSTANT_PRODUCT.amount_out(r_in, r_out, dx, fee_bps=f)
    expected = (dx * (10000 - f) * r_out) // (r_in * 10000 + dx * (10000 - f))
    print("[cp-out] 1 USDC into 1000 USDC / 1 ETH ->", out)
    assert out == expected

    dy = 5 * 10 ** 14
    need = CONSTANT_PRODUCT.amount_in(r_in, r_out, dy, fee_bps=f)
    assert need == (r_in * dy * 10000) // ((r_out - dy) * (10000 - f)) + 1


# -----------------------------
# Weighted product
# -----------------------------

@pytest.mark.parametrize("dx", [1, 997, 10 ** 6, 3 * 10 ** 17, 10 ** 21])
def test_weighted_even_split_equals_constant_product_out(dx):
    r_in, r_out = 1000 * E18, 777 * E18
    cp = CONSTANT_PRODUCT.amount_out(r_in, r_out, dx, fee_bps=30)
    wp = WEIGHTED_PRODUCT.amount_out(r_in, r_out, dx, fee_bps=30, weight_in=50, weight_out=50)
    assert cp == wp


def test_weighted_in_never_below_constant_product_at_even_split():
    r_in, r_out, dy = 1000 * E18, 777 * E18, 12345 * 10 ** 12
    cp = CONSTANT_PRODUCT.amount_in(r_in, r_out, dy, fee_bps=30)
    wp = WEIGHTED_PRODUCT.amount_in(r_in, r_out, dy, fee_bps=30, weight_in=50, weight_out=50)
    assert wp >= cp


def test_weighted_out_is_tightest_invariant_preserving_amount():
    # weights 80/20 -> exponents 4/1; fee 0 keeps the invariant check exact
    r_in, r_out, dx = 1000 * E18, 500 * E18, 25 * E18
    out = WEIGHTED_PRODUCT.amount_out(r_in, r_out, dx, fee_bps=0, weight_in=80, weight_out=20)
    k_before = r_in ** 4 * r_out
    print("[wp-out] 80/20 pool, in=25 ->", out / E18)
    assert (r_in + dx) ** 4 * (r_out - out) >= k_before
    assert (r_in + dx) ** 4 * (r_out - out - 1) < k_before


def test_weighted_in_preserves_invariant():
    # token in carries weight 20, token out weight 80 -> exponents 1/4
    r_in, r_out, dy = 2000 * E18, 1000 * E18, 40 * E18
    need = WEIGHTED_PRODUCT.amount_in(r_in, r_out, dy, fee_bps=0, weight_in=20, weight_out=80)
    print("[wp-in] 20/80 pool, out=40 -> need", need / E18)
    assert (r_in + need - 1) * (r_out - dy) ** 4 >= r_in * r_out ** 4
    # one unit less and the invariant would drop
    assert (r_in + need - 2) * (r_out - dy) ** 4 < r_in * r_out ** 4


def test_weighted_fee_reduces_output():
    r_in, r_out, dx = 1000 * E18, 500 * E18, 25 * E18
    no_fee = WEIGHTED_PRODUCT.amount_out(r_in, r_out, dx, fee_bps=0, weight_in=80, weight_out=20)
    with_fee = WEIGHTED_PRODUCT.amount_out(r_in, r_out, dx, fee_bps=100, weight_in=80, weight_out=20)
    assert with_fee < no_fee
