import pytest
from fractions import Fraction

from amm_router.core.fraction import ExactFraction, Percent, Rounding
from amm_router.core.exc import DivisionByZero


# -----------------------------
# Construction & integer views
# -----------------------------

def test_negative_denominator_folded_into_numerator():
    f = ExactFraction(3, -4)
    print("[fraction-sign] 3/-4 ->", f)
    assert f.numerator == -3 and f.denominator == 4


def test_zero_denominator_raises():
    print("[fraction-zero-den] 1/0 -> expect DivisionByZero")
    with pytest.raises(DivisionByZero):
        ExactFraction(1, 0)


def test_division_by_zero_is_a_zero_division_error():
    with pytest.raises(ZeroDivisionError):
        ExactFraction(1).divide(0)


@pytest.mark.parametrize(
    "n,d,q",
    [
        (7, 2, 3),
        (-7, 2, -3),   # truncates toward zero, not floor
        (6, 3, 2),
        (1, 3, 0),
        (-1, 3, 0),
    ],
)
def test_quotient_truncates_toward_zero(n, d, q):
    print(f"[fraction-quotient] {n}/{d} -> expect {q}")
    assert ExactFraction(n, d).quotient() == q


def test_remainder_keeps_denominator():
    r = ExactFraction(7, 2).remainder()
    print("[fraction-remainder] 7/2 ->", r)
    assert (r.numerator, r.denominator) == (1, 2)


def test_invert_zero_raises():
    with pytest.raises(DivisionByZero):
        ExactFraction(0, 5).invert()


def test_invert_swaps_terms():
    f = ExactFraction(2, 5).invert()
    assert (f.numerator, f.denominator) == (5, 2)


# -----------------------------
# Arithmetic (unreduced results)
# -----------------------------

def test_same_denominator_add_keeps_denominator():
    f = ExactFraction(1, 4).add(ExactFraction(2, 4))
    print("[fraction-add-same-den] 1/4 + 2/4 ->", f)
    assert (f.numerator, f.denominator) == (3, 4)


def test_results_are_not_reduced():
    f = ExactFraction(1, 2).multiply(ExactFraction(2, 3))
    print("[fraction-unreduced] 1/2 * 2/3 ->", f)
    assert (f.numerator, f.denominator) == (2, 6)
    assert f.reduced().numerator == 1 and f.reduced().denominator == 3


def test_operators_accept_ints_both_sides():
    f = ExactFraction(1, 2)
    assert f + 1 == ExactFraction(3, 2)
    assert 1 + f == ExactFraction(3, 2)
    assert 1 - f == ExactFraction(1, 2)
    assert 3 * f == ExactFraction(3, 2)
    assert 1 / f == 2
    assert -f == ExactFraction(-1, 2)


def test_operations_match_stdlib_fraction():
    a, b = ExactFraction(7, 12), ExactFraction(-5, 18)
    fa, fb = Fraction(7, 12), Fraction(-5, 18)
    assert (a + b).as_fraction() == fa + fb
    assert (a - b).as_fraction() == fa - fb
    assert (a * b).as_fraction() == fa * fb
    assert (a / b).as_fraction() == fa / fb


def test_rejects_float_operands():
    with pytest.raises(TypeError):
        ExactFraction(1, 2).add(0.5)


# -----------------------------
# Comparisons & hashing
# -----------------------------

def test_cross_multiplied_equality():
    print("[fraction-eq] 1/2 vs 2/4 -> expect equal")
    assert ExactFraction(1, 2).equal_to(ExactFraction(2, 4))
    assert ExactFraction(1, 2) == ExactFraction(2, 4)
    assert ExactFraction(4, 2) == 2


def test_ordering():
    assert ExactFraction(1, 3).less_than(ExactFraction(1, 2))
    assert ExactFraction(2, 3).greater_than(ExactFraction(1, 2))
    assert ExactFraction(-1, 2) < 0 <= ExactFraction(0, 7)


def test_equal_values_hash_equal():
    assert hash(ExactFraction(1, 2)) == hash(ExactFraction(2, 4))
    assert hash(ExactFraction(6, 3)) == hash(2)
    assert len({ExactFraction(1, 2), ExactFraction(3, 6)}) == 1


# -----------------------------
# Display helpers
# -----------------------------

def test_to_fixed_rounding_modes():
    f = ExactFraction(2, 3)
    print("[fraction-to_fixed] 2/3 at 3 places:", f.to_fixed(3), f.to_fixed(3, Rounding.ROUND_DOWN))
    assert f.to_fixed(3) == "0.667"
    assert f.to_fixed(3, Rounding.ROUND_DOWN) == "0.666"
    assert ExactFraction(1, 3).to_fixed(2, Rounding.ROUND_UP) == "0.34"
    assert ExactFraction(0).to_fixed(2) == "0.00"


def test_to_significant_drops_trailing_zeros():
    assert ExactFraction(1, 3).to_significant(5) == "0.33333"
    assert ExactFraction(1000).to_significant(6) == "1000"
    assert ExactFraction(0, 9).to_significant(4) == "0"


def test_percent_display_is_scaled():
    p = Percent(1, 8)
    print("[percent] 1/8 ->", p.to_fixed(2), "%")
    assert p.to_fixed(2) == "12.50"
    assert Percent.of(ExactFraction(1, 3)).to_significant(4) == "33.33"
    assert p == ExactFraction(1, 8)
