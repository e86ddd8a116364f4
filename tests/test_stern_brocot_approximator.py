from __future__ import annotations

import math
from fractions import Fraction

import pytest

from adapters.rational.stern_brocot import SternBrocotApproximator, approximate
from ports.rational_approximator import RationalApproximator


def _best_error(value: float, max_denominator: int) -> float:
    return min(
        abs(value - round(value * d) / d)
        for d in range(1, max_denominator + 1)
    )


def test_approximate_zero_is_zero_over_one():
    frac = approximate(0.0, 10_000)

    assert (frac.numerator, frac.denominator) == (0, 1)


def test_approximate_half():
    assert approximate(0.5, 10_000) == Fraction(1, 2)


def test_approximate_keeps_sign_on_numerator():
    frac = approximate(-0.75, 100)

    assert (frac.numerator, frac.denominator) == (-3, 4)


def test_approximate_matches_value_to_six_digits():
    value = 0.1285548112

    frac = approximate(value, 10_000)

    assert 0 < frac.denominator <= 10_000
    assert abs(value - frac.numerator / frac.denominator) < 1e-6


@pytest.mark.parametrize("value", [0.1285548112, math.pi, -2.718281828, 0.3333, 1e-3, 0.999999])
def test_approximate_is_near_best_for_bounded_denominator(value):
    frac = approximate(value, 10_000)

    assert 0 < frac.denominator <= 10_000
    assert math.gcd(frac.numerator, frac.denominator) == 1
    assert abs(value - float(frac)) <= _best_error(abs(value), 10_000) + 1e-6


def test_approximate_small_denominator_bound_picks_closest_bound():
    assert approximate(0.4, 1) == Fraction(0, 1)
    assert approximate(0.6, 1) == Fraction(1, 1)
    assert approximate(0.3333, 100) == Fraction(1, 3)


def test_approximate_tiny_value_falls_back_to_zero():
    assert approximate(1e-9, 10_000) == Fraction(0, 1)


def test_approximate_integers_and_large_values():
    assert approximate(3.0) == Fraction(3, 1)
    assert approximate(-7.0) == Fraction(-7, 1)
    assert approximate(123456.5) == Fraction(246913, 2)


@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_approximate_rejects_non_finite_values(value):
    with pytest.raises(ValueError):
        approximate(value)


def test_approximate_rejects_non_positive_denominator_bound():
    with pytest.raises(ValueError):
        approximate(0.5, 0)


def test_approximator_tolerance_controls_early_exit():
    approximator = SternBrocotApproximator(tolerance=0.01)

    assert approximator.approximate(0.333, 10_000) == Fraction(1, 3)
    assert isinstance(approximator, RationalApproximator)
