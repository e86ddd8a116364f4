"""
Adapter: SternBrocotApproximator
Implements the RationalApproximator port — mediant search over the Stern–Brocot tree.

Bounds start at 0/1 and 1/0 (+infinity). Each step takes the mediant of the
bounds and moves one bound onto it, until the mediant's denominator would
exceed max_denominator. A mediant within `tolerance` of the value is returned
immediately; otherwise the closer of the two final bounds wins.

The integer ladder 1/1, 2/1, 3/1, ... that the search walks for values above 1
is taken in a single step, so large values cost no more than small ones.
"""
from __future__ import annotations

import logging
import math
from fractions import Fraction

logger = logging.getLogger("expr_tree.rational")

DEFAULT_MAX_DENOMINATOR = 10_000
DEFAULT_TOLERANCE = 1e-6


def _error(value: float, numerator: int, denominator: int) -> float:
    # x/0 stands for +infinity and is never evaluated as a ratio
    if denominator == 0:
        return math.inf
    return abs(value - numerator / denominator)


def approximate(
    value: float,
    max_denominator: int = DEFAULT_MAX_DENOMINATOR,
    tolerance: float = DEFAULT_TOLERANCE,
) -> Fraction:
    """Best rational approximation of `value` with denominator <= max_denominator."""
    if not math.isfinite(value):
        raise ValueError(f"Cannot approximate non-finite value {value!r}")
    if max_denominator < 1:
        raise ValueError(f"max_denominator must be >= 1, got {max_denominator}")

    sign = -1 if value < 0 else 1
    value = abs(value)
    if value == 0:
        return Fraction(0, 1)

    # Ladder: mediants k/1 for k = 1, 2, ... stay below the value until k >= value.
    top = max(1, math.ceil(value))
    if top > 1 and _error(value, top - 1, 1) < tolerance:
        return Fraction(sign * (top - 1), 1)
    if _error(value, top, 1) < tolerance:
        return Fraction(sign * top, 1)

    lower_num, lower_den = top - 1, 1
    upper_num, upper_den = top, 1

    while True:
        mid_num = lower_num + upper_num
        mid_den = lower_den + upper_den
        if mid_den > max_denominator:
            break

        mid = mid_num / mid_den
        if mid < value:
            lower_num, lower_den = mid_num, mid_den
        else:
            upper_num, upper_den = mid_num, mid_den

        if abs(value - mid) < tolerance:
            return Fraction(sign * mid_num, mid_den)

    if _error(value, lower_num, lower_den) < _error(value, upper_num, upper_den):
        num, den = lower_num, lower_den
    else:
        num, den = upper_num, upper_den
    logger.debug(
        "No mediant within %g of %r (max_denominator=%d); using bound %d/%d",
        tolerance, value, max_denominator, num, den,
    )
    return Fraction(sign * num, den)


class SternBrocotApproximator:
    """Continued-fraction approximator with a fixed early-exit tolerance."""

    def __init__(self, tolerance: float = DEFAULT_TOLERANCE) -> None:
        self._tolerance = tolerance

    # -- RationalApproximator protocol -------------------------------------

    def approximate(self, value: float, max_denominator: int = DEFAULT_MAX_DENOMINATOR) -> Fraction:
        return approximate(value, max_denominator, self._tolerance)
