"""
Port: RationalApproximator
Responsibility: turning a float into a reduced fraction with a bounded denominator.
"""
from fractions import Fraction
from typing import Protocol, runtime_checkable


@runtime_checkable
class RationalApproximator(Protocol):
    def approximate(self, value: float, max_denominator: int = 10_000) -> Fraction:
        """
        Returns the best (or near-best) fraction n/d approximating value
        with 0 < d <= max_denominator.
        The sign is carried by the numerator; approximate(0.0) == Fraction(0, 1).
        Raises ValueError for non-finite values or max_denominator < 1.
        """
        ...
