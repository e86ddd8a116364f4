"""
Function table for FunctionNode evaluation.

Every entry takes (x, base) and returns a float; `base` is the log base or
root degree and is ignored by the other functions. Extend by adding a row to
FUNCTIONS and DEFAULT_BASES (and the name to contracts.FUNCTION_NAMES).
"""
from __future__ import annotations

import math
from typing import Callable

from contracts import FunctionDomainError


def _sqrt(x: float, base: float) -> float:
    if x < 0:
        raise FunctionDomainError(f"sqrt of negative value {x!r}")
    return math.sqrt(x)


def _root(x: float, degree: float) -> float:
    if degree == 0:
        raise FunctionDomainError("root of degree 0")
    if x == 0 and degree < 0:
        raise FunctionDomainError(f"root of 0 with negative degree {degree!r}")
    if x < 0:
        # real root exists only for odd integer degrees
        if not (float(degree).is_integer() and int(degree) % 2 == 1):
            raise FunctionDomainError(f"root of degree {degree!r} of negative value {x!r}")
        return -_power((-x), 1.0 / degree)
    return _power(x, 1.0 / degree)


def _ln(x: float, base: float) -> float:
    if x <= 0:
        raise FunctionDomainError(f"ln of non-positive value {x!r}")
    return math.log(x)


def _log(x: float, base: float) -> float:
    if x <= 0:
        raise FunctionDomainError(f"log of non-positive value {x!r}")
    if base <= 0 or base == 1:
        raise FunctionDomainError(f"invalid logarithm base {base!r}")
    return math.log(x) / math.log(base)


def _exp(x: float, base: float) -> float:
    try:
        return math.exp(x)
    except OverflowError as exc:
        raise FunctionDomainError(f"exp({x!r}) overflows") from exc


def _abs(x: float, base: float) -> float:
    return abs(x)


def _power(x: float, exponent: float) -> float:
    try:
        return x ** exponent
    except OverflowError as exc:
        raise FunctionDomainError(f"{x!r} ** {exponent!r} overflows") from exc


FUNCTIONS: dict[str, Callable[[float, float], float]] = {
    "sqrt": _sqrt,
    "root": _root,
    "ln": _ln,
    "log": _log,
    "exp": _exp,
    "abs": _abs,
}

DEFAULT_BASES: dict[str, float] = {
    "sqrt": 2.0,
    "root": 2.0,
    "ln": math.e,
    "log": 10.0,
    "exp": math.e,
    "abs": 0.0,
}

# Functions whose base changes the result (and is therefore rendered)
BASED_FUNCTIONS = frozenset({"root", "log"})
