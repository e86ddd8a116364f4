"""
contracts.py — Single source of truth for every data type in ExprTree.
All modules import types ONLY from here.
"""
from __future__ import annotations

import string
from enum import Enum
from typing import Iterable, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONTRACTS_VERSION = "1.0.0"

VARIABLE_NAMES = string.ascii_lowercase   # 'a'..'z', one binding slot each
BINDING_SLOTS = len(VARIABLE_NAMES)
OPERATORS = ("+", "-", "*", "/")
FUNCTION_NAMES = ("sqrt", "root", "ln", "log", "exp", "abs")

OperatorSymbol = Literal["+", "-", "*", "/"]
FunctionName = Literal["sqrt", "root", "ln", "log", "exp", "abs"]


# ─────────────────────────── Errors ──────────────────────────────────────

class ExpressionError(Exception):
    """Base class for every error raised by ExprTree."""


class InvalidVariableName(ExpressionError, ValueError):
    pass


class InvalidOperator(ExpressionError, ValueError):
    pass


class InvalidFunction(ExpressionError, ValueError):
    pass


class NodeOwnershipError(ExpressionError, ValueError):
    """A node was aliased, released twice or handed to the wrong arena."""


class TreeTooDeep(ExpressionError, RecursionError):
    pass


class DivisionByZero(ExpressionError, ZeroDivisionError):
    pass


class UnboundVariable(ExpressionError, KeyError):
    pass


class FunctionDomainError(ExpressionError, ArithmeticError):
    """Function input (or base) lies outside the function's real domain."""


def check_variable_name(name: object) -> str:
    if not isinstance(name, str) or len(name) != 1 or name not in VARIABLE_NAMES:
        raise InvalidVariableName(f"Variable name must be one letter a-z, got {name!r}")
    return name


def check_operator(op: object) -> str:
    if not isinstance(op, str) or op not in OPERATORS:
        raise InvalidOperator(f"Unsupported operator {op!r}; expected one of {' '.join(OPERATORS)}")
    return op


def check_function_name(name: object) -> str:
    if not isinstance(name, str) or name not in FUNCTION_NAMES:
        raise InvalidFunction(f"Unknown function {name!r}; expected one of {', '.join(FUNCTION_NAMES)}")
    return name


# ─────────────────────────── Policies ────────────────────────────────────

class RenderMode(str, Enum):
    DECIMAL = "decimal"     # "0.13"
    FRACTION = "fraction"   # "1273/9903"


class DivisionPolicy(str, Enum):
    SUPPRESS = "suppress"   # x / 0 -> 0.0
    RAISE = "raise"         # x / 0 -> DivisionByZero


class UnboundPolicy(str, Enum):
    ZERO = "zero"           # unset slot reads as 0.0
    RAISE = "raise"         # unset slot -> UnboundVariable


# ─────────────────────────── Expression tree ─────────────────────────────

class ConstantNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["constant"] = "constant"
    value: float


class VariableNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["variable"] = "variable"
    name: str

    @field_validator("name")
    @classmethod
    def _one_letter(cls, v: str) -> str:
        return check_variable_name(v)

    @property
    def slot(self) -> int:
        return ord(self.name) - ord("a")


class OperatorNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["operator"] = "operator"
    op: OperatorSymbol
    left: "ExprNode"
    right: "ExprNode"


class FunctionNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["function"] = "function"
    name: FunctionName
    input: "ExprNode"
    base: float   # log base / root degree; ignored by the other functions


ExprNode = Union[ConstantNode, VariableNode, OperatorNode, FunctionNode]
OperatorNode.model_rebuild()
FunctionNode.model_rebuild()


def children(node: ExprNode) -> tuple[ExprNode, ...]:
    """Owned children in evaluation order (empty for leaves)."""
    if isinstance(node, OperatorNode):
        return (node.left, node.right)
    if isinstance(node, FunctionNode):
        return (node.input,)
    return ()


# ─────────────────────────── Bindings ────────────────────────────────────

class Bindings(BaseModel):
    """Values for single-letter variables; conceptually 26 slots, unset = 0.0."""

    values: dict[str, float] = Field(default_factory=dict)

    @field_validator("values")
    @classmethod
    def _letters_only(cls, v: dict[str, float]) -> dict[str, float]:
        for name in v:
            check_variable_name(name)
        return v

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, float]) -> "Bindings":
        for name in mapping:
            check_variable_name(name)
        return cls(values=dict(mapping))

    @classmethod
    def from_slots(cls, slots: Iterable[float]) -> "Bindings":
        slots = list(slots)
        if len(slots) != BINDING_SLOTS:
            raise ValueError(f"Expected {BINDING_SLOTS} binding slots, got {len(slots)}")
        return cls(values=dict(zip(VARIABLE_NAMES, slots)))

    def is_bound(self, name: str) -> bool:
        return name in self.values

    def get(self, name: str, default: float = 0.0) -> float:
        return self.values.get(name, default)

    def slots(self) -> list[float]:
        return [self.values.get(name, 0.0) for name in VARIABLE_NAMES]


BindingsLike = Union[Bindings, Mapping[str, float], Iterable[float], None]


def as_bindings(bindings: BindingsLike) -> Bindings:
    if bindings is None:
        return Bindings()
    if isinstance(bindings, Bindings):
        return bindings
    if isinstance(bindings, Mapping):
        return Bindings.from_mapping(bindings)
    return Bindings.from_slots(bindings)


# ─────────────────────────── Evaluator ───────────────────────────────────

class EvalResult(BaseModel):
    value: float
    steps: list[str] = Field(default_factory=list)  # readable steps, leaves first
