"""
Adapter: TreeEvaluator
Implements the Evaluator port — recursive walk over the ExprNode tree in floats.

evaluate():  value only
eval_expr(): value plus readable steps (one per operator/function application)

Division by an operand that is exactly 0 follows the division policy:
SUPPRESS returns 0.0, RAISE raises DivisionByZero. Variables whose slot was
never set read as 0.0 under UnboundPolicy.ZERO and raise UnboundVariable
under UnboundPolicy.RAISE.
"""
from __future__ import annotations

import logging
from typing import Optional, Union

from adapters.evaluator.functions import BASED_FUNCTIONS, FUNCTIONS
from contracts import (
    Bindings,
    BindingsLike,
    ConstantNode,
    DivisionByZero,
    DivisionPolicy,
    EvalResult,
    ExprNode,
    FunctionNode,
    InvalidFunction,
    InvalidOperator,
    OperatorNode,
    UnboundPolicy,
    UnboundVariable,
    VariableNode,
    as_bindings,
)

logger = logging.getLogger("expr_tree.evaluator")

# Operator symbol -> float operation; "/" is handled by the division policy
_OP_FUNCS = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": lambda a, b: a / b,
}


class TreeEvaluator:
    """Float evaluator for expression trees."""

    def __init__(
        self,
        division_policy: Union[DivisionPolicy, str] = DivisionPolicy.SUPPRESS,
        unbound_policy: Union[UnboundPolicy, str] = UnboundPolicy.ZERO,
    ) -> None:
        self.division_policy = DivisionPolicy(division_policy)
        self.unbound_policy = UnboundPolicy(unbound_policy)

    # -- Evaluator protocol ------------------------------------------------

    def evaluate(self, node: ExprNode, bindings: BindingsLike = None) -> float:
        return self._eval(node, as_bindings(bindings), None)

    def eval_expr(self, node: ExprNode, bindings: BindingsLike = None) -> EvalResult:
        """
        Walks the tree once, collecting steps such as "5 / 78 = 0.0641026".
        """
        steps: list[str] = []
        value = self._eval(node, as_bindings(bindings), steps)
        return EvalResult(value=value, steps=steps)

    # -- Private -----------------------------------------------------------

    def _eval(self, node: ExprNode, env: Bindings, steps: Optional[list[str]]) -> float:
        if isinstance(node, ConstantNode):
            return node.value

        if isinstance(node, VariableNode):
            return self._lookup(node, env, steps)

        if isinstance(node, OperatorNode):
            left = self._eval(node.left, env, steps)
            right = self._eval(node.right, env, steps)

            fn = _OP_FUNCS.get(node.op)
            if fn is None:
                raise InvalidOperator(f"Unsupported operator {node.op!r}")

            if node.op == "/" and right == 0:
                result = self._divide_by_zero(left)
            else:
                result = fn(left, right)

            if steps is not None:
                steps.append(f"{_fmt(left)} {node.op} {_fmt(right)} = {_fmt(result)}")
            return result

        if isinstance(node, FunctionNode):
            x = self._eval(node.input, env, steps)

            fn = FUNCTIONS.get(node.name)
            if fn is None:
                raise InvalidFunction(f"Unknown function {node.name!r}")

            result = fn(x, node.base)
            if steps is not None:
                args = f"{_fmt(x)}, {_fmt(node.base)}" if node.name in BASED_FUNCTIONS else _fmt(x)
                steps.append(f"{node.name}({args}) = {_fmt(result)}")
            return result

        raise TypeError(f"Unknown expression node type: {type(node)}")

    def _lookup(self, node: VariableNode, env: Bindings, steps: Optional[list[str]]) -> float:
        if not env.is_bound(node.name):
            if self.unbound_policy is UnboundPolicy.RAISE:
                raise UnboundVariable(node.name)
            value = 0.0
        else:
            value = env.get(node.name)
        if steps is not None:
            steps.append(f"{node.name} = {_fmt(value)}")
        return value

    def _divide_by_zero(self, left: float) -> float:
        if self.division_policy is DivisionPolicy.RAISE:
            raise DivisionByZero(f"Division of {_fmt(left)} by zero")
        logger.debug("Division of %r by zero suppressed; result 0.0", left)
        return 0.0


def _fmt(v: float) -> str:
    """Compact float representation for steps."""
    return f"{v:g}"
