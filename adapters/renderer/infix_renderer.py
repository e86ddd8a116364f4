"""
Adapter: InfixRenderer
Implements the Renderer port — fully parenthesised infix text.

    render(5 / x, DECIMAL)        -> "(5.00 / x)"
    render(-0.75, FRACTION)       -> "-3/4"
    render(log(x, 2), DECIMAL)    -> "log(x, 2.00)"
"""
from __future__ import annotations

import math
from typing import Optional, Union

from adapters.evaluator.functions import BASED_FUNCTIONS
from adapters.rational.stern_brocot import DEFAULT_MAX_DENOMINATOR, SternBrocotApproximator
from contracts import (
    ConstantNode,
    ExprNode,
    FunctionNode,
    OperatorNode,
    RenderMode,
    VariableNode,
)
from ports.rational_approximator import RationalApproximator


class InfixRenderer:
    """Renders expression trees as text, constants as decimals or fractions."""

    def __init__(
        self,
        approximator: Optional[RationalApproximator] = None,
        max_denominator: int = DEFAULT_MAX_DENOMINATOR,
        decimal_places: int = 2,
    ) -> None:
        self._approximator = approximator or SternBrocotApproximator()
        self._max_denominator = max_denominator
        self._decimal_places = decimal_places

    # -- Renderer protocol -------------------------------------------------

    def render(self, node: ExprNode, mode: Union[RenderMode, str] = RenderMode.DECIMAL) -> str:
        return self._render(node, RenderMode(mode))

    def render_constant(self, value: float, mode: Union[RenderMode, str] = RenderMode.DECIMAL) -> str:
        mode = RenderMode(mode)
        if mode is RenderMode.FRACTION and math.isfinite(value):
            frac = self._approximator.approximate(value, self._max_denominator)
            return f"{frac.numerator}/{frac.denominator}"
        # non-finite values come out as inf / -inf / nan
        return f"{value:.{self._decimal_places}f}"

    # -- Private -----------------------------------------------------------

    def _render(self, node: ExprNode, mode: RenderMode) -> str:
        if isinstance(node, ConstantNode):
            return self.render_constant(node.value, mode)

        if isinstance(node, VariableNode):
            return node.name

        if isinstance(node, OperatorNode):
            left = self._render(node.left, mode)
            right = self._render(node.right, mode)
            return f"({left} {node.op} {right})"

        if isinstance(node, FunctionNode):
            inner = self._render(node.input, mode)
            if node.name in BASED_FUNCTIONS:
                return f"{node.name}({inner}, {self.render_constant(node.base, mode)})"
            return f"{node.name}({inner})"

        raise TypeError(f"Unknown expression node type: {type(node)}")
