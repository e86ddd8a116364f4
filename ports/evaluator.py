"""
Port: Evaluator
Responsibility: numeric evaluation of an expression tree against variable bindings.
"""
from typing import Protocol, runtime_checkable

from contracts import BindingsLike, EvalResult, ExprNode


@runtime_checkable
class Evaluator(Protocol):
    def evaluate(self, node: ExprNode, bindings: BindingsLike = None) -> float:
        """
        Evaluates the tree to a float. Pure: the tree is never mutated.
        bindings: Bindings, {letter: value} or a sequence of 26 slot values.
        Operands are evaluated left to right, both always.
        Raises DivisionByZero / UnboundVariable only under the RAISE policies.
        Raises FunctionDomainError when a function leaves its real domain.
        """
        ...

    def eval_expr(self, node: ExprNode, bindings: BindingsLike = None) -> EvalResult:
        """
        Same walk as evaluate(), additionally returning readable steps,
        one per operator/function application, leaves first.
        """
        ...
