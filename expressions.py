"""
expressions.py — Plain-function API over the default adapters.

    root = make_operator("/", make_constant(5), make_variable("x"))
    evaluate(root, {"x": 78})           # 0.0641...
    render(root)                        # "(5.00 / x)"
    render(make_constant(0.5), "fraction")  # "1/2"
    release(root)                       # 3

Defaults (policies, max denominator, depth bound) come from Settings,
i.e. EXPR_TREE_* environment variables. The default arena is created on
first use; reset_defaults() drops it together with the cached settings.

The default arena keeps a reference to every node built through make_*
until its tree is passed to release(); callers that only evaluate or render
must still release their roots, or the nodes stay in memory for the life of
the process.
"""
from __future__ import annotations

from fractions import Fraction
from functools import lru_cache
from typing import Optional, Union

from adapters.evaluator.tree_evaluator import TreeEvaluator
from adapters.node_factory.node_arena import NodeArena
from adapters.rational.stern_brocot import SternBrocotApproximator
from adapters.rational.stern_brocot import approximate as _approximate
from adapters.renderer.infix_renderer import InfixRenderer
from config import Settings
from contracts import (
    BindingsLike,
    ConstantNode,
    DivisionPolicy,
    EvalResult,
    ExprNode,
    FunctionNode,
    OperatorNode,
    RenderMode,
    UnboundPolicy,
    VariableNode,
)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


@lru_cache(maxsize=1)
def default_arena() -> NodeArena:
    return NodeArena(max_depth=get_settings().max_depth)


def reset_defaults() -> None:
    get_settings.cache_clear()
    default_arena.cache_clear()


# ─────────────────────────── Construction ────────────────────────────────

def make_constant(value: float) -> ConstantNode:
    return default_arena().constant(value)


def make_variable(name: str) -> VariableNode:
    return default_arena().variable(name)


def make_operator(op: str, left: ExprNode, right: ExprNode) -> OperatorNode:
    return default_arena().operator(op, left, right)


def make_function(name: str, input: ExprNode, base: Optional[float] = None) -> FunctionNode:
    return default_arena().function(name, input, base)


def release(root: Optional[ExprNode]) -> int:
    return default_arena().release(root)


# ─────────────────────────── Evaluation / rendering ──────────────────────

def _evaluator(
    division_policy: Union[DivisionPolicy, str, None],
    unbound_policy: Union[UnboundPolicy, str, None],
) -> TreeEvaluator:
    settings = get_settings()
    return TreeEvaluator(
        division_policy=division_policy or settings.division_policy,
        unbound_policy=unbound_policy or settings.unbound_policy,
    )


def evaluate(
    root: ExprNode,
    bindings: BindingsLike = None,
    *,
    division_policy: Union[DivisionPolicy, str, None] = None,
    unbound_policy: Union[UnboundPolicy, str, None] = None,
) -> float:
    return _evaluator(division_policy, unbound_policy).evaluate(root, bindings)


def eval_expr(
    root: ExprNode,
    bindings: BindingsLike = None,
    *,
    division_policy: Union[DivisionPolicy, str, None] = None,
    unbound_policy: Union[UnboundPolicy, str, None] = None,
) -> EvalResult:
    return _evaluator(division_policy, unbound_policy).eval_expr(root, bindings)


def render(root: ExprNode, mode: Union[RenderMode, str] = RenderMode.DECIMAL) -> str:
    settings = get_settings()
    renderer = InfixRenderer(
        approximator=SternBrocotApproximator(settings.fraction_tolerance),
        max_denominator=settings.max_denominator,
        decimal_places=settings.decimal_places,
    )
    return renderer.render(root, mode)


def approximate(value: float, max_denominator: Optional[int] = None) -> Fraction:
    settings = get_settings()
    if max_denominator is None:
        max_denominator = settings.max_denominator
    return _approximate(value, max_denominator, settings.fraction_tolerance)
