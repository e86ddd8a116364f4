"""
expr_demo.py — demo of building, evaluating and rendering expression trees.

Usage:
  python expr_demo.py                           # 5 / x with x = 78, constant 0.1285548112
  python expr_demo.py --x 4 --constant 0.75
  python expr_demo.py --max-denominator 100 --division-policy raise

The script:
  1. Builds (5 / x) and sqrt(x) bottom-up in a NodeArena
  2. Evaluates both with the given binding for x
  3. Renders a single constant in decimal and fraction mode
  4. Releases every tree and reports the arena counters
"""
from __future__ import annotations

import argparse
import logging
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from adapters.evaluator.tree_evaluator import TreeEvaluator
from adapters.node_factory.node_arena import NodeArena
from adapters.rational.stern_brocot import SternBrocotApproximator
from adapters.renderer.infix_renderer import InfixRenderer
from config import Settings
from contracts import ExpressionError, RenderMode

logger = logging.getLogger("expr_tree")

_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False)
    return _CONSOLE


def _print_kv_table(title: str, rows: list[tuple[str, Any]]) -> None:
    table = Table(title=title, box=box.ASCII, show_header=False, pad_edge=False)
    table.add_column("Key", no_wrap=True, style="bold cyan")
    table.add_column("Value")
    for key, value in rows:
        table.add_row(str(key), str(value))
    _console().print(table)


def run(x: float, constant: float, settings: Settings) -> int:
    arena = NodeArena(max_depth=settings.max_depth)
    evaluator = TreeEvaluator(settings.division_policy, settings.unbound_policy)
    renderer = InfixRenderer(
        approximator=SternBrocotApproximator(settings.fraction_tolerance),
        max_denominator=settings.max_denominator,
        decimal_places=settings.decimal_places,
    )
    bindings = {"x": x}

    quotient = arena.operator("/", arena.constant(5), arena.variable("x"))
    root = arena.function("sqrt", arena.variable("x"))
    c = arena.constant(constant)

    rows: list[tuple[str, Any]] = []
    for tree in (quotient, root):
        try:
            value = evaluator.evaluate(tree, bindings)
        except ExpressionError as exc:
            value = f"error: {exc}"
        rows.append((renderer.render(tree, RenderMode.DECIMAL), value))
    _print_kv_table(f"Evaluation (x = {x:g})", rows)

    _print_kv_table(f"Constant {constant!r}", [
        ("decimal", renderer.render(c, RenderMode.DECIMAL)),
        ("fraction", renderer.render(c, RenderMode.FRACTION)),
    ])

    built = arena.allocated_count
    released = sum(arena.release(tree) for tree in (quotient, root, c))
    _print_kv_table("Arena", [
        ("built", built),
        ("released", released),
        ("live", arena.live_count),
    ])
    return 0 if arena.live_count == 0 else 1


def main() -> None:
    settings = Settings()
    parser = argparse.ArgumentParser(
        description="Build, evaluate and render a few expression trees.",
    )
    parser.add_argument("--x", type=float, default=78.0, help="Value bound to variable x")
    parser.add_argument("--constant", type=float, default=0.1285548112,
                        help="Constant rendered in decimal and fraction mode")
    parser.add_argument("--max-denominator", type=int, default=settings.max_denominator)
    parser.add_argument("--division-policy", choices=["suppress", "raise"],
                        default=settings.division_policy)
    args = parser.parse_args()

    settings = settings.model_copy(update={
        "max_denominator": args.max_denominator,
        "division_policy": args.division_policy,
    })
    logging.basicConfig(level=settings.log_level.upper())
    logger.debug("Demo settings: %s", settings.model_dump())

    raise SystemExit(run(args.x, args.constant, settings))


if __name__ == "__main__":
    main()
