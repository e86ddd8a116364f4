"""
Port: Renderer
Responsibility: human-readable rendering of an expression tree.
"""
from typing import Protocol, runtime_checkable

from contracts import ExprNode, RenderMode


@runtime_checkable
class Renderer(Protocol):
    def render(self, node: ExprNode, mode: RenderMode = RenderMode.DECIMAL) -> str:
        """
        Renders the tree:
          - constants with 2 decimals (DECIMAL) or as "n/d" (FRACTION)
          - variables as the bare letter
          - operators as "(left op right)"
          - functions as "name(input)" or "name(input, base)"
        Children are rendered recursively in the same mode.
        """
        ...
