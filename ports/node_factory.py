"""
Port: NodeFactory
Responsibility: building expression trees with exclusive ownership and releasing them.
"""
from typing import Optional, Protocol, runtime_checkable

from contracts import ConstantNode, ExprNode, FunctionNode, OperatorNode, VariableNode


@runtime_checkable
class NodeFactory(Protocol):
    def constant(self, value: float) -> ConstantNode:
        """Always succeeds."""
        ...

    def variable(self, name: str) -> VariableNode:
        """Raises InvalidVariableName unless name is one letter a-z."""
        ...

    def operator(self, op: str, left: ExprNode, right: ExprNode) -> OperatorNode:
        """
        Raises InvalidOperator unless op is one of + - * /.
        Takes ownership of left and right; raises NodeOwnershipError if either
        is already owned, released, foreign, or if left is right.
        On failure nothing is allocated and ownership is not transferred.
        """
        ...

    def function(self, name: str, input: ExprNode, base: Optional[float] = None) -> FunctionNode:
        """
        Raises InvalidFunction for names outside the function table.
        base=None selects the function's default base. Takes ownership of input.
        """
        ...

    def release(self, root: Optional[ExprNode]) -> int:
        """
        Releases root and every descendant exactly once (post-order).
        Returns the number of released nodes; release(None) == 0.
        Raises NodeOwnershipError for owned, released or foreign nodes.
        """
        ...

    @property
    def live_count(self) -> int:
        """Nodes built and not yet released."""
        ...
