"""
Adapter: NodeArena
Implements the NodeFactory port — builds ExprNode trees and tracks ownership.

Every node built by the arena is one "allocation". A composite node takes
ownership of its children; a child can have exactly one owner, so trees stay
strict trees (no sharing, no cycles). release() tears a whole tree down in
post-order and updates the counters; the tree is collected first, so a
release that fails leaves the arena unchanged:

    allocated_count: nodes ever built (or adopted)
    released_count:  nodes released
    live_count:      allocated_count - released_count

Nodes are tracked by identity; the arena holds a reference to every live node.
Not thread-safe: one arena per builder.
"""
from __future__ import annotations

import logging
from typing import Optional

from adapters.evaluator.functions import DEFAULT_BASES
from contracts import (
    ConstantNode,
    ExprNode,
    FunctionNode,
    NodeOwnershipError,
    OperatorNode,
    TreeTooDeep,
    VariableNode,
    check_function_name,
    check_operator,
    check_variable_name,
    children,
)

logger = logging.getLogger("expr_tree.arena")


class NodeArena:
    """Owning factory for expression nodes."""

    def __init__(self, max_depth: Optional[int] = None) -> None:
        if max_depth is not None and max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {max_depth}")
        self.max_depth = max_depth
        self._live: dict[int, ExprNode] = {}
        self._depth: dict[int, int] = {}
        self._owned: set[int] = set()
        self.allocated_count = 0
        self.released_count = 0

    # -- NodeFactory protocol ----------------------------------------------

    def constant(self, value: float) -> ConstantNode:
        return self._register(ConstantNode(value=value), depth=1)

    def variable(self, name: str) -> VariableNode:
        check_variable_name(name)
        return self._register(VariableNode(name=name), depth=1)

    def operator(self, op: str, left: ExprNode, right: ExprNode) -> OperatorNode:
        check_operator(op)
        depth = self._check_children(left, right)
        node = OperatorNode(op=op, left=left, right=right)
        return self._register(node, depth=depth, owns=(left, right))

    def function(self, name: str, input: ExprNode, base: Optional[float] = None) -> FunctionNode:
        check_function_name(name)
        depth = self._check_children(input)
        if base is None:
            base = DEFAULT_BASES[name]
        node = FunctionNode(name=name, input=input, base=base)
        return self._register(node, depth=depth, owns=(input,))

    def release(self, root: Optional[ExprNode]) -> int:
        if root is None:
            return 0
        if not self.is_live(root):
            raise NodeOwnershipError("Node is not live in this arena (released or foreign)")
        if id(root) in self._owned:
            raise NodeOwnershipError("Only a root can be released; node is owned by a parent")
        order = post_order(root)
        for node in order:
            if not self.is_live(node):
                raise NodeOwnershipError("Tree contains a node that is not live in this arena")
        for node in order:
            key = id(node)
            del self._live[key]
            del self._depth[key]
            self._owned.discard(key)
        self.released_count += len(order)
        count = len(order)
        logger.debug("Released tree of %d node(s); %d still live", count, self.live_count)
        return count

    @property
    def live_count(self) -> int:
        return self.allocated_count - self.released_count

    # -- Extras ------------------------------------------------------------

    def adopt(self, root: ExprNode) -> ExprNode:
        """
        Takes ownership of a tree built directly from the contract models.
        Raises NodeOwnershipError if any node is already tracked or appears
        twice in the tree; TreeTooDeep if the depth bound is exceeded.
        Nothing is registered on failure.
        """
        order = post_order(root)
        seen: set[int] = set()
        for node in order:
            if id(node) in seen:
                raise NodeOwnershipError("Node appears more than once in the tree")
            if id(node) in self._live:
                raise NodeOwnershipError("Node is already tracked by this arena")
            seen.add(id(node))

        depths: dict[int, int] = {}
        for node in order:  # post-order: children before parents
            kids = children(node)
            depth = 1 + max((depths[id(k)] for k in kids), default=0)
            if self.max_depth is not None and depth > self.max_depth:
                raise TreeTooDeep(f"Tree depth exceeds {self.max_depth}")
            depths[id(node)] = depth

        for node in order:
            self._register(node, depth=depths[id(node)], owns=children(node))
        return root

    def is_live(self, node: ExprNode) -> bool:
        return self._live.get(id(node)) is node

    def is_root(self, node: ExprNode) -> bool:
        return self.is_live(node) and id(node) not in self._owned

    def depth(self, node: ExprNode) -> int:
        if not self.is_live(node):
            raise NodeOwnershipError("Node is not live in this arena (released or foreign)")
        return self._depth[id(node)]

    # -- Private -----------------------------------------------------------

    def _check_children(self, *kids: ExprNode) -> int:
        """Validates that kids can be adopted; returns the new node's depth."""
        for kid in kids:
            if not self.is_live(kid):
                raise NodeOwnershipError("Child is not live in this arena (released or foreign)")
            if id(kid) in self._owned:
                raise NodeOwnershipError("Child is already owned by another node")
        if len({id(k) for k in kids}) != len(kids):
            raise NodeOwnershipError("The same node cannot be used twice as a child")

        depth = 1 + max(self._depth[id(k)] for k in kids)
        if self.max_depth is not None and depth > self.max_depth:
            raise TreeTooDeep(f"Tree depth would exceed {self.max_depth}")
        return depth

    def _register(self, node, depth: int, owns: tuple[ExprNode, ...] = ()):
        for kid in owns:
            self._owned.add(id(kid))
        self._live[id(node)] = node
        self._depth[id(node)] = depth
        self.allocated_count += 1
        return node


def post_order(root: Optional[ExprNode]) -> list[ExprNode]:
    """Nodes of the tree, children before parents, without recursion."""
    if root is None:
        return []
    order: list[ExprNode] = []
    stack = [root]
    while stack:
        node = stack.pop()
        order.append(node)
        stack.extend(children(node))
    # reversed pre-order (node, right, left) is left-to-right post-order
    order.reverse()
    return order


def count_nodes(root: Optional[ExprNode]) -> int:
    return len(post_order(root))


def tree_depth(root: Optional[ExprNode]) -> int:
    depths: dict[int, int] = {}
    for node in post_order(root):
        depths[id(node)] = 1 + max((depths[id(k)] for k in children(node)), default=0)
    return depths[id(root)] if root is not None else 0
