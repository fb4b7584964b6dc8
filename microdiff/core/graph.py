# microdiff/core/graph.py
from __future__ import annotations
from typing import List, Set
from .node import Node


def topological_order(root: Node) -> List[Node]:
    """
    Every node reachable from `root`, each exactly once, operands before the
    nodes that consume them.

    Depth-first post-order, operands visited left to right, visited set keyed
    by Node.id. An explicit work stack replaces recursion so long chains do
    not hit the interpreter's recursion limit; the resulting order is the
    same as the recursive formulation:

        visit(n):
            if n.id in seen: return
            seen.add(n.id)
            for p in n.operands: visit(p)
            order.append(n)

    Read forward this is an evaluation order, read backward it is the order
    for gradient propagation.
    """
    seen: Set[int] = set()
    order: List[Node] = []
    # (node, expanded): expanded=True means all operands have been emitted
    stack = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            order.append(node)
            continue
        if node.id in seen:
            continue
        seen.add(node.id)
        stack.append((node, True))
        # Reversed so that the leftmost operand is popped first
        for operand in reversed(node.operands):
            if operand.id not in seen:
                stack.append((operand, False))
    return order

