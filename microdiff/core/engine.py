# microdiff/core/engine.py
from __future__ import annotations
import logging
import numpy as np
from typing import List
from .node import Node, LEAF, ADD, MUL, POW, EXP, TANH
from .graph import topological_order

logger = logging.getLogger(__name__)


def zero_grad(root: Node) -> None:
    """
    Set the gradient of every node reachable from `root` to zero.
    The backward pass never does this on its own; call it before reusing a
    graph whose gradients have already been accumulated.
    """
    for node in topological_order(root):
        node.gradient = np.float64(0.0)


def backward(root: Node) -> List[Node]:
    """
    Run a single reverse pass from `root`.

    After the call, every ancestor n of `root` holds ∂root/∂n in n.gradient
    (added on top of whatever it held before; only root.gradient is
    overwritten, with the seed 1.0).

    Returns the topological order that was processed.

    Notes:
        - For each node, we propagate: operand.gradient += g * (∂node/∂operand).
        - Nodes are visited in reverse topological order, so a node's
          gradient is complete before its own local rule runs.
        - NaN/Inf propagate silently.
    """
    # Seed: dy/dy = 1
    root.gradient = np.float64(1.0)

    order = topological_order(root)
    logger.debug("backward: root #%d, %d nodes in topological order", root.id, len(order))

    with np.errstate(all="ignore"):
        for node in reversed(order):
            _propagate(node)
    return order


def _propagate(node: Node) -> None:
    """Apply the local chain-rule step of `node` to its operands."""
    op = node.operation
    tag = op.tag
    g = node.gradient

    if tag == LEAF:
        return

    if tag == ADD:
        # c = a + b  -> dc/da = dc/db = 1
        a, b = op.operands
        a.gradient += g
        b.gradient += g
        return

    if tag == MUL:
        # c = a * b  -> dc/da = b, dc/db = a
        a, b = op.operands
        a.gradient += b.value * g
        b.gradient += a.value * g
        return

    if tag == POW:
        # c = a^k    -> dc/da = k * a^(k-1); k is a constant, no gradient
        (a,) = op.operands
        k = op.exponent
        a.gradient += k * a.value ** (k - 1.0) * g
        return

    if tag == EXP:
        # c = e^a    -> dc/da = e^a = c
        (a,) = op.operands
        a.gradient += node.value * g
        return

    if tag == TANH:
        # c = tanh(a) -> dc/da = 1 - tanh(a)^2 = 1 - c^2
        (a,) = op.operands
        a.gradient += (1.0 - node.value ** 2) * g
        return

    raise ValueError(f"unknown operation tag {tag!r} on node #{node.id}")
