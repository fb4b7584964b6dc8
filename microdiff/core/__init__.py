# microdiff/core/__init__.py

"""
Core public API for the microdiff package.

Exports:
    Node              : One scalar value in the computation graph.
    Operation         : Tag + operands record describing how a node was produced.
    leaf              : Create an input/constant node.
    topological_order : Operands-first ordering of everything under a root.
    backward          : Run a single reverse pass from a root node.
    zero_grad         : Reset the gradients of everything under a root.
    grad, grads,
    grads_list        : Convenience: derivative(s) of a function at a point.
    value             : Convenience: extract the primal value from a Node.
"""

from .node import Node, Operation, leaf
from .graph import topological_order
from .engine import backward, zero_grad
from .seeds import grad, grads, grads_list, value

__all__ = [
    "Node", "Operation", "leaf",
    "topological_order",
    "backward", "zero_grad",
    "grad", "grads", "grads_list", "value",
]
