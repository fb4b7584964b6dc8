# microdiff/ops/arithmetic.py
import numpy as np
from ..core.node import Node, Operation, leaf, to_real, REAL_TYPES, ADD, MUL, POW


def _as_node(x):
    """Ensure x is a Node; otherwise wrap it as a leaf."""
    if isinstance(x, Node):
        return x
    if isinstance(x, REAL_TYPES):
        return leaf(x)
    raise TypeError(f"expected a Node or a real number, but got {type(x)}")


def _binary(x, y, f, tag):
    """
    Generic binary primitive:
      - wraps plain numbers as leaves
      - computes value = f(x.value, y.value) eagerly
      - records (tag, x, y); the backward rule is chosen by tag
    """
    x = _as_node(x)
    y = _as_node(y)
    with np.errstate(all="ignore"):
        value = f(x.value, y.value)
    return Node(value, Operation(tag, (x, y)))


def add(x, y):      return _binary(x, y, lambda a, b: a + b, ADD)
def multiply(x, y): return _binary(x, y, lambda a, b: a * b, MUL)


def power(x, k):
    """
    x ** k for a constant scalar exponent k.

    The exponent is not part of the graph: no gradient flows into it, so a
    Node exponent is rejected. Negative bases with fractional exponents give
    NaN, 0 ** negative gives Inf.
    """
    if isinstance(k, Node) or not isinstance(k, REAL_TYPES):
        raise TypeError(f"power() exponent must be a real number, but got {type(k)}")
    x = _as_node(x)
    k = float(to_real(k))
    with np.errstate(all="ignore"):
        value = x.value ** k
    return Node(value, Operation(POW, (x,), exponent=k))


# Composites; their gradients come from the add/mul/pow rules
def subtract(x, y):
    return add(x, multiply(leaf(-1.0), y))


def divide(x, y):
    return multiply(x, power(y, -1.0))


def negate(x):
    return multiply(leaf(-1.0), x)
