# microdiff/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the graph. Each helper builds a fresh graph, so nothing
# from earlier passes leaks into the result.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from .node import Node, leaf
from .engine import backward


def value(x: Any) -> Any:
    """Return the numeric value of a Node; pass through plain numbers unchanged."""
    return x.value if isinstance(x, Node) else x


def _run(y: Any) -> None:
    if not isinstance(y, Node):
        # f did not touch its inputs: the output is constant
        return
    backward(y)


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[Node], Node], x0: float) -> float:
    """
    Derivative of a scalar function y=f(x) at x0.

    Example
    -------
    grad(lambda x: x * x + 3 * x, 2.0) -> 7.0
    """
    x = leaf(x0, name="x")
    _run(f(x))
    return float(x.gradient)


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, Node]], Node],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of y=f(vars) w.r.t. ALL inputs (dict form), from ONE reverse pass.

    Parameters
    ----------
    f       : function taking a dict {name: Node} and returning a Node
    inputs  : dict {name: number}

    Returns
    -------
    dict {name: float}  # gradients in the same key order as `inputs`
    """
    nodes: Dict[str, Node] = {k: leaf(v, name=k) for k, v in inputs.items()}
    _run(f(nodes))
    return {k: float(nodes[k].gradient) for k in inputs.keys()}


def grads_list(f: Callable[[List[Node]], Node],
               x0_list: Iterable[float]) -> List[float]:
    """
    Same as grads(), but the inputs are provided as a list and the result is a list
    of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    xs: List[Node] = [leaf(v, name=f"x{i}") for i, v in enumerate(x0_list)]
    _run(f(xs))
    return [float(x.gradient) for x in xs]
