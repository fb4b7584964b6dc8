# microdiff/ops/transcendental.py
import numpy as np
from ..core.node import Node, Operation, EXP, TANH
from .arithmetic import _as_node


def exp(x):
    x = _as_node(x)
    with np.errstate(all="ignore"):
        ex = np.exp(x.value)
    return Node(ex, Operation(EXP, (x,)))


def tanh(x):
    x = _as_node(x)
    return Node(np.tanh(x.value), Operation(TANH, (x,)))
