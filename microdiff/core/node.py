# microdiff/core/node.py
from __future__ import annotations
import itertools
import numpy as np
from dataclasses import dataclass
from typing import Any, Optional, Tuple

# Closed set of operation tags a node can carry
LEAF = "leaf"
ADD = "add"
MUL = "mul"
POW = "pow"
EXP = "exp"
TANH = "tanh"

OP_TAGS = (LEAF, ADD, MUL, POW, EXP, TANH)

# Real scalars a node can hold; complex numbers are rejected
REAL_TYPES = (int, float, np.integer, np.floating)

# Process-wide id source; ids are never reused
_ID_COUNTER = itertools.count()


@dataclass(frozen=True)
class Operation:
    """
    How a node was produced.

    Attributes
    ----------
    tag      : str
        One of OP_TAGS.
    operands : Tuple[Node, ...]
        Operand nodes, left to right. Empty for a leaf, two for add/mul,
        one for pow/exp/tanh.
    exponent : Optional[float]
        Scalar exponent of a "pow" node; None for every other tag.
    """
    tag: str
    operands: Tuple["Node", ...] = ()
    exponent: Optional[float] = None

    def __repr__(self):
        if self.tag == POW:
            return f"Operation(pow, #{self.operands[0].id}, k={self.exponent!r})"
        ids = ", ".join(f"#{n.id}" for n in self.operands)
        return f"Operation({self.tag}, {ids})" if ids else f"Operation({self.tag})"


LEAF_OPERATION = Operation(LEAF)


def to_real(x) -> np.float64:
    """Convert a real scalar to np.float64; ints beyond float range become ±inf."""
    try:
        return np.float64(x)
    except OverflowError:
        return np.float64(np.inf if x > 0 else -np.inf)


class Node:
    """
    One scalar quantity in the computation graph.

    Attributes
    ----------
    id        : int
        Process-unique, monotonically increasing creation index.
    value     : np.float64
        Forward (primal) value, fixed at construction.
    gradient  : np.float64
        Reverse-mode accumulator; 0.0 at creation, written by the backward pass.
    operation : Operation
        Tag and operands this node was computed from.
    name      : Optional[str]
        Optional debug/pretty-print name.

    Nodes are created through `leaf(...)` or one of the operators in
    `microdiff.ops`; the constructor is not meant to be called directly with
    a non-leaf operation from user code.
    """
    __slots__ = ("_id", "_value", "_operation", "gradient", "name")

    def __init__(self, value: Any, operation: Operation = LEAF_OPERATION,
                 *, name: Optional[str] = None):
        if isinstance(value, Node) or not isinstance(value, REAL_TYPES):
            raise TypeError(
                f"Node only accepts real numeric values (int, float, numpy scalar), "
                f"but got {type(value)}"
            )
        self._id = next(_ID_COUNTER)
        self._value = to_real(value)
        self._operation = operation
        self.gradient = np.float64(0.0)
        self.name = name

    @property
    def id(self) -> int:
        return self._id

    @property
    def value(self) -> np.float64:
        return self._value

    @property
    def operation(self) -> Operation:
        return self._operation

    @property
    def operands(self) -> Tuple["Node", ...]:
        return self._operation.operands

    @property
    def is_leaf(self) -> bool:
        return self._operation.tag == LEAF

    def __hash__(self):
        return hash(self._id)

    def __repr__(self):
        label = f", name={self.name!r}" if self.name else ""
        return (f"Node(#{self._id}, value={float(self._value)!r}, "
                f"gradient={float(self.gradient)!r}, op={self._operation.tag}{label})")

    # Operator overloading; the numeric rules live in microdiff.ops
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import subtract
        return subtract(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import subtract
        return subtract(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import multiply
        return multiply(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import multiply
        return multiply(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import divide
        return divide(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import divide
        return divide(other, self)

    def __neg__(self):
        from ..ops.arithmetic import negate
        return negate(self)

    def __pow__(self, exponent):
        from ..ops.arithmetic import power
        return power(self, exponent)

    def exp(self):
        from ..ops.transcendental import exp
        return exp(self)

    def tanh(self):
        from ..ops.transcendental import tanh
        return tanh(self)

    def backward(self):
        from .engine import backward
        return backward(self)


def leaf(x: Any, name: Optional[str] = None) -> Node:
    """Create an input/constant node with no operands."""
    return Node(x, LEAF_OPERATION, name=name)
