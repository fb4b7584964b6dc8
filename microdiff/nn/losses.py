# microdiff/nn/losses.py
from typing import Sequence

from ..core.node import Node
from ..ops.arithmetic import add, subtract, multiply, power
from ..errors import DimensionMismatchError, MicrodiffError


def mse_loss(predictions: Sequence, targets: Sequence) -> Node:
    """
    Mean squared error (1/n) Σ (p_i - t_i)^2 as a graph node.
    Predictions and targets may be Nodes or plain numbers.
    """
    if len(predictions) != len(targets):
        raise DimensionMismatchError(len(predictions), len(targets), "targets")
    if len(predictions) == 0:
        raise MicrodiffError("mse_loss() needs at least one prediction")

    total = None
    for p, t in zip(predictions, targets):
        sq = power(subtract(p, t), 2)
        total = sq if total is None else add(total, sq)
    return multiply(total, 1.0 / len(predictions))
