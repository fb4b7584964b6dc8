"""
Feed-forward network built from scalar graph nodes.

    Neuron : tanh(Σ w_i * x_i + b)
    Layer  : several neurons applied to the same input vector
    MLP    : layers composed sequentially

Every forward call builds fresh graph nodes on top of the parameter leaves,
so `backward(loss)` fills the parameters' gradients directly. Node values are
immutable, therefore a gradient step swaps each parameter for a new leaf
(see `apply_gradients`).
"""

import logging
import numpy as np
from typing import List, Optional, Sequence, Tuple

from ..core.node import Node, leaf
from ..ops.arithmetic import add, multiply, _as_node
from ..ops.transcendental import tanh
from ..errors import DimensionMismatchError, MicrodiffError

logger = logging.getLogger(__name__)

DEFAULT_INIT_RANGE = (-1.0, 1.0)


class Module:
    """Shared parameter bookkeeping for Neuron, Layer and MLP."""

    def parameters(self) -> List[Node]:
        return []

    def zero_grad(self) -> None:
        for p in self.parameters():
            p.gradient = np.float64(0.0)

    def apply_gradients(self, learning_rate: float) -> None:
        """Replace every parameter p with leaf(p.value - learning_rate * p.gradient)."""
        raise NotImplementedError

    def num_parameters(self) -> int:
        return len(self.parameters())


def _check_width(x: Sequence, expected: int, where: str) -> None:
    if len(x) != expected:
        raise DimensionMismatchError(expected, len(x), where)


def _step(p: Node, learning_rate: float) -> Node:
    return leaf(p.value - learning_rate * p.gradient, name=p.name)


class Neuron(Module):
    """
    Weighted sum plus bias, optionally through tanh.

    Args:
        n_inputs: Number of inputs (length of the weight vector)
        nonlinear: Apply tanh to the weighted sum (default True)
        rng: numpy Generator used for initialization
        init_range: (low, high) of the uniform initialization
    """

    def __init__(self, n_inputs: int, nonlinear: bool = True,
                 rng: Optional[np.random.Generator] = None,
                 init_range: Tuple[float, float] = DEFAULT_INIT_RANGE):
        if n_inputs < 1:
            raise MicrodiffError(f"a neuron needs at least one input, got {n_inputs}")
        rng = rng if rng is not None else np.random.default_rng()
        low, high = init_range
        self.n_inputs = n_inputs
        self.nonlinear = nonlinear
        self.weights: List[Node] = [
            leaf(w, name=f"w{i}") for i, w in enumerate(rng.uniform(low, high, n_inputs))
        ]
        self.bias: Node = leaf(rng.uniform(low, high), name="b")

    def __call__(self, x: Sequence) -> Node:
        _check_width(x, self.n_inputs, "neuron")
        x = [_as_node(xi) for xi in x]

        act = multiply(self.weights[0], x[0])
        for w, xi in zip(self.weights[1:], x[1:]):
            act = add(act, multiply(w, xi))
        act = add(act, self.bias)
        return tanh(act) if self.nonlinear else act

    def parameters(self) -> List[Node]:
        return self.weights + [self.bias]

    def apply_gradients(self, learning_rate: float) -> None:
        self.weights = [_step(w, learning_rate) for w in self.weights]
        self.bias = _step(self.bias, learning_rate)

    def __repr__(self):
        kind = "Tanh" if self.nonlinear else "Linear"
        return f"{kind}Neuron({self.n_inputs})"


class Layer(Module):
    """`n_outputs` neurons that all read the same `n_inputs`-wide vector."""

    def __init__(self, n_inputs: int, n_outputs: int, nonlinear: bool = True,
                 rng: Optional[np.random.Generator] = None,
                 init_range: Tuple[float, float] = DEFAULT_INIT_RANGE):
        if n_outputs < 1:
            raise MicrodiffError(f"a layer needs at least one neuron, got {n_outputs}")
        rng = rng if rng is not None else np.random.default_rng()
        self.n_inputs = n_inputs
        self.neurons = [Neuron(n_inputs, nonlinear, rng, init_range) for _ in range(n_outputs)]

    def __call__(self, x: Sequence) -> List[Node]:
        _check_width(x, self.n_inputs, "layer")
        # convert once so every neuron shares the same input leaves
        x = [_as_node(xi) for xi in x]
        return [n(x) for n in self.neurons]

    def parameters(self) -> List[Node]:
        return [p for neuron in self.neurons for p in neuron.parameters()]

    def apply_gradients(self, learning_rate: float) -> None:
        for neuron in self.neurons:
            neuron.apply_gradients(learning_rate)

    def __repr__(self):
        return f"Layer([{', '.join(str(n) for n in self.neurons)}])"


class MLP(Module):
    """
    Multi-layer perceptron.

    Args:
        n_inputs: Width of the input vector
        layer_sizes: Neurons per layer; layer i maps sizes[i] -> sizes[i+1]
            with sizes = [n_inputs] + layer_sizes
        rng: numpy Generator used for initialization
        init_range: (low, high) of the uniform initialization
        nonlinear_output: Apply tanh in the last layer too (default True)
    """

    def __init__(self, n_inputs: int, layer_sizes: Sequence[int],
                 rng: Optional[np.random.Generator] = None,
                 init_range: Tuple[float, float] = DEFAULT_INIT_RANGE,
                 nonlinear_output: bool = True):
        if not layer_sizes:
            raise MicrodiffError("an MLP needs at least one layer")
        rng = rng if rng is not None else np.random.default_rng()
        self.n_inputs = n_inputs
        sizes = [n_inputs] + list(layer_sizes)
        last = len(layer_sizes) - 1
        self.layers = [
            Layer(sizes[i], sizes[i + 1],
                  nonlinear=(i != last or nonlinear_output),
                  rng=rng, init_range=init_range)
            for i in range(len(layer_sizes))
        ]
        logger.debug("MLP %s built with %d parameters", sizes, self.num_parameters())

    def __call__(self, x: Sequence) -> List[Node]:
        _check_width(x, self.n_inputs, "network")
        for layer in self.layers:
            x = layer(x)
        return x

    def parameters(self) -> List[Node]:
        return [p for layer in self.layers for p in layer.parameters()]

    def apply_gradients(self, learning_rate: float) -> None:
        for layer in self.layers:
            layer.apply_gradients(learning_rate)

    def __repr__(self):
        return f"MLP of [{', '.join(str(layer) for layer in self.layers)}]"
