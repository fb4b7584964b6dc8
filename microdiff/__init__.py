# microdiff/__init__.py
# Reverse-mode automatic differentiation over scalar computation graphs

from .core.node import Node, Operation, leaf
from .core.graph import topological_order
from .core.engine import backward, zero_grad
from .core.seeds import grad, grads, grads_list, value
from .core.graph_utils import get_graph_stats, format_graph

from .ops import add, subtract, multiply, divide, negate, power, exp, tanh

from .errors import MicrodiffError, DimensionMismatchError

from . import nn
from .nn import Neuron, Layer, MLP, NetworkConfig, mse_loss

__all__ = [
    # Core
    'Node',
    'Operation',
    'leaf',
    'topological_order',
    'backward',
    'zero_grad',
    'grad',
    'grads',
    'grads_list',
    'value',
    'get_graph_stats',
    'format_graph',
    # Operators
    'add',
    'subtract',
    'multiply',
    'divide',
    'negate',
    'power',
    'exp',
    'tanh',
    # Errors
    'MicrodiffError',
    'DimensionMismatchError',
    # Networks
    'nn',
    'Neuron',
    'Layer',
    'MLP',
    'NetworkConfig',
    'mse_loss',
]
