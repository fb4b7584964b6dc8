# microdiff/ops/__init__.py

# Convenience re-exports so users can do: from microdiff.ops import multiply, tanh, ...
from .arithmetic import add, subtract, multiply, divide, negate, power
from .transcendental import exp, tanh

__all__ = [
    "add", "subtract", "multiply", "divide", "negate", "power",
    "exp", "tanh",
]
