# microdiff/nn/__init__.py

from .network import Module, Neuron, Layer, MLP
from .losses import mse_loss
from .config import NetworkConfig

__all__ = [
    "Module", "Neuron", "Layer", "MLP",
    "mse_loss",
    "NetworkConfig",
]
