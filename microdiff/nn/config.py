"""
Network configuration.

Shape and initialization settings for a multi-layer perceptron, validated
in one place and turned into a seeded MLP by `build()`.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence
import numpy as np

from ..errors import MicrodiffError
from .network import MLP


@dataclass
class NetworkConfig:
    """
    Attributes:
        n_inputs (int): Width of the input vector
        layer_sizes (List[int]): Neurons per layer, input side first
        init_low (float): Lower bound of the uniform weight initialization
        init_high (float): Upper bound of the uniform weight initialization
        seed (Optional[int]): Seed for numpy's Generator; None draws fresh entropy
        nonlinear_output (bool): Apply tanh in the output layer
    """
    n_inputs: int = 3
    layer_sizes: List[int] = field(default_factory=lambda: [4, 4, 1])
    init_low: float = -1.0
    init_high: float = 1.0
    seed: Optional[int] = None
    nonlinear_output: bool = True

    def validate(self) -> "NetworkConfig":
        if self.n_inputs < 1:
            raise MicrodiffError(f"n_inputs must be positive, got {self.n_inputs}")
        if not self.layer_sizes:
            raise MicrodiffError("layer_sizes must name at least one layer")
        if any(n < 1 for n in self.layer_sizes):
            raise MicrodiffError(f"layer sizes must be positive, got {list(self.layer_sizes)}")
        if not self.init_low < self.init_high:
            raise MicrodiffError(
                f"empty initialization range [{self.init_low}, {self.init_high})"
            )
        return self

    @staticmethod
    def parse_layers(spec: str) -> List[int]:
        """Parse '4,4,1' into [4, 4, 1]."""
        try:
            return [int(part) for part in spec.split(",") if part.strip()]
        except ValueError as exc:
            raise MicrodiffError(f"invalid layer specification {spec!r}") from exc

    def rng(self) -> np.random.Generator:
        return np.random.default_rng(self.seed)

    def build(self) -> MLP:
        self.validate()
        return MLP(
            self.n_inputs, self.layer_sizes,
            rng=self.rng(),
            init_range=(self.init_low, self.init_high),
            nonlinear_output=self.nonlinear_output,
        )

    @property
    def shape(self) -> Sequence[int]:
        return [self.n_inputs] + list(self.layer_sizes)
