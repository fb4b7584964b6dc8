"""
microdiff demo.

Replays a few hand-built expressions with their gradients, then trains a
small MLP on a fixed toy dataset with plain gradient descent.

    python -m microdiff --layers 4,4,1 --epochs 50 --lr 0.05
"""

import argparse
import logging
import sys

from .core.node import leaf
from .core.engine import backward
from .core.graph_utils import format_graph, get_graph_stats
from .errors import MicrodiffError
from .nn.config import NetworkConfig
from .nn.losses import mse_loss

logger = logging.getLogger(__name__)

# Four 3-feature samples with ±1 targets
TOY_INPUTS = [
    [2.0, 3.0, -1.0],
    [3.0, -1.0, 0.5],
    [0.5, 1.0, 1.0],
    [1.0, 1.0, -1.0],
]
TOY_TARGETS = [1.0, -1.0, -1.0, 1.0]


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Scalar reverse-mode autodiff demo',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--inputs', type=int, default=3,
                        help='Network input width (the toy dataset has 3 features)')
    parser.add_argument('--layers', type=str, default='4,4,1',
                        help='Comma-separated neurons per layer (e.g. "4,4,1")')
    parser.add_argument('--epochs', type=int, default=50,
                        help='Gradient descent steps on the toy dataset')
    parser.add_argument('--lr', type=float, default=0.05,
                        help='Learning rate')
    parser.add_argument('--seed', type=int, default=0,
                        help='Seed for weight initialization')
    parser.add_argument('--graph', action='store_true',
                        help='Print the node listing of the demo expressions')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable debug logging')
    return parser.parse_args(argv)


def run_expressions(show_graph=False):
    """a + b, c * d + a and tanh(c) with their gradients."""
    a = leaf(1.0, name="a")
    b = leaf(-2.0, name="b")
    c = leaf(10.0, name="c")
    d = leaf(1.0 / 10.0, name="d")

    exprs = [("a + b", a + b), ("c * d + a", c * d + a), ("tanh(c)", c.tanh())]
    for label, y in exprs:
        for x in (a, b, c, d):
            x.gradient = 0.0
        backward(y)
        print(f"{label:10s} = {float(y.value):+.6f}   "
              f"da={float(a.gradient):+.6f} db={float(b.gradient):+.6f} "
              f"dc={float(c.gradient):+.6e} dd={float(d.gradient):+.6f}")
        if show_graph:
            print(format_graph(y))


def train(config: NetworkConfig, epochs: int, lr: float):
    """Full-batch gradient descent on the toy dataset; returns the loss history."""
    model = config.build()
    print(f"Network {config.shape}: {model.num_parameters()} parameters")

    history = []
    for epoch in range(epochs):
        preds = [model(x)[0] for x in TOY_INPUTS]
        loss = mse_loss(preds, TOY_TARGETS)

        model.zero_grad()
        backward(loss)
        model.apply_gradients(lr)

        history.append(float(loss.value))
        logger.info("epoch %d loss %.6f", epoch + 1, history[-1])
        if epoch == 0:
            stats = get_graph_stats(loss)
            logger.debug("loss graph: %d nodes, %d edges, %d shared",
                         stats['nodes'], stats['edges'], stats['shared'])
    return model, history


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    print("=" * 70)
    print("EXPRESSIONS")
    print("=" * 70)
    run_expressions(show_graph=args.graph)

    try:
        config = NetworkConfig(
            n_inputs=args.inputs,
            layer_sizes=NetworkConfig.parse_layers(args.layers),
            seed=args.seed,
        ).validate()

        print()
        print("=" * 70)
        print("TRAINING")
        print("=" * 70)
        _, history = train(config, args.epochs, args.lr)
    except MicrodiffError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if history:
        print(f"loss: {history[0]:.6f} -> {history[-1]:.6f} after {len(history)} epochs")
    return 0


if __name__ == "__main__":
    sys.exit(main())
