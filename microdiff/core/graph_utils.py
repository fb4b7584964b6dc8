"""
Computation-graph utilities.
Summaries and listings of the DAG reachable from a root node.
"""

import numpy as np
from typing import Dict, List
from collections import Counter

from .graph import topological_order
from .node import LEAF


def get_graph_stats(root) -> Dict:
    """
    Statistics of the graph reachable from `root` (nothing is printed).

    Returns:
        dict with node/edge counts, fan-in/fan-out figures, the number of
        leaves and the per-tag operation counts
    """
    order = topological_order(root)
    n_nodes = len(order)
    n_edges = sum(len(node.operands) for node in order)

    # fan-in: operand references per node
    fan_ins = [len(node.operands) for node in order]

    # fan-out: how many consumers reference each node
    fan_outs = Counter()
    for node in order:
        for operand in node.operands:
            fan_outs[operand.id] += 1
    fan_out_list = [fan_outs[node.id] for node in order]

    op_counter = Counter(node.operation.tag for node in order)

    return {
        'nodes': n_nodes,
        'edges': n_edges,
        'leaves': op_counter.get(LEAF, 0),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_out_list),
        'avg_fan_out': float(np.mean(fan_out_list)),
        'shared': sum(1 for c in fan_out_list if c > 1),
        'operations': dict(op_counter),
    }


def format_graph(root, max_nodes: int = 50) -> str:
    """
    Listing of the graph in topological order, one line per node:

        #3   mul    (    6.000000  grad   1.000000) <- [#1, #1]
    """
    order = topological_order(root)
    lines: List[str] = []
    for node in order[:max_nodes]:
        op = node.operation
        head = (f"#{node.id:<4d} {op.tag:6s} ({float(node.value):12.6f}  "
                f"grad {float(node.gradient):12.6f})")
        if node.name:
            head += f" {node.name}"
        if op.operands:
            refs = ", ".join(f"#{p.id}" for p in op.operands)
            if op.exponent is not None:
                refs += f", k={op.exponent:g}"
            lines.append(f"{head} <- [{refs}]")
        else:
            lines.append(f"{head} [leaf/input]")

    if len(order) > max_nodes:
        lines.append(f"... ({len(order) - max_nodes} more nodes)")
    return "\n".join(lines)
