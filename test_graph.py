"""
Topological ordering, node ids and graph inspection helpers.
"""

import numpy as np

from microdiff import (
    leaf, add, multiply, power, exp, tanh,
    topological_order, backward, get_graph_stats, format_graph,
)


def _random_graph(seed, n_leaves=5, n_ops=60):
    """Random DAG over a growing pool of nodes; returns (root, pool)."""
    rng = np.random.default_rng(seed)
    pool = [leaf(float(v)) for v in rng.uniform(-1.0, 1.0, n_leaves)]
    for _ in range(n_ops):
        kind = rng.integers(0, 5)
        a = pool[rng.integers(0, len(pool))]
        b = pool[rng.integers(0, len(pool))]
        if kind == 0:
            node = add(a, b)
        elif kind == 1:
            node = multiply(a, b)
        elif kind == 2:
            node = power(a, 2)
        elif kind == 3:
            node = tanh(a)
        else:
            node = exp(tanh(a))
        pool.append(node)
    return pool[-1], pool


def _recursive_order(root):
    seen, order = set(), []

    def visit(n):
        if n.id in seen:
            return
        seen.add(n.id)
        for p in n.operands:
            visit(p)
        order.append(n)

    visit(root)
    return order


def _reachable_ids(root):
    seen, stack = set(), [root]
    while stack:
        n = stack.pop()
        if n.id not in seen:
            seen.add(n.id)
            stack.extend(n.operands)
    return seen


def test_simple_order():
    a, b = leaf(1.0), leaf(2.0)
    c = add(a, b)
    d = multiply(c, a)
    assert [n.id for n in topological_order(d)] == [a.id, b.id, c.id, d.id]


def test_shared_node_listed_once():
    a = leaf(3.0)
    d = multiply(a, a)
    order = topological_order(d)
    assert [n.id for n in order] == [a.id, d.id]


def test_random_graphs_are_topologically_valid():
    for seed in range(10):
        root, _ = _random_graph(seed)
        order = topological_order(root)
        position = {n.id: i for i, n in enumerate(order)}

        assert len(position) == len(order)
        assert set(position) == _reachable_ids(root)
        for n in order:
            for p in n.operands:
                assert position[p.id] < position[n.id]
        assert order[-1] is root


def test_matches_recursive_post_order():
    for seed in range(5):
        root, _ = _random_graph(seed)
        assert [n.id for n in topological_order(root)] == [n.id for n in _recursive_order(root)]


def test_random_graph_backward_runs():
    root, pool = _random_graph(42)
    backward(root)
    assert root.gradient == 1.0
    reachable = _reachable_ids(root)
    for n in pool:
        if n.id not in reachable:
            assert n.gradient == 0.0


def test_ids_unique_and_increasing():
    nodes = [leaf(0.0) for _ in range(10000)]
    ids = [n.id for n in nodes]
    assert len(set(ids)) == len(ids)
    assert all(x < y for x, y in zip(ids, ids[1:]))

    a = leaf(1.0)
    b = add(a, a)
    assert a.id < b.id


def test_operands_created_before_consumers():
    root, _ = _random_graph(7)
    for n in topological_order(root):
        for p in n.operands:
            assert p.id < n.id


def test_graph_stats():
    a = leaf(3.0)
    d = multiply(a, a)
    stats = get_graph_stats(d)
    assert stats['nodes'] == 2
    assert stats['edges'] == 2
    assert stats['leaves'] == 1
    assert stats['max_fan_in'] == 2
    assert stats['max_fan_out'] == 2
    assert stats['shared'] == 1
    assert stats['operations'] == {'leaf': 1, 'mul': 1}


def test_graph_stats_single_leaf():
    stats = get_graph_stats(leaf(1.0))
    assert stats['nodes'] == 1
    assert stats['edges'] == 0
    assert stats['avg_fan_out'] == 0.0


def test_format_graph():
    a = leaf(2.0, name="a")
    y = power(add(a, leaf(1.0)), 2)
    backward(y)
    text = format_graph(y)
    lines = text.splitlines()
    assert len(lines) == 4
    assert f"#{a.id}" in lines[0] and "[leaf/input]" in lines[0] and " a" in lines[0]
    assert "pow" in lines[-1] and "k=2" in lines[-1]


def test_format_graph_truncates():
    x = leaf(1.0)
    for _ in range(10):
        x = tanh(x)
    text = format_graph(x, max_nodes=3)
    assert text.splitlines()[-1] == "... (8 more nodes)"
