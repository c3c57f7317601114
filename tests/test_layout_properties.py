from __future__ import annotations

import random
from collections import defaultdict
from typing import Dict, List

import networkx as nx
import pytest
from pytest import approx

from recipetree.layout import LayoutConfig, LayoutTree, layout_tree

CONFIG = LayoutConfig(row_spacing=75.0, column_spacing=20.0)


def _random_tree(seed: int, size: int) -> LayoutTree:
    rng = random.Random(seed)
    tree = LayoutTree()
    tree.add_node(rng.randint(10, 120), rng.randint(10, 40))
    for _ in range(size - 1):
        # Favour recent nodes so some branches run deep.
        parent = max(0, len(tree) - 1 - int(rng.expovariate(0.3)))
        tree.add_child(parent, rng.randint(10, 120), rng.randint(10, 40))
    return tree


def _balanced_tree(branching: int, height: int) -> LayoutTree:
    graph = nx.balanced_tree(branching, height)
    tree = LayoutTree()
    index = {0: tree.add_node(40.0, 20.0)}
    for parent, child in nx.bfs_edges(graph, 0):
        index[child] = tree.add_child(index[parent], 40.0, 20.0)
    return tree


def _rows(tree: LayoutTree) -> Dict[float, List[int]]:
    rows: Dict[float, List[int]] = defaultdict(list)
    for node in tree:
        rows[node.y].append(node.index)
    return rows


@pytest.mark.parametrize("seed", range(12))
def test_rows_never_overlap(seed):
    tree = _random_tree(seed, 80)
    layout_tree(tree, CONFIG)

    for members in _rows(tree).values():
        ordered = sorted(members, key=lambda index: tree.node(index).x)
        for left, right in zip(ordered, ordered[1:]):
            a, b = tree.node(left), tree.node(right)
            gap = (b.x - b.width / 2.0) - (a.x + a.width / 2.0)
            assert gap >= CONFIG.column_spacing - 1e-6


@pytest.mark.parametrize("seed", range(12))
def test_sibling_order_is_preserved(seed):
    tree = _random_tree(seed, 60)
    layout_tree(tree, CONFIG)

    for node in tree:
        xs = [tree.node(child).x for child in node.children]
        assert xs == sorted(xs)


@pytest.mark.parametrize("seed", range(12))
def test_parents_centred_over_children(seed):
    tree = _random_tree(seed, 60)
    layout_tree(tree, CONFIG)

    for node in tree:
        if node.is_leaf:
            continue
        first = tree.node(node.children[0])
        last = tree.node(node.children[-1])
        span_left = first.x - first.width / 2.0
        span_right = last.x + last.width / 2.0
        assert node.x == approx((span_left + span_right) / 2.0)


@pytest.mark.parametrize("seed", range(6))
def test_rows_follow_depth(seed):
    tree = _random_tree(seed, 50)
    layout_tree(tree, CONFIG)

    for node in tree:
        assert node.y == tree.depth(node.index) * CONFIG.row_spacing


@pytest.mark.parametrize("seed", range(6))
def test_layout_is_deterministic(seed):
    first = _random_tree(seed, 70)
    second = _random_tree(seed, 70)
    layout_tree(first, CONFIG)
    layout_tree(second, CONFIG)

    assert first.positions() == second.positions()


def test_subtrees_of_siblings_do_not_interleave():
    tree = _random_tree(3, 120)
    layout_tree(tree, CONFIG)
    graph = nx.DiGraph()
    for node in tree:
        for child in node.children:
            graph.add_edge(node.index, child)

    for node in tree:
        for left, right in zip(node.children, node.children[1:]):
            left_nodes = nx.descendants(graph, left) | {left}
            right_nodes = nx.descendants(graph, right) | {right}
            left_rows = _rows_extent(tree, left_nodes, max)
            right_rows = _rows_extent(tree, right_nodes, min)
            for y in left_rows.keys() & right_rows.keys():
                assert right_rows[y] - left_rows[y] >= CONFIG.column_spacing - 1e-6


def _rows_extent(tree: LayoutTree, members, pick) -> Dict[float, float]:
    extent: Dict[float, float] = {}
    for index in members:
        node = tree.node(index)
        edge = node.x + node.width / 2.0 if pick is max else node.x - node.width / 2.0
        extent[node.y] = pick(extent.get(node.y, edge), edge)
    return extent


def test_contour_steps_scale_linearly():
    small = _balanced_tree(2, 7)
    large = _balanced_tree(2, 11)
    small_steps = layout_tree(small, CONFIG).contour_steps
    large_steps = layout_tree(large, CONFIG).contour_steps

    assert small_steps <= 2 * len(small)
    assert large_steps <= 2 * len(large)
    growth = len(large) / len(small)
    assert large_steps / small_steps < 1.5 * growth


def test_wide_fanout_stays_linear():
    tree = LayoutTree()
    root = tree.add_node(40.0, 20.0)
    for position in range(400):
        child = tree.add_child(root, 40.0, 20.0)
        if position % 2 == 0:
            tree.add_child(child, 40.0, 20.0)
    stats = layout_tree(tree, CONFIG)

    assert stats.contour_steps <= 2 * len(tree)
