from __future__ import annotations

from typing import Dict, Tuple

from recipetree.layout import LayoutConfig, LayoutTree, layout_tree
from recipetree.recipes.tree import RecipeTree

from .measure import LabelMeasure, measure_label

Position = Tuple[float, float]


def build_layout_tree(
    tree: RecipeTree, measure: LabelMeasure = measure_label
) -> LayoutTree:
    """Mirror ``tree`` into a :class:`LayoutTree` sized by ``measure``.

    Each layout node's ``key`` is the recipe node it was built from.
    """

    layout = LayoutTree()
    index_of: Dict[int, int] = {}
    for node in tree.descendants():
        width, height = measure(tree.label_of(node))
        parent = tree.parent_of(node)
        index_of[node] = layout.add_node(
            width,
            height,
            parent=None if parent is None else index_of[parent],
            key=node,
        )
    return layout


def compute_tree_layout(
    tree: RecipeTree,
    config: LayoutConfig | None = None,
    measure: LabelMeasure = measure_label,
) -> Dict[int, Position]:
    """Compute box centres for drawing a crafting tree top-down.

    Uses the linear-time tidy layout: every subtree is centred under its
    parent and neighbouring subtrees keep at least ``column_spacing`` apart
    on every row. ``y`` grows downwards from the root row at ``0``.
    """

    layout = build_layout_tree(tree, measure)
    layout_tree(layout, config)
    return {node.key: (node.x, node.y) for node in layout}
