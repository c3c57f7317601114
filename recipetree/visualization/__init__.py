"""Visualization helpers for recipetree."""

from .measure import measure_label
from .scene import TreeEdge, TreeNode, TreeScene, build_tree_scene, fit_scale, scene_bounds
from .tree import build_layout_tree, compute_tree_layout

__all__ = [
    "TreeEdge",
    "TreeNode",
    "TreeScene",
    "build_layout_tree",
    "build_tree_scene",
    "compute_tree_layout",
    "fit_scale",
    "measure_label",
    "scene_bounds",
]
