"""Linear-time tidy tree layout."""

from .config import LayoutConfig
from .contour import LowestSibling, update_lowest
from .node import LayoutNode, LayoutTree
from .tidy import LayoutStats, layout_tree

__all__ = [
    "LayoutConfig",
    "LayoutNode",
    "LayoutStats",
    "LayoutTree",
    "LowestSibling",
    "layout_tree",
    "update_lowest",
]
