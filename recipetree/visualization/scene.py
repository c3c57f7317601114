from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np

from recipetree.layout import LayoutConfig

from .measure import FONT_SIZE, LabelMeasure, measure_label
from .tree import RecipeTree, compute_tree_layout

Position = Tuple[float, float]
Size = Tuple[float, float]
Bounds = Tuple[float, float, float, float]

# Starting elements every recipe eventually breaks down into.
BASE_ITEM_IDS = frozenset({1, 2, 3, 4})

EDGE_SPACING = 30.0


@dataclass(slots=True)
class TreeNode:
    """A labelled box in a visualization scene. ``position`` is its top centre."""

    name: int
    label: str
    position: Position
    size: Size
    payload: dict[str, Any] = field(default_factory=dict)
    visual_style: dict[str, Any] = field(default_factory=dict)

    @property
    def box(self) -> Bounds:
        """``(left, right, top, bottom)`` of the node's box."""

        x, y = self.position
        width, height = self.size
        return (x - width / 2.0, x + width / 2.0, y, y + height)


@dataclass(slots=True)
class TreeEdge:
    """Connector from a parent's bottom centre to a child's top centre."""

    parent: int
    child: int
    route: Tuple[Position, ...] = ()
    visual_style: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class TreeScene:
    """Container for visualization nodes, edges, and metadata."""

    nodes: List[TreeNode]
    edges: List[TreeEdge]
    metadata: dict[str, Any] = field(default_factory=dict)

    def node(self, name: int) -> TreeNode:
        for node in self.nodes:
            if node.name == name:
                return node
        raise KeyError(f"Node {name!r} not in scene")


def route_connector(parent: TreeNode, child: TreeNode) -> Tuple[Position, ...]:
    """Elbow polyline: down to the midpoint row, across, then down to the child."""

    start_x = parent.position[0]
    start_y = parent.position[1] + parent.size[1]
    end_x, end_y = child.position
    mid_y = start_y + (end_y - start_y) / 2.0
    return (
        (start_x, start_y),
        (start_x, mid_y),
        (end_x, mid_y),
        (end_x, end_y),
    )


def build_tree_scene(
    tree: RecipeTree,
    positions: Optional[Mapping[int, Position]] = None,
    config: LayoutConfig | None = None,
    measure: LabelMeasure = measure_label,
) -> TreeScene:
    """Construct a :class:`TreeScene` for the provided crafting tree."""

    if positions is None:
        positions = compute_tree_layout(tree, config, measure)

    nodes: List[TreeNode] = []
    lookup: Dict[int, TreeNode] = {}
    for name in tree.descendants():
        item_id = tree.item_of(name)
        is_base = item_id in BASE_ITEM_IDS
        children = tree.children_of(name)
        node = TreeNode(
            name=name,
            label=tree.label_of(name),
            position=positions.get(name, (0.0, 0.0)),
            size=measure(tree.label_of(name)),
            payload={
                "item_id": item_id,
                "depth": tree.depth_of(name),
                "is_base": is_base,
                "component_count": len(children),
            },
            visual_style={
                "fill": "#fff8e1" if is_base else "#ffffff",
                "outline": "#000000",
                "outline_width": 1,
                "corner_radius": 5,
                "font_size": FONT_SIZE,
                "font_color": "#000000",
            },
        )
        nodes.append(node)
        lookup[name] = node

    edges: List[TreeEdge] = []
    for name in tree.descendants():
        parent = tree.parent_of(name)
        if parent is None:
            continue
        edges.append(
            TreeEdge(
                parent=parent,
                child=name,
                route=route_connector(lookup[parent], lookup[name]),
                visual_style={"stroke": "#000000", "width": 1},
            )
        )

    metadata = {
        "root_item": tree.item_of(tree.root),
        "root_label": tree.label_of(tree.root),
        "node_count": len(nodes),
        "max_depth": tree.max_depth(),
        "unattached": list(tree.unattached),
    }
    return TreeScene(nodes=nodes, edges=edges, metadata=metadata)


def scene_bounds(scene: TreeScene, margin: float = 0.0) -> Bounds:
    """Return ``(left, right, top, bottom)`` covering every box plus ``margin``."""

    if not scene.nodes:
        raise ValueError("Scene has no nodes.")
    boxes = np.array([node.box for node in scene.nodes], dtype=float)
    left = float(boxes[:, 0].min()) - margin
    right = float(boxes[:, 1].max()) + margin
    top = float(boxes[:, 2].min()) - margin
    bottom = float(boxes[:, 3].max()) + margin
    return left, right, top, bottom


def fit_scale(scene: TreeScene, width: float, height: float, margin: float = EDGE_SPACING) -> float:
    """Zoom factor that fits the whole scene into a ``width`` x ``height`` view."""

    left, right, top, bottom = scene_bounds(scene, margin)
    return min(width / (right - left), height / (bottom - top))
