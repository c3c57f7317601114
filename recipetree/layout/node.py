from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple


@dataclass(slots=True)
class LayoutNode:
    """One box in a :class:`LayoutTree`.

    ``x`` is the horizontal centre of the box and ``y`` the top of its row.
    Both are written only by :func:`recipetree.layout.layout_tree`.
    """

    index: int
    width: float
    height: float
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    key: Any = None
    x: float = 0.0
    y: float = 0.0

    @property
    def is_leaf(self) -> bool:
        return not self.children


class LayoutTree:
    """Arena holding a single rooted tree of :class:`LayoutNode` records.

    Nodes are addressed by their insertion index. A parent must exist before
    its children are added, so the arena cannot describe a cycle.
    """

    def __init__(self) -> None:
        self._nodes: List[LayoutNode] = []
        self._root: Optional[int] = None

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[LayoutNode]:
        return iter(self._nodes)

    @property
    def root(self) -> int:
        if self._root is None:
            raise ValueError("Layout tree is empty.")
        return self._root

    def add_node(
        self,
        width: float,
        height: float,
        parent: Optional[int] = None,
        key: Any = None,
    ) -> int:
        index = len(self._nodes)
        if parent is None:
            if self._root is not None:
                raise ValueError(
                    f"Layout tree already has root {self._root}; pass a parent index."
                )
            self._root = index
        else:
            self.node(parent).children.append(index)
        self._nodes.append(
            LayoutNode(index=index, width=width, height=height, parent=parent, key=key)
        )
        return index

    def add_child(self, parent: int, width: float, height: float, key: Any = None) -> int:
        return self.add_node(width, height, parent=parent, key=key)

    def node(self, index: int) -> LayoutNode:
        if index < 0 or index >= len(self._nodes):
            raise IndexError(f"Node {index} not in layout tree")
        return self._nodes[index]

    def children_of(self, index: int) -> Tuple[int, ...]:
        return tuple(self.node(index).children)

    def parent_of(self, index: int) -> int | None:
        return self.node(index).parent

    def depth(self, index: int) -> int:
        """Number of parent links between ``index`` and the root."""

        depth = 0
        parent = self._nodes[index].parent
        while parent is not None:
            depth += 1
            parent = self._nodes[parent].parent
        return depth

    def positions(self) -> Dict[int, Tuple[float, float]]:
        return {node.index: (node.x, node.y) for node in self._nodes}
