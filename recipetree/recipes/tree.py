from __future__ import annotations

import logging
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterator, List, Mapping, MutableMapping, Sequence, Tuple

from .loader import RecipeRow

try:  # pragma: no cover - optional import for visualization only
    import networkx as nx
except ModuleNotFoundError:  # pragma: no cover
    nx = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecipeTree:
    """Crafting tree whose nodes are positions in ``rows``.

    The same item may appear several times in a recipe, so nodes are keyed by
    row position rather than item id.
    """

    rows: Tuple[RecipeRow, ...]
    root: int
    child_to_parent: Mapping[int, int]
    parent_to_children: Mapping[int, Tuple[int, ...]]
    unattached: Tuple[int, ...] = ()

    def __len__(self) -> int:
        return len(self.rows) - len(self.unattached)

    def label_of(self, node: int) -> str:
        return self.rows[node].text

    def item_of(self, node: int) -> int:
        return self.rows[node].id

    def parent_of(self, node: int) -> int | None:
        return self.child_to_parent.get(node)

    def children_of(self, node: int) -> Tuple[int, ...]:
        return self.parent_to_children.get(node, ())

    def depth_of(self, node: int) -> int:
        depth = 0
        parent = self.parent_of(node)
        while parent is not None:
            depth += 1
            parent = self.parent_of(parent)
        return depth

    def max_depth(self, node: int | None = None) -> int:
        """Longest parent-to-leaf distance below ``node`` (the root by default)."""

        start = self.root if node is None else node
        deepest = 0
        stack = [(start, 0)]
        while stack:
            current, depth = stack.pop()
            deepest = max(deepest, depth)
            stack.extend((child, depth + 1) for child in self.children_of(current))
        return deepest

    def descendants(self) -> Iterator[int]:
        """Depth-first traversal of the crafting tree starting at the root."""

        stack = [self.root]
        visited = set()
        while stack:
            node = stack.pop()
            if node in visited:
                continue
            visited.add(node)
            yield node
            stack.extend(reversed(self.children_of(node)))

    def to_networkx(self):
        """Convert the tree to a NetworkX `DiGraph` keyed by row position."""

        if nx is None:  # pragma: no cover - depends on optional extra
            raise RuntimeError(
                "networkx is not available; install the visualization dependencies."
            )
        graph = nx.DiGraph()
        for node in self.descendants():
            graph.add_node(node, label=self.label_of(node), item=self.item_of(node))
        for child, parent in self.child_to_parent.items():
            graph.add_edge(parent, child)
        return graph


def build_recipe_tree(rows: Sequence[RecipeRow]) -> RecipeTree:
    """Attach every row below the row whose item it is a component of.

    The first row with parent ``-1`` is the root. A node claims all pending
    rows whose parent is its item id, in row order, before its children are
    expanded. Rows that never get claimed are reported in ``unattached``.
    """

    rows = tuple(rows)
    root = next((position for position, row in enumerate(rows) if row.is_root), None)
    if root is None:
        raise ValueError("Root item not found in recipe rows.")

    pending: MutableMapping[int, Deque[int]] = defaultdict(deque)
    for position, row in enumerate(rows):
        if position != root:
            pending[row.parent].append(position)

    child_to_parent: Dict[int, int] = {}
    parent_to_children: Dict[int, List[int]] = {root: []}
    stack = [root]
    while stack:
        node = stack.pop()
        claimed = pending.pop(rows[node].id, deque())
        parent_to_children[node] = list(claimed)
        for child in claimed:
            child_to_parent[child] = node
            parent_to_children.setdefault(child, [])
        stack.extend(reversed(claimed))

    unattached = tuple(sorted(position for queue in pending.values() for position in queue))
    if unattached:
        logger.warning(
            "%d recipe rows are not connected to root item %d: %s",
            len(unattached),
            rows[root].id,
            ", ".join(rows[position].text for position in unattached),
        )

    frozen_children: Dict[int, Tuple[int, ...]] = {
        node: tuple(children) for node, children in parent_to_children.items()
    }
    return RecipeTree(
        rows=rows,
        root=root,
        child_to_parent=child_to_parent,
        parent_to_children=frozen_children,
        unattached=unattached,
    )
