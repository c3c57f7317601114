"""
Tidy tree layout in linear time.

Implements the Reingold-Tilford extension from "Drawing Non-layered Tidy
Trees in Linear Time" (A. van der Ploeg). Subtrees are laid out bottom-up and
pushed apart by walking the facing contours of neighbouring subtrees. Threads
link the bottom of a short contour to the node that continues it in a taller
neighbour, so no subtree is walked more than a bounded number of times.

Rows are layered: a node at depth ``d`` occupies
``[d * row_spacing, d * row_spacing + height]`` vertically.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import LayoutConfig
from .contour import LowestSibling, update_lowest
from .node import LayoutTree

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Scratch:
    """Per-node bookkeeping valid for a single layout pass."""

    top: float = 0.0
    prelim: float = 0.0
    modifier: float = 0.0
    shift: float = 0.0
    change: float = 0.0
    thread_left: Optional[int] = None
    thread_right: Optional[int] = None
    extreme_left: Optional[int] = None
    extreme_right: Optional[int] = None
    mod_sum_left: float = 0.0
    mod_sum_right: float = 0.0


@dataclass(slots=True, frozen=True)
class LayoutStats:
    """Summary of one :func:`layout_tree` pass."""

    node_count: int
    contour_steps: int
    depth: int
    bounds: Tuple[float, float]

    @property
    def width(self) -> float:
        return self.bounds[1] - self.bounds[0]


class _LayoutPass:
    def __init__(self, tree: LayoutTree, config: LayoutConfig) -> None:
        self.tree = tree
        self.config = config
        self.scratch: List[_Scratch] = [_Scratch() for _ in range(len(tree))]
        self.contour_steps = 0

    def _children(self, index: int) -> List[int]:
        return self.tree.node(index).children

    def _width(self, index: int) -> float:
        return self.tree.node(index).width

    def _bottom(self, index: int) -> float:
        return self.scratch[index].top + self.tree.node(index).height

    # First walk -----------------------------------------------------------

    def first_walk(self, root: int) -> None:
        """Lay out every subtree below ``root``, children before parents.

        Separating a node's children only touches those children's subtrees,
        so each node is finished once all of its children are.
        """

        order: List[int] = []
        stack = [root]
        self.scratch[root].top = 0.0
        while stack:
            index = stack.pop()
            order.append(index)
            child_top = self.scratch[index].top + self.config.row_spacing
            for child in self._children(index):
                self.scratch[child].top = child_top
                stack.append(child)
        for index in reversed(order):
            self._finish_subtree(index)

    def _finish_subtree(self, index: int) -> None:
        children = self._children(index)
        if not children:
            self._set_extremes(index)
            return

        lowest = update_lowest(
            self._bottom(self.scratch[children[0]].extreme_left), 0, None
        )
        for i in range(1, len(children)):
            # Read before separating: threads may redirect the extreme.
            min_y = self._bottom(self.scratch[children[i]].extreme_right)
            self._separate(index, i, lowest)
            lowest = update_lowest(min_y, i, lowest)
        self._position_root(index)
        self._set_extremes(index)

    def _set_extremes(self, index: int) -> None:
        scratch = self.scratch[index]
        children = self._children(index)
        if not children:
            scratch.extreme_left = index
            scratch.extreme_right = index
            scratch.mod_sum_left = scratch.mod_sum_right = 0.0
            return
        first = self.scratch[children[0]]
        last = self.scratch[children[-1]]
        scratch.extreme_left = first.extreme_left
        scratch.mod_sum_left = first.mod_sum_left
        scratch.extreme_right = last.extreme_right
        scratch.mod_sum_right = last.mod_sum_right

    def _separate(self, parent: int, i: int, lowest: LowestSibling) -> None:
        children = self._children(parent)
        spacing = self.config.column_spacing

        # Right contour of the left siblings and the left contour of child i.
        right: Optional[int] = children[i - 1]
        mod_sum_right = self.scratch[right].modifier
        left: Optional[int] = children[i]
        mod_sum_left = self.scratch[left].modifier

        while right is not None and left is not None:
            self.contour_steps += 1
            if self._bottom(right) > lowest.low_y and lowest.next is not None:
                lowest = lowest.next

            right_edge = (
                mod_sum_right
                + self.scratch[right].prelim
                + self._width(right) / 2.0
                + spacing
            )
            left_edge = mod_sum_left + self.scratch[left].prelim - self._width(left) / 2.0
            dist = right_edge - left_edge
            if dist > 0:
                mod_sum_left += dist
                self._move_subtree(parent, i, lowest.index, dist)

            right_y = self._bottom(right)
            left_y = self._bottom(left)
            if right_y <= left_y:
                right = self._next_right_contour(right)
                if right is not None:
                    mod_sum_right += self.scratch[right].modifier
            if right_y >= left_y:
                left = self._next_left_contour(left)
                if left is not None:
                    mod_sum_left += self.scratch[left].modifier

        if right is None and left is not None:
            self._set_left_thread(parent, i, left, mod_sum_left)
        elif right is not None and left is None:
            self._set_right_thread(parent, i, right, mod_sum_right)

    def _move_subtree(self, parent: int, i: int, source: int, dist: float) -> None:
        scratch = self.scratch[self._children(parent)[i]]
        scratch.modifier += dist
        scratch.mod_sum_left += dist
        scratch.mod_sum_right += dist
        self._distribute_extra(parent, i, source, dist)

    def _distribute_extra(self, parent: int, i: int, source: int, dist: float) -> None:
        """Stage an even share of ``dist`` for the siblings between ``source`` and ``i``."""

        if source == i - 1:
            return
        children = self._children(parent)
        recipients = i - source
        share = dist / recipients
        self.scratch[children[source + 1]].shift += share
        self.scratch[children[i]].shift -= share
        self.scratch[children[i]].change -= dist - share

    def _next_left_contour(self, index: int) -> Optional[int]:
        children = self._children(index)
        if children:
            return children[0]
        return self.scratch[index].thread_left

    def _next_right_contour(self, index: int) -> Optional[int]:
        children = self._children(index)
        if children:
            return children[-1]
        return self.scratch[index].thread_right

    def _set_left_thread(
        self, parent: int, i: int, left: int, mod_sum_left: float
    ) -> None:
        children = self._children(parent)
        first = self.scratch[children[0]]
        extreme = self.scratch[first.extreme_left]
        extreme.thread_left = left
        # Keep the modifier sum along the thread correct without moving the node.
        diff = mod_sum_left - self.scratch[left].modifier - first.mod_sum_left
        extreme.modifier += diff
        extreme.prelim -= diff
        current = self.scratch[children[i]]
        first.extreme_left = current.extreme_left
        first.mod_sum_left = current.mod_sum_left

    def _set_right_thread(
        self, parent: int, i: int, right: int, mod_sum_right: float
    ) -> None:
        children = self._children(parent)
        current = self.scratch[children[i]]
        extreme = self.scratch[current.extreme_right]
        extreme.thread_right = right
        diff = mod_sum_right - self.scratch[right].modifier - current.mod_sum_right
        extreme.modifier += diff
        extreme.prelim -= diff
        previous = self.scratch[children[i - 1]]
        current.extreme_right = previous.extreme_right
        current.mod_sum_right = previous.mod_sum_right

    def _position_root(self, index: int) -> None:
        children = self._children(index)
        first, last = children[0], children[-1]
        left = (
            self.scratch[first].prelim
            + self.scratch[first].modifier
            - self._width(first) / 2.0
        )
        right = (
            self.scratch[last].prelim
            + self.scratch[last].modifier
            + self._width(last) / 2.0
        )
        self.scratch[index].prelim = (left + right) / 2.0

    # Second walk ----------------------------------------------------------

    def second_walk(self, root: int, mod_sum: float) -> int:
        """Assign final coordinates top-down and return the deepest row index."""

        max_depth = 0
        stack = [(root, mod_sum, 0)]
        while stack:
            index, mod_sum, depth = stack.pop()
            scratch = self.scratch[index]
            mod_sum += scratch.modifier
            node = self.tree.node(index)
            node.x = scratch.prelim + mod_sum
            node.y = depth * self.config.row_spacing
            max_depth = max(max_depth, depth)
            self._add_child_spacing(index)
            for child in reversed(node.children):
                stack.append((child, mod_sum, depth + 1))
        return max_depth

    def _add_child_spacing(self, index: int) -> None:
        shift = 0.0
        mod_sum_delta = 0.0
        for child in self._children(index):
            scratch = self.scratch[child]
            shift += scratch.shift
            mod_sum_delta += shift + scratch.change
            scratch.modifier += mod_sum_delta


def layout_tree(tree: LayoutTree, config: LayoutConfig | None = None) -> LayoutStats:
    """Assign ``x``/``y`` to every node of ``tree``.

    The root is centred at ``x = 0`` on row ``y = 0``; every other node is
    placed ``depth * row_spacing`` below it. Repeated calls on an unchanged
    tree produce identical coordinates. Both walks use explicit stacks, so
    tree depth is not limited by the interpreter's recursion limit.
    """

    if len(tree) == 0:
        raise ValueError("Cannot lay out an empty tree.")
    config = config or LayoutConfig()
    root = tree.root

    layout = _LayoutPass(tree, config)
    layout.first_walk(root)
    depth = layout.second_walk(root, -layout.scratch[root].prelim)

    left = min(node.x - node.width / 2.0 for node in tree)
    right = max(node.x + node.width / 2.0 for node in tree)
    stats = LayoutStats(
        node_count=len(tree),
        contour_steps=layout.contour_steps,
        depth=depth,
        bounds=(left, right),
    )
    logger.debug(
        "Laid out %d nodes over %d rows in %d contour steps",
        stats.node_count,
        stats.depth + 1,
        stats.contour_steps,
    )
    return stats
