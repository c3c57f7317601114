from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass(slots=True, frozen=True)
class LowestSibling:
    """Linked list of left siblings still visible in the combined contour.

    The head holds the most recently separated sibling. ``low_y`` grows along
    the list, so a sibling further back is only reached once the walk has
    descended below every sibling in front of it.
    """

    low_y: float
    index: int
    next: Optional["LowestSibling"] = None

    def __iter__(self) -> Iterator["LowestSibling"]:
        entry: Optional[LowestSibling] = self
        while entry is not None:
            yield entry
            entry = entry.next


def update_lowest(
    min_y: float, index: int, head: Optional[LowestSibling]
) -> LowestSibling:
    """Prepend sibling ``index`` and drop the siblings it hides."""

    while head is not None and min_y >= head.low_y:
        head = head.next
    return LowestSibling(min_y, index, head)
