from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class LayoutConfig:
    """Spacing parameters for the tidy tree layout."""

    # Vertical distance between consecutive depth levels.
    row_spacing: float = 75.0

    # Minimum horizontal gap between adjacent subtree contours.
    column_spacing: float = 20.0
