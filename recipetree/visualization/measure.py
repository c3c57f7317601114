from __future__ import annotations

from functools import lru_cache
from typing import Callable, Tuple

from matplotlib.font_manager import FontProperties
from matplotlib.textpath import TextPath

Size = Tuple[float, float]
LabelMeasure = Callable[[str], Size]

FONT_FAMILY = "sans-serif"
FONT_SIZE = 12.0
ITEM_PADDING = 10.0
LINE_HEIGHT = 1.16


@lru_cache(maxsize=4096)
def _text_width(text: str, font_size: float, family: str) -> float:
    if not text:
        return 0.0
    prop = FontProperties(family=[family], size=font_size)
    path = TextPath((0.0, 0.0), text, size=font_size, prop=prop)
    return float(path.get_extents().width)


def measure_label(
    text: str,
    font_size: float = FONT_SIZE,
    padding: float = ITEM_PADDING,
    family: str = FONT_FAMILY,
) -> Size:
    """Return the ``(width, height)`` of the box drawn around ``text``.

    Widths come from the glyph outlines matplotlib would render; the height is
    one line of text. Both are padded and rounded to whole pixels.
    """

    width = _text_width(text, float(font_size), family)
    height = font_size * LINE_HEIGHT
    return float(round(width + padding)), float(round(height + padding))
