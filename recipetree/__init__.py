"""
recipetree: tidy layouts for crafting recipe trees.

The layout core lives in :mod:`recipetree.layout`; recipe loading and scene
construction sit on top of it.
"""

from importlib.metadata import version, PackageNotFoundError

from .layout import LayoutConfig, LayoutTree, layout_tree


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return version("recipetree")
        except PackageNotFoundError:
            return "0.0.0"
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["LayoutConfig", "LayoutTree", "__version__", "layout_tree"]
