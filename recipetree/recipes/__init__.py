"""Utilities for loading and working with crafting recipes."""

from .loader import (
    ROOT_PARENT,
    Recipe,
    RecipeRow,
    load_recipe,
    parse_recipe_rows,
)
from .tree import build_recipe_tree, RecipeTree

__all__ = [
    "ROOT_PARENT",
    "Recipe",
    "RecipeRow",
    "RecipeTree",
    "build_recipe_tree",
    "load_recipe",
    "parse_recipe_rows",
]
