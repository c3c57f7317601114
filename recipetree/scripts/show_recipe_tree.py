from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import Callable, Sequence

import matplotlib.pyplot as plt
from matplotlib.patches import FancyBboxPatch

from recipetree.layout import LayoutConfig
from recipetree.recipes import build_recipe_tree, load_recipe
from recipetree.visualization import TreeScene, build_tree_scene, scene_bounds
from recipetree.visualization.scene import EDGE_SPACING

PROJECT_ROOT = Path(__file__).resolve().parents[2]
RECIPES_DIR = PROJECT_ROOT / "recipes"

logger = logging.getLogger(__name__)


def list_recipe_files(recipes_root: Path) -> dict[str, Path]:
    """Return a mapping of recipe names to JSON files beneath ``recipes_root``."""

    if not recipes_root.exists():
        return {}

    mapping: dict[str, Path] = {}
    for path in sorted(recipes_root.iterdir(), key=lambda p: p.name.lower()):
        if path.is_file() and path.suffix.lower() == ".json":
            mapping[path.stem] = path
    return mapping


def prompt_choice(
    prompt: str,
    options: Sequence[str],
    input_fn: Callable[[str], str] = input,
    print_fn: Callable[[str], None] = print,
) -> int:
    """Prompt the user to choose from ``options`` and return the selected index."""

    if not options:
        raise ValueError("No options available for selection.")
    if len(options) == 1:
        return 0

    while True:
        print_fn("")
        print_fn(prompt)
        for idx, option in enumerate(options, start=1):
            print_fn(f"  {idx}. {option}")
        response = input_fn("Enter selection number: ").strip()
        try:
            index = int(response)
        except ValueError:
            print_fn("Please enter a valid integer selection.")
            continue
        if 1 <= index <= len(options):
            return index - 1
        print_fn(f"Selection must be between 1 and {len(options)}.")


def resolve_recipe_path(
    target: str | None,
    recipes_root: Path,
    *,
    input_fn: Callable[[str], str] = input,
    print_fn: Callable[[str], None] = print,
) -> Path:
    """Resolve the recipe file from an optional name or direct path."""

    if target:
        candidate = Path(target).expanduser()
        if candidate.is_file():
            return candidate.resolve()
        if candidate.is_dir():
            recipes_root = candidate
        else:
            recipes = list_recipe_files(recipes_root)
            name_lookup = {name.lower(): name for name in recipes}
            key = target.lower().removesuffix(".json")
            if key not in name_lookup:
                raise FileNotFoundError(
                    f"Recipe {target!r} not found under {recipes_root}."
                )
            return recipes[name_lookup[key]].resolve()

    recipes = list_recipe_files(recipes_root)
    if not recipes:
        raise FileNotFoundError(f"No recipes found under {recipes_root}.")
    names = list(recipes.keys())
    index = prompt_choice(
        "Select a recipe:",
        names,
        input_fn=input_fn,
        print_fn=print_fn,
    )
    return recipes[names[index]].resolve()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    defaults = LayoutConfig()
    parser = argparse.ArgumentParser(
        description="Lay out and draw the crafting tree of a recipe file."
    )
    parser.add_argument(
        "target",
        nargs="?",
        help=(
            "Recipe name (e.g. 'steam') or path to a recipe JSON file. "
            "If omitted, an interactive selector will be shown."
        ),
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional path to save the rendered tree image.",
    )
    parser.add_argument(
        "--row-spacing",
        type=float,
        default=defaults.row_spacing,
        help="Vertical distance between tree levels (default: %(default)s).",
    )
    parser.add_argument(
        "--column-spacing",
        type=float,
        default=defaults.column_spacing,
        help="Minimum horizontal gap between neighbouring subtrees (default: %(default)s).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def draw_tree(scene: TreeScene, title: str):
    left, right, top, bottom = scene_bounds(scene, EDGE_SPACING)
    scale = 1.0 / 72.0
    fig, ax = plt.subplots(
        figsize=(max((right - left) * scale, 4.0), max((bottom - top) * scale, 3.0))
    )
    for edge in scene.edges:
        xs, ys = zip(*edge.route)
        ax.plot(
            xs,
            ys,
            color=edge.visual_style.get("stroke", "#000000"),
            linewidth=edge.visual_style.get("width", 1),
            zorder=1,
        )
    for node in scene.nodes:
        box_left, _, box_top, _ = node.box
        width, height = node.size
        style = node.visual_style
        ax.add_patch(
            FancyBboxPatch(
                (box_left, box_top),
                width,
                height,
                boxstyle=f"round,pad=0,rounding_size={style.get('corner_radius', 5)}",
                facecolor=style.get("fill", "#ffffff"),
                edgecolor=style.get("outline", "#000000"),
                linewidth=style.get("outline_width", 1),
                zorder=2,
            )
        )
        ax.text(
            node.position[0],
            box_top + height / 2.0,
            node.label,
            ha="center",
            va="center",
            fontsize=style.get("font_size", 12),
            color=style.get("font_color", "#000000"),
            zorder=3,
        )
    ax.set_xlim(left, right)
    ax.set_ylim(bottom, top)
    ax.set_aspect("equal")
    ax.set_title(title)
    ax.axis("off")
    fig.tight_layout()
    return fig


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        recipe_path = resolve_recipe_path(args.target, RECIPES_DIR)
        recipe = load_recipe(recipe_path)
        tree = build_recipe_tree(recipe.rows)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    config = LayoutConfig(
        row_spacing=args.row_spacing, column_spacing=args.column_spacing
    )
    scene = build_tree_scene(tree, config=config)
    left, right, top, bottom = scene_bounds(scene)
    print(f"Recipe: {recipe.name} ({scene.metadata['root_label']})")
    print(f"  Items: {scene.metadata['node_count']}, depth: {scene.metadata['max_depth']}")
    print(f"  Extent: {right - left:.0f} x {bottom - top:.0f}")
    if tree.unattached:
        print(f"  Skipped {len(tree.unattached)} unattached rows")

    fig = draw_tree(scene, f"{recipe.name} crafting tree")
    if args.output:
        fig.savefig(args.output, bbox_inches="tight")
        logger.info("Saved rendering to %s", args.output)
    else:
        plt.show()


if __name__ == "__main__":
    main()
