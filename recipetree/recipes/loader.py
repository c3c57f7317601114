from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence, Tuple

ROOT_PARENT = -1


@dataclass(slots=True, frozen=True)
class RecipeRow:
    """One entry of a recipe listing: an item and the item it helps craft."""

    id: int
    text: str
    parent: int

    @property
    def is_root(self) -> bool:
        return self.parent == ROOT_PARENT


@dataclass(slots=True)
class Recipe:
    """Recipe rows together with where they were read from."""

    source_path: Path | None
    name: str
    rows: Tuple[RecipeRow, ...]

    @property
    def item_ids(self) -> Tuple[int, ...]:
        return tuple(row.id for row in self.rows)

    def iter_rows(self) -> Iterable[RecipeRow]:
        return iter(self.rows)

    def root_row(self) -> RecipeRow:
        for row in self.rows:
            if row.is_root:
                return row
        raise ValueError("Root item not found in recipe rows.")


def _parse_int(raw: Any, field_name: str, position: int) -> int:
    if isinstance(raw, bool):
        raise ValueError(f"Row {position}: {field_name} must be an integer, got {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValueError(
            f"Row {position}: {field_name} must be an integer, got {raw!r}"
        ) from None


def _parse_row(raw: Any, position: int) -> RecipeRow:
    if isinstance(raw, Mapping):
        try:
            item_id, text, parent = raw["ID"], raw["Text"], raw["Parent"]
        except KeyError as exc:
            raise ValueError(f"Row {position} is missing key {exc.args[0]!r}") from None
    elif isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        if len(raw) != 3:
            raise ValueError(
                f"Row {position}: expected [id, text, parent], got {len(raw)} fields"
            )
        item_id, text, parent = raw
    else:
        raise ValueError(f"Row {position}: unsupported entry {raw!r}")
    return RecipeRow(
        id=_parse_int(item_id, "id", position),
        text=str(text),
        parent=_parse_int(parent, "parent", position),
    )


def parse_recipe_rows(raw: Iterable[Any]) -> Tuple[RecipeRow, ...]:
    """Parse ``[[id, text, parentId], ...]`` (or ``ID``/``Text``/``Parent`` mappings)."""

    return tuple(_parse_row(entry, position) for position, entry in enumerate(raw))


def load_recipe(path: Path | str) -> Recipe:
    resolved = Path(path).expanduser().resolve()
    with resolved.open("r", encoding="utf-8") as handle:
        document = json.load(handle)
    if isinstance(document, Mapping):
        if "rows" not in document:
            raise ValueError(f"Expected a 'rows' list in {resolved.name}")
        name = str(document.get("name") or resolved.stem)
        raw_rows = document["rows"]
    else:
        name = resolved.stem
        raw_rows = document
    if not isinstance(raw_rows, list):
        raise ValueError(f"Expected a list of recipe rows in {resolved.name}")
    return Recipe(source_path=resolved, name=name, rows=parse_recipe_rows(raw_rows))
