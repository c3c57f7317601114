import logging

import pytest

from recipetree.recipes import Recipe, RecipeRow, build_recipe_tree, parse_recipe_rows


def test_loads_statue(statue_recipe):
    assert statue_recipe.name == "statue"
    assert statue_recipe.source_path.name == "statue.json"
    assert statue_recipe.root_row().id == 11
    assert statue_recipe.item_ids.count(4) == 2


def test_recipe_tree_structure(statue_recipe):
    tree = build_recipe_tree(statue_recipe.rows)
    assert tree.root == 0
    assert [tree.item_of(node) for node in tree.children_of(tree.root)] == [7, 9]
    stone, dust = tree.children_of(tree.root)
    assert [tree.item_of(node) for node in tree.children_of(stone)] == [6, 1]
    assert [tree.item_of(node) for node in tree.children_of(dust)] == [4, 3]
    assert tree.parent_of(stone) == tree.root
    assert tree.max_depth() == 3
    assert len(tree) == len(statue_recipe.rows)
    assert list(tree.descendants()) == [0, 1, 3, 5, 6, 4, 2, 7, 8]


def test_repeated_items_become_separate_nodes(statue_recipe):
    tree = build_recipe_tree(statue_recipe.rows)
    earth_nodes = [node for node in tree.descendants() if tree.item_of(node) == 4]
    assert len(earth_nodes) == 2
    assert {tree.label_of(tree.parent_of(node)) for node in earth_nodes} == {
        "🌋 Lava",
        "🌫️ Dust",
    }


def test_unattached_rows_are_reported(dandelion_recipe, caplog):
    with caplog.at_level(logging.WARNING, logger="recipetree.recipes.tree"):
        tree = build_recipe_tree(dandelion_recipe.rows)
    assert tree.unattached == (5,)
    assert 5 not in set(tree.descendants())
    assert "Pollen" in caplog.text


def test_missing_root_rejected():
    rows = [RecipeRow(id=5, text="Steam", parent=2)]
    with pytest.raises(ValueError, match="Root item not found"):
        build_recipe_tree(rows)


def test_recipe_without_root_row_rejected():
    recipe = Recipe(
        source_path=None, name="steam", rows=(RecipeRow(id=5, text="Steam", parent=2),)
    )
    with pytest.raises(ValueError, match="Root item not found"):
        recipe.root_row()


def test_parse_rows_accepts_lists_and_mappings():
    rows = parse_recipe_rows(
        [[5, "Steam", -1], {"ID": "1", "Text": "Water", "Parent": 5}]
    )
    assert rows == (
        RecipeRow(id=5, text="Steam", parent=-1),
        RecipeRow(id=1, text="Water", parent=5),
    )
    assert rows[0].is_root


@pytest.mark.parametrize(
    "raw",
    [
        [[5, "Steam"]],
        [{"ID": 5, "Text": "Steam"}],
        [[5, "Steam", "root"]],
        ["Steam"],
    ],
)
def test_parse_rows_rejects_malformed_entries(raw):
    with pytest.raises(ValueError):
        parse_recipe_rows(raw)


def test_to_networkx_matches_tree(statue_recipe):
    tree = build_recipe_tree(statue_recipe.rows)
    graph = tree.to_networkx()
    assert graph.number_of_nodes() == len(tree)
    assert set(graph.successors(tree.root)) == set(tree.children_of(tree.root))
    assert graph.nodes[tree.root]["item"] == 11
