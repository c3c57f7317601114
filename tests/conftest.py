from pathlib import Path

import pytest

from recipetree.recipes import load_recipe


DATA_DIR = Path(__file__).parent / "data"
RECIPES_DIR = Path(__file__).resolve().parents[1] / "recipes"


@pytest.fixture(scope="session")
def statue_recipe():
    return load_recipe(RECIPES_DIR / "statue.json")


@pytest.fixture(scope="session")
def dandelion_recipe():
    return load_recipe(DATA_DIR / "dandelion.json")


@pytest.fixture
def char_measure():
    """Deterministic label sizing: 8 units per character plus padding."""

    def measure(text: str):
        return (8.0 * len(text) + 10.0, 24.0)

    return measure
