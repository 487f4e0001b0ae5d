"""Shared fixtures for kitchen-planner tests."""

import json
import logging

import pytest
import respx

from kitchen_planner.recipes import IngredientSection, Recipe, RecipeIngredient, RecipeStep


def make_recipe(
    title: str,
    servings: int,
    ingredients: list[tuple[str, float, str]],
    recipe_id: str | None = None,
    **kwargs,
) -> Recipe:
    """Build a single-section recipe from (name, quantity, unit) tuples."""
    section = IngredientSection(
        title="Ingredients",
        ingredients=[RecipeIngredient(name=n, quantity=q, unit=u) for n, q, u in ingredients],
    )
    recipe = Recipe(title=title, servings=servings, ingredient_sections=[section], **kwargs)
    if recipe_id:
        recipe.id = recipe_id
    return recipe


@pytest.fixture
def mock_httpx():
    """Activate respx mock for HTTP requests."""
    with respx.mock(assert_all_called=False) as respx_mock:
        yield respx_mock


@pytest.fixture
def carbonara() -> Recipe:
    """Spaghetti carbonara for 4."""
    recipe = make_recipe(
        "Spaghetti Carbonara",
        4,
        [
            ("spaghetti", 1, "package"),
            ("eggs", 4, "piece"),
            ("pancetta", 6, "ounce"),
            ("parmesan cheese", 1, "cup"),
            ("black pepper", 0, "to_taste"),
            ("salt", 0, "to_taste"),
        ],
        recipe_id="carbonara",
        cuisine_type="italian",
        meal_type=["dinner"],
        tags=["pasta", "quick"],
        prep_time_minutes=10,
        cook_time_minutes=20,
        rating=4.5,
    )
    recipe.steps = [
        RecipeStep(order=1, instruction="Boil the spaghetti in salted water.", timer_minutes=10),
        RecipeStep(order=2, instruction="Whisk eggs with the parmesan cheese."),
    ]
    return recipe


@pytest.fixture
def frittata() -> Recipe:
    """A frittata for 2 that shares eggs with the carbonara."""
    return make_recipe(
        "Frittata",
        2,
        [
            ("Eggs", 3, "piece"),
            ("onion", 1, "piece"),
            ("butter", 1, "tablespoon"),
        ],
        recipe_id="frittata",
        cuisine_type="italian",
        meal_type=["breakfast"],
        prep_time_minutes=5,
        cook_time_minutes=15,
    )


@pytest.fixture
def recipe_file(tmp_path, carbonara):
    """The carbonara written to a JSON file."""
    path = tmp_path / "carbonara.json"
    path.write_text(json.dumps(carbonara.to_dict()), encoding="utf-8")
    return path


@pytest.fixture
def parsed_recipe_payload():
    """A recipe as returned by the parsing service."""
    return {
        "title": "Garlic Bread",
        "servings": 6,
        "prep_time_minutes": 5,
        "cook_time_minutes": 10,
        "ingredient_sections": [
            {
                "title": "Ingredients",
                "ingredients": [
                    {"name": "sourdough bread", "quantity": 6, "unit": "slices"},
                    {"name": "butter", "quantity": 4, "unit": "tbsp"},
                    {"name": "garlic", "quantity": 3, "unit": "cloves", "preparation": "minced"},
                ],
            }
        ],
        "steps": [{"order": 1, "instruction": "Mix butter and garlic, spread on bread."}],
    }


@pytest.fixture
def recipe_factory():
    """Factory for single-section recipes."""
    return make_recipe


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo any logging configuration a test (or CLI invocation) applied."""
    logger = logging.getLogger("kitchen_planner")
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
