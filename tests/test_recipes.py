"""Tests for the recipe model and recipe files."""

import json

import pytest

from kitchen_planner.recipes import (
    Recipe,
    RecipeFormatError,
    RecipeIngredient,
    load_recipe_file,
    save_recipe_file,
)


class TestRecipeIngredientFromDict:
    """Tests for RecipeIngredient.from_dict."""

    def test_normalizes_unit(self):
        ing = RecipeIngredient.from_dict({"name": " garlic ", "quantity": 2, "unit": "Cloves"})
        assert ing.name == "garlic"
        assert ing.unit == "clove"
        assert ing.quantity == 2.0

    def test_defaults(self):
        ing = RecipeIngredient.from_dict({"name": "egg"})
        assert ing.quantity == 0
        assert ing.unit == "piece"
        assert ing.id

    def test_missing_name_raises(self):
        with pytest.raises(RecipeFormatError, match="missing a name"):
            RecipeIngredient.from_dict({"quantity": 1})

    @pytest.mark.parametrize("bad", [-1, "lots", "nan"])
    def test_bad_quantity_raises(self, bad):
        with pytest.raises(RecipeFormatError):
            RecipeIngredient.from_dict({"name": "egg", "quantity": bad})


class TestRecipeFromDict:
    """Tests for Recipe.from_dict."""

    def test_partial_payload(self, parsed_recipe_payload):
        recipe = Recipe.from_dict(parsed_recipe_payload)

        assert recipe.title == "Garlic Bread"
        assert recipe.servings == 6
        assert recipe.total_time_minutes == 15
        assert recipe.ingredient_names == ["sourdough bread", "butter", "garlic"]
        assert [ing.unit for ing in recipe.ingredients] == ["slice", "tablespoon", "clove"]
        assert recipe.ingredients[2].preparation == "minced"

    def test_missing_title_raises(self):
        with pytest.raises(RecipeFormatError, match="title"):
            Recipe.from_dict({"servings": 2})

    def test_not_a_dict_raises(self):
        with pytest.raises(RecipeFormatError):
            Recipe.from_dict(["not", "a", "recipe"])

    def test_bad_servings_raises(self):
        with pytest.raises(RecipeFormatError, match="Invalid number"):
            Recipe.from_dict({"title": "Soup", "servings": "many"})

    @pytest.mark.parametrize("servings", [2.5, "2.5", True])
    def test_fractional_servings_raises(self, servings):
        with pytest.raises(RecipeFormatError):
            Recipe.from_dict({"title": "Soup", "servings": servings})

    def test_whole_float_servings_accepted(self):
        assert Recipe.from_dict({"title": "Soup", "servings": 6.0}).servings == 6

    @pytest.mark.parametrize(
        "field, value",
        [
            ("ingredient_sections", ["eggs"]),
            ("steps", ["Boil the water."]),
            ("equipment", ["pot"]),
            ("tags", None),
        ],
    )
    def test_malformed_nested_data_raises(self, field, value):
        with pytest.raises(RecipeFormatError, match="Malformed recipe 'Soup'"):
            Recipe.from_dict({"title": "Soup", field: value})

    def test_nested_ingredient_error_kept(self):
        data = {"title": "Soup", "ingredient_sections": [{"ingredients": [{"quantity": 1}]}]}
        with pytest.raises(RecipeFormatError, match="missing a name"):
            Recipe.from_dict(data)

    def test_steps_sorted_by_order(self):
        recipe = Recipe.from_dict(
            {
                "title": "Toast",
                "steps": [
                    {"order": 2, "instruction": "Butter it."},
                    {"order": 1, "instruction": "Toast the bread."},
                ],
            }
        )
        assert [s.instruction for s in recipe.steps] == ["Toast the bread.", "Butter it."]

    def test_meal_type_string_becomes_list(self):
        recipe = Recipe.from_dict({"title": "Oats", "meal_type": "breakfast"})
        assert recipe.meal_type == ["breakfast"]

    def test_round_trip_keeps_identity(self, carbonara):
        restored = Recipe.from_dict(carbonara.to_dict())

        assert restored.id == carbonara.id
        assert restored.created_at == carbonara.created_at
        assert restored.ingredient_names == carbonara.ingredient_names
        assert restored.steps[0].timer_minutes == 10


class TestRecipeFiles:
    """Tests for load_recipe_file / save_recipe_file."""

    def test_save_and_load(self, tmp_path, carbonara):
        path = tmp_path / "recipe.json"
        save_recipe_file(carbonara, path)

        assert load_recipe_file(path).title == "Spaghetti Carbonara"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(RecipeFormatError, match="Failed to read"):
            load_recipe_file(tmp_path / "nope.json")

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(RecipeFormatError):
            load_recipe_file(path)

    def test_file_is_plain_json(self, recipe_file):
        data = json.loads(recipe_file.read_text(encoding="utf-8"))
        assert data["servings"] == 4
        assert data["ingredient_sections"][0]["title"] == "Ingredients"
