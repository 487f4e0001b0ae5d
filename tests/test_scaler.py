"""Unit tests for the scaler module."""

import math

import pytest

from kitchen_planner.recipes import IngredientSection, Recipe, RecipeIngredient
from kitchen_planner.scaler import (
    InvalidQuantity,
    InvalidServings,
    ScaledIngredient,
    ScalingError,
    calculate_scale_factor,
    format_scale_info,
    scale_ingredient,
    scale_quantity,
    scale_recipe,
)


class TestCalculateScaleFactor:
    """Tests for calculate_scale_factor function."""

    def test_target_servings_double(self):
        assert calculate_scale_factor(original_servings=4, target_servings=8) == 2.0

    def test_target_servings_half(self):
        assert calculate_scale_factor(original_servings=8, target_servings=4) == 0.5

    def test_no_target_returns_one(self):
        assert calculate_scale_factor(original_servings=4) == 1.0

    def test_zero_target_is_allowed(self):
        assert calculate_scale_factor(original_servings=4, target_servings=0) == 0.0

    def test_zero_original_raises(self):
        with pytest.raises(InvalidServings):
            calculate_scale_factor(original_servings=0, target_servings=4)

    def test_negative_target_raises(self):
        with pytest.raises(InvalidServings):
            calculate_scale_factor(original_servings=4, target_servings=-1)


class TestScaleQuantity:
    """Tests for scale_quantity function."""

    def test_double(self):
        assert scale_quantity(2.0, 4, 8) == 4.0

    def test_half(self):
        assert scale_quantity(2.0, 4, 2) == 1.0

    def test_same_servings_is_identity(self):
        assert scale_quantity(1.75, 3, 3) == 1.75

    def test_zero_quantity_stays_zero(self):
        assert scale_quantity(0, 4, 10) == 0.0

    def test_zero_target_servings(self):
        assert scale_quantity(5.0, 4, 0) == 0.0

    def test_keeps_full_precision(self):
        # 1/3 of a cup for 1 from a recipe for 3
        assert scale_quantity(1.0, 3, 1) == pytest.approx(1 / 3)

    def test_linear_in_target(self):
        assert scale_quantity(3.0, 4, 6) == pytest.approx(scale_quantity(3.0, 4, 3) * 2)

    def test_zero_from_servings_raises(self):
        with pytest.raises(InvalidServings, match="positive"):
            scale_quantity(1.0, 0, 4)

    def test_negative_from_servings_raises(self):
        with pytest.raises(InvalidServings):
            scale_quantity(1.0, -2, 4)

    def test_negative_to_servings_raises(self):
        with pytest.raises(InvalidServings):
            scale_quantity(1.0, 4, -1)

    def test_negative_quantity_raises(self):
        with pytest.raises(InvalidQuantity):
            scale_quantity(-1.0, 4, 4)

    @pytest.mark.parametrize("bad", [math.nan, math.inf])
    def test_non_finite_quantity_raises(self, bad):
        with pytest.raises(InvalidQuantity):
            scale_quantity(bad, 4, 4)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            scale_quantity(1.0, 0, 4)
        assert issubclass(InvalidQuantity, ScalingError)


class TestScaleIngredient:
    """Tests for scale_ingredient function."""

    def test_scales_quantity_and_keeps_original(self):
        ing = RecipeIngredient(name="flour", quantity=2.0, unit="cup")
        result = scale_ingredient(ing, 4, 6, section="Dough")

        assert isinstance(result, ScaledIngredient)
        assert result.scaled_quantity == 3.0
        assert result.scale_factor == 1.5
        assert result.section == "Dough"
        assert result.original is ing
        assert result.name == "flour"
        assert result.unit == "cup"


class TestScaleRecipe:
    """Tests for scale_recipe function."""

    @pytest.fixture
    def two_section_recipe(self):
        return Recipe(
            title="Tikka Masala",
            servings=4,
            ingredient_sections=[
                IngredientSection(
                    title="Marinade",
                    ingredients=[RecipeIngredient(name="yogurt", quantity=1, unit="cup")],
                ),
                IngredientSection(
                    title="Sauce",
                    ingredients=[
                        RecipeIngredient(name="canned tomatoes", quantity=1, unit="can"),
                        RecipeIngredient(name="heavy cream", quantity=0.5, unit="cup"),
                    ],
                ),
            ],
        )

    def test_scales_every_section(self, two_section_recipe):
        scaled, factor, servings = scale_recipe(two_section_recipe, 8)

        assert factor == 2.0
        assert servings == 8
        assert [s.scaled_quantity for s in scaled] == [2.0, 2.0, 1.0]
        assert [s.section for s in scaled] == ["Marinade", "Sauce", "Sauce"]

    def test_default_target_is_unscaled(self, two_section_recipe):
        scaled, factor, servings = scale_recipe(two_section_recipe)

        assert factor == 1.0
        assert servings == 4
        assert scaled[2].scaled_quantity == 0.5

    def test_does_not_mutate_recipe(self, two_section_recipe):
        scale_recipe(two_section_recipe, 12)
        assert two_section_recipe.ingredients[0].quantity == 1

    def test_invalid_recipe_servings_raises(self, two_section_recipe):
        two_section_recipe.servings = 0
        with pytest.raises(InvalidServings):
            scale_recipe(two_section_recipe, 4)


class TestFormatScaleInfo:
    """Tests for format_scale_info function."""

    def test_original(self):
        assert format_scale_info(1.0, 4, 4) == "Original recipe (4 servings)"

    def test_doubled(self):
        assert format_scale_info(2.0, 2, 4) == "Doubled (2 → 4 servings)"

    def test_halved(self):
        assert format_scale_info(0.5, 4, 2) == "Halved (4 → 2 servings)"

    def test_tripled(self):
        assert format_scale_info(3.0, 2, 6) == "Tripled (2 → 6 servings)"

    def test_other_factor(self):
        assert format_scale_info(1.5, 4, 6) == "Scaled 1.5x (4 → 6 servings)"
