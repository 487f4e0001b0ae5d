"""Tests for the ingredient catalog and categories."""

import pytest

from kitchen_planner.categories import (
    CATEGORY_LABELS,
    DEFAULT_INGREDIENTS,
    IngredientCatalog,
    MasterIngredient,
    category_label,
    default_catalog,
    normalize_name,
)


class TestNormalizeName:
    def test_lowercases_and_collapses_whitespace(self):
        assert normalize_name("  Chicken   Breast ") == "chicken breast"


class TestCategoryLabel:
    def test_known(self):
        assert category_label("canned_goods") == "Canned Goods"

    def test_unknown_is_titled(self):
        assert category_label("space_food") == "Space Food"


class TestIngredientCatalog:
    """Tests for IngredientCatalog."""

    @pytest.fixture
    def catalog(self):
        return default_catalog()

    def test_lookup_by_name(self, catalog):
        assert catalog.category_for("garlic") == "produce"
        assert catalog.category_for("chicken breast") == "poultry"

    def test_lookup_by_alias(self, catalog):
        assert catalog.category_for("Eggs") == "eggs"
        assert catalog.ingredient_id_for("large eggs") == "ing-egg"
        assert catalog.get("pepper").name == "black pepper"

    def test_unknown_ingredient(self, catalog):
        assert catalog.category_for("dragonfruit") == "other"
        assert catalog.ingredient_id_for("dragonfruit") == ""
        assert catalog.get("dragonfruit") is None

    def test_no_fuzzy_matching(self, catalog):
        assert catalog.get("garlick") is None

    def test_contains(self, catalog):
        assert "Garlic Cloves" in catalog
        assert "dragonfruit" not in catalog

    def test_len_counts_ingredients_not_aliases(self, catalog):
        assert len(catalog) == len(DEFAULT_INGREDIENTS)

    def test_default_categories_are_valid(self):
        for ingredient in DEFAULT_INGREDIENTS:
            assert ingredient.category in CATEGORY_LABELS

    def test_add_rejects_unknown_category(self):
        catalog = IngredientCatalog()
        with pytest.raises(ValueError, match="Unknown category"):
            catalog.add(MasterIngredient("x", "thing", "space_food"))

    def test_add_custom(self):
        catalog = IngredientCatalog([MasterIngredient("ing-tofu", "tofu", "other", "package")])
        assert catalog.ingredient_id_for("Tofu") == "ing-tofu"
