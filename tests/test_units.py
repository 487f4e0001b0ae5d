"""Tests for unit normalization and labels."""

import pytest

from kitchen_planner.units import (
    UNIT_LABELS,
    is_to_taste,
    normalize_unit,
    unit_label,
)


class TestNormalizeUnit:
    """Tests for normalize_unit function."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("tbsp", "tablespoon"),
            ("Tbsp", "tablespoon"),
            ("tablespoons", "tablespoon"),
            ("tsp", "teaspoon"),
            ("cups", "cup"),
            ("pieces", "piece"),
            ("cloves", "clove"),
            ("lbs", "pound"),
            ("oz", "ounce"),
            ("g", "gram"),
            ("kg", "kilogram"),
            ("ml", "milliliter"),
            ("L", "liter"),
            ("to taste", "to_taste"),
            ("  To  Taste ", "to_taste"),
        ],
    )
    def test_aliases(self, raw, expected):
        assert normalize_unit(raw) == expected

    def test_canonical_unchanged(self):
        for unit in UNIT_LABELS:
            assert normalize_unit(unit) == unit

    def test_unknown_unit_kept_lowercase(self):
        assert normalize_unit(" Head ") == "head"

    def test_none_is_empty(self):
        assert normalize_unit(None) == ""

    def test_no_conversion_between_units(self):
        assert normalize_unit("lb") != normalize_unit("oz")


class TestUnitHelpers:
    """Tests for the unit predicates and labels."""

    def test_is_to_taste(self):
        assert is_to_taste("to_taste")
        assert is_to_taste("To taste")
        assert not is_to_taste("pinch")

    def test_labels(self):
        assert unit_label("tablespoons") == "tbsp"
        assert unit_label("piece") == "piece(s)"
        assert unit_label("head") == "head"
