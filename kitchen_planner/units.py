"""Ingredient unit vocabulary, display labels and alias normalization.

Units are never converted into one another: "1 lb" and "16 oz" stay two
different quantities. Normalization only folds different spellings of the
same unit ("tbsp", "tablespoons") onto one canonical name.
"""

from typing import Literal

IngredientUnit = Literal[
    "piece",
    "cup",
    "tablespoon",
    "teaspoon",
    "ounce",
    "pound",
    "gram",
    "kilogram",
    "milliliter",
    "liter",
    "pinch",
    "dash",
    "to_taste",
    "clove",
    "slice",
    "bunch",
    "sprig",
    "can",
    "package",
    "bottle",
    "jar",
]

TO_TASTE = "to_taste"

UNIT_LABELS: dict[str, str] = {
    "piece": "piece(s)",
    "cup": "cup(s)",
    "tablespoon": "tbsp",
    "teaspoon": "tsp",
    "ounce": "oz",
    "pound": "lb",
    "gram": "g",
    "kilogram": "kg",
    "milliliter": "ml",
    "liter": "L",
    "pinch": "pinch",
    "dash": "dash",
    "to_taste": "to taste",
    "clove": "clove(s)",
    "slice": "slice(s)",
    "bunch": "bunch",
    "sprig": "sprig(s)",
    "can": "can(s)",
    "package": "package(s)",
    "bottle": "bottle(s)",
    "jar": "jar(s)",
}

# Alternative spellings -> canonical unit
UNIT_ALIASES: dict[str, str] = {
    # Count
    "pieces": "piece",
    "pcs": "piece",
    "pc": "piece",
    "whole": "piece",
    "piece(s)": "piece",
    "cloves": "clove",
    "clove(s)": "clove",
    "slices": "slice",
    "slice(s)": "slice",
    "bunches": "bunch",
    "sprigs": "sprig",
    "sprig(s)": "sprig",
    "cans": "can",
    "can(s)": "can",
    "packages": "package",
    "package(s)": "package",
    "pkg": "package",
    "bottles": "bottle",
    "bottle(s)": "bottle",
    "jars": "jar",
    "jar(s)": "jar",
    "pinches": "pinch",
    "dashes": "dash",
    # Volume
    "cups": "cup",
    "cup(s)": "cup",
    "c": "cup",
    "tbsp": "tablespoon",
    "tbs": "tablespoon",
    "tablespoons": "tablespoon",
    "tsp": "teaspoon",
    "teaspoons": "teaspoon",
    "ml": "milliliter",
    "milliliters": "milliliter",
    "millilitre": "milliliter",
    "l": "liter",
    "liters": "liter",
    "litre": "liter",
    "litres": "liter",
    # Weight
    "oz": "ounce",
    "ounces": "ounce",
    "lb": "pound",
    "lbs": "pound",
    "pounds": "pound",
    "g": "gram",
    "gr": "gram",
    "grams": "gram",
    "kg": "kilogram",
    "kilograms": "kilogram",
    # Not quantifiable
    "to taste": "to_taste",
    "to-taste": "to_taste",
}


def normalize_unit(unit: str | None) -> str:
    """
    Normalize a unit string to its canonical name.

    Known spellings map onto the enumerated units. Anything else is returned
    lower-cased and trimmed, so an unrecognized unit ("head", "loaf") still
    forms its own distinct aggregation key.

    Examples:
        "Tbsp" -> "tablespoon"
        "pieces" -> "piece"
        "heads" -> "heads"
        None -> ""
    """
    if unit is None:
        return ""

    unit_lower = " ".join(unit.lower().split())

    if unit_lower in UNIT_LABELS:
        return unit_lower

    return UNIT_ALIASES.get(unit_lower, unit_lower)


def is_to_taste(unit: str | None) -> bool:
    """Check whether a unit marks a non-quantifiable, to-taste amount."""
    return normalize_unit(unit) == TO_TASTE


def unit_label(unit: str | None) -> str:
    """Get the display label for a unit (unknown units are shown as given)."""
    normalized = normalize_unit(unit)
    return UNIT_LABELS.get(normalized, normalized)
