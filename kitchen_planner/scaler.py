"""Recipe scaling and quantity math logic.

Scaled quantities keep full float precision. Rounding only happens when a
quantity is formatted for display, so summing scaled lines across several
recipes never compounds rounding error.
"""

import math
from dataclasses import dataclass

from .recipes import Recipe, RecipeIngredient


class ScalingError(Exception):
    """Base exception for invalid scaling input."""

    pass


class InvalidServings(ScalingError, ValueError):
    """A serving count is zero or negative where a positive count is required."""

    pass


class InvalidQuantity(ScalingError, ValueError):
    """A quantity is negative or not a finite number."""

    pass


@dataclass
class ScaledIngredient:
    """An ingredient line with its quantity scaled to a new serving count."""

    original: RecipeIngredient
    scaled_quantity: float
    scale_factor: float
    section: str | None = None

    @property
    def name(self) -> str:
        return self.original.name

    @property
    def unit(self) -> str:
        return self.original.unit


def _check_servings(from_servings: float, to_servings: float) -> None:
    if from_servings is None or from_servings <= 0:
        raise InvalidServings(f"Original serving count must be positive, got {from_servings}")
    if to_servings is None or to_servings < 0:
        raise InvalidServings(f"Target serving count can't be negative, got {to_servings}")


def calculate_scale_factor(original_servings: int, target_servings: int | None = None) -> float:
    """
    Calculate the scaling factor for a recipe.

    Args:
        original_servings: Serving count the recipe was written for
        target_servings: Desired serving count (None means unscaled)

    Returns:
        Factor to multiply quantities by

    Raises:
        InvalidServings: If original_servings <= 0 or target_servings < 0
    """
    if target_servings is None:
        target_servings = original_servings
    _check_servings(original_servings, target_servings)
    return target_servings / original_servings


def scale_quantity(quantity: float, from_servings: float, to_servings: float) -> float:
    """
    Scale a quantity from one serving count to another.

    Args:
        quantity: Original quantity (non-negative)
        from_servings: Serving count the quantity is for (must be > 0)
        to_servings: Target serving count (must be >= 0)

    Returns:
        quantity * (to_servings / from_servings), unrounded

    Raises:
        InvalidServings: If from_servings <= 0 or to_servings < 0
        InvalidQuantity: If quantity is negative or not finite
    """
    _check_servings(from_servings, to_servings)

    if not math.isfinite(quantity) or quantity < 0:
        raise InvalidQuantity(f"Quantity must be a non-negative number, got {quantity}")

    if quantity == 0:
        return 0.0

    return quantity * (to_servings / from_servings)


def scale_ingredient(
    ingredient: RecipeIngredient,
    from_servings: float,
    to_servings: float,
    section: str | None = None,
) -> ScaledIngredient:
    """Scale a single ingredient line."""
    scaled_qty = scale_quantity(ingredient.quantity, from_servings, to_servings)
    return ScaledIngredient(
        original=ingredient,
        scaled_quantity=scaled_qty,
        scale_factor=to_servings / from_servings,
        section=section,
    )


def scale_recipe(
    recipe: Recipe,
    target_servings: int | None = None,
) -> tuple[list[ScaledIngredient], float, int]:
    """
    Scale all ingredients in a recipe.

    Args:
        recipe: The recipe to scale
        target_servings: Desired serving count (defaults to the recipe's own)

    Returns:
        Tuple of (scaled_ingredients, scale_factor, new_servings)

    Raises:
        InvalidServings: If the recipe or target serving count is invalid
    """
    new_servings = recipe.servings if target_servings is None else target_servings
    scale_factor = calculate_scale_factor(recipe.servings, new_servings)

    scaled_ingredients = [
        scale_ingredient(ing, recipe.servings, new_servings, section=section.title)
        for section in recipe.ingredient_sections
        for ing in section.ingredients
    ]

    return scaled_ingredients, scale_factor, new_servings


def format_scale_info(scale_factor: float, original_servings: int, new_servings: int) -> str:
    """
    Format scaling information for display.

    Args:
        scale_factor: The scaling factor used
        original_servings: Original serving count
        new_servings: New serving count after scaling

    Returns:
        Human-readable scaling description
    """
    if scale_factor == 1.0:
        return f"Original recipe ({original_servings} servings)"

    if scale_factor == 2.0:
        desc = "Doubled"
    elif scale_factor == 0.5:
        desc = "Halved"
    elif scale_factor == 3.0:
        desc = "Tripled"
    else:
        desc = f"Scaled {scale_factor:.2g}x"

    return f"{desc} ({original_servings} → {new_servings} servings)"
