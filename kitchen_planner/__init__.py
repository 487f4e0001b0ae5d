"""Kitchen Planner - Recipe scaling, pantry and shopping list tool."""

__version__ = "1.0.0"

from .formatting import format_ingredient_line, format_quantity
from .recipes import Recipe, RecipeIngredient
from .scaler import InvalidQuantity, InvalidServings, ScaledIngredient, scale_quantity, scale_recipe
from .shopping import ShoppingItem, ShoppingList, ShoppingRequest, aggregate_shopping_list

__all__ = [
    "Recipe",
    "RecipeIngredient",
    "format_quantity",
    "format_ingredient_line",
    "scale_quantity",
    "scale_recipe",
    "ScaledIngredient",
    "aggregate_shopping_list",
    "ShoppingRequest",
    "ShoppingItem",
    "ShoppingList",
    "InvalidServings",
    "InvalidQuantity",
]
