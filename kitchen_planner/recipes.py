"""Recipe data model and JSON (de)serialization."""

import json
import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from .logging_config import get_logger
from .units import normalize_unit

logger = get_logger(__name__)


class RecipeFormatError(Exception):
    """Exception raised for malformed recipe data."""

    pass


def generate_id() -> str:
    """Generate a unique identifier."""
    return str(uuid.uuid4())


def _now() -> str:
    return datetime.now().isoformat()


@dataclass
class RecipeIngredient:
    """A single ingredient line within a recipe section."""

    name: str
    quantity: float = 0.0
    unit: str = "piece"
    preparation: str | None = None  # e.g., "diced", "minced"
    is_optional: bool = False
    notes: str | None = None
    ingredient_id: str = ""  # Reference to master ingredient, if known
    id: str = field(default_factory=generate_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "ingredient_id": self.ingredient_id,
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "preparation": self.preparation,
            "is_optional": self.is_optional,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RecipeIngredient":
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise RecipeFormatError(f"Ingredient is missing a name: {data!r}")

        quantity = _parse_quantity(data.get("quantity", 0), name)

        return cls(
            id=data.get("id") or generate_id(),
            ingredient_id=data.get("ingredient_id") or "",
            name=name.strip(),
            quantity=quantity,
            unit=normalize_unit(data.get("unit")) or "piece",
            preparation=data.get("preparation") or None,
            is_optional=bool(data.get("is_optional", False)),
            notes=data.get("notes") or None,
        )


@dataclass
class IngredientSection:
    """A titled group of ingredients, e.g. "For the sauce"."""

    title: str
    ingredients: list[RecipeIngredient] = field(default_factory=list)
    id: str = field(default_factory=generate_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "IngredientSection":
        return cls(
            id=data.get("id") or generate_id(),
            title=data.get("title") or "Ingredients",
            ingredients=[RecipeIngredient.from_dict(ing) for ing in data.get("ingredients", [])],
        )


@dataclass
class RecipeStep:
    """One instruction step."""

    order: int
    instruction: str
    timer_minutes: int | None = None
    tips: str | None = None
    image_url: str | None = None
    id: str = field(default_factory=generate_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "order": self.order,
            "instruction": self.instruction,
            "timer_minutes": self.timer_minutes,
            "tips": self.tips,
            "image_url": self.image_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], default_order: int = 1) -> "RecipeStep":
        return cls(
            id=data.get("id") or generate_id(),
            order=int(data.get("order", default_order)),
            instruction=data.get("instruction", ""),
            timer_minutes=data.get("timer_minutes"),
            tips=data.get("tips"),
            image_url=data.get("image_url"),
        )


@dataclass
class Equipment:
    """A piece of equipment a recipe needs."""

    name: str
    is_optional: bool = False
    notes: str | None = None
    id: str = field(default_factory=generate_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "is_optional": self.is_optional,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Equipment":
        return cls(
            id=data.get("id") or generate_id(),
            name=data.get("name", ""),
            is_optional=bool(data.get("is_optional", False)),
            notes=data.get("notes"),
        )


@dataclass
class Recipe:
    """A recipe with its ingredient sections, steps and metadata."""

    title: str
    servings: int = 4
    ingredient_sections: list[IngredientSection] = field(default_factory=list)
    steps: list[RecipeStep] = field(default_factory=list)
    equipment: list[Equipment] = field(default_factory=list)
    description: str = ""
    cuisine_type: str = "other"
    meal_type: list[str] = field(default_factory=list)
    item_type: str | None = None
    tags: list[str] = field(default_factory=list)
    prep_time_minutes: int = 0
    cook_time_minutes: int = 0
    source_url: str | None = None
    is_favorite: bool = False
    rating: float | None = None
    notes: str | None = None
    id: str = field(default_factory=generate_id)
    created_at: str = field(default_factory=_now)
    updated_at: str = field(default_factory=_now)

    @property
    def total_time_minutes(self) -> int:
        return self.prep_time_minutes + self.cook_time_minutes

    @property
    def ingredients(self) -> list[RecipeIngredient]:
        """All ingredient lines across sections, in order."""
        return [ing for section in self.ingredient_sections for ing in section.ingredients]

    @property
    def ingredient_names(self) -> list[str]:
        return [ing.name for ing in self.ingredients]

    def touch(self) -> None:
        """Mark the recipe as updated now."""
        self.updated_at = _now()

    def to_dict(self) -> dict[str, Any]:
        """Convert recipe to dictionary for serialization."""
        return {
            "id": self.id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "title": self.title,
            "description": self.description,
            "cuisine_type": self.cuisine_type,
            "meal_type": list(self.meal_type),
            "item_type": self.item_type,
            "tags": list(self.tags),
            "prep_time_minutes": self.prep_time_minutes,
            "cook_time_minutes": self.cook_time_minutes,
            "total_time_minutes": self.total_time_minutes,
            "servings": self.servings,
            "equipment": [eq.to_dict() for eq in self.equipment],
            "ingredient_sections": [section.to_dict() for section in self.ingredient_sections],
            "steps": [step.to_dict() for step in self.steps],
            "source_url": self.source_url,
            "is_favorite": self.is_favorite,
            "rating": self.rating,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Recipe":
        """
        Create recipe from dictionary.

        Accepts partial payloads (such as those returned by the recipe parsing
        service): only the title is required.

        Raises:
            RecipeFormatError: If the payload is not a recipe
        """
        if not isinstance(data, dict):
            raise RecipeFormatError(f"Expected a recipe object, got {type(data).__name__}")

        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            raise RecipeFormatError("Recipe is missing a title")

        try:
            servings = _parse_servings(data.get("servings", 4), title)
            prep = int(data.get("prep_time_minutes", 0) or 0)
            cook = int(data.get("cook_time_minutes", 0) or 0)
        except (TypeError, ValueError) as e:
            raise RecipeFormatError(f"Invalid number in recipe '{title}': {e}") from e

        meal_type = data.get("meal_type", [])
        if isinstance(meal_type, str):
            meal_type = [meal_type]

        created_at = data.get("created_at") or _now()

        try:
            steps = [
                RecipeStep.from_dict(step, default_order=i)
                for i, step in enumerate(data.get("steps", []), 1)
            ]
            return cls(
                id=data.get("id") or generate_id(),
                created_at=created_at,
                updated_at=data.get("updated_at") or created_at,
                title=title.strip(),
                description=data.get("description", ""),
                cuisine_type=data.get("cuisine_type", "other"),
                meal_type=list(meal_type),
                item_type=data.get("item_type"),
                tags=list(data.get("tags", [])),
                prep_time_minutes=prep,
                cook_time_minutes=cook,
                servings=servings,
                equipment=[Equipment.from_dict(eq) for eq in data.get("equipment", [])],
                ingredient_sections=[
                    IngredientSection.from_dict(section)
                    for section in data.get("ingredient_sections", [])
                ],
                steps=sorted(steps, key=lambda s: s.order),
                source_url=data.get("source_url"),
                is_favorite=bool(data.get("is_favorite", False)),
                rating=data.get("rating"),
                notes=data.get("notes"),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise RecipeFormatError(f"Malformed recipe '{title}': {e}") from e


def _parse_servings(value: Any, title: str) -> int:
    if isinstance(value, bool):
        raise RecipeFormatError(f"Invalid servings in recipe '{title}': {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise RecipeFormatError(
                f"Servings must be a whole number in recipe '{title}', got {value}"
            )
    return int(value)


def _parse_quantity(value: Any, name: str) -> float:
    try:
        quantity = float(value if value is not None else 0)
    except (TypeError, ValueError) as e:
        raise RecipeFormatError(f"Invalid quantity for '{name}': {value!r}") from e
    if not math.isfinite(quantity):
        raise RecipeFormatError(f"Invalid quantity for '{name}': {value!r}")
    if quantity < 0:
        raise RecipeFormatError(f"Negative quantity for '{name}': {quantity}")
    return quantity


def load_recipe_file(path: str | Path) -> Recipe:
    """
    Load a recipe from a JSON file.

    Raises:
        RecipeFormatError: If the file can't be read or isn't a valid recipe
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise RecipeFormatError(f"Failed to read recipe file {path}: {e}") from e

    recipe = Recipe.from_dict(data)
    logger.debug(f"Loaded recipe '{recipe.title}' from {path}")
    return recipe


def save_recipe_file(recipe: Recipe, path: str | Path) -> None:
    """Save a recipe to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(recipe.to_dict(), f, indent=2, ensure_ascii=False)
