"""Local recipe library: storage, lookup, filtering and sorting."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from .categories import normalize_name
from .logging_config import get_logger
from .recipes import Recipe, RecipeFormatError

logger = get_logger(__name__)

SortOption = Literal[
    "title_asc",
    "title_desc",
    "created_desc",
    "created_asc",
    "rating_desc",
    "time_asc",
    "time_desc",
]

SORT_OPTIONS: tuple[str, ...] = (
    "title_asc",
    "title_desc",
    "created_desc",
    "created_asc",
    "rating_desc",
    "time_asc",
    "time_desc",
)


class LibraryError(Exception):
    """Exception raised for recipe library errors."""

    pass


class RecipeLibrary:
    """Recipes stored in a single JSON file, keyed by recipe id."""

    def __init__(self, path: Path):
        self.path = path

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise LibraryError(f"Failed to load recipe library: {e}") from e

        if not isinstance(data, dict):
            raise LibraryError(f"Recipe library {self.path} is not a JSON object")
        return data

    def _save(self, recipes: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(recipes, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise LibraryError(f"Failed to save recipe library: {e}") from e

    def list_recipes(self) -> list[Recipe]:
        """All stored recipes, newest first."""
        try:
            recipes = [Recipe.from_dict(data) for data in self._load().values()]
        except RecipeFormatError as e:
            raise LibraryError(f"Corrupt recipe in library: {e}") from e
        return sort_recipes(recipes, "created_desc")

    def get_recipe(self, recipe_id: str) -> Recipe:
        """
        Get a recipe by id.

        Raises:
            LibraryError: If no recipe has that id or the stored entry is corrupt
        """
        recipes = self._load()
        if recipe_id not in recipes:
            raise LibraryError(f"Recipe '{recipe_id}' not found")
        try:
            return Recipe.from_dict(recipes[recipe_id])
        except RecipeFormatError as e:
            raise LibraryError(f"Corrupt recipe '{recipe_id}' in library: {e}") from e

    def has_recipe(self, recipe_id: str) -> bool:
        return recipe_id in self._load()

    def save_recipe(self, recipe: Recipe) -> Recipe:
        """Add a recipe, or replace the stored one with the same id."""
        recipes = self._load()
        if recipe.id in recipes:
            recipe.touch()
        recipes[recipe.id] = recipe.to_dict()
        self._save(recipes)
        logger.info(f"Saved recipe '{recipe.title}' ({recipe.id})")
        return recipe

    def delete_recipe(self, recipe_id: str) -> None:
        recipes = self._load()
        if recipe_id not in recipes:
            raise LibraryError(f"Recipe '{recipe_id}' not found")
        del recipes[recipe_id]
        self._save(recipes)
        logger.info(f"Deleted recipe {recipe_id}")

    def set_favorite(self, recipe_id: str, favorite: bool = True) -> Recipe:
        recipe = self.get_recipe(recipe_id)
        recipe.is_favorite = favorite
        return self.save_recipe(recipe)

    def recipes_by_id(self) -> dict[str, Recipe]:
        return {recipe.id: recipe for recipe in self.list_recipes()}


@dataclass
class RecipeFilters:
    """Criteria for narrowing down the recipe list. Empty criteria match all."""

    search: str = ""
    cuisine_types: list[str] = field(default_factory=list)
    meal_types: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    max_time_minutes: int | None = None
    favorites_only: bool = False
    min_rating: float | None = None

    def matches(self, recipe: Recipe) -> bool:
        if self.search and not _matches_search(recipe, self.search):
            return False
        if self.cuisine_types and recipe.cuisine_type not in self.cuisine_types:
            return False
        if self.meal_types and not set(self.meal_types) & set(recipe.meal_type):
            return False
        if self.tags:
            recipe_tags = {normalize_name(t) for t in recipe.tags}
            if not all(normalize_name(t) in recipe_tags for t in self.tags):
                return False
        if self.max_time_minutes is not None and recipe.total_time_minutes > self.max_time_minutes:
            return False
        if self.favorites_only and not recipe.is_favorite:
            return False
        if self.min_rating is not None and (recipe.rating or 0) < self.min_rating:
            return False
        return True


def _matches_search(recipe: Recipe, search: str) -> bool:
    term = normalize_name(search)
    haystack = [recipe.title, recipe.description, *recipe.tags, *recipe.ingredient_names]
    return any(term in normalize_name(text) for text in haystack if text)


def filter_recipes(recipes: list[Recipe], filters: RecipeFilters) -> list[Recipe]:
    return [recipe for recipe in recipes if filters.matches(recipe)]


def sort_recipes(recipes: list[Recipe], sort_by: str = "created_desc") -> list[Recipe]:
    """
    Sort recipes by one of the SORT_OPTIONS.

    Raises:
        ValueError: For an unknown sort option
    """
    if sort_by == "title_asc":
        return sorted(recipes, key=lambda r: r.title.lower())
    if sort_by == "title_desc":
        return sorted(recipes, key=lambda r: r.title.lower(), reverse=True)
    if sort_by == "created_desc":
        return sorted(recipes, key=lambda r: r.created_at, reverse=True)
    if sort_by == "created_asc":
        return sorted(recipes, key=lambda r: r.created_at)
    if sort_by == "rating_desc":
        # Unrated recipes go last
        return sorted(recipes, key=lambda r: r.rating if r.rating is not None else -1, reverse=True)
    if sort_by == "time_asc":
        return sorted(recipes, key=lambda r: r.total_time_minutes)
    if sort_by == "time_desc":
        return sorted(recipes, key=lambda r: r.total_time_minutes, reverse=True)
    raise ValueError(f"Unsupported sort option: {sort_by}")
