"""Shopping list aggregation: combine scaled recipe ingredients into one list."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .categories import CATEGORY_LABELS, OTHER, default_catalog, normalize_name
from .logging_config import get_logger
from .recipes import Recipe, generate_id
from .scaler import calculate_scale_factor, scale_quantity
from .units import is_to_taste, normalize_unit

logger = get_logger(__name__)

# (normalized name, unit) -> on-hand quantity in that unit
PantryLookup = Callable[[str, str], float]
# normalized name -> category, or None when unknown
CategoryLookup = Callable[[str], str | None]


@dataclass
class ShoppingRequest:
    """A recipe to shop for, at a given serving count."""

    recipe: Recipe
    target_servings: int


@dataclass
class ShoppingItem:
    """One line of the shopping list.

    Everything except `is_checked` is derived from the recipes and pantry
    that produced the item. The generated `id` is not part of its identity.
    """

    name: str
    unit: str
    category: str
    needed_quantity: float
    on_hand_quantity: float = 0.0
    is_checked: bool = False
    from_recipes: list[str] = field(default_factory=list)  # Recipe IDs
    recipe_titles: list[str] = field(default_factory=list)
    ingredient_id: str = ""
    id: str = field(default_factory=generate_id, compare=False)

    @property
    def to_buy_quantity(self) -> float:
        return max(0.0, self.needed_quantity - self.on_hand_quantity)

    @property
    def key(self) -> tuple[str, str]:
        return normalize_name(self.name), self.unit

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "ingredient_id": self.ingredient_id,
            "name": self.name,
            "category": self.category,
            "needed_quantity": self.needed_quantity,
            "unit": self.unit,
            "on_hand_quantity": self.on_hand_quantity,
            "to_buy_quantity": self.to_buy_quantity,
            "is_checked": self.is_checked,
            "from_recipes": list(self.from_recipes),
            "recipe_titles": list(self.recipe_titles),
        }


@dataclass
class _Accumulator:
    name: str
    unit: str
    total: float = 0.0
    ingredient_id: str = ""
    recipe_ids: list[str] = field(default_factory=list)
    recipe_titles: list[str] = field(default_factory=list)

    def add(self, quantity: float, recipe: Recipe, ingredient_id: str) -> None:
        self.total += quantity
        if not self.ingredient_id and ingredient_id:
            self.ingredient_id = ingredient_id
        if recipe.id not in self.recipe_ids:
            self.recipe_ids.append(recipe.id)
            self.recipe_titles.append(recipe.title)


def _no_pantry(name: str, unit: str) -> float:
    return 0.0


def _as_request(request: ShoppingRequest | tuple[Recipe, int]) -> ShoppingRequest:
    if isinstance(request, ShoppingRequest):
        return request
    recipe, target_servings = request
    return ShoppingRequest(recipe=recipe, target_servings=target_servings)


def aggregate_shopping_list(
    requests: Iterable[ShoppingRequest | tuple[Recipe, int]],
    pantry_lookup: PantryLookup | None = None,
    category_lookup: CategoryLookup | None = None,
) -> list[ShoppingItem]:
    """
    Combine the ingredients of several recipes into one shopping list.

    Each recipe is scaled to its requested serving count. Lines are merged
    when their normalized name and unit match; the same name in a different
    unit stays a separate item. To-taste lines are left out entirely.

    Args:
        requests: (recipe, target_servings) pairs, in shopping order
        pantry_lookup: Returns the on-hand quantity for (name, unit); 0 when
            unknown or tracked in another unit
        category_lookup: Returns the category for a name; None or an unknown
            category puts the item under "other"

    Returns:
        Items grouped by category (categories in first-seen order), each group
        in first-seen ingredient order

    Raises:
        InvalidServings: If any recipe or target serving count is invalid.
            Nothing is returned for the other requests.
    """
    requests = [_as_request(r) for r in requests]
    if not requests:
        return []

    pantry_lookup = pantry_lookup or _no_pantry
    catalog = default_catalog()
    if category_lookup is None:
        category_lookup = catalog.category_for

    # Validate every request before doing any work
    for request in requests:
        calculate_scale_factor(request.recipe.servings, request.target_servings)

    accumulated: dict[tuple[str, str], _Accumulator] = {}

    for request in requests:
        recipe = request.recipe
        for ingredient in recipe.ingredients:
            if is_to_taste(ingredient.unit):
                continue

            scaled = scale_quantity(ingredient.quantity, recipe.servings, request.target_servings)
            name = normalize_name(ingredient.name)
            unit = normalize_unit(ingredient.unit)
            key = (name, unit)

            if key not in accumulated:
                # First spelling seen is the one displayed
                accumulated[key] = _Accumulator(name=ingredient.name.strip(), unit=unit)
            accumulated[key].add(scaled, recipe, ingredient.ingredient_id)

    groups: dict[str, list[ShoppingItem]] = {}

    for (name, unit), acc in accumulated.items():
        category = category_lookup(name)
        if category not in CATEGORY_LABELS:
            category = OTHER

        item = ShoppingItem(
            name=acc.name,
            unit=unit,
            category=category,
            needed_quantity=acc.total,
            on_hand_quantity=max(0.0, pantry_lookup(name, unit) or 0.0),
            from_recipes=list(acc.recipe_ids),
            recipe_titles=list(acc.recipe_titles),
            ingredient_id=acc.ingredient_id or catalog.ingredient_id_for(name),
        )
        groups.setdefault(category, []).append(item)

    items = [item for group in groups.values() for item in group]
    logger.debug(
        f"Aggregated {len(requests)} recipe(s) into {len(items)} item(s) "
        f"across {len(groups)} categories"
    )
    return items


@dataclass
class ShoppingList:
    """A generated shopping list and the user's progress through it."""

    items: list[ShoppingItem] = field(default_factory=list)
    week_start: str | None = None
    generated_at: str = field(default_factory=lambda: datetime.now().isoformat())
    id: str = field(default_factory=generate_id)

    @property
    def total_count(self) -> int:
        return len(self.items)

    @property
    def checked_count(self) -> int:
        return sum(1 for item in self.items if item.is_checked)

    @property
    def progress(self) -> float:
        """Percentage of items checked off (0 for an empty list)."""
        if not self.items:
            return 0.0
        return self.checked_count / self.total_count * 100

    def grouped(self) -> dict[str, list[ShoppingItem]]:
        """Items by category, in list order."""
        groups: dict[str, list[ShoppingItem]] = {}
        for item in self.items:
            groups.setdefault(item.category, []).append(item)
        return groups

    def get(self, item_id: str) -> ShoppingItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise KeyError(item_id)

    def toggle(self, item_id: str) -> ShoppingItem:
        item = self.get(item_id)
        item.is_checked = not item.is_checked
        return item

    def uncheck_all(self) -> None:
        for item in self.items:
            item.is_checked = False

    def clear_checked(self) -> int:
        """Drop checked items. Returns how many were removed."""
        before = len(self.items)
        self.items = [item for item in self.items if not item.is_checked]
        return before - len(self.items)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "week_start": self.week_start,
            "generated_at": self.generated_at,
            "items": [item.to_dict() for item in self.items],
        }


def build_shopping_list(
    requests: Iterable[ShoppingRequest | tuple[Recipe, int]],
    pantry_lookup: PantryLookup | None = None,
    category_lookup: CategoryLookup | None = None,
    week_start: str | None = None,
) -> ShoppingList:
    """Aggregate requests into a timestamped ShoppingList."""
    items = aggregate_shopping_list(requests, pantry_lookup, category_lookup)
    return ShoppingList(items=items, week_start=week_start)
