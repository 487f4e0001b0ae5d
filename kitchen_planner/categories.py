"""Master ingredient table and category lookup."""

from dataclasses import dataclass, field
from typing import Literal

IngredientCategory = Literal[
    "produce",
    "meat",
    "poultry",
    "seafood",
    "dairy",
    "eggs",
    "grains",
    "pasta",
    "bread",
    "canned_goods",
    "condiments",
    "spices",
    "oils",
    "baking",
    "frozen",
    "beverages",
    "snacks",
    "other",
]

OTHER = "other"

CATEGORY_LABELS: dict[str, str] = {
    "produce": "Produce",
    "meat": "Meat",
    "poultry": "Poultry",
    "seafood": "Seafood",
    "dairy": "Dairy",
    "eggs": "Eggs",
    "grains": "Grains & Rice",
    "pasta": "Pasta",
    "bread": "Bread & Bakery",
    "canned_goods": "Canned Goods",
    "condiments": "Condiments & Sauces",
    "spices": "Spices & Herbs",
    "oils": "Oils & Vinegars",
    "baking": "Baking",
    "frozen": "Frozen",
    "beverages": "Beverages",
    "snacks": "Snacks",
    "other": "Other",
}


def normalize_name(name: str) -> str:
    """Normalize an ingredient name for lookups: lower-case, trimmed, single-spaced."""
    return " ".join(name.lower().split())


def category_label(category: str) -> str:
    return CATEGORY_LABELS.get(category, category.replace("_", " ").title())


@dataclass
class MasterIngredient:
    """A known ingredient with its shopping category."""

    id: str
    name: str
    category: str
    default_unit: str = "piece"
    aliases: list[str] = field(default_factory=list)


class IngredientCatalog:
    """Lookup table from ingredient names (and aliases) to master ingredients.

    Matching is exact on the normalized name; there is no fuzzy matching.
    """

    def __init__(self, ingredients: list[MasterIngredient] | None = None):
        self._by_name: dict[str, MasterIngredient] = {}
        for ingredient in ingredients or []:
            self.add(ingredient)

    def add(self, ingredient: MasterIngredient) -> None:
        if ingredient.category not in CATEGORY_LABELS:
            raise ValueError(f"Unknown category '{ingredient.category}' for {ingredient.name}")
        for name in [ingredient.name, *ingredient.aliases]:
            self._by_name[normalize_name(name)] = ingredient

    def get(self, name: str) -> MasterIngredient | None:
        return self._by_name.get(normalize_name(name))

    def category_for(self, name: str) -> str:
        """Get the shopping category for an ingredient ("other" if unknown)."""
        ingredient = self.get(name)
        return ingredient.category if ingredient else OTHER

    def ingredient_id_for(self, name: str) -> str:
        ingredient = self.get(name)
        return ingredient.id if ingredient else ""

    def __len__(self) -> int:
        return len({ing.id for ing in self._by_name.values()})

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._by_name


DEFAULT_INGREDIENTS: list[MasterIngredient] = [
    # Produce
    MasterIngredient("ing-garlic", "garlic", "produce", "clove", ["garlic cloves"]),
    MasterIngredient("ing-onion", "onion", "produce", "piece", ["onions", "yellow onion"]),
    MasterIngredient("ing-tomato", "tomato", "produce", "piece", ["tomatoes"]),
    MasterIngredient("ing-avocado", "avocado", "produce", "piece", ["avocados"]),
    MasterIngredient("ing-lemon", "lemon", "produce", "piece", ["lemons"]),
    MasterIngredient("ing-lime", "lime", "produce", "piece", ["limes"]),
    MasterIngredient("ing-ginger", "ginger", "produce", "piece", ["fresh ginger"]),
    MasterIngredient("ing-cilantro", "cilantro", "produce", "bunch", ["coriander"]),
    MasterIngredient("ing-basil", "basil", "produce", "bunch", ["fresh basil"]),
    MasterIngredient("ing-carrot", "carrot", "produce", "piece", ["carrots"]),
    MasterIngredient("ing-potato", "potato", "produce", "piece", ["potatoes"]),
    # Meat, poultry & seafood
    MasterIngredient(
        "ing-chicken-breast", "chicken breast", "poultry", "pound", ["chicken breasts"]
    ),
    MasterIngredient("ing-chicken-thigh", "chicken thigh", "poultry", "pound", ["chicken thighs"]),
    MasterIngredient("ing-pancetta", "pancetta", "meat", "ounce", ["guanciale"]),
    MasterIngredient("ing-ground-beef", "ground beef", "meat", "pound", ["minced beef"]),
    MasterIngredient("ing-bacon", "bacon", "meat", "slice"),
    MasterIngredient("ing-salmon", "salmon", "seafood", "pound", ["salmon fillet"]),
    MasterIngredient("ing-shrimp", "shrimp", "seafood", "pound", ["prawns"]),
    # Dairy & eggs
    MasterIngredient("ing-egg", "egg", "eggs", "piece", ["eggs", "large egg", "large eggs"]),
    MasterIngredient("ing-butter", "butter", "dairy", "tablespoon", ["unsalted butter"]),
    MasterIngredient("ing-milk", "milk", "dairy", "cup", ["whole milk"]),
    MasterIngredient("ing-heavy-cream", "heavy cream", "dairy", "cup", ["double cream"]),
    MasterIngredient("ing-parmesan", "parmesan cheese", "dairy", "cup", ["parmesan"]),
    MasterIngredient("ing-yogurt", "yogurt", "dairy", "cup", ["plain yogurt", "greek yogurt"]),
    # Grains, pasta & bread
    MasterIngredient("ing-rice", "rice", "grains", "cup", ["basmati rice", "white rice"]),
    MasterIngredient("ing-spaghetti", "spaghetti", "pasta", "package"),
    MasterIngredient("ing-pasta", "pasta", "pasta", "package", ["penne"]),
    MasterIngredient("ing-sourdough", "sourdough bread", "bread", "slice", ["sourdough"]),
    # Pantry staples
    MasterIngredient("ing-tomato-paste", "tomato paste", "canned_goods", "can"),
    MasterIngredient(
        "ing-canned-tomatoes", "canned tomatoes", "canned_goods", "can", ["crushed tomatoes"]
    ),
    MasterIngredient(
        "ing-chicken-broth", "chicken broth", "canned_goods", "cup", ["chicken stock"]
    ),
    MasterIngredient("ing-soy-sauce", "soy sauce", "condiments", "tablespoon"),
    MasterIngredient("ing-salt", "salt", "spices", "teaspoon", ["kosher salt", "sea salt"]),
    MasterIngredient("ing-black-pepper", "black pepper", "spices", "teaspoon", ["pepper"]),
    MasterIngredient("ing-garam-masala", "garam masala", "spices", "tablespoon"),
    MasterIngredient("ing-cumin", "cumin", "spices", "teaspoon", ["ground cumin"]),
    MasterIngredient(
        "ing-olive-oil", "olive oil", "oils", "tablespoon", ["extra virgin olive oil"]
    ),
    MasterIngredient("ing-vegetable-oil", "vegetable oil", "oils", "tablespoon"),
    MasterIngredient("ing-flour", "all-purpose flour", "baking", "cup", ["flour"]),
    MasterIngredient("ing-sugar", "sugar", "baking", "cup", ["granulated sugar"]),
    MasterIngredient("ing-baking-powder", "baking powder", "baking", "teaspoon"),
    MasterIngredient("ing-frozen-peas", "frozen peas", "frozen", "cup", ["peas"]),
]


def default_catalog() -> IngredientCatalog:
    """Build the catalog of built-in master ingredients."""
    return IngredientCatalog(DEFAULT_INGREDIENTS)
