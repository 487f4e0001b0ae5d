"""Display formatting for quantities, ingredient lines, times and steps."""

import math
import re
from collections.abc import Callable, Iterable

from .recipes import RecipeIngredient
from .scaler import InvalidQuantity
from .units import is_to_taste, unit_label

# Common cooking fractions and their unicode glyphs
COMMON_FRACTIONS: list[tuple[float, str]] = [
    (1 / 8, "⅛"),
    (1 / 4, "¼"),
    (1 / 3, "⅓"),
    (3 / 8, "⅜"),
    (1 / 2, "½"),
    (5 / 8, "⅝"),
    (2 / 3, "⅔"),
    (3 / 4, "¾"),
    (7 / 8, "⅞"),
]

FRACTION_TOLERANCE = 0.01


def format_quantity(quantity: float) -> str:
    """
    Format a quantity the way a cookbook would print it.

    Examples:
        0.5 -> "½"
        1.5 -> "1 ½"
        2 -> "2"
        0.2 -> "0.2"
        1.2345 -> "1.23"

    Negative quantities are clamped to 0.

    Raises:
        InvalidQuantity: If quantity is NaN or infinite
    """
    if not math.isfinite(quantity):
        raise InvalidQuantity(f"Can't format non-finite quantity: {quantity}")

    quantity = max(0.0, float(quantity))
    whole = math.floor(quantity)
    remainder = quantity - whole

    for value, glyph in COMMON_FRACTIONS:
        if abs(remainder - value) < FRACTION_TOLERANCE:
            if whole == 0:
                return glyph
            return f"{whole} {glyph}"

    if remainder == 0:
        return str(whole)

    return f"{quantity:.2f}".rstrip("0").rstrip(".")


def format_ingredient_line(ingredient: RecipeIngredient, scale_factor: float = 1.0) -> str:
    """
    Render an ingredient line, e.g. "1 ½ cup(s) flour, sifted (optional)".

    To-taste ingredients render without a quantity: "salt, to taste".
    """
    optional = " (optional)" if ingredient.is_optional else ""

    if is_to_taste(ingredient.unit):
        return f"{ingredient.name}, to taste{optional}"

    qty = format_quantity(ingredient.quantity * scale_factor)
    prep = f", {ingredient.preparation}" if ingredient.preparation else ""
    parts = [qty, unit_label(ingredient.unit), ingredient.name]
    return " ".join(p for p in parts if p) + prep + optional


def format_time(minutes: int) -> str:
    """Format a duration: "45 min", "1 hr", "1 hr 30 min"."""
    if minutes < 60:
        return f"{minutes} min"
    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"{hours} hr"
    return f"{hours} hr {mins} min"


def _strong(text: str) -> str:
    return f"<strong>{text}</strong>"


def highlight_ingredients(
    text: str,
    ingredient_names: Iterable[str],
    wrap: Callable[[str], str] | None = None,
) -> str:
    """
    Highlight ingredient names mentioned in a step instruction.

    Matches whole words, case-insensitively, preferring the longest name
    ("olive oil" wins over "oil"). The original casing of the text is kept.

    Args:
        text: Instruction text
        ingredient_names: Names to highlight
        wrap: Function wrapping each match (defaults to <strong> tags)

    Returns:
        Text with every mention wrapped
    """
    unique: dict[str, str] = {}
    for name in ingredient_names:
        if name and name.strip():
            unique.setdefault(name.strip().lower(), name.strip())

    if not unique:
        return text

    names = sorted(unique.values(), key=len, reverse=True)
    alternation = "|".join(re.escape(name) for name in names)
    pattern = re.compile(rf"(?<!\w)({alternation})(?!\w)", re.IGNORECASE)

    wrap = wrap or _strong
    return pattern.sub(lambda m: wrap(m.group(1)), text)
