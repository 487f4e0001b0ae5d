"""Shopping list export in various formats."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from .categories import category_label
from .formatting import format_quantity
from .logging_config import get_logger
from .shopping import ShoppingItem, ShoppingList
from .units import unit_label

logger = get_logger(__name__)


def format_item(item: ShoppingItem) -> str:
    """One-line description of what to buy, e.g. "2 piece(s) egg"."""
    return f"{format_quantity(item.to_buy_quantity)} {unit_label(item.unit)} {item.name}".strip()


def export_to_json(
    shopping_list: ShoppingList,
    filepath: str | Path,
    *,
    title: str | None = None,
) -> None:
    """
    Export shopping list to JSON format.

    Args:
        shopping_list: The list to export
        filepath: Output file path
        title: Optional list title
    """
    data: dict[str, Any] = {
        "exported_at": datetime.now().isoformat(),
        "title": title,
        **shopping_list.to_dict(),
        "summary": {
            "total_items": shopping_list.total_count,
            "checked": shopping_list.checked_count,
            "to_buy": sum(1 for item in shopping_list.items if item.to_buy_quantity > 0),
            "categories": list(shopping_list.grouped()),
        },
    }

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def export_to_markdown(
    shopping_list: ShoppingList,
    filepath: str | Path,
    *,
    title: str | None = None,
) -> None:
    """
    Export shopping list to Markdown format, one checkbox per item.

    Args:
        shopping_list: The list to export
        filepath: Output file path
        title: Optional list title
    """
    lines: list[str] = []

    # Header
    lines.append(f"# {title or 'Shopping List'}")
    lines.append("")
    lines.append(f"*Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}*")
    if shopping_list.week_start:
        lines.append(f"*Week of {shopping_list.week_start}*")
    lines.append("")
    lines.append(
        f"**{shopping_list.checked_count} of {shopping_list.total_count} items checked**"
    )
    lines.append("")

    for category, items in shopping_list.grouped().items():
        lines.append(f"## {category_label(category)}")
        lines.append("")
        for item in items:
            box = "x" if item.is_checked else " "
            line = f"- [{box}] {format_item(item)}"
            if item.on_hand_quantity > 0:
                line += f" (have {format_quantity(item.on_hand_quantity)})"
            if item.recipe_titles:
                line += f" *({', '.join(item.recipe_titles)})*"
            lines.append(line)
        lines.append("")

    with open(filepath, "w", encoding="utf-8") as f:
        f.write("\n".join(lines))


def export_shopping_list(
    shopping_list: ShoppingList,
    filepath: str | Path,
    *,
    title: str | None = None,
    format: str | None = None,
) -> str:
    """
    Export shopping list to file.

    Format is auto-detected from file extension if not specified.

    Args:
        shopping_list: The list to export
        filepath: Output file path
        title: Optional list title
        format: Output format (json, md) - auto-detected if None

    Returns:
        The format used for export
    """
    path = Path(filepath)

    # Auto-detect format from extension
    if format is None:
        format_map = {
            ".json": "json",
            ".md": "md",
            ".markdown": "md",
        }
        format = format_map.get(path.suffix.lower(), "md")

    if format == "json":
        export_to_json(shopping_list, path, title=title)
    elif format in ("md", "markdown"):
        export_to_markdown(shopping_list, path, title=title)
    else:
        raise ValueError(f"Unsupported format: {format}")

    logger.info(f"Exported {shopping_list.total_count} item(s) to {path} as {format}")
    return format
