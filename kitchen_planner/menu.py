"""Weekly menu: which recipe is cooked when, and for how many."""

import json
from dataclasses import dataclass, field
from datetime import date, timedelta
from pathlib import Path
from typing import Any

from .logging_config import get_logger
from .recipes import Recipe, generate_id
from .shopping import ShoppingRequest

logger = get_logger(__name__)

MEAL_SLOTS = ("breakfast", "lunch", "dinner")


class MenuError(Exception):
    """Exception raised for menu-related errors."""

    pass


@dataclass
class MenuSlot:
    """A recipe planned for one meal."""

    recipe_id: str
    servings: int
    notes: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"recipe_id": self.recipe_id, "servings": self.servings, "notes": self.notes}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MenuSlot":
        try:
            return cls(
                recipe_id=str(data["recipe_id"]),
                servings=int(data["servings"]),
                notes=data.get("notes"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise MenuError(f"Invalid menu slot {data!r}: {e}") from e


@dataclass
class MenuDay:
    """The meals planned for one day."""

    date: date
    breakfast: MenuSlot | None = None
    lunch: MenuSlot | None = None
    dinner: MenuSlot | None = None
    snacks: list[MenuSlot] = field(default_factory=list)

    def slots(self) -> list[MenuSlot]:
        """Planned slots in meal order: breakfast, lunch, dinner, then snacks."""
        meals = [getattr(self, meal) for meal in MEAL_SLOTS]
        return [slot for slot in meals if slot is not None] + list(self.snacks)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"date": self.date.isoformat()}
        for meal in MEAL_SLOTS:
            slot = getattr(self, meal)
            data[meal] = slot.to_dict() if slot else None
        data["snacks"] = [slot.to_dict() for slot in self.snacks]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MenuDay":
        try:
            day = date.fromisoformat(data["date"])
        except (KeyError, TypeError, ValueError) as e:
            raise MenuError(f"Invalid menu day date in {data!r}") from e

        meals = {
            meal: MenuSlot.from_dict(data[meal]) if data.get(meal) else None
            for meal in MEAL_SLOTS
        }
        return cls(
            date=day,
            snacks=[MenuSlot.from_dict(s) for s in data.get("snacks", [])],
            **meals,
        )


@dataclass
class WeeklyMenu:
    """Seven days of planned meals starting on a Sunday."""

    week_start: date
    days: list[MenuDay] = field(default_factory=list)
    id: str = field(default_factory=generate_id)

    @classmethod
    def empty(cls, week_of: date) -> "WeeklyMenu":
        start = week_start(week_of)
        return cls(week_start=start, days=[MenuDay(date=d) for d in week_days(start)])

    def day(self, on: date) -> MenuDay:
        for menu_day in self.days:
            if menu_day.date == on:
                return menu_day
        raise MenuError(f"{on.isoformat()} is not in the week of {self.week_start.isoformat()}")

    def assign(self, on: date, meal: str, recipe_id: str, servings: int) -> MenuSlot:
        """Plan a recipe for a meal. Snacks are appended; other meals are replaced."""
        if servings <= 0:
            raise MenuError(f"Servings must be positive, got {servings}")

        slot = MenuSlot(recipe_id=recipe_id, servings=servings)
        menu_day = self.day(on)
        if meal == "snack":
            menu_day.snacks.append(slot)
        elif meal in MEAL_SLOTS:
            setattr(menu_day, meal, slot)
        else:
            raise MenuError(f"Unknown meal '{meal}'")
        return slot

    def unassign(self, on: date, meal: str, index: int | None = None) -> MenuSlot:
        """
        Take a planned recipe off the menu.

        Args:
            on: Day in this week
            meal: "breakfast", "lunch", "dinner" or "snack"
            index: Which snack to remove; the last one when omitted

        Returns:
            The removed slot

        Raises:
            MenuError: If nothing is planned there or the meal is unknown
        """
        menu_day = self.day(on)
        if meal == "snack":
            if not menu_day.snacks:
                raise MenuError(f"No snacks planned on {on.isoformat()}")
            if index is None:
                index = len(menu_day.snacks) - 1
            if not 0 <= index < len(menu_day.snacks):
                raise MenuError(
                    f"No snack #{index} on {on.isoformat()} "
                    f"({len(menu_day.snacks)} planned)"
                )
            return menu_day.snacks.pop(index)

        if meal not in MEAL_SLOTS:
            raise MenuError(f"Unknown meal '{meal}'")
        slot = getattr(menu_day, meal)
        if slot is None:
            raise MenuError(f"No {meal} planned on {on.isoformat()}")
        setattr(menu_day, meal, None)
        return slot

    def shopping_requests(self, recipes_by_id: dict[str, Recipe]) -> list[ShoppingRequest]:
        """
        Turn the menu into shopping requests, in day and meal order.

        Raises:
            MenuError: If a slot refers to a recipe that isn't available
        """
        requests = []
        for menu_day in sorted(self.days, key=lambda d: d.date):
            for slot in menu_day.slots():
                recipe = recipes_by_id.get(slot.recipe_id)
                if recipe is None:
                    raise MenuError(
                        f"Menu for {menu_day.date.isoformat()} uses unknown recipe "
                        f"'{slot.recipe_id}'"
                    )
                requests.append(ShoppingRequest(recipe=recipe, target_servings=slot.servings))
        return requests

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "week_start": self.week_start.isoformat(),
            "days": [d.to_dict() for d in self.days],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WeeklyMenu":
        try:
            start = date.fromisoformat(data["week_start"])
        except (KeyError, TypeError, ValueError) as e:
            raise MenuError("Menu is missing a valid week_start") from e

        return cls(
            id=data.get("id") or generate_id(),
            week_start=start,
            days=[MenuDay.from_dict(d) for d in data.get("days", [])],
        )


def week_start(on: date | None = None) -> date:
    """The Sunday starting the week that contains `on` (default: today)."""
    on = on or date.today()
    # date.weekday(): Monday=0 ... Sunday=6
    return on - timedelta(days=(on.weekday() + 1) % 7)


def week_days(start: date) -> list[date]:
    """The seven consecutive dates beginning at `start`."""
    return [start + timedelta(days=i) for i in range(7)]


def load_menu_file(path: str | Path) -> WeeklyMenu:
    """
    Load a weekly menu from a JSON file.

    Raises:
        MenuError: If the file can't be read or isn't a valid menu
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise MenuError(f"Failed to read menu file {path}: {e}") from e

    menu = WeeklyMenu.from_dict(data)
    logger.debug(f"Loaded menu for week of {menu.week_start.isoformat()} from {path}")
    return menu


def save_menu_file(menu: WeeklyMenu, path: str | Path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(menu.to_dict(), f, indent=2)
