"""Pantry inventory: what's already at home, and how much of it."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Literal

from .categories import normalize_name
from .logging_config import get_logger
from .units import normalize_unit

logger = get_logger(__name__)

TrackingType = Literal["simple", "precise"]
SimpleStatus = Literal["none", "low", "medium", "plenty"]

SIMPLE_STATUSES: tuple[str, ...] = ("none", "low", "medium", "plenty")
LOW_STATUSES = {"none", "low"}


class PantryError(Exception):
    """Exception raised for pantry-related errors."""

    pass


@dataclass
class PantryEntry:
    """One tracked pantry ingredient.

    Simple entries only record a coarse status, which can't be turned into a
    quantity. Precise entries record an amount in a specific unit.
    """

    name: str
    tracking_type: TrackingType = "simple"
    simple_status: SimpleStatus | None = None
    precise_quantity: float | None = None
    precise_unit: str | None = None
    updated_at: datetime | None = None

    @property
    def key(self) -> str:
        return normalize_name(self.name)

    @property
    def is_running_low(self) -> bool:
        return self.tracking_type == "simple" and self.simple_status in LOW_STATUSES

    def quantity_in(self, unit: str | None) -> float:
        """On-hand quantity expressed in `unit`, or 0 if it can't be."""
        if self.tracking_type != "precise" or self.precise_quantity is None:
            return 0.0
        if normalize_unit(self.precise_unit) != normalize_unit(unit):
            return 0.0
        return max(0.0, self.precise_quantity)

    def describe(self) -> str:
        if self.tracking_type == "precise":
            qty = self.precise_quantity or 0
            qty_str = str(int(qty)) if qty == int(qty) else f"{qty:.2f}".rstrip("0").rstrip(".")
            return f"{qty_str} {self.precise_unit or ''}".strip()
        return self.simple_status or "unknown"

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "tracking_type": self.tracking_type,
            "simple_status": self.simple_status,
            "precise_quantity": self.precise_quantity,
            "precise_unit": self.precise_unit,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> PantryEntry:
        updated_at = None
        if data.get("updated_at"):
            updated_at = datetime.fromisoformat(data["updated_at"])

        tracking_type = data.get("tracking_type", "simple")
        if tracking_type not in ("simple", "precise"):
            raise PantryError(f"Unknown tracking type '{tracking_type}' for {data.get('name')}")

        return cls(
            name=data["name"],
            tracking_type=tracking_type,
            simple_status=data.get("simple_status"),
            precise_quantity=data.get("precise_quantity"),
            precise_unit=data.get("precise_unit"),
            updated_at=updated_at,
        )


class Pantry:
    """The set of pantry entries, keyed by normalized ingredient name."""

    def __init__(self, entries: list[PantryEntry] | None = None):
        self._entries: dict[str, PantryEntry] = {}
        for entry in entries or []:
            self._entries[entry.key] = entry

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._entries

    def __iter__(self):
        return iter(sorted(self._entries.values(), key=lambda e: e.key))

    def get(self, name: str) -> PantryEntry | None:
        return self._entries.get(normalize_name(name))

    def on_hand(self, name: str, unit: str | None) -> float:
        """
        Get the on-hand quantity of an ingredient in the given unit.

        Returns 0 when the ingredient isn't tracked, is tracked by status only,
        or is recorded in a different unit. Units are never converted.
        """
        entry = self.get(name)
        if entry is None:
            return 0.0
        return entry.quantity_in(unit)

    def set_quantity(self, name: str, quantity: float, unit: str) -> PantryEntry:
        if quantity < 0:
            raise PantryError(f"Pantry quantity can't be negative: {quantity}")
        entry = PantryEntry(
            name=name.strip(),
            tracking_type="precise",
            precise_quantity=quantity,
            precise_unit=normalize_unit(unit),
            updated_at=datetime.now(),
        )
        self._entries[entry.key] = entry
        return entry

    def set_status(self, name: str, status: str) -> PantryEntry:
        if status not in SIMPLE_STATUSES:
            raise PantryError(
                f"Unknown pantry status '{status}' (expected one of {', '.join(SIMPLE_STATUSES)})"
            )
        entry = PantryEntry(
            name=name.strip(),
            tracking_type="simple",
            simple_status=status,  # type: ignore[arg-type]
            updated_at=datetime.now(),
        )
        self._entries[entry.key] = entry
        return entry

    def remove(self, name: str) -> bool:
        """Remove an entry. Returns False if it wasn't tracked."""
        return self._entries.pop(normalize_name(name), None) is not None

    def running_low(self) -> list[PantryEntry]:
        """Status-tracked entries that are low or out."""
        return [entry for entry in self if entry.is_running_low]

    def to_dict(self) -> dict:
        return {
            "version": 1,
            "entries": [entry.to_dict() for entry in self],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Pantry:
        try:
            return cls([PantryEntry.from_dict(item) for item in data.get("entries", [])])
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise PantryError(f"Invalid pantry data: {e}") from e


def load_pantry(pantry_file: Path) -> Pantry:
    """
    Load the pantry from disk. A missing file is an empty pantry.

    Raises:
        PantryError: If the file exists but can't be read or parsed
    """
    if not pantry_file.exists():
        return Pantry()

    try:
        with open(pantry_file, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise PantryError(f"Failed to load pantry from {pantry_file}: {e}") from e

    pantry = Pantry.from_dict(data)
    logger.debug(f"Loaded {len(pantry)} pantry entries from {pantry_file}")
    return pantry


def save_pantry(pantry: Pantry, pantry_file: Path) -> None:
    """Save the pantry to disk."""
    pantry_file.parent.mkdir(parents=True, exist_ok=True)
    with open(pantry_file, "w", encoding="utf-8") as f:
        json.dump(pantry.to_dict(), f, indent=2, ensure_ascii=False)
    logger.info(f"Saved {len(pantry)} pantry entries to {pantry_file}")


def clear_pantry(pantry_file: Path) -> None:
    """Remove every pantry entry."""
    save_pantry(Pantry(), pantry_file)
