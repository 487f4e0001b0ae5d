"""Persisted user preferences."""

import json
from dataclasses import asdict, dataclass, fields
from typing import Any

from .config import PREFERENCES_FILE
from .logging_config import get_logger

logger = get_logger(__name__)

TIMER_SOUNDS: tuple[str, ...] = ("bell", "chime", "ding", "alarm", "gentle")


class PreferencesError(Exception):
    """Exception raised for preferences-related errors."""

    pass


@dataclass
class UserPreferences:
    """Settings that survive between sessions."""

    timer_sound: str = "bell"
    dark_mode: bool = False
    default_servings: int = 4

    def validate(self) -> None:
        if self.timer_sound not in TIMER_SOUNDS:
            raise PreferencesError(
                f"Unknown timer sound '{self.timer_sound}' "
                f"(expected one of {', '.join(TIMER_SOUNDS)})"
            )
        if not isinstance(self.dark_mode, bool):
            raise PreferencesError(f"Dark mode must be true or false, got {self.dark_mode!r}")
        if isinstance(self.default_servings, bool) or not isinstance(self.default_servings, int):
            raise PreferencesError(
                f"Default servings must be a whole number, got {self.default_servings!r}"
            )
        if self.default_servings < 1:
            raise PreferencesError(
                f"Default servings must be at least 1, got {self.default_servings}"
            )


def _load_preferences() -> dict[str, Any]:
    """Load preferences from disk."""
    if not PREFERENCES_FILE.exists():
        return {}

    try:
        with open(PREFERENCES_FILE, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise PreferencesError(f"Failed to load preferences: {e}") from e


def _save_preferences(preferences: dict[str, Any]) -> None:
    """Save preferences to disk."""
    try:
        PREFERENCES_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(PREFERENCES_FILE, "w", encoding="utf-8") as f:
            json.dump(preferences, f, indent=2)
    except OSError as e:
        raise PreferencesError(f"Failed to save preferences: {e}") from e


def get_preferences() -> UserPreferences:
    """
    Get the saved preferences, with defaults for anything unset.

    Raises:
        PreferencesError: If the stored file is unreadable or holds invalid values
    """
    stored = _load_preferences()
    if not isinstance(stored, dict):
        raise PreferencesError(
            f"Preferences file {PREFERENCES_FILE} must hold a JSON object, "
            f"got {type(stored).__name__}"
        )

    known = {f.name for f in fields(UserPreferences)}
    preferences = UserPreferences(**{k: v for k, v in stored.items() if k in known})
    preferences.validate()
    return preferences


def update_preferences(**changes: Any) -> UserPreferences:
    """
    Update and save preferences.

    Raises:
        PreferencesError: For unknown settings or invalid values
    """
    known = {f.name for f in fields(UserPreferences)}
    unknown = set(changes) - known
    if unknown:
        raise PreferencesError(f"Unknown preference(s): {', '.join(sorted(unknown))}")

    preferences = get_preferences()
    for key, value in changes.items():
        setattr(preferences, key, value)
    preferences.validate()

    _save_preferences(asdict(preferences))
    logger.info(f"Updated preferences: {', '.join(sorted(changes))}")
    return preferences


def reset_preferences() -> UserPreferences:
    """Restore the default preferences."""
    preferences = UserPreferences()
    _save_preferences(asdict(preferences))
    return preferences
