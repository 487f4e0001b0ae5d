"""Configuration and data file locations for Kitchen Planner."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# App directories
APP_NAME = "kitchen-planner"
DATA_DIR = Path(os.getenv("KITCHEN_PLANNER_HOME", Path.home() / f".{APP_NAME}"))
RECIPES_FILE = DATA_DIR / "recipes.json"
PANTRY_FILE = DATA_DIR / "pantry.json"
PREFERENCES_FILE = DATA_DIR / "preferences.json"
MENU_FILE = DATA_DIR / "menu.json"

# Recipe parsing service (returns a structured recipe for a URL)
DEFAULT_PARSE_ENDPOINT = "http://localhost:3000/api/parse-recipe"
PARSE_ENDPOINT = os.getenv("KITCHEN_PARSE_ENDPOINT", DEFAULT_PARSE_ENDPOINT)
PARSE_TIMEOUT = float(os.getenv("KITCHEN_PARSE_TIMEOUT", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
