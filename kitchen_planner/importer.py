"""Client for the recipe parsing service.

The service takes a recipe page URL and returns a structured recipe as JSON.
This module only consumes it.
"""

from typing import Any

import httpx

from .config import PARSE_ENDPOINT, PARSE_TIMEOUT
from .logging_config import get_logger
from .recipes import Recipe, RecipeFormatError

logger = get_logger(__name__)


class RecipeImportError(Exception):
    """Exception raised when a recipe can't be imported."""

    pass


class RecipeImporter:
    """Fetches parsed recipes from the parsing endpoint."""

    def __init__(self, endpoint: str | None = None, timeout: float | None = None):
        self.endpoint = endpoint or PARSE_ENDPOINT
        self.client = httpx.Client(
            timeout=timeout if timeout is not None else PARSE_TIMEOUT,
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "RecipeImporter":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def fetch(self, url: str) -> dict[str, Any]:
        """
        Ask the parsing service for the raw recipe payload of a URL.

        Raises:
            RecipeImportError: On an empty URL, HTTP failure or non-JSON reply
        """
        url = (url or "").strip()
        if not url:
            raise RecipeImportError("URL is required")

        logger.info(f"Importing recipe from {url} via {self.endpoint}")

        try:
            response = self.client.post(self.endpoint, json={"url": url})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response) or str(e)
            raise RecipeImportError(
                f"Parsing service returned {e.response.status_code}: {message}"
            ) from e
        except httpx.HTTPError as e:
            raise RecipeImportError(f"Could not reach parsing service: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise RecipeImportError("Parsing service returned invalid JSON") from e

        if not isinstance(data, dict):
            raise RecipeImportError("Parsing service returned an unexpected payload")

        return data

    def import_recipe(self, url: str) -> Recipe:
        """
        Import a recipe from a URL.

        The source URL is recorded on the recipe when the service omits it.

        Raises:
            RecipeImportError: If fetching fails or the payload isn't a recipe
        """
        data = self.fetch(url)
        data.setdefault("source_url", url.strip())

        try:
            recipe = Recipe.from_dict(data)
        except RecipeFormatError as e:
            raise RecipeImportError(f"Parsing service returned a malformed recipe: {e}") from e

        logger.info(
            f"Imported '{recipe.title}' with {len(recipe.ingredients)} ingredient(s)"
        )
        return recipe


def _error_message(response: httpx.Response) -> str | None:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        return data.get("error")
    return None
