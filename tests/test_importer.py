"""Tests for the recipe import client."""

import json

import httpx
import pytest

from kitchen_planner.importer import RecipeImporter, RecipeImportError

PARSE_URL = "http://parser.test/api/parse-recipe"
RECIPE_PAGE = "https://cooking.example.com/garlic-bread"


@pytest.fixture
def importer():
    with RecipeImporter(PARSE_URL, timeout=5) as client:
        yield client


class TestFetch:
    """Tests for RecipeImporter.fetch."""

    def test_posts_url(self, mock_httpx, importer, parsed_recipe_payload):
        route = mock_httpx.post(PARSE_URL).respond(json=parsed_recipe_payload)

        data = importer.fetch(RECIPE_PAGE)

        assert data["title"] == "Garlic Bread"
        assert route.called
        assert json.loads(route.calls.last.request.content) == {"url": RECIPE_PAGE}

    def test_blank_url_raises(self, mock_httpx, importer):
        route = mock_httpx.post(PARSE_URL)
        with pytest.raises(RecipeImportError, match="URL is required"):
            importer.fetch("   ")
        assert not route.called

    def test_http_error_uses_service_message(self, mock_httpx, importer):
        mock_httpx.post(PARSE_URL).respond(422, json={"error": "No recipe found on page"})

        with pytest.raises(RecipeImportError, match="422: No recipe found on page"):
            importer.fetch(RECIPE_PAGE)

    def test_http_error_without_body(self, mock_httpx, importer):
        mock_httpx.post(PARSE_URL).respond(500, text="boom")

        with pytest.raises(RecipeImportError, match="500"):
            importer.fetch(RECIPE_PAGE)

    def test_connection_error(self, mock_httpx, importer):
        mock_httpx.post(PARSE_URL).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(RecipeImportError, match="Could not reach"):
            importer.fetch(RECIPE_PAGE)

    def test_invalid_json(self, mock_httpx, importer):
        mock_httpx.post(PARSE_URL).respond(200, text="<html>")

        with pytest.raises(RecipeImportError, match="invalid JSON"):
            importer.fetch(RECIPE_PAGE)

    def test_non_object_payload(self, mock_httpx, importer):
        mock_httpx.post(PARSE_URL).respond(json=["not", "a", "recipe"])

        with pytest.raises(RecipeImportError, match="unexpected payload"):
            importer.fetch(RECIPE_PAGE)


class TestImportRecipe:
    """Tests for RecipeImporter.import_recipe."""

    def test_builds_recipe(self, mock_httpx, importer, parsed_recipe_payload):
        mock_httpx.post(PARSE_URL).respond(json=parsed_recipe_payload)

        recipe = importer.import_recipe(RECIPE_PAGE)

        assert recipe.title == "Garlic Bread"
        assert recipe.servings == 6
        assert recipe.source_url == RECIPE_PAGE
        assert len(recipe.ingredients) == 3

    def test_keeps_service_source_url(self, mock_httpx, importer, parsed_recipe_payload):
        parsed_recipe_payload["source_url"] = "https://canonical.example.com/bread"
        mock_httpx.post(PARSE_URL).respond(json=parsed_recipe_payload)

        recipe = importer.import_recipe(RECIPE_PAGE)

        assert recipe.source_url == "https://canonical.example.com/bread"

    def test_malformed_recipe(self, mock_httpx, importer):
        mock_httpx.post(PARSE_URL).respond(json={"servings": 4})

        with pytest.raises(RecipeImportError, match="malformed recipe"):
            importer.import_recipe(RECIPE_PAGE)

    @pytest.mark.parametrize(
        "payload",
        [
            {"title": "X", "ingredient_sections": ["eggs"]},
            {"title": "X", "ingredient_sections": [{"ingredients": ["2 eggs"]}]},
            {"title": "X", "steps": ["Boil."]},
            {"title": "X", "equipment": [None]},
            {"title": "X", "tags": None},
        ],
    )
    def test_malformed_nested_data(self, mock_httpx, importer, payload):
        mock_httpx.post(PARSE_URL).respond(json=payload)

        with pytest.raises(RecipeImportError, match="malformed recipe"):
            importer.import_recipe(RECIPE_PAGE)


def test_default_endpoint_from_config():
    from kitchen_planner.config import PARSE_ENDPOINT

    with RecipeImporter() as client:
        assert client.endpoint == PARSE_ENDPOINT
