"""Tests for the config module."""

import importlib

import pytest

from kitchen_planner import config


@pytest.fixture
def reload_config(monkeypatch):
    """Reload config after changing the environment, restoring it afterwards."""
    yield lambda: importlib.reload(config)
    monkeypatch.undo()
    importlib.reload(config)


class TestConfig:
    def test_data_dir_override(self, tmp_path, monkeypatch, reload_config):
        monkeypatch.setenv("KITCHEN_PLANNER_HOME", str(tmp_path))

        reload_config()

        assert config.DATA_DIR == tmp_path
        assert config.RECIPES_FILE == tmp_path / "recipes.json"
        assert config.PANTRY_FILE == tmp_path / "pantry.json"

    def test_parse_endpoint_override(self, monkeypatch, reload_config):
        monkeypatch.setenv("KITCHEN_PARSE_ENDPOINT", "http://parser.test/parse")
        monkeypatch.setenv("KITCHEN_PARSE_TIMEOUT", "5")

        reload_config()

        assert config.PARSE_ENDPOINT == "http://parser.test/parse"
        assert config.PARSE_TIMEOUT == 5.0

    def test_defaults(self, monkeypatch, reload_config):
        monkeypatch.delenv("KITCHEN_PARSE_ENDPOINT", raising=False)
        monkeypatch.delenv("KITCHEN_PARSE_TIMEOUT", raising=False)

        reload_config()

        assert config.PARSE_ENDPOINT == config.DEFAULT_PARSE_ENDPOINT
        assert config.PARSE_TIMEOUT == 30.0
