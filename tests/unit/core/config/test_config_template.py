"""Unit tests for config_template module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.advocates.runtime.config.config_data import ConfigData
from src.advocates.runtime.config.config_template import (
    load_config,
    load_templated_yaml,
    substitute_env_vars,
)


class TestSubstituteEnvVars:
    def test_substitute_env_var_in_text(self):
        with patch.dict(os.environ, {"HOST": "localhost", "PORT": "8080"}):
            text = "Server running at http://${HOST}:${PORT}/api"
            assert substitute_env_vars(text) == "Server running at http://localhost:8080/api"

    def test_substitute_env_var_with_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-default_value}") == "default_value"

    def test_default_is_ignored_when_set(self):
        with patch.dict(os.environ, {"PRESENT_VAR": "actual_value"}):
            assert substitute_env_vars("${PRESENT_VAR:-default_value}") == "actual_value"

    def test_required_env_var_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError, match="Required environment variable MISSING_VAR not set"
            ):
                substitute_env_vars("${MISSING_VAR}")

    def test_required_env_var_with_message(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="DB_URL: set the database URL"):
                substitute_env_vars("${DB_URL:?set the database URL}")


class TestLoadConfig:
    def test_missing_file_falls_back_to_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "nope.yaml")

        assert config == ConfigData()
        assert config.api.default_page_size == 10
        assert config.api.max_page_size == 100

    def test_loads_config_section_with_substitution(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "config:\n"
            "  database:\n"
            "    url: \"${TEST_DATABASE_URL:-sqlite:///./fallback.db}\"\n"
            "  api:\n"
            "    max_page_size: 50\n"
            "  client:\n"
            "    debounce_ms: 250\n"
        )

        with patch.dict(os.environ, {"TEST_DATABASE_URL": "sqlite:///./from-env.db"}):
            config = load_templated_yaml(path)

        assert config.database.url == "sqlite:///./from-env.db"
        assert config.api.max_page_size == 50
        assert config.client.debounce_ms == 250
        assert config.client.stale_time_seconds == 60

    def test_environment_prefixed_variables_win(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text('config:\n  app:\n    host: "${APP_HOST:-localhost}"\n')

        env = {"APP_ENVIRONMENT": "production", "PRODUCTION_APP_HOST": "api.example.org"}
        with patch.dict(os.environ, env, clear=True):
            config = load_templated_yaml(path)

        assert config.app.host == "api.example.org"

    def test_invalid_values_are_reported(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("config:\n  api:\n    max_page_size: lots\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(path)

    def test_empty_file_is_rejected(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        with pytest.raises(ValueError, match="Error parsing YAML|Failed to parse YAML"):
            load_templated_yaml(path)
