"""Tests for runtime settings loading."""

import pytest
import yaml

from graph_user_store.config import (
    Neo4jSettingsModel,
    RuntimeSettings,
    load_runtime_settings,
    validate_config_schema,
)

NEO4J_ENV = ["NEO4J_URI", "NEO4J_USER", "NEO4J_PASSWORD", "NEO4J_DATABASE"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in NEO4J_ENV:
        monkeypatch.delenv(key, raising=False)
    # Keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)


def write_yaml(path, data):
    path.write_text(yaml.safe_dump(data))
    return path


class TestNeo4jSettingsModel:
    def test_defaults(self):
        settings = Neo4jSettingsModel()
        assert settings.uri == "neo4j://localhost:7687"
        assert settings.user == "neo4j"
        assert settings.database == "neo4j"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("NEO4J_URI", "bolt://db:7687")
        monkeypatch.setenv("NEO4J_PASSWORD", "s3cret")

        settings = Neo4jSettingsModel()

        assert settings.uri == "bolt://db:7687"
        assert settings.password == "s3cret"


class TestValidateConfigSchema:
    def test_accepts_minimal_document(self):
        assert validate_config_schema({"app": {"log_level": "DEBUG"}}) is True

    def test_rejects_unknown_sections(self):
        with pytest.raises(ValueError):
            validate_config_schema({"app": {}, "cache": {"size": 10}})

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValueError, match="Logging level"):
            validate_config_schema({"app": {"log_level": "LOUD"}})


class TestLoadRuntimeSettings:
    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_runtime_settings(tmp_path / "absent.yaml")

        assert isinstance(settings, RuntimeSettings)
        assert settings.app.log_level == "INFO"
        assert settings.neo4j.uri == "neo4j://localhost:7687"

    def test_yaml_values_are_applied(self, tmp_path):
        path = write_yaml(
            tmp_path / "settings.yaml",
            {
                "app": {"name": "Users", "log_level": "DEBUG"},
                "neo4j": {"uri": "bolt://yaml:7687", "database": "people"},
            },
        )

        settings = load_runtime_settings(path)

        assert settings.app.name == "Users"
        assert settings.app.log_level == "DEBUG"
        assert settings.neo4j.uri == "bolt://yaml:7687"
        assert settings.neo4j.database == "people"

    def test_environment_wins_over_yaml(self, tmp_path, monkeypatch):
        monkeypatch.setenv("NEO4J_URI", "bolt://env:7687")
        path = write_yaml(
            tmp_path / "settings.yaml", {"neo4j": {"uri": "bolt://yaml:7687"}}
        )

        settings = load_runtime_settings(path)

        assert settings.neo4j.uri == "bolt://env:7687"

    def test_invalid_yaml_schema_raises(self, tmp_path):
        path = write_yaml(tmp_path / "settings.yaml", {"neo4j": {"port": 7687}})

        with pytest.raises(ValueError):
            load_runtime_settings(path)
