from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parents[2] / "config" / "settings.yaml"

LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class Neo4jSettingsModel(BaseSettings):
    """Connection details for Neo4j database."""

    uri: str = "neo4j://localhost:7687"
    user: str = "neo4j"
    password: str = "password"
    database: str = "neo4j"

    model_config = SettingsConfigDict(env_prefix="NEO4J_", env_file=".env")


class AppSettingsModel(BaseModel):
    """Application runtime settings loaded from YAML and env vars."""

    name: str = "Graph User Store"
    version: str = "0.1.0"
    log_level: str = "INFO"


class Neo4jFileSettingsModel(BaseModel):
    uri: str | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None

    model_config = SettingsConfigDict(extra="forbid")


class SettingsFileModel(BaseModel):
    """Schema for validating `settings.yaml`."""

    app: AppSettingsModel = Field(default_factory=AppSettingsModel)
    neo4j: Neo4jFileSettingsModel | None = None

    model_config = SettingsConfigDict(extra="forbid")


def validate_config_schema(_config_data: dict) -> bool:
    """Validate settings data against the Pydantic schema."""

    try:
        model = SettingsFileModel.model_validate(_config_data)
    except ValidationError as exc:
        raise ValueError(str(exc)) from exc
    if model.app.log_level.upper() not in LOG_LEVELS:
        raise ValueError(
            f"Logging level must be one of {', '.join(sorted(LOG_LEVELS))}, "
            f"got {model.app.log_level}"
        )
    return True


class RuntimeSettings(BaseSettings):
    """Central runtime settings loaded from YAML and environment."""

    app: AppSettingsModel = Field(
        default_factory=AppSettingsModel,
        description="Application configuration",
    )
    neo4j: Neo4jSettingsModel = Field(
        default_factory=Neo4jSettingsModel,
        description="Neo4j connection options",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_nested_delimiter="__", extra="ignore"
    )


def load_runtime_settings(
    file_path: Optional[Union[str, Path]] = None,
) -> RuntimeSettings:
    """
    Load runtime settings from a YAML file and environment variables.

    If the YAML file exists, its contents are validated and used as defaults for
    the application section. Neo4j connection values from the file are applied
    only where the corresponding ``NEO4J_*`` environment variable is not set, so
    the environment always takes precedence.

    Args:
        file_path: Optional path to a YAML settings file. Defaults to
            ``config/settings.yaml`` at the project root.

    Returns:
        RuntimeSettings: The combined runtime settings.
    """

    yaml_path = Path(file_path) if file_path else DEFAULT_SETTINGS_PATH
    data: dict[str, Any] = {}
    if yaml_path.exists():
        with open(yaml_path) as fh:
            data = yaml.safe_load(fh) or {}
        validate_config_schema(data)

    neo4j = Neo4jSettingsModel()
    file_neo4j = data.get("neo4j") or {}
    overrides = {
        key: value
        for key, value in file_neo4j.items()
        if value is not None and key not in neo4j.model_fields_set
    }
    if overrides:
        neo4j = neo4j.model_copy(update=overrides)

    return RuntimeSettings(
        app=AppSettingsModel(**(data.get("app") or {})),
        neo4j=neo4j,
    )


runtime_settings = load_runtime_settings()

# Re-export runtime settings for application modules
settings = runtime_settings
