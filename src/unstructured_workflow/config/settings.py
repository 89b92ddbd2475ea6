"""Settings and configuration management."""

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import ClassVar

from pydantic import Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://platform.unstructuredapp.io/api/v1"

# Regex for ${ENV_VAR} placeholders in YAML values
_ENV_VAR_PLACEHOLDER_RE = re.compile(r"^\$\{[A-Z_][A-Z0-9_]*\}$")

# YAML config search paths (checked in order, first found wins)
_YAML_SEARCH_PATHS = [
    Path("unstructured.yaml"),
    Path("config/unstructured.yaml"),
    Path.home() / ".config" / "unstructured" / "unstructured.yaml",
]


def _find_yaml_config() -> Path | None:
    """Find the first unstructured.yaml in search paths."""
    for path in _YAML_SEARCH_PATHS:
        if path.is_file():
            return path
    return None


class Settings(BaseSettings):
    """Client settings.

    Environment variables use the ``UNSTRUCTURED_`` prefix, so the API key is
    read from ``UNSTRUCTURED_API_KEY`` and the endpoint from
    ``UNSTRUCTURED_API_URL``.

    Priority chain: init kwargs > env vars > .env file > unstructured.yaml > defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="UNSTRUCTURED_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Class-level cache for the resolved YAML path (not a pydantic field)
    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
        ]

        yaml_path = _find_yaml_config()
        cls._yaml_path = yaml_path
        if yaml_path:
            sources.append(
                YamlConfigSettingsSource(
                    settings_cls,
                    yaml_file=yaml_path,
                    yaml_file_encoding="utf-8",
                )
            )

        sources.append(file_secret_settings)
        return tuple(sources)

    @model_validator(mode="before")
    @classmethod
    def _resolve_env_var_placeholders(cls, data: dict) -> dict:
        """Strip unresolved ${VAR} placeholders so they become None.

        YAML files may reference secrets as ${ENV_VAR}. When the variable is
        not set the placeholder is dropped and the field default applies.
        """
        if not isinstance(data, dict):
            return data
        return {
            key: value
            for key, value in data.items()
            if not (isinstance(value, str) and _ENV_VAR_PLACEHOLDER_RE.match(value))
        }

    api_key: str | None = Field(None, description="Unstructured platform API key")
    api_url: str = Field(DEFAULT_API_URL, description="Base URL of the workflow endpoint")
    timeout: float = Field(60.0, description="Per-request timeout in seconds")

    log_level: str = Field("WARNING", description="Logging level")
    log_format: str = Field("text", description="Log format: 'text' or 'json'")
    sanitize_logs: bool = Field(True, description="Sanitize sensitive data from logs")

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value

    @property
    def yaml_path(self) -> Path | None:
        return self._yaml_path


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
