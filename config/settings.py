"""Settings management utilities for PromptSpace configuration.

Updates:
  v0.2.1 - 2026-10-16 - Read .env values through python-dotenv without mutating os.environ.
  v0.2.0 - 2026-10-12 - Add HTTP data source, retry and search tuning settings.
  v0.1.0 - 2026-10-05 - Introduce PromptSpaceSettings with JSON and environment sources.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal, cast

from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

_DOTENV_FALLBACK_PATH = ".env"

DEFAULT_DATA_SOURCE = "files"
DEFAULT_API_BASE_URL = "http://localhost:3000"
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0
DEFAULT_HTTP_MAX_ATTEMPTS = 3
DEFAULT_SEARCH_DEBOUNCE_MS = 300

_ENV_ALIASES: dict[str, list[str]] = {
    "data_source": ["DATA_SOURCE", "data_source"],
    "data_path": ["DATA_PATH", "CATALOG_PATH", "data_path"],
    "api_base_url": ["API_BASE_URL", "API_URL", "api_base_url"],
    "http_timeout_seconds": ["HTTP_TIMEOUT_SECONDS", "http_timeout_seconds"],
    "http_max_attempts": ["HTTP_MAX_ATTEMPTS", "http_max_attempts"],
    "search_debounce_ms": ["SEARCH_DEBOUNCE_MS", "search_debounce_ms"],
    "search_include_content": ["SEARCH_INCLUDE_CONTENT", "search_include_content"],
}


def _read_dotenv_values() -> dict[str, str]:
    """Load ``.env`` entries into a mapping without mutating ``os.environ``."""
    env_file_override = os.getenv("PROMPTSPACE_ENV_FILE")
    if env_file_override is not None:
        candidate = env_file_override.strip()
        if not candidate:
            return {}
        path = Path(candidate).expanduser()
    else:
        path = Path(_DOTENV_FALLBACK_PATH).expanduser()
    if not path.is_file():
        return {}
    raw_values = dotenv_values(str(path))
    return {str(key): str(value) for key, value in raw_values.items() if value is not None}


class SettingsError(Exception):
    """Raised when PromptSpace configuration cannot be loaded or validated."""


class PromptSpaceSettings(BaseSettings):
    """Application configuration sourced from environment variables or JSON files."""

    data_source: Literal["files", "http"] = Field(
        default=DEFAULT_DATA_SOURCE,
        description="Where the catalogue is read from: local JSON files or the HTTP API.",
    )
    data_path: Path | None = Field(
        default=None,
        description="Directory holding categories.json; empty uses the bundled catalogue.",
    )
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="Base URL of the catalogue API used when data_source is 'http'.",
    )
    http_timeout_seconds: float = Field(
        default=DEFAULT_HTTP_TIMEOUT_SECONDS,
        description="Per-request timeout for catalogue API calls.",
    )
    http_max_attempts: int = Field(
        default=DEFAULT_HTTP_MAX_ATTEMPTS,
        description="Attempts per catalogue API call, including the first.",
    )
    search_debounce_ms: int = Field(
        default=DEFAULT_SEARCH_DEBOUNCE_MS,
        description="Delay between the last keystroke and the dispatched search.",
    )
    search_include_content: bool = Field(
        default=False,
        description="Also match full descriptions and template text in file-backed search.",
    )

    model_config = cast(
        "SettingsConfigDict",
        {
            "env_prefix": "PROMPTSPACE_",
            "case_sensitive": False,
            "populate_by_name": True,
            "env": _ENV_ALIASES,
        },
    )

    @field_validator("data_source", mode="before")
    def _normalise_data_source(cls, value: object) -> str:
        if value in (None, ""):
            return DEFAULT_DATA_SOURCE
        text = str(value).strip().lower()
        if text in {"file", "files", "local", "builtin"}:
            return "files"
        if text in {"http", "https", "api"}:
            return "http"
        raise ValueError("data_source must be set to 'files' or 'http'")

    @field_validator("data_path", mode="before")
    def _normalise_data_path(cls, value: Any) -> Path | None:
        """Coerce optional catalogue directory into a resolved Path."""
        if value in (None, ""):
            return None
        path = Path(str(value)).expanduser()
        return path.resolve()

    @field_validator("api_base_url", mode="before")
    def _normalise_api_base_url(cls, value: object) -> str:
        if value is None:
            return DEFAULT_API_BASE_URL
        text = str(value).strip().rstrip("/")
        if not text:
            return DEFAULT_API_BASE_URL
        if not text.startswith(("http://", "https://")):
            raise ValueError("api_base_url must start with http:// or https://")
        return text

    @field_validator("http_timeout_seconds")
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("http_timeout_seconds must be greater than zero")
        return value

    @field_validator("http_max_attempts")
    def _validate_attempts(cls, value: int) -> int:
        if value < 1:
            raise ValueError("http_max_attempts must be at least 1")
        return value

    @field_validator("search_debounce_ms")
    def _validate_debounce(cls, value: int) -> int:
        if value < 0:
            raise ValueError("search_debounce_ms must not be negative")
        return value

    @property
    def search_debounce_seconds(self) -> float:
        """Return the search debounce delay in seconds."""
        return self.search_debounce_ms / 1000.0

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        """Define configuration source precedence.

        Order (highest → lowest):
            1. Explicit keyword arguments (e.g. load_settings(data_source="http")).
            2. JSON configuration file.
            3. Environment variables / aliases, then ``.env`` entries.
            4. File secrets.
        """

        def env_with_aliases(_: BaseSettings | None = None) -> dict[str, Any]:
            data: dict[str, Any] = {}
            config_dict = cast("dict[str, Any]", cls.model_config)
            prefix = str(config_dict.get("env_prefix", ""))
            dotenv_entries = _read_dotenv_values()

            def _lookup(candidate: str) -> str | None:
                value = os.getenv(candidate)
                if value is None:
                    value = dotenv_entries.get(candidate)
                if value is None:
                    return None
                stripped_value = str(value).strip()
                return stripped_value or None

            for field, keys in _ENV_ALIASES.items():
                for key in keys:
                    value = _lookup(f"{prefix}{key}") or _lookup(f"{prefix}{key.upper()}")
                    if value is not None:
                        data[field] = value
                        break
            return data

        return (
            init_settings,
            cls._json_config_settings_source(settings_cls),
            cast("PydanticBaseSettingsSource", env_with_aliases),
            file_secret_settings,
        )

    @classmethod
    def _json_config_settings_source(
        cls,
        _: type[BaseSettings],
    ) -> PydanticBaseSettingsSource:
        """Return settings extracted from an optional JSON config file."""

        def _loader(_: BaseSettings | None = None) -> dict[str, Any]:
            explicit_path = os.getenv("PROMPTSPACE_CONFIG_JSON")
            candidates: list[Path] = []
            if explicit_path:
                candidates.append(Path(explicit_path).expanduser())
            candidates.append(Path("config") / "config.json")

            for index, path in enumerate(candidates):
                if not path.exists():
                    if explicit_path and index == 0:
                        raise SettingsError(f"Configuration file not found: {path}")
                    continue
                try:
                    raw_contents = path.read_text(encoding="utf-8")
                except OSError as exc:  # pragma: no cover - filesystem failure is env-specific
                    raise SettingsError(f"Unable to read configuration file: {path}") from exc
                try:
                    data = json.loads(raw_contents)
                except json.JSONDecodeError as exc:
                    raise SettingsError(f"Invalid JSON in configuration file: {path}") from exc
                if not isinstance(data, dict):
                    raise SettingsError(f"Configuration file {path} must contain a JSON object")
                mapping_data = cast("Mapping[object, Any]", data)
                data_dict = {str(key): value for key, value in mapping_data.items()}
                mapped = {key: data_dict[key] for key in _ENV_ALIASES if key in data_dict}
                unknown = sorted(set(data_dict) - set(mapped))
                if unknown:
                    logger.warning(
                        "Ignoring unknown key(s) %s in configuration file %s",
                        ", ".join(unknown),
                        path,
                    )
                return mapped
            return {}

        return cast("PydanticBaseSettingsSource", _loader)


def load_settings(**overrides: Any) -> PromptSpaceSettings:
    """Return validated settings, raising SettingsError on failure."""
    try:
        return PromptSpaceSettings(**overrides)
    except SettingsError:
        raise
    except ValidationError as exc:
        raise SettingsError(f"Invalid PromptSpace configuration: {exc}") from exc


logger = logging.getLogger("promptspace.settings")
