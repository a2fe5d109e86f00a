"""Tests for configuration loading and validation logic.

Updates:
  v0.1.1 - 2026-10-16 - Cover .env loading through PROMPTSPACE_ENV_FILE.
  v0.1.0 - 2026-10-05 - Cover JSON/env precedence and validation errors.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
from pytest import MonkeyPatch

from config import (
    DEFAULT_API_BASE_URL,
    PromptSpaceSettings,
    SettingsError,
    load_settings,
)


def test_defaults_use_bundled_files() -> None:
    """Without configuration the bundled catalogue and default tuning apply."""
    settings = load_settings()

    assert isinstance(settings, PromptSpaceSettings)
    assert settings.data_source == "files"
    assert settings.data_path is None
    assert settings.api_base_url == DEFAULT_API_BASE_URL
    assert settings.http_timeout_seconds == 10.0
    assert settings.http_max_attempts == 3
    assert settings.search_debounce_ms == 300
    assert settings.search_debounce_seconds == pytest.approx(0.3)
    assert settings.search_include_content is False


def test_environment_variables_are_applied(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PROMPTSPACE_DATA_SOURCE", "API")
    monkeypatch.setenv("PROMPTSPACE_API_BASE_URL", "https://prompts.example.com/")
    monkeypatch.setenv("PROMPTSPACE_HTTP_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("PROMPTSPACE_SEARCH_INCLUDE_CONTENT", "true")
    monkeypatch.setenv("PROMPTSPACE_CATALOG_PATH", str(tmp_path / "catalog"))

    settings = load_settings()

    assert settings.data_source == "http"
    assert settings.api_base_url == "https://prompts.example.com"
    assert settings.http_max_attempts == 5
    assert settings.search_include_content is True
    assert settings.data_path == (tmp_path / "catalog").resolve()


def test_json_config_takes_precedence_over_env(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    config_path = tmp_path / "settings.json"
    config_path.write_text(
        json.dumps({"data_source": "http", "search_debounce_ms": 120, "theme": "dark"}),
        encoding="utf-8",
    )
    monkeypatch.setenv("PROMPTSPACE_CONFIG_JSON", str(config_path))
    monkeypatch.setenv("PROMPTSPACE_DATA_SOURCE", "files")
    monkeypatch.setenv("PROMPTSPACE_HTTP_TIMEOUT_SECONDS", "2.5")

    settings = load_settings()

    assert settings.data_source == "http"
    assert settings.search_debounce_ms == 120
    assert settings.http_timeout_seconds == 2.5


def test_keyword_overrides_win(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setenv("PROMPTSPACE_SEARCH_DEBOUNCE_MS", "900")

    assert load_settings(search_debounce_ms=0).search_debounce_ms == 0


def test_default_config_file_is_optional_but_read(tmp_path: Path) -> None:
    """``config/config.json`` relative to the working directory is picked up when present."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "config.json").write_text('{"http_max_attempts": 1}', encoding="utf-8")

    assert load_settings().http_max_attempts == 1


def test_missing_explicit_config_raises(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PROMPTSPACE_CONFIG_JSON", str(tmp_path / "absent.json"))

    with pytest.raises(SettingsError, match="not found"):
        load_settings()


def test_invalid_json_config_raises(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    config_path = tmp_path / "broken.json"
    config_path.write_text("{oops", encoding="utf-8")
    monkeypatch.setenv("PROMPTSPACE_CONFIG_JSON", str(config_path))

    with pytest.raises(SettingsError, match="Invalid JSON"):
        load_settings()


def test_non_object_json_config_raises(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    config_path = tmp_path / "list.json"
    config_path.write_text("[1, 2]", encoding="utf-8")
    monkeypatch.setenv("PROMPTSPACE_CONFIG_JSON", str(config_path))

    with pytest.raises(SettingsError, match="JSON object"):
        load_settings()


@pytest.mark.parametrize(
    "overrides",
    [
        {"http_max_attempts": 0},
        {"http_timeout_seconds": 0},
        {"search_debounce_ms": -1},
        {"data_source": "ftp"},
        {"api_base_url": "localhost:3000"},
    ],
)
def test_invalid_values_raise_settings_error(overrides: dict[str, object]) -> None:
    with pytest.raises(SettingsError):
        load_settings(**overrides)


def test_dotenv_file_is_read_without_touching_environ(
    monkeypatch: MonkeyPatch, tmp_path: Path
) -> None:
    env_file = tmp_path / "custom.env"
    env_file.write_text("PROMPTSPACE_SEARCH_DEBOUNCE_MS=75\n", encoding="utf-8")
    monkeypatch.setenv("PROMPTSPACE_ENV_FILE", str(env_file))

    settings = load_settings()

    assert settings.search_debounce_ms == 75
    assert "PROMPTSPACE_SEARCH_DEBOUNCE_MS" not in os.environ
