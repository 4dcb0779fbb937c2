from __future__ import annotations

from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from readiness.core.settings import DEV_CORS_ORIGINS, Settings


def test_defaults_without_environment():
    settings = Settings.from_env({})
    assert settings.gemini_api_key is None
    assert not settings.has_api_key
    assert settings.gemini_model == "gemini-3-pro-preview"
    assert settings.parse_failure_mode == "error"
    assert list(settings.cors_origins) == DEV_CORS_ORIGINS
    assert settings.api_base_url == "http://localhost:3001"


@pytest.mark.parametrize("name", ["GEMINI_API_KEY", "VITE_GEMINI_API_KEY", "GOOGLE_AI_API_KEY"])
def test_api_key_legacy_names(name):
    settings = Settings.from_env({name: "k"})
    assert settings.gemini_api_key == "k"


def test_first_api_key_variable_wins():
    settings = Settings.from_env({"GEMINI_API_KEY": "primary", "VITE_GEMINI_API_KEY": "legacy"})
    assert settings.gemini_api_key == "primary"


def test_api_key_is_not_in_repr():
    assert "secret" not in repr(Settings.from_env({"GEMINI_API_KEY": "secret"}))


def test_production_cors_is_strict():
    assert Settings.from_env({"NODE_ENV": "production"}).cors_origins == ()
    settings = Settings.from_env({"APP_ENV": "production", "FRONTEND_URL": "https://a.example, https://b.example"})
    assert settings.is_production
    assert settings.cors_origins == ("https://a.example", "https://b.example")


def test_numeric_overrides():
    settings = Settings.from_env({"GEMINI_TIMEOUT_SECONDS": "30", "GEMINI_MAX_RETRIES": "0"})
    assert settings.request_timeout == 30.0
    assert settings.max_retries == 0


@pytest.mark.parametrize(
    "env",
    [
        {"ANALYSIS_PARSE_FAILURE_MODE": "ignore"},
        {"GEMINI_TIMEOUT_SECONDS": "0"},
        {"GEMINI_MAX_RETRIES": "-1"},
        {"GEMINI_TIMEOUT_SECONDS": "soon"},
    ],
)
def test_invalid_values_raise(env):
    with pytest.raises(ValueError):
        Settings.from_env(env)


def test_store_path_expands_user(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    settings = Settings.from_env({"READINESS_STORE_PATH": "~/reports.json"})
    assert settings.store_path == tmp_path / "reports.json"
