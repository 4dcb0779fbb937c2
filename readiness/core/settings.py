"""Runtime configuration read from the environment.

A :class:`Settings` instance is built once by the entry point (the app
factory or the CLI) and handed to every component that needs it; nothing in
the package reads ``os.environ`` on its own.
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

API_KEY_VARIABLES = ("GEMINI_API_KEY", "VITE_GEMINI_API_KEY", "GOOGLE_AI_API_KEY")
PARSE_FAILURE_MODES = ("error", "fallback")
DEV_CORS_ORIGINS = [
    "http://localhost:5000",
    "http://127.0.0.1:5000",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def _first(env: Mapping[str, str], *names: str) -> str | None:
    for name in names:
        value = (env.get(name) or "").strip()
        if value:
            return value
    return None


def _split_origins(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str | None = field(default=None, repr=False)
    gemini_model: str = "gemini-3-pro-preview"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    request_timeout: float = 60.0
    max_retries: int = 2
    retry_base_delay: float = 1.0
    environment: str = "development"
    cors_origins: tuple[str, ...] = tuple(DEV_CORS_ORIGINS)
    parse_failure_mode: str = "error"
    github_token: str | None = field(default=None, repr=False)
    github_api_base: str = "https://api.github.com"
    api_base_url: str = "http://localhost:3001"
    store_path: Path = Path("~/.readiness/reports.json")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def has_api_key(self) -> bool:
        return bool(self.gemini_api_key)

    def validate(self) -> None:
        """Raise ``ValueError`` if any field is out of range."""
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be > 0, got {self.request_timeout}")
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.retry_base_delay < 0:
            raise ValueError(f"retry_base_delay must be >= 0, got {self.retry_base_delay}")
        if self.parse_failure_mode not in PARSE_FAILURE_MODES:
            raise ValueError(
                f"parse_failure_mode must be one of {PARSE_FAILURE_MODES}, got {self.parse_failure_mode!r}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ

        environment = (_first(env, "APP_ENV", "NODE_ENV") or "development").lower()
        origins = _split_origins(_first(env, "API_CORS_ORIGINS", "FRONTEND_URL"))
        if not origins and environment != "production":
            origins = list(DEV_CORS_ORIGINS)

        settings = cls(
            gemini_api_key=_first(env, *API_KEY_VARIABLES),
            gemini_model=_first(env, "GEMINI_MODEL") or cls.gemini_model,
            gemini_api_base=(_first(env, "GEMINI_API_BASE") or cls.gemini_api_base).rstrip("/"),
            request_timeout=float(_first(env, "GEMINI_TIMEOUT_SECONDS") or cls.request_timeout),
            max_retries=int(_first(env, "GEMINI_MAX_RETRIES") or cls.max_retries),
            environment=environment,
            cors_origins=tuple(origins),
            parse_failure_mode=(_first(env, "ANALYSIS_PARSE_FAILURE_MODE") or "error").lower(),
            github_token=_first(env, "GITHUB_TOKEN", "VITE_GITHUB_TOKEN"),
            api_base_url=(_first(env, "READINESS_API_URL", "VITE_API_URL") or cls.api_base_url).rstrip("/"),
            store_path=Path(_first(env, "READINESS_STORE_PATH") or cls.store_path).expanduser(),
        )
        settings.validate()
        return settings
