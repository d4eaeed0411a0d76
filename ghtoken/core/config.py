"""
Application configuration models and helpers.

Centralizes settings management so the relay endpoint and the authorization
page share a single configuration surface, constructed once per process.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

import os

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class GitHubSettings(BaseSettings):
    """Credentials for the GitHub OAuth app. Both values are mandatory."""

    model_config = SettingsConfigDict(extra="ignore")

    client_id: str = Field(..., min_length=1, validation_alias="GITHUB_CLIENT_ID")
    client_secret: str = Field(
        ..., min_length=1, validation_alias="GITHUB_CLIENT_SECRET"
    )


class UISettings(BaseSettings):
    """Settings consumed by the authorization page."""

    model_config = SettingsConfigDict(extra="ignore")

    public_client_id: Optional[str] = Field(
        None,
        validation_alias="GITHUB_PUBLIC_CLIENT_ID",
        description="Client identifier embedded in the authorize URL. Not a secret.",
    )
    scope: str = Field("repo", validation_alias="GITHUB_OAUTH_SCOPE")
    relay_base_url: AnyHttpUrl = Field(
        "http://localhost:3001",
        validate_default=True,
        validation_alias="RELAY_BASE_URL",
        description="Base URL of the token relay the page posts codes to.",
    )


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    host: str = Field("0.0.0.0", validation_alias="HOST")
    port: int = Field(3001, validation_alias="PORT")
    cors_allowed_origins: str = Field("*", validation_alias="CORS_ALLOWED_ORIGINS")
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    ui: UISettings = Field(default_factory=UISettings)

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.strip().upper() or "INFO"
        if level not in LOG_LEVELS:
            raise ValueError(
                f"unknown log level {value!r}; expected one of {', '.join(LOG_LEVELS)}"
            )
        return level

    @property
    def cors_origins(self) -> list[str]:
        """Support providing origins as a comma-separated string."""
        return [
            origin.strip()
            for origin in self.cors_allowed_origins.split(",")
            if origin.strip()
        ]

    @property
    def public_client_id(self) -> str:
        """Client identifier the page advertises, falling back to the relay's."""
        return self.ui.public_client_id or self.github.client_id


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "GitHubSettings",
    "UISettings",
    "get_settings",
]
