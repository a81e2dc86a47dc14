"""Client settings for rundeck-spine.

``RundeckSettings`` holds everything the HTTP fetcher and the CLI need to
reach a scheduling service. Values come from ``RUNDECK_*`` environment
variables or a ``.env`` file.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.

    - **Pydantic validation:** Type-checked at startup, not at request time
    - **Environment-driven:** Reads from env vars and .env files
    - **Sensible defaults:** Points at a local service out of the box

Examples:
    >>> from rundeck_spine.core.settings import RundeckSettings
    >>> settings = RundeckSettings(url="https://rundeck.example.com/")
    >>> settings.url
    'https://rundeck.example.com'

Tags:
    settings, configuration, pydantic, environment, rundeck-spine

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class RundeckSettings(BaseSettings):
    """Connection and logging settings.

    Fields
    ──────
    url          : Base URL of the scheduling service
    api_version  : API version segment used in request paths
    auth_token   : Token sent as ``X-Rundeck-Auth-Token``
    timeout      : Request timeout in seconds
    log_level    : Structlog log level
    json_logs    : Force JSON (True) or console (False) logs; None auto-detects
    """

    model_config = SettingsConfigDict(
        env_prefix="RUNDECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Service ──────────────────────────────────────────────────
    url: str = "http://localhost:4440"
    api_version: int = Field(default=14, ge=1)
    auth_token: SecretStr | None = None
    timeout: float = Field(default=30.0, gt=0)

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool | None = None

    @field_validator("url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def api_base(self) -> str:
        """``{url}/api/{api_version}``"""
        return f"{self.url}/api/{self.api_version}"
