"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without polluting the
  CLI.
- Lets the GraphQL adapter read transport knobs consistently.

Per-run inputs (owner, repo, policy, token) are not settings: they travel in
`core.domain.models.DeletionInput`.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_VERSIONS_PAGE = 1000


class AppSettings(BaseSettings):
    """Central application settings."""

    model_config = SettingsConfigDict(
        env_prefix="VERSION_CLEANER_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    api_url: str = Field(
        default="https://api.github.com/graphql",
        min_length=8,
        description="GraphQL endpoint of the registry.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    http_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Connection-level retries handled by the httpx transport.",
    )
    user_agent: str = Field(
        default="version-cleaner/0.1",
        min_length=1,
        description="User-Agent sent with every request.",
    )
    max_versions_page: int = Field(
        default=DEFAULT_MAX_VERSIONS_PAGE,
        ge=1,
        description="Upper bound on versions read by an 'all versions' fetch.",
    )
    graphql_page_size: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Connection page size while walking version lists.",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level used by the CLI.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value
