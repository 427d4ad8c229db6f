"""
botapi_sdk.tier0_core.config
──────────────────────────────
Defaults for every Bot, loaded once from .env and BOTAPI_* environment
variables through pydantic-settings. A malformed URL template
fails at load time, not on the first request.

Configure via: BOTAPI_TOKEN, BOTAPI_URL_TEMPLATE, BOTAPI_TIMEOUT,
               BOTAPI_LOG_LEVEL, BOTAPI_LOG_FORMAT, BOTAPI_LOG_REQUESTS
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from botapi_sdk.tier0_core.http import DEFAULT_URL_TEMPLATE, is_valid_url_template

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class BotApiConfig(BaseSettings):
    """
    Typed SDK configuration. Every field can be overridden per ``Bot``
    instance; the environment only supplies defaults.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ── Credentials ───────────────────────────────────────────────────────────
    token: SecretStr | None = Field(default=None, alias="BOTAPI_TOKEN")

    # ── Transport ─────────────────────────────────────────────────────────────
    api_url_template: str = Field(default=DEFAULT_URL_TEMPLATE, alias="BOTAPI_URL_TEMPLATE")
    timeout: float = Field(default=30.0, gt=0, alias="BOTAPI_TIMEOUT")

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", alias="BOTAPI_LOG_LEVEL")
    log_format: str = Field(default="json", alias="BOTAPI_LOG_FORMAT")
    log_requests: bool = Field(default=False, alias="BOTAPI_LOG_REQUESTS")

    @field_validator("api_url_template")
    @classmethod
    def validate_url_template(cls, v: str) -> str:
        if not is_valid_url_template(v):
            raise ValueError(
                "api_url_template must contain exactly one {token} and one "
                f"{{endpoint}} placeholder and form an http(s) URL, got {v!r}"
            )
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in {"json", "console"}:
            raise ValueError(f"log_format must be 'json' or 'console', got {v!r}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {v!r}")
        return level


@lru_cache(maxsize=1)
def get_config() -> BotApiConfig:
    """
    Process-wide defaults, read on first use.
    """
    return BotApiConfig()


def _reset_config() -> None:
    """Drop the cached config so the next get_config() re-reads the env."""
    get_config.cache_clear()
