"""
botapi_sdk.tier0_core.secrets
──────────────────────────────
Bot token providers. The token is wrapped in SecretStr so it cannot leak
through repr or model dumps; the dispatcher only unwraps it to build the
request URL.
"""
from __future__ import annotations

import os
from typing import Protocol, runtime_checkable

from pydantic import SecretStr

from botapi_sdk.tier0_core.config import BotApiConfig, get_config
from botapi_sdk.tier0_core.errors import ConfigurationError


# ── Provider protocol ─────────────────────────────────────────────────────────

@runtime_checkable
class TokenProvider(Protocol):
    def get_token(self) -> SecretStr: ...


# ── Providers ─────────────────────────────────────────────────────────────────

class StaticTokenProvider:
    """Holds a token supplied in code."""

    def __init__(self, token: str | SecretStr) -> None:
        if isinstance(token, str):
            token = SecretStr(token)
        self._token = token

    def get_token(self) -> SecretStr:
        if not self._token.get_secret_value().strip():
            raise ConfigurationError("token_missing", "Bot token can't be empty.")
        return self._token


class EnvTokenProvider:
    """Reads the token from an environment variable on every call."""

    def __init__(self, var: str = "BOTAPI_TOKEN") -> None:
        self._var = var

    def get_token(self) -> SecretStr:
        value = os.environ.get(self._var, "").strip()
        if not value:
            raise ConfigurationError(
                "token_missing",
                f"Bot token not found in environment variable {self._var!r}.",
            )
        return SecretStr(value)


class ConfigTokenProvider:
    """Reads the token from BotApiConfig (``.env`` or BOTAPI_TOKEN)."""

    def __init__(self, config: BotApiConfig | None = None) -> None:
        self._config = config

    def get_token(self) -> SecretStr:
        cfg = self._config or get_config()
        if cfg.token is None or not cfg.token.get_secret_value().strip():
            raise ConfigurationError("token_missing", "BOTAPI_TOKEN is not configured.")
        return cfg.token


def resolve_provider(
    token: str | SecretStr | None = None,
    provider: TokenProvider | None = None,
    config: BotApiConfig | None = None,
) -> TokenProvider:
    """Explicit token wins, then an explicit provider, then configuration."""
    if token is not None:
        return StaticTokenProvider(token)
    if provider is not None:
        return provider
    return ConfigTokenProvider(config)


__all__ = [
    "TokenProvider", "StaticTokenProvider", "EnvTokenProvider",
    "ConfigTokenProvider", "resolve_provider",
]
