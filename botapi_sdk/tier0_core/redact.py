"""
botapi_sdk.tier0_core.redact
─────────────────────────────
Token redaction for log events. A bot token is part of every request URL
(``/bot<token>/<method>``), so besides replacing values of sensitive keys
every string in an event is scrubbed for embedded tokens.
"""
from __future__ import annotations

import re
from typing import Any

REDACTED = "[REDACTED]"

# ── Sensitive key names (case-insensitive) ────────────────────────────────────

_SENSITIVE_KEYS: frozenset[str] = frozenset({
    "token", "bot_token", "secret_token", "secret", "api_key",
    "authorization", "x-telegram-bot-api-secret-token",
})

# ── Token shapes ──────────────────────────────────────────────────────────────

# path segment of an API URL: /bot123456:AA...
_URL_TOKEN = re.compile(r"/bot\d+:[A-Za-z0-9_-]+")
# a token on its own: numeric bot id, colon, 30+ url-safe chars
_BARE_TOKEN = re.compile(r"\b\d{5,}:[A-Za-z0-9_-]{30,}")
# token=..., secret_token=...
_ASSIGNED = re.compile(r"((?:secret_)?token|api[_-]?key)\s*=\s*[^\s&\"']+", re.I)


def scrub_string(text: str) -> str:
    """Replace any embedded bot token in *text*."""
    text = _URL_TOKEN.sub("/bot" + REDACTED, text)
    text = _BARE_TOKEN.sub(REDACTED, text)
    return _ASSIGNED.sub(r"\1=" + REDACTED, text)


def _scrub(value: Any, keys: frozenset[str]) -> Any:
    if isinstance(value, str):
        return scrub_string(value)
    if isinstance(value, dict):
        return redact_dict(value, keys)
    if isinstance(value, (list, tuple)):
        return type(value)(_scrub(item, keys) for item in value)
    return value


def redact_dict(data: dict[str, Any], sensitive_keys: frozenset[str] | None = None) -> dict[str, Any]:
    """
    Copy of *data* with sensitive keys masked and every nested string
    scrubbed for tokens.
    """
    keys = _SENSITIVE_KEYS if sensitive_keys is None else sensitive_keys
    return {
        k: REDACTED if str(k).lower() in keys else _scrub(v, keys)
        for k, v in data.items()
    }


def structlog_redact_processor(logger: Any, method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor; place it before the renderer."""
    return redact_dict(event_dict)


__all__ = ["REDACTED", "redact_dict", "scrub_string", "structlog_redact_processor"]
