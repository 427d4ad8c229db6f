"""
botapi_sdk.tier0_core.http
───────────────────────────
Wire-level constants and the uniform response envelope returned by every
bot API method:

    {"ok": true,  "result": ...}
    {"ok": false, "error_code": 429, "description": "...",
     "parameters": {"retry_after": 3}}
"""
from __future__ import annotations

from string import Formatter
from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, model_validator

T = TypeVar("T")


DEFAULT_URL_TEMPLATE = "https://api.telegram.org/bot{token}/{endpoint}"

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_MULTIPART = "multipart/form-data"


class HTTP:
    """HTTP verbs used by bot API methods."""

    GET = "GET"
    POST = "POST"


# ── URL template ──────────────────────────────────────────────────────────

_PLACEHOLDERS = ("token", "endpoint")


def is_valid_url_template(template: Any) -> bool:
    """
    True if *template* has exactly one ``{token}`` and one ``{endpoint}``
    placeholder, no other placeholders, and yields an absolute http(s) URL.
    """
    if not isinstance(template, str):
        return False
    try:
        names = [name for _, name, _, _ in Formatter().parse(template) if name is not None]
    except ValueError:
        return False
    if sorted(names) != sorted(_PLACEHOLDERS):
        return False
    try:
        url = httpx.URL(format_url(template, "123456:ABC-DEF1234ghIkl-zyx57W2v1u123ew11", "getMe"))
    except (httpx.InvalidURL, ValueError):
        return False
    return url.scheme in ("http", "https") and bool(url.host)


def format_url(template: str, token: str, endpoint: str) -> str:
    """Substitute the bot token and method name into the URL template."""
    return template.format(token=token, endpoint=endpoint)


# ── Response envelope ─────────────────────────────────────────────────────

class ResponseParameters(BaseModel):
    """Structured hints attached to an unsuccessful response."""
    model_config = ConfigDict(extra="ignore")

    # may exceed 32 bits, fits in 52
    migrate_to_chat_id: int | None = None
    retry_after: int | None = None


class ResponseEnvelope(BaseModel, Generic[T]):
    """
    Typed envelope. Exactly one of ``result`` or (``error_code``,
    ``description``) is populated according to ``ok``; any other shape is a
    protocol mismatch and fails validation.
    """
    model_config = ConfigDict(extra="ignore")

    ok: bool
    result: T | None = None
    error_code: int | None = None
    description: str | None = None
    parameters: ResponseParameters | None = None

    @model_validator(mode="after")
    def _check_shape(self) -> "ResponseEnvelope[T]":
        if self.ok:
            if self.result is None:
                raise ValueError("successful envelope carries no result")
        elif self.error_code is None or self.description is None:
            raise ValueError("failed envelope must carry error_code and description")
        return self

    def as_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


def decode_envelope(raw: bytes | str, result_type: Any = Any) -> ResponseEnvelope[Any]:
    """
    Parse a raw response body into ``ResponseEnvelope[result_type]``.
    Raises ``pydantic.ValidationError`` on malformed JSON or shape.
    """
    return ResponseEnvelope[result_type].model_validate_json(raw)


__all__ = [
    "DEFAULT_URL_TEMPLATE", "CONTENT_TYPE_JSON", "CONTENT_TYPE_MULTIPART",
    "HTTP", "ResponseParameters", "ResponseEnvelope", "decode_envelope",
    "is_valid_url_template", "format_url",
]
