"""
botapi_sdk.tier0_core.errors
─────────────────────────────
Standard error taxonomy for bot API calls. The dispatcher never raises these
for expected conditions: it returns them inside a ``Failure``. ``Bot.execute``
and ``Failure.unwrap()`` raise them for callers that prefer exceptions.

Expected:   ValidationFailed, ConfigurationError, ApiRejection (and subclasses)
Unexpected: TransportFailure, RequestCancelled, DecodeFailure
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from botapi_sdk.tier0_core.http import ResponseParameters
    from botapi_sdk.tier1_runtime.validate import Violation


# ── Base error ────────────────────────────────────────────────────────────────

class BotApiError(Exception):
    """
    Base class for all SDK errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - user_message: safe to surface to end users
    - detail: internal context
    - expected: False for protocol/network conditions callers may treat as fatal
    """

    code: str = "internal_error"
    expected: bool = False

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "An unexpected error occurred.",
        detail: str | None = None,
        **metadata: Any,
    ) -> None:
        self.code = code or self.__class__.code
        self.user_message = user_message
        self.detail = detail or user_message
        self.metadata = metadata
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.user_message,
            }
        }


# ── Local errors (no I/O performed) ───────────────────────────────────────────

class ValidationFailed(BotApiError):
    """One or more request fields violate the remote API's constraints."""
    code = "validation_error"
    expected = True

    def __init__(
        self,
        violations: list[Violation] | tuple[Violation, ...] = (),
        user_message: str = "Request validation failed.",
        **metadata: Any,
    ) -> None:
        self.violations = tuple(violations)
        detail = "; ".join(str(v) for v in self.violations) or user_message
        super().__init__(None, user_message, detail, **metadata)

    @property
    def fields(self) -> dict[str, str]:
        out: dict[str, str] = {}
        for v in self.violations:
            out.setdefault(v.field, v.message)
        return out

    def to_dict(self) -> dict:
        d = super().to_dict()
        if self.violations:
            d["error"]["fields"] = self.fields
        return d


class ConfigurationError(BotApiError):
    """Missing token or malformed URL template."""
    code = "configuration_error"
    expected = True


# ── Network errors ────────────────────────────────────────────────────────────

class TransportFailure(BotApiError):
    """Connection error or transport timeout before a response was received."""
    code = "transport_error"

    def __init__(self, endpoint: str, cause: BaseException, **metadata: Any) -> None:
        self.endpoint = endpoint
        self.cause = cause
        super().__init__(
            None,
            "The bot API could not be reached.",
            f"Request to {endpoint} failed: {type(cause).__name__}: {cause}",
            **metadata,
        )


class RequestCancelled(BotApiError):
    """The caller's deadline elapsed or its cancel signal fired first."""
    code = "request_cancelled"

    def __init__(self, endpoint: str, reason: str = "cancelled", **metadata: Any) -> None:
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(
            None,
            "The request was cancelled.",
            f"Request to {endpoint} cancelled by caller ({reason})",
            **metadata,
        )


class DecodeFailure(BotApiError):
    """The response body is not a well-formed envelope."""
    code = "decode_error"

    def __init__(
        self,
        endpoint: str,
        body: bytes = b"",
        cause: BaseException | None = None,
        status_code: int | None = None,
        **metadata: Any,
    ) -> None:
        self.endpoint = endpoint
        self.body = body[:512]
        self.cause = cause
        self.status_code = status_code
        super().__init__(
            None,
            "The bot API returned an unreadable response.",
            f"Cannot decode response of {endpoint} (HTTP {status_code}): {cause}",
            **metadata,
        )


# ── Remote rejection ──────────────────────────────────────────────────────────

class ApiRejection(BotApiError):
    """The remote API answered with ``ok: false``."""
    code = "api_rejection"
    expected = True

    def __init__(
        self,
        error_code: int,
        description: str,
        parameters: ResponseParameters | None = None,
        endpoint: str | None = None,
        **metadata: Any,
    ) -> None:
        self.error_code = error_code
        self.description = description
        self.parameters = parameters
        self.endpoint = endpoint
        super().__init__(None, description, self._render(), **metadata)

    @property
    def retry_after(self) -> int | None:
        return self.parameters.retry_after if self.parameters else None

    @property
    def migrate_to_chat_id(self) -> int | None:
        return self.parameters.migrate_to_chat_id if self.parameters else None

    def _render(self) -> str:
        parts = [f"error {self.error_code}: {self.description}"]
        if self.migrate_to_chat_id is not None:
            parts.append(
                f"the group has been migrated to supergroup with id={self.migrate_to_chat_id}"
            )
        if self.retry_after is not None:
            parts.append(f"retry after {self.retry_after} seconds")
        return ", ".join(parts)

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["error"]["error_code"] = self.error_code
        if self.parameters is not None:
            d["error"]["parameters"] = self.parameters.model_dump(exclude_none=True)
        return d


class RateLimitError(ApiRejection):
    """Flood control: the remote asks the caller to wait ``retry_after`` seconds."""
    code = "rate_limit_exceeded"


class ChatMigratedError(ApiRejection):
    """The group was upgraded to a supergroup; retry with ``migrate_to_chat_id``."""
    code = "chat_migrated"


def classify_rejection(
    error_code: int,
    description: str,
    parameters: ResponseParameters | None = None,
    endpoint: str | None = None,
) -> ApiRejection:
    """Pick the most specific ApiRejection subclass for an error envelope."""
    if parameters is not None and parameters.migrate_to_chat_id is not None:
        cls: type[ApiRejection] = ChatMigratedError
    elif error_code == 429 or (parameters is not None and parameters.retry_after is not None):
        cls = RateLimitError
    else:
        cls = ApiRejection
    return cls(error_code, description, parameters, endpoint)


__sdk_export__ = {
    "surface": "both",
    "exports": [
        "BotApiError", "ValidationFailed", "ConfigurationError",
        "TransportFailure", "RequestCancelled", "DecodeFailure",
        "ApiRejection", "RateLimitError", "ChatMigratedError",
    ],
    "description": "Error taxonomy for bot API dispatch",
    "tier": "tier0_core",
    "module": "errors",
}
