"""
botapi_sdk.tier2_client.dispatch
─────────────────────────────────
The generic request dispatcher. One call = at most one HTTP request:

    validate → serialize → build URL → send → decode envelope

Expected and unexpected failures alike come back as ``Failure(error)``;
nothing is raised for them and nothing is retried. Callers that prefer
exceptions call ``.unwrap()``.

Usage:
    result = await dispatch(GetChatMemberCount(chat_id=-100123), token=token)
    if result.ok:
        print(result.value)
    elif isinstance(result.error, RateLimitError):
        await asyncio.sleep(result.error.retry_after)
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Generic, NoReturn, Protocol, TypeVar, Union, runtime_checkable

import httpx
from pydantic import SecretStr, ValidationError as PydanticValidationError

from botapi_sdk.tier0_core.errors import (
    BotApiError,
    ConfigurationError,
    DecodeFailure,
    RequestCancelled,
    TransportFailure,
    ValidationFailed,
    classify_rejection,
)
from botapi_sdk.tier0_core.http import (
    DEFAULT_URL_TEMPLATE,
    decode_envelope,
    format_url,
    is_valid_url_template,
)
from botapi_sdk.tier0_core.logging import request_logger
from botapi_sdk.tier1_runtime.serialize import RequestBody
from botapi_sdk.tier1_runtime.validate import ValidationOutcome

T = TypeVar("T")


# ── Capability contract ───────────────────────────────────────────────────────

@runtime_checkable
class Dispatchable(Protocol):
    """What the dispatcher needs from a command."""

    def validate(self) -> ValidationOutcome: ...
    def serialize(self) -> RequestBody: ...
    def endpoint(self) -> str: ...
    def http_method(self) -> str: ...
    def result_type(self) -> Any: ...


# ── Tagged result ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Success(Generic[T]):
    value: T
    # the remote's optional human-readable note, returned rather than printed
    description: str | None = None

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    error: BotApiError

    @property
    def ok(self) -> bool:
        return False

    @property
    def expected(self) -> bool:
        return self.error.expected

    def unwrap(self) -> NoReturn:
        raise self.error


DispatchResult = Union[Success[T], Failure]


# ── Transport ─────────────────────────────────────────────────────────────────

class _GaveUp(Exception):
    def __init__(self, reason: str) -> None:
        self.reason = reason


async def _race(
    client: httpx.AsyncClient,
    request: httpx.Request,
    deadline: float | None,
    cancel: asyncio.Event | None,
) -> httpx.Response:
    """Send *request* unless the caller's deadline or cancel event fires first."""
    if deadline is None and cancel is None:
        return await client.send(request)

    send = asyncio.ensure_future(client.send(request))
    stop = asyncio.ensure_future(cancel.wait()) if cancel is not None else None
    waiters = {send} if stop is None else {send, stop}
    try:
        done, _ = await asyncio.wait(
            waiters, timeout=deadline, return_when=asyncio.FIRST_COMPLETED
        )
    except asyncio.CancelledError:
        for task in waiters:
            task.cancel()
        raise
    if stop is not None and stop not in done:
        stop.cancel()
    if send in done:
        return send.result()

    send.cancel()
    await asyncio.gather(send, return_exceptions=True)
    raise _GaveUp("cancelled" if stop is not None and stop in done else "deadline")


async def _send(
    request: httpx.Request,
    client: httpx.AsyncClient | None,
    timeout: float | httpx.Timeout | None,
    deadline: float | None,
    cancel: asyncio.Event | None,
) -> httpx.Response:
    if client is None:
        async with httpx.AsyncClient(timeout=timeout if timeout is not None else 30.0) as own:
            request.extensions["timeout"] = own.timeout.as_dict()
            return await _race(own, request, deadline, cancel)
    effective = httpx.Timeout(timeout) if timeout is not None else client.timeout
    request.extensions["timeout"] = effective.as_dict()
    return await _race(client, request, deadline, cancel)


# ── Dispatcher ────────────────────────────────────────────────────────────────

async def dispatch(
    command: Dispatchable,
    result_type: Any = None,
    *,
    token: str | SecretStr,
    url_template: str | None = None,
    client: httpx.AsyncClient | None = None,
    timeout: float | httpx.Timeout | None = None,
    deadline: float | None = None,
    cancel: asyncio.Event | None = None,
    log_requests: bool = False,
) -> DispatchResult[Any]:
    """
    Execute one command against the bot API.

    Args:
        command:      anything satisfying ``Dispatchable``.
        result_type:  type the envelope's ``result`` decodes into; defaults to
                      ``command.result_type()``.
        token:        bot token, substituted into *url_template*.
        url_template: defaults to DEFAULT_URL_TEMPLATE.
        client:       shared ``httpx.AsyncClient``; a short-lived one is used
                      when omitted. Tests pass one built on MockTransport.
        timeout:      transport timeout; its expiry is a TransportFailure.
        deadline:     seconds the caller is willing to wait; expiry is a
                      RequestCancelled(reason="deadline").
        cancel:       event the caller sets to abandon the request;
                      RequestCancelled(reason="cancelled").
        log_requests: emit debug events for this call.
    """
    endpoint = command.endpoint()
    log = request_logger(endpoint, command.http_method()) if log_requests else None

    def fail(error: BotApiError) -> Failure:
        if log is not None:
            log.debug("botapi.failure", code=error.code, detail=error.detail)
        return Failure(error)

    outcome = command.validate()
    if not outcome.valid:
        return fail(ValidationFailed(outcome.violations, endpoint=endpoint))

    if url_template is None:
        url_template = DEFAULT_URL_TEMPLATE
    raw_token = token.get_secret_value() if isinstance(token, SecretStr) else token
    if not raw_token or not raw_token.strip():
        return fail(ConfigurationError("token_missing", "Bot token can't be empty."))
    if not is_valid_url_template(url_template):
        return fail(ConfigurationError(
            "invalid_url_template",
            "The API URL template must contain {token} and {endpoint}.",
            f"Invalid URL template: {url_template!r}",
        ))

    body = command.serialize()
    method = command.http_method()
    request = body.build_request(method, format_url(url_template, raw_token, endpoint))
    if log is not None:
        log.debug(
            "botapi.request",
            url=str(request.url),
            content_type=body.content_type,
        )

    try:
        response = await _send(request, client, timeout, deadline, cancel)
    except _GaveUp as exc:
        return fail(RequestCancelled(endpoint, exc.reason))
    except httpx.DecodingError as exc:
        return fail(DecodeFailure(endpoint, cause=exc))
    except httpx.RequestError as exc:
        return fail(TransportFailure(endpoint, exc))

    raw = response.content
    rtype = command.result_type() if result_type is None else result_type
    try:
        envelope = decode_envelope(raw, rtype)
    except (PydanticValidationError, ValueError) as exc:
        return fail(DecodeFailure(endpoint, raw, exc, response.status_code))

    if log is not None:
        log.debug("botapi.response", status_code=response.status_code, ok=envelope.ok)

    if not envelope.ok:
        return fail(classify_rejection(
            envelope.error_code,  # type: ignore[arg-type]
            envelope.description,  # type: ignore[arg-type]
            envelope.parameters,
            endpoint,
        ))
    return Success(envelope.result, envelope.description)


__sdk_export__ = {
    "surface": "both",
    "exports": ["dispatch", "Dispatchable", "Success", "Failure", "DispatchResult"],
    "description": "Validate, serialize, send and decode one bot API call",
    "tier": "tier2_client",
    "module": "dispatch",
}
