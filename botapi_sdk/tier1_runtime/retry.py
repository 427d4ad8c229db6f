"""
botapi_sdk.tier1_runtime.retry
───────────────────────────────
Opt-in retry policy for callers. The dispatcher itself never retries; wrap
your own coroutine when you want transient failures retried.
Backed by Tenacity.

Retried:     TransportFailure, RateLimitError (waits retry_after when given)
Not retried: everything else (validation, decode, cancellation, rejections)

Usage:
    @retry_policy(max_attempts=5)
    async def notify(bot, chat_id, text):
        return await bot.send_message(chat_id, text)
"""
from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from botapi_sdk.tier0_core.errors import RateLimitError, TransportFailure


def is_retryable(exc: BaseException) -> bool:
    """Return True if the exception should be retried."""
    return isinstance(exc, (TransportFailure, RateLimitError))


class wait_retry_after:
    """Use the remote's retry_after hint when present, *fallback* otherwise."""

    def __init__(self, fallback: Callable[[RetryCallState], float], max_wait: float) -> None:
        self._fallback = fallback
        self._max_wait = max_wait

    def __call__(self, retry_state: RetryCallState) -> float:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(exc, RateLimitError) and exc.retry_after is not None:
            return float(min(exc.retry_after, self._max_wait))
        return self._fallback(retry_state)


def retry_policy(
    max_attempts: int = 3,
    min_wait: float = 0.5,
    max_wait: float = 30.0,
    jitter: float = 1.0,
) -> Callable:
    """
    Decorator applying exponential backoff with jitter.

    Args:
        max_attempts: Total number of attempts (including first).
        min_wait:     Minimum wait seconds between retries.
        max_wait:     Cap on any single wait, including retry_after hints.
        jitter:       Maximum random seconds added to backoff waits.
    """
    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            backoff = wait_exponential(min=min_wait, max=max_wait) + wait_random(0, jitter)
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(max_attempts),
                wait=wait_retry_after(backoff, max_wait),
                retry=retry_if_exception(is_retryable),
                reraise=True,
            ):
                with attempt:
                    return await fn(*args, **kwargs)

        return wrapper
    return decorator


__sdk_export__ = {
    "surface": "service",
    "exports": ["retry_policy", "is_retryable"],
    "description": "Caller-side retry with retry_after-aware backoff",
    "tier": "tier1_runtime",
    "module": "retry",
}
