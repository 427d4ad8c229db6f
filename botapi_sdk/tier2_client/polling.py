"""
botapi_sdk.tier2_client.polling
────────────────────────────────
Long polling over getUpdates. Each cycle fetches a batch, moves the offset
past every update it hands to the handler, and repeats until ``stop()`` is
called. Failed fetches are logged and retried after a pause (the remote's
``retry_after`` when it sends one); a missing token or an invalid request
ends the loop with the error.

Usage:
    async def echo(update: Update) -> None:
        if update.message and update.message.text:
            await bot.send_message(update.message.chat.id, update.message.text)

    async with Bot(token) as bot:
        poller = LongPoller(bot, echo, allowed_updates=["message"])
        await poller.run()
"""
from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING

import httpx

from botapi_sdk.tier0_core.errors import (
    BotApiError,
    ConfigurationError,
    RateLimitError,
    RequestCancelled,
    ValidationFailed,
)
from botapi_sdk.tier0_core.logging import get_logger
from botapi_sdk.tier3_methods.objects import Update
from botapi_sdk.tier3_methods.updates import GetUpdates

if TYPE_CHECKING:
    from botapi_sdk.tier2_client.bot import Bot

UpdateHandler = Callable[[Update], Awaitable[None]]
Middleware = Callable[[UpdateHandler], UpdateHandler]

# transport headroom on top of the server-side hold time
_GRACE_SECONDS = 10.0


class LongPoller:
    """
    Drives ``getUpdates`` through ``Bot.dispatch`` and feeds each update to
    *handler*, wrapped by any middleware added with ``use()``.

    Args:
        bot:             the Bot whose token and client are used.
        handler:         ``async def handler(update)``; an exception it
                         raises is logged and the next update is handled.
        limit:           updates per request, 1-100.
        timeout:         seconds the remote may hold a request open.
        allowed_updates: update kinds to receive; None keeps the remote's
                         current setting.
        offset:          first update id to ask for.
        error_backoff:   pause after a failed fetch, in seconds.
    """

    def __init__(
        self,
        bot: "Bot",
        handler: UpdateHandler,
        *,
        limit: int = 100,
        timeout: int = 30,
        allowed_updates: Iterable[str] | None = None,
        offset: int | None = None,
        error_backoff: float = 5.0,
    ) -> None:
        if handler is None:
            raise ConfigurationError("handler_missing", "An update handler is required for polling.")
        self._bot = bot
        self._handler = handler
        self._middleware: list[Middleware] = []
        self.limit = limit
        self.timeout = timeout
        self.allowed_updates = list(allowed_updates) if allowed_updates is not None else None
        self.offset = offset
        self.error_backoff = error_backoff
        self._stop = asyncio.Event()
        self._running = False
        self._log = get_logger(__name__)

        outcome = self._request().validate()
        if not outcome.valid:
            raise ValidationFailed(outcome.violations, endpoint=GetUpdates.__endpoint__)

    # ── Configuration ─────────────────────────────────────────────────────────

    def use(self, *middleware: Middleware) -> None:
        """Add middleware; the first one added is the outermost."""
        self._middleware.extend(middleware)

    @property
    def running(self) -> bool:
        return self._running

    def _request(self) -> GetUpdates:
        return GetUpdates(
            offset=self.offset,
            limit=self.limit,
            timeout=self.timeout,
            allowed_updates=self.allowed_updates,
        )

    def _chain(self) -> UpdateHandler:
        handler = self._handler
        for wrap in reversed(self._middleware):
            handler = wrap(handler)
        return handler

    # ── Loop ──────────────────────────────────────────────────────────────────

    async def poll_once(self) -> list[Update]:
        """
        Fetch one batch and handle it. Returns the updates that were handed
        to the handler; an empty list after a failed fetch.
        """
        result = await self._bot.dispatch(
            self._request(),
            cancel=self._stop,
            timeout=httpx.Timeout(_GRACE_SECONDS, read=self.timeout + _GRACE_SECONDS),
        )
        if not result.ok:
            await self._failed(result.error)
            return []

        handler = self._chain()
        handled: list[Update] = []
        for update in result.value:
            if self._stop.is_set():
                break
            # advancing first means a crashing handler doesn't get the same update forever
            self.offset = update.update_id + 1
            handled.append(update)
            try:
                await handler(update)
            except Exception:
                self._log.exception("botapi.polling.handler_failed", update_id=update.update_id)
        return handled

    async def run(self) -> None:
        """Poll until ``stop()`` is called. Cancelling the task also ends it."""
        if self._running:
            raise ConfigurationError("already_polling", "This poller is already running.")
        self._running = True
        self._stop.clear()
        self._log.info("botapi.polling.started", offset=self.offset, limit=self.limit)
        try:
            while not self._stop.is_set():
                await self.poll_once()
        finally:
            self._running = False
            self._log.info("botapi.polling.stopped", offset=self.offset)

    def stop(self) -> None:
        """Ask a running loop to finish; an in-flight request is abandoned."""
        self._stop.set()

    async def _failed(self, error: BotApiError) -> None:
        if isinstance(error, RequestCancelled) and self._stop.is_set():
            return
        if isinstance(error, (ConfigurationError, ValidationFailed)):
            raise error
        wait = self.error_backoff
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            wait = float(error.retry_after)
        self._log.warning("botapi.polling.fetch_failed", code=error.code, detail=error.detail, retry_in=wait)
        await self._pause(wait)

    async def _pause(self, seconds: float) -> None:
        if seconds <= 0:
            return
        try:
            await asyncio.wait_for(self._stop.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            pass


__sdk_export__ = {
    "surface": "both",
    "exports": ["LongPoller", "UpdateHandler", "Middleware"],
    "description": "getUpdates long-polling loop with middleware",
    "tier": "tier2_client",
    "module": "polling",
}
