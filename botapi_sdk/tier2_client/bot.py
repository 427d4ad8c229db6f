"""
botapi_sdk.tier2_client.bot
────────────────────────────
Client facade binding a token, URL template and pooled httpx client to the
stateless dispatcher.

Usage::

    async with Bot("123456:ABC-DEF") as bot:
        me = await bot.get_me()
        result = await bot.dispatch(SendMessage(chat_id=42, text="hi"))
        if not result.ok:
            ...
        await bot.call("leaveChat", chat_id="@somegroup")
"""
from __future__ import annotations

import asyncio
from typing import Any

import httpx
from pydantic import SecretStr

from botapi_sdk.tier0_core.config import BotApiConfig, get_config
from botapi_sdk.tier0_core.errors import ConfigurationError
from botapi_sdk.tier0_core.http import is_valid_url_template
from botapi_sdk.tier0_core.secrets import TokenProvider, resolve_provider
from botapi_sdk.tier1_runtime.validate import validate_input
from botapi_sdk.tier2_client.dispatch import DispatchResult, Dispatchable, Failure, dispatch


class Bot:
    """
    Async bot API client. Owns an ``httpx.AsyncClient`` unless one is passed
    in; use it as an async context manager or call ``aclose()``.
    """

    def __init__(
        self,
        token: str | SecretStr | None = None,
        *,
        config: BotApiConfig | None = None,
        client: httpx.AsyncClient | None = None,
        token_provider: TokenProvider | None = None,
        url_template: str | None = None,
        timeout: float | None = None,
        log_requests: bool | None = None,
    ) -> None:
        cfg = config or get_config()
        self._tokens = resolve_provider(token, token_provider, cfg)
        self.url_template = url_template or cfg.api_url_template
        if not is_valid_url_template(self.url_template):
            raise ConfigurationError(
                "invalid_url_template",
                "The API URL template must contain {token} and {endpoint}.",
                f"Invalid URL template: {self.url_template!r}",
            )
        self.timeout = timeout if timeout is not None else cfg.timeout
        # a supplied client keeps its own timeout unless one is given here
        self._timeout_override = timeout
        self.log_requests = cfg.log_requests if log_requests is None else log_requests
        self._client = client
        self._owns_client = client is None

    def __repr__(self) -> str:
        return f"Bot(url_template={self.url_template!r})"

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "Bot":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ── Dispatch ──────────────────────────────────────────────────────────────

    async def dispatch(
        self,
        command: Dispatchable,
        result_type: Any = None,
        *,
        deadline: float | None = None,
        cancel: asyncio.Event | None = None,
        timeout: float | httpx.Timeout | None = None,
    ) -> DispatchResult[Any]:
        """
        Run *command*; failures are returned, never raised. *timeout*
        replaces the transport timeout for this call only.
        """
        try:
            token = self._tokens.get_token()
        except ConfigurationError as exc:
            return Failure(exc)
        return await dispatch(
            command,
            result_type,
            token=token,
            url_template=self.url_template,
            client=self._get_client(),
            timeout=timeout if timeout is not None else self._timeout_override,
            deadline=deadline,
            cancel=cancel,
            log_requests=self.log_requests,
        )

    async def execute(self, command: Dispatchable, result_type: Any = None, **options: Any) -> Any:
        """Run *command* and return its result, raising the BotApiError on failure."""
        result = await self.dispatch(command, result_type, **options)
        return result.unwrap()

    async def call(self, endpoint: str, /, **params: Any) -> Any:
        """
        Run a command by its remote method name.

        Raises ValidationFailed for unknown parameters or ill-typed values,
        ConfigurationError for an unknown endpoint.
        """
        from botapi_sdk._registry import get_command

        command_cls = get_command(endpoint)
        if command_cls is None:
            raise ConfigurationError(
                "unknown_endpoint",
                f"Unknown bot API method: {endpoint!r}.",
            )
        return await self.execute(validate_input(command_cls, params))

    # ── Shortcuts ─────────────────────────────────────────────────────────────

    async def get_me(self) -> Any:
        from botapi_sdk.tier3_methods.updates import GetMe

        return await self.execute(GetMe())

    async def send_message(self, chat_id: int | str, text: str, **kwargs: Any) -> Any:
        from botapi_sdk.tier3_methods.messages import SendMessage

        return await self.execute(SendMessage(chat_id=chat_id, text=text, **kwargs))


__sdk_export__ = {
    "surface": "both",
    "exports": ["Bot"],
    "description": "Bot API client facade over the dispatcher",
    "tier": "tier2_client",
    "module": "bot",
}
