"""
botapi_sdk test configuration.

No test touches the network: every HTTP exchange goes through an
``httpx.MockTransport`` spy that records the requests it receives.
"""
from __future__ import annotations

import os
from typing import Any, Callable

import httpx
import pytest

# ── Test environment ──────────────────────────────────────────────────────
# Clear these before any botapi_sdk module reads configuration.

for _var in ("BOTAPI_TOKEN", "BOTAPI_URL_TEMPLATE", "BOTAPI_TIMEOUT",
             "BOTAPI_LOG_LEVEL", "BOTAPI_LOG_FORMAT", "BOTAPI_LOG_REQUESTS"):
    os.environ.pop(_var, None)

TOKEN = "123456:ABC-DEF1234ghIkl-zyx57W2v1u123ew11"


# ── Fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def reset_config():
    """Each test sees a freshly loaded config."""
    from botapi_sdk.tier0_core.config import _reset_config

    _reset_config()
    yield
    _reset_config()


class TransportSpy:
    """MockTransport handler that records requests and replies via *responder*."""

    def __init__(self, responder: Callable[[httpx.Request], Any]) -> None:
        self.responder = responder
        self.requests: list[httpx.Request] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        await request.aread()
        self.requests.append(request)
        response = self.responder(request)
        if not isinstance(response, httpx.Response):
            response = await response
        return response


@pytest.fixture
def token() -> str:
    return TOKEN


@pytest.fixture
def spy_client():
    """Factory: ``spy, client = spy_client(responder)``."""
    def make(responder: Callable[[httpx.Request], Any]) -> tuple[TransportSpy, httpx.AsyncClient]:
        spy = TransportSpy(responder)
        client = httpx.AsyncClient(transport=httpx.MockTransport(spy))
        return spy, client

    return make
