"""
botapi_sdk.tier0_core.logging
──────────────────────────────
Structured logs for SDK users. The dispatcher only emits events when the
caller opts in (``log_requests``); every event passes the token redaction
processor before it is rendered.

Minimal stack: structlog (stdout JSON or console)
Configure via: BOTAPI_LOG_LEVEL, BOTAPI_LOG_FORMAT=json|console
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from botapi_sdk.tier0_core.config import get_config
from botapi_sdk.tier0_core.redact import structlog_redact_processor

SDK_LOGGER = "botapi_sdk"


# ── Configuration ─────────────────────────────────────────────────────────────

def _renderer(log_format: str) -> Any:
    if log_format == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def _configure_structlog() -> None:
    cfg = get_config()
    level = getattr(logging, cfg.log_level.upper(), logging.INFO)

    pre_chain: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog_redact_processor,
    ]

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name("botapi_sdk.structlog")
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(cfg.log_format),
        ],
    ))

    # reconfiguring replaces the handler instead of stacking a second one
    sdk_logger = logging.getLogger(SDK_LOGGER)
    for existing in [h for h in sdk_logger.handlers if h.get_name() == handler.get_name()]:
        sdk_logger.removeHandler(existing)
    sdk_logger.addHandler(handler)
    sdk_logger.setLevel(level)


# ── Public API ────────────────────────────────────────────────────────────────

_configured = False


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Return a structured logger bound to the given name.

    Usage:
        log = get_logger(__name__)
        log.info("bot.started", username="example_bot")
    """
    global _configured
    if not _configured:
        _configure_structlog()
        _configured = True
    return structlog.get_logger(name or SDK_LOGGER)


def request_logger(endpoint: str, http_method: str) -> structlog.stdlib.BoundLogger:
    """Logger for one dispatch, pre-bound with the remote method and verb."""
    return get_logger("botapi_sdk.dispatch").bind(endpoint=endpoint, http_method=http_method)


def bind_context(**kwargs: Any) -> None:
    """Bind fields (e.g. ``bot="news_bot"``) to every event in this task."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


__sdk_export__ = {
    "surface": "both",
    "exports": ["get_logger", "request_logger", "bind_context", "clear_context"],
    "description": "structlog setup with token redaction",
    "tier": "tier0_core",
    "module": "logging",
}
