"""
botapi_sdk._registry
─────────────────────
Internal module registry: the single source of truth for which modules
exist and which commands each one ships.

Adding a command:
  1. Subclass ``Command`` in the right tier3_methods module
  2. List the class name in the module's ``__sdk_export__["commands"]``

Adding a command module:
  3. Add one tuple to TIER_MODULES below

After that the command is resolvable by its remote method name through
``get_command()`` (and therefore ``Bot.call``).
"""
from __future__ import annotations

import importlib
from functools import lru_cache
from typing import Any

# ---------------------------------------------------------------------------
# Ordered list of (tier_path, module_name) for all implemented modules.
# ---------------------------------------------------------------------------
TIER_MODULES: list[tuple[str, str]] = [
    # tier0_core: foundational layer
    ("tier0_core", "errors"),
    ("tier0_core", "http"),
    ("tier0_core", "config"),
    ("tier0_core", "logging"),
    ("tier0_core", "redact"),
    ("tier0_core", "secrets"),
    # tier1_runtime: encoding and validation
    ("tier1_runtime", "validate"),
    ("tier1_runtime", "files"),
    ("tier1_runtime", "serialize"),
    ("tier1_runtime", "retry"),
    # tier2_client: dispatch
    ("tier2_client", "dispatch"),
    ("tier2_client", "bot"),
    ("tier2_client", "polling"),
    # tier3_methods: command catalogue
    ("tier3_methods", "base"),
    ("tier3_methods", "objects"),
    ("tier3_methods", "updates"),
    ("tier3_methods", "messages"),
    ("tier3_methods", "media"),
    ("tier3_methods", "chats"),
    ("tier3_methods", "files"),
    ("tier3_methods", "editing"),
]


@lru_cache(maxsize=1)
def collect_commands() -> dict[str, Any]:
    """
    Discover every command class registered across tier modules.

    Iterates ``TIER_MODULES``, imports each one, reads its
    ``__sdk_export__["commands"]`` list and keys each class by its
    remote method name.

    Returns:
        ``{"sendMessage": SendMessage, ...}`` in registration order.
    """
    commands: dict[str, Any] = {}

    for tier_path, module_name in TIER_MODULES:
        mod = importlib.import_module(f"botapi_sdk.{tier_path}.{module_name}")
        export_meta: dict[str, Any] | None = getattr(mod, "__sdk_export__", None)
        if not export_meta or "commands" not in export_meta:
            continue

        for class_name in export_meta["commands"]:
            cls = getattr(mod, class_name)
            endpoint = cls.__endpoint__
            if endpoint in commands:
                raise RuntimeError(
                    f"Duplicate endpoint {endpoint!r}: "
                    f"{commands[endpoint].__name__} and {cls.__name__}"
                )
            commands[endpoint] = cls

    return commands


def get_command(endpoint: str) -> Any | None:
    """Command class for a remote method name, or None if unknown."""
    return collect_commands().get(endpoint)
