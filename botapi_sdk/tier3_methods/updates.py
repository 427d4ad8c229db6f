"""
botapi_sdk.tier3_methods.updates
─────────────────────────────────
Bot identity, update fetching and webhook registration. Each command is a
single request; tier2_client.polling runs the getUpdates loop, and serving
a webhook is left to the caller.
"""
from __future__ import annotations

from typing import Optional

from botapi_sdk.tier0_core.http import HTTP
from botapi_sdk.tier1_runtime.files import InputFile
from botapi_sdk.tier1_runtime.validate import Length, Pattern, Range, Required, Subset
from botapi_sdk.tier3_methods.base import Command
from botapi_sdk.tier3_methods.objects import UPDATE_KINDS, Update, User, WebhookInfo


class GetMe(Command):
    """Basic information about the bot itself."""
    __endpoint__ = "getMe"
    __http_method__ = HTTP.GET
    __result__ = User


class GetUpdates(Command):
    __endpoint__ = "getUpdates"
    __http_method__ = HTTP.GET
    __result__ = list[Update]

    offset: Optional[int] = None
    limit: Optional[int] = None
    timeout: Optional[int] = None
    allowed_updates: Optional[list[str]] = None

    __rules__ = (
        Range("limit", 1, 100),
        Range("timeout", min=0),
        Subset("allowed_updates", UPDATE_KINDS),
    )


class SetWebhook(Command):
    """
    Register an HTTPS endpoint for incoming updates. Uploading a
    self-signed ``certificate`` as a LocalFile switches the body to
    multipart.
    """
    __endpoint__ = "setWebhook"
    __result__ = bool

    url: Optional[str] = None
    certificate: Optional[InputFile] = None
    ip_address: Optional[str] = None
    max_connections: Optional[int] = None
    allowed_updates: Optional[list[str]] = None
    drop_pending_updates: Optional[bool] = None
    secret_token: Optional[str] = None

    __rules__ = (
        Required("url"),
        Range("max_connections", 1, 100),
        Subset("allowed_updates", UPDATE_KINDS),
        Length("secret_token", 1, 256),
        Pattern("secret_token", r"[A-Za-z0-9_-]+", "made of A-Z, a-z, 0-9, _ and - only"),
    )


class DeleteWebhook(Command):
    __endpoint__ = "deleteWebhook"
    __result__ = bool

    drop_pending_updates: Optional[bool] = None


class GetWebhookInfo(Command):
    __endpoint__ = "getWebhookInfo"
    __http_method__ = HTTP.GET
    __result__ = WebhookInfo


__sdk_export__ = {
    "surface": "both",
    "exports": ["GetMe", "GetUpdates", "SetWebhook", "DeleteWebhook", "GetWebhookInfo"],
    "commands": ["GetMe", "GetUpdates", "SetWebhook", "DeleteWebhook", "GetWebhookInfo"],
    "description": "Bot identity, update fetching and webhook registration",
    "tier": "tier3_methods",
    "module": "updates",
}
