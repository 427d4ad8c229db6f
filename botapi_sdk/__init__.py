"""
botapi_sdk
──────────
Stable top-level exports. Import from here, not from sub-modules directly.
Every name exported here is part of the public API and subject to semver.
"""
from botapi_sdk.tier0_core.logging import get_logger
from botapi_sdk.tier0_core.errors import (
    BotApiError,
    ValidationFailed,
    ConfigurationError,
    TransportFailure,
    RequestCancelled,
    DecodeFailure,
    ApiRejection,
    RateLimitError,
    ChatMigratedError,
)
from botapi_sdk.tier0_core.config import get_config, BotApiConfig
from botapi_sdk.tier0_core.http import ResponseEnvelope, ResponseParameters, DEFAULT_URL_TEMPLATE
from botapi_sdk.tier0_core.secrets import (
    TokenProvider,
    StaticTokenProvider,
    EnvTokenProvider,
    ConfigTokenProvider,
)

from botapi_sdk.tier1_runtime.validate import Violation, ValidationOutcome, validate_input
from botapi_sdk.tier1_runtime.files import LocalFile, RemoteFile, InputFile
from botapi_sdk.tier1_runtime.serialize import JsonBody, MultipartBody, serialize, deserialize
from botapi_sdk.tier1_runtime.retry import retry_policy

from botapi_sdk.tier2_client.dispatch import dispatch, Dispatchable, Success, Failure
from botapi_sdk.tier2_client.bot import Bot
from botapi_sdk.tier2_client.polling import LongPoller

from botapi_sdk.tier3_methods.base import Command
from botapi_sdk.tier3_methods.objects import (
    ChatId,
    EditResult,
    EditedMessage,
    EditedInline,
    Message,
    User,
)
from botapi_sdk.tier3_methods.updates import GetMe, GetUpdates, SetWebhook, DeleteWebhook, GetWebhookInfo
from botapi_sdk.tier3_methods.messages import (
    SendMessage,
    ForwardMessage,
    ForwardMessages,
    CopyMessage,
    DeleteMessage,
    SendChatAction,
)
from botapi_sdk.tier3_methods.media import SendPhoto, SendDocument
from botapi_sdk.tier3_methods.chats import (
    GetChat,
    GetChatAdministrators,
    GetChatMemberCount,
    GetChatMember,
    LeaveChat,
    SetChatTitle,
    SetChatDescription,
)
from botapi_sdk.tier3_methods.files import GetFile, GetUserProfilePhotos
from botapi_sdk.tier3_methods.editing import EditMessageText, EditMessageCaption, EditMessageReplyMarkup

__version__ = "0.1.0"
__all__ = [
    # logging
    "get_logger",
    # errors
    "BotApiError", "ValidationFailed", "ConfigurationError",
    "TransportFailure", "RequestCancelled", "DecodeFailure",
    "ApiRejection", "RateLimitError", "ChatMigratedError",
    # config
    "get_config", "BotApiConfig",
    # envelope
    "ResponseEnvelope", "ResponseParameters", "DEFAULT_URL_TEMPLATE",
    # secrets
    "TokenProvider", "StaticTokenProvider", "EnvTokenProvider", "ConfigTokenProvider",
    # validate
    "Violation", "ValidationOutcome", "validate_input",
    # files
    "LocalFile", "RemoteFile", "InputFile",
    # serialize
    "JsonBody", "MultipartBody", "serialize", "deserialize",
    # retry
    "retry_policy",
    # dispatch
    "dispatch", "Dispatchable", "Success", "Failure", "Bot", "LongPoller",
    # commands
    "Command", "ChatId", "EditResult", "EditedMessage", "EditedInline", "Message", "User",
    "GetMe", "GetUpdates", "SetWebhook", "DeleteWebhook", "GetWebhookInfo",
    "SendMessage", "ForwardMessage", "ForwardMessages", "CopyMessage",
    "DeleteMessage", "SendChatAction",
    "SendPhoto", "SendDocument",
    "GetChat", "GetChatAdministrators", "GetChatMemberCount", "GetChatMember",
    "LeaveChat", "SetChatTitle", "SetChatDescription",
    "GetFile", "GetUserProfilePhotos",
    "EditMessageText", "EditMessageCaption", "EditMessageReplyMarkup",
]
