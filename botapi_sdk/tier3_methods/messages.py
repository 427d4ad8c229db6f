"""
botapi_sdk.tier3_methods.messages
──────────────────────────────────
Sending, forwarding, copying and deleting text messages.

Usage:
    msg = await SendMessage(chat_id="@channel", text="hello").execute(bot)
"""
from __future__ import annotations

from typing import Optional

from botapi_sdk.tier1_runtime.validate import (
    Ascending,
    Choice,
    Count,
    Length,
    MutuallyExclusive,
    Range,
    Required,
)
from botapi_sdk.tier3_methods.base import Command
from botapi_sdk.tier3_methods.objects import (
    PARSE_MODES,
    ChatIdField,
    InlineKeyboardMarkup,
    LinkPreviewOptions,
    Message,
    MessageEntity,
    MessageId,
    ReplyParameters,
)

CHAT_ACTIONS = (
    "typing",
    "upload_photo",
    "record_video",
    "upload_video",
    "record_voice",
    "upload_voice",
    "upload_document",
    "choose_sticker",
    "find_location",
    "record_video_note",
    "upload_video_note",
)


class SendMessage(Command):
    __endpoint__ = "sendMessage"
    __result__ = Message

    chat_id: Optional[ChatIdField] = None
    text: Optional[str] = None
    business_connection_id: Optional[str] = None
    message_thread_id: Optional[int] = None
    parse_mode: Optional[str] = None
    entities: Optional[list[MessageEntity]] = None
    link_preview_options: Optional[LinkPreviewOptions] = None
    disable_notification: Optional[bool] = None
    protect_content: Optional[bool] = None
    allow_paid_broadcast: Optional[bool] = None
    message_effect_id: Optional[str] = None
    reply_parameters: Optional[ReplyParameters] = None
    reply_markup: Optional[InlineKeyboardMarkup] = None

    __rules__ = (
        Required("chat_id", "text"),
        Length("text", 1, 4096),
        Choice("parse_mode", PARSE_MODES),
        MutuallyExclusive("parse_mode", "entities"),
    )


class ForwardMessage(Command):
    __endpoint__ = "forwardMessage"
    __result__ = Message

    chat_id: Optional[ChatIdField] = None
    from_chat_id: Optional[ChatIdField] = None
    message_id: Optional[int] = None
    message_thread_id: Optional[int] = None
    disable_notification: Optional[bool] = None
    protect_content: Optional[bool] = None

    __rules__ = (
        Required("chat_id", "from_chat_id", "message_id"),
        Range("message_id", min=1),
    )


class ForwardMessages(Command):
    """Forward several messages at once; album grouping is preserved."""
    __endpoint__ = "forwardMessages"
    __result__ = list[MessageId]

    chat_id: Optional[ChatIdField] = None
    from_chat_id: Optional[ChatIdField] = None
    message_ids: Optional[list[int]] = None
    message_thread_id: Optional[int] = None
    disable_notification: Optional[bool] = None
    protect_content: Optional[bool] = None

    __rules__ = (
        Required("chat_id", "from_chat_id", "message_ids"),
        Count("message_ids", 1, 100),
        Ascending("message_ids"),
    )


class CopyMessage(Command):
    __endpoint__ = "copyMessage"
    __result__ = MessageId

    chat_id: Optional[ChatIdField] = None
    from_chat_id: Optional[ChatIdField] = None
    message_id: Optional[int] = None
    message_thread_id: Optional[int] = None
    caption: Optional[str] = None
    parse_mode: Optional[str] = None
    caption_entities: Optional[list[MessageEntity]] = None
    show_caption_above_media: Optional[bool] = None
    disable_notification: Optional[bool] = None
    protect_content: Optional[bool] = None
    reply_parameters: Optional[ReplyParameters] = None
    reply_markup: Optional[InlineKeyboardMarkup] = None

    __rules__ = (
        Required("chat_id", "from_chat_id", "message_id"),
        Range("message_id", min=1),
        Length("caption", 0, 1024),
        Choice("parse_mode", PARSE_MODES),
        MutuallyExclusive("parse_mode", "caption_entities"),
    )


class DeleteMessage(Command):
    __endpoint__ = "deleteMessage"
    __result__ = bool

    chat_id: Optional[ChatIdField] = None
    message_id: Optional[int] = None

    __rules__ = (
        Required("chat_id", "message_id"),
        Range("message_id", min=1),
    )


class SendChatAction(Command):
    __endpoint__ = "sendChatAction"
    __result__ = bool

    chat_id: Optional[ChatIdField] = None
    action: Optional[str] = None
    business_connection_id: Optional[str] = None
    message_thread_id: Optional[int] = None

    __rules__ = (
        Required("chat_id", "action"),
        Choice("action", CHAT_ACTIONS),
    )


__sdk_export__ = {
    "surface": "both",
    "exports": [
        "SendMessage", "ForwardMessage", "ForwardMessages",
        "CopyMessage", "DeleteMessage", "SendChatAction",
    ],
    "commands": [
        "SendMessage", "ForwardMessage", "ForwardMessages",
        "CopyMessage", "DeleteMessage", "SendChatAction",
    ],
    "description": "Text message commands",
    "tier": "tier3_methods",
    "module": "messages",
}
