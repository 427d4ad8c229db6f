"""
botapi_sdk.tier3_methods.media
───────────────────────────────
Photo and document uploads. Any attachment slot holding a LocalFile turns
the request into multipart/form-data; file ids and URLs travel as plain
text fields.

Usage:
    await SendDocument(
        chat_id=42,
        document="BQACAgIAAxkBAAIC",                          # remote reference
        thumbnail=LocalFile.from_path("thumb.jpg"),          # uploaded
    ).execute(bot)
"""
from __future__ import annotations

from typing import Optional

from botapi_sdk.tier1_runtime.files import InputFile
from botapi_sdk.tier1_runtime.validate import Choice, Length, MutuallyExclusive, Required
from botapi_sdk.tier3_methods.base import Command
from botapi_sdk.tier3_methods.objects import (
    PARSE_MODES,
    ChatIdField,
    InlineKeyboardMarkup,
    Message,
    MessageEntity,
    ReplyParameters,
)

_CAPTION_RULES = (
    Length("caption", 0, 1024),
    Choice("parse_mode", PARSE_MODES),
    MutuallyExclusive("parse_mode", "caption_entities"),
)


class SendPhoto(Command):
    __endpoint__ = "sendPhoto"
    __result__ = Message

    chat_id: Optional[ChatIdField] = None
    photo: Optional[InputFile] = None
    business_connection_id: Optional[str] = None
    message_thread_id: Optional[int] = None
    caption: Optional[str] = None
    parse_mode: Optional[str] = None
    caption_entities: Optional[list[MessageEntity]] = None
    show_caption_above_media: Optional[bool] = None
    has_spoiler: Optional[bool] = None
    disable_notification: Optional[bool] = None
    protect_content: Optional[bool] = None
    reply_parameters: Optional[ReplyParameters] = None
    reply_markup: Optional[InlineKeyboardMarkup] = None

    __rules__ = (Required("chat_id", "photo"),) + _CAPTION_RULES


class SendDocument(Command):
    __endpoint__ = "sendDocument"
    __result__ = Message

    chat_id: Optional[ChatIdField] = None
    document: Optional[InputFile] = None
    business_connection_id: Optional[str] = None
    message_thread_id: Optional[int] = None
    thumbnail: Optional[InputFile] = None
    caption: Optional[str] = None
    parse_mode: Optional[str] = None
    caption_entities: Optional[list[MessageEntity]] = None
    disable_content_type_detection: Optional[bool] = None
    disable_notification: Optional[bool] = None
    protect_content: Optional[bool] = None
    reply_parameters: Optional[ReplyParameters] = None
    reply_markup: Optional[InlineKeyboardMarkup] = None

    __rules__ = (Required("chat_id", "document"),) + _CAPTION_RULES


__sdk_export__ = {
    "surface": "both",
    "exports": ["SendPhoto", "SendDocument"],
    "commands": ["SendPhoto", "SendDocument"],
    "description": "Photo and document uploads",
    "tier": "tier3_methods",
    "module": "media",
}
