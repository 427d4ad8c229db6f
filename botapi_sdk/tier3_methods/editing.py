"""
botapi_sdk.tier3_methods.editing
─────────────────────────────────
Edit-style commands. Each targets either an ordinary message
(``chat_id`` + ``message_id``) or an inline message (``inline_message_id``);
the result is an ``EditResult``:

    EditedMessage(message=...)   ordinary message, remote returned it
    EditedInline()               inline message, remote returned ``true``
"""
from __future__ import annotations

from typing import Optional

from botapi_sdk.tier1_runtime.validate import (
    Choice,
    Length,
    MutuallyExclusive,
    OneOfGroups,
    Range,
    Required,
)
from botapi_sdk.tier3_methods.base import Command
from botapi_sdk.tier3_methods.objects import (
    PARSE_MODES,
    ChatIdField,
    EditResult,
    InlineKeyboardMarkup,
    LinkPreviewOptions,
    MessageEntity,
)

_TARGET = OneOfGroups(("inline_message_id",), ("chat_id", "message_id"))


class _EditCommand(Command):
    __result__ = EditResult

    business_connection_id: Optional[str] = None
    chat_id: Optional[ChatIdField] = None
    message_id: Optional[int] = None
    inline_message_id: Optional[str] = None
    reply_markup: Optional[InlineKeyboardMarkup] = None

    __rules__ = (_TARGET, Range("message_id", min=1))


class EditMessageText(_EditCommand):
    __endpoint__ = "editMessageText"

    text: Optional[str] = None
    parse_mode: Optional[str] = None
    entities: Optional[list[MessageEntity]] = None
    link_preview_options: Optional[LinkPreviewOptions] = None

    __rules__ = _EditCommand.__rules__ + (
        Required("text"),
        Length("text", 1, 4096),
        Choice("parse_mode", PARSE_MODES),
        MutuallyExclusive("parse_mode", "entities"),
    )


class EditMessageCaption(_EditCommand):
    """Omitting ``caption`` removes the caption."""
    __endpoint__ = "editMessageCaption"

    caption: Optional[str] = None
    parse_mode: Optional[str] = None
    caption_entities: Optional[list[MessageEntity]] = None
    show_caption_above_media: Optional[bool] = None

    __rules__ = _EditCommand.__rules__ + (
        Length("caption", 0, 1024),
        Choice("parse_mode", PARSE_MODES),
        MutuallyExclusive("parse_mode", "caption_entities"),
    )


class EditMessageReplyMarkup(_EditCommand):
    """Omitting ``reply_markup`` removes the inline keyboard."""
    __endpoint__ = "editMessageReplyMarkup"


__sdk_export__ = {
    "surface": "both",
    "exports": ["EditMessageText", "EditMessageCaption", "EditMessageReplyMarkup"],
    "commands": ["EditMessageText", "EditMessageCaption", "EditMessageReplyMarkup"],
    "description": "Edit-style commands returning EditResult",
    "tier": "tier3_methods",
    "module": "editing",
}
