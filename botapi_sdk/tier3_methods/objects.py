"""
botapi_sdk.tier3_methods.objects
─────────────────────────────────
Value types shared by commands: the ChatId and EditResult tagged variants,
request-side option objects (validated by rule tables), and the result
objects decoded from successful envelopes. Result objects keep unknown
fields so newer API versions decode without changes here.
"""
from __future__ import annotations

import re
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_serializer

from botapi_sdk.tier1_runtime.validate import (
    Length,
    MutuallyExclusive,
    Nested,
    OneOfGroups,
    Range,
    Required,
    RuleChecked,
    ValidationOutcome,
    Violation,
)

PARSE_MODES = ("HTML", "Markdown", "MarkdownV2")

UPDATE_KINDS = (
    "message",
    "edited_message",
    "channel_post",
    "edited_channel_post",
    "business_connection",
    "business_message",
    "edited_business_message",
    "deleted_business_messages",
    "message_reaction",
    "message_reaction_count",
    "inline_query",
    "chosen_inline_result",
    "callback_query",
    "shipping_query",
    "pre_checkout_query",
    "purchased_paid_media",
    "poll",
    "poll_answer",
    "my_chat_member",
    "chat_member",
    "chat_join_request",
    "chat_boost",
    "removed_chat_boost",
)


# ── ChatId ────────────────────────────────────────────────────────────────────

_NUMERIC = re.compile(r"-?\d+")


class ChatId(RuleChecked, BaseModel):
    """
    Target chat: either a numeric id (negative for groups and channels) or a
    textual handle such as ``@channelusername``. Serializes to the bare value.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["numeric", "handle"]
    value: Union[int, str]

    @classmethod
    def numeric(cls, value: int) -> "ChatId":
        return cls(kind="numeric", value=value)

    @classmethod
    def handle(cls, value: str) -> "ChatId":
        return cls(kind="handle", value=value)

    @classmethod
    def coerce(cls, value: Any) -> Any:
        if isinstance(value, ChatId):
            return value
        if isinstance(value, bool):
            raise ValueError("chat id must be an integer or a string")
        if isinstance(value, int):
            return cls.numeric(value)
        if isinstance(value, str):
            if _NUMERIC.fullmatch(value.strip()):
                return cls.numeric(int(value))
            return cls.handle(value)
        return value

    def validate(self) -> ValidationOutcome:  # type: ignore[override]
        if self.kind == "numeric":
            if self.value == 0:
                return ValidationOutcome.of([Violation("", "chat id can't be zero")])
            return ValidationOutcome()
        text = str(self.value).strip()
        if not text or text == "@":
            return ValidationOutcome.of([Violation("", "chat handle can't be empty")])
        if " " in text:
            return ValidationOutcome.of([Violation("", "chat handle can't contain spaces")])
        return ValidationOutcome()

    @model_serializer
    def _as_value(self) -> Union[int, str]:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


ChatIdField = Annotated[ChatId, BeforeValidator(ChatId.coerce)]


# ── Request options and their building blocks ────────────────────────────────

class ApiObject(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class User(ApiObject):
    id: int
    is_bot: bool
    first_name: str
    last_name: Optional[str] = None
    username: Optional[str] = None
    language_code: Optional[str] = None
    can_join_groups: Optional[bool] = None
    can_read_all_group_messages: Optional[bool] = None
    supports_inline_queries: Optional[bool] = None


class MessageEntity(RuleChecked, ApiObject):
    type: str
    offset: int
    length: int
    url: Optional[str] = None
    user: Optional[User] = None
    language: Optional[str] = None
    custom_emoji_id: Optional[str] = None

    __rules__ = (
        Required("type"),
        Range("offset", min=0),
        Range("length", min=1),
    )


class LinkPreviewOptions(RuleChecked, ApiObject):
    is_disabled: Optional[bool] = None
    url: Optional[str] = None
    prefer_small_media: Optional[bool] = None
    prefer_large_media: Optional[bool] = None
    show_above_text: Optional[bool] = None

    __rules__ = (MutuallyExclusive("prefer_small_media", "prefer_large_media"),)


class ReplyParameters(RuleChecked, ApiObject):
    message_id: int
    chat_id: Optional[ChatIdField] = None
    allow_sending_without_reply: Optional[bool] = None
    quote: Optional[str] = None
    quote_parse_mode: Optional[str] = None
    quote_entities: Optional[list[MessageEntity]] = None
    quote_position: Optional[int] = None

    __rules__ = (
        Range("message_id", min=1),
        Length("quote", 0, 1024),
        MutuallyExclusive("quote_parse_mode", "quote_entities"),
        Nested("chat_id", "quote_entities"),
    )


class WebAppInfo(ApiObject):
    url: str


class LoginUrl(ApiObject):
    url: str
    forward_text: Optional[str] = None
    bot_username: Optional[str] = None
    request_write_access: Optional[bool] = None


class SwitchInlineQueryChosenChat(ApiObject):
    query: Optional[str] = None
    allow_user_chats: Optional[bool] = None
    allow_bot_chats: Optional[bool] = None
    allow_group_chats: Optional[bool] = None
    allow_channel_chats: Optional[bool] = None


class CopyTextButton(ApiObject):
    text: str


class InlineKeyboardButton(RuleChecked, ApiObject):
    text: str
    url: Optional[str] = None
    callback_data: Optional[str] = None
    web_app: Optional[WebAppInfo] = None
    login_url: Optional[LoginUrl] = None
    switch_inline_query: Optional[str] = None
    switch_inline_query_current_chat: Optional[str] = None
    switch_inline_query_chosen_chat: Optional[SwitchInlineQueryChosenChat] = None
    copy_text: Optional[CopyTextButton] = None
    # an empty object; the game is named by the bot, not the button
    callback_game: Optional[dict[str, Any]] = None
    pay: Optional[bool] = None

    __rules__ = (
        Required("text"),
        Length("callback_data", 1, 64),
        OneOfGroups(
            ("url",),
            ("callback_data",),
            ("web_app",),
            ("login_url",),
            ("switch_inline_query",),
            ("switch_inline_query_current_chat",),
            ("switch_inline_query_chosen_chat",),
            ("copy_text",),
            ("callback_game",),
            ("pay",),
        ),
    )


class InlineKeyboardMarkup(RuleChecked, ApiObject):
    inline_keyboard: list[list[InlineKeyboardButton]]

    def validate(self) -> ValidationOutcome:  # type: ignore[override]
        violations: list[Violation] = []
        for r, row in enumerate(self.inline_keyboard):
            for c, button in enumerate(row):
                prefix = f"inline_keyboard[{r}][{c}]"
                violations.extend(v.prefixed(prefix) for v in button.validate().violations)
        return ValidationOutcome.of(violations)


# ── Result objects ────────────────────────────────────────────────────────────

class Chat(ApiObject):
    id: int
    type: str
    title: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_forum: Optional[bool] = None


class ChatFullInfo(Chat):
    description: Optional[str] = None
    invite_link: Optional[str] = None
    accent_color_id: Optional[int] = None
    max_reaction_count: Optional[int] = None


class ChatMember(ApiObject):
    status: str
    user: User


class PhotoSize(ApiObject):
    file_id: str
    file_unique_id: str
    width: int
    height: int
    file_size: Optional[int] = None


class Document(ApiObject):
    file_id: str
    file_unique_id: str
    thumbnail: Optional[PhotoSize] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None


class File(ApiObject):
    file_id: str
    file_unique_id: str
    file_size: Optional[int] = None
    file_path: Optional[str] = None


class UserProfilePhotos(ApiObject):
    total_count: int
    photos: list[list[PhotoSize]]


class Message(ApiObject):
    message_id: int
    date: int
    chat: Chat
    from_user: Optional[User] = Field(default=None, alias="from")
    message_thread_id: Optional[int] = None
    text: Optional[str] = None
    entities: Optional[list[MessageEntity]] = None
    caption: Optional[str] = None
    caption_entities: Optional[list[MessageEntity]] = None
    photo: Optional[list[PhotoSize]] = None
    document: Optional[Document] = None
    reply_to_message: Optional[Message] = None
    edit_date: Optional[int] = None


class MessageId(ApiObject):
    message_id: int


class Update(ApiObject):
    update_id: int
    message: Optional[Message] = None
    edited_message: Optional[Message] = None
    channel_post: Optional[Message] = None
    edited_channel_post: Optional[Message] = None


class WebhookInfo(ApiObject):
    url: str
    has_custom_certificate: bool
    pending_update_count: int
    ip_address: Optional[str] = None
    last_error_date: Optional[int] = None
    last_error_message: Optional[str] = None
    max_connections: Optional[int] = None
    allowed_updates: Optional[list[str]] = None


# ── EditResult ────────────────────────────────────────────────────────────────

class EditedMessage(BaseModel):
    """An ordinary message was edited; the remote returned the new message."""
    kind: Literal["message"] = "message"
    message: Message


class EditedInline(BaseModel):
    """An inline message was edited; the remote returned ``true``."""
    kind: Literal["inline"] = "inline"


def _coerce_edit_result(raw: Any) -> Any:
    if isinstance(raw, (EditedMessage, EditedInline)):
        return raw
    if raw is True:
        return EditedInline()
    if isinstance(raw, dict):
        return EditedMessage(message=Message.model_validate(raw))
    raise ValueError("expected a message object or true")


EditResult = Annotated[Union[EditedMessage, EditedInline], BeforeValidator(_coerce_edit_result)]


__all__ = [
    "PARSE_MODES", "UPDATE_KINDS",
    "ChatId", "ChatIdField",
    "User", "MessageEntity", "LinkPreviewOptions", "ReplyParameters",
    "InlineKeyboardButton", "InlineKeyboardMarkup",
    "Chat", "ChatFullInfo", "ChatMember", "PhotoSize", "Document", "File",
    "UserProfilePhotos", "Message", "MessageId", "Update", "WebhookInfo",
    "EditedMessage", "EditedInline", "EditResult",
]
