"""
botapi_sdk.tier3_methods.chats
───────────────────────────────
Chat queries and basic chat administration.
"""
from __future__ import annotations

from typing import Optional

from botapi_sdk.tier0_core.http import HTTP
from botapi_sdk.tier1_runtime.validate import Length, Range, Required
from botapi_sdk.tier3_methods.base import Command
from botapi_sdk.tier3_methods.objects import ChatFullInfo, ChatIdField, ChatMember


class _ChatCommand(Command):
    chat_id: Optional[ChatIdField] = None

    __rules__ = (Required("chat_id"),)


class GetChat(_ChatCommand):
    __endpoint__ = "getChat"
    __http_method__ = HTTP.GET
    __result__ = ChatFullInfo


class GetChatAdministrators(_ChatCommand):
    __endpoint__ = "getChatAdministrators"
    __http_method__ = HTTP.GET
    __result__ = list[ChatMember]


class GetChatMemberCount(_ChatCommand):
    __endpoint__ = "getChatMemberCount"
    __http_method__ = HTTP.GET
    __result__ = int


class GetChatMember(_ChatCommand):
    __endpoint__ = "getChatMember"
    __http_method__ = HTTP.GET
    __result__ = ChatMember

    user_id: Optional[int] = None

    __rules__ = (Required("chat_id", "user_id"), Range("user_id", min=1))


class LeaveChat(_ChatCommand):
    __endpoint__ = "leaveChat"
    __result__ = bool


class SetChatTitle(_ChatCommand):
    __endpoint__ = "setChatTitle"
    __result__ = bool

    title: Optional[str] = None

    __rules__ = (Required("chat_id", "title"), Length("title", 1, 128))


class SetChatDescription(_ChatCommand):
    """Passing no description clears it."""
    __endpoint__ = "setChatDescription"
    __result__ = bool

    description: Optional[str] = None

    __rules__ = (Required("chat_id"), Length("description", 0, 255))


__sdk_export__ = {
    "surface": "both",
    "exports": [
        "GetChat", "GetChatAdministrators", "GetChatMemberCount", "GetChatMember",
        "LeaveChat", "SetChatTitle", "SetChatDescription",
    ],
    "commands": [
        "GetChat", "GetChatAdministrators", "GetChatMemberCount", "GetChatMember",
        "LeaveChat", "SetChatTitle", "SetChatDescription",
    ],
    "description": "Chat queries and administration",
    "tier": "tier3_methods",
    "module": "chats",
}
