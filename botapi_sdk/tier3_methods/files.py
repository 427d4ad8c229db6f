"""
botapi_sdk.tier3_methods.files
───────────────────────────────
File metadata lookups. Downloading the content behind ``File.file_path``
is a plain GET the caller performs.
"""
from __future__ import annotations

from typing import Optional

from botapi_sdk.tier0_core.http import HTTP
from botapi_sdk.tier1_runtime.validate import Range, Required
from botapi_sdk.tier3_methods.base import Command
from botapi_sdk.tier3_methods.objects import File, UserProfilePhotos


class GetFile(Command):
    __endpoint__ = "getFile"
    __http_method__ = HTTP.GET
    __result__ = File

    file_id: Optional[str] = None

    __rules__ = (Required("file_id"),)


class GetUserProfilePhotos(Command):
    __endpoint__ = "getUserProfilePhotos"
    __http_method__ = HTTP.GET
    __result__ = UserProfilePhotos

    user_id: Optional[int] = None
    offset: Optional[int] = None
    limit: Optional[int] = None

    __rules__ = (
        Required("user_id"),
        Range("user_id", min=1),
        Range("offset", min=0),
        Range("limit", 1, 100),
    )


__sdk_export__ = {
    "surface": "both",
    "exports": ["GetFile", "GetUserProfilePhotos"],
    "commands": ["GetFile", "GetUserProfilePhotos"],
    "description": "File metadata and profile photo lookups",
    "tier": "tier3_methods",
    "module": "files",
}
