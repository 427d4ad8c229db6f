"""
botapi_sdk.tier1_runtime.serialize
───────────────────────────────────
Request body encoding. A command becomes one of two body shapes:

- JsonBody:      a single JSON object, ``application/json``
- MultipartBody: one text part per scalar field (JSON text for nested
                 values), one file part per LocalFile,
                 ``multipart/form-data; boundary=...``

The shape is picked from the values: any LocalFile forces multipart.
Both shapes turn into an ``httpx.Request`` whose Content-Type matches the
encoded stream (httpx reuses the boundary declared in the header).
"""
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Iterable, Type, TypeVar, Union

import httpx
from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from botapi_sdk.tier0_core.http import CONTENT_TYPE_JSON, CONTENT_TYPE_MULTIPART
from botapi_sdk.tier1_runtime.files import LocalFile

T = TypeVar("T", bound=BaseModel)


# ── Body shapes ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class JsonBody:
    content: bytes

    @property
    def content_type(self) -> str:
        return CONTENT_TYPE_JSON

    @property
    def is_multipart(self) -> bool:
        return False

    def build_request(self, method: str, url: str) -> httpx.Request:
        return httpx.Request(
            method, url, content=self.content,
            headers={"Content-Type": self.content_type},
        )


@dataclass(frozen=True)
class MultipartBody:
    fields: tuple[tuple[str, str], ...]
    files: tuple[tuple[str, LocalFile], ...]
    boundary: str

    @property
    def content_type(self) -> str:
        return f"{CONTENT_TYPE_MULTIPART}; boundary={self.boundary}"

    @property
    def is_multipart(self) -> bool:
        return True

    def build_request(self, method: str, url: str) -> httpx.Request:
        return httpx.Request(
            method, url,
            data=dict(self.fields),
            files=[(name, f.as_file_tuple()) for name, f in self.files],
            headers={"Content-Type": self.content_type},
        )


RequestBody = Union[JsonBody, MultipartBody]


# ── Encoding ──────────────────────────────────────────────────────────────────

def form_value(value: Any) -> str:
    """
    Text form of a scalar or nested value for a multipart field:
    strings as-is, booleans as ``true``/``false``, everything else as JSON.
    """
    data = to_jsonable_python(value, exclude_none=True)
    if isinstance(data, str):
        return data
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def new_boundary() -> str:
    return os.urandom(16).hex()


def model_items(model: BaseModel) -> Iterable[tuple[str, Any]]:
    """(wire name, value) pairs of a model's fields that are set (not None)."""
    for name, info in type(model).model_fields.items():
        value = getattr(model, name, None)
        if value is not None:
            yield info.alias or name, value


def to_json_body(model: BaseModel) -> JsonBody:
    return JsonBody(model.model_dump_json(exclude_none=True, by_alias=True).encode())


def to_multipart_body(items: Iterable[tuple[str, Any]]) -> MultipartBody:
    fields: list[tuple[str, str]] = []
    files: list[tuple[str, LocalFile]] = []
    for key, value in items:
        if isinstance(value, LocalFile):
            files.append((key, value))
        else:
            fields.append((key, form_value(value)))
    return MultipartBody(tuple(fields), tuple(files), new_boundary())


def serialize(model: BaseModel) -> RequestBody:
    """
    Encode a command model. Multipart when any field holds a LocalFile,
    JSON otherwise.

    Usage:
        body = serialize(SendPhoto(chat_id=1, photo=LocalFile(...)))
        body.content_type   # 'multipart/form-data; boundary=...'
    """
    items = list(model_items(model))
    if any(isinstance(value, LocalFile) for _, value in items):
        return to_multipart_body(items)
    return to_json_body(model)


def deserialize(data: bytes | str, model: Type[T]) -> T:
    """
    Decode a JSON body back into a model.

    Usage:
        cmd = deserialize(body.content, SendMessage)
    """
    if isinstance(data, bytes):
        data = data.decode()
    return model.model_validate_json(data)


__sdk_export__ = {
    "surface": "service",
    "exports": ["JsonBody", "MultipartBody", "RequestBody", "serialize", "deserialize"],
    "description": "JSON and multipart/form-data request bodies",
    "tier": "tier1_runtime",
    "module": "serialize",
}
