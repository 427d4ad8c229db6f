"""
botapi_sdk.tier1_runtime.files
───────────────────────────────
Attachment values. An attachment field holds either a ``LocalFile`` (bytes
that must be uploaded, forcing a multipart body) or a ``RemoteFile`` (a file
id or URL the remote already knows, sent as a plain string).
"""
from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Annotated, Any, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, model_serializer

from botapi_sdk.tier1_runtime.validate import Required, RuleChecked


class LocalFile(RuleChecked, BaseModel):
    """Binary content supplied by the caller, uploaded as a form-file part."""
    model_config = ConfigDict(frozen=True)

    content: bytes
    filename: str
    mime_type: str | None = None

    __rules__ = (Required("content", "filename"),)

    @classmethod
    def from_path(cls, path: str | Path, mime_type: str | None = None) -> "LocalFile":
        p = Path(path)
        return cls(
            content=p.read_bytes(),
            filename=p.name,
            mime_type=mime_type or mimetypes.guess_type(p.name)[0],
        )

    def as_file_tuple(self) -> tuple[str, bytes, str]:
        return (self.filename, self.content, self.mime_type or "application/octet-stream")

    def __repr__(self) -> str:
        return f"LocalFile(filename={self.filename!r}, size={len(self.content)})"


class RemoteFile(RuleChecked, BaseModel):
    """A file id or HTTP URL of content the remote API can fetch itself."""
    model_config = ConfigDict(frozen=True)

    ref: str

    __rules__ = (Required("ref"),)

    @model_serializer
    def _as_ref(self) -> str:
        return self.ref


def _coerce_input_file(value: Any) -> Any:
    if isinstance(value, str):
        return RemoteFile(ref=value)
    return value


InputFile = Annotated[Union[LocalFile, RemoteFile], BeforeValidator(_coerce_input_file)]


def is_local(value: Any) -> bool:
    return isinstance(value, LocalFile)


__all__ = ["LocalFile", "RemoteFile", "InputFile", "is_local"]
