"""Tests for tier1_runtime modules."""
from __future__ import annotations

import json
from typing import Optional

import pytest
from pydantic import BaseModel

from botapi_sdk.tier0_core.errors import (
    ApiRejection,
    DecodeFailure,
    RateLimitError,
    TransportFailure,
    ValidationFailed,
)
from botapi_sdk.tier0_core.http import ResponseParameters
from botapi_sdk.tier1_runtime.files import InputFile, LocalFile, RemoteFile, is_local
from botapi_sdk.tier1_runtime.retry import is_retryable, retry_policy
from botapi_sdk.tier1_runtime.serialize import (
    JsonBody,
    MultipartBody,
    deserialize,
    form_value,
    serialize,
)
from botapi_sdk.tier1_runtime.validate import (
    Ascending,
    Choice,
    Count,
    Length,
    MutuallyExclusive,
    Nested,
    OneOfGroups,
    Pattern,
    Range,
    Required,
    RuleChecked,
    ValidationOutcome,
    Violation,
    check_rules,
    validate_input,
)
from botapi_sdk.tier3_methods.media import SendDocument, SendPhoto
from botapi_sdk.tier3_methods.messages import SendMessage
from botapi_sdk.tier3_methods.objects import ReplyParameters


class Sample(RuleChecked, BaseModel):
    name: Optional[str] = None
    size: Optional[int] = None
    tags: Optional[list[str]] = None
    ids: Optional[list[int]] = None
    mode: Optional[str] = None

    __rules__ = (
        Required("name"),
        Length("name", 1, 8),
        Range("size", 1, 100),
        Count("tags", 1, 3),
        Ascending("ids"),
        Choice("mode", ("fast", "slow")),
    )


class Target(BaseModel):
    inline_message_id: Optional[str] = None
    chat_id: Optional[int] = None
    message_id: Optional[int] = None


TARGET = OneOfGroups(("inline_message_id",), ("chat_id", "message_id"))


# ── validate ───────────────────────────────────────────────────────────────

class TestRules:
    def test_valid_sample(self):
        outcome = Sample(name="ok", size=5, tags=["a"], ids=[1, 2, 3], mode="fast").validate()
        assert outcome.valid
        assert outcome == ValidationOutcome()

    def test_accumulates_every_violation(self):
        outcome = Sample(name="far too long", size=0, tags=[], ids=[3, 1], mode="warp").validate()
        assert not outcome
        assert [v.field for v in outcome.violations] == ["name", "size", "tags", "ids", "mode"]

    def test_length_counts_characters_not_bytes(self):
        # 8 characters, 16 bytes in UTF-8
        assert Sample(name="ёжиковый").validate().valid
        assert not Sample(name="ёжиковые!").validate().valid

    def test_required_messages(self):
        assert Sample().validate().messages() == ["name parameter is required"]
        assert Sample(name="  ").validate().violations[0].message == "name parameter can't be empty"

    def test_bound_messages(self):
        messages = Sample(name="x", size=101, tags=["a", "b", "c", "d"], mode="warp").validate().messages()
        assert "size parameter must be between 1 and 100" in messages
        assert "tags parameter must contain between 1 and 3 items" in messages
        assert "mode parameter must be one of: fast, slow" in messages

    def test_range_open_ended(self):
        class Offset(BaseModel):
            offset: int = -1

        assert check_rules(Offset(), [Range("offset", min=0)]).messages() == [
            "offset parameter must be at least 0"
        ]

    def test_ascending_rejects_duplicates(self):
        assert not Sample(name="x", ids=[1, 1]).validate().valid

    def test_pattern(self):
        class Secret(BaseModel):
            secret_token: str = "has spaces"

        outcome = check_rules(Secret(), [Pattern("secret_token", r"[A-Za-z0-9_-]+", "alphanumeric")])
        assert outcome.violations == (Violation("secret_token", "secret_token parameter must be alphanumeric"),)

    def test_mutually_exclusive(self):
        class Text(BaseModel):
            parse_mode: Optional[str] = "HTML"
            entities: Optional[list[int]] = [1]

        outcome = check_rules(Text(), [MutuallyExclusive("parse_mode", "entities")])
        assert outcome.violations == (Violation("entities", "parse_mode and entities can't be used together"),)
        assert check_rules(Text(entities=None), [MutuallyExclusive("parse_mode", "entities")]).valid


class TestOneOfGroups:
    def test_inline_target(self):
        assert check_rules(Target(inline_message_id="abc"), [TARGET]).valid

    def test_chat_target(self):
        assert check_rules(Target(chat_id=1, message_id=2), [TARGET]).valid

    def test_neither(self):
        outcome = check_rules(Target(), [TARGET])
        assert outcome.violations == (Violation(
            "inline_message_id",
            "either inline_message_id or chat_id and message_id must be specified",
        ),)

    def test_partial_group(self):
        outcome = check_rules(Target(chat_id=1), [TARGET])
        assert outcome.violations == (Violation(
            "message_id", "message_id parameter is required when chat_id is specified",
        ),)

    def test_both(self):
        outcome = check_rules(Target(inline_message_id="abc", chat_id=1, message_id=2), [TARGET])
        assert [v.field for v in outcome.violations] == ["chat_id"]

    def test_complete_plus_stray(self):
        outcome = check_rules(Target(inline_message_id="abc", chat_id=1), [TARGET])
        assert outcome.messages() == ["chat_id and message_id can't be used with inline_message_id"]


class TestNested:
    def test_prefixes_nested_fields(self):
        class Holder(BaseModel):
            reply: ReplyParameters
            items: list[ReplyParameters]

        holder = Holder(
            reply=ReplyParameters(message_id=0),
            items=[ReplyParameters(message_id=1), ReplyParameters(message_id=-5)],
        )
        outcome = check_rules(holder, [Nested("reply", "items")])
        assert [v.field for v in outcome.violations] == ["reply.message_id", "items[1].message_id"]

    def test_plain_values_are_skipped(self):
        class Holder(BaseModel):
            value: int = 3

        assert check_rules(Holder(), [Nested("value")]).valid


class TestOutcome:
    def test_raise_for_violations(self):
        outcome = ValidationOutcome.of([Violation("a", "a is bad"), Violation("b", "b is bad")])
        with pytest.raises(ValidationFailed) as exc_info:
            outcome.raise_for_violations()
        assert str(exc_info.value) == "a is bad; b is bad"

    def test_valid_outcome_does_not_raise(self):
        ValidationOutcome().raise_for_violations()

    def test_violation_prefix(self):
        assert Violation("x", "m").prefixed("outer") == Violation("outer.x", "m")
        assert Violation("", "m").prefixed("chat_id") == Violation("chat_id", "m")


class TestValidateInput:
    def test_builds_command(self):
        cmd = validate_input(SendMessage, {"chat_id": "@news", "text": "hello"})
        assert cmd.chat_id.kind == "handle"
        assert cmd.text == "hello"

    def test_unknown_parameter(self):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_input(SendMessage, {"chat_id": 1, "text": "hi", "colour": "red"})
        assert "colour" in exc_info.value.fields

    def test_ill_typed_value(self):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_input(SendMessage, {"chat_id": 1, "text": "hi", "message_thread_id": "abc"})
        assert any(f.startswith("message_thread_id") for f in exc_info.value.fields)

    def test_boolean_chat_id_rejected(self):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_input(SendMessage, {"chat_id": True, "text": "hi"})
        assert any(f.startswith("chat_id") for f in exc_info.value.fields)


# ── files ──────────────────────────────────────────────────────────────────

class TestFiles:
    def test_string_coerces_to_remote(self):
        class Holder(BaseModel):
            attachment: InputFile

        holder = Holder(attachment="AgACAgIAAxkBAAIC")
        assert holder.attachment == RemoteFile(ref="AgACAgIAAxkBAAIC")
        assert not is_local(holder.attachment)

    def test_from_path(self, tmp_path):
        path = tmp_path / "photo.jpg"
        path.write_bytes(b"\xff\xd8\xff")
        local = LocalFile.from_path(path)
        assert local.filename == "photo.jpg"
        assert local.mime_type == "image/jpeg"
        assert local.as_file_tuple() == ("photo.jpg", b"\xff\xd8\xff", "image/jpeg")
        assert is_local(local)

    def test_local_file_rules(self):
        outcome = LocalFile(content=b"", filename=" ").validate()
        assert outcome.messages() == [
            "content parameter can't be empty",
            "filename parameter can't be empty",
        ]

    def test_remote_file_rules(self):
        assert not RemoteFile(ref="").validate().valid

    def test_repr_hides_content(self):
        assert "size=3" in repr(LocalFile(content=b"abc", filename="a.bin"))


# ── serialize ──────────────────────────────────────────────────────────────

class TestSerialize:
    def test_json_body(self):
        body = serialize(SendMessage(chat_id=42, text="hi", disable_notification=True))
        assert isinstance(body, JsonBody)
        assert body.content_type == "application/json"
        assert json.loads(body.content) == {"chat_id": 42, "text": "hi", "disable_notification": True}

    def test_json_body_omits_none(self):
        body = serialize(SendMessage(chat_id="@news", text="hi"))
        assert b"null" not in body.content

    def test_remote_attachment_stays_json(self):
        body = serialize(SendPhoto(chat_id=1, photo="https://example.com/cat.jpg"))
        assert isinstance(body, JsonBody)
        assert json.loads(body.content)["photo"] == "https://example.com/cat.jpg"

    def test_roundtrip(self):
        cmd = SendMessage(chat_id=-1001, text="hi", reply_parameters=ReplyParameters(message_id=3))
        assert deserialize(serialize(cmd).content, SendMessage) == cmd

    def test_form_values(self):
        assert form_value(True) == "true"
        assert form_value(False) == "false"
        assert form_value(42) == "42"
        assert form_value("plain text") == "plain text"
        assert form_value(ReplyParameters(message_id=5)) == '{"message_id":5}'
        assert form_value([1, 2]) == "[1,2]"

    def test_local_attachment_forces_multipart(self):
        thumb = LocalFile(content=b"\xff\xd8", filename="thumb.jpg", mime_type="image/jpeg")
        body = serialize(SendDocument(chat_id=42, document="BQACAgIAAxkBAAIC", thumbnail=thumb, caption="c"))
        assert isinstance(body, MultipartBody)
        assert body.content_type == f"multipart/form-data; boundary={body.boundary}"
        assert body.fields == (("chat_id", "42"), ("document", "BQACAgIAAxkBAAIC"), ("caption", "c"))
        assert body.files == (("thumbnail", thumb),)

    def test_multipart_request_matches_header(self):
        photo = LocalFile(content=b"PNGDATA", filename="p.png", mime_type="image/png")
        body = serialize(SendPhoto(chat_id=7, photo=photo, has_spoiler=True))
        request = body.build_request("POST", "https://example.com/bot1:a/sendPhoto")
        raw = request.read()
        assert request.headers["Content-Type"] == body.content_type
        assert raw.startswith(f"--{body.boundary}".encode())
        assert b'name="has_spoiler"\r\n\r\ntrue' in raw
        assert b'name="photo"; filename="p.png"' in raw
        assert raw.count(b"filename=") == 1

    def test_boundaries_differ(self):
        photo = LocalFile(content=b"x", filename="x.png")
        a = serialize(SendPhoto(chat_id=1, photo=photo))
        b = serialize(SendPhoto(chat_id=1, photo=photo))
        assert a.boundary != b.boundary


# ── retry ──────────────────────────────────────────────────────────────────

class TestRetry:
    def test_retryable_classification(self):
        assert is_retryable(TransportFailure("getMe", OSError("down")))
        assert is_retryable(RateLimitError(429, "Too Many Requests", ResponseParameters(retry_after=1)))
        assert not is_retryable(ApiRejection(400, "Bad Request"))
        assert not is_retryable(ValidationFailed([Violation("text", "bad")]))
        assert not is_retryable(DecodeFailure("getMe"))

    @pytest.mark.asyncio
    async def test_retries_transport_failures(self):
        attempts = []

        @retry_policy(max_attempts=3, min_wait=0, max_wait=0, jitter=0)
        async def flaky():
            attempts.append(1)
            if len(attempts) < 3:
                raise TransportFailure("getMe", OSError("reset"))
            return "ok"

        assert await flaky() == "ok"
        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_honours_retry_after_cap(self):
        attempts = []

        @retry_policy(max_attempts=2, min_wait=0, max_wait=0, jitter=0)
        async def limited():
            attempts.append(1)
            raise RateLimitError(429, "Too Many Requests", ResponseParameters(retry_after=30))

        with pytest.raises(RateLimitError):
            await limited()
        assert len(attempts) == 2

    @pytest.mark.asyncio
    async def test_does_not_retry_rejections(self):
        attempts = []

        @retry_policy(max_attempts=5, min_wait=0, max_wait=0, jitter=0)
        async def rejected():
            attempts.append(1)
            raise ApiRejection(400, "Bad Request: chat not found")

        with pytest.raises(ApiRejection):
            await rejected()
        assert len(attempts) == 1
