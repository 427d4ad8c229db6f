"""
botapi_sdk.tier1_runtime.validate
──────────────────────────────────
Declarative request validation. Each command class carries a table of
rules (``__rules__``); ``check_rules`` interprets the table against an
instance and collects every violation in one pass (never fail-fast).

Usage:
    class SetChatTitle(Command):
        __rules__ = (Required("chat_id", "title"), Length("title", 1, 128))

    outcome = SetChatTitle(chat_id=1, title="").validate()
    outcome.valid          # False
    outcome.violations     # (Violation("title", "..."),)
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterable, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from botapi_sdk.tier0_core.errors import ValidationFailed

T = TypeVar("T", bound=BaseModel)


# ── Outcome types ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Violation:
    """A single failed constraint."""
    field: str
    message: str

    def prefixed(self, prefix: str) -> "Violation":
        name = f"{prefix}.{self.field}" if self.field else prefix
        return Violation(name, self.message)

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidationOutcome:
    """Either valid (no violations) or an ordered, non-empty tuple of violations."""
    violations: tuple[Violation, ...] = field(default_factory=tuple)

    @property
    def valid(self) -> bool:
        return not self.violations

    def __bool__(self) -> bool:
        return self.valid

    def messages(self) -> list[str]:
        return [v.message for v in self.violations]

    def raise_for_violations(self) -> None:
        if self.violations:
            raise ValidationFailed(self.violations)

    @classmethod
    def of(cls, violations: Iterable[Violation]) -> "ValidationOutcome":
        return cls(tuple(violations))


VALID = ValidationOutcome()


# ── Rules ─────────────────────────────────────────────────────────────────────

def _is_set(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, bytes, bytearray)):
        return len(value) > 0
    return True


class Rule:
    """Base rule. Subclasses return the violations found on *obj*."""

    def check(self, obj: Any) -> list[Violation]:
        raise NotImplementedError


class Required(Rule):
    def __init__(self, *fields: str) -> None:
        self.fields = fields

    def check(self, obj: Any) -> list[Violation]:
        out = []
        for name in self.fields:
            value = getattr(obj, name, None)
            if value is None:
                out.append(Violation(name, f"{name} parameter is required"))
            elif not _is_set(value):
                out.append(Violation(name, f"{name} parameter can't be empty"))
        return out


class Length(Rule):
    """String length bounds in characters (not UTF-8 bytes), checked only when present."""

    def __init__(self, name: str, min: int = 0, max: int | None = None) -> None:
        self.name, self.min, self.max = name, min, max

    def check(self, obj: Any) -> list[Violation]:
        value = getattr(obj, self.name, None)
        if value is None:
            return []
        n = len(value)
        if n < self.min or (self.max is not None and n > self.max):
            if self.max is None:
                msg = f"{self.name} parameter must be at least {self.min} characters"
            else:
                msg = f"{self.name} parameter must be between {self.min} and {self.max} characters"
            return [Violation(self.name, msg)]
        return []


class Range(Rule):
    """Numeric bounds (inclusive), checked only when the field is present."""

    def __init__(self, name: str, min: float | None = None, max: float | None = None) -> None:
        self.name, self.min, self.max = name, min, max

    def check(self, obj: Any) -> list[Violation]:
        value = getattr(obj, self.name, None)
        if value is None:
            return []
        if (self.min is not None and value < self.min) or (
            self.max is not None and value > self.max
        ):
            if self.max is None:
                msg = f"{self.name} parameter must be at least {self.min}"
            elif self.min is None:
                msg = f"{self.name} parameter must be at most {self.max}"
            else:
                msg = f"{self.name} parameter must be between {self.min} and {self.max}"
            return [Violation(self.name, msg)]
        return []


class Count(Rule):
    """Bounds on the number of items in a list field."""

    def __init__(self, name: str, min: int = 0, max: int | None = None) -> None:
        self.name, self.min, self.max = name, min, max

    def check(self, obj: Any) -> list[Violation]:
        value = getattr(obj, self.name, None)
        if value is None:
            return []
        n = len(value)
        if n < self.min or (self.max is not None and n > self.max):
            if self.max is None:
                msg = f"{self.name} parameter must contain at least {self.min} items"
            else:
                msg = f"{self.name} parameter must contain between {self.min} and {self.max} items"
            return [Violation(self.name, msg)]
        return []


class Choice(Rule):
    def __init__(self, name: str, options: Iterable[str]) -> None:
        self.name, self.options = name, tuple(options)

    def check(self, obj: Any) -> list[Violation]:
        value = getattr(obj, self.name, None)
        if value is None or value in self.options:
            return []
        return [Violation(
            self.name,
            f"{self.name} parameter must be one of: {', '.join(self.options)}",
        )]


class Subset(Rule):
    """Every item of a list field must be one of *options*."""

    def __init__(self, name: str, options: Iterable[str]) -> None:
        self.name, self.options = name, frozenset(options)

    def check(self, obj: Any) -> list[Violation]:
        value = getattr(obj, self.name, None) or []
        unknown = [item for item in value if item not in self.options]
        if unknown:
            return [Violation(
                self.name,
                f"{self.name} parameter contains unknown values: {', '.join(map(str, unknown))}",
            )]
        return []


class Pattern(Rule):
    """String field must fully match *regex*; *hint* names the allowed form."""

    def __init__(self, name: str, regex: str, hint: str) -> None:
        self.name, self.regex, self.hint = name, re.compile(regex), hint

    def check(self, obj: Any) -> list[Violation]:
        value = getattr(obj, self.name, None)
        if value is None or self.regex.fullmatch(value):
            return []
        return [Violation(self.name, f"{self.name} parameter must be {self.hint}")]


class Ascending(Rule):
    """List items must be strictly increasing."""

    def __init__(self, name: str) -> None:
        self.name = name

    def check(self, obj: Any) -> list[Violation]:
        value = getattr(obj, self.name, None) or []
        if any(a >= b for a, b in zip(value, value[1:])):
            return [Violation(self.name, f"{self.name} must be specified in strictly increasing order")]
        return []


class MutuallyExclusive(Rule):
    def __init__(self, *fields: str) -> None:
        self.fields = fields

    def check(self, obj: Any) -> list[Violation]:
        present = [name for name in self.fields if getattr(obj, name, None) is not None]
        if len(present) > 1:
            return [Violation(present[-1], f"{' and '.join(present)} can't be used together")]
        return []


class OneOfGroups(Rule):
    """
    Exactly one group of fields must be fully present, e.g. either
    ``inline_message_id`` or both ``chat_id`` and ``message_id``.
    """

    def __init__(self, *groups: Sequence[str]) -> None:
        self.groups = [tuple(g) for g in groups]

    def _describe(self, group: tuple[str, ...]) -> str:
        return " and ".join(group)

    def check(self, obj: Any) -> list[Violation]:
        present = [
            [name for name in group if getattr(obj, name, None) is not None]
            for group in self.groups
        ]
        complete = [g for g, p in zip(self.groups, present) if len(p) == len(g)]
        if len(complete) == 1:
            touched = [g for g, p in zip(self.groups, present) if p and g not in complete]
            if not touched:
                return []
            return [Violation(
                touched[0][0],
                f"{self._describe(touched[0])} can't be used with {self._describe(complete[0])}",
            )]
        if len(complete) > 1:
            return [Violation(
                complete[1][0],
                " or ".join(self._describe(g) for g in complete) + " can't be used together",
            )]
        best = max(range(len(self.groups)), key=lambda i: len(present[i]))
        if not present[best]:
            first = self.groups[0][0]
            return [Violation(
                first,
                "either " + " or ".join(self._describe(g) for g in self.groups) + " must be specified",
            )]
        group = self.groups[best]
        return [
            Violation(name, f"{name} parameter is required when {', '.join(present[best])} is specified")
            for name in group if name not in present[best]
        ]


class Nested(Rule):
    """Delegate to the field value's own ``validate()`` (or each item's, for lists)."""

    def __init__(self, *fields: str) -> None:
        self.fields = fields

    def check(self, obj: Any) -> list[Violation]:
        out: list[Violation] = []
        for name in self.fields:
            value = getattr(obj, name, None)
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                for i, item in enumerate(value):
                    out.extend(_nested(item, f"{name}[{i}]"))
            else:
                out.extend(_nested(value, name))
        return out


def _nested(value: Any, prefix: str) -> list[Violation]:
    if not isinstance(value, RuleChecked):
        return []
    return [v.prefixed(prefix) for v in value.validate().violations]


# ── Interpreter ───────────────────────────────────────────────────────────────

def check_rules(obj: Any, rules: Iterable[Rule]) -> ValidationOutcome:
    """Run every rule against *obj* and accumulate all violations in order."""
    violations: list[Violation] = []
    for rule in rules:
        violations.extend(rule.check(obj))
    return ValidationOutcome.of(violations)


class RuleChecked:
    """
    Mixin for anything validated by a rule table. Put it before BaseModel in
    the bases so ``validate()`` shadows Pydantic's deprecated classmethod.
    """

    __rules__: ClassVar[tuple[Rule, ...]] = ()

    def validate(self) -> ValidationOutcome:  # type: ignore[override]
        return check_rules(self, self.__rules__)


# ── Raw input → model ─────────────────────────────────────────────────────────

def validate_input(model: Type[T], data: Any) -> T:
    """
    Build a Pydantic model from raw data.
    Raises ValidationFailed (not Pydantic's error) on type/shape failures.

    Usage:
        cmd = validate_input(SendMessage, {"chat_id": 1, "text": "hi"})
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        violations = [
            Violation(".".join(str(loc) for loc in err["loc"]), err["msg"])
            for err in exc.errors()
        ]
        raise ValidationFailed(violations) from exc


__sdk_export__ = {
    "surface": "service",
    "exports": ["Violation", "ValidationOutcome", "RuleChecked", "check_rules", "validate_input"],
    "description": "Declarative rule tables with accumulate-all validation",
    "tier": "tier1_runtime",
    "module": "validate",
}
