"""
botapi_sdk.tier3_methods.base
──────────────────────────────
Base class for every command. A command is a pydantic model whose fields
mirror the remote method's parameters plus four pieces of class-level data:

    __endpoint__     remote method name, e.g. "sendMessage"
    __http_method__  "GET" for read-only queries, "POST" otherwise
    __result__       type the envelope's ``result`` decodes into
    __rules__        declarative constraint table (see tier1_runtime.validate)

Parameters the remote requires are still declared optional and listed in a
``Required`` rule, so a missing parameter is reported by ``validate()``
together with every other violation instead of failing construction.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict

from botapi_sdk.tier0_core.http import HTTP
from botapi_sdk.tier1_runtime.serialize import RequestBody, serialize
from botapi_sdk.tier1_runtime.validate import Nested, Rule, RuleChecked, ValidationOutcome, check_rules

if TYPE_CHECKING:
    from botapi_sdk.tier2_client.bot import Bot


class Command(RuleChecked, BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    __endpoint__: ClassVar[str] = ""
    __http_method__: ClassVar[str] = HTTP.POST
    __result__: ClassVar[Any] = Any
    __rules__: ClassVar[tuple[Rule, ...]] = ()

    def validate(self) -> ValidationOutcome:  # type: ignore[override]
        # nested values (chat ids, attachments, option objects) check themselves
        rules = self.__rules__ + (Nested(*type(self).model_fields),)
        return check_rules(self, rules)

    def serialize(self) -> RequestBody:
        return serialize(self)

    def endpoint(self) -> str:
        return self.__endpoint__

    def http_method(self) -> str:
        return self.__http_method__

    def result_type(self) -> Any:
        return self.__result__

    async def execute(self, bot: Bot, **options: Any) -> Any:
        """Dispatch through *bot* and return the result, raising on failure."""
        return await bot.execute(self, **options)


__sdk_export__ = {
    "surface": "both",
    "exports": ["Command"],
    "description": "Base class implementing the command capability contract",
    "tier": "tier3_methods",
    "module": "base",
}
