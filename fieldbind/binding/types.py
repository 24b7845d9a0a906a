# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Awaitable, Callable
from enum import Enum, IntEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from ..ln.types import Pending, Undefined

__all__ = (
    "Stage",
    "BindingState",
    "GetResult",
    "SetResult",
    "TemplateState",
    "EventName",
    "EVENT_NAMES",
    "Getter",
    "Setter",
    "TemplateSetter",
    "StageValidator",
)


class Stage(IntEnum):
    """Validation stage; ordinal value is the severity threshold order."""

    INPUT = 0
    BLUR = 1
    SUBMIT = 2

    @classmethod
    def coerce(cls, stage: Stage | str) -> Stage:
        if isinstance(stage, cls):
            return stage
        try:
            return cls[str(stage).upper()]
        except KeyError:
            raise ValueError(f"Unknown validation stage: {stage!r}") from None

    def __str__(self) -> str:
        return self.name.lower()


class BindingState(str, Enum):
    """Lifecycle state of a FieldBinding.

    Attributes:
        UNREADY: No surface has attached yet; operations wait.
        READY: A surface is attached and serves operations directly.
        UNAVAILABLE: Torn down; every operation reports unavailable.
    """

    UNREADY = "unready"
    READY = "ready"
    UNAVAILABLE = "unavailable"


class GetResult(BaseModel):
    """Outcome of reading a binding."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    result: Literal["success", "validation_fault", "unavailable"]
    value: Any = None

    @classmethod
    def success(cls, value: Any) -> GetResult:
        return cls(result="success", value=value)

    @classmethod
    def validation_fault(cls) -> GetResult:
        return cls(result="validation_fault")

    @classmethod
    def unavailable(cls) -> GetResult:
        return cls(result="unavailable")

    @property
    def ok(self) -> bool:
        return self.result == "success"


class SetResult(BaseModel):
    """Outcome of writing a binding."""

    model_config = ConfigDict(frozen=True)

    result: Literal["success", "unavailable"]

    @classmethod
    def success(cls) -> SetResult:
        return cls(result="success")

    @classmethod
    def unavailable(cls) -> SetResult:
        return cls(result="unavailable")

    @property
    def ok(self) -> bool:
        return self.result == "success"


class TemplateState(BaseModel):
    """The value a binding defaults or resets to: absent, pending or resolved."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: Literal["absent", "pending", "resolved"]
    value: Any = None

    @classmethod
    def absent(cls) -> TemplateState:
        return cls(status="absent")

    @classmethod
    def pending(cls) -> TemplateState:
        return cls(status="pending")

    @classmethod
    def resolved(cls, value: Any) -> TemplateState:
        return cls(status="resolved", value=value)

    @classmethod
    def coerce(cls, template: Any) -> TemplateState:
        """Accept a TemplateState, ``Pending``, ``Undefined`` or a bare value."""
        if isinstance(template, cls):
            return template
        if template is Pending:
            return cls.pending()
        if template is Undefined:
            return cls.absent()
        return cls.resolved(template)

    @property
    def is_pending(self) -> bool:
        return self.status == "pending"

    @property
    def is_resolved(self) -> bool:
        return self.status == "resolved"


EventName = Literal["change", "blur", "template_change"]
EVENT_NAMES: tuple[str, ...] = ("change", "blur", "template_change")

Getter = Callable[[Stage], Awaitable[GetResult]]
Setter = Callable[[Any], Awaitable[SetResult]]
TemplateSetter = Callable[[Any, bool], Awaitable[SetResult]]
StageValidator = Callable[[Stage, Any], Awaitable[bool]]
