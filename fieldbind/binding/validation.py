# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Staged validation.

Stages are ordered ``input < blur < submit``. A validator reports problems
through ``fail(reason, stage)``; a reason only counts when the stage being
evaluated is at or past the threshold it was reported with, so a "too young"
check registered at ``blur`` stays quiet while the user is still typing.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from contextlib import AsyncExitStack
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .._errors import FieldBindError, ValidatorError
from ..config import settings
from ..ln.concurrency import TaskGroup, create_task_group, gather, maybe_await
from .types import Stage, StageValidator

if TYPE_CHECKING:
    from .binding import FieldBinding

V = TypeVar("V")

FailFn = Callable[..., None]
Validator = Callable[[Any, FailFn], "Awaitable[None] | None"]

__all__ = (
    "FailFn",
    "Validator",
    "ValidationPipeline",
    "Validation",
    "collect_failures",
)

logger = logging.getLogger(__name__)


class ValidationPipeline:
    """Registry of stage-aware validators run together on every ``get``."""

    __slots__ = ("_validators",)

    def __init__(self) -> None:
        # dict as an insertion-ordered set
        self._validators: dict[StageValidator, None] = {}

    def __len__(self) -> int:
        return len(self._validators)

    def __contains__(self, fn: object) -> bool:
        return fn in self._validators

    def register(self, fn: StageValidator) -> None:
        self._validators[fn] = None

    def unregister(self, fn: StageValidator) -> None:
        self._validators.pop(fn, None)

    async def run(self, stage: Stage, value: Any) -> bool:
        """True when no validator reports an active failure for ``stage``."""
        if not self._validators:
            return True
        results = await gather(
            *(self._invoke(fn, stage, value) for fn in list(self._validators))
        )
        return all(results)

    @staticmethod
    async def _invoke(fn: StageValidator, stage: Stage, value: Any) -> bool:
        try:
            return bool(await fn(stage, value))
        except FieldBindError:
            raise
        except Exception as e:
            raise ValidatorError.from_value(
                value, stage=stage, message=f"Validator {fn!r} raised: {e}", cause=e
            ) from e


async def collect_failures(
    validator: Validator, stage: Stage, value: Any
) -> list[Any]:
    """Run one user validator at ``stage`` and return its active failure reasons."""
    fails: list[Any] = []

    def fail(reason: Any, stage_: Stage | str | None = None) -> None:
        threshold = Stage.coerce(
            stage_ if stage_ is not None else settings.DEFAULT_FAIL_STAGE
        )
        if stage >= threshold:
            fails.append(reason)

    await maybe_await(validator(value, fail))
    return fails


class Validation(Generic[V]):
    """Attach a validator to a binding for as long as the context is open.

    While open, the validator takes part in every ``get`` on the binding and
    is re-run on ``change`` (input stage) and ``blur`` (blur stage) events,
    keeping :attr:`errors` current without an explicit ``get``.

    Example:
        >>> async def required(value, fail):
        ...     if value == "":
        ...         fail("required", "submit")
        >>> async with Validation(binding, required) as v:
        ...     await binding.get(submit=True)
        ...     v.errors
        ['required']
    """

    def __init__(
        self,
        binding: FieldBinding[Any],
        validator: Validator,
        *,
        on_errors: Callable[[list[V]], None] | None = None,
    ):
        self.binding = binding
        self.validator = validator
        self.on_errors = on_errors
        self.errors: list[V] = []
        self._stack: AsyncExitStack | None = None
        self._tg: TaskGroup | None = None

    async def check(self, stage: Stage, value: Any) -> bool:
        """Validate ``value`` at ``stage``; publish and return whether it passed."""
        try:
            fails = await collect_failures(self.validator, stage, value)
        except Exception as e:
            raise ValidatorError.from_value(
                value, stage=stage, message=f"Validator raised: {e}", cause=e
            ) from e
        self._publish(fails)
        return not fails

    async def run(self, stage: Stage = Stage.INPUT) -> None:
        """Re-evaluate against the binding's current value."""
        result = await self.binding._get_raw(stage)
        if not result.ok:
            self._publish([])
            return
        await self.check(stage, result.value)

    def _publish(self, fails: list[V]) -> None:
        self.errors = fails
        if self.on_errors is not None:
            self.on_errors(list(fails))

    async def _run_logged(self, stage: Stage) -> None:
        try:
            await self.run(stage)
        except FieldBindError as e:
            logger.error(
                f"Re-validation of {self.binding!r} at stage '{stage}' failed: {e}",
                exc_info=True,
            )

    def _on_change(self, detail: Any = None) -> None:
        if self._tg is not None:
            self._tg.start_soon(self._run_logged, Stage.INPUT)

    def _on_blur(self, detail: Any = None) -> None:
        if self._tg is not None:
            self._tg.start_soon(self._run_logged, Stage.BLUR)

    async def __aenter__(self) -> Validation[V]:
        self._stack = AsyncExitStack()
        self._tg = await self._stack.enter_async_context(create_task_group())
        self.binding._register_validator(self.check)
        self.binding.add_event_listener("change", self._on_change)
        self.binding.add_event_listener("blur", self._on_blur)
        self._tg.start_soon(self._run_logged, Stage.INPUT)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool | None:
        self.binding.remove_event_listener("change", self._on_change)
        self.binding.remove_event_listener("blur", self._on_blur)
        self.binding._unregister_validator(self.check)
        tg, self._tg = self._tg, None
        tg.cancel()
        stack, self._stack = self._stack, None
        return await stack.__aexit__(exc_type, exc, tb)
