# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from contextlib import AsyncExitStack
from typing import Any, Generic, TypeVar

from .._errors import ConversionError, HydrationError
from ..ln.concurrency import TaskGroup, create_task_group
from ..ln.types import Pending
from .binding import FieldBinding
from .types import GetResult, SetResult, Stage, TemplateState

T = TypeVar("T")
U = TypeVar("U")

__all__ = ("TransformAdapter",)

logger = logging.getLogger(__name__)


class TransformAdapter(Generic[T, U]):
    """Present ``outer`` (holding T) as a new binding holding U.

    ``forward`` converts outer values into inner ones, ``backward`` the other
    way round; both are coroutine functions. A surface attaches to
    :attr:`inner`; entering the context attaches ``outer`` to the adapter.

    A resolved outer template is converted by ``forward`` once the adapter
    is entered; until that conversion lands the inner template reads as
    pending, so a ``PendingWatcher`` on :attr:`inner` reports ``True`` for a
    value the outer binding already holds.

    Example:
        >>> async def to_text(v):
        ...     return "" if v is None else v
        >>> async def from_text(v):
        ...     return None if v == "" else v
        >>> adapter = TransformAdapter(form, to_text, from_text)
        >>> async with adapter:
        ...     await TextSurface().mount(adapter.inner)
    """

    def __init__(
        self,
        outer: FieldBinding[T],
        forward: Callable[[T], Awaitable[U]],
        backward: Callable[[U], Awaitable[T]],
    ):
        self.outer = outer
        self.forward = forward
        self.backward = backward

        template = outer.template
        # a resolved template is converted once the adapter is entered
        seed = TemplateState.pending() if template.is_resolved else template
        self.inner: FieldBinding[U] = FieldBinding(
            seed, name=f"{outer.name}~" if outer.name else None
        )
        self._stack: AsyncExitStack | None = None
        self._tg: TaskGroup | None = None
        outer._on_destroy(self.inner.destroy)

    async def _to_inner(self, value: T) -> U:
        try:
            return await self.forward(value)
        except Exception as e:
            raise ConversionError(
                f"forward conversion failed for {self.outer!r}: {e}",
                details={"value": value},
                cause=e,
            ) from e

    async def _to_outer(self, value: U) -> T:
        try:
            return await self.backward(value)
        except Exception as e:
            raise ConversionError(
                f"backward conversion failed for {self.outer!r}: {e}",
                details={"value": value},
                cause=e,
            ) from e

    async def getter(self, stage: Stage) -> GetResult:
        result = await self.inner._get_at(stage)
        if not result.ok:
            return result
        return GetResult.success(await self._to_outer(result.value))

    async def setter(self, value: T) -> SetResult:
        return await self.inner.set(await self._to_inner(value))

    async def template_setter(self, value: Any, execute_set: bool = True) -> SetResult:
        if value is Pending:
            await self.inner.mark_template_pending()
            return SetResult.success()
        return await self.inner.set_template(await self._to_inner(value), execute_set)

    async def _seed_template(self, template: TemplateState) -> None:
        try:
            converted = await self._to_inner(template.value)
        except ConversionError as e:
            logger.error(f"Could not seed template of {self.inner!r}: {e}")
            return
        # a newer template may have landed while converting
        if self.inner.template.is_pending and self.outer.template is template:
            self.inner._assign_template(TemplateState.resolved(converted))

    def _bubble_change(self, detail: Any = None) -> None:
        self.outer.dispatch_event("change", detail)

    def _bubble_blur(self, detail: Any = None) -> None:
        self.outer.dispatch_event("blur", detail)

    def _follow_pending(self, template: TemplateState | None = None) -> None:
        if self.outer.is_pending:
            self.inner.mark_template_pending()

    async def _attach(self) -> None:
        try:
            await self.outer.ready(self.getter, self.setter, self.template_setter)
        except HydrationError as e:
            logger.error(f"Could not attach {self.outer!r}: {e}")

    async def __aenter__(self) -> TransformAdapter[T, U]:
        self._stack = AsyncExitStack()
        self._tg = await self._stack.enter_async_context(create_task_group())
        self.inner.add_event_listener("change", self._bubble_change)
        self.inner.add_event_listener("blur", self._bubble_blur)
        self.outer.add_event_listener("template_change", self._follow_pending)
        if self.outer.template.is_resolved and self.inner.template.is_pending:
            self._tg.start_soon(self._seed_template, self.outer.template)
        self._tg.start_soon(self._attach)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool | None:
        self.inner.remove_event_listener("change", self._bubble_change)
        self.inner.remove_event_listener("blur", self._bubble_blur)
        self.outer.remove_event_listener("template_change", self._follow_pending)
        self.inner.destroy()
        tg, self._tg = self._tg, None
        tg.cancel()
        stack, self._stack = self._stack, None
        return await stack.__aexit__(exc_type, exc, tb)
