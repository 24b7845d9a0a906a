# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Record bindings backed by a tree of per-key child bindings.

The keys are never declared up front: a child binding is created the first
time its key is looked up, so the shape of the record is whatever the
consumer actually touches.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import AsyncExitStack
from typing import Any

from .._errors import HydrationError
from ..config import settings
from ..ln.concurrency import TaskGroup, create_task_group, gather
from ..ln.types import Pending
from .binding import FieldBinding
from .types import BindingState, GetResult, SetResult, Stage, TemplateState

__all__ = ("LazyFieldMap", "ObjectComposition", "child_template")

logger = logging.getLogger(__name__)


def child_template(parent: TemplateState, key: str) -> TemplateState:
    """Derive the template of child ``key`` from its parent's template."""
    if parent.is_pending:
        return TemplateState.pending()
    if parent.is_resolved:
        record = parent.value
        if isinstance(record, Mapping) and key in record:
            return TemplateState.resolved(record[key])
    return TemplateState.absent()


class LazyFieldMap(Mapping[str, FieldBinding[Any]]):
    """Add-only map from field name to child binding, filled on first lookup.

    ``fields["a"]`` always returns a binding, creating it on the first call.
    ``len``, iteration and ``in`` only see keys that have been materialized.
    """

    def __init__(self, parent: FieldBinding[Any]):
        self._parent = parent
        self._children: dict[str, FieldBinding[Any]] = {}
        self._listeners: list[tuple[str, Any]] = []

    def __getitem__(self, key: str) -> FieldBinding[Any]:
        child = self._children.get(key)
        if child is None:
            child = FieldBinding(
                child_template(self._parent.template, key),
                name=_child_name(self._parent, key),
            )
            for type_, listener in self._listeners:
                child.add_event_listener(type_, listener)
            self._children[key] = child
            if self._parent.state is BindingState.UNAVAILABLE:
                child.destroy()
        return child

    def get(self, key: str, default: Any = None) -> FieldBinding[Any] | Any:
        """Return an already materialized child without creating one."""
        return self._children.get(key, default)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._children))

    def __len__(self) -> int:
        return len(self._children)

    def __contains__(self, key: object) -> bool:
        return key in self._children

    def materialized(self) -> list[tuple[str, FieldBinding[Any]]]:
        return list(self._children.items())

    def listen(self, type_: str, listener: Any) -> None:
        """Subscribe ``listener`` on every child, present and future."""
        self._listeners.append((type_, listener))
        for child in self._children.values():
            child.add_event_listener(type_, listener)

    def unlisten(self, type_: str, listener: Any) -> None:
        self._listeners = [
            (t, h) for t, h in self._listeners if (t, h) != (type_, listener)
        ]
        for child in self._children.values():
            child.remove_event_listener(type_, listener)

    def destroy_all(self) -> None:
        for child in self._children.values():
            child.destroy()


class ObjectComposition:
    """Serve a record binding from per-key child bindings.

    Entering the context attaches the parent binding (this object acts as
    its surface) and forwards children's ``change``/``blur`` to it. Exiting
    destroys the parent, which in turn destroys every child.

    Example:
        >>> form = FieldBinding({"a": "x", "b": "y"})
        >>> async with ObjectComposition(form) as obj:
        ...     await TextSurface().mount(obj.fields["a"])
        ...     await TextSurface().mount(obj.fields["b"])
        ...     await form.get()
        GetResult(result='success', value={'a': 'x', 'b': 'y'})
    """

    def __init__(self, binding: FieldBinding[Any]):
        self.binding = binding
        self.fields = LazyFieldMap(binding)
        self._stack: AsyncExitStack | None = None
        self._tg: TaskGroup | None = None
        binding._on_destroy(self.fields.destroy_all)

    def _bubble_change(self, detail: Any = None) -> None:
        self.binding.dispatch_event("change", detail)

    def _bubble_blur(self, detail: Any = None) -> None:
        self.binding.dispatch_event("blur", detail)

    def _follow_pending(self, template: TemplateState | None = None) -> None:
        if self.binding.is_pending:
            for _, child in self.fields.materialized():
                child.mark_template_pending()

    async def getter(self, stage: Stage) -> GetResult:
        children = self.fields.materialized()
        results = await gather(*(child._get_at(stage) for _, child in children))
        keyed = list(zip((key for key, _ in children), results))

        if self._report_unavailable("Getting", keyed):
            return GetResult.unavailable()
        if any(r.result == "validation_fault" for _, r in keyed):
            return GetResult.validation_fault()
        return GetResult.success({key: r.value for key, r in keyed})

    async def setter(self, value: Mapping[str, Any]) -> SetResult:
        children = self.fields.materialized()
        results = await gather(
            *(child.set(_lookup(value, key)) for key, child in children)
        )
        keyed = list(zip((key for key, _ in children), results))
        if self._report_unavailable("Setting", keyed):
            return SetResult.unavailable()
        return SetResult.success()

    async def template_setter(self, value: Any, execute_set: bool = True) -> SetResult:
        template = self.binding.template
        children = self.fields.materialized()

        if template.is_pending or value is Pending:
            await gather(*(child.mark_template_pending() for _, child in children))
            return SetResult.success()

        if not template.is_resolved:
            # no template: children have nothing to default to or write
            for _, child in children:
                child._assign_template(TemplateState.absent())
            return SetResult.success()

        record = template.value
        present = [
            (key, child)
            for key, child in children
            if isinstance(record, Mapping) and key in record
        ]
        results = await gather(
            *(child.set_template(record[key], execute_set) for key, child in present)
        )
        keyed = list(zip((key for key, _ in present), results))

        if self._report_unavailable("Setting template for", keyed):
            return SetResult.unavailable()
        return SetResult.success()

    def _report_unavailable(self, action: str, keyed: list[tuple[str, Any]]) -> bool:
        missing = [key for key, r in keyed if r.result == "unavailable"]
        if missing and settings.LOG_UNAVAILABLE_CHILDREN:
            logger.error(
                f"{action} object binding {self.binding!r}: "
                f"{', '.join(missing)} is unavailable."
            )
        return bool(missing)

    async def _attach(self) -> None:
        try:
            await self.binding.ready(self.getter, self.setter, self.template_setter)
        except HydrationError as e:
            # waiting operations already received the error
            logger.error(f"Could not attach {self.binding!r}: {e}")

    async def __aenter__(self) -> ObjectComposition:
        self._stack = AsyncExitStack()
        self._tg = await self._stack.enter_async_context(create_task_group())
        self.fields.listen("change", self._bubble_change)
        self.fields.listen("blur", self._bubble_blur)
        self.binding.add_event_listener("template_change", self._follow_pending)
        self._tg.start_soon(self._attach)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool | None:
        self.binding.destroy()
        self.fields.unlisten("change", self._bubble_change)
        self.fields.unlisten("blur", self._bubble_blur)
        self.binding.remove_event_listener("template_change", self._follow_pending)
        tg, self._tg = self._tg, None
        tg.cancel()
        stack, self._stack = self._stack, None
        return await stack.__aexit__(exc_type, exc, tb)


def _lookup(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(key)
    return getattr(value, key, None)


def _child_name(parent: FieldBinding[Any], key: str) -> str:
    return f"{parent.name}.{key}" if parent.name else key
