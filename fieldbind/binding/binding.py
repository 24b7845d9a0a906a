# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""The binding state machine.

A ``FieldBinding`` connects a controller, which reads and writes a logical
value, with a surface, which holds the live value. The two show up in any
order: until a surface calls :meth:`FieldBinding.ready`, ``get``/``set``/
``set_template`` wait on shared result slots, and the first ``ready`` call
replays them (set, then get, then set_template) exactly once.

State transitions::

    UNREADY --ready()--> READY --destroy()--> UNAVAILABLE
       \\______________destroy()______________/
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Generator
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .._errors import HydrationError
from ..ln.concurrency import Deferred, get_cancelled_exc_class
from ..ln.types import Pending, Undefined, Unset
from .eventbus import EventBus, Handler
from .types import (
    EVENT_NAMES,
    BindingState,
    GetResult,
    Getter,
    SetResult,
    Setter,
    Stage,
    StageValidator,
    TemplateSetter,
    TemplateState,
)
from .validation import ValidationPipeline, Validator

if TYPE_CHECKING:
    from .composition import ObjectComposition
    from .pending import PendingWatcher
    from .transform import TransformAdapter
    from .validation import Validation

T = TypeVar("T")
U = TypeVar("U")

__all__ = ("FieldBinding", "PendingNotice")

logger = logging.getLogger(__name__)


class _Unready:
    """Payload of the UNREADY state: shared result slots and replay values."""

    __slots__ = (
        "get_slot",
        "set_slot",
        "template_slot",
        "replay_value",
        "replay_template",
        "replay_execute_set",
        "hydrating",
    )

    def __init__(self) -> None:
        self.get_slot: Deferred[GetResult] = Deferred()
        self.set_slot: Deferred[SetResult] = Deferred()
        self.template_slot: Deferred[SetResult] = Deferred()
        self.replay_value: Any = Unset
        self.replay_template: Any = Unset
        self.replay_execute_set = True
        self.hydrating = False

    def renewed(self) -> _Unready:
        """Fresh slots carrying over the recorded replay values."""
        fresh = _Unready()
        fresh.replay_value = self.replay_value
        fresh.replay_template = self.replay_template
        fresh.replay_execute_set = self.replay_execute_set
        return fresh

    def settle_unavailable(self) -> None:
        self.get_slot.resolve(GetResult.unavailable())
        self.set_slot.resolve(SetResult.unavailable())
        self.template_slot.resolve(SetResult.unavailable())

    def reject(self, error: BaseException) -> None:
        for slot in (self.get_slot, self.set_slot, self.template_slot):
            slot.reject(error)


class _Ready:
    __slots__ = ("getter", "setter", "template_setter")

    def __init__(
        self,
        getter: Getter,
        setter: Setter,
        template_setter: TemplateSetter | None,
    ) -> None:
        self.getter = getter
        self.setter = setter
        self.template_setter = template_setter


class _Unavailable:
    __slots__ = ()


_UNAVAILABLE = _Unavailable()


class PendingNotice:
    """Awaitable handed back by :meth:`FieldBinding.mark_template_pending`."""

    __slots__ = ("_template_setter",)

    def __init__(self, template_setter: TemplateSetter | None):
        self._template_setter = template_setter

    def __await__(self) -> Generator[Any, None, SetResult]:
        return self._notify().__await__()

    async def _notify(self) -> SetResult:
        if self._template_setter is None:
            return SetResult.success()
        return await self._template_setter(Pending, False)


class FieldBinding(Generic[T]):
    """One addressable piece of form state.

    Args:
        template: Initial template. A ``TemplateState``, the ``Pending``
            sentinel, ``Undefined`` (absent, the default) or a plain value,
            which becomes a resolved template.
        name: Optional label used in logs.

    Attributes:
        events: The binding's own ``EventBus`` (``change``, ``blur``,
            ``template_change``).
    """

    def __init__(self, template: Any = Undefined, *, name: str | None = None):
        self.name = name
        self.events = EventBus()
        self._status: _Unready | _Ready | _Unavailable = _Unready()
        self._template = TemplateState.coerce(template)
        self._validators = ValidationPipeline()
        self._teardowns: list[Callable[[], None]] = []
        self._attach_seq = 0

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return (
            f"<FieldBinding{label} state={self.state.value} "
            f"template={self._template.status}>"
        )

    @property
    def state(self) -> BindingState:
        match self._status:
            case _Ready():
                return BindingState.READY
            case _Unready():
                return BindingState.UNREADY
            case _:
                return BindingState.UNAVAILABLE

    @property
    def template(self) -> TemplateState:
        return self._template

    @property
    def is_pending(self) -> bool:
        """True while the template is waiting on an asynchronous initial value."""
        return self._template.is_pending

    # ------------------------------------------------------------------ #
    # controller operations
    # ------------------------------------------------------------------ #

    async def get(self, submit: bool = False) -> GetResult:
        """Read the value, validated at the ``submit`` or ``input`` stage."""
        return await self._get_at(Stage.SUBMIT if submit else Stage.INPUT)

    async def set(self, value: T) -> SetResult:
        status = self._status
        if isinstance(status, _Ready):
            return await status.setter(value)
        if isinstance(status, _Unready):
            status.replay_value = value
            return await status.set_slot.wait()
        return SetResult.unavailable()

    async def set_template(self, value: T, execute_set: bool = True) -> SetResult:
        """Resolve the template to ``value``; also write it when ``execute_set``."""
        self._assign_template(TemplateState.resolved(value))

        status = self._status
        if isinstance(status, _Ready):
            if status.template_setter is not None:
                return await status.template_setter(value, execute_set)
            if execute_set:
                return await status.setter(value)
            return SetResult.success()
        if isinstance(status, _Unready):
            status.replay_template = value
            status.replay_execute_set = execute_set
            return await status.template_slot.wait()
        return SetResult.unavailable()

    def mark_template_pending(self) -> PendingNotice:
        """Flag the template as waiting for a value that has not arrived yet.

        The template flips and ``template_change`` fires before this returns.
        Await the returned notice to also run the attached template setter
        with the ``Pending`` marker; ignoring it is fine.
        """
        self._assign_template(TemplateState.pending())
        status = self._status
        if isinstance(status, _Ready):
            return PendingNotice(status.template_setter)
        return PendingNotice(None)

    # ------------------------------------------------------------------ #
    # surface operations
    # ------------------------------------------------------------------ #

    async def ready(
        self,
        getter: Getter,
        setter: Setter,
        template_setter: TemplateSetter | None = None,
    ) -> None:
        """Attach a surface.

        The first call while unready hydrates the surface and settles every
        waiting operation. A call that arrives while that hydration is still
        running does not hydrate again, but the most recent call's callables
        are the ones left attached. An unavailable binding ignores the call.
        If the hydrating call is cancelled, waiting operations receive
        ``unavailable`` and the binding stays unready with its replay values,
        so the next ``ready`` hydrates again.

        Raises:
            HydrationError: The surface's getter or setter raised while
                hydrating. Waiting operations receive the same error and the
                binding is destroyed.
        """
        self._attach_seq += 1
        seq = self._attach_seq

        status = self._status
        if isinstance(status, _Unavailable):
            logger.debug(f"{self!r}: ready() ignored, binding is unavailable")
            return

        if isinstance(status, _Unready) and not status.hydrating:
            status.hydrating = True
            try:
                await self._hydrate(status, getter, setter, template_setter)
            except get_cancelled_exc_class():
                status.settle_unavailable()
                if self._status is status:
                    # the next surface hydrates from scratch
                    self._status = status.renewed()
                raise
            except Exception as e:
                error = HydrationError(
                    f"Surface failed while hydrating {self!r}: {e}",
                    details={"binding": self.name},
                    cause=e,
                )
                status.reject(error)
                self.destroy()
                raise error from e

        if isinstance(self._status, _Unavailable):
            logger.debug(f"{self!r}: destroyed during hydration, staying unavailable")
            return
        if seq != self._attach_seq:
            # a more recent surface has attached in the meantime
            return
        self._status = _Ready(getter, setter, template_setter)
        logger.debug(f"{self!r}: surface attached")

    async def _hydrate(
        self,
        status: _Unready,
        getter: Getter,
        setter: Setter,
        template_setter: TemplateSetter | None,
    ) -> None:
        initial = status.replay_value
        if initial is Unset and self._template.is_resolved:
            initial = self._template.value

        if initial is not Unset:
            status.set_slot.resolve(await setter(initial))
        else:
            status.set_slot.resolve(SetResult.success())

        status.get_slot.resolve(await getter(Stage.INPUT))

        if status.replay_template is Unset:
            status.template_slot.resolve(SetResult.success())
            return

        if template_setter is not None:
            result = await template_setter(
                status.replay_template, status.replay_execute_set
            )
        elif status.replay_execute_set:
            result = await setter(status.replay_template)
        else:
            result = SetResult.success()
        status.template_slot.resolve(result)

    def destroy(self) -> None:
        """Tear the binding down; it never becomes ready again."""
        status = self._status
        if isinstance(status, _Unavailable):
            return
        if isinstance(status, _Unready) and not status.hydrating:
            status.settle_unavailable()

        self._status = _UNAVAILABLE
        logger.debug(f"{self!r}: destroyed")

        teardowns, self._teardowns = self._teardowns, []
        for fn in teardowns:
            fn()

    # ------------------------------------------------------------------ #
    # events
    # ------------------------------------------------------------------ #

    def add_event_listener(self, type: str, listener: Handler) -> None:
        self.events.subscribe(_check_event(type), listener)

    def remove_event_listener(self, type: str, listener: Handler) -> None:
        self.events.unsubscribe(_check_event(type), listener)

    def dispatch_event(self, type: str, detail: Any = None) -> None:
        """Notify listeners synchronously, in registration order."""
        self.events.emit(_check_event(type), detail)

    # ------------------------------------------------------------------ #
    # helpers bound to this binding
    # ------------------------------------------------------------------ #

    def object(self) -> ObjectComposition:
        """Serve this binding as a record of lazily created child bindings."""
        from .composition import ObjectComposition

        return ObjectComposition(self)

    def validation(
        self,
        validator: Validator,
        *,
        on_errors: Callable[[list[Any]], None] | None = None,
    ) -> Validation[Any]:
        from .validation import Validation

        return Validation(self, validator, on_errors=on_errors)

    def transform(
        self,
        forward: Callable[[T], Awaitable[U]],
        backward: Callable[[U], Awaitable[T]],
    ) -> TransformAdapter[T, U]:
        """View this binding through ``forward``/``backward`` conversions."""
        from .transform import TransformAdapter

        return TransformAdapter(self, forward, backward)

    def watch_pending(
        self, on_change: Callable[[bool], None] | None = None
    ) -> PendingWatcher:
        from .pending import PendingWatcher

        return PendingWatcher(self, on_change)

    # ------------------------------------------------------------------ #
    # package-internal hooks (validation, composition, transform)
    # ------------------------------------------------------------------ #

    async def _get_raw(self, stage: Stage) -> GetResult:
        status = self._status
        if isinstance(status, _Ready):
            return await status.getter(stage)
        if isinstance(status, _Unready):
            return await status.get_slot.wait()
        return GetResult.unavailable()

    async def _get_at(self, stage: Stage) -> GetResult:
        result = await self._get_raw(stage)
        if not result.ok:
            return result
        if not await self._validators.run(stage, result.value):
            return GetResult.validation_fault()
        return result

    def _register_validator(self, fn: StageValidator) -> None:
        self._validators.register(fn)

    def _unregister_validator(self, fn: StageValidator) -> None:
        self._validators.unregister(fn)

    def _assign_template(self, template: TemplateState) -> None:
        self._template = template
        self.dispatch_event("template_change", template)

    def _on_destroy(self, fn: Callable[[], None]) -> None:
        """Run ``fn`` once when the binding is destroyed (immediately if it already is)."""
        if isinstance(self._status, _Unavailable):
            fn()
            return
        self._teardowns.append(fn)


def _check_event(type: str) -> str:
    if type not in EVENT_NAMES:
        raise ValueError(
            f"Unknown binding event {type!r}, expected one of {EVENT_NAMES}"
        )
    return type
