# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Core async primitives (thin wrappers over anyio)."""

from __future__ import annotations

from typing import Generic, TypeVar

import anyio

from ..types import Unset

T = TypeVar("T")

__all__ = ("Deferred",)


class Deferred(Generic[T]):
    """Single-assignment result slot shared by any number of waiters.

    The first ``resolve``/``reject`` wins; later calls are ignored and return
    False. Every waiter observes the same outcome. The underlying
    ``anyio.Event`` is created on first wait, so a Deferred can be built
    outside a running event loop.
    """

    __slots__ = ("_event", "_value", "_error", "_done")

    def __init__(self) -> None:
        self._event: anyio.Event | None = None
        self._value: T = Unset  # type: ignore[assignment]
        self._error: BaseException | None = None
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def resolve(self, value: T) -> bool:
        if self._done:
            return False
        self._value = value
        self._settle()
        return True

    def reject(self, error: BaseException) -> bool:
        if self._done:
            return False
        self._error = error
        self._settle()
        return True

    def result(self) -> T:
        """Return the settled value without waiting."""
        if not self._done:
            raise RuntimeError("Deferred is not settled yet")
        if self._error is not None:
            raise self._error
        return self._value

    async def wait(self) -> T:
        if not self._done:
            if self._event is None:
                self._event = anyio.Event()
            await self._event.wait()
        return self.result()

    def _settle(self) -> None:
        self._done = True
        if self._event is not None:
            self._event.set()
