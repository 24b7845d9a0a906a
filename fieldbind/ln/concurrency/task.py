# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Task group wrapper (thin facade over anyio.create_task_group)."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

import anyio
import anyio.abc

__all__ = ("TaskGroup", "create_task_group")


class TaskGroup:
    """Minimal TaskGroup with stable surface."""

    __slots__ = ("_tg",)

    def __init__(self, tg: anyio.abc.TaskGroup) -> None:
        self._tg = tg

    def start_soon(
        self,
        func: Callable[..., Awaitable[Any]],
        *args: Any,
        name: str | None = None,
    ) -> None:
        self._tg.start_soon(func, *args, name=name)

    def cancel(self) -> None:
        self._tg.cancel_scope.cancel()


@asynccontextmanager
async def create_task_group() -> AsyncIterator[TaskGroup]:
    async with anyio.create_task_group() as tg:
        yield TaskGroup(tg)
