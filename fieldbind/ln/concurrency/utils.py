# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import inspect
from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")

__all__ = ("maybe_await",)


async def maybe_await(result: T | Awaitable[T]) -> T:
    """Await ``result`` when a sync-or-async callback handed back an awaitable."""
    if inspect.isawaitable(result):
        return await result
    return result
