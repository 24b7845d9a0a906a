# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Structured concurrency coordination built on AnyIO task groups."""

from __future__ import annotations

from collections.abc import Awaitable
from typing import TypeVar

from .errors import non_cancel_subgroup
from .task import create_task_group

T = TypeVar("T")

__all__ = ("gather",)


async def gather(*aws: Awaitable[T]) -> list[T]:
    """Run awaitables concurrently, return list of results.

    The first exception cancels the remaining tasks and is re-raised.

    Args:
        *aws: Awaitables to execute concurrently

    Returns:
        List of results in same order as input awaitables
    """
    if not aws:
        return []

    results: list[T | None] = [None] * len(aws)

    async def _runner(idx: int, aw: Awaitable[T]) -> None:
        results[idx] = await aw

    try:
        async with create_task_group() as tg:
            for i, aw in enumerate(aws):
                tg.start_soon(_runner, i, aw)
    except BaseExceptionGroup as eg:
        rest = non_cancel_subgroup(eg)
        if rest is not None:
            if len(rest.exceptions) == 1:
                raise rest.exceptions[0] from rest
            raise rest
        raise

    return results  # type: ignore
