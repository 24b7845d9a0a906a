# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Helpers for observing operations that are still waiting."""

from collections.abc import Awaitable
from typing import Any

import anyio

from fieldbind.binding import GetResult, SetResult, Stage


async def settle(rounds: int = 20) -> None:
    """Yield to the event loop until woken tasks have had a chance to run."""
    for _ in range(rounds):
        await anyio.sleep(0)


class Spawned:
    """Run an awaitable in ``tg`` and expose whether it finished, and with what."""

    def __init__(self, tg, aw: Awaitable[Any]):
        self.done = False
        self.result: Any = None
        self.error: BaseException | None = None
        tg.start_soon(self._run, aw)

    async def _run(self, aw: Awaitable[Any]) -> None:
        try:
            self.result = await aw
        except Exception as e:
            self.error = e
        self.done = True


class ScriptedSurface:
    """A surface whose callables record calls and can be held at a gate."""

    def __init__(self, value: Any = "x", *, gate: anyio.Event | None = None):
        self.value = value
        self.gate = gate
        self.calls: list[tuple[str, Any]] = []

    async def getter(self, stage: Stage) -> GetResult:
        self.calls.append(("get", stage))
        return GetResult.success(self.value)

    async def setter(self, value: Any) -> SetResult:
        self.calls.append(("set", value))
        if self.gate is not None:
            await self.gate.wait()
        self.value = value
        return SetResult.success()
