# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import anyio
import pytest

from fieldbind.ln.concurrency import Deferred, gather, maybe_await


class TestDeferred:
    def test_can_be_built_outside_an_event_loop(self):
        slot = Deferred()
        assert not slot.done
        with pytest.raises(RuntimeError):
            slot.result()

    def test_first_resolution_wins(self):
        slot = Deferred()
        assert slot.resolve(1) is True
        assert slot.resolve(2) is False
        assert slot.reject(ValueError("late")) is False
        assert slot.result() == 1

    @pytest.mark.anyio
    async def test_wait_after_resolve_returns_immediately(self, anyio_backend):
        slot = Deferred()
        slot.resolve("done")
        with anyio.fail_after(1):
            assert await slot.wait() == "done"

    @pytest.mark.anyio
    async def test_every_waiter_sees_the_same_value(self, anyio_backend):
        slot = Deferred()
        seen = []

        async def waiter():
            seen.append(await slot.wait())

        async with anyio.create_task_group() as tg:
            for _ in range(3):
                tg.start_soon(waiter)
            await anyio.sleep(0)
            assert seen == []
            slot.resolve(42)

        assert seen == [42, 42, 42]

    @pytest.mark.anyio
    async def test_reject_raises_for_waiters(self, anyio_backend):
        slot = Deferred()
        slot.reject(KeyError("boom"))
        with pytest.raises(KeyError):
            await slot.wait()


class TestGather:
    @pytest.mark.anyio
    async def test_results_keep_input_order(self, anyio_backend):
        async def delayed(value, delay):
            await anyio.sleep(delay)
            return value

        results = await gather(delayed("a", 0.02), delayed("b", 0), delayed("c", 0.01))
        assert results == ["a", "b", "c"]

    @pytest.mark.anyio
    async def test_empty(self, anyio_backend):
        assert await gather() == []

    @pytest.mark.anyio
    async def test_first_error_is_raised_unwrapped(self, anyio_backend):
        async def ok():
            await anyio.sleep(1)

        async def bad():
            raise ValueError("bad")

        with pytest.raises(ValueError, match="bad"):
            await gather(ok(), bad())


@pytest.mark.anyio
async def test_maybe_await(anyio_backend):
    async def coro():
        return "async"

    assert await maybe_await(coro()) == "async"
    assert await maybe_await("plain") == "plain"
