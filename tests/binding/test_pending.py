# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import pytest

from fieldbind.binding import FieldBinding, PendingWatcher
from fieldbind.ln.types import Pending
from fieldbind.surfaces import TextSurface


class TestPendingWatcher:
    @pytest.mark.parametrize(
        "template, expected",
        [("value", False), (None, False), (Pending, True)],
    )
    def test_initial_state(self, template, expected):
        with FieldBinding(template).watch_pending() as watcher:
            assert watcher.pending is expected

    def test_absent_template_is_not_pending(self):
        with PendingWatcher(FieldBinding()) as watcher:
            assert watcher.pending is False

    @pytest.mark.anyio
    async def test_follows_template_changes(self, anyio_backend):
        """
        GIVEN a binding whose template starts pending
        WHEN the template resolves and is later marked pending again
        THEN the watcher flips each time and reports every flip
        """
        binding = FieldBinding(Pending)
        await TextSurface().mount(binding)
        flips = []

        with binding.watch_pending(flips.append) as watcher:
            assert watcher.pending is True

            await binding.set_template("loaded")
            assert watcher.pending is False

            await binding.set_template("again")
            await binding.mark_template_pending()
            assert watcher.pending is True

        binding.mark_template_pending()
        await binding.set_template("after")
        assert flips == [False, True]
