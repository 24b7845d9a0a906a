# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import logging

import pytest

from fieldbind.binding import eventbus as eventbus_module
from fieldbind.binding.eventbus import EventBus
from fieldbind.config import AppSettings


class TestEventBus:
    def test_handlers_run_in_registration_order(self):
        bus = EventBus()
        calls = []
        bus.subscribe("change", lambda d: calls.append(("first", d)))
        bus.subscribe("change", lambda d: calls.append(("second", d)))

        bus.emit("change", 1)

        assert calls == [("first", 1), ("second", 1)]

    def test_subscribe_is_idempotent(self):
        bus = EventBus()
        calls = []

        def handler(detail):
            calls.append(detail)

        bus.subscribe("blur", handler)
        bus.subscribe("blur", handler)
        bus.emit("blur", None)

        assert calls == [None]

    def test_unsubscribe(self):
        bus = EventBus()
        calls = []

        def handler(detail):
            calls.append(detail)

        bus.subscribe("change", handler)
        bus.unsubscribe("change", handler)
        bus.unsubscribe("change", handler)
        bus.emit("change", 1)

        assert calls == []

    def test_failing_handler_is_isolated(self, caplog):
        """
        GIVEN two handlers where the first raises
        WHEN the topic is emitted
        THEN the second still runs and the failure is logged
        """
        bus = EventBus()
        calls = []

        def broken(detail):
            raise RuntimeError("listener broke")

        bus.subscribe("change", broken)
        bus.subscribe("change", calls.append)

        with caplog.at_level(logging.ERROR):
            bus.emit("change", "x")

        assert calls == ["x"]
        assert "listener broke" in caplog.text

    def test_raise_mode_propagates(self, monkeypatch):
        monkeypatch.setattr(
            eventbus_module,
            "settings",
            AppSettings(_env_file=None, EVENT_HANDLER_ERRORS="raise"),
        )
        bus = EventBus()

        def broken(detail):
            raise RuntimeError("listener broke")

        bus.subscribe("change", broken)
        with pytest.raises(RuntimeError):
            bus.emit("change", None)

