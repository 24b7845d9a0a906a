# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .binding import FieldBinding
from .types import TemplateState

__all__ = ("PendingWatcher",)


class PendingWatcher:
    """Track whether a binding's template is still waiting for its value.

    Use as a context manager; ``pending`` stays in sync with every
    ``template_change`` the binding emits while the context is open, and
    ``on_change`` is called whenever it flips.
    """

    def __init__(
        self,
        binding: FieldBinding[Any],
        on_change: Callable[[bool], None] | None = None,
    ):
        self.binding = binding
        self.on_change = on_change
        self.pending = binding.is_pending

    def _on_template_change(self, template: TemplateState | None = None) -> None:
        pending = self.binding.is_pending
        if pending == self.pending:
            return
        self.pending = pending
        if self.on_change is not None:
            self.on_change(pending)

    def __enter__(self) -> PendingWatcher:
        self.pending = self.binding.is_pending
        self.binding.add_event_listener("template_change", self._on_template_change)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.binding.remove_event_listener("template_change", self._on_template_change)
