# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Headless reference surfaces.

These are stand-ins for real input widgets: they hold a text value, attach
to a binding with ``mount`` and report ``unavailable`` once unmounted. They
are what the test-suite and examples drive bindings with.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from .binding import FieldBinding, GetResult, SetResult, Stage

__all__ = ("TextSurface", "NumberSurface")

logger = logging.getLogger(__name__)


class TextSurface:
    """A text input: the live value is a string."""

    def __init__(self, text: str = ""):
        self.text = text
        self.binding: FieldBinding[Any] | None = None

    @property
    def mounted(self) -> bool:
        return self.binding is not None

    def read(self) -> Any:
        return self.text

    def write(self, value: Any) -> None:
        self.text = "" if value is None else str(value)

    async def _getter(self, stage: Stage) -> GetResult:
        if not self.mounted:
            return GetResult.unavailable()
        return GetResult.success(self.read())

    async def _setter(self, value: Any) -> SetResult:
        if not self.mounted:
            return SetResult.unavailable()
        self.write(value)
        return SetResult.success()

    async def mount(self, binding: FieldBinding[Any]) -> None:
        if self.binding is not None:
            raise RuntimeError(f"{type(self).__name__} is already mounted")
        self.binding = binding
        await binding.ready(self._getter, self._setter)

    def unmount(self) -> None:
        binding, self.binding = self.binding, None
        if binding is not None:
            binding.destroy()

    def _dispatch(self, type_: str) -> None:
        if self.binding is None:
            logger.debug(f"{type(self).__name__}: '{type_}' dropped, not mounted")
            return
        self.binding.dispatch_event(type_)

    def type(self, text: str) -> None:
        """Append ``text`` one character at a time, one ``change`` per keystroke."""
        for ch in text:
            self.text += ch
            self._dispatch("change")

    def clear(self) -> None:
        self.text = ""
        self._dispatch("change")

    def blur(self) -> None:
        self._dispatch("blur")


class NumberSurface(TextSurface):
    """A numeric input: reads ``nan`` when empty or not a number."""

    def read(self) -> float:
        try:
            return float(self.text)
        except ValueError:
            return math.nan

    def write(self, value: Any) -> None:
        if value is None or (isinstance(value, float) and math.isnan(value)):
            self.text = ""
        elif isinstance(value, float) and value.is_integer():
            self.text = str(int(value))
        else:
            self.text = str(value)
