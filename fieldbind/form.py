# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Any, Generic, TypeVar

from .binding import FieldBinding, GetResult, SetResult
from .ln.types import Undefined

T = TypeVar("T")

__all__ = ("Form", "create_form")


class Form(Generic[T]):
    """Root of a form: one binding plus the controller-side shortcuts."""

    def __init__(self, template: Any = Undefined, *, name: str | None = "form"):
        self.binding: FieldBinding[T] = FieldBinding(template, name=name)

    def __repr__(self) -> str:
        return f"Form({self.binding!r})"

    async def collect(self) -> GetResult:
        """Read the whole form at the submit stage."""
        return await self.binding.get(submit=True)

    async def reset(self) -> SetResult:
        """Write the resolved template back into the form.

        Does nothing when the template is absent or still pending.
        """
        template = self.binding.template
        if not template.is_resolved:
            return SetResult.success()
        return await self.binding.set_template(template.value, True)


def create_form(template: Any = Undefined, *, name: str | None = "form") -> Form[Any]:
    return Form(template, name=name)
