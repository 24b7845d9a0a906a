# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import pytest

import fieldbind
from fieldbind import Form, GetResult, SetResult, create_form
from fieldbind.ln.types import Pending
from fieldbind.surfaces import TextSurface

from .helpers import settle


class TestForm:
    def test_create_form(self):
        form = create_form({"a": 1})
        assert isinstance(form, Form)
        assert form.binding.name == "form"
        assert form.binding.template.value == {"a": 1}
        assert "form" in repr(form)

    @pytest.mark.anyio
    async def test_collect_validates_at_submit(self, anyio_backend):
        async def required(value, fail):
            if not value:
                fail("required")

        form = create_form("")
        async with form.binding.validation(required) as v:
            await TextSurface().mount(form.binding)
            await settle()
            assert await form.collect() == GetResult.validation_fault()
            assert v.errors == ["required"]

    @pytest.mark.anyio
    async def test_reset_restores_template(self, anyio_backend):
        form = create_form({"name": "Ann"})
        surface = TextSurface()
        async with form.binding.object() as obj:
            await surface.mount(obj.fields["name"])
            await settle()

            await form.binding.set({"name": "Bob"})
            assert surface.text == "Bob"

            assert await form.reset() == SetResult.success()
            assert surface.text == "Ann"

    @pytest.mark.anyio
    async def test_reset_without_resolved_template(self, anyio_backend):
        form = create_form(Pending)
        surface = TextSurface("typed")
        await surface.mount(form.binding)

        assert await form.reset() == SetResult.success()
        assert surface.text == "typed"


def test_lazy_exports():
    assert fieldbind.TextSurface is TextSurface
    assert fieldbind.settings.EVENT_HANDLER_ERRORS in ("log", "raise")
    with pytest.raises(AttributeError):
        fieldbind.does_not_exist
