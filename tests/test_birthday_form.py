# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""A birthday form: three numeric fields validated as one record."""

import math
from datetime import date

import anyio
import pytest

from fieldbind import GetResult, create_form
from fieldbind.surfaces import NumberSurface

from .helpers import Spawned, settle

TODAY = date(2025, 1, 1)
PARTS = ("year", "month", "day")


def adult(value, fail):
    missed = [key for key in PARTS if math.isnan(value[key])]
    if missed:
        fail({"type": "missed", "name": missed}, "submit")
        return

    birthday = date(*(int(value[key]) for key in PARTS))
    age = TODAY.year - birthday.year
    if (TODAY.month, TODAY.day) < (birthday.month, birthday.day):
        age -= 1
    if age < 20:
        fail({"type": "young"}, "blur")


@pytest.mark.anyio
async def test_birthday_form(anyio_backend):
    """
    GIVEN a form of three empty number fields with an age validator
    WHEN it is collected before and after the inputs mount, then filled in
    THEN missing parts are reported at submit and the age check fires on blur
    """
    form = create_form({key: math.nan for key in PARTS})
    surfaces = {key: NumberSurface() for key in PARTS}

    async with anyio.create_task_group() as tg:
        async with form.binding.object() as obj, form.binding.validation(adult) as v:
            fields = {key: obj.fields[key] for key in PARTS}
            collected = Spawned(tg, form.collect())
            await settle()
            assert not collected.done

            for key in PARTS:
                await surfaces[key].mount(fields[key])
            await settle()

            assert collected.result == GetResult.validation_fault()
            assert v.errors == [{"type": "missed", "name": list(PARTS)}]

            surfaces["year"].type("2010")
            surfaces["month"].type("1")
            surfaces["day"].type("1")
            await settle()
            assert v.errors == []

            surfaces["day"].blur()
            await settle()
            assert v.errors == [{"type": "young"}]

            surfaces["year"].clear()
            surfaces["year"].type("2000")
            surfaces["year"].blur()
            await settle()
            assert v.errors == []

            assert await form.collect() == GetResult.success(
                {"year": 2000.0, "month": 1.0, "day": 1.0}
            )
