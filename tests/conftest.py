# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import pytest

from fieldbind.surfaces import NumberSurface, TextSurface


@pytest.fixture
def anyio_backend():
    """Run async tests on asyncio only; the engine has no backend specifics."""
    return "asyncio"


@pytest.fixture
def text_surface():
    return TextSurface()


@pytest.fixture
def number_surface():
    return NumberSurface()
