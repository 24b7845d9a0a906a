# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Error/cancellation utilities with backend-agnostic behavior."""

from __future__ import annotations

import anyio

__all__ = ("get_cancelled_exc_class", "non_cancel_subgroup")


def get_cancelled_exc_class() -> type[BaseException]:
    """Return the backend-native cancellation exception class."""
    return anyio.get_cancelled_exc_class()


def non_cancel_subgroup(
    eg: BaseExceptionGroup,
) -> BaseExceptionGroup | None:
    """Drop backend cancellations from ``eg``; None if nothing else is left."""
    cancelled = get_cancelled_exc_class()
    _, rest = eg.split(cancelled)
    return rest
