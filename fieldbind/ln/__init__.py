# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from . import types
from .concurrency import *  # noqa: F403
from .types import Pending, Undefined, Unset

__all__ = (
    "types",
    "Pending",
    "Undefined",
    "Unset",
    "get_cancelled_exc_class",
    "non_cancel_subgroup",
    "gather",
    "Deferred",
    "TaskGroup",
    "create_task_group",
    "maybe_await",
)
