# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from .errors import get_cancelled_exc_class, non_cancel_subgroup
from .patterns import gather
from .primitives import Deferred
from .task import TaskGroup, create_task_group
from .utils import maybe_await

__all__ = (
    "get_cancelled_exc_class",
    "non_cancel_subgroup",
    "gather",
    "Deferred",
    "TaskGroup",
    "create_task_group",
    "maybe_await",
)
