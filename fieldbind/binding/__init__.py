# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from .binding import FieldBinding, PendingNotice
from .composition import LazyFieldMap, ObjectComposition, child_template
from .eventbus import EventBus
from .pending import PendingWatcher
from .transform import TransformAdapter
from .types import (
    EVENT_NAMES,
    BindingState,
    EventName,
    GetResult,
    Getter,
    SetResult,
    Setter,
    Stage,
    TemplateSetter,
    TemplateState,
)
from .validation import Validation, ValidationPipeline, collect_failures

__all__ = (
    "FieldBinding",
    "PendingNotice",
    "LazyFieldMap",
    "ObjectComposition",
    "child_template",
    "EventBus",
    "PendingWatcher",
    "TransformAdapter",
    "EVENT_NAMES",
    "BindingState",
    "EventName",
    "GetResult",
    "Getter",
    "SetResult",
    "Setter",
    "Stage",
    "TemplateSetter",
    "TemplateState",
    "Validation",
    "ValidationPipeline",
    "collect_failures",
)
