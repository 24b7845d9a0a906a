# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import logging
from typing import TYPE_CHECKING

from . import ln as ln
from ._errors import ConversionError, FieldBindError, HydrationError, ValidatorError
from .binding import (
    BindingState,
    FieldBinding,
    GetResult,
    ObjectComposition,
    PendingWatcher,
    SetResult,
    Stage,
    TemplateState,
    TransformAdapter,
    Validation,
)
from .ln.types import Pending, Undefined, Unset
from .ln._lazy_init import lazy_import
from .version import __version__

if TYPE_CHECKING:
    from .config import AppSettings, settings
    from .form import Form, create_form
    from .surfaces import NumberSurface, TextSurface

logger = logging.getLogger(__name__)

_LAZY = {
    "Form": ("form", None),
    "create_form": ("form", None),
    "TextSurface": ("surfaces", None),
    "NumberSurface": ("surfaces", None),
    "AppSettings": ("config", None),
    "settings": ("config", None),
}


def __getattr__(name: str):
    return lazy_import(name, _LAZY, __name__, globals())


__all__ = (
    "__version__",
    "AppSettings",
    "BindingState",
    "ConversionError",
    "FieldBinding",
    "FieldBindError",
    "Form",
    "GetResult",
    "HydrationError",
    "NumberSurface",
    "ObjectComposition",
    "Pending",
    "PendingWatcher",
    "SetResult",
    "Stage",
    "TemplateState",
    "TextSurface",
    "TransformAdapter",
    "Undefined",
    "Unset",
    "Validation",
    "ValidatorError",
    "create_form",
    "ln",
    "logger",
    "settings",
)
