# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Final, Literal

__all__ = (
    "Undefined",
    "Unset",
    "Pending",
    "SingletonType",
    "UndefinedType",
    "UnsetType",
    "PendingType",
)


class _SingletonMeta(type):
    """Metaclass that guarantees exactly one instance per subclass.

    This ensures that sentinel values maintain identity across the entire application,
    allowing safe identity checks with 'is' operator.
    """

    _cache: dict[type, SingletonType] = {}

    def __call__(cls, *a, **kw):
        if cls not in cls._cache:
            cls._cache[cls] = super().__call__(*a, **kw)
        return cls._cache[cls]


class SingletonType(metaclass=_SingletonMeta):
    """Base class for singleton sentinel types.

    Provides consistent interface for sentinel values with:
    - Identity preservation across deepcopy
    - Falsy boolean evaluation
    - Clear string representation
    """

    __slots__: tuple[str, ...] = ()

    def __deepcopy__(self, memo):  # copy & deepcopy both noop
        return self

    def __copy__(self):
        return self

    # concrete classes *must* override the two methods below
    def __bool__(self) -> bool: ...
    def __repr__(self) -> str: ...


class UndefinedType(SingletonType):
    """Sentinel for a value entirely missing.

    Use this when:
    - A binding was created without any template
    - A key doesn't exist in a record template

    Example:
        >>> d = {"a": 1}
        >>> d.get("b", Undefined) is Undefined
        True
    """

    __slots__ = ()

    def __bool__(self) -> Literal[False]:
        return False

    def __repr__(self) -> Literal["Undefined"]:
        return "Undefined"

    def __str__(self) -> Literal["Undefined"]:
        return "Undefined"

    def __reduce__(self):
        """Ensure pickle preservation of singleton identity."""
        return "Undefined"


class UnsetType(SingletonType):
    """Sentinel for a slot present but value not yet provided.

    Distinguishes "nothing was recorded" from an explicit ``None``, e.g. the
    replay value of a ``set`` issued before a surface attached.
    """

    __slots__ = ()

    def __bool__(self) -> Literal[False]:
        return False

    def __repr__(self) -> Literal["Unset"]:
        return "Unset"

    def __str__(self) -> Literal["Unset"]:
        return "Unset"

    def __reduce__(self):
        """Ensure pickle preservation of singleton identity."""
        return "Unset"


class PendingType(SingletonType):
    """Sentinel for a value that is known to be coming but has not arrived.

    Passed as a template to mark it pending, and handed to template setters
    when a binding's template is marked pending.
    """

    __slots__ = ()

    def __bool__(self) -> Literal[False]:
        return False

    def __repr__(self) -> Literal["Pending"]:
        return "Pending"

    def __str__(self) -> Literal["Pending"]:
        return "Pending"

    def __reduce__(self):
        """Ensure pickle preservation of singleton identity."""
        return "Pending"


Undefined: Final = UndefinedType()
"""A value entirely missing"""
Unset: Final = UnsetType()
"""A slot present but value not yet provided."""
Pending: Final = PendingType()
"""A value that is still being loaded."""
