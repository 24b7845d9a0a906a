# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from typing import Any, ClassVar

__all__ = (
    "FieldBindError",
    "HydrationError",
    "ValidatorError",
    "ConversionError",
)


class FieldBindError(Exception):
    default_message: ClassVar[str] = "fieldbind error"
    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message or self.default_message)
        if cause:
            self.__cause__ = cause  # preserves traceback
        self.message = message or self.default_message
        self.details = details or {}

    def to_dict(self, *, include_cause: bool = False) -> dict[str, Any]:
        data = {
            "error": self.__class__.__name__,
            "message": self.message,
            **({"details": self.details} if self.details else {}),
        }
        if include_cause and (cause := self.get_cause()):
            data["cause"] = repr(cause)
        return data

    def get_cause(self) -> Exception | None:
        """Get the cause of this error, if any."""
        return self.__cause__ if hasattr(self, "__cause__") else None


class HydrationError(FieldBindError):
    """Raised when a surface's getter or setter fails while hydrating."""

    default_message = "Surface failed during hydration"
    __slots__ = ()


class ValidatorError(FieldBindError):
    """Raised when a registered validator itself raises."""

    default_message = "Validator raised"
    __slots__ = ()

    @classmethod
    def from_value(
        cls,
        value: Any,
        *,
        stage: Any,
        message: str | None = None,
        cause: Exception | None = None,
    ):
        """Create a ValidatorError describing the value being validated."""
        details = {
            "value": value,
            "type": type(value).__name__,
            "stage": str(stage),
        }
        return cls(message=message, details=details, cause=cause)


class ConversionError(FieldBindError):
    """Raised when a transform's forward or backward function raises."""

    default_message = "Value conversion failed"
    __slots__ = ()
