# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from typing import Any, ClassVar, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ("AppSettings", "settings")


class AppSettings(BaseSettings, frozen=True):
    """Engine settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="FIELDBIND_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    LOG_UNAVAILABLE_CHILDREN: bool = Field(
        default=True,
        description="Log an error when a composed child reports unavailable",
    )

    EVENT_HANDLER_ERRORS: Literal["log", "raise"] = Field(
        default="log",
        description="What the event bus does when a listener raises",
    )

    DEFAULT_FAIL_STAGE: Literal["input", "blur", "submit"] = Field(
        default="submit",
        description="Threshold stage used when fail() is called without one",
    )

    # Class variable to store the singleton instance
    _instance: ClassVar[Any] = None


# Create a singleton instance
settings = AppSettings()
# Store the instance in the class variable for singleton pattern
AppSettings._instance = settings
