# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for configuration module."""

import pydantic
import pytest

from fieldbind.config import AppSettings, settings


class TestAppSettings:
    def test_defaults(self, monkeypatch):
        for name in (
            "FIELDBIND_LOG_UNAVAILABLE_CHILDREN",
            "FIELDBIND_EVENT_HANDLER_ERRORS",
            "FIELDBIND_DEFAULT_FAIL_STAGE",
        ):
            monkeypatch.delenv(name, raising=False)
        config = AppSettings(_env_file=None)
        assert config.LOG_UNAVAILABLE_CHILDREN is True
        assert config.EVENT_HANDLER_ERRORS == "log"
        assert config.DEFAULT_FAIL_STAGE == "submit"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("FIELDBIND_EVENT_HANDLER_ERRORS", "raise")
        monkeypatch.setenv("FIELDBIND_DEFAULT_FAIL_STAGE", "blur")
        config = AppSettings(_env_file=None)
        assert config.EVENT_HANDLER_ERRORS == "raise"
        assert config.DEFAULT_FAIL_STAGE == "blur"

    def test_invalid_value_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            AppSettings(_env_file=None, DEFAULT_FAIL_STAGE="later")

    def test_frozen(self):
        with pytest.raises(pydantic.ValidationError):
            settings.EVENT_HANDLER_ERRORS = "raise"

    def test_singleton_instance(self):
        assert AppSettings._instance is settings
