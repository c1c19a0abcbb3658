"""Tests for logging setup."""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest
from rich.logging import RichHandler

from kubetop.constants.defaults import LOG_LEVEL_ENV
from kubetop.utils.logging_config import resolve_log_level, setup_logging


class TestResolveLogLevel:
    """Tests for resolve_log_level function."""

    def test_default_is_warning(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        assert resolve_log_level(0) == logging.WARNING

    def test_verbosity_flags(self) -> None:
        assert resolve_log_level(1) == logging.INFO
        assert resolve_log_level(2) == logging.DEBUG
        assert resolve_log_level(5) == logging.DEBUG

    def test_environment_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
        assert resolve_log_level(0) == logging.DEBUG

    def test_unknown_environment_level_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(LOG_LEVEL_ENV, "chatty")
        assert resolve_log_level(0) == logging.WARNING

    def test_flags_override_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(LOG_LEVEL_ENV, "ERROR")
        assert resolve_log_level(1) == logging.INFO


def test_setup_logging_installs_rich_handler() -> None:
    with patch("kubetop.utils.logging_config.logging.basicConfig") as basic_config:
        setup_logging(2)

    kwargs = basic_config.call_args.kwargs
    assert kwargs["level"] == logging.DEBUG
    assert kwargs["force"] is True
    (handler,) = kwargs["handlers"]
    assert isinstance(handler, RichHandler)
    assert handler.console.stderr is True
