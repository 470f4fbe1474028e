# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for console helpers and log level configuration."""

from __future__ import annotations

import logging

import pytest

from rex_cli.logging import LOG_LEVELS, configure_logging, emoji, ok, warn


def test_configure_logging_sets_package_level() -> None:
    logger = configure_logging("debug")
    assert logger.name == "rex_cli"
    assert logger.level == logging.DEBUG

    configure_logging("ERROR")
    assert logger.level == logging.ERROR

    configure_logging("silent")
    assert logger.level > logging.CRITICAL
    configure_logging("warn")


def test_configure_logging_installs_single_handler() -> None:
    logger = configure_logging("warn")
    handlers = len(logger.handlers)

    configure_logging("info")
    configure_logging("warn")

    assert len(logger.handlers) == handlers


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Invalid log level: loud"):
        configure_logging("loud")


def test_log_levels_cover_cli_choices() -> None:
    assert list(LOG_LEVELS) == ["debug", "info", "warn", "error", "silent"]


def test_emoji_toggle() -> None:
    assert emoji("✅", True) == "✅"
    assert emoji("✅", False) == ""


def test_console_helpers_write_plain_text(capsys: pytest.CaptureFixture[str]) -> None:
    ok("all good", use_emoji=False, use_color=False)
    warn("careful", use_emoji=False, use_color=False)

    captured = capsys.readouterr()
    assert "all good" in captured.out
    assert "careful" in captured.out
