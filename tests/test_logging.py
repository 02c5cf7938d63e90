# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for plugin-tagged console logging."""

from __future__ import annotations

import pytest

from lintstream.logging import PluginLogger, StageLogger, get_logger, plugin_console


def test_tagged_channels(capsys: pytest.CaptureFixture[str]) -> None:
    logger = PluginLogger(use_color=False)

    logger.info("More than 10 failures reported. Turning off reporter.")
    logger.error("a.ts[1, 1]: bad")
    logger.raw("a.ts(1,1): warning rule: bad")

    assert capsys.readouterr().out.splitlines() == [
        "[lintstream] More than 10 failures reported. Turning off reporter.",
        "[lintstream] error a.ts[1, 1]: bad",
        "a.ts(1,1): warning rule: bad",
    ]


def test_debug_is_silent_unless_enabled(capsys: pytest.CaptureFixture[str]) -> None:
    PluginLogger(use_color=False).debug("hidden")
    PluginLogger(use_color=False, debug_enabled=True).debug("shown")

    assert capsys.readouterr().out.splitlines() == ["[lintstream] [debug] shown"]


def test_get_logger_satisfies_protocol() -> None:
    logger = get_logger(debug=True)

    assert isinstance(logger, StageLogger)
    assert logger.debug_enabled


def test_consoles_are_shared_per_colour_setting() -> None:
    assert plugin_console(False) is plugin_console(False)
    assert plugin_console(True) is not plugin_console(False)
    assert plugin_console(False).no_color
