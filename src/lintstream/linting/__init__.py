# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lint stage and engine invocation."""

from __future__ import annotations

from .executor import DEFAULT_COMMAND, CommandLintEngine, LintEngine, LintExecutor, LintRequest
from .stage import ErrorHandler, LintStage

__all__ = [
    "DEFAULT_COMMAND",
    "CommandLintEngine",
    "ErrorHandler",
    "LintEngine",
    "LintExecutor",
    "LintRequest",
    "LintStage",
]
