# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the lint and report stages."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .models import Failure

PLUGIN_NAME: Final[str] = "lintstream"


class LintStreamError(RuntimeError):
    """Base error tagged with the plugin name that raised it."""

    def __init__(self, message: str, *, plugin: str = PLUGIN_NAME) -> None:
        """Initialise the error with a plugin tag and message.

        Args:
            message: Human-readable description of the failure.
            plugin: Name of the plugin emitting the error.
        """

        super().__init__(message)
        self.plugin = plugin
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigError(LintStreamError):
    """Raised when settings files or option payloads are invalid."""


class UnsupportedInputError(LintStreamError):
    """Raised when a file arrives as an unbuffered stream."""


class ConfigResolutionError(LintStreamError):
    """Raised when the lint configuration for a file cannot be resolved."""

    def __init__(self, path: Path | str, cause: BaseException | str) -> None:
        """Initialise the error with the offending path and underlying cause.

        Args:
            path: File whose configuration could not be resolved.
            cause: Exception or message describing why resolution failed.
        """

        super().__init__(f"Unable to resolve lint configuration for {path}: {cause}")
        self.path = Path(path)
        self.cause = cause


class LintExecutionError(LintStreamError):
    """Raised when the linter engine fails or returns an unusable payload."""


class StageTimeoutError(LintStreamError):
    """Raised when config resolution or linting exceeds the configured timeout."""

    def __init__(self, path: Path | str, phase: str, timeout: float) -> None:
        super().__init__(f"{phase} for {path} timed out after {timeout:g}s")
        self.path = Path(path)
        self.phase = phase
        self.timeout = timeout


class ReporterError(LintStreamError, ValueError):
    """Raised when a reporter selection is neither a known name nor callable."""


class LintFailedError(LintStreamError):
    """Terminal error signalling that the run produced lint failures."""

    def __init__(
        self,
        message: str,
        *,
        failures: Sequence[Failure] = (),
        ignored_count: int = 0,
    ) -> None:
        """Initialise the error with the summary message and reported failures.

        Args:
            message: Summary message beginning with ``Failed to lint:``.
            failures: Failures included in the summary message.
            ignored_count: Number of failures omitted because of the report limit.
        """

        super().__init__(message)
        self.failures = tuple(failures)
        self.ignored_count = ignored_count


__all__ = [
    "PLUGIN_NAME",
    "ConfigError",
    "ConfigResolutionError",
    "LintExecutionError",
    "LintFailedError",
    "LintStreamError",
    "ReporterError",
    "StageTimeoutError",
    "UnsupportedInputError",
]
