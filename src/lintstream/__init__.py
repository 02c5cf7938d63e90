# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Streaming lint orchestration: per-file linting followed by aggregated reporting."""

from __future__ import annotations

from importlib import metadata

from .errors import (
    ConfigError,
    ConfigResolutionError,
    LintExecutionError,
    LintFailedError,
    LintStreamError,
    ReporterError,
    StageTimeoutError,
    UnsupportedInputError,
)
from .models import Failure, FileRecord, LintResult, Position
from .options import PluginOptions, ReportOptions
from .pipeline import lint, prose_error_format, report, run

try:
    __version__ = metadata.version("lintstream")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"

__all__ = [
    "ConfigError",
    "ConfigResolutionError",
    "Failure",
    "FileRecord",
    "LintExecutionError",
    "LintFailedError",
    "LintResult",
    "LintStreamError",
    "PluginOptions",
    "Position",
    "ReportOptions",
    "ReporterError",
    "StageTimeoutError",
    "UnsupportedInputError",
    "__version__",
    "lint",
    "prose_error_format",
    "report",
    "run",
]
