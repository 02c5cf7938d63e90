# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reporters, failure aggregation and the report stage."""

from __future__ import annotations

from .aggregator import FAILURE_PREFIX, FailureAggregator, FailureSummary
from .formatters import json_error_format, msbuild_error_format, prose_error_format, verbose_error_format
from .reporters import BUILTIN_REPORTERS, Reporter, ReporterName, ReporterSpec, resolve_reporter
from .stage import ReportStage

__all__ = [
    "BUILTIN_REPORTERS",
    "FAILURE_PREFIX",
    "FailureAggregator",
    "FailureSummary",
    "ReportStage",
    "Reporter",
    "ReporterName",
    "ReporterSpec",
    "json_error_format",
    "msbuild_error_format",
    "prose_error_format",
    "resolve_reporter",
    "verbose_error_format",
]
