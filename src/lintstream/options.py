# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Option models governing the lint and report stages."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CONFIG_FILENAME: Final[str] = "tslint.json"

LintConfiguration: TypeAlias = Mapping[str, Any]


class PluginOptions(BaseModel):
    """Options fixed for the lifetime of one lint stage.

    ``configuration`` may be an explicit configuration mapping or the path of a
    configuration file; either short-circuits the per-file directory search.
    ``engine`` replaces the default command-line engine and must expose a
    ``lint(request)`` method or be callable with the request.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    configuration: dict[str, Any] | Path | None = None
    rules_directory: Path | None = None
    engine: Any = None
    config_filename: str = DEFAULT_CONFIG_FILENAME
    timeout: float | None = Field(default=None, gt=0)

    @field_validator("configuration", mode="before")
    @classmethod
    def _coerce_configuration(cls, value: object) -> object:
        """Accept string paths and arbitrary mappings for ``configuration``.

        Args:
            value: Raw configuration value supplied by the caller.

        Returns:
            object: ``Path`` for string input, ``dict`` for mappings, otherwise unchanged.
        """

        if isinstance(value, str):
            return Path(value)
        if isinstance(value, Mapping):
            return dict(value)
        return value

    @field_validator("engine")
    @classmethod
    def _validate_engine(cls, value: object) -> object:
        if value is None or callable(getattr(value, "lint", None)) or callable(value):
            return value
        raise ValueError("engine must provide a lint(request) method or be callable")


class ReportOptions(BaseModel):
    """Options controlling per-file reporting and the end-of-run verdict.

    A ``report_limit`` of zero or less means unlimited.
    """

    model_config = ConfigDict(frozen=True)

    emit_error: bool = True
    report_limit: int = 0
    summarize_failure_output: bool = False


__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "LintConfiguration",
    "PluginOptions",
    "ReportOptions",
]
