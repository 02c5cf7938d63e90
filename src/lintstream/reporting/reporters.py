# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in reporters and reporter selection."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum
from functools import partial
from typing import Final, Protocol, TypeAlias, runtime_checkable

from ..errors import ReporterError
from ..logging import StageLogger
from ..models import Failure, FileRecord
from ..options import ReportOptions
from .formatters import json_error_format, msbuild_error_format, prose_error_format, verbose_error_format


@runtime_checkable
class Reporter(Protocol):
    """Callable invoked with one file's failures while the run is streaming."""

    def __call__(
        self,
        failures: Sequence[Failure],
        file: FileRecord | None = None,
        options: ReportOptions | None = None,
    ) -> None:
        """Present ``failures`` for ``file``.

        Args:
            failures: Failures reported for the file, already capped by the report limit.
            file: Record the failures belong to.
            options: Active report options.
        """
        ...


class ReporterName(str, Enum):
    """Names of the built-in reporters."""

    JSON = "json"
    PROSE = "prose"
    VERBOSE = "verbose"
    FULL = "full"
    MSBUILD = "msbuild"


def json_reporter(
    failures: Sequence[Failure],
    file: FileRecord | None = None,
    options: ReportOptions | None = None,
    *,
    logger: StageLogger,
) -> None:
    logger.error(json_error_format(failures))


def prose_reporter(
    failures: Sequence[Failure],
    file: FileRecord | None = None,
    options: ReportOptions | None = None,
    *,
    logger: StageLogger,
) -> None:
    for failure in failures:
        logger.error(prose_error_format(failure))


def verbose_reporter(
    failures: Sequence[Failure],
    file: FileRecord | None = None,
    options: ReportOptions | None = None,
    *,
    logger: StageLogger,
) -> None:
    for failure in failures:
        logger.error(verbose_error_format(failure))


def full_reporter(
    failures: Sequence[Failure],
    file: FileRecord | None = None,
    options: ReportOptions | None = None,
    *,
    logger: StageLogger,
) -> None:
    """Log each failure verbosely with the file's full path instead of its name."""

    for failure in failures:
        logger.error(verbose_error_format(failure, name=file.path if file is not None else None))


def msbuild_reporter(
    failures: Sequence[Failure],
    file: FileRecord | None = None,
    options: ReportOptions | None = None,
    *,
    logger: StageLogger,
) -> None:
    """Write MSBuild-style warnings straight to stdout, bypassing the tagged log."""

    for failure in failures:
        path = file.path if file is not None else failure.name
        logger.raw(msbuild_error_format(failure, path))


BuiltinReporter: TypeAlias = Callable[..., None]

BUILTIN_REPORTERS: Final[dict[ReporterName, BuiltinReporter]] = {
    ReporterName.JSON: json_reporter,
    ReporterName.PROSE: prose_reporter,
    ReporterName.VERBOSE: verbose_reporter,
    ReporterName.FULL: full_reporter,
    ReporterName.MSBUILD: msbuild_reporter,
}

ReporterSpec: TypeAlias = ReporterName | str | Reporter | Callable[..., None] | None


def resolve_reporter(spec: ReporterSpec, *, logger: StageLogger) -> Reporter | None:
    """Resolve a reporter name or callable once, at stage construction.

    Args:
        spec: Built-in reporter name, custom callable, or ``None`` for no per-file output.
        logger: Logger the built-in reporters write through.

    Returns:
        Reporter | None: Callable reporter, or ``None`` when per-file output is disabled.

    Raises:
        ReporterError: If ``spec`` is neither a known name nor callable.
    """

    if spec is None:
        return None
    if isinstance(spec, str):
        try:
            name = ReporterName(spec)
        except ValueError as exc:
            choices = ", ".join(member.value for member in ReporterName)
            raise ReporterError(f"Unknown reporter '{spec}'; expected one of: {choices}") from exc
        return partial(BUILTIN_REPORTERS[name], logger=logger)
    if callable(spec):
        return spec
    raise ReporterError(f"Reporter must be a reporter name or a callable, got {spec!r}")


__all__ = [
    "BUILTIN_REPORTERS",
    "Reporter",
    "ReporterName",
    "ReporterSpec",
    "full_reporter",
    "json_reporter",
    "msbuild_reporter",
    "prose_reporter",
    "resolve_reporter",
    "verbose_reporter",
]
