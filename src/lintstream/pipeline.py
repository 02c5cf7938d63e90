# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Entry points composing the lint and report stages."""

from __future__ import annotations

from .config.resolver import ConfigResolver
from .linting.stage import ErrorHandler, LintStage
from .logging import StageLogger
from .models import FileRecord
from .options import PluginOptions, ReportOptions
from .reporting.formatters import prose_error_format
from .reporting.reporters import ReporterSpec
from .reporting.stage import ReportStage
from .streams import RecordSource


def lint(
    options: PluginOptions | None = None,
    *,
    resolver: ConfigResolver | None = None,
    engine: object | None = None,
    logger: StageLogger | None = None,
    on_error: ErrorHandler | None = None,
) -> LintStage:
    """Create the stage that attaches lint results to each record."""

    return LintStage(options, resolver=resolver, engine=engine, logger=logger, on_error=on_error)


def report(
    reporter: ReporterSpec = "prose",
    options: ReportOptions | None = None,
    *,
    logger: StageLogger | None = None,
) -> ReportStage:
    """Create the stage that reports failures and decides the verdict."""

    return ReportStage(reporter, options, logger=logger)


async def run(
    records: RecordSource[FileRecord],
    plugin_options: PluginOptions | None = None,
    reporter: ReporterSpec = "prose",
    report_options: ReportOptions | None = None,
    *,
    resolver: ConfigResolver | None = None,
    engine: object | None = None,
    logger: StageLogger | None = None,
    on_error: ErrorHandler | None = None,
) -> list[FileRecord]:
    """Lint and report ``records`` end to end.

    Args:
        records: Sync or async iterable of file records.
        plugin_options: Options for the lint stage.
        reporter: Built-in reporter name, custom callable, or ``None``.
        report_options: Options for the report stage.
        resolver: Optional configuration resolver replacing the nearest-file search.
        engine: Optional engine replacing the one named in ``plugin_options``.
        logger: Logger shared by both stages.
        on_error: Optional handler for per-file configuration failures.

    Returns:
        list[FileRecord]: Records emitted by the report stage, in input order.

    Raises:
        LintFailedError: If failures were found and ``emit_error`` is set.
    """

    lint_stage = lint(plugin_options, resolver=resolver, engine=engine, logger=logger, on_error=on_error)
    report_stage = report(reporter, report_options, logger=logger)
    return [record async for record in report_stage(lint_stage(records))]


__all__ = ["lint", "prose_error_format", "report", "run"]
