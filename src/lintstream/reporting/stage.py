# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Streaming stage that reports failures and decides the run's verdict."""

from __future__ import annotations

from collections.abc import AsyncIterator

from ..errors import LintFailedError
from ..logging import StageLogger, get_logger
from ..models import FileRecord
from ..options import ReportOptions
from ..streams import RecordSource, iterate
from .aggregator import FailureAggregator
from .reporters import ReporterSpec, resolve_reporter


class ReportStage:
    """Report each linted file as it passes and judge the run at end of stream.

    Reporting is observational: every record is re-emitted unchanged. Failures
    never interrupt the stream; they only turn into :class:`LintFailedError`
    once the last record has been reported, and only when ``emit_error`` is set.
    """

    def __init__(
        self,
        reporter: ReporterSpec = "prose",
        options: ReportOptions | None = None,
        *,
        logger: StageLogger | None = None,
    ) -> None:
        self.options = options or ReportOptions()
        self.logger = logger or get_logger()
        self.reporter = resolve_reporter(reporter, logger=self.logger)
        self.aggregator = FailureAggregator(report_limit=self.options.report_limit)

    def __call__(self, records: RecordSource[FileRecord]) -> AsyncIterator[FileRecord]:
        return self.process(records)

    def handle(self, record: FileRecord) -> FileRecord:
        """Report ``record``'s failures and return it unchanged.

        Records that were never linted pass straight through.

        Args:
            record: Record emitted by the lint stage.

        Returns:
            FileRecord: The same record.
        """

        if record.lint is None:
            return record
        failures = record.lint.failures()
        if not failures:
            return record

        self.aggregator.record(record, failures)
        batch = self.aggregator.reportable(failures)
        if not batch:
            return record
        if self.reporter is not None:
            self.reporter(batch, record, self.options)
        if self.aggregator.mark_reported(len(batch)):
            self.logger.info(f"More than {self.options.report_limit} failures reported. Turning off reporter.")
        return record

    def finish(self) -> None:
        """Judge the run once every record has been handled.

        Raises:
            LintFailedError: If any file had failures and ``emit_error`` is set.
        """

        summary = self.aggregator.summarize(summarize_output=self.options.summarize_failure_output)
        if summary is None:
            return
        if self.options.emit_error:
            raise LintFailedError(summary.message, failures=summary.failures, ignored_count=summary.ignored_count)
        if self.options.summarize_failure_output:
            self.logger.info(summary.message)

    async def process(self, records: RecordSource[FileRecord]) -> AsyncIterator[FileRecord]:
        """Yield every record after reporting it, then judge the run.

        Args:
            records: Sync or async iterable of linted records.

        Yields:
            FileRecord: Records in arrival order, unchanged.

        Raises:
            LintFailedError: At end of stream, per :meth:`finish`.
        """

        async for record in iterate(records):
            yield self.handle(record)
        self.finish()


__all__ = ["ReportStage"]
