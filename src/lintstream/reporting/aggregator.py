# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run-wide accumulation of failures and the end-of-run summary."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Final

from ..models import Failure, FileRecord
from .formatters import prose_error_format

FAILURE_PREFIX: Final[str] = "Failed to lint: "


@dataclass(frozen=True, slots=True)
class FailureSummary:
    """End-of-run verdict for a run that produced failures."""

    message: str
    failures: tuple[Failure, ...]
    ignored_count: int


@dataclass(slots=True)
class FailureAggregator:
    """Counters owned by a single report stage for the duration of one run.

    ``all_failures`` keeps every failure, including those the report limit
    kept away from the reporter, so the summary can count them. All counters
    only ever grow.
    """

    report_limit: int = 0
    error_files: list[FileRecord] = field(default_factory=list)
    all_failures: list[Failure] = field(default_factory=list)
    total_reported: int = 0
    suppressed: bool = False

    def record(self, file: FileRecord, failures: Sequence[Failure]) -> None:
        if not failures:
            return
        self.error_files.append(file)
        self.all_failures.extend(failures)

    def reportable(self, failures: Sequence[Failure]) -> list[Failure]:
        """Return the share of ``failures`` the reporter may still receive.

        Args:
            failures: Failures found in the current file.

        Returns:
            list[Failure]: All failures when unlimited, otherwise at most the
            remaining budget under the report limit.
        """

        if self.report_limit <= 0:
            return list(failures)
        remaining = self.report_limit - self.total_reported
        if remaining <= 0:
            return []
        return list(failures[:remaining])

    def mark_reported(self, count: int) -> bool:
        """Add ``count`` to the reported total.

        Args:
            count: Number of failures just passed to the reporter.

        Returns:
            bool: ``True`` exactly once, when the total first reaches a positive limit.
        """

        self.total_reported += count
        if self.report_limit > 0 and not self.suppressed and self.total_reported >= self.report_limit:
            self.suppressed = True
            return True
        return False

    def summarize(self, *, summarize_output: bool) -> FailureSummary | None:
        """Build the end-of-run message, or ``None`` when no file had failures.

        Args:
            summarize_output: ``True`` to replace the listed failures with a count.

        Returns:
            FailureSummary | None: Message plus the failures it covers.
        """

        if not self.error_files:
            return None

        failures_to_output = self.all_failures
        ignored_count = 0
        if self.report_limit > 0:
            ignored_count = max(0, len(self.all_failures) - self.report_limit)
            failures_to_output = self.all_failures[: self.report_limit]

        # The summary always uses the prose format, whichever reporter ran per file.
        if summarize_output:
            body = f"{len(failures_to_output)} errors."
        else:
            body = ", ".join(prose_error_format(failure) for failure in failures_to_output) + "."
        message = FAILURE_PREFIX + body
        if ignored_count > 0:
            message += f" ({ignored_count} other errors not shown.)"
        return FailureSummary(message=message, failures=tuple(failures_to_output), ignored_count=ignored_count)


__all__ = ["FAILURE_PREFIX", "FailureAggregator", "FailureSummary"]
