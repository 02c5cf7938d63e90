# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command-line host feeding files from disk through the lint pipeline."""

from __future__ import annotations

import asyncio
import shlex
from pathlib import Path

import typer

from .config.sources import ProjectSettings, load_project_settings
from .errors import LintFailedError, LintStreamError
from .linting.executor import CommandLintEngine
from .logging import PluginLogger, get_logger
from .models import FileRecord
from .options import PluginOptions, ReportOptions
from .pipeline import run

EXIT_LINT_FAILED = 1
EXIT_STAGE_ERROR = 2

app = typer.Typer(help="Lint files and report failures.", add_completion=False, no_args_is_help=True)


@app.callback()
def main() -> None:
    """Streaming lint orchestration."""


@app.command()
def check(
    paths: list[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Files to lint."),
    root: Path | None = typer.Option(
        None,
        "--root",
        "-r",
        help="Project root for relative paths and settings; defaults to the working directory.",
    ),
    reporter: str | None = typer.Option(None, "--reporter", help="json, prose, verbose, full or msbuild."),
    report_limit: int | None = typer.Option(None, "--report-limit", help="Maximum failures passed to the reporter."),
    emit_error: bool | None = typer.Option(
        None,
        "--emit-error/--no-emit-error",
        help="Fail the run on lint failures; overrides [tool.lintstream] emit-error.",
    ),
    summarize: bool = typer.Option(
        False,
        "--summarize",
        help="Replace the failure list in the final message with a count.",
    ),
    configuration: Path | None = typer.Option(None, "--config", help="Explicit lint configuration file."),
    config_filename: str | None = typer.Option(None, "--config-filename", help="Per-directory config file name."),
    rules_dir: Path | None = typer.Option(None, "--rules-dir", help="Directory of custom lint rules."),
    timeout: float | None = typer.Option(None, "--timeout", min=0.001, help="Seconds allowed per file phase."),
    command: str | None = typer.Option(None, "--command", help="Linter command template."),
    debug: bool = typer.Option(False, "--debug", help="Show debug traces."),
) -> None:
    """Lint PATHS and report failures; exit 1 when the run fails."""

    logger = get_logger(debug=debug)
    root = (root or Path.cwd()).resolve()
    try:
        settings = load_project_settings(root)
    except LintStreamError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=EXIT_STAGE_ERROR) from exc

    settings = settings.model_copy(
        update={
            key: value
            for key, value in {
                "reporter": reporter,
                "report_limit": report_limit,
                "emit_error": emit_error,
                "summarize_failure_output": True if summarize else None,
                "configuration": configuration,
                "config_filename": config_filename,
                "rules_directory": rules_dir,
                "timeout": timeout,
                "command": tuple(shlex.split(command)) if command else None,
            }.items()
            if value is not None
        },
    )
    records = [FileRecord.from_path(path, base=root) for path in paths]
    raise typer.Exit(code=_run(records, settings, logger))


def _run(records: list[FileRecord], settings: ProjectSettings, logger: PluginLogger) -> int:
    plugin_options = PluginOptions(
        configuration=settings.configuration,
        rules_directory=settings.rules_directory,
        engine=CommandLintEngine(settings.command),
        config_filename=settings.config_filename,
        timeout=settings.timeout,
    )
    report_options = ReportOptions(
        emit_error=settings.emit_error,
        report_limit=settings.report_limit,
        summarize_failure_output=settings.summarize_failure_output,
    )
    try:
        asyncio.run(run(records, plugin_options, settings.reporter, report_options, logger=logger))
    except LintFailedError as exc:
        logger.error(str(exc))
        return EXIT_LINT_FAILED
    except LintStreamError as exc:
        logger.error(str(exc))
        return EXIT_STAGE_ERROR
    logger.debug(f"checked files={len(records)}")
    return 0


__all__ = ["app"]
