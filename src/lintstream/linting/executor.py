# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Invocation boundary between the lint stage and the linter engine."""

from __future__ import annotations

import inspect
import json
import tempfile
from collections.abc import Awaitable, Sequence
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Final, Protocol, runtime_checkable

from ..errors import LintExecutionError
from ..models import JSON_FORMAT, LintResult
from ..options import LintConfiguration
from ..runtime.process import run_command

CONFIG_PLACEHOLDER: Final[str] = "{config}"
FILE_PLACEHOLDER: Final[str] = "{file}"
RULES_DIR_PLACEHOLDER: Final[str] = "{rules_dir}"
DEFAULT_COMMAND: Final[tuple[str, ...]] = (
    "tslint",
    "--format",
    JSON_FORMAT,
    "--config",
    CONFIG_PLACEHOLDER,
    "--rules-dir",
    RULES_DIR_PLACEHOLDER,
    FILE_PLACEHOLDER,
)
_CONFIG_FILENAME: Final[str] = "lint-config.json"


@dataclass(frozen=True, slots=True)
class LintRequest:
    """Engine options for linting one file.

    ``formatter`` is always JSON; human-facing formatting is the reporters' job,
    which is also why no formatters directory is ever passed.
    """

    relative_path: str
    text: str
    configuration: LintConfiguration
    rules_directory: Path | None = None
    formatter: str = JSON_FORMAT
    formatters_directory: Path | None = None


@runtime_checkable
class LintEngine(Protocol):
    """Linter engine capability injected into the lint stage."""

    def lint(self, request: LintRequest) -> LintResult | Awaitable[LintResult]:
        """Lint the request's text and return the raw JSON payload.

        Args:
            request: File text, relative path and resolved configuration.

        Returns:
            LintResult | Awaitable[LintResult]: Engine payload, possibly awaitable.
        """
        ...


class LintExecutor:
    """Invoke an engine and normalise its return value to :class:`LintResult`.

    The executor does not interpret diagnostics. Synchronous and asynchronous
    engines are both awaited as a single operation.
    """

    def __init__(self, engine: object | None = None, *, rules_directory: Path | None = None) -> None:
        self.engine = engine if engine is not None else CommandLintEngine()
        self.rules_directory = rules_directory

    async def execute(self, relative_path: str, text: str, configuration: LintConfiguration) -> LintResult:
        """Lint ``text`` with ``configuration`` and return the engine payload.

        Args:
            relative_path: Path of the file relative to the project root.
            text: Decoded file contents.
            configuration: Effective configuration resolved for the file.

        Returns:
            LintResult: Raw engine payload for the file.

        Raises:
            LintExecutionError: If the engine fails or returns an unusable value.
        """

        request = LintRequest(
            relative_path=relative_path,
            text=text,
            configuration=configuration,
            rules_directory=self.rules_directory,
        )
        lint = getattr(self.engine, "lint", None)
        invoke = lint if callable(lint) else self.engine
        try:
            outcome = invoke(request)
            if inspect.isawaitable(outcome):
                outcome = await outcome
        except LintExecutionError:
            raise
        except Exception as exc:
            raise LintExecutionError(f"Linter failed on {relative_path}: {exc}") from exc
        return _coerce_result(outcome, relative_path)


def _coerce_result(outcome: object, relative_path: str) -> LintResult:
    if isinstance(outcome, LintResult):
        return outcome
    if isinstance(outcome, str):
        return LintResult(output=outcome)
    output = getattr(outcome, "output", None)
    if isinstance(output, str):
        return LintResult(output=output, format=str(getattr(outcome, "format", JSON_FORMAT)))
    raise LintExecutionError(f"Linter returned an unexpected result for {relative_path}: {outcome!r}")


class CommandLintEngine:
    """Run an external linter that prints the JSON failure format on stdout.

    The file text and configuration are written to a scratch directory, which
    becomes the command's working directory. ``{file}``, ``{config}`` and
    ``{rules_dir}`` tokens in the command template are substituted per file; a
    ``{rules_dir}`` token and the option preceding it are dropped when no rules
    directory is configured.
    """

    def __init__(self, command: Sequence[str] | None = None) -> None:
        self.command = tuple(command) if command else DEFAULT_COMMAND

    def build_args(self, *, file: str, config: Path, rules_directory: Path | None) -> list[str]:
        """Expand the command template for one file.

        Args:
            file: Path of the scratch copy, relative to the working directory.
            config: Path of the scratch configuration file.
            rules_directory: Optional custom rules directory.

        Returns:
            list[str]: Command arguments ready for execution.
        """

        args: list[str] = []
        for token in self.command:
            if RULES_DIR_PLACEHOLDER in token and rules_directory is None:
                if args and args[-1].startswith("-") and token == RULES_DIR_PLACEHOLDER:
                    args.pop()
                continue
            args.append(
                token.replace(FILE_PLACEHOLDER, file)
                .replace(CONFIG_PLACEHOLDER, str(config))
                .replace(RULES_DIR_PLACEHOLDER, str(rules_directory)),
            )
        return args

    async def lint(self, request: LintRequest) -> LintResult:
        with tempfile.TemporaryDirectory(prefix="lintstream-") as scratch:
            workdir = Path(scratch)
            relative = _scratch_relative(request.relative_path)
            target = workdir / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(request.text, encoding="utf-8")
            config_path = workdir / _CONFIG_FILENAME
            config_path.write_text(json.dumps(dict(request.configuration)), encoding="utf-8")

            args = self.build_args(file=relative, config=config_path, rules_directory=request.rules_directory)
            try:
                completed = await run_command(args, cwd=workdir)
            except (FileNotFoundError, ValueError) as exc:
                raise LintExecutionError(f"Unable to run linter command: {exc}") from exc

        output = completed.stdout.strip()
        if not output and completed.returncode == 0:
            output = "[]"
        result = LintResult(output=output)
        try:
            if not output:
                raise LintExecutionError("empty output")
            result.failures()
        except LintExecutionError as exc:
            raise LintExecutionError(
                f"Linter command exited with status {completed.returncode} without JSON output "
                f"for {request.relative_path}. stderr: {completed.stderr.strip() or '<none>'}",
            ) from exc
        return result


def _scratch_relative(relative_path: str) -> str:
    """Return a path that stays inside the scratch directory."""

    pure = PurePosixPath(relative_path.replace("\\", "/"))
    if pure.is_absolute() or ".." in pure.parts or not pure.parts:
        return pure.name or "input"
    return pure.as_posix()


__all__ = [
    "DEFAULT_COMMAND",
    "CommandLintEngine",
    "LintEngine",
    "LintExecutor",
    "LintRequest",
]
