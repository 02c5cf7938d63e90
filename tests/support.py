# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Fakes and builders shared by the pipeline tests."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lintstream.errors import ConfigResolutionError
from lintstream.linting.executor import LintRequest
from lintstream.models import Failure, FileRecord, LintResult

FailureFactory = Callable[..., Failure]


def make_failure(
    message: str = "missing whitespace",
    *,
    name: str = "invalid.ts",
    line: int = 0,
    character: int = 8,
    rule: str = "one-line",
) -> Failure:
    return Failure.model_validate(
        {
            "name": name,
            "failure": message,
            "startPosition": {"position": character, "line": line, "character": character},
            "endPosition": {"position": character + 1, "line": line, "character": character + 1},
            "ruleName": rule,
        },
    )


@dataclass
class RecordingLogger:
    """Logger capturing every channel separately."""

    infos: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    raws: list[str] = field(default_factory=list)
    debugs: list[str] = field(default_factory=list)

    def info(self, message: str) -> None:
        self.infos.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)

    def raw(self, message: str) -> None:
        self.raws.append(message)

    def debug(self, message: str) -> None:
        self.debugs.append(message)


@dataclass
class FakeEngine:
    """Synchronous engine returning canned failures keyed by relative path."""

    failures: Mapping[str, Sequence[Failure]] = field(default_factory=dict)
    requests: list[LintRequest] = field(default_factory=list)

    def lint(self, request: LintRequest) -> LintResult:
        self.requests.append(request)
        return LintResult.from_failures(self.failures.get(request.relative_path, ()))


@dataclass
class FakeResolver:
    """Resolver returning a fixed configuration and failing for chosen paths."""

    configuration: Mapping[str, Any] = field(default_factory=lambda: {"rules": {}})
    failing: set[str] = field(default_factory=set)
    calls: list[Path] = field(default_factory=list)

    async def resolve(self, path: Path) -> Mapping[str, Any]:
        self.calls.append(path)
        if path.name in self.failing:
            raise ConfigResolutionError(path, "broken tslint.json")
        return self.configuration


def make_record(relative: str, contents: bytes | None = b"const a = 1;\n") -> FileRecord:
    return FileRecord(path=Path("/project") / relative, relative=relative, contents=contents)


def linted_record(relative: str, failures: Sequence[Failure]) -> FileRecord:
    record = make_record(relative)
    record.lint = LintResult.from_failures(failures)
    return record
