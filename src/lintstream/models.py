# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models flowing between the lint and report stages."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Final

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .errors import LintExecutionError

JSON_FORMAT: Final[str] = "json"


class Position(BaseModel):
    """Zero-based point in a file's text."""

    model_config = ConfigDict(frozen=True)

    position: int = 0
    line: int
    character: int


class Failure(BaseModel):
    """Single lint finding produced by the engine.

    The engine serialises failures with camel-cased keys; both the wire names
    and the attribute names are accepted when validating, while dumps made with
    ``by_alias=True`` reproduce the wire format exactly.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    failure: str
    start_position: Position = Field(alias="startPosition")
    end_position: Position = Field(alias="endPosition")
    rule_name: str = Field(alias="ruleName")

    def to_wire(self) -> dict[str, object]:
        """Return the failure as a JSON-compatible mapping using wire keys.

        Returns:
            dict[str, object]: Mapping shaped like the engine's JSON output.
        """

        return self.model_dump(by_alias=True)


_FAILURE_LIST: Final[TypeAdapter[list[Failure]]] = TypeAdapter(list[Failure])


class LintResult(BaseModel):
    """Opaque engine payload attached to a file once it has been linted."""

    model_config = ConfigDict(frozen=True)

    output: str
    format: str = JSON_FORMAT

    @classmethod
    def from_failures(cls, failures: Iterable[Failure]) -> LintResult:
        """Build a JSON payload from failure objects.

        Args:
            failures: Failures to encode in the wire format.

        Returns:
            LintResult: Payload whose ``output`` is a JSON array of failures.
        """

        return cls(output=json.dumps([failure.to_wire() for failure in failures]))

    def failures(self) -> list[Failure]:
        """Decode the payload into failure objects.

        Returns:
            list[Failure]: Failures reported for the file, in engine order.

        Raises:
            LintExecutionError: If the payload is not a JSON array of failures.
        """

        if not self.output.strip():
            return []
        try:
            return _FAILURE_LIST.validate_json(self.output)
        except ValidationError as exc:
            raise LintExecutionError(f"Linter produced an invalid {self.format} payload: {exc}") from exc


@dataclass(slots=True)
class FileRecord:
    """Source unit supplied by the host pipeline.

    Records are owned by the host. The lint stage attaches :attr:`lint` in
    place and hands the same object back downstream.
    """

    path: Path
    relative: str
    contents: bytes | BinaryIO | None = None
    lint: LintResult | None = None

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    @classmethod
    def from_path(cls, path: Path | str, *, base: Path | None = None) -> FileRecord:
        """Read ``path`` from disk into a buffered record.

        Args:
            path: File to read.
            base: Directory used to compute the relative path; defaults to the
                current working directory.

        Returns:
            FileRecord: Record holding the file's bytes.
        """

        resolved = Path(path).resolve()
        root = (base or Path.cwd()).resolve()
        try:
            relative = resolved.relative_to(root).as_posix()
        except ValueError:
            relative = resolved.as_posix()
        return cls(path=resolved, relative=relative, contents=resolved.read_bytes())

    def is_null(self) -> bool:
        """Return ``True`` when the record carries no content."""

        return self.contents is None

    def is_stream(self) -> bool:
        """Return ``True`` when the content is a live stream rather than bytes."""

        if self.contents is None or isinstance(self.contents, (bytes, bytearray, memoryview)):
            return False
        return callable(getattr(self.contents, "read", None))

    def text(self) -> str:
        """Decode buffered content as UTF-8, replacing undecodable bytes.

        Returns:
            str: Decoded file text.

        Raises:
            TypeError: If the record is null or streaming.
        """

        if not isinstance(self.contents, (bytes, bytearray, memoryview)):
            raise TypeError(f"{self.path} has no buffered contents")
        return bytes(self.contents).decode("utf-8", errors="replace")


__all__ = [
    "JSON_FORMAT",
    "Failure",
    "FileRecord",
    "LintResult",
    "Position",
]
