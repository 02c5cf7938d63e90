# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for failure payloads and file records."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from support import make_failure

from lintstream.errors import LintExecutionError
from lintstream.models import Failure, FileRecord, LintResult

WIRE_PAYLOAD = [
    {
        "name": "invalid.ts",
        "failure": "missing whitespace",
        "startPosition": {"position": 8, "line": 0, "character": 8},
        "endPosition": {"position": 9, "line": 0, "character": 9},
        "ruleName": "one-line",
    },
]


def test_lint_result_decodes_wire_payload() -> None:
    result = LintResult(output=json.dumps(WIRE_PAYLOAD))

    failures = result.failures()

    assert len(failures) == 1
    failure = failures[0]
    assert failure.rule_name == "one-line"
    assert failure.start_position.character == 8
    assert failure.end_position.position == 9


def test_failure_dumps_wire_keys() -> None:
    failure = Failure.model_validate(WIRE_PAYLOAD[0])

    assert failure.to_wire() == WIRE_PAYLOAD[0]
    assert json.loads(LintResult.from_failures([failure]).output) == WIRE_PAYLOAD


def test_empty_output_has_no_failures() -> None:
    assert LintResult(output="").failures() == []
    assert LintResult(output="[]").failures() == []


@pytest.mark.parametrize("output", ["not json", '{"name": "x"}', '[{"name": "x"}]'])
def test_invalid_payload_raises(output: str) -> None:
    with pytest.raises(LintExecutionError, match="invalid json payload"):
        LintResult(output=output).failures()


def test_failures_are_immutable() -> None:
    failure = make_failure()

    with pytest.raises(ValidationError):
        failure.failure = "changed"  # type: ignore[misc]


def test_record_content_predicates() -> None:
    buffered = FileRecord(path=Path("/p/a.ts"), relative="a.ts", contents=b"x")
    null = FileRecord(path=Path("/p/b.ts"), relative="b.ts", contents=None)
    streaming = FileRecord(path=Path("/p/c.ts"), relative="c.ts", contents=io.BytesIO(b"x"))

    assert not buffered.is_null() and not buffered.is_stream()
    assert null.is_null() and not null.is_stream()
    assert streaming.is_stream() and not streaming.is_null()


def test_record_from_path_reads_bytes(tmp_path: Path) -> None:
    source = tmp_path / "src" / "app.ts"
    source.parent.mkdir()
    source.write_bytes(b"let x = 1;\n")

    record = FileRecord.from_path(source, base=tmp_path)

    assert record.relative == "src/app.ts"
    assert record.path == source.resolve()
    assert record.text() == "let x = 1;\n"
    assert record.lint is None


def test_record_text_replaces_undecodable_bytes() -> None:
    record = FileRecord(path=Path("/p/a.ts"), relative="a.ts", contents=b"ok\xff")

    assert record.text() == "ok�"


def test_record_text_requires_buffer() -> None:
    record = FileRecord(path=Path("/p/a.ts"), relative="a.ts", contents=None)

    with pytest.raises(TypeError):
        record.text()
