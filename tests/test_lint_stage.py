# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the per-file lint stage."""

from __future__ import annotations

import asyncio
import io
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from support import FakeEngine, FakeResolver, RecordingLogger, make_failure, make_record

from lintstream.errors import ConfigResolutionError, LintExecutionError, StageTimeoutError, UnsupportedInputError
from lintstream.linting.executor import LintRequest
from lintstream.linting.stage import LintStage
from lintstream.models import FileRecord, LintResult
from lintstream.options import PluginOptions


async def _collect(stage: LintStage, records: object) -> list[FileRecord]:
    return [record async for record in stage.process(records)]  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_stage_attaches_results_in_order(fake_resolver: FakeResolver) -> None:
    engine = FakeEngine(failures={"b.ts": [make_failure()]})
    stage = LintStage(resolver=fake_resolver, engine=engine, logger=RecordingLogger())
    records = [make_record("a.ts"), make_record("b.ts"), make_record("c.ts")]

    emitted = await _collect(stage, records)

    assert emitted == records
    assert [record.relative for record in emitted] == ["a.ts", "b.ts", "c.ts"]
    assert [len(record.lint.failures()) for record in emitted if record.lint is not None] == [0, 1, 0]
    assert [request.configuration for request in engine.requests] == [{"rules": {}}] * 3


@pytest.mark.asyncio
async def test_stage_accepts_async_sources(fake_resolver: FakeResolver) -> None:
    async def source() -> AsyncIterator[FileRecord]:
        for name in ("x.ts", "y.ts"):
            await asyncio.sleep(0)
            yield make_record(name)

    stage = LintStage(resolver=fake_resolver, engine=FakeEngine(), logger=RecordingLogger())

    emitted = await _collect(stage, source())

    assert [record.relative for record in emitted] == ["x.ts", "y.ts"]


@pytest.mark.asyncio
async def test_null_records_pass_through_unlinted(fake_resolver: FakeResolver) -> None:
    engine = FakeEngine()
    stage = LintStage(resolver=fake_resolver, engine=engine, logger=RecordingLogger())
    empty = make_record("empty.ts", contents=None)

    emitted = await _collect(stage, [empty])

    assert emitted == [empty]
    assert empty.lint is None
    assert engine.requests == []
    assert fake_resolver.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("position", [0, 1, 2])
async def test_streaming_record_fails_whole_stage(fake_resolver: FakeResolver, position: int) -> None:
    records = [make_record("a.ts"), make_record("b.ts")]
    streaming = FileRecord(path=Path("/project/s.ts"), relative="s.ts", contents=io.BytesIO(b"x"))
    records.insert(position, streaming)
    engine = FakeEngine()
    stage = LintStage(resolver=fake_resolver, engine=engine, logger=RecordingLogger())

    with pytest.raises(UnsupportedInputError, match="Streaming not supported"):
        await _collect(stage, records)

    assert streaming.lint is None
    assert len(engine.requests) == position


@pytest.mark.asyncio
async def test_config_failure_propagates_by_default() -> None:
    resolver = FakeResolver(failing={"bad.ts"})
    stage = LintStage(resolver=resolver, engine=FakeEngine(), logger=RecordingLogger())

    with pytest.raises(ConfigResolutionError, match="bad.ts"):
        await _collect(stage, [make_record("ok.ts"), make_record("bad.ts"), make_record("later.ts")])

    assert [path.name for path in resolver.calls] == ["ok.ts", "bad.ts"]


@pytest.mark.asyncio
async def test_config_failure_routed_to_host_handler() -> None:
    resolver = FakeResolver(failing={"bad.ts"})
    seen: list[tuple[str, ConfigResolutionError]] = []
    stage = LintStage(
        resolver=resolver,
        engine=FakeEngine(),
        logger=RecordingLogger(),
        on_error=lambda record, error: seen.append((record.relative, error)),
    )

    emitted = await _collect(stage, [make_record("ok.ts"), make_record("bad.ts"), make_record("later.ts")])

    assert [record.relative for record in emitted] == ["ok.ts", "later.ts"]
    assert [relative for relative, _ in seen] == ["bad.ts"]


@pytest.mark.asyncio
async def test_unexpected_resolver_errors_become_resolution_errors() -> None:
    class ExplodingResolver:
        async def resolve(self, path: Path) -> dict[str, object]:
            raise OSError("disk gone")

    stage = LintStage(resolver=ExplodingResolver(), engine=FakeEngine(), logger=RecordingLogger())

    with pytest.raises(ConfigResolutionError, match="disk gone"):
        await _collect(stage, [make_record("a.ts")])


@pytest.mark.asyncio
async def test_engine_failures_always_propagate(fake_resolver: FakeResolver) -> None:
    def engine(request: LintRequest) -> LintResult:
        raise ValueError("parser exploded")

    stage = LintStage(
        resolver=fake_resolver,
        engine=engine,
        logger=RecordingLogger(),
        on_error=lambda record, error: None,
    )

    with pytest.raises(LintExecutionError, match="parser exploded"):
        await _collect(stage, [make_record("a.ts")])


@pytest.mark.asyncio
async def test_files_are_processed_one_at_a_time(fake_resolver: FakeResolver) -> None:
    active = 0
    peak = 0
    order: list[str] = []

    async def engine(request: LintRequest) -> LintResult:
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        # Later files finish faster; ordering must still follow input order.
        await asyncio.sleep(0.01 if request.relative_path == "a.ts" else 0)
        order.append(request.relative_path)
        active -= 1
        return LintResult(output="[]")

    stage = LintStage(resolver=fake_resolver, engine=engine, logger=RecordingLogger())

    emitted = await _collect(stage, [make_record("a.ts"), make_record("b.ts")])

    assert peak == 1
    assert order == ["a.ts", "b.ts"]
    assert [record.relative for record in emitted] == ["a.ts", "b.ts"]


@pytest.mark.asyncio
async def test_timeout_bounds_engine_calls(fake_resolver: FakeResolver) -> None:
    async def engine(request: LintRequest) -> LintResult:
        await asyncio.sleep(5)
        return LintResult(output="[]")

    stage = LintStage(
        PluginOptions(timeout=0.01),
        resolver=fake_resolver,
        engine=engine,
        logger=RecordingLogger(),
    )

    with pytest.raises(StageTimeoutError, match="Linting for .*a.ts timed out"):
        await _collect(stage, [make_record("a.ts")])


@pytest.mark.asyncio
async def test_cancellation_is_logged(fake_resolver: FakeResolver) -> None:
    started = asyncio.Event()

    async def engine(request: LintRequest) -> LintResult:
        started.set()
        await asyncio.sleep(5)
        return LintResult(output="[]")

    logger = RecordingLogger()
    stage = LintStage(resolver=fake_resolver, engine=engine, logger=logger)
    task = asyncio.create_task(_collect(stage, [make_record("slow.ts")]))
    await started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    assert logger.infos == ["Lint of slow.ts abandoned; the engine was not notified."]


@pytest.mark.asyncio
async def test_options_supply_engine_and_rules_directory(fake_resolver: FakeResolver) -> None:
    engine = FakeEngine()
    options = PluginOptions(engine=engine, rules_directory=Path("/custom/rules"))
    stage = LintStage(options, resolver=fake_resolver, logger=RecordingLogger())

    await _collect(stage, [make_record("a.ts")])

    assert engine.requests[0].rules_directory == Path("/custom/rules")


@pytest.mark.asyncio
async def test_explicit_configuration_short_circuits_lookup(tmp_path: Path) -> None:
    engine = FakeEngine()
    stage = LintStage(PluginOptions(configuration={"rules": {"explicit": True}}, engine=engine))
    record = FileRecord(path=tmp_path / "a.ts", relative="a.ts", contents=b"")

    await _collect(stage, [record])

    assert engine.requests[0].configuration == {"rules": {"explicit": True}}


class StalledResolver:
    async def resolve(self, path: Path) -> dict[str, object]:
        await asyncio.sleep(5)
        return {}


@pytest.mark.asyncio
async def test_timeout_bounds_config_resolution() -> None:
    engine = FakeEngine()
    stage = LintStage(PluginOptions(timeout=0.01), resolver=StalledResolver(), engine=engine, logger=RecordingLogger())

    with pytest.raises(StageTimeoutError, match="Config resolution for .*a.ts timed out"):
        await _collect(stage, [make_record("a.ts")])

    assert engine.requests == []


@pytest.mark.asyncio
async def test_resolution_timeout_bypasses_error_hook() -> None:
    handled: list[FileRecord] = []
    stage = LintStage(
        PluginOptions(timeout=0.01),
        resolver=StalledResolver(),
        engine=FakeEngine(),
        logger=RecordingLogger(),
        on_error=lambda record, exc: handled.append(record),
    )

    with pytest.raises(StageTimeoutError, match="Config resolution"):
        await _collect(stage, [make_record("a.ts"), make_record("b.ts")])

    assert handled == []
