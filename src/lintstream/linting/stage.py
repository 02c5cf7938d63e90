# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Streaming stage attaching lint results to each file record."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TypeAlias, TypeVar

from ..config.resolver import ConfigResolver, NearestConfigResolver
from ..errors import ConfigResolutionError, StageTimeoutError, UnsupportedInputError
from ..logging import StageLogger, get_logger
from ..models import FileRecord
from ..options import LintConfiguration, PluginOptions
from ..streams import RecordSource, iterate
from .executor import LintExecutor

ResultT = TypeVar("ResultT")

ErrorHandler: TypeAlias = Callable[[FileRecord, ConfigResolutionError], None]


class LintStage:
    """Resolve configuration and lint each record, strictly one file at a time.

    Records leave the stage in the order they arrive. Null records pass through
    untouched and a streaming record aborts the whole stage. A configuration
    failure ends the stream unless ``on_error`` is supplied, in which case the
    handler receives the record and error, the record is dropped, and later
    records continue. Engine failures always propagate.
    """

    def __init__(
        self,
        options: PluginOptions | None = None,
        *,
        resolver: ConfigResolver | None = None,
        engine: object | None = None,
        logger: StageLogger | None = None,
        on_error: ErrorHandler | None = None,
    ) -> None:
        self.options = options or PluginOptions()
        self.resolver = resolver or NearestConfigResolver(
            self.options.config_filename,
            self.options.configuration,
        )
        self.executor = LintExecutor(
            engine if engine is not None else self.options.engine,
            rules_directory=self.options.rules_directory,
        )
        self.logger = logger or get_logger()
        self.on_error = on_error

    def __call__(self, records: RecordSource[FileRecord]) -> AsyncIterator[FileRecord]:
        return self.process(records)

    async def process(self, records: RecordSource[FileRecord]) -> AsyncIterator[FileRecord]:
        """Lint ``records`` in order and yield each one once it carries a result.

        Args:
            records: Sync or async iterable of file records from the host.

        Yields:
            FileRecord: The same record objects, with :attr:`FileRecord.lint` attached.

        Raises:
            UnsupportedInputError: If a record holds streaming content.
            ConfigResolutionError: If resolution fails and no ``on_error`` handler is set.
            LintExecutionError: If the engine fails.
            StageTimeoutError: If resolution or linting exceeds the configured timeout.
        """

        async for record in iterate(records):
            try:
                linted = await self.lint_file(record)
            except asyncio.CancelledError:
                self.logger.info(f"Lint of {record.relative} abandoned; the engine was not notified.")
                raise
            if linted is not None:
                yield linted

    async def lint_file(self, record: FileRecord) -> FileRecord | None:
        """Run the resolve-then-lint cycle for a single record.

        Args:
            record: Record to lint in place.

        Returns:
            FileRecord | None: The record, or ``None`` when it was handed to ``on_error``.
        """

        if record.is_null():
            self.logger.debug(f"skip path={record.relative} reason=no-content")
            return record
        if record.is_stream():
            raise UnsupportedInputError("Streaming not supported")

        try:
            configuration = await self._resolve(record)
        except ConfigResolutionError as exc:
            if self.on_error is None:
                raise
            self.on_error(record, exc)
            return None

        record.lint = await self._bounded(
            self.executor.execute(record.relative, record.text(), configuration),
            record,
            "Linting",
        )
        self.logger.debug(f"linted path={record.relative}")
        return record

    async def _resolve(self, record: FileRecord) -> LintConfiguration:
        try:
            return await self._bounded(self.resolver.resolve(record.path), record, "Config resolution")
        except (ConfigResolutionError, StageTimeoutError):
            raise
        except Exception as exc:
            raise ConfigResolutionError(record.path, exc) from exc

    async def _bounded(self, awaitable: Awaitable[ResultT], record: FileRecord, phase: str) -> ResultT:
        timeout = self.options.timeout
        if timeout is None:
            return await awaitable
        try:
            async with asyncio.timeout(timeout):
                return await awaitable
        except TimeoutError as exc:
            raise StageTimeoutError(record.path, phase, timeout) from exc


__all__ = ["ErrorHandler", "LintStage"]
