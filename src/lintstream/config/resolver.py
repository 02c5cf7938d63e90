# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Resolve the lint configuration that applies to each file."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from ..errors import ConfigError, ConfigResolutionError
from ..options import DEFAULT_CONFIG_FILENAME, LintConfiguration
from .sources import load_config_file


@runtime_checkable
class ConfigResolver(Protocol):
    """Asynchronously produce the effective configuration for a file."""

    async def resolve(self, path: Path) -> LintConfiguration:
        """Return the configuration that applies to ``path``.

        Args:
            path: Absolute path of the file being linted.

        Returns:
            LintConfiguration: Effective configuration mapping.

        Raises:
            ConfigResolutionError: If the configuration cannot be produced.
        """
        ...


class NearestConfigResolver:
    """Find the configuration file closest to each linted file.

    One resolver serves one pipeline run. Directory lookups are cached for the
    lifetime of the instance, so sibling files share a single read of their
    configuration. An explicit ``override`` short-circuits the search: a
    mapping is returned as-is for every file and a path is loaded once.
    """

    def __init__(
        self,
        filename: str = DEFAULT_CONFIG_FILENAME,
        override: Mapping[str, Any] | Path | str | None = None,
    ) -> None:
        self.filename = filename
        self._override = Path(override) if isinstance(override, str) else override
        self._explicit: dict[str, Any] | None = None
        self._by_directory: dict[Path, dict[str, Any]] = {}

    async def resolve(self, path: Path) -> LintConfiguration:
        if isinstance(self._override, Mapping):
            return dict(self._override)
        return await asyncio.to_thread(self._resolve_blocking, Path(path))

    def _resolve_blocking(self, path: Path) -> dict[str, Any]:
        try:
            if self._override is not None:
                if self._explicit is None:
                    self._explicit = load_config_file(self._override)
                return self._explicit
            return self._nearest(path.resolve().parent)
        except ConfigError as exc:
            raise ConfigResolutionError(path, exc) from exc

    def _nearest(self, directory: Path) -> dict[str, Any]:
        visited: list[Path] = []
        configuration: dict[str, Any] = {}
        for candidate_dir in (directory, *directory.parents):
            cached = self._by_directory.get(candidate_dir)
            if cached is not None:
                configuration = cached
                break
            visited.append(candidate_dir)
            candidate = candidate_dir / self.filename
            if candidate.is_file():
                configuration = load_config_file(candidate)
                break
        for entry in visited:
            self._by_directory[entry] = configuration
        return configuration


__all__ = ["ConfigResolver", "NearestConfigResolver"]
