# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Readers for lint configuration files and ``[tool.lintstream]`` settings."""

from __future__ import annotations

import json
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import ConfigError
from ..options import DEFAULT_CONFIG_FILENAME

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "lintstream"
TOML_SUFFIX: Final[str] = ".toml"


def load_config_file(path: Path) -> dict[str, Any]:
    """Parse a lint configuration file into a mapping.

    JSON is the native format; files ending in ``.toml`` are read with
    :mod:`tomllib`.

    Args:
        path: Configuration file to read.

    Returns:
        dict[str, Any]: Parsed configuration table.

    Raises:
        ConfigError: If the file cannot be read, parsed, or is not a table.
    """

    try:
        if path.suffix == TOML_SUFFIX:
            with path.open("rb") as handle:
                data: object = tomllib.load(handle)
        else:
            data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to load configuration from {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigError(f"Configuration at {path} must be a table")
    return dict(data)


class ProjectSettings(BaseModel):
    """Command-line defaults stored under ``[tool.lintstream]``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    reporter: str = "prose"
    report_limit: int = 0
    emit_error: bool = True
    summarize_failure_output: bool = False
    rules_directory: Path | None = None
    config_filename: str = DEFAULT_CONFIG_FILENAME
    configuration: Path | None = None
    timeout: float | None = Field(default=None, gt=0)
    command: tuple[str, ...] | None = None


def _normalise_keys(section: Mapping[str, Any]) -> dict[str, Any]:
    return {str(key).replace("-", "_"): value for key, value in section.items()}


def load_project_settings(root: Path) -> ProjectSettings:
    """Load ``[tool.lintstream]`` from ``root/pyproject.toml``.

    Relative paths in the section are resolved against ``root``.

    Args:
        root: Project directory containing ``pyproject.toml``.

    Returns:
        ProjectSettings: Validated settings, or defaults when the file or section is absent.

    Raises:
        ConfigError: If the file is malformed or the section holds invalid values.
    """

    pyproject = root / PYPROJECT_FILENAME
    if not pyproject.is_file():
        return ProjectSettings()
    try:
        with pyproject.open("rb") as handle:
            document = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read {pyproject}: {exc}") from exc

    tool_section = document.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return ProjectSettings()
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return ProjectSettings()
    if not isinstance(section, Mapping):
        raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {pyproject} must be a table")

    try:
        settings = ProjectSettings.model_validate(_normalise_keys(section))
    except ValidationError as exc:
        raise ConfigError(f"Invalid [tool.{PYPROJECT_SECTION_KEY}] settings in {pyproject}: {exc}") from exc

    updates: dict[str, Path] = {}
    for key in ("rules_directory", "configuration"):
        value = getattr(settings, key)
        if value is not None and not value.is_absolute():
            updates[key] = root / value
    return settings.model_copy(update=updates) if updates else settings


__all__ = [
    "PYPROJECT_SECTION_KEY",
    "ProjectSettings",
    "load_config_file",
    "load_project_settings",
]
