# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Line formats used by the reporters and the end-of-run summary.

Engine positions are zero-based; every format here displays them one-based.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from ..models import Failure


def _location(failure: Failure) -> tuple[int, int]:
    start = failure.start_position
    return start.line + 1, start.character + 1


def prose_error_format(failure: Failure) -> str:
    """Render ``failure`` as ``name[line, character]: message``.

    Args:
        failure: Failure to format.

    Returns:
        str: Prose line with one-based line and character.
    """

    line, character = _location(failure)
    return f"{failure.name}[{line}, {character}]: {failure.failure}"


def verbose_error_format(failure: Failure, *, name: str | Path | None = None) -> str:
    """Render ``failure`` as prose prefixed by its rule name.

    Args:
        failure: Failure to format.
        name: Replacement for the engine's file name, e.g. the full path.

    Returns:
        str: Line shaped ``(rule) name[line, character]: message``.
    """

    line, character = _location(failure)
    display = failure.name if name is None else str(name)
    return f"({failure.rule_name}) {display}[{line}, {character}]: {failure.failure}"


def msbuild_error_format(failure: Failure, path: str | Path) -> str:
    line, character = _location(failure)
    return f"{path}({line},{character}): warning {failure.rule_name}: {failure.failure}"


def json_error_format(failures: Iterable[Failure]) -> str:
    """Encode failures as a compact JSON array using the wire keys."""

    return json.dumps([failure.to_wire() for failure in failures], separators=(",", ":"))


__all__ = [
    "json_error_format",
    "msbuild_error_format",
    "prose_error_format",
    "verbose_error_format",
]
