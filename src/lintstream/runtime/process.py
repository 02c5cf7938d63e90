# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Asynchronous wrappers around external command execution."""

from __future__ import annotations

import asyncio
import shutil
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class CompletedCommand:
    """Captured result of an external command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str


def normalize_args(args: Sequence[str]) -> list[str]:
    """Resolve the executable of ``args`` against ``PATH``.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Argument list whose first element is an absolute executable path.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be located.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


async def run_command(args: Sequence[str], *, cwd: Path | None = None) -> CompletedCommand:
    """Run ``args`` without a shell and capture its output.

    The child process is killed if the awaiting task is cancelled.

    Args:
        args: Command and arguments to execute.
        cwd: Optional working directory for the child process.

    Returns:
        CompletedCommand: Exit status and decoded output streams.
    """

    argv = normalize_args(args)
    process = await asyncio.create_subprocess_exec(
        *argv,
        cwd=cwd,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await process.communicate()
    except asyncio.CancelledError:
        if process.returncode is None:
            process.kill()
            await process.wait()
        raise
    return CompletedCommand(
        args=tuple(argv),
        returncode=process.returncode if process.returncode is not None else -1,
        stdout=stdout.decode(errors="ignore"),
        stderr=stderr.decode(errors="ignore"),
    )


__all__ = ["CompletedCommand", "normalize_args", "run_command"]
