# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers tagged with the plugin name."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from functools import cache
from typing import Protocol, runtime_checkable

from rich.console import Console
from rich.text import Text

from .errors import PLUGIN_NAME


def stdout_is_tty() -> bool:
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@cache
def plugin_console(color: bool) -> Console:
    """Return the shared console for plugin output.

    No file is bound, so output follows whatever ``sys.stdout`` is at print
    time. Emoji codes and syntax highlighting stay off because failure
    messages are printed verbatim.

    Args:
        color: ``True`` to emit ANSI styles.

    Returns:
        Console: One console per colour setting for the process.
    """

    return Console(
        color_system="auto" if color else None,
        force_terminal=True if color else None,
        no_color=not color,
        emoji=False,
        highlight=False,
        soft_wrap=True,
    )


@runtime_checkable
class StageLogger(Protocol):
    """Output channels used by the stages and reporters."""

    def info(self, message: str) -> None:
        """Emit an informational, plugin-tagged message."""

    def error(self, message: str) -> None:
        """Emit a plugin-tagged message flagged as an error."""

    def raw(self, message: str) -> None:
        """Write ``message`` untagged to standard output."""

    def debug(self, message: str) -> None:
        """Emit a diagnostic trace message when debugging is enabled."""


@dataclass(slots=True)
class PluginLogger:
    """Console logger prefixing every tagged line with ``[plugin]``."""

    plugin: str = PLUGIN_NAME
    use_color: bool = field(default_factory=stdout_is_tty)
    debug_enabled: bool = False

    @property
    def console(self) -> Console:
        return plugin_console(self.use_color)

    def _prefix(self) -> Text:
        text = Text("[")
        text.append(self.plugin, style="cyan" if self.use_color else None)
        text.append("] ")
        return text

    def info(self, message: str) -> None:
        line = self._prefix()
        line.append(message)
        self.console.print(line)

    def error(self, message: str) -> None:
        line = self._prefix()
        line.append("error", style="red" if self.use_color else None)
        line.append(f" {message}")
        self.console.print(line)

    def raw(self, message: str) -> None:
        plugin_console(False).print(Text(message))

    def debug(self, message: str) -> None:
        if not self.debug_enabled:
            return
        line = self._prefix()
        line.append(f"[debug] {message}", style="dim" if self.use_color else None)
        self.console.print(line)


def get_logger(*, debug: bool = False) -> PluginLogger:
    """Return a console-backed logger for the current process.

    Args:
        debug: ``True`` to show debug traces.

    Returns:
        PluginLogger: Logger writing plugin-tagged lines to standard output.
    """

    return PluginLogger(debug_enabled=debug)


__all__ = [
    "PluginLogger",
    "StageLogger",
    "get_logger",
    "plugin_console",
    "stdout_is_tty",
]
