# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared Rich consoles for scan output."""

from __future__ import annotations

import sys
from functools import lru_cache
from typing import TextIO

from rich.console import Console

ConsoleKey = tuple[bool, bool, bool, bool]


def _stream_is_tty(stream: TextIO | None) -> bool:
    if stream is None:
        return False
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        # Closed or replaced streams (pytest capture, CliRunner) are not terminals.
        return False


def detect_tty() -> bool:
    """Return whether scan output is going to a terminal."""

    return _stream_is_tty(sys.stdout)


def detect_stdin_tty() -> bool:
    """Return whether a user can answer prompts on stdin."""

    return _stream_is_tty(sys.stdin)


class RichConsoleManager:
    """Hand out one Rich console per output flavour.

    A console is never bound to a file object. Rich then resolves
    ``sys.stdout`` or ``sys.stderr`` on every write, so redirecting those
    streams also captures or silences everything printed through here.
    """

    def __init__(self) -> None:
        self._consoles: dict[ConsoleKey, Console] = {}

    def get(self, *, color: bool, emoji: bool, stderr: bool = False) -> Console:
        """Return the console for the requested flavour.

        Args:
            color: Whether ANSI styling is wanted; only honoured on a terminal.
            emoji: Whether ``:name:`` emoji codes are rendered.
            stderr: Target standard error instead of standard output.

        Returns:
            Console: A console shared by every caller asking for the same flavour.
        """

        terminal = detect_tty()
        key: ConsoleKey = (color, emoji, terminal, stderr)
        console = self._consoles.get(key)
        if console is None:
            styled = color and terminal
            console = Console(
                color_system="auto" if styled else None,
                force_terminal=terminal,
                no_color=not styled,
                emoji=emoji,
                soft_wrap=True,
                stderr=stderr,
            )
            self._consoles[key] = console
        return console


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide console manager."""

    return RichConsoleManager()


__all__ = ["RichConsoleManager", "detect_stdin_tty", "detect_tty", "get_console_manager"]
