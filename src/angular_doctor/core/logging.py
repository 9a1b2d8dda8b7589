# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Status lines printed to the user, plus debug logging for ``--debug``."""

from __future__ import annotations

import io
import logging
import sys
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager, redirect_stderr, redirect_stdout

from rich.text import Text

from .console import detect_tty, get_console_manager

PACKAGE_LOGGER_NAME = "angular_doctor"


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, else an empty string."""

    return symbol if enable else ""


def _print_line(
    msg: str,
    *,
    style: str | None,
    use_emoji: bool,
    use_color: bool | None = None,
    stderr: bool = False,
) -> None:
    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled, emoji=use_emoji, stderr=stderr)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def info(msg: str, *, use_emoji: bool = True, use_color: bool | None = None) -> None:
    """Print ``msg`` unstyled on stdout.

    Args:
        msg: Line to print.
        use_emoji: Render emoji codes contained in ``msg``.
        use_color: Force colour on or off; ``None`` follows TTY detection.
    """

    _print_line(msg, style=None, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool = True, use_color: bool | None = None) -> None:
    """Print a green success line, prefixed with ✅ when emoji are on."""

    _print_line(f"{emoji('✅ ', use_emoji)}{msg}", style="green", use_emoji=use_emoji, use_color=use_color)


def warn(
    msg: str,
    *,
    use_emoji: bool = True,
    use_color: bool | None = None,
    stderr: bool = False,
) -> None:
    """Print a yellow warning line.

    Args:
        msg: Warning text.
        use_emoji: Prefix the line with ⚠️.
        use_color: Force colour on or off; ``None`` follows TTY detection.
        stderr: Send the warning to stderr, keeping stdout machine readable.
    """

    prefix = emoji("⚠️ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="yellow", use_emoji=use_emoji, use_color=use_color, stderr=stderr)


def fail(msg: str, *, use_emoji: bool = True, use_color: bool | None = None) -> None:
    """Print a red error line on stderr."""

    _print_line(f"{emoji('❌ ', use_emoji)}{msg}", style="red", use_emoji=use_emoji, use_color=use_color, stderr=True)


def dim(msg: str, *, use_color: bool | None = None) -> None:
    """Print a de-emphasised line on stdout."""

    _print_line(msg, style="dim", use_emoji=False, use_color=use_color)


def blank_line() -> None:
    """Print an empty line on stdout."""

    _print_line("", style=None, use_emoji=False)


@contextmanager
def silenced_output() -> Iterator[None]:
    """Discard anything written to stdout or stderr within the block.

    The previous streams are restored on every exit path, including when the
    block raises.

    Yields:
        None: Control returns to the caller with output suppressed.
    """

    with ExitStack() as stack:
        stack.enter_context(redirect_stdout(io.StringIO()))
        stack.enter_context(redirect_stderr(io.StringIO()))
        yield


def configure_debug_logging() -> None:
    """Stream package debug records to stderr."""

    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if getattr(logger, "_angular_doctor_debug_configured", False):
        return
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    setattr(logger, "_angular_doctor_debug_configured", True)


__all__ = [
    "PACKAGE_LOGGER_NAME",
    "blank_line",
    "configure_debug_logging",
    "dim",
    "emoji",
    "fail",
    "info",
    "ok",
    "silenced_output",
    "warn",
]
