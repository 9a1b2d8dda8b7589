# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run external commands (git, npx) with list arguments and captured text."""

from __future__ import annotations

import asyncio
import logging
import shutil

# Bandit: arguments are always lists and ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

LOGGER = logging.getLogger(__name__)

TIMEOUT_RETURNCODE: Final[int] = 124


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """How a command is executed.

    Attributes:
        cwd: Working directory, the current one when ``None``.
        env: Full replacement environment, inherited when ``None``.
        check: Raise :class:`SubprocessExecutionError` on a non-zero exit.
        capture_output: Capture stdout and stderr (always on for async runs).
        timeout: Seconds before the command is killed.
        discard_stdin: Attach stdin to ``/dev/null`` so tools never prompt.
    """

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    check: bool = True
    capture_output: bool = False
    timeout: float | None = None
    discard_stdin: bool = False


class SubprocessExecutionError(RuntimeError):
    """A checked command exited with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int, stdout: str | None, stderr: str | None) -> None:
        super().__init__(f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}")
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def _decode(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode(errors="replace")
    return value


def _resolve_executable(args: Sequence[str]) -> list[str]:
    """Return ``args`` with the executable replaced by its absolute path.

    Raises:
        ValueError: If ``args`` is empty.
        FileNotFoundError: If the executable is not on ``PATH``.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)
    executable, *rest = args
    if Path(executable).is_absolute():
        return [executable, *rest]
    resolved = shutil.which(executable)
    if resolved is None:
        msg = f"Executable '{executable}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def _timed_out(command: list[str], timeout: float | None, stdout: str = "", stderr: str = "") -> CompletedProcess[str]:
    note = f"Command timed out after {timeout:.1f}s"
    return CompletedProcess(
        args=command,
        returncode=TIMEOUT_RETURNCODE,
        stdout=stdout,
        stderr=f"{stderr}\n{note}" if stderr else note,
    )


def _finish(command: list[str], completed: CompletedProcess[str], options: CommandOptions) -> CompletedProcess[str]:
    if options.check and completed.returncode != 0:
        raise SubprocessExecutionError(command, completed.returncode, completed.stdout, completed.stderr)
    return completed


def _cwd(options: CommandOptions) -> str | None:
    return None if options.cwd is None else str(options.cwd)


def _env(options: CommandOptions) -> dict[str, str] | None:
    return None if options.env is None else dict(options.env)


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Run ``args`` to completion and return its result as text.

    A timeout does not raise. It yields return code ``124`` with a note
    appended to stderr.

    Raises:
        FileNotFoundError: If the executable is not on ``PATH``.
        SubprocessExecutionError: If ``options.check`` is set and the command fails.
    """

    opts = options or CommandOptions()
    command = _resolve_executable(args)
    LOGGER.debug("running %s (cwd=%s)", " ".join(args), opts.cwd)
    try:
        completed = subprocess.run(  # nosec B603 - list arguments, no shell
            command,
            cwd=_cwd(opts),
            env=_env(opts),
            check=False,
            capture_output=opts.capture_output,
            text=True,
            timeout=opts.timeout,
            stdin=subprocess.DEVNULL if opts.discard_stdin else None,
        )
    except subprocess.TimeoutExpired as exc:
        completed = _timed_out(command, opts.timeout, _decode(exc.stdout), _decode(exc.stderr))
    return _finish(command, completed, opts)


async def run_command_async(
    args: Sequence[str],
    *,
    options: CommandOptions | None = None,
) -> CompletedProcess[str]:
    """Asyncio counterpart of :func:`run_command`; output is always captured.

    On timeout the process is killed and reaped before returning code ``124``.

    Raises:
        FileNotFoundError: If the executable is not on ``PATH``.
        SubprocessExecutionError: If ``options.check`` is set and the command fails.
    """

    opts = options or CommandOptions()
    command = _resolve_executable(args)
    LOGGER.debug("running async %s (cwd=%s)", " ".join(args), opts.cwd)
    process = await asyncio.create_subprocess_exec(
        *command,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        stdin=asyncio.subprocess.DEVNULL if opts.discard_stdin else None,
        cwd=_cwd(opts),
        env=_env(opts),
    )
    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=opts.timeout)
    except TimeoutError:
        process.kill()
        await process.wait()
        return _finish(command, _timed_out(command, opts.timeout), opts)
    completed = CompletedProcess(
        args=command,
        returncode=process.returncode or 0,
        stdout=_decode(stdout),
        stderr=_decode(stderr),
    )
    return _finish(command, completed, opts)


__all__ = [
    "CommandOptions",
    "SubprocessExecutionError",
    "TIMEOUT_RETURNCODE",
    "run_command",
    "run_command_async",
]
