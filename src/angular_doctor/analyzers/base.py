# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Interfaces shared by the external analyzer adapters."""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Protocol

from ..constants import ESLINT_CACHE_SEGMENTS
from ..core.errors import AnalyzerError
from ..core.models import Diagnostic, JsonValue
from ..core.process import CommandOptions, run_command_async

AsyncCommandRunner = Callable[[Sequence[str], CommandOptions], Awaitable[CompletedProcess[str]]]


class LintAnalyzer(Protocol):
    """Produce lint diagnostics for a project."""

    async def __call__(
        self,
        root: Path,
        *,
        has_typescript: bool,
        include_paths: Sequence[str] | None,
        use_type_aware: bool,
    ) -> list[Diagnostic]:
        """Lint ``root``; ``include_paths`` restricts the files when given."""
        ...


class DeadCodeAnalyzer(Protocol):
    """Produce dead-code diagnostics for a project."""

    async def __call__(self, root: Path) -> list[Diagnostic]:
        """Analyze the whole project rooted at ``root``."""
        ...


@dataclass(frozen=True, slots=True)
class AnalyzerSuite:
    """The pair of analyzers a scan runs."""

    lint: LintAnalyzer
    dead_code: DeadCodeAnalyzer


async def default_command_runner(args: Sequence[str], options: CommandOptions) -> CompletedProcess[str]:
    """Run ``args`` through :func:`run_command_async`."""

    return await run_command_async(args, options=options)


def cache_directory(root: Path) -> Path:
    """Return (and create) the analyzer cache directory below ``root``."""

    directory = root.joinpath(*ESLINT_CACHE_SEGMENTS)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def decode_json_output(analyzer: str, stdout: str) -> JsonValue:
    """Decode a JSON report, tolerating log lines printed before it.

    Args:
        analyzer: Analyzer name used in error messages.
        stdout: Captured standard output.

    Returns:
        JsonValue: Decoded payload.

    Raises:
        AnalyzerError: If no JSON document can be found.
    """

    text = stdout.strip()
    if not text:
        raise AnalyzerError(analyzer, "produced no output")
    try:
        return json.loads(text)
    except ValueError:
        pass
    for line in reversed(text.splitlines()):
        candidate = line.strip()
        if not candidate.startswith(("{", "[")):
            continue
        try:
            return json.loads(candidate)
        except ValueError:
            continue
    raise AnalyzerError(analyzer, "produced output that is not valid JSON")


def relative_to_root(file_path: str, root: Path) -> str | None:
    """Return ``file_path`` relative to ``root``, or ``None`` when it lies outside.

    Containment is decided on path components, so ``/repo/app-2`` is outside
    ``/repo/app``.

    Args:
        file_path: Absolute path, or a path relative to ``root``.
        root: Scan root.

    Returns:
        str | None: POSIX-style relative path.
    """

    resolved_root = root.resolve()
    candidate = Path(file_path)
    if not candidate.is_absolute():
        candidate = resolved_root / candidate
    candidate = candidate.resolve()
    if not candidate.is_relative_to(resolved_root):
        return None
    return candidate.relative_to(resolved_root).as_posix()


__all__ = [
    "AnalyzerSuite",
    "AsyncCommandRunner",
    "DeadCodeAnalyzer",
    "LintAnalyzer",
    "cache_directory",
    "decode_json_output",
    "default_command_runner",
    "relative_to_root",
]
