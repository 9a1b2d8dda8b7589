# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer option declarations and their normalised dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

from ..config import CliOverrides
from ..reporting import ReportRequest

DIRECTORY_ARGUMENT = Annotated[
    Path,
    typer.Argument(help="Project directory to scan.", file_okay=False),
]
LINT_OPTION = Annotated[
    bool | None,
    typer.Option("--lint/--no-lint", help="Run (or skip) lint checks.", show_default=False),
]
DEAD_CODE_OPTION = Annotated[
    bool | None,
    typer.Option("--dead-code/--no-dead-code", help="Run (or skip) dead code detection.", show_default=False),
]
VERBOSE_OPTION = Annotated[
    bool | None,
    typer.Option("--verbose/--no-verbose", help="Show file details per rule.", show_default=False),
]
FAST_OPTION = Annotated[
    bool | None,
    typer.Option(
        "--fast/--no-fast",
        help="Skip dead code detection and type-aware lint rules.",
        show_default=False,
    ),
]
SCORE_OPTION = Annotated[
    bool,
    typer.Option("--score", help="Output only the score."),
]
REPORT_OPTION = Annotated[
    bool,
    typer.Option("--report", help="Write a markdown report."),
]
REPORT_PATH_OPTION = Annotated[
    str | None,
    typer.Option(
        "--report-path",
        help="Markdown report file, or directory receiving report.md. Implies --report.",
        metavar="PATH",
    ),
]
YES_OPTION = Annotated[
    bool,
    typer.Option("--yes", "-y", help="Skip prompts and scan every workspace project."),
]
PROJECT_OPTION = Annotated[
    str | None,
    typer.Option("--project", help="Workspace project(s) to scan, comma separated.", metavar="NAMES"),
]
DIFF_OPTION = Annotated[
    bool | None,
    typer.Option("--diff/--no-diff", help="Scan only files changed against a base branch.", show_default=False),
]
DIFF_BASE_OPTION = Annotated[
    str | None,
    typer.Option("--diff-base", help="Base branch for diff mode. Implies --diff.", metavar="BRANCH"),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Print debug logging to stderr."),
]


@dataclass(frozen=True, slots=True)
class ScanCLIOptions:
    """Normalised command-line inputs for one invocation."""

    directory: Path
    overrides: CliOverrides
    score_only: bool
    report: ReportRequest
    yes: bool
    project: str | None
    debug: bool

    @property
    def diff(self) -> bool | str | None:
        """Return the diff request given on the command line, if any."""

        return self.overrides.diff


def _resolve_diff_flag(diff: bool | None, diff_base: str | None) -> bool | str | None:
    base = diff_base.strip() if diff_base else ""
    if not base:
        return diff
    if diff is False:
        raise typer.BadParameter("--diff-base cannot be combined with --no-diff", param_hint="--diff-base")
    return base


def _normalise_project(project: str | None) -> str | None:
    if project is None:
        return None
    stripped = project.strip()
    return stripped or None


def build_scan_cli_options(
    *,
    directory: Path,
    lint: bool | None,
    dead_code: bool | None,
    verbose: bool | None,
    fast: bool | None,
    score: bool,
    report: bool,
    report_path: str | None,
    yes: bool,
    project: str | None,
    diff: bool | None,
    diff_base: str | None,
    debug: bool,
) -> ScanCLIOptions:
    """Fold raw Typer values into :class:`ScanCLIOptions`.

    Returns:
        ScanCLIOptions: Options with implied flags applied.

    Raises:
        typer.BadParameter: If ``--diff-base`` is combined with ``--no-diff``.
    """

    return ScanCLIOptions(
        directory=directory,
        overrides=CliOverrides(
            lint=lint,
            dead_code=dead_code,
            verbose=verbose,
            fast=fast,
            diff=_resolve_diff_flag(diff, diff_base),
        ),
        score_only=score,
        report=ReportRequest(enabled=report or bool(report_path), target=report_path or None),
        yes=yes,
        project=_normalise_project(project),
        debug=debug,
    )


__all__ = [
    "DEAD_CODE_OPTION",
    "DEBUG_OPTION",
    "DIFF_BASE_OPTION",
    "DIFF_OPTION",
    "DIRECTORY_ARGUMENT",
    "FAST_OPTION",
    "LINT_OPTION",
    "PROJECT_OPTION",
    "REPORT_OPTION",
    "REPORT_PATH_OPTION",
    "SCORE_OPTION",
    "ScanCLIOptions",
    "VERBOSE_OPTION",
    "YES_OPTION",
    "build_scan_cli_options",
]
