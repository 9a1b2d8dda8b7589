# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Terminal rendering of scan progress, diagnostics and the summary box."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.status import Status
from rich.text import Text

from ..constants import PERFECT_SCORE, SCORE_BAR_WIDTH_CHARS, SCORE_GOOD_THRESHOLD, SCORE_OK_THRESHOLD
from ..core.console import detect_tty, get_console_manager
from ..core.models import Diagnostic, ProjectInfo, ScoreResult, format_framework_name
from ..core.severity import Severity
from ..diagnostics.scoring import round_half_up
from .grouping import (
    build_file_line_map,
    collect_affected_files,
    count_severity,
    format_elapsed_time,
    format_file_lines,
    pluralize,
    sorted_rule_groups,
)

BRAND_NAME: Final[str] = "Angular Doctor"
STEP_DONE_SYMBOL: Final[str] = "✔"
STEP_FAILED_SYMBOL: Final[str] = "✖"
ERROR_SYMBOL: Final[str] = "✗"
WARNING_SYMBOL: Final[str] = "⚠"
FILLED_BAR_CHAR: Final[str] = "█"
EMPTY_BAR_CHAR: Final[str] = "░"
INDENT: Final[str] = "  "

_SEVERITY_STYLES: Final[dict[Severity, str]] = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
}


def _console() -> Console:
    return get_console_manager().get(color=detect_tty(), emoji=False)


def score_style(score: int) -> str:
    """Return the Rich style used for ``score``."""

    if score >= SCORE_GOOD_THRESHOLD:
        return "green"
    if score >= SCORE_OK_THRESHOLD:
        return "yellow"
    return "red"


def doctor_face(score: int) -> tuple[str, str]:
    """Return the ``(eyes, mouth)`` of the branding face for ``score``."""

    if score >= SCORE_GOOD_THRESHOLD:
        return "◠ ◠", " ▽ "
    if score >= SCORE_OK_THRESHOLD:
        return "• •", " ─ "
    return "x x", " ▽ "


def score_bar_segments(score: int) -> tuple[str, str]:
    """Return the filled and empty parts of the score bar."""

    filled = round_half_up(score / PERFECT_SCORE * SCORE_BAR_WIDTH_CHARS)
    return FILLED_BAR_CHAR * filled, EMPTY_BAR_CHAR * (SCORE_BAR_WIDTH_CHARS - filled)


def score_bar(score: int) -> Text:
    """Return the coloured score bar."""

    filled, empty = score_bar_segments(score)
    return Text.assemble((filled, score_style(score)), (empty, "dim"))


def _face_lines(score: int) -> list[Text]:
    eyes, mouth = doctor_face(score)
    style = score_style(score)
    lines = ("┌─────┐", f"│ {eyes} │", f"│ {mouth} │", "└─────┘")
    return [Text(line, style=style) for line in lines]


def _score_line(score_result: ScoreResult) -> Text:
    style = score_style(score_result.score)
    return Text.assemble(
        (str(score_result.score), style),
        f" / {PERFECT_SCORE}  ",
        (score_result.label, style),
    )


class StepReporter:
    """Report pipeline steps with a spinner that resolves to a tick or a cross."""

    def __init__(self, console: Console | None = None) -> None:
        """Create the reporter.

        Args:
            console: Console to render on, defaults to the shared console.
        """

        self._console = console or _console()
        self._status: Status | None = None

    def _stop(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def start(self, message: str) -> None:
        """Show a spinner next to ``message``."""

        self._stop()
        if self._console.is_terminal:
            self._status = self._console.status(message)
            self._status.start()

    def succeed(self, message: str) -> None:
        """Replace the spinner with a success line."""

        self._stop()
        self._console.print(Text.assemble((STEP_DONE_SYMBOL, "green"), f" {message}"))

    def fail(self, message: str, error: Exception) -> None:
        """Replace the spinner with a failure line and the error text."""

        self._stop()
        self._console.print(Text.assemble((STEP_FAILED_SYMBOL, "red"), f" {message}"))
        self._console.print(Text(str(error), style="red"))


def print_project_detection(
    project: ProjectInfo,
    *,
    config_loaded: bool,
    diff_file_count: int | None,
    reporter: StepReporter | None = None,
) -> None:
    """Print the detection steps shown before analysis starts.

    Args:
        project: Discovered project.
        config_loaded: Whether a project configuration was found.
        diff_file_count: Number of changed source files in diff mode, ``None``
            for a full scan.
        reporter: Step reporter to print through.
    """

    steps = reporter or StepReporter()
    steps.succeed(f"Detecting framework. Found {format_framework_name(project.framework)}.")
    steps.succeed(f"Detecting Angular version. Found Angular {project.angular_version}.")
    steps.succeed("Detecting language. Found TypeScript.")
    standalone = "Supported." if project.has_standalone_components else "Not available (Angular 14+ required)."
    steps.succeed(f"Detecting standalone components. {standalone}")
    if diff_file_count is not None:
        steps.succeed(f"Scanning {diff_file_count} changed source files.")
    else:
        steps.succeed(f"Found {project.source_file_count} source files.")
    if config_loaded:
        steps.succeed("Loaded angular-doctor config.")
    _console().print()


def print_diagnostics(diagnostics: Sequence[Diagnostic], *, verbose: bool) -> None:
    """Print one block per rule group, errors first.

    Args:
        diagnostics: Diagnostics to print.
        verbose: Also list every affected file with its lines.
    """

    console = _console()
    for _rule_key, group in sorted_rule_groups(diagnostics):
        first = group[0]
        style = _SEVERITY_STYLES[first.severity]
        symbol = ERROR_SYMBOL if first.severity is Severity.ERROR else WARNING_SYMBOL
        line = Text.assemble(INDENT, (symbol, style), f" {first.message}")
        if len(group) > 1:
            line.append(f" ({len(group)})", style=style)
        console.print(line)
        if first.help:
            for help_line in first.help.splitlines():
                console.print(Text(f"{INDENT * 2}{help_line}", style="dim"))
        if verbose:
            for file_path, lines in build_file_line_map(group).items():
                console.print(Text(f"{INDENT * 2}{format_file_lines(file_path, lines)}", style="dim"))
        console.print()


def counts_line(diagnostics: Sequence[Diagnostic], *, total_source_files: int, elapsed_ms: float) -> Text:
    """Return the ``✗ N errors  ⚠ N warnings  across ...  in ...`` line."""

    parts: list[Text] = []
    errors = count_severity(diagnostics, Severity.ERROR)
    warnings = count_severity(diagnostics, Severity.WARNING)
    if errors:
        parts.append(Text(f"{ERROR_SYMBOL} {pluralize(errors, 'error')}", style="red"))
    if warnings:
        parts.append(Text(f"{WARNING_SYMBOL} {pluralize(warnings, 'warning')}", style="yellow"))
    affected = len(collect_affected_files(diagnostics))
    files_text = (
        f"across {affected}/{total_source_files} files"
        if total_source_files > 0
        else f"across {pluralize(affected, 'file')}"
    )
    parts.append(Text(files_text, style="dim"))
    parts.append(Text(f"in {format_elapsed_time(elapsed_ms)}", style="dim"))
    return Text("  ").join(parts)


def branding_lines(score_result: ScoreResult | None) -> list[Text]:
    """Return the branding block; without a score it reads "Score unavailable"."""

    if score_result is None:
        return [Text(BRAND_NAME), Text(""), Text("Score unavailable", style="dim"), Text("")]
    return [
        *_face_lines(score_result.score),
        Text(BRAND_NAME),
        Text(""),
        _score_line(score_result),
        Text(""),
        score_bar(score_result.score),
        Text(""),
    ]


def print_summary(
    diagnostics: Sequence[Diagnostic],
    *,
    score_result: ScoreResult | None,
    total_source_files: int,
    elapsed_ms: float,
) -> None:
    """Print the framed summary box.

    Args:
        diagnostics: Diagnostics surviving the ignore filter.
        score_result: Score to show, ``None`` when it must not be shown.
        total_source_files: Denominator for the affected-files figure.
        elapsed_ms: Scan duration in milliseconds.
    """

    body = Group(
        *branding_lines(score_result),
        counts_line(diagnostics, total_source_files=total_source_files, elapsed_ms=elapsed_ms),
    )
    _console().print(Panel.fit(body, box=box.ROUNDED, border_style="dim", padding=(0, 1)))


def print_branding(score_result: ScoreResult | None) -> None:
    """Print the branding face (when scored), name, score and bar without a frame."""

    console = _console()
    if score_result is not None:
        for line in _face_lines(score_result.score):
            console.print(Text(INDENT) + line)
    console.print(Text(f"{INDENT}{BRAND_NAME}"))
    console.print()
    if score_result is not None:
        console.print(Text(INDENT) + _score_line(score_result))
        console.print()
        console.print(Text(INDENT) + score_bar(score_result.score))
        console.print()


__all__ = [
    "BRAND_NAME",
    "StepReporter",
    "branding_lines",
    "counts_line",
    "doctor_face",
    "print_branding",
    "print_diagnostics",
    "print_project_detection",
    "print_summary",
    "score_bar",
    "score_bar_segments",
    "score_style",
]
