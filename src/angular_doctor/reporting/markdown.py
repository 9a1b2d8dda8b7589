# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render the optional markdown report."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from ..constants import PERFECT_SCORE
from ..core.models import Diagnostic, ScoreResult
from ..core.severity import Severity
from .grouping import (
    build_file_line_map,
    collect_affected_files,
    count_severity,
    format_elapsed_time,
    format_file_lines,
    sorted_rule_groups,
)

REPORT_TITLE = "# Angular Doctor Report"


def _summary_lines(diagnostics: Sequence[Diagnostic], elapsed_ms: float, total_source_files: int) -> list[str]:
    affected = len(collect_affected_files(diagnostics))
    affected_label = f"{affected}/{total_source_files}" if total_source_files > 0 else f"{affected}"
    return [
        "## Summary",
        "",
        f"- Errors: **{count_severity(diagnostics, Severity.ERROR)}**",
        f"- Warnings: **{count_severity(diagnostics, Severity.WARNING)}**",
        f"- Affected files: **{affected_label}**",
        f"- Elapsed: **{format_elapsed_time(elapsed_ms)}**",
        "",
    ]


def build_markdown_report(
    diagnostics: Sequence[Diagnostic],
    *,
    elapsed_ms: float,
    score_result: ScoreResult | None,
    total_source_files: int,
    generated_at: datetime | None = None,
) -> str:
    """Return the markdown report for a scan.

    Args:
        diagnostics: Diagnostics surviving the ignore filter.
        elapsed_ms: Scan duration in milliseconds.
        score_result: Score to include; ``None`` omits the score section.
        total_source_files: Denominator for the affected-files figure; ``0``
            prints the bare count.
        generated_at: Timestamp to print, defaults to now.

    Returns:
        str: Markdown document.
    """

    timestamp = (generated_at or datetime.now(UTC)).isoformat()
    lines = [REPORT_TITLE, "", f"Generated: {timestamp}", ""]
    if score_result is not None:
        lines.extend(["## Score", "", f"**{score_result.score} / {PERFECT_SCORE}**: {score_result.label}", ""])
    lines.extend(_summary_lines(diagnostics, elapsed_ms, total_source_files))

    lines.extend(["## Diagnostics", ""])
    if not diagnostics:
        lines.extend(["No issues found.", ""])
        return "\n".join(lines)

    for rule_key, group in sorted_rule_groups(diagnostics):
        first = group[0]
        lines.extend(
            [
                f"### {rule_key}",
                "",
                f"- Severity: **{first.severity.value}**",
                f"- Category: **{first.category}**",
                f"- Count: **{len(group)}**",
                "",
                first.message,
                "",
            ]
        )
        if first.help:
            lines.extend([f"**Suggestion:** {first.help}", ""])
        lines.append("**Files:**")
        file_map = build_file_line_map(group)
        lines.extend(f"- {format_file_lines(path, file_lines)}" for path, file_lines in file_map.items())
        lines.append("")
    return "\n".join(lines)


__all__ = ["REPORT_TITLE", "build_markdown_report"]
