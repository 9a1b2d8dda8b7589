# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Persist per-rule summaries, the JSON dump and the markdown report."""

from __future__ import annotations

import json
import tempfile
import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ..constants import DEFAULT_REPORT_FILENAME, DIAGNOSTICS_JSON_FILENAME, OUTPUT_DIR_PREFIX
from ..core.models import Diagnostic, ScoreResult
from .grouping import build_file_line_map, format_file_lines, sorted_rule_groups
from .markdown import build_markdown_report

RULE_FILE_SEPARATOR = "--"


@dataclass(frozen=True, slots=True)
class OutputLocations:
    """Where a scan's persisted output ended up."""

    output_directory: Path
    markdown_path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReportRequest:
    """Markdown report settings.

    Attributes:
        enabled: Whether a markdown report should be written.
        target: Optional file or directory given by the user.
    """

    enabled: bool = False
    target: str | None = None


def rule_summary_filename(rule_key: str) -> str:
    """Return the summary filename for ``rule_key`` (slashes become ``--``)."""

    return f"{rule_key.replace('/', RULE_FILE_SEPARATOR)}.txt"


def format_rule_summary(rule_key: str, diagnostics: Sequence[Diagnostic]) -> str:
    """Render the plain-text summary written for one rule group."""

    first = diagnostics[0]
    sections = [
        f"Rule: {rule_key}",
        f"Severity: {first.severity.value}",
        f"Category: {first.category}",
        f"Count: {len(diagnostics)}",
        "",
        first.message,
    ]
    if first.help:
        sections.extend(["", f"Suggestion: {first.help}"])
    sections.extend(["", "Files:"])
    sections.extend(f"  {format_file_lines(path, lines)}" for path, lines in build_file_line_map(diagnostics).items())
    return "\n".join(sections) + "\n"


def resolve_report_path(report: ReportRequest, output_directory: Path, base_directory: Path) -> Path | None:
    """Decide where the markdown report goes.

    Args:
        report: Report settings.
        output_directory: Fresh temporary output directory of this scan.
        base_directory: Scanned directory, used for relative targets.

    Returns:
        Path | None: ``None`` when no report was requested. A target with a
        file extension is used verbatim; any other target is treated as a
        directory receiving ``report.md``. Without a target the report goes
        into ``output_directory``.
    """

    if not report.enabled:
        return None
    if not report.target:
        return output_directory / DEFAULT_REPORT_FILENAME
    target = Path(report.target).expanduser()
    if not target.is_absolute():
        target = base_directory / target
    if target.suffix:
        return target
    return target / DEFAULT_REPORT_FILENAME


def serialize_diagnostics(diagnostics: Sequence[Diagnostic]) -> str:
    """Return the ``diagnostics.json`` payload."""

    return json.dumps([diagnostic.model_dump(mode="json", by_alias=True) for diagnostic in diagnostics], indent=2)


def create_output_directory() -> Path:
    """Create and return a fresh ``angular-doctor-<uuid>`` temp directory."""

    directory = Path(tempfile.gettempdir()) / f"{OUTPUT_DIR_PREFIX}{uuid.uuid4()}"
    directory.mkdir()
    return directory


def write_diagnostics_directory(
    diagnostics: Sequence[Diagnostic],
    *,
    elapsed_ms: float,
    score_result: ScoreResult | None,
    total_source_files: int,
    report: ReportRequest,
    base_directory: Path,
    output_directory: Path | None = None,
) -> OutputLocations:
    """Write every persisted artifact of a scan.

    Args:
        diagnostics: Diagnostics surviving the ignore filter.
        elapsed_ms: Scan duration in milliseconds.
        score_result: Score for the markdown report, ``None`` to omit it.
        total_source_files: Source file count for the markdown summary.
        report: Markdown report settings.
        base_directory: Scanned directory.
        output_directory: Existing directory to write into; a fresh temp
            directory is created when omitted.

    Returns:
        OutputLocations: Paths of the output directory and markdown report.

    Raises:
        OSError: If any file cannot be written.
    """

    directory = output_directory or create_output_directory()
    for rule_key, group in sorted_rule_groups(diagnostics):
        (directory / rule_summary_filename(rule_key)).write_text(format_rule_summary(rule_key, group), encoding="utf-8")
    (directory / DIAGNOSTICS_JSON_FILENAME).write_text(serialize_diagnostics(diagnostics), encoding="utf-8")

    markdown_path = resolve_report_path(report, directory, base_directory)
    if markdown_path is not None:
        markdown_path.parent.mkdir(parents=True, exist_ok=True)
        markdown_path.write_text(
            build_markdown_report(
                diagnostics,
                elapsed_ms=elapsed_ms,
                score_result=score_result,
                total_source_files=total_source_files,
            ),
            encoding="utf-8",
        )
    return OutputLocations(output_directory=directory, markdown_path=markdown_path)


__all__ = [
    "OutputLocations",
    "ReportRequest",
    "create_output_directory",
    "format_rule_summary",
    "resolve_report_path",
    "rule_summary_filename",
    "serialize_diagnostics",
    "write_diagnostics_directory",
]
