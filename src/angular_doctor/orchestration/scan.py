# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Scan a single Angular project end to end."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..analyzers import AnalyzerSuite, default_analyzers
from ..config import CliOverrides, load_config, resolve_scan_options
from ..constants import MILLISECONDS_PER_SECOND
from ..core.errors import ProjectDiscoveryError
from ..core.logging import blank_line, dim, info, ok, warn
from ..core.models import ProjectInfo, ScanResult, ScoreResult
from ..diagnostics import DiagnosticPipeline, PipelineRequest, calculate_score
from ..discovery import discover_project
from ..reporting import (
    ReportRequest,
    StepReporter,
    print_diagnostics,
    print_project_detection,
    print_summary,
    write_diagnostics_directory,
)
from ..reporting.console import print_branding

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScanRequest:
    """Per-target scan inputs supplied by the command line.

    Attributes:
        overrides: Explicit command-line toggles; unset values defer to the
            project configuration.
        score_only: Print only the numeric score.
        report: Markdown report settings.
        include_paths: Changed files to restrict linting to (diff mode).
    """

    overrides: CliOverrides = field(default_factory=CliOverrides)
    score_only: bool = False
    report: ReportRequest = field(default_factory=ReportRequest)
    include_paths: tuple[str, ...] = ()


def skipped_checks_label(skipped_checks: Sequence[str]) -> str:
    """Return ``"lint and dead code"`` style text for ``skipped_checks``."""

    return " and ".join(skipped_checks)


def _displayed_source_file_count(project: ProjectInfo, include_paths: Sequence[str]) -> int:
    return len(include_paths) if include_paths else project.source_file_count


def _print_score_only(score_result: ScoreResult, skipped_checks: Sequence[str]) -> None:
    info(str(score_result.score), use_emoji=False)
    if skipped_checks:
        warn(
            f"Note: {skipped_checks_label(skipped_checks)} checks failed; score may be incomplete.",
            use_emoji=False,
            stderr=True,
        )


def _print_clean_result(score_result: ScoreResult, skipped_checks: Sequence[str]) -> None:
    if skipped_checks:
        warn(f"No issues detected, but {skipped_checks_label(skipped_checks)} checks failed; results are incomplete.")
        blank_line()
        print_branding(None)
        dim("  Score not shown; some checks could not complete.")
        return
    ok("No issues found!")
    blank_line()
    print_branding(score_result)


def _write_output(result: ScanResult, *, request: ScanRequest, directory: Path, total_source_files: int) -> None:
    try:
        locations = write_diagnostics_directory(
            result.diagnostics,
            elapsed_ms=result.elapsed_seconds * MILLISECONDS_PER_SECOND,
            score_result=None if result.has_skipped_checks else result.score_result,
            total_source_files=total_source_files,
            report=request.report,
            base_directory=directory,
        )
    except OSError as exc:
        LOGGER.debug("failed to write diagnostics output: %s", exc)
        warn(f"Could not write diagnostics output: {exc}")
        return
    blank_line()
    dim(f"  Full diagnostics written to {locations.output_directory}")
    if locations.markdown_path is not None:
        dim(f"  Markdown report written to {locations.markdown_path}")


async def scan(
    directory: Path,
    request: ScanRequest | None = None,
    *,
    analyzers: AnalyzerSuite | None = None,
) -> ScanResult:
    """Discover, analyze, score and report one project.

    Args:
        directory: Project directory to scan.
        request: Command-line inputs, defaults to a full scan with project
            configuration only.
        analyzers: Lint and dead-code analyzers, defaults to ESLint and knip.

    Returns:
        ScanResult: Filtered diagnostics, score and skipped checks.

    Raises:
        ProjectDiscoveryError: If no manifest or no Angular dependency is found.
    """

    scan_request = request or ScanRequest()
    started = time.perf_counter()
    project = discover_project(directory)
    config = load_config(directory)
    options = resolve_scan_options(scan_request.overrides, config)
    include_paths = scan_request.include_paths

    if project.angular_version is None:
        raise ProjectDiscoveryError("No Angular dependency found in package.json")

    progress = StepReporter()
    if not scan_request.score_only:
        print_project_detection(
            project,
            config_loaded=config is not None,
            diff_file_count=len(include_paths) if include_paths else None,
            reporter=progress,
        )

    pipeline = DiagnosticPipeline(analyzers or default_analyzers(), progress=progress)
    outcome = await pipeline.run(
        PipelineRequest(
            project=project,
            options=options,
            config=config,
            score_only=scan_request.score_only,
            include_paths=include_paths,
        )
    )
    elapsed_seconds = time.perf_counter() - started
    score_result = calculate_score(outcome.diagnostics)
    result = ScanResult(
        project=project,
        diagnostics=outcome.diagnostics,
        score_result=score_result,
        skipped_checks=outcome.skipped_checks,
        elapsed_seconds=elapsed_seconds,
    )
    LOGGER.debug(
        "scanned %s: %d diagnostics, skipped=%s, %.3fs",
        project.project_name,
        len(result.diagnostics),
        result.skipped_checks,
        elapsed_seconds,
    )

    if scan_request.score_only:
        _print_score_only(score_result, result.skipped_checks)
        return result

    if not result.diagnostics:
        _print_clean_result(score_result, result.skipped_checks)
        return result

    print_diagnostics(result.diagnostics, verbose=options.verbose)
    total_source_files = _displayed_source_file_count(project, include_paths)
    print_summary(
        result.diagnostics,
        score_result=None if result.has_skipped_checks else score_result,
        total_source_files=total_source_files,
        elapsed_ms=elapsed_seconds * MILLISECONDS_PER_SECOND,
    )
    _write_output(result, request=scan_request, directory=directory, total_source_files=total_source_files)

    if result.has_skipped_checks:
        blank_line()
        warn(f"  Note: {skipped_checks_label(result.skipped_checks)} checks failed; score may be incomplete.")
    return result


__all__ = ["ScanRequest", "scan", "skipped_checks_label"]
