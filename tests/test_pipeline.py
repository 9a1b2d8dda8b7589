# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the diagnostic collection pipeline."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest

from angular_doctor.analyzers.base import AnalyzerSuite
from angular_doctor.config.models import AngularDoctorConfig, IgnoreConfig
from angular_doctor.config.resolution import ScanOptions
from angular_doctor.core.errors import AnalyzerError
from angular_doctor.core.models import Diagnostic, ProjectInfo
from angular_doctor.diagnostics.pipeline import (
    DiagnosticPipeline,
    PipelineRequest,
    compute_include_paths,
)


class FakeLint:
    def __init__(self, diagnostics: list[Diagnostic] | None = None, error: Exception | None = None) -> None:
        self.diagnostics = diagnostics or []
        self.error = error
        self.calls: list[dict[str, object]] = []

    async def __call__(self, root, *, has_typescript, include_paths, use_type_aware):
        self.calls.append(
            {
                "root": root,
                "has_typescript": has_typescript,
                "include_paths": include_paths,
                "use_type_aware": use_type_aware,
            }
        )
        print("lint chatter")
        if self.error is not None:
            raise self.error
        if include_paths is not None and not include_paths:
            return []
        return list(self.diagnostics)


class FakeDeadCode:
    def __init__(self, diagnostics: list[Diagnostic] | None = None, error: Exception | None = None) -> None:
        self.diagnostics = diagnostics or []
        self.error = error
        self.calls: list[Path] = []

    async def __call__(self, root):
        self.calls.append(root)
        print("knip chatter", file=sys.stderr)
        if self.error is not None:
            raise self.error
        return list(self.diagnostics)


class RecordingProgress:
    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def start(self, message: str) -> None:
        self.events.append(("start", message))

    def succeed(self, message: str) -> None:
        self.events.append(("succeed", message))

    def fail(self, message: str, error: Exception) -> None:
        self.events.append(("fail", message))


@pytest.fixture
def project(tmp_path: Path) -> ProjectInfo:
    return ProjectInfo(root_directory=tmp_path, project_name="shop", angular_version="17.0.0", has_typescript=True)


def _run(pipeline: DiagnosticPipeline, request: PipelineRequest):
    return asyncio.run(pipeline.run(request))


def test_lint_results_precede_dead_code(project: ProjectInfo, make_diagnostic) -> None:
    lint_diag = make_diagnostic("a")
    dead_diag = make_diagnostic("exports", plugin="knip")
    lint, dead = FakeLint([lint_diag]), FakeDeadCode([dead_diag])

    result = _run(DiagnosticPipeline(AnalyzerSuite(lint, dead)), PipelineRequest(project, ScanOptions()))

    assert result.diagnostics == (lint_diag, dead_diag)
    assert result.skipped_checks == ()
    assert lint.calls[0]["include_paths"] is None
    assert lint.calls[0]["use_type_aware"] is True
    assert dead.calls == [project.root_directory]


def test_analyzer_failures_become_skipped_checks(project: ProjectInfo, make_diagnostic) -> None:
    dead_diag = make_diagnostic("files", plugin="knip")
    progress = RecordingProgress()
    suite = AnalyzerSuite(FakeLint(error=AnalyzerError("eslint", "boom")), FakeDeadCode([dead_diag]))

    result = _run(DiagnosticPipeline(suite, progress=progress), PipelineRequest(project, ScanOptions()))

    assert result.diagnostics == (dead_diag,)
    assert result.skipped_checks == ("lint",)
    assert progress.events == [
        ("start", "Running lint checks..."),
        ("fail", "Lint checks failed (non-fatal, skipping)."),
        ("start", "Detecting dead code..."),
        ("succeed", "Detecting dead code."),
    ]


def test_unexpected_exceptions_are_isolated_too(project: ProjectInfo) -> None:
    suite = AnalyzerSuite(FakeLint(error=ValueError("bad json")), FakeDeadCode(error=RuntimeError("knip crashed")))

    result = _run(DiagnosticPipeline(suite), PipelineRequest(project, ScanOptions()))

    assert result.diagnostics == ()
    assert result.skipped_checks == ("lint", "dead code")


def test_disabled_checks_are_not_run(project: ProjectInfo) -> None:
    lint, dead = FakeLint(), FakeDeadCode()

    result = _run(
        DiagnosticPipeline(AnalyzerSuite(lint, dead)),
        PipelineRequest(project, ScanOptions(lint=False, dead_code=False)),
    )

    assert result.diagnostics == ()
    assert lint.calls == []
    assert dead.calls == []


def test_diff_mode_skips_dead_code_and_restricts_lint(project: ProjectInfo, make_diagnostic) -> None:
    lint, dead = FakeLint([make_diagnostic("a")]), FakeDeadCode([make_diagnostic("exports", plugin="knip")])

    result = _run(
        DiagnosticPipeline(AnalyzerSuite(lint, dead)),
        PipelineRequest(project, ScanOptions(), include_paths=("src/a.ts", "src/a.html")),
    )

    assert dead.calls == []
    assert lint.calls[0]["include_paths"] == ("src/a.ts",)
    assert [diagnostic.rule for diagnostic in result.diagnostics] == ["a"]


def test_diff_mode_without_source_files_lints_nothing(project: ProjectInfo, make_diagnostic) -> None:
    lint = FakeLint([make_diagnostic("a")])

    result = _run(
        DiagnosticPipeline(AnalyzerSuite(lint, FakeDeadCode())),
        PipelineRequest(project, ScanOptions(), include_paths=("src/a.html",)),
    )

    assert lint.calls[0]["include_paths"] == ()
    assert result.diagnostics == ()


def test_fast_mode_disables_type_aware_lint(project: ProjectInfo) -> None:
    lint = FakeLint()
    _run(DiagnosticPipeline(AnalyzerSuite(lint, FakeDeadCode())), PipelineRequest(project, ScanOptions(fast=True)))
    assert lint.calls[0]["use_type_aware"] is False


def test_ignored_diagnostics_are_filtered(project: ProjectInfo, make_diagnostic) -> None:
    config = AngularDoctorConfig(ignore=IgnoreConfig(rules=["knip/exports"], files=["src/legacy/**"]))
    lint = FakeLint([make_diagnostic("a", file_path="src/legacy/old.ts"), make_diagnostic("b")])
    dead = FakeDeadCode([make_diagnostic("exports", plugin="knip")])

    result = _run(
        DiagnosticPipeline(AnalyzerSuite(lint, dead)),
        PipelineRequest(project, ScanOptions(), config=config),
    )

    assert [diagnostic.rule for diagnostic in result.diagnostics] == ["b"]


def test_score_only_mode_is_silent(
    project: ProjectInfo,
    make_diagnostic,
    capsys: pytest.CaptureFixture[str],
) -> None:
    progress = RecordingProgress()
    suite = AnalyzerSuite(FakeLint([make_diagnostic("a")]), FakeDeadCode(error=AnalyzerError("knip", "boom")))

    result = _run(
        DiagnosticPipeline(suite, progress=progress),
        PipelineRequest(project, ScanOptions(), score_only=True),
    )

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""
    assert progress.events == []
    assert result.skipped_checks == ("dead code",)
    assert len(result.diagnostics) == 1


@pytest.mark.parametrize(
    ("paths", "expected"),
    [((), None), (("a.ts", "b.html"), ("a.ts",)), (("b.html",), ())],
)
def test_compute_include_paths(paths, expected) -> None:
    assert compute_include_paths(paths) == expected
