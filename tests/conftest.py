# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from angular_doctor.core.models import Diagnostic
from angular_doctor.core.severity import Severity

DiagnosticFactory = Callable[..., Diagnostic]
GitCommand = Callable[..., str]


@pytest.fixture
def make_diagnostic() -> DiagnosticFactory:
    """Return a factory building diagnostics with sensible defaults."""

    def _factory(
        rule: str = "prefer-on-push-component-change-detection",
        *,
        plugin: str = "@angular-eslint",
        severity: Severity = Severity.WARNING,
        file_path: str = "src/app/app.component.ts",
        line: int = 1,
        message: str = "message",
        help: str = "",
        category: str = "Performance",
    ) -> Diagnostic:
        return Diagnostic(
            file_path=file_path,
            plugin=plugin,
            rule=rule,
            severity=severity,
            message=message,
            help=help,
            line=line,
            column=1,
            category=category,
        )

    return _factory


@pytest.fixture
def write_json() -> Callable[[Path, Any], Path]:
    """Return a helper writing ``payload`` as JSON, creating parent directories."""

    def _write(path: Path, payload: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def angular_project(tmp_path: Path) -> Path:
    """Create a minimal Angular CLI project directory."""

    project = tmp_path / "shop"
    project.mkdir()
    manifest = {
        "name": "shop",
        "dependencies": {"@angular/core": "^17.1.0"},
        "devDependencies": {"@angular/cli": "^17.1.0", "typescript": "~5.3.0"},
    }
    (project / "package.json").write_text(json.dumps(manifest), encoding="utf-8")
    (project / "tsconfig.json").write_text("{}", encoding="utf-8")
    return project


@pytest.fixture
def git_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> tuple[Path, GitCommand]:
    """Create an isolated git repository on ``main`` with one commit.

    Returns:
        tuple[Path, GitCommand]: Repository root and a helper running git in it.
    """

    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.delenv("GIT_DIR", raising=False)
    monkeypatch.delenv("GIT_WORK_TREE", raising=False)

    repo = tmp_path / "repo"
    repo.mkdir()

    def _git(*args: str) -> str:
        completed = subprocess.run(
            ["git", *args],
            cwd=repo,
            check=True,
            capture_output=True,
            text=True,
        )
        return completed.stdout

    _git("init", "-q")
    _git("symbolic-ref", "HEAD", "refs/heads/main")
    _git("config", "user.name", "AngularDoctorTest")
    _git("config", "user.email", "angular-doctor@example.com")
    _git("config", "commit.gpgsign", "false")
    (repo / "README.md").write_text("fixture\n", encoding="utf-8")
    (repo / "src").mkdir()
    (repo / "src" / "main.ts").write_text("export const main = 1;\n", encoding="utf-8")
    _git("add", ".")
    _git("commit", "-q", "-m", "initial")
    return repo, _git
