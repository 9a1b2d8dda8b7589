# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for project discovery and framework detection."""

from __future__ import annotations

from pathlib import Path
from subprocess import CompletedProcess

import pytest

from angular_doctor.core.errors import ProjectDiscoveryError
from angular_doctor.core.models import AngularFramework
from angular_doctor.discovery.git import GitClient
from angular_doctor.discovery.project import (
    detect_framework,
    discover_project,
    find_angular_workspace_root,
    supports_standalone_components,
)


def _git_listing(stdout: str, returncode: int = 0) -> GitClient:
    def runner(args, cwd):
        return CompletedProcess(["git", *args], returncode, stdout=stdout, stderr="")

    return GitClient(runner=runner)


def test_angular_cli_project(angular_project: Path) -> None:
    project = discover_project(angular_project, git=_git_listing("src/main.ts\nsrc/index.html\nsrc/app.ts\n"))

    assert project.project_name == "shop"
    assert project.angular_version == "^17.1.0"
    assert project.framework is AngularFramework.ANGULAR_CLI
    assert project.has_typescript is True
    assert project.has_standalone_components is True
    assert project.source_file_count == 2


def test_source_count_is_zero_outside_git(angular_project: Path) -> None:
    project = discover_project(angular_project, git=_git_listing("", returncode=128))
    assert project.source_file_count == 0


def test_missing_manifest_raises(tmp_path: Path) -> None:
    with pytest.raises(ProjectDiscoveryError, match="No package.json found"):
        discover_project(tmp_path, git=_git_listing(""))


def test_project_without_angular_has_no_version(tmp_path: Path, write_json) -> None:
    write_json(tmp_path / "package.json", {"name": "plain", "dependencies": {"lodash": "^4"}})
    project = discover_project(tmp_path, git=_git_listing(""))
    assert project.angular_version is None
    assert project.has_standalone_components is False
    assert project.framework is AngularFramework.UNKNOWN


def test_nested_workspace_project_uses_directory_name(tmp_path: Path, write_json) -> None:
    write_json(tmp_path / "package.json", {"name": "monorepo", "dependencies": {"@angular/core": "16.2.0"}})
    write_json(tmp_path / "angular.json", {"projects": {}})
    nested = tmp_path / "projects" / "admin"
    nested.mkdir(parents=True)

    project = discover_project(nested, git=_git_listing(""))

    assert project.project_name == "admin"
    assert project.angular_version == "16.2.0"


@pytest.mark.parametrize(
    ("dependencies", "framework"),
    [
        ({"@nx/angular": "17"}, AngularFramework.NX),
        ({"@nrwl/angular": "15", "@angular/cli": "15"}, AngularFramework.NX),
        ({"@analogjs/platform": "1"}, AngularFramework.ANALOG),
        ({"@ionic/angular": "7"}, AngularFramework.IONIC),
        ({"@angular/ssr": "17"}, AngularFramework.UNIVERSAL),
        ({"@angular-devkit/build-angular": "17"}, AngularFramework.ANGULAR_CLI),
        ({"@angular/core": "17"}, AngularFramework.UNKNOWN),
    ],
)
def test_detect_framework(dependencies: dict[str, str], framework: AngularFramework) -> None:
    assert detect_framework(dependencies) is framework


@pytest.mark.parametrize(
    ("version", "supported"),
    [("^17.1.0", True), ("14.0.0", True), ("~13.3.0", False), (">=15 <18", True), ("latest", False), (None, False)],
)
def test_supports_standalone_components(version: str | None, supported: bool) -> None:
    assert supports_standalone_components(version) is supported


def test_find_angular_workspace_root_is_inclusive(tmp_path: Path) -> None:
    (tmp_path / "angular.json").write_text("{}", encoding="utf-8")
    nested = tmp_path / "projects" / "a"
    nested.mkdir(parents=True)

    assert find_angular_workspace_root(tmp_path) == tmp_path.resolve()
    assert find_angular_workspace_root(nested) == tmp_path.resolve()
