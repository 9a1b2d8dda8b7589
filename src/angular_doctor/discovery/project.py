# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build :class:`ProjectInfo` records from a scan target directory."""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from ..constants import ANGULAR_JSON, PACKAGE_JSON, STANDALONE_COMPONENTS_MIN_MAJOR, TSCONFIG_JSON
from ..core.errors import ProjectDiscoveryError
from ..core.models import AngularFramework, ProjectInfo
from .git import GitClient, count_source_files
from .manifest import ANGULAR_CORE_PACKAGE, collect_all_dependencies, manifest_name, read_manifest_in

_FRAMEWORK_PACKAGES: Final[dict[str, AngularFramework]] = {
    "@nrwl/angular": AngularFramework.NX,
    "@nx/angular": AngularFramework.NX,
    "@analogjs/platform": AngularFramework.ANALOG,
    "@ionic/angular": AngularFramework.IONIC,
    "@angular/ssr": AngularFramework.UNIVERSAL,
    "@nguniversal/express-engine": AngularFramework.UNIVERSAL,
}

_ANGULAR_CLI_PACKAGES: Final[tuple[str, ...]] = (
    "@angular/cli",
    "@angular-devkit/build-angular",
    "@angular-devkit/core",
)

_MAJOR_VERSION_PATTERN: Final[re.Pattern[str]] = re.compile(r"\d+")


def detect_framework(dependencies: Mapping[str, str]) -> AngularFramework:
    """Classify the Angular toolchain from the merged dependency map.

    Args:
        dependencies: Merged dependency mapping of the project manifest.

    Returns:
        AngularFramework: First matching framework, ``UNKNOWN`` otherwise.
    """

    for package, framework in _FRAMEWORK_PACKAGES.items():
        if dependencies.get(package):
            return framework
    if any(dependencies.get(package) for package in _ANGULAR_CLI_PACKAGES):
        return AngularFramework.ANGULAR_CLI
    return AngularFramework.UNKNOWN


def supports_standalone_components(angular_version: str | None) -> bool:
    """Return ``True`` when the first number in ``angular_version`` is 14 or newer."""

    if not angular_version:
        return False
    match = _MAJOR_VERSION_PATTERN.search(angular_version)
    return match is not None and int(match.group(0)) >= STANDALONE_COMPONENTS_MIN_MAJOR


def _find_manifest_directory(directory: Path) -> Path | None:
    for candidate in (directory, *directory.parents):
        if (candidate / PACKAGE_JSON).is_file():
            return candidate
    return None


def find_angular_workspace_root(directory: Path) -> Path | None:
    """Return the nearest directory (inclusive) holding ``angular.json``.

    Args:
        directory: Directory to start searching from.

    Returns:
        Path | None: Workspace root, or ``None`` when no ancestor holds one.
    """

    resolved = directory.resolve()
    for candidate in (resolved, *resolved.parents):
        if (candidate / ANGULAR_JSON).is_file():
            return candidate
    return None


def discover_project(directory: Path, *, git: GitClient | None = None) -> ProjectInfo:
    """Inspect ``directory`` and describe it as a scan target.

    The nearest ``package.json`` (in ``directory`` or an ancestor) supplies the
    dependency information. When it lives in an ancestor that is also an
    Angular workspace root, the directory name identifies the project because
    the manifest name belongs to the whole workspace.

    Args:
        directory: Scan target directory.
        git: Optional git client used to count source files.

    Returns:
        ProjectInfo: Project description.

    Raises:
        ProjectDiscoveryError: If no ``package.json`` exists in ``directory``
            or any parent directory.
    """

    root = directory.resolve()
    manifest_directory = _find_manifest_directory(root)
    if manifest_directory is None:
        raise ProjectDiscoveryError(f"No package.json found in {root} or any parent directory")

    manifest = read_manifest_in(manifest_directory)
    dependencies = collect_all_dependencies(manifest)
    angular_version = dependencies.get(ANGULAR_CORE_PACKAGE)

    has_typescript = (root / TSCONFIG_JSON).is_file() or (manifest_directory / TSCONFIG_JSON).is_file()

    project_name = manifest_name(manifest) or root.name
    if manifest_directory != root and (manifest_directory / ANGULAR_JSON).is_file():
        project_name = root.name

    return ProjectInfo(
        root_directory=root,
        project_name=project_name,
        angular_version=angular_version,
        framework=detect_framework(dependencies),
        has_typescript=has_typescript,
        has_standalone_components=supports_standalone_components(angular_version),
        source_file_count=count_source_files(root, git=git),
    )


__all__ = [
    "detect_framework",
    "discover_project",
    "find_angular_workspace_root",
    "supports_standalone_components",
]
