# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve the projects contained in a multi-project workspace."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Final

import yaml

from ..constants import ANGULAR_JSON, PACKAGE_JSON, PNPM_WORKSPACE_YAML
from ..core.models import JsonValue, WorkspacePackage
from .manifest import has_angular_dependency, manifest_name, read_manifest_in

LOGGER = logging.getLogger(__name__)

_QUOTE_CHARACTERS: Final[str] = "\"'"
_RECURSIVE_SUFFIX: Final[str] = "/**"
_SINGLE_LEVEL_SUFFIX: Final[str] = "/*"
_WILDCARD: Final[str] = "*"


def list_angular_workspace_projects(root: Path) -> list[WorkspacePackage]:
    """Return one package per project declared in ``angular.json``.

    A project root may be a bare string (legacy format) or the ``root`` field
    of a project object. An empty root denotes the workspace root itself.
    Projects whose root is not an existing directory are skipped.

    Args:
        root: Workspace root directory.

    Returns:
        list[WorkspacePackage]: Projects in declaration order.
    """

    root = root.resolve()
    angular_json = root / ANGULAR_JSON
    if not angular_json.is_file():
        return []
    try:
        workspace = json.loads(angular_json.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        LOGGER.debug("ignoring unreadable %s: %s", angular_json, exc)
        return []
    projects = workspace.get("projects") if isinstance(workspace, dict) else None
    if not isinstance(projects, dict):
        return []

    packages: list[WorkspacePackage] = []
    for name, project in projects.items():
        relative_root = _project_root(project)
        directory = (root / relative_root).resolve() if relative_root else root
        if not directory.is_dir():
            continue
        packages.append(WorkspacePackage(name=name, directory=directory))
    return packages


def _project_root(project: JsonValue) -> str:
    if isinstance(project, str):
        return project
    if isinstance(project, dict):
        value = project.get("root")
        if isinstance(value, str):
            return value
    return ""


def _pnpm_patterns(root: Path) -> list[str]:
    workspace_file = root / PNPM_WORKSPACE_YAML
    if not workspace_file.is_file():
        return []
    try:
        payload = yaml.safe_load(workspace_file.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        LOGGER.debug("ignoring unreadable %s: %s", workspace_file, exc)
        return []
    packages = payload.get("packages") if isinstance(payload, dict) else None
    if not isinstance(packages, list):
        return []
    return [entry for entry in packages if isinstance(entry, str)]


def _manifest_patterns(manifest: dict[str, JsonValue]) -> list[str]:
    workspaces = manifest.get("workspaces")
    if isinstance(workspaces, dict):
        workspaces = workspaces.get("packages")
    if not isinstance(workspaces, list):
        return []
    return [entry for entry in workspaces if isinstance(entry, str)]


def workspace_patterns(root: Path) -> list[str]:
    """Return package glob patterns, preferring ``pnpm-workspace.yaml``.

    Args:
        root: Workspace root directory.

    Returns:
        list[str]: Patterns from pnpm, else from ``package.json`` ``workspaces``.
    """

    return _pnpm_patterns(root) or _manifest_patterns(read_manifest_in(root))


def resolve_workspace_directories(root: Path, pattern: str) -> list[Path]:
    """Expand a single workspace ``pattern`` into package directories.

    Only one wildcard level is expanded; ``packages/**`` behaves like
    ``packages/*``. Candidates must be directories holding ``package.json``.

    Args:
        root: Workspace root directory.
        pattern: Glob-like pattern from the workspace manifest.

    Returns:
        list[Path]: Matching package directories in sorted order.
    """

    clean = "".join(char for char in pattern if char not in _QUOTE_CHARACTERS).strip()
    if clean.endswith(_RECURSIVE_SUFFIX):
        clean = clean[: -len(_RECURSIVE_SUFFIX)] + _SINGLE_LEVEL_SUFFIX

    if _WILDCARD not in clean:
        directory = root / clean
        return [directory] if (directory / PACKAGE_JSON).is_file() else []

    prefix, _, suffix = clean.partition(_WILDCARD)
    base = root / prefix
    if not base.is_dir():
        return []
    return [candidate for candidate in _candidates(base, suffix) if (candidate / PACKAGE_JSON).is_file()]


def _candidates(base: Path, suffix: str) -> Iterator[Path]:
    for entry in sorted(base.iterdir()):
        candidate = entry / suffix.strip("/")
        if candidate.is_dir():
            yield candidate


def list_workspace_packages(root: Path) -> list[WorkspacePackage]:
    """Return Angular packages declared through package-manager workspaces.

    Args:
        root: Workspace root directory; must contain ``package.json``.

    Returns:
        list[WorkspacePackage]: Packages that depend on ``@angular/core``.
    """

    root = root.resolve()
    if not (root / PACKAGE_JSON).is_file():
        return []
    packages: list[WorkspacePackage] = []
    for pattern in workspace_patterns(root):
        for directory in resolve_workspace_directories(root, pattern):
            manifest = read_manifest_in(directory)
            if not has_angular_dependency(manifest):
                continue
            resolved = directory.resolve()
            packages.append(WorkspacePackage(name=manifest_name(manifest) or resolved.name, directory=resolved))
    return packages


__all__ = [
    "list_angular_workspace_projects",
    "list_workspace_packages",
    "resolve_workspace_directories",
    "workspace_patterns",
]
