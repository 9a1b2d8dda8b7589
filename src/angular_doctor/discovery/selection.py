# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Choose which workspace projects a run should scan."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Final

import typer

from ..core.errors import ProjectNotFoundError
from ..core.logging import blank_line, dim, info, ok, warn
from ..core.models import WorkspacePackage
from .workspace import list_angular_workspace_projects, list_workspace_packages

ProjectPrompt = Callable[[Sequence[WorkspacePackage], Path], list[Path]]

SELECT_ALL: Final[str] = "all"
_SELECTION_SEPARATOR: Final[str] = ","


def discover_workspace_packages(root: Path) -> list[WorkspacePackage]:
    """Return workspace packages, preferring ``angular.json`` over package managers.

    Args:
        root: Directory the user asked to scan.

    Returns:
        list[WorkspacePackage]: Discovered packages, possibly empty.
    """

    return list_angular_workspace_projects(root) or list_workspace_packages(root)


def parse_selection(raw: str, count: int) -> list[int] | None:
    """Parse a comma-separated list of 1-based indices.

    Args:
        raw: Text typed by the user; ``all`` selects everything.
        count: Number of selectable entries.

    Returns:
        list[int] | None: Zero-based indices in the order given (duplicates
        dropped), or ``None`` when the input is invalid or selects nothing.
    """

    text = raw.strip().lower()
    if text == SELECT_ALL:
        return list(range(count))
    indices: list[int] = []
    for token in text.split(_SELECTION_SEPARATOR):
        token = token.strip()
        if not token:
            continue
        if not token.isdigit():
            return None
        index = int(token) - 1
        if not 0 <= index < count:
            return None
        if index not in indices:
            indices.append(index)
    return indices or None


def _relative_label(directory: Path, root: Path) -> str:
    try:
        relative = directory.relative_to(root)
    except ValueError:
        return str(directory)
    return relative.as_posix() if relative.parts else "."


def prompt_project_selection(packages: Sequence[WorkspacePackage], root: Path) -> list[Path]:
    """Ask the user which projects to scan; every project is selected by default.

    Args:
        packages: Candidate packages.
        root: Workspace root, used to label each package.

    Returns:
        list[Path]: Directories chosen by the user.

    Raises:
        typer.Exit: With status ``0`` when the user cancels the prompt.
    """

    info("Select projects to scan:")
    for position, package in enumerate(packages, start=1):
        dim(f"  {position}. {package.name} ({_relative_label(package.directory, root)})")
    while True:
        try:
            answer = typer.prompt("Projects (comma separated numbers)", default=SELECT_ALL)
        except typer.Abort:
            blank_line()
            info("Cancelled.")
            blank_line()
            raise typer.Exit(code=0) from None
        indices = parse_selection(answer, len(packages))
        if indices is not None:
            return [packages[index].directory for index in indices]
        warn(f"Enter numbers between 1 and {len(packages)} or '{SELECT_ALL}'.")


def resolve_project_filter(project_filter: str, packages: Sequence[WorkspacePackage]) -> list[Path]:
    """Resolve a comma-separated ``--project`` value to directories.

    Each token matches a package name or a directory basename exactly.

    Args:
        project_filter: Raw filter value.
        packages: Candidate packages.

    Returns:
        list[Path]: Directories in token order.

    Raises:
        ProjectNotFoundError: If a token matches no package, or the filter
            names no project at all.
    """

    directories: list[Path] = []
    for token in (part.strip() for part in project_filter.split(_SELECTION_SEPARATOR)):
        if not token:
            continue
        match = next(
            (package for package in packages if token in (package.name, package.directory.name)),
            None,
        )
        if match is None:
            raise ProjectNotFoundError(token, [package.name for package in packages])
        directories.append(match.directory)
    if not directories:
        raise ProjectNotFoundError(project_filter.strip(), [package.name for package in packages])
    return directories


def _announce(packages: Sequence[WorkspacePackage]) -> None:
    ok(f"Select projects to scan › {', '.join(package.name for package in packages)}")
    blank_line()


def select_projects(
    root: Path,
    project_filter: str | None,
    skip_prompts: bool,
    *,
    prompt: ProjectPrompt | None = None,
) -> list[Path]:
    """Resolve the directories a run should scan.

    Args:
        root: Directory the user asked to scan.
        project_filter: Optional comma-separated project names.
        skip_prompts: Scan every project instead of prompting.
        prompt: Interactive selector, replaceable in tests.

    Returns:
        list[Path]: Directories to scan, in resolution order.

    Raises:
        ProjectNotFoundError: If ``project_filter`` names an unknown project.
    """

    resolved_root = root.resolve()
    packages = discover_workspace_packages(resolved_root)
    if not packages:
        return [resolved_root]
    if len(packages) == 1:
        _announce(packages)
        return [packages[0].directory]
    if project_filter:
        return resolve_project_filter(project_filter, packages)
    if skip_prompts:
        _announce(packages)
        return [package.directory for package in packages]
    return (prompt or prompt_project_selection)(packages, resolved_root)


__all__ = [
    "ProjectPrompt",
    "discover_workspace_packages",
    "parse_selection",
    "prompt_project_selection",
    "resolve_project_filter",
    "select_projects",
]
