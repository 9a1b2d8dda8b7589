# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command workflow: select projects, decide on diff mode and scan each target."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path

import typer

from .. import __version__
from ..analyzers import AnalyzerSuite
from ..config import load_config, resolve_diff_setting
from ..config.resolution import explicit_base_branch
from ..constants import AUTOMATED_ENVIRONMENT_VARIABLES, TOOL_NAME
from ..core.console import detect_stdin_tty
from ..core.logging import blank_line, dim, info, warn
from ..core.models import DiffInfo, ScanResult
from ..discovery import GitClient, filter_source_files, get_diff_info, select_projects
from ..discovery.selection import ProjectPrompt
from ..orchestration import ScanRequest, scan
from .options import ScanCLIOptions

LOGGER = logging.getLogger(__name__)

DiffConfirm = Callable[[DiffInfo, int], bool]


def is_automated_environment(environ: Mapping[str, str] | None = None) -> bool:
    """Return ``True`` when a CI system or coding agent drives the process."""

    env = os.environ if environ is None else environ
    return any(env.get(name) for name in AUTOMATED_ENVIRONMENT_VARIABLES)


def should_skip_prompts(
    yes: bool,
    *,
    environ: Mapping[str, str] | None = None,
    stdin_is_tty: bool | None = None,
) -> bool:
    """Return ``True`` when the run must not wait for interactive input.

    Args:
        yes: Whether ``--yes`` was passed.
        environ: Environment to inspect, defaults to :data:`os.environ`.
        stdin_is_tty: Override for stdin TTY detection.

    Returns:
        bool: ``True`` for ``--yes``, automated environments or a piped stdin.
    """

    interactive = detect_stdin_tty() if stdin_is_tty is None else stdin_is_tty
    return yes or is_automated_environment(environ) or not interactive


def confirm_diff_scan(diff_info: DiffInfo, changed_source_files: int) -> bool:
    """Ask whether only the changed files should be scanned."""

    if diff_info.is_current_changes:
        question = f"Only scan the {changed_source_files} source files with uncommitted changes?"
    else:
        question = f"Only scan the {changed_source_files} source files changed against {diff_info.base_branch}?"
    try:
        return typer.confirm(question, default=True)
    except typer.Abort as exc:
        info("Cancelled.", use_emoji=False)
        raise typer.Exit(code=0) from exc


def resolve_diff_mode(
    diff_info: DiffInfo | None,
    diff_setting: bool | str | None,
    *,
    skip_prompts: bool,
    score_only: bool,
    confirm: DiffConfirm | None = None,
) -> bool:
    """Decide whether this run scans changed files only.

    Args:
        diff_info: Changes detected at the scan root, if any.
        diff_setting: Effective diff request (command line, else config).
        skip_prompts: Whether prompts are disabled.
        score_only: Whether only the score is printed.
        confirm: Interactive confirmation, replaceable in tests.

    Returns:
        bool: ``True`` to run in diff mode.
    """

    if diff_setting is not None and diff_setting is not False:
        if diff_info is not None:
            return True
        if not score_only:
            warn("No feature branch or uncommitted changes detected. Running full scan.")
            blank_line()
        return False

    if diff_setting is False or diff_info is None:
        return False

    changed_source_files = filter_source_files(diff_info.changed_files)
    if not changed_source_files:
        return False
    if skip_prompts:
        return True
    if score_only:
        return False
    return (confirm or confirm_diff_scan)(diff_info, len(changed_source_files))


def announce_diff(diff_info: DiffInfo) -> None:
    """Print which changes a diff-mode run covers."""

    if diff_info.is_current_changes:
        info("Scanning uncommitted changes", use_emoji=False)
    else:
        info(f"Scanning changes: {diff_info.current_branch} → {diff_info.base_branch}", use_emoji=False)
    blank_line()


def project_include_paths(
    project_directory: Path,
    base_branch: str | None,
    *,
    git: GitClient | None = None,
) -> tuple[str, ...] | None:
    """Return the changed source files of one project in diff mode.

    Returns:
        tuple[str, ...] | None: Changed source files; an empty tuple when the
        project has no changes to scan, ``None`` when no diff is available
        for it (the project is scanned in full).
    """

    project_diff = get_diff_info(project_directory, base_branch, git=git)
    if project_diff is None:
        return None
    return tuple(filter_source_files(project_diff.changed_files))


def run_scans(
    options: ScanCLIOptions,
    *,
    analyzers: AnalyzerSuite | None = None,
    prompt: ProjectPrompt | None = None,
    confirm: DiffConfirm | None = None,
    git: GitClient | None = None,
) -> list[ScanResult]:
    """Run the whole command for ``options``.

    Args:
        options: Normalised command-line inputs.
        analyzers: Analyzer suite override, mainly for tests.
        prompt: Project selection prompt override.
        confirm: Diff confirmation override.
        git: Git client override.

    Returns:
        list[ScanResult]: One result per scanned project.

    Raises:
        AngularDoctorError: For fatal discovery failures.
    """

    score_only = options.score_only
    root = options.directory.resolve()
    root_config = load_config(root)

    if not score_only:
        info(f"{TOOL_NAME} v{__version__}", use_emoji=False)
        blank_line()

    skip_prompts = should_skip_prompts(options.yes)
    project_directories = select_projects(root, options.project, skip_prompts, prompt=prompt)

    diff_setting = resolve_diff_setting(options.overrides, root_config)
    base_branch = explicit_base_branch(diff_setting)
    diff_info = get_diff_info(root, base_branch, git=git)
    diff_mode = resolve_diff_mode(
        diff_info,
        diff_setting,
        skip_prompts=skip_prompts,
        score_only=score_only,
        confirm=confirm,
    )
    LOGGER.debug("diff setting=%r base=%r diff_mode=%s", diff_setting, base_branch, diff_mode)

    if diff_mode and diff_info is not None and not score_only:
        announce_diff(diff_info)

    results: list[ScanResult] = []
    for project_directory in project_directories:
        include_paths: tuple[str, ...] = ()
        if diff_mode:
            changed = project_include_paths(project_directory, base_branch, git=git)
            if changed is not None:
                if not changed:
                    if not score_only:
                        dim(f"No changed source files in {project_directory}, skipping.")
                        blank_line()
                    continue
                include_paths = changed

        if not score_only:
            dim(f"Scanning {project_directory}...")
            blank_line()

        request = ScanRequest(
            overrides=options.overrides,
            score_only=score_only,
            report=options.report,
            include_paths=include_paths,
        )
        results.append(asyncio.run(scan(project_directory, request, analyzers=analyzers)))

        if not score_only:
            blank_line()
    return results


__all__ = [
    "DiffConfirm",
    "announce_diff",
    "confirm_diff_scan",
    "is_automated_environment",
    "project_include_paths",
    "resolve_diff_mode",
    "run_scans",
    "should_skip_prompts",
]
