# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Git-backed change detection used by diff-mode scans."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from subprocess import CompletedProcess

from ..constants import DEFAULT_BRANCH_CANDIDATES, SOURCE_FILE_PATTERN
from ..core.models import DiffInfo
from ..core.process import CommandOptions, run_command

LOGGER = logging.getLogger(__name__)

GitRunner = Callable[[Sequence[str], Path], CompletedProcess[str]]

_RENAME_SEPARATOR = " -> "


def _default_runner(args: Sequence[str], cwd: Path) -> CompletedProcess[str]:
    return run_command(
        ["git", *args],
        options=CommandOptions(cwd=cwd, check=False, capture_output=True, discard_stdin=True),
    )


class GitClient:
    """Answer the revision-control questions asked by diff mode.

    Every query degrades to a neutral answer (``None``, ``False`` or an empty
    list) when the directory is not a repository or ``git`` is unavailable.
    """

    def __init__(self, *, runner: GitRunner | None = None) -> None:
        """Create a git client.

        Args:
            runner: Optional command runner used to execute git commands. A
                default based on :func:`run_command` is used when omitted.
        """

        self._runner = runner or _default_runner

    def _run(self, args: Sequence[str], directory: Path) -> str | None:
        """Return stdout of ``git args`` or ``None`` when the command failed."""

        try:
            completed = self._runner(args, directory)
        except OSError as exc:
            LOGGER.debug("git %s failed to start: %s", " ".join(args), exc)
            return None
        if completed.returncode != 0:
            LOGGER.debug("git %s exited with %s", " ".join(args), completed.returncode)
            return None
        return completed.stdout or ""

    def current_branch(self, directory: Path) -> str | None:
        """Return the checked-out branch name, or ``None`` outside a repository."""

        output = self._run(["rev-parse", "--abbrev-ref", "HEAD"], directory)
        if output is None:
            return None
        branch = output.strip()
        return branch or None

    def branch_exists(self, directory: Path, ref: str) -> bool:
        """Return ``True`` when ``ref`` resolves to a revision."""

        return self._run(["rev-parse", "--verify", "--quiet", ref], directory) is not None

    def changed_files(self, directory: Path, base: str) -> list[str]:
        """Return files differing between the working tree and ``base``.

        Paths are relative to ``directory``; changes outside it are omitted.
        """

        output = self._run(["diff", "--name-only", "--relative", base, "--"], directory)
        return _split_lines(output)

    def uncommitted_files(self, directory: Path) -> list[str]:
        """Return staged, unstaged and untracked files below ``directory``."""

        output = self._run(["status", "--short", "--untracked-files=all", "--", "."], directory)
        files: list[str] = []
        for line in _split_lines(output):
            fragment = line[3:].strip()
            if _RENAME_SEPARATOR in fragment:
                fragment = fragment.split(_RENAME_SEPARATOR, 1)[1].strip()
            if fragment:
                files.append(fragment.strip('"'))
        return files

    def list_files(self, directory: Path) -> list[str] | None:
        """Return tracked and untracked, non-ignored files, or ``None`` outside git."""

        output = self._run(["ls-files", "--cached", "--others", "--exclude-standard"], directory)
        if output is None:
            return None
        return _split_lines(output)


def _split_lines(output: str | None) -> list[str]:
    if not output:
        return []
    return [line for line in output.splitlines() if line.strip()]


def filter_source_files(files: Iterable[str]) -> list[str]:
    """Keep only paths that are TypeScript sources.

    Args:
        files: Candidate relative paths.

    Returns:
        list[str]: Paths matching the source file pattern, in input order.
    """

    return [path for path in files if SOURCE_FILE_PATTERN.search(path)]


def count_source_files(directory: Path, *, git: GitClient | None = None) -> int:
    """Return the number of TypeScript files git knows about below ``directory``.

    Args:
        directory: Project directory to inspect.
        git: Optional git client, mainly for tests.

    Returns:
        int: Source file count, ``0`` when ``directory`` is not inside a repository.
    """

    files = (git or GitClient()).list_files(directory)
    if files is None:
        return 0
    return len(filter_source_files(files))


def get_diff_info(
    directory: Path,
    explicit_base: str | None = None,
    *,
    git: GitClient | None = None,
) -> DiffInfo | None:
    """Select the changed files a diff-mode scan should analyze.

    Resolution order: an explicit base branch when given; otherwise any
    uncommitted changes; otherwise the first default branch candidate that
    exists, differs from the current branch and yields a non-empty diff.

    Args:
        directory: Project directory inside the repository.
        explicit_base: Base branch requested by the user.
        git: Optional git client, mainly for tests.

    Returns:
        DiffInfo | None: Selected changes, or ``None`` when no diff is available.
    """

    client = git or GitClient()
    current_branch = client.current_branch(directory)
    if current_branch is None:
        return None

    if explicit_base:
        if not client.branch_exists(directory, explicit_base):
            LOGGER.debug("base branch %s does not exist", explicit_base)
            return None
        return DiffInfo(
            current_branch=current_branch,
            base_branch=explicit_base,
            changed_files=tuple(client.changed_files(directory, explicit_base)),
        )

    uncommitted = client.uncommitted_files(directory)
    if uncommitted:
        return DiffInfo(
            current_branch=current_branch,
            base_branch=current_branch,
            changed_files=tuple(uncommitted),
            is_current_changes=True,
        )

    for candidate in DEFAULT_BRANCH_CANDIDATES:
        if candidate == current_branch or not client.branch_exists(directory, candidate):
            continue
        changed = client.changed_files(directory, candidate)
        if changed:
            return DiffInfo(current_branch=current_branch, base_branch=candidate, changed_files=tuple(changed))

    return None


__all__ = ["GitClient", "GitRunner", "count_source_files", "filter_source_files", "get_diff_info"]
