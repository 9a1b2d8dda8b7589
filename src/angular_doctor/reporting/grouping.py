# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Group and order diagnostics for presentation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TypeAlias

from ..constants import MILLISECONDS_PER_SECOND
from ..core.models import Diagnostic
from ..core.severity import Severity, severity_rank
from ..diagnostics.scoring import round_half_up

RuleGroup: TypeAlias = tuple[str, list[Diagnostic]]


def group_by_rule(diagnostics: Iterable[Diagnostic]) -> dict[str, list[Diagnostic]]:
    """Group diagnostics by rule key, keeping first-seen order."""

    groups: dict[str, list[Diagnostic]] = {}
    for diagnostic in diagnostics:
        groups.setdefault(diagnostic.rule_key, []).append(diagnostic)
    return groups


def sort_by_severity(groups: Iterable[RuleGroup]) -> list[RuleGroup]:
    """Order rule groups so error groups precede warning groups.

    The sort is stable and keys on the first diagnostic of each group, so
    groups of equal severity keep their original order.
    """

    return sorted(groups, key=lambda group: severity_rank(group[1][0].severity))


def sorted_rule_groups(diagnostics: Iterable[Diagnostic]) -> list[RuleGroup]:
    """Return rule groups for ``diagnostics`` in presentation order."""

    return sort_by_severity(group_by_rule(diagnostics).items())


def build_file_line_map(diagnostics: Iterable[Diagnostic]) -> dict[str, list[int]]:
    """Map each file to the lines it was flagged on.

    Files whose findings carry no position map to an empty list.
    """

    file_lines: dict[str, list[int]] = {}
    for diagnostic in diagnostics:
        lines = file_lines.setdefault(diagnostic.file_path, [])
        if diagnostic.line > 0:
            lines.append(diagnostic.line)
    return file_lines


def format_file_lines(file_path: str, lines: Sequence[int]) -> str:
    """Render ``file_path`` followed by its flagged lines, if any."""

    if not lines:
        return file_path
    return f"{file_path}: {', '.join(str(line) for line in lines)}"


def collect_affected_files(diagnostics: Iterable[Diagnostic]) -> set[str]:
    """Return the distinct files that have at least one diagnostic."""

    return {diagnostic.file_path for diagnostic in diagnostics}


def count_severity(diagnostics: Iterable[Diagnostic], severity: Severity) -> int:
    """Return how many diagnostics have ``severity``."""

    return sum(1 for diagnostic in diagnostics if diagnostic.severity is severity)


def format_elapsed_time(elapsed_ms: float) -> str:
    """Render a duration as ``<n>ms`` under one second, else ``<n.n>s``."""

    if elapsed_ms < MILLISECONDS_PER_SECOND:
        return f"{round_half_up(elapsed_ms)}ms"
    return f"{elapsed_ms / MILLISECONDS_PER_SECOND:.1f}s"


def pluralize(count: int, noun: str) -> str:
    """Return ``"<count> <noun>"`` with a plural ``s`` when needed."""

    return f"{count} {noun}{'' if count == 1 else 's'}"


__all__ = [
    "RuleGroup",
    "build_file_line_map",
    "collect_affected_files",
    "count_severity",
    "format_elapsed_time",
    "format_file_lines",
    "group_by_rule",
    "pluralize",
    "sort_by_severity",
    "sorted_rule_groups",
]
