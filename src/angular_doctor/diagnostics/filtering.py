# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Drop diagnostics the project configuration asks to ignore."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from functools import lru_cache
from typing import Final

from ..config.models import AngularDoctorConfig
from ..core.models import Diagnostic

_DOUBLE_STAR: Final[str] = "**"
_SINGLE_STAR: Final[str] = "*"


@lru_cache(maxsize=256)
def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile an ignore glob into an anchored regular expression.

    ``**`` matches any run of characters including ``/``; ``*`` matches within
    a single path segment. Every other character matches literally.

    Args:
        pattern: Glob pattern from ``ignore.files``.

    Returns:
        re.Pattern[str]: Pattern matching whole relative paths.
    """

    parts: list[str] = []
    index = 0
    while index < len(pattern):
        if pattern.startswith(_DOUBLE_STAR, index):
            parts.append(".*")
            index += len(_DOUBLE_STAR)
        elif pattern.startswith(_SINGLE_STAR, index):
            parts.append("[^/]*")
            index += len(_SINGLE_STAR)
        else:
            parts.append(re.escape(pattern[index]))
            index += 1
    return re.compile("".join(parts))


def matches_glob(file_path: str, pattern: str) -> bool:
    """Return ``True`` when ``pattern`` matches the entire ``file_path``."""

    return glob_to_regex(pattern).fullmatch(file_path) is not None


def filter_ignored_diagnostics(
    diagnostics: Iterable[Diagnostic],
    config: AngularDoctorConfig | None,
) -> list[Diagnostic]:
    """Remove diagnostics whose rule key or file path is ignored.

    Args:
        diagnostics: Diagnostics to filter.
        config: Project configuration; ``None`` keeps everything.

    Returns:
        list[Diagnostic]: Surviving diagnostics in their original order.
    """

    if config is None:
        return list(diagnostics)
    ignored_rules = frozenset(config.ignore.rules)
    ignored_files: Sequence[str] = tuple(config.ignore.files)
    return [
        diagnostic
        for diagnostic in diagnostics
        if diagnostic.rule_key not in ignored_rules
        and not any(matches_glob(diagnostic.file_path, pattern) for pattern in ignored_files)
    ]


__all__ = ["filter_ignored_diagnostics", "glob_to_regex", "matches_glob"]
