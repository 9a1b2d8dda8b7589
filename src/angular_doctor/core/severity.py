# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels shared by every analyzer adapter."""

    ERROR = "error"
    WARNING = "warning"


SEVERITY_ORDER: Final[dict[Severity, int]] = {
    Severity.ERROR: 0,
    Severity.WARNING: 1,
}

_ESLINT_LEVELS: Final[dict[int, Severity]] = {
    2: Severity.ERROR,
    1: Severity.WARNING,
}


def severity_rank(severity: Severity) -> int:
    """Return the sort rank of ``severity`` (errors sort first).

    Args:
        severity: Severity to rank.

    Returns:
        int: Rank where lower values are more severe.
    """

    return SEVERITY_ORDER[severity]


def severity_from_eslint_level(level: int) -> Severity:
    """Translate ESLint's numeric severity into :class:`Severity`.

    ESLint reports ``2`` for errors and ``1`` for warnings; anything else is
    treated as a warning.

    Args:
        level: Numeric severity emitted by ESLint.

    Returns:
        Severity: Normalised severity value.
    """

    return _ESLINT_LEVELS.get(level, Severity.WARNING)


__all__ = ["SEVERITY_ORDER", "Severity", "severity_from_eslint_level", "severity_rank"]
