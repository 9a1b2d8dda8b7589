# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reduce a diagnostic set to a 0-100 health score."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from ..constants import (
    ERROR_RULE_PENALTY,
    PERFECT_SCORE,
    SCORE_GOOD_THRESHOLD,
    SCORE_LABEL_CRITICAL,
    SCORE_LABEL_GREAT,
    SCORE_LABEL_NEEDS_WORK,
    SCORE_OK_THRESHOLD,
    WARNING_RULE_PENALTY,
)
from ..core.models import Diagnostic, ScoreResult
from ..core.severity import Severity


@dataclass(frozen=True, slots=True)
class RuleCounts:
    """Number of distinct rule keys per severity."""

    error_rules: int
    warning_rules: int


def count_unique_rules(diagnostics: Iterable[Diagnostic]) -> RuleCounts:
    """Count distinct rule keys for each severity.

    A rule key reported with both severities counts once in each bucket.
    """

    error_rules: set[str] = set()
    warning_rules: set[str] = set()
    for diagnostic in diagnostics:
        bucket = error_rules if diagnostic.severity is Severity.ERROR else warning_rules
        bucket.add(diagnostic.rule_key)
    return RuleCounts(error_rules=len(error_rules), warning_rules=len(warning_rules))


def round_half_up(value: float) -> int:
    """Round ``value`` to the nearest integer, ties toward positive infinity."""

    return math.floor(value + 0.5)


def get_score_label(score: int) -> str:
    """Return the qualitative label for ``score``."""

    if score >= SCORE_GOOD_THRESHOLD:
        return SCORE_LABEL_GREAT
    if score >= SCORE_OK_THRESHOLD:
        return SCORE_LABEL_NEEDS_WORK
    return SCORE_LABEL_CRITICAL


def calculate_score(diagnostics: Iterable[Diagnostic]) -> ScoreResult:
    """Score a diagnostic set by the number of distinct rules it violates.

    Repeated findings of the same rule cost nothing extra, so the score only
    moves when a new kind of problem appears or an existing one disappears.

    Args:
        diagnostics: Diagnostics surviving the ignore filter.

    Returns:
        ScoreResult: Score clamped to ``[0, 100]`` and its label.
    """

    counts = count_unique_rules(diagnostics)
    penalty = counts.error_rules * ERROR_RULE_PENALTY + counts.warning_rules * WARNING_RULE_PENALTY
    score = max(0, round_half_up(PERFECT_SCORE - penalty))
    return ScoreResult(score=score, label=get_score_label(score))


__all__ = ["RuleCounts", "calculate_score", "count_unique_rules", "get_score_label", "round_half_up"]
