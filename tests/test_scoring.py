# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the health score calculation."""

from __future__ import annotations

import pytest

from angular_doctor.core.severity import Severity
from angular_doctor.diagnostics.scoring import (
    calculate_score,
    count_unique_rules,
    get_score_label,
    round_half_up,
)


def test_empty_diagnostics_score_perfect() -> None:
    result = calculate_score([])
    assert result.score == 100
    assert result.label == "Great"


def test_distinct_rule_keys_drive_penalty(make_diagnostic) -> None:
    diagnostics = [
        make_diagnostic("a", severity=Severity.ERROR, file_path="a.ts"),
        make_diagnostic("a", severity=Severity.ERROR, file_path="b.ts"),
        make_diagnostic("b", severity=Severity.WARNING),
    ]
    result = calculate_score(diagnostics)
    assert result.score == 98
    assert result.label == "Great"


def test_duplicates_do_not_change_score(make_diagnostic) -> None:
    base = [make_diagnostic("a", severity=Severity.ERROR), make_diagnostic("b")]
    assert calculate_score(base) == calculate_score(base * 5)


def test_new_rule_never_raises_score(make_diagnostic) -> None:
    diagnostics = []
    previous = calculate_score(diagnostics).score
    for index in range(30):
        diagnostics.append(make_diagnostic(f"rule-{index}", severity=Severity.ERROR))
        current = calculate_score(diagnostics).score
        assert current <= previous
        previous = current


def test_errors_cost_more_than_warnings(make_diagnostic) -> None:
    errors = [make_diagnostic(f"rule-{i}", severity=Severity.ERROR) for i in range(10)]
    warnings = [make_diagnostic(f"rule-{i}", severity=Severity.WARNING) for i in range(10)]
    assert calculate_score(errors).score == 85
    assert calculate_score(warnings).score == 93
    assert calculate_score(errors).score < calculate_score(warnings).score


def test_score_is_clamped_at_zero(make_diagnostic) -> None:
    diagnostics = [make_diagnostic(f"rule-{i}", severity=Severity.ERROR) for i in range(100)]
    result = calculate_score(diagnostics)
    assert result.score == 0
    assert result.label == "Critical"


def test_rule_reported_with_both_severities_counts_in_each_bucket(make_diagnostic) -> None:
    counts = count_unique_rules(
        [make_diagnostic("a", severity=Severity.ERROR), make_diagnostic("a", severity=Severity.WARNING)]
    )
    assert (counts.error_rules, counts.warning_rules) == (1, 1)


def test_same_rule_name_in_different_plugins_is_distinct(make_diagnostic) -> None:
    counts = count_unique_rules([make_diagnostic("x", plugin="one"), make_diagnostic("x", plugin="two")])
    assert counts.warning_rules == 2


@pytest.mark.parametrize(
    ("score", "label"),
    [(100, "Great"), (75, "Great"), (74, "Needs work"), (50, "Needs work"), (49, "Critical"), (0, "Critical")],
)
def test_label_boundaries(score: int, label: str) -> None:
    assert get_score_label(score) == label


@pytest.mark.parametrize(("value", "expected"), [(97.5, 98), (0.5, 1), (2.4, 2), (98.25, 98), (-0.5, 0)])
def test_round_half_up(value: float, expected: int) -> None:
    assert round_half_up(value) == expected
