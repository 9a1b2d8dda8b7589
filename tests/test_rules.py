# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the rule metadata tables."""

from __future__ import annotations

from angular_doctor.analyzers.rules import (
    DEAD_CODE_ISSUES,
    LINT_RULES,
    DeadCodeIssue,
    LintRule,
    enabled_lint_rules,
    lookup_lint_rule,
)
from angular_doctor.core.severity import Severity


def test_every_lint_rule_has_metadata() -> None:
    assert set(LINT_RULES) == set(LintRule)


def test_every_dead_code_issue_has_metadata() -> None:
    assert set(DEAD_CODE_ISSUES) == set(DeadCodeIssue)
    assert all(metadata.severity is Severity.WARNING for metadata in DEAD_CODE_ISSUES.values())


def test_enabled_rules_use_eslint_levels() -> None:
    rules = enabled_lint_rules()
    assert set(rules.values()) <= {"error", "warn"}
    assert rules["@angular-eslint/no-output-native"] == "error"
    assert "@angular-eslint/pipe-prefix" not in rules
    assert "@typescript-eslint/no-unused-vars" not in rules
    assert len(rules) == sum(1 for metadata in LINT_RULES.values() if metadata.enabled)


def test_lookup_unknown_rule_returns_none() -> None:
    assert lookup_lint_rule("no-console") is None
    metadata = lookup_lint_rule("@typescript-eslint/no-explicit-any")
    assert metadata is not None
    assert metadata.category == "TypeScript"
