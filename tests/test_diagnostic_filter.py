# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for ignore-rule and ignore-file filtering."""

from __future__ import annotations

import pytest

from angular_doctor.config.models import AngularDoctorConfig, IgnoreConfig
from angular_doctor.diagnostics.filtering import filter_ignored_diagnostics, matches_glob


@pytest.mark.parametrize(
    ("path", "pattern", "expected"),
    [
        ("src/generated/api/client.ts", "src/generated/**", True),
        ("src/generated/x.ts", "src/generated/**", True),
        ("src/app/app.ts", "src/generated/**", False),
        ("app.spec.ts", "*.spec.ts", True),
        ("src/app.spec.ts", "*.spec.ts", False),
        ("src/app.spec.ts", "**/*.spec.ts", True),
        ("abts", "a.ts", False),
        ("a.ts", "a.ts", True),
        ("a.ts.bak", "a.ts", False),
    ],
)
def test_matches_glob(path: str, pattern: str, expected: bool) -> None:
    assert matches_glob(path, pattern) is expected


def test_without_config_everything_survives(make_diagnostic) -> None:
    diagnostics = [make_diagnostic("a"), make_diagnostic("b")]
    assert filter_ignored_diagnostics(diagnostics, None) == diagnostics


def test_ignored_rules_and_files_are_removed(make_diagnostic) -> None:
    keep = make_diagnostic("keep", file_path="src/app/a.ts")
    by_rule = make_diagnostic("no-explicit-any", plugin="@typescript-eslint", file_path="src/app/b.ts")
    by_file = make_diagnostic("keep", file_path="src/generated/c.ts")
    config = AngularDoctorConfig(
        ignore=IgnoreConfig(rules=["@typescript-eslint/no-explicit-any"], files=["src/generated/**"])
    )

    assert filter_ignored_diagnostics([by_rule, keep, by_file], config) == [keep]


def test_filter_preserves_order(make_diagnostic) -> None:
    diagnostics = [make_diagnostic(name) for name in ("c", "a", "b")]
    result = filter_ignored_diagnostics(diagnostics, AngularDoctorConfig())
    assert [diagnostic.rule for diagnostic in result] == ["c", "a", "b"]
