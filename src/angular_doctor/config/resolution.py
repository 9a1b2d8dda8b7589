# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Merge explicit command-line choices with project configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

from .models import AngularDoctorConfig

_T = TypeVar("_T")

DEFAULT_LINT = True
DEFAULT_DEAD_CODE = True
DEFAULT_VERBOSE = False
DEFAULT_FAST = False


@dataclass(frozen=True, slots=True)
class CliOverrides:
    """Values the user supplied explicitly on the command line.

    ``None`` means "not given", which lets the project configuration decide.
    """

    lint: bool | None = None
    dead_code: bool | None = None
    verbose: bool | None = None
    fast: bool | None = None
    diff: bool | str | None = None


@dataclass(frozen=True, slots=True)
class ScanOptions:
    """Effective analyzer toggles for one scan target."""

    lint: bool = DEFAULT_LINT
    dead_code: bool = DEFAULT_DEAD_CODE
    verbose: bool = DEFAULT_VERBOSE
    fast: bool = DEFAULT_FAST

    @property
    def use_type_aware_lint(self) -> bool:
        """Return ``True`` when lint rules may use type information."""

        return not self.fast


def _first_set(*values: _T | None, default: _T) -> _T:
    for value in values:
        if value is not None:
            return value
    return default


def resolve_scan_options(overrides: CliOverrides, config: AngularDoctorConfig | None) -> ScanOptions:
    """Apply CLI, then configuration, then defaults to every toggle.

    Fast mode disables dead-code detection outright, including when the
    project configuration or the command line asks for it.

    Args:
        overrides: Explicit command-line values.
        config: Project configuration, if any.

    Returns:
        ScanOptions: Effective toggles.
    """

    fast = _first_set(overrides.fast, config.fast if config else None, default=DEFAULT_FAST)
    dead_code = _first_set(overrides.dead_code, config.dead_code if config else None, default=DEFAULT_DEAD_CODE)
    return ScanOptions(
        lint=_first_set(overrides.lint, config.lint if config else None, default=DEFAULT_LINT),
        dead_code=False if fast else dead_code,
        verbose=_first_set(overrides.verbose, config.verbose if config else None, default=DEFAULT_VERBOSE),
        fast=fast,
    )


def resolve_diff_setting(overrides: CliOverrides, config: AngularDoctorConfig | None) -> bool | str | None:
    """Return the effective diff request.

    Args:
        overrides: Explicit command-line values.
        config: Project configuration, if any.

    Returns:
        bool | str | None: ``None`` when nobody asked, ``False`` when diff
        mode is disabled, ``True`` for automatic base detection, or a base
        branch name.
    """

    if overrides.diff is not None:
        return overrides.diff
    return config.diff if config else None


def explicit_base_branch(diff_setting: bool | str | None) -> str | None:
    """Return the base branch named by ``diff_setting``, if any."""

    return diff_setting if isinstance(diff_setting, str) and diff_setting else None


__all__ = [
    "CliOverrides",
    "ScanOptions",
    "explicit_base_branch",
    "resolve_diff_setting",
    "resolve_scan_options",
]
