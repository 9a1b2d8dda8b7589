# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the angular_doctor package."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Final, TypeAlias

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .severity import Severity

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]


class AngularFramework(str, Enum):
    """Enumerate the Angular toolchains recognised during project discovery."""

    ANGULAR_CLI = "angular-cli"
    NX = "nx"
    ANALOG = "analog"
    IONIC = "ionic"
    UNIVERSAL = "universal"
    UNKNOWN = "unknown"


_FRAMEWORK_DISPLAY_NAMES: Final[dict[AngularFramework, str]] = {
    AngularFramework.ANGULAR_CLI: "Angular CLI",
    AngularFramework.NX: "Nx",
    AngularFramework.ANALOG: "AnalogJS",
    AngularFramework.IONIC: "Ionic",
    AngularFramework.UNIVERSAL: "Angular SSR",
    AngularFramework.UNKNOWN: "Angular",
}


def format_framework_name(framework: AngularFramework) -> str:
    """Return the human-readable name used when printing ``framework``.

    Args:
        framework: Framework detected for a project.

    Returns:
        str: Display name for terminal output.
    """

    return _FRAMEWORK_DISPLAY_NAMES[framework]


class Diagnostic(BaseModel):
    """Canonical finding produced by any analyzer.

    ``file_path`` is relative to the scanned project root. ``line`` and
    ``column`` are 1-based; ``0`` marks findings that are not tied to a
    position (for example an unused file).
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    file_path: str
    plugin: str
    rule: str
    severity: Severity
    message: str
    help: str = ""
    line: int = 0
    column: int = 0
    category: str
    weight: int = 1

    @property
    def rule_key(self) -> str:
        """Return the ``plugin/rule`` key used for scoring and ignoring.

        Returns:
            str: Combined plugin and rule identifier.
        """

        return f"{self.plugin}/{self.rule}"


class ProjectInfo(BaseModel):
    """Describe a single scan target after manifest inspection."""

    model_config = ConfigDict(frozen=True)

    root_directory: Path
    project_name: str
    angular_version: str | None = None
    framework: AngularFramework = AngularFramework.UNKNOWN
    has_typescript: bool = False
    has_standalone_components: bool = False
    source_file_count: int = 0


class WorkspacePackage(BaseModel):
    """A scannable package discovered inside a multi-project workspace."""

    model_config = ConfigDict(frozen=True)

    name: str
    directory: Path


class DiffInfo(BaseModel):
    """Changed files selected for a diff-mode scan."""

    model_config = ConfigDict(frozen=True)

    current_branch: str
    base_branch: str
    changed_files: tuple[str, ...] = Field(default_factory=tuple)
    is_current_changes: bool = False


class ScoreResult(BaseModel):
    """Health score and its qualitative label."""

    model_config = ConfigDict(frozen=True)

    score: int
    label: str


class ScanResult(BaseModel):
    """Outcome of scanning one target."""

    model_config = ConfigDict(frozen=True)

    project: ProjectInfo
    diagnostics: tuple[Diagnostic, ...] = Field(default_factory=tuple)
    score_result: ScoreResult | None = None
    skipped_checks: tuple[str, ...] = Field(default_factory=tuple)
    elapsed_seconds: float = 0.0

    @property
    def has_skipped_checks(self) -> bool:
        """Return ``True`` when at least one analyzer failed during the scan.

        Returns:
            bool: Whether the diagnostic set is incomplete.
        """

        return bool(self.skipped_checks)


__all__ = [
    "AngularFramework",
    "Diagnostic",
    "DiffInfo",
    "JsonScalar",
    "JsonValue",
    "ProjectInfo",
    "ScanResult",
    "ScoreResult",
    "WorkspacePackage",
    "format_framework_name",
]
