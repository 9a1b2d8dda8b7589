# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core primitives shared by every angular_doctor subsystem."""

from __future__ import annotations

from .errors import AnalyzerError, AngularDoctorError, ConfigError, ProjectDiscoveryError, ProjectNotFoundError
from .models import (
    AngularFramework,
    Diagnostic,
    DiffInfo,
    ProjectInfo,
    ScanResult,
    ScoreResult,
    WorkspacePackage,
    format_framework_name,
)
from .severity import Severity, severity_rank

__all__ = [
    "AnalyzerError",
    "AngularDoctorError",
    "AngularFramework",
    "ConfigError",
    "Diagnostic",
    "DiffInfo",
    "ProjectDiscoveryError",
    "ProjectInfo",
    "ProjectNotFoundError",
    "ScanResult",
    "ScoreResult",
    "Severity",
    "WorkspacePackage",
    "format_framework_name",
    "severity_rank",
]
