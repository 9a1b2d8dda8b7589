# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised by angular_doctor components."""

from __future__ import annotations

from collections.abc import Sequence


class AngularDoctorError(RuntimeError):
    """Base class for every error raised deliberately by angular_doctor."""


class ProjectDiscoveryError(AngularDoctorError):
    """Raised when a scan target cannot be resolved into an Angular project."""


class ProjectNotFoundError(AngularDoctorError):
    """Raised when a ``--project`` token matches no workspace package."""

    def __init__(self, token: str, available: Sequence[str]) -> None:
        """Initialise the error with the unmatched token and the known names.

        Args:
            token: Project name requested by the user.
            available: Names of the packages discovered in the workspace.
        """

        super().__init__(f'Project "{token}" not found. Available: {", ".join(available)}')
        self.token = token
        self.available = tuple(available)


class AnalyzerError(AngularDoctorError):
    """Raised when an external analyzer fails or produces unusable output."""

    def __init__(self, analyzer: str, message: str) -> None:
        """Initialise the error with the failing analyzer name.

        Args:
            analyzer: Identifier of the analyzer that failed.
            message: Human-readable failure description.
        """

        super().__init__(f"{analyzer}: {message}")
        self.analyzer = analyzer


class ConfigError(AngularDoctorError):
    """Raised when a project configuration source is malformed."""


__all__ = [
    "AnalyzerError",
    "AngularDoctorError",
    "ConfigError",
    "ProjectDiscoveryError",
    "ProjectNotFoundError",
]
