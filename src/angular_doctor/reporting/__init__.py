# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console, markdown and on-disk rendering of scan results."""

from __future__ import annotations

from .console import StepReporter, print_diagnostics, print_project_detection, print_summary
from .markdown import build_markdown_report
from .output import OutputLocations, ReportRequest, resolve_report_path, write_diagnostics_directory

__all__ = [
    "OutputLocations",
    "ReportRequest",
    "StepReporter",
    "build_markdown_report",
    "print_diagnostics",
    "print_project_detection",
    "print_summary",
    "resolve_report_path",
    "write_diagnostics_directory",
]
