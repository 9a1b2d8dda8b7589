# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic collection, filtering and scoring."""

from __future__ import annotations

from .filtering import filter_ignored_diagnostics, matches_glob
from .pipeline import DiagnosticPipeline, PipelineRequest, PipelineResult, compute_include_paths
from .scoring import calculate_score, get_score_label

__all__ = [
    "DiagnosticPipeline",
    "PipelineRequest",
    "PipelineResult",
    "calculate_score",
    "compute_include_paths",
    "filter_ignored_diagnostics",
    "get_score_label",
    "matches_glob",
]
