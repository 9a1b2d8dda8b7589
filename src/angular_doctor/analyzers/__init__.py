# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Adapters for the external lint and dead-code analyzers."""

from __future__ import annotations

from .base import AnalyzerSuite, DeadCodeAnalyzer, LintAnalyzer
from .eslint import EslintAnalyzer
from .knip import KnipAnalyzer


def default_analyzers() -> AnalyzerSuite:
    """Return the ESLint and knip adapters used by real scans."""

    return AnalyzerSuite(lint=EslintAnalyzer(), dead_code=KnipAnalyzer())


__all__ = [
    "AnalyzerSuite",
    "DeadCodeAnalyzer",
    "EslintAnalyzer",
    "KnipAnalyzer",
    "LintAnalyzer",
    "default_analyzers",
]
