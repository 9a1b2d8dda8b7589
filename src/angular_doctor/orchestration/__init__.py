# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""High-level scan orchestration."""

from __future__ import annotations

from .scan import ScanRequest, scan

__all__ = ["ScanRequest", "scan"]
