# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discovery helpers for the angular_doctor package."""

from __future__ import annotations

from .git import GitClient, filter_source_files, get_diff_info
from .project import discover_project, find_angular_workspace_root
from .selection import select_projects
from .workspace import list_angular_workspace_projects, list_workspace_packages

__all__ = [
    "GitClient",
    "discover_project",
    "filter_source_files",
    "find_angular_workspace_root",
    "get_diff_info",
    "list_angular_workspace_projects",
    "list_workspace_packages",
    "select_projects",
]
