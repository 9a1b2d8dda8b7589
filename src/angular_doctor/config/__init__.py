# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Project configuration loading and option resolution."""

from __future__ import annotations

from ..core.errors import ConfigError
from .loader import load_config, read_config_file
from .models import AngularDoctorConfig, IgnoreConfig
from .resolution import CliOverrides, ScanOptions, resolve_diff_setting, resolve_scan_options

__all__ = [
    "AngularDoctorConfig",
    "CliOverrides",
    "ConfigError",
    "IgnoreConfig",
    "ScanOptions",
    "load_config",
    "read_config_file",
    "resolve_diff_setting",
    "resolve_scan_options",
]
