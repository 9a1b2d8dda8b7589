# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants used across angular_doctor modules."""

from __future__ import annotations

import re
from typing import Final

TOOL_NAME: Final[str] = "angular-doctor"

CONFIG_FILENAME: Final[str] = "angular-doctor.config.json"
PACKAGE_JSON_CONFIG_KEY: Final[str] = "angularDoctor"

PACKAGE_JSON: Final[str] = "package.json"
ANGULAR_JSON: Final[str] = "angular.json"
TSCONFIG_JSON: Final[str] = "tsconfig.json"
PNPM_WORKSPACE_YAML: Final[str] = "pnpm-workspace.yaml"
NODE_MODULES: Final[str] = "node_modules"

SOURCE_FILE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\.ts$")

PERFECT_SCORE: Final[int] = 100
SCORE_GOOD_THRESHOLD: Final[int] = 75
SCORE_OK_THRESHOLD: Final[int] = 50
ERROR_RULE_PENALTY: Final[float] = 1.5
WARNING_RULE_PENALTY: Final[float] = 0.75
SCORE_BAR_WIDTH_CHARS: Final[int] = 50

SCORE_LABEL_GREAT: Final[str] = "Great"
SCORE_LABEL_NEEDS_WORK: Final[str] = "Needs work"
SCORE_LABEL_CRITICAL: Final[str] = "Critical"

MILLISECONDS_PER_SECOND: Final[int] = 1000

MAX_KNIP_RETRIES: Final[int] = 5
DEFAULT_BRANCH_CANDIDATES: Final[tuple[str, ...]] = ("main", "master")

STANDALONE_COMPONENTS_MIN_MAJOR: Final[int] = 14

ESLINT_CACHE_SEGMENTS: Final[tuple[str, ...]] = (NODE_MODULES, ".cache", TOOL_NAME)
ESLINT_CACHE_FILENAME: Final[str] = ".eslintcache"
ESLINT_CONFIG_FILENAME: Final[str] = "eslint.config.mjs"
KNIP_CONFIG_FILENAME: Final[str] = "knip.override.json"
KNIP_USER_CONFIG_FILENAMES: Final[tuple[str, ...]] = ("knip.json", ".knip.json")
KNIP_ANGULAR_ENTRIES: Final[tuple[str, ...]] = ("**/*.module.ts", "**/*.routes.ts")

OUTPUT_DIR_PREFIX: Final[str] = f"{TOOL_NAME}-"
DIAGNOSTICS_JSON_FILENAME: Final[str] = "diagnostics.json"
DEFAULT_REPORT_FILENAME: Final[str] = "report.md"

AUTOMATED_ENVIRONMENT_VARIABLES: Final[tuple[str, ...]] = (
    "CI",
    "CLAUDECODE",
    "CURSOR_AGENT",
    "CODEX_CI",
    "OPENCODE",
    "AMP_HOME",
)

SKIPPED_CHECK_LINT: Final[str] = "lint"
SKIPPED_CHECK_DEAD_CODE: Final[str] = "dead code"

__all__ = [
    "ANGULAR_JSON",
    "AUTOMATED_ENVIRONMENT_VARIABLES",
    "CONFIG_FILENAME",
    "DEFAULT_BRANCH_CANDIDATES",
    "DEFAULT_REPORT_FILENAME",
    "DIAGNOSTICS_JSON_FILENAME",
    "ERROR_RULE_PENALTY",
    "ESLINT_CACHE_FILENAME",
    "ESLINT_CACHE_SEGMENTS",
    "ESLINT_CONFIG_FILENAME",
    "KNIP_ANGULAR_ENTRIES",
    "KNIP_CONFIG_FILENAME",
    "KNIP_USER_CONFIG_FILENAMES",
    "MAX_KNIP_RETRIES",
    "MILLISECONDS_PER_SECOND",
    "NODE_MODULES",
    "OUTPUT_DIR_PREFIX",
    "PACKAGE_JSON",
    "PACKAGE_JSON_CONFIG_KEY",
    "PERFECT_SCORE",
    "PNPM_WORKSPACE_YAML",
    "SCORE_BAR_WIDTH_CHARS",
    "SCORE_GOOD_THRESHOLD",
    "SCORE_LABEL_CRITICAL",
    "SCORE_LABEL_GREAT",
    "SCORE_LABEL_NEEDS_WORK",
    "SCORE_OK_THRESHOLD",
    "SKIPPED_CHECK_DEAD_CODE",
    "SKIPPED_CHECK_LINT",
    "SOURCE_FILE_PATTERN",
    "STANDALONE_COMPONENTS_MIN_MAJOR",
    "TOOL_NAME",
    "TSCONFIG_JSON",
    "WARNING_RULE_PENALTY",
]
