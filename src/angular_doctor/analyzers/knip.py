# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Dead-code adapter running knip and translating its JSON report."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from ..constants import (
    ANGULAR_JSON,
    KNIP_ANGULAR_ENTRIES,
    KNIP_CONFIG_FILENAME,
    KNIP_USER_CONFIG_FILENAMES,
    MAX_KNIP_RETRIES,
    NODE_MODULES,
)
from ..core.errors import AnalyzerError
from ..core.models import Diagnostic, JsonValue
from ..core.process import CommandOptions
from ..discovery.manifest import read_manifest_in
from ..discovery.project import find_angular_workspace_root
from .base import AsyncCommandRunner, cache_directory, decode_json_output, default_command_runner, relative_to_root
from .rules import DEAD_CODE_ISSUES, KNIP_PLUGIN, DeadCodeIssue

LOGGER = logging.getLogger(__name__)

ANALYZER_NAME: Final[str] = "knip"
PACKAGE_JSON_KNIP_KEY: Final[str] = "knip"
ENTRY_KEY: Final[str] = "entry"

CONFIG_LOADING_ERROR_PATTERN: Final[re.Pattern[str]] = re.compile(r"Error loading .*/([a-z-]+)\.config\.")

# Config formats that cannot be merged into a generated JSON override.
_UNMERGEABLE_CONFIG_FILENAMES: Final[tuple[str, ...]] = (
    "knip.jsonc",
    ".knip.jsonc",
    "knip.ts",
    "knip.js",
    "knip.config.ts",
    "knip.config.js",
)

_SYMBOL_ISSUES: Final[tuple[DeadCodeIssue, ...]] = (
    DeadCodeIssue.EXPORTS,
    DeadCodeIssue.TYPES,
    DeadCodeIssue.DUPLICATES,
)


def extract_failed_plugin(output: str) -> str | None:
    """Return the plugin whose config file knip failed to load, if any."""

    match = CONFIG_LOADING_ERROR_PATTERN.search(output)
    return match.group(1) if match else None


@dataclass(slots=True)
class KnipConfigOverride:
    """Generated knip configuration layered over the project's own.

    ``base`` is ``None`` when the project configures knip in a format that
    cannot be merged; no override is written in that case.
    """

    base: dict[str, JsonValue] | None
    settings: dict[str, JsonValue] = field(default_factory=dict)

    @classmethod
    def for_directory(cls, knip_root: Path) -> KnipConfigOverride:
        """Load the project's knip configuration and add Angular entry points.

        Args:
            knip_root: Directory knip runs from.

        Returns:
            KnipConfigOverride: Override seeded from the project configuration.
        """

        base = _load_user_config(knip_root)
        override = cls(base=base)
        if base is not None and (knip_root / ANGULAR_JSON).is_file() and ENTRY_KEY not in base:
            override.settings[ENTRY_KEY] = list(KNIP_ANGULAR_ENTRIES)
        return override

    @property
    def can_override(self) -> bool:
        """Return ``True`` when generated settings can be applied."""

        return self.base is not None

    def disable_plugin(self, plugin: str) -> None:
        """Turn off ``plugin`` for subsequent runs."""

        self.settings[plugin] = False

    def render(self) -> dict[str, JsonValue] | None:
        """Return the merged configuration, or ``None`` when nothing changes."""

        if self.base is None or not self.settings:
            return None
        return {**self.base, **self.settings}


def _load_user_config(knip_root: Path) -> dict[str, JsonValue] | None:
    if any((knip_root / name).is_file() for name in _UNMERGEABLE_CONFIG_FILENAMES):
        return None
    for name in KNIP_USER_CONFIG_FILENAMES:
        path = knip_root / name
        if not path.is_file():
            continue
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            LOGGER.debug("not overriding unreadable %s: %s", path, exc)
            return None
        return payload if isinstance(payload, dict) else None
    embedded = read_manifest_in(knip_root).get(PACKAGE_JSON_KNIP_KEY)
    return dict(embedded) if isinstance(embedded, dict) else {}


def _dead_code_diagnostic(
    issue: DeadCodeIssue,
    file_path: str,
    symbol: str | None,
    line: int,
    column: int,
) -> Diagnostic:
    metadata = DEAD_CODE_ISSUES[issue]
    return Diagnostic(
        file_path=file_path,
        plugin=KNIP_PLUGIN,
        rule=issue.value,
        severity=metadata.severity,
        message=f"{metadata.message}: {symbol}" if symbol else metadata.message,
        help=metadata.help,
        line=line,
        column=column,
        category=metadata.category,
    )


def _position(entry: dict[str, JsonValue], key: str) -> int:
    value = entry.get(key)
    return value if isinstance(value, int) and not isinstance(value, bool) else 0


def _symbol_entries(issue: DeadCodeIssue, entries: JsonValue) -> Iterator[tuple[str, int, int]]:
    if not isinstance(entries, list):
        return
    for entry in entries:
        if issue is DeadCodeIssue.DUPLICATES and isinstance(entry, list):
            names = [item.get("name") for item in entry if isinstance(item, dict)]
            yield ", ".join(name for name in names if isinstance(name, str)), 0, 0
        elif isinstance(entry, dict) and isinstance(entry.get("name"), str):
            yield str(entry["name"]), _position(entry, "line"), _position(entry, "col")


def _unused_files(payload: dict[str, JsonValue]) -> list[str]:
    files: list[str] = []
    top_level = payload.get("files")
    if isinstance(top_level, list):
        files.extend(item for item in top_level if isinstance(item, str))
    issues = payload.get("issues")
    for issue in issues if isinstance(issues, list) else []:
        if isinstance(issue, dict) and isinstance(issue.get("file"), str) and issue.get("files"):
            files.append(str(issue["file"]))
    return list(dict.fromkeys(files))


def parse_knip_report(payload: JsonValue, knip_root: Path, scan_root: Path) -> list[Diagnostic]:
    """Translate knip's JSON reporter output into diagnostics.

    Knip reports paths relative to the directory it ran in. Findings outside
    ``scan_root`` belong to sibling projects of the workspace and are dropped.

    Args:
        payload: Decoded ``--reporter json`` output.
        knip_root: Directory knip ran in.
        scan_root: Project being scanned.

    Returns:
        list[Diagnostic]: Unused files first, then symbol issues per file.

    Raises:
        AnalyzerError: If ``payload`` is not a JSON object.
    """

    if not isinstance(payload, dict):
        raise AnalyzerError(ANALYZER_NAME, "expected a JSON object report")

    diagnostics: list[Diagnostic] = []
    for file_path in _unused_files(payload):
        relative = relative_to_root(str(knip_root / file_path), scan_root)
        if relative is not None:
            diagnostics.append(_dead_code_diagnostic(DeadCodeIssue.FILES, relative, None, 0, 0))

    issues = payload.get("issues")
    for issue in issues if isinstance(issues, list) else []:
        if not isinstance(issue, dict) or not isinstance(issue.get("file"), str):
            continue
        relative = relative_to_root(str(knip_root / str(issue["file"])), scan_root)
        if relative is None:
            continue
        for issue_type in _SYMBOL_ISSUES:
            for symbol, line, column in _symbol_entries(issue_type, issue.get(issue_type.value)):
                diagnostics.append(_dead_code_diagnostic(issue_type, relative, symbol, line, column))
    return diagnostics


class KnipAnalyzer:
    """Run knip through ``npx`` with plugin-failure retries."""

    def __init__(self, *, runner: AsyncCommandRunner | None = None, max_retries: int = MAX_KNIP_RETRIES) -> None:
        """Create the adapter.

        Args:
            runner: Optional async command runner, mainly for tests.
            max_retries: Number of reruns allowed after disabling a plugin.
        """

        self._runner = runner or default_command_runner
        self._max_retries = max_retries

    @staticmethod
    def build_command(config_path: Path | None) -> list[str]:
        """Return the knip command line."""

        command = ["npx", "--no-install", "knip", "--reporter", "json", "--no-progress", "--no-exit-code"]
        if config_path is not None:
            command.extend(["--config", str(config_path)])
        return command

    def _write_override(self, knip_root: Path, override: KnipConfigOverride) -> Path | None:
        rendered = override.render()
        if rendered is None:
            return None
        path = cache_directory(knip_root) / KNIP_CONFIG_FILENAME
        path.write_text(json.dumps(rendered, indent=2), encoding="utf-8")
        return path

    async def __call__(self, root: Path) -> list[Diagnostic]:
        """Report dead code in ``root``.

        Knip runs from the enclosing Angular workspace root when there is one,
        so the Angular plugin sees the whole workspace configuration.

        Args:
            root: Project root.

        Returns:
            list[Diagnostic]: Dead-code diagnostics, empty when dependencies
            are not installed.

        Raises:
            AnalyzerError: If knip cannot run or keeps failing after retries.
        """

        if not (root / NODE_MODULES).is_dir():
            LOGGER.debug("skipping knip: %s has no %s", root, NODE_MODULES)
            return []

        knip_root = find_angular_workspace_root(root) or root.resolve()
        override = KnipConfigOverride.for_directory(knip_root)

        attempt = 0
        while True:
            config_path = self._write_override(knip_root, override)
            try:
                completed = await self._runner(
                    self.build_command(config_path),
                    CommandOptions(cwd=knip_root, check=False, capture_output=True, discard_stdin=True),
                )
            except OSError as exc:
                raise AnalyzerError(ANALYZER_NAME, str(exc)) from exc
            if completed.returncode == 0:
                break
            output = f"{completed.stderr or ''}\n{completed.stdout or ''}".strip()
            failed_plugin = extract_failed_plugin(output)
            if failed_plugin is None or attempt >= self._max_retries or not override.can_override:
                raise AnalyzerError(ANALYZER_NAME, f"exited with status {completed.returncode}: {output}")
            LOGGER.debug("disabling knip plugin %s after config load failure", failed_plugin)
            override.disable_plugin(failed_plugin)
            attempt += 1

        payload = decode_json_output(ANALYZER_NAME, completed.stdout or "")
        return parse_knip_report(payload, knip_root, root)


__all__ = [
    "ANALYZER_NAME",
    "CONFIG_LOADING_ERROR_PATTERN",
    "KnipAnalyzer",
    "KnipConfigOverride",
    "extract_failed_plugin",
    "parse_knip_report",
]
