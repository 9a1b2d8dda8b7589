# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lint adapter running ESLint with the Angular rule set."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from ..constants import ESLINT_CACHE_FILENAME, ESLINT_CONFIG_FILENAME, TSCONFIG_JSON
from ..core.errors import AnalyzerError
from ..core.models import Diagnostic, JsonValue
from ..core.process import CommandOptions
from ..core.severity import severity_from_eslint_level
from .base import AsyncCommandRunner, cache_directory, decode_json_output, default_command_runner
from .rules import CATEGORY_OTHER, enabled_lint_rules, lookup_lint_rule, split_rule_id

LOGGER = logging.getLogger(__name__)

ANALYZER_NAME: Final[str] = "eslint"
DEFAULT_PATTERNS: Final[tuple[str, ...]] = ("**/*.ts",)
# 0: no lint errors, 1: lint errors found. Anything else is a crash.
_SUCCESS_EXIT_CODES: Final[frozenset[int]] = frozenset({0, 1})

_CONFIG_TEMPLATE: Final[str] = """\
import angular from "@angular-eslint/eslint-plugin";
import tseslint from "typescript-eslint";

export default [
  {{
    files: ["**/*.ts"],
    plugins: {{
      "@angular-eslint": angular,
      "@typescript-eslint": tseslint.plugin,
    }},
    languageOptions: {{
      parser: tseslint.parser,
      parserOptions: {parser_options},
    }},
    rules: {rules},
  }},
];
"""


def build_parser_options(root: Path, *, has_typescript: bool, use_type_aware: bool) -> dict[str, str]:
    """Return ``parserOptions`` for the generated configuration.

    Type-aware parsing is enabled only for TypeScript projects that ship a
    ``tsconfig.json`` and when type-aware lint has not been disabled.
    """

    options = {"ecmaVersion": "latest", "sourceType": "module"}
    tsconfig = root / TSCONFIG_JSON
    if has_typescript and use_type_aware and tsconfig.is_file():
        options["project"] = str(tsconfig)
    return options


def render_eslint_config(parser_options: dict[str, str]) -> str:
    """Render the flat ESLint configuration module."""

    return _CONFIG_TEMPLATE.format(
        parser_options=json.dumps(parser_options, indent=2),
        rules=json.dumps(enabled_lint_rules(), indent=2),
    )


def _relative_path(file_path: str, root: Path) -> str:
    if not os.path.isabs(file_path):
        return Path(file_path).as_posix()
    return Path(os.path.relpath(file_path, root)).as_posix()


def _as_int(value: JsonValue) -> int:
    return value if isinstance(value, int) and not isinstance(value, bool) else 0


def parse_eslint_results(payload: JsonValue, root: Path) -> list[Diagnostic]:
    """Translate ESLint's JSON formatter output into diagnostics.

    Messages without a rule id (parse errors, unused disable directives) are
    dropped. Curated rules use their curated severity, message and help;
    unknown rules keep ESLint's severity and message.

    Args:
        payload: Decoded ``--format json`` output.
        root: Project root used to relativise file paths.

    Returns:
        list[Diagnostic]: Diagnostics in report order.

    Raises:
        AnalyzerError: If ``payload`` is not a list of results.
    """

    if not isinstance(payload, list):
        raise AnalyzerError(ANALYZER_NAME, "expected a JSON array of results")
    diagnostics: list[Diagnostic] = []
    for result in payload:
        if not isinstance(result, dict):
            continue
        file_path = result.get("filePath")
        messages = result.get("messages")
        if not isinstance(file_path, str) or not isinstance(messages, list):
            continue
        relative = _relative_path(file_path, root)
        for message in messages:
            if not isinstance(message, dict):
                continue
            rule_id = message.get("ruleId")
            if not isinstance(rule_id, str) or not rule_id:
                continue
            plugin, rule = split_rule_id(rule_id)
            metadata = lookup_lint_rule(rule_id)
            engine_message = message.get("message")
            diagnostics.append(
                Diagnostic(
                    file_path=relative,
                    plugin=plugin,
                    rule=rule,
                    severity=(
                        metadata.severity
                        if metadata
                        else severity_from_eslint_level(_as_int(message.get("severity")))
                    ),
                    message=metadata.message if metadata else str(engine_message or rule_id),
                    help=metadata.help if metadata else "",
                    line=_as_int(message.get("line")),
                    column=_as_int(message.get("column")),
                    category=metadata.category if metadata else CATEGORY_OTHER,
                )
            )
    return diagnostics


class EslintAnalyzer:
    """Run ESLint through ``npx`` and translate its JSON report."""

    def __init__(self, *, runner: AsyncCommandRunner | None = None) -> None:
        """Create the adapter.

        Args:
            runner: Optional async command runner, mainly for tests.
        """

        self._runner = runner or default_command_runner

    def build_command(self, config_path: Path, cache_path: Path, patterns: Sequence[str]) -> list[str]:
        """Return the ESLint command line."""

        return [
            "npx",
            "--no-install",
            "eslint",
            "--format",
            "json",
            "--config",
            str(config_path),
            "--cache",
            "--cache-location",
            str(cache_path),
            "--no-error-on-unmatched-pattern",
            *patterns,
        ]

    async def __call__(
        self,
        root: Path,
        *,
        has_typescript: bool,
        include_paths: Sequence[str] | None,
        use_type_aware: bool,
    ) -> list[Diagnostic]:
        """Lint ``root`` and return its diagnostics.

        Args:
            root: Project root.
            has_typescript: Whether the project ships a ``tsconfig.json``.
            include_paths: Files to lint; ``None`` lints every ``*.ts`` file
                and an empty sequence lints nothing.
            use_type_aware: Whether type-aware parsing may be enabled.

        Returns:
            list[Diagnostic]: Lint diagnostics.

        Raises:
            AnalyzerError: If ESLint cannot run or reports a fatal error.
        """

        if include_paths is not None and not include_paths:
            return []

        cache_dir = cache_directory(root)
        config_path = cache_dir / ESLINT_CONFIG_FILENAME
        parser_options = build_parser_options(root, has_typescript=has_typescript, use_type_aware=use_type_aware)
        config_path.write_text(render_eslint_config(parser_options), encoding="utf-8")

        patterns = list(include_paths) if include_paths is not None else list(DEFAULT_PATTERNS)
        command = self.build_command(config_path, cache_dir / ESLINT_CACHE_FILENAME, patterns)
        try:
            completed = await self._runner(
                command,
                CommandOptions(cwd=root, check=False, capture_output=True, discard_stdin=True),
            )
        except OSError as exc:
            raise AnalyzerError(ANALYZER_NAME, str(exc)) from exc

        if completed.returncode not in _SUCCESS_EXIT_CODES:
            detail = (completed.stderr or completed.stdout or "").strip()
            raise AnalyzerError(ANALYZER_NAME, f"exited with status {completed.returncode}: {detail}")

        diagnostics = parse_eslint_results(decode_json_output(ANALYZER_NAME, completed.stdout or ""), root)
        LOGGER.debug("eslint reported %d diagnostic(s) for %s", len(diagnostics), root)
        return diagnostics


__all__ = [
    "ANALYZER_NAME",
    "EslintAnalyzer",
    "build_parser_options",
    "parse_eslint_results",
    "render_eslint_config",
]
