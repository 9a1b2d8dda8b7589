# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Metadata describing every rule the analyzers know how to present."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Final

from ..core.severity import Severity

CATEGORY_COMPONENTS: Final[str] = "Components"
CATEGORY_PERFORMANCE: Final[str] = "Performance"
CATEGORY_CORRECTNESS: Final[str] = "Correctness"
CATEGORY_ARCHITECTURE: Final[str] = "Architecture"
CATEGORY_TYPESCRIPT: Final[str] = "TypeScript"
CATEGORY_DEAD_CODE: Final[str] = "Dead Code"
CATEGORY_OTHER: Final[str] = "Other"

DEFAULT_ESLINT_PLUGIN: Final[str] = "eslint"
KNIP_PLUGIN: Final[str] = "knip"

_RULE_ID_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(@[^/]+/[^/]+|[^/]+)/(.+)$")


class LintRule(str, Enum):
    """Lint rules with curated presentation metadata."""

    COMPONENT_CLASS_SUFFIX = "@angular-eslint/component-class-suffix"
    DIRECTIVE_CLASS_SUFFIX = "@angular-eslint/directive-class-suffix"
    PIPE_PREFIX = "@angular-eslint/pipe-prefix"
    USE_PIPE_TRANSFORM_INTERFACE = "@angular-eslint/use-pipe-transform-interface"
    NO_EMPTY_LIFECYCLE_METHOD = "@angular-eslint/no-empty-lifecycle-method"
    USE_LIFECYCLE_INTERFACE = "@angular-eslint/use-lifecycle-interface"
    CONSISTENT_COMPONENT_STYLES = "@angular-eslint/consistent-component-styles"
    PREFER_ON_PUSH = "@angular-eslint/prefer-on-push-component-change-detection"
    NO_OUTPUT_NATIVE = "@angular-eslint/no-output-native"
    NO_CONFLICTING_LIFECYCLE = "@angular-eslint/no-conflicting-lifecycle"
    CONTEXTUAL_LIFECYCLE = "@angular-eslint/contextual-lifecycle"
    NO_FORWARD_REF = "@angular-eslint/no-forward-ref"
    NO_INPUT_RENAME = "@angular-eslint/no-input-rename"
    NO_OUTPUT_RENAME = "@angular-eslint/no-output-rename"
    NO_INPUTS_METADATA_PROPERTY = "@angular-eslint/no-inputs-metadata-property"
    NO_OUTPUTS_METADATA_PROPERTY = "@angular-eslint/no-outputs-metadata-property"
    PREFER_STANDALONE = "@angular-eslint/prefer-standalone"
    NO_EXPLICIT_ANY = "@typescript-eslint/no-explicit-any"
    NO_UNUSED_VARS = "@typescript-eslint/no-unused-vars"


class DeadCodeIssue(str, Enum):
    """Issue types translated from the dead-code report."""

    FILES = "files"
    EXPORTS = "exports"
    TYPES = "types"
    DUPLICATES = "duplicates"


@dataclass(frozen=True, slots=True)
class RuleMetadata:
    """Presentation metadata for a rule.

    Attributes:
        category: Report section the rule belongs to.
        severity: Severity every finding of the rule is reported with.
        message: Human-readable summary replacing the engine's message.
        help: Suggested fix, empty when none is curated.
        enabled: Whether the generated lint configuration turns the rule on.
    """

    category: str
    severity: Severity
    message: str
    help: str = ""
    enabled: bool = True


LINT_RULES: Final[MappingProxyType[LintRule, RuleMetadata]] = MappingProxyType(
    {
        LintRule.COMPONENT_CLASS_SUFFIX: RuleMetadata(
            CATEGORY_COMPONENTS,
            Severity.WARNING,
            "Component class should end with 'Component'",
            "Add 'Component' suffix: `export class UserProfileComponent { }`",
        ),
        LintRule.DIRECTIVE_CLASS_SUFFIX: RuleMetadata(
            CATEGORY_COMPONENTS,
            Severity.WARNING,
            "Directive class should end with 'Directive'",
            "Add 'Directive' suffix: `export class HighlightDirective { }`",
        ),
        LintRule.PIPE_PREFIX: RuleMetadata(
            CATEGORY_COMPONENTS,
            Severity.WARNING,
            "Pipe name should have a consistent prefix",
            enabled=False,
        ),
        LintRule.USE_PIPE_TRANSFORM_INTERFACE: RuleMetadata(
            CATEGORY_COMPONENTS,
            Severity.ERROR,
            "Pipe class must implement PipeTransform interface",
            "Implement PipeTransform: `export class MyPipe implements PipeTransform { transform(value: unknown) { } }`",
        ),
        LintRule.NO_EMPTY_LIFECYCLE_METHOD: RuleMetadata(
            CATEGORY_COMPONENTS,
            Severity.WARNING,
            "Remove empty lifecycle methods",
            "Remove the empty lifecycle method or add logic to it",
        ),
        LintRule.USE_LIFECYCLE_INTERFACE: RuleMetadata(
            CATEGORY_COMPONENTS,
            Severity.WARNING,
            "Implement the lifecycle interface for lifecycle hooks",
            "Add the interface: `export class MyComponent implements OnInit, OnDestroy { }`",
        ),
        LintRule.CONSISTENT_COMPONENT_STYLES: RuleMetadata(
            CATEGORY_COMPONENTS,
            Severity.WARNING,
            "Use consistent styles type in component decorator",
            enabled=False,
        ),
        LintRule.PREFER_ON_PUSH: RuleMetadata(
            CATEGORY_PERFORMANCE,
            Severity.WARNING,
            "Use OnPush change detection for better performance",
            "Add to decorator: `@Component({ changeDetection: ChangeDetectionStrategy.OnPush })`",
        ),
        LintRule.NO_OUTPUT_NATIVE: RuleMetadata(
            CATEGORY_PERFORMANCE,
            Severity.ERROR,
            "Avoid shadowing native DOM events in output names",
            "Rename the output: use a descriptive name like `(valueChange)` instead of `(click)` or `(change)`",
        ),
        LintRule.NO_CONFLICTING_LIFECYCLE: RuleMetadata(
            CATEGORY_CORRECTNESS,
            Severity.ERROR,
            "Lifecycle hooks DoCheck and OnChanges cannot be used together",
        ),
        LintRule.CONTEXTUAL_LIFECYCLE: RuleMetadata(
            CATEGORY_CORRECTNESS,
            Severity.ERROR,
            "Lifecycle hook is not available in this context",
        ),
        LintRule.NO_FORWARD_REF: RuleMetadata(
            CATEGORY_ARCHITECTURE,
            Severity.WARNING,
            "Avoid using forwardRef: restructure to avoid circular dependency",
            "Restructure your code to avoid circular dependencies, or use `inject()` with a lazy function",
        ),
        LintRule.NO_INPUT_RENAME: RuleMetadata(
            CATEGORY_ARCHITECTURE,
            Severity.WARNING,
            "Avoid renaming directive inputs: use the property name as the binding name",
            "Remove the alias: `@Input() myProp: string` instead of `@Input('myAlias') myProp: string`",
        ),
        LintRule.NO_OUTPUT_RENAME: RuleMetadata(
            CATEGORY_ARCHITECTURE,
            Severity.WARNING,
            "Avoid renaming directive outputs: use the property name as the binding name",
            "Remove the alias: `@Output() myEvent = new EventEmitter()` instead of aliased version",
        ),
        LintRule.NO_INPUTS_METADATA_PROPERTY: RuleMetadata(
            CATEGORY_ARCHITECTURE,
            Severity.WARNING,
            "Use @Input() decorator instead of inputs metadata property",
            "Use `@Input() myProp: string` decorator on the property instead of `inputs: ['myProp']` in the "
            "decorator metadata",
        ),
        LintRule.NO_OUTPUTS_METADATA_PROPERTY: RuleMetadata(
            CATEGORY_ARCHITECTURE,
            Severity.WARNING,
            "Use @Output() decorator instead of outputs metadata property",
            "Use `@Output() myEvent = new EventEmitter()` instead of `outputs: ['myEvent']` in the decorator "
            "metadata",
        ),
        LintRule.PREFER_STANDALONE: RuleMetadata(
            CATEGORY_ARCHITECTURE,
            Severity.WARNING,
            "Prefer standalone components over NgModule-based components",
            "Add `standalone: true` to component: `@Component({ standalone: true, ... })`",
            enabled=False,
        ),
        LintRule.NO_EXPLICIT_ANY: RuleMetadata(
            CATEGORY_TYPESCRIPT,
            Severity.WARNING,
            "Avoid 'any' type: use specific types for better type safety",
            "Replace `any` with a specific type or `unknown` if the type is truly unknown",
        ),
        LintRule.NO_UNUSED_VARS: RuleMetadata(
            CATEGORY_DEAD_CODE,
            Severity.WARNING,
            "Remove unused variable declaration",
            "Remove the unused variable or prefix with `_` to indicate it's intentionally unused",
            enabled=False,
        ),
    }
)

DEAD_CODE_ISSUES: Final[MappingProxyType[DeadCodeIssue, RuleMetadata]] = MappingProxyType(
    {
        DeadCodeIssue.FILES: RuleMetadata(
            CATEGORY_DEAD_CODE,
            Severity.WARNING,
            "Unused file",
            "This file is not imported by any other file in the project.",
        ),
        DeadCodeIssue.EXPORTS: RuleMetadata(CATEGORY_DEAD_CODE, Severity.WARNING, "Unused export"),
        DeadCodeIssue.TYPES: RuleMetadata(CATEGORY_DEAD_CODE, Severity.WARNING, "Unused type"),
        DeadCodeIssue.DUPLICATES: RuleMetadata(CATEGORY_DEAD_CODE, Severity.WARNING, "Duplicate export"),
    }
)


def lookup_lint_rule(rule_id: str) -> RuleMetadata | None:
    """Return curated metadata for ``rule_id`` or ``None`` for unknown rules."""

    try:
        return LINT_RULES[LintRule(rule_id)]
    except ValueError:
        return None


def enabled_lint_rules() -> dict[str, str]:
    """Return the ESLint ``rules`` block for every enabled rule.

    Returns:
        dict[str, str]: Rule id to ESLint level (``"error"`` or ``"warn"``).
    """

    return {
        rule.value: "error" if metadata.severity is Severity.ERROR else "warn"
        for rule, metadata in LINT_RULES.items()
        if metadata.enabled
    }


def split_rule_id(rule_id: str) -> tuple[str, str]:
    """Split an ESLint rule id into ``(plugin, rule)``.

    ``@scope/rule`` yields plugin ``@scope``; ``@scope/pkg/rule`` yields
    plugin ``@scope/pkg``. Core rules without a slash belong to the
    ``eslint`` plugin.
    """

    match = _RULE_ID_PATTERN.match(rule_id)
    if match is None:
        return DEFAULT_ESLINT_PLUGIN, rule_id
    return match.group(1), match.group(2)


__all__ = [
    "CATEGORY_DEAD_CODE",
    "CATEGORY_OTHER",
    "DEAD_CODE_ISSUES",
    "DEFAULT_ESLINT_PLUGIN",
    "DeadCodeIssue",
    "KNIP_PLUGIN",
    "LINT_RULES",
    "LintRule",
    "RuleMetadata",
    "enabled_lint_rules",
    "lookup_lint_rule",
    "split_rule_id",
]
