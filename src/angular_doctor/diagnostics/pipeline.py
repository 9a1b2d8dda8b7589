# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Composable diagnostic collection pipeline."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from ..analyzers.base import AnalyzerSuite
from ..config.models import AngularDoctorConfig
from ..config.resolution import ScanOptions
from ..constants import SKIPPED_CHECK_DEAD_CODE, SKIPPED_CHECK_LINT
from ..core.logging import silenced_output
from ..core.models import Diagnostic, ProjectInfo
from ..discovery.git import filter_source_files
from .filtering import filter_ignored_diagnostics

LOGGER = logging.getLogger(__name__)


class ProgressReporter(Protocol):
    """Receive step notifications while analyzers run."""

    def start(self, message: str) -> None:
        """Announce that a step began."""
        ...

    def succeed(self, message: str) -> None:
        """Announce that the running step finished."""
        ...

    def fail(self, message: str, error: Exception) -> None:
        """Announce that the running step failed with ``error``."""
        ...


class NullProgress:
    """Progress reporter that prints nothing."""

    def start(self, message: str) -> None:
        """Ignore ``message``."""

    def succeed(self, message: str) -> None:
        """Ignore ``message``."""

    def fail(self, message: str, error: Exception) -> None:
        """Ignore ``message`` and ``error``."""


def compute_include_paths(include_paths: Sequence[str]) -> tuple[str, ...] | None:
    """Return the lint include list for ``include_paths``.

    Args:
        include_paths: Changed files selected for diff mode.

    Returns:
        tuple[str, ...] | None: ``None`` (lint the whole project) when no
        paths were given, otherwise the source files among them, possibly
        empty.
    """

    if not include_paths:
        return None
    return tuple(filter_source_files(include_paths))


@dataclass(frozen=True, slots=True)
class PipelineRequest:
    """Inputs for one pipeline run."""

    project: ProjectInfo
    options: ScanOptions
    config: AngularDoctorConfig | None = None
    score_only: bool = False
    include_paths: tuple[str, ...] = ()

    @property
    def is_diff_mode(self) -> bool:
        """Return ``True`` when the scan is restricted to changed files."""

        return bool(self.include_paths)


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Filtered diagnostics plus the checks that could not complete."""

    diagnostics: tuple[Diagnostic, ...] = ()
    skipped_checks: tuple[str, ...] = field(default_factory=tuple)


@dataclass(slots=True)
class _CheckOutcome:
    diagnostics: list[Diagnostic] = field(default_factory=list)
    failed: bool = False


class DiagnosticPipeline:
    """Run the analyzers, isolating failures, and filter their findings."""

    def __init__(self, analyzers: AnalyzerSuite, *, progress: ProgressReporter | None = None) -> None:
        """Create a pipeline.

        Args:
            analyzers: Lint and dead-code analyzers to run.
            progress: Step reporter used in reporting mode.
        """

        self._analyzers = analyzers
        self._progress: ProgressReporter = progress or NullProgress()

    async def _isolated(
        self,
        check: Callable[[], Awaitable[list[Diagnostic]]],
        *,
        progress: ProgressReporter,
        running: str,
        done: str,
        failed: str,
    ) -> _CheckOutcome:
        progress.start(running)
        try:
            diagnostics = await check()
        except Exception as exc:  # noqa: BLE001 - any analyzer failure becomes a skipped check
            LOGGER.debug("%s", failed, exc_info=exc)
            progress.fail(failed, exc)
            return _CheckOutcome(failed=True)
        progress.succeed(done)
        return _CheckOutcome(diagnostics=diagnostics)

    async def _run_lint(self, request: PipelineRequest, progress: ProgressReporter) -> _CheckOutcome:
        if not request.options.lint:
            return _CheckOutcome()
        include_paths = compute_include_paths(request.include_paths)
        return await self._isolated(
            lambda: self._analyzers.lint(
                request.project.root_directory,
                has_typescript=request.project.has_typescript,
                include_paths=include_paths,
                use_type_aware=request.options.use_type_aware_lint,
            ),
            progress=progress,
            running="Running lint checks...",
            done="Running lint checks.",
            failed="Lint checks failed (non-fatal, skipping).",
        )

    async def _run_dead_code(self, request: PipelineRequest, progress: ProgressReporter) -> _CheckOutcome:
        # Unused-symbol analysis is unsound on a partial file set.
        if not request.options.dead_code or request.is_diff_mode:
            return _CheckOutcome()
        return await self._isolated(
            lambda: self._analyzers.dead_code(request.project.root_directory),
            progress=progress,
            running="Detecting dead code...",
            done="Detecting dead code.",
            failed="Dead code detection failed (non-fatal, skipping).",
        )

    async def run(self, request: PipelineRequest) -> PipelineResult:
        """Collect, merge and filter diagnostics for ``request``.

        In score-only mode both analyzers start concurrently with all console
        output discarded; otherwise they run one after the other so progress
        is reported in a stable order.

        Args:
            request: Pipeline inputs.

        Returns:
            PipelineResult: Lint diagnostics followed by dead-code diagnostics,
            minus ignored ones, and the names of failed checks.
        """

        if request.score_only:
            quiet = NullProgress()
            with silenced_output():
                lint, dead_code = await asyncio.gather(
                    self._run_lint(request, quiet),
                    self._run_dead_code(request, quiet),
                )
        else:
            lint = await self._run_lint(request, self._progress)
            dead_code = await self._run_dead_code(request, self._progress)

        skipped: list[str] = []
        if lint.failed:
            skipped.append(SKIPPED_CHECK_LINT)
        if dead_code.failed:
            skipped.append(SKIPPED_CHECK_DEAD_CODE)

        combined = [*lint.diagnostics, *dead_code.diagnostics]
        return PipelineResult(
            diagnostics=tuple(filter_ignored_diagnostics(combined, request.config)),
            skipped_checks=tuple(skipped),
        )


__all__ = [
    "DiagnosticPipeline",
    "NullProgress",
    "PipelineRequest",
    "PipelineResult",
    "ProgressReporter",
    "compute_include_paths",
]
