# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .. import __version__
from ..constants import TOOL_NAME
from ..core.errors import AngularDoctorError
from ..core.logging import blank_line, configure_debug_logging, fail, info
from .command import run_scans
from .options import (
    DEAD_CODE_OPTION,
    DEBUG_OPTION,
    DIFF_BASE_OPTION,
    DIFF_OPTION,
    DIRECTORY_ARGUMENT,
    FAST_OPTION,
    LINT_OPTION,
    PROJECT_OPTION,
    REPORT_OPTION,
    REPORT_PATH_OPTION,
    SCORE_OPTION,
    VERBOSE_OPTION,
    YES_OPTION,
    build_scan_cli_options,
)

app = typer.Typer(
    name=TOOL_NAME,
    help="Diagnose Angular codebase health.",
    add_completion=False,
    no_args_is_help=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


VERSION_OPTION = Annotated[
    bool,
    typer.Option(
        "--version",
        "-v",
        help="Display the version number and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
]


@app.command()
def doctor(
    directory: DIRECTORY_ARGUMENT = Path("."),
    lint: LINT_OPTION = None,
    dead_code: DEAD_CODE_OPTION = None,
    verbose: VERBOSE_OPTION = None,
    fast: FAST_OPTION = None,
    score: SCORE_OPTION = False,
    report: REPORT_OPTION = False,
    report_path: REPORT_PATH_OPTION = None,
    yes: YES_OPTION = False,
    project: PROJECT_OPTION = None,
    diff: DIFF_OPTION = None,
    diff_base: DIFF_BASE_OPTION = None,
    debug: DEBUG_OPTION = False,
    version: VERSION_OPTION = False,
) -> None:
    """Scan an Angular project and report its health score."""

    del version
    options = build_scan_cli_options(
        directory=directory,
        lint=lint,
        dead_code=dead_code,
        verbose=verbose,
        fast=fast,
        score=score,
        report=report,
        report_path=report_path,
        yes=yes,
        project=project,
        diff=diff,
        diff_base=diff_base,
        debug=debug,
    )
    if options.debug:
        configure_debug_logging()

    try:
        run_scans(options)
    except AngularDoctorError as exc:
        fail(str(exc), use_emoji=False)
        raise typer.Exit(code=1) from exc
    except KeyboardInterrupt as exc:
        blank_line()
        info("Cancelled.", use_emoji=False)
        raise typer.Exit(code=0) from exc


def main() -> None:
    """Run the Typer application."""

    app(prog_name=TOOL_NAME)


__all__ = ["app", "doctor", "main"]
