# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for per-project angular_doctor settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


class IgnoreConfig(BaseModel):
    """Rule keys and file globs whose diagnostics are discarded."""

    model_config = ConfigDict(frozen=True)

    rules: list[StrictStr] = Field(default_factory=list)
    files: list[StrictStr] = Field(default_factory=list)


class AngularDoctorConfig(BaseModel):
    """Settings read from ``angular-doctor.config.json`` or ``package.json``.

    Every toggle is optional; ``None`` means the project did not configure it
    and the CLI default applies. ``diff`` is either a boolean or the name of
    a base branch.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ignore: IgnoreConfig = Field(default_factory=IgnoreConfig)
    lint: StrictBool | None = None
    dead_code: StrictBool | None = Field(default=None, alias="deadCode")
    verbose: StrictBool | None = None
    diff: StrictBool | StrictStr | None = None
    fast: StrictBool | None = None


__all__ = ["AngularDoctorConfig", "IgnoreConfig"]
