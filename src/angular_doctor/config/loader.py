# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate and parse project configuration."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from ..constants import CONFIG_FILENAME, PACKAGE_JSON, PACKAGE_JSON_CONFIG_KEY
from ..core.errors import ConfigError
from ..core.logging import warn
from ..discovery.manifest import read_package_json
from .models import AngularDoctorConfig

LOGGER = logging.getLogger(__name__)


def read_config_file(path: Path) -> AngularDoctorConfig:
    """Parse a dedicated configuration file.

    Args:
        path: Location of ``angular-doctor.config.json``.

    Returns:
        AngularDoctorConfig: Validated configuration.

    Raises:
        ConfigError: If the file is unreadable, not a JSON object, or has
            fields of the wrong type.
    """

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"{path.name} must be a JSON object, ignoring.")
    try:
        return AngularDoctorConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid {path.name}: {exc.error_count()} invalid field(s), ignoring.") from exc


def load_config(directory: Path) -> AngularDoctorConfig | None:
    """Return the configuration that applies to ``directory``.

    A dedicated config file wins over the ``angularDoctor`` key of
    ``package.json``. A malformed config file is reported as a warning and
    treated as absent; it never aborts a scan.

    Args:
        directory: Project directory.

    Returns:
        AngularDoctorConfig | None: Configuration, or ``None`` when none applies.
    """

    config_file = directory / CONFIG_FILENAME
    if config_file.is_file():
        try:
            return read_config_file(config_file)
        except ConfigError as exc:
            warn(f"Warning: {exc}", stderr=True)
            return None

    manifest_path = directory / PACKAGE_JSON
    if not manifest_path.is_file():
        return None
    embedded = read_package_json(manifest_path).get(PACKAGE_JSON_CONFIG_KEY)
    if not isinstance(embedded, dict):
        return None
    try:
        return AngularDoctorConfig.model_validate(embedded)
    except ValidationError as exc:
        LOGGER.debug("ignoring invalid %s key in %s: %s", PACKAGE_JSON_CONFIG_KEY, manifest_path, exc)
        return None


__all__ = ["load_config", "read_config_file"]
