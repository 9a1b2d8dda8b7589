# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for reading ``package.json`` manifests."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Final, TypeAlias

from ..constants import PACKAGE_JSON
from ..core.models import JsonValue

PackageManifest: TypeAlias = dict[str, JsonValue]

ANGULAR_CORE_PACKAGE: Final[str] = "@angular/core"

# Later sections override earlier ones when a package is declared twice.
_DEPENDENCY_SECTIONS: Final[tuple[str, ...]] = ("peerDependencies", "dependencies", "devDependencies")


def read_package_json(path: Path) -> PackageManifest:
    """Return the parsed manifest at ``path``.

    Missing, unreadable or non-object manifests are treated as empty.

    Args:
        path: Location of the ``package.json`` file.

    Returns:
        PackageManifest: Parsed manifest or an empty mapping.
    """

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return payload if isinstance(payload, dict) else {}


def read_manifest_in(directory: Path) -> PackageManifest:
    """Return the manifest stored directly inside ``directory``.

    Args:
        directory: Directory expected to contain ``package.json``.

    Returns:
        PackageManifest: Parsed manifest or an empty mapping.
    """

    return read_package_json(directory / PACKAGE_JSON)


def collect_all_dependencies(manifest: Mapping[str, JsonValue]) -> dict[str, str]:
    """Merge peer, regular and dev dependencies into a single mapping.

    Args:
        manifest: Parsed ``package.json`` payload.

    Returns:
        dict[str, str]: Package name to version range.
    """

    merged: dict[str, str] = {}
    for section in _DEPENDENCY_SECTIONS:
        entries = manifest.get(section)
        if not isinstance(entries, dict):
            continue
        for name, version in entries.items():
            if isinstance(version, str):
                merged[name] = version
    return merged


def has_angular_dependency(manifest: Mapping[str, JsonValue]) -> bool:
    """Return ``True`` when ``manifest`` declares ``@angular/core`` anywhere."""

    return bool(collect_all_dependencies(manifest).get(ANGULAR_CORE_PACKAGE))


def manifest_name(manifest: Mapping[str, JsonValue]) -> str | None:
    """Return the ``name`` field of ``manifest`` when it is a non-empty string."""

    name = manifest.get("name")
    return name if isinstance(name, str) and name else None


__all__ = [
    "ANGULAR_CORE_PACKAGE",
    "PackageManifest",
    "collect_all_dependencies",
    "has_angular_dependency",
    "manifest_name",
    "read_manifest_in",
    "read_package_json",
]
