# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the knip dead-code adapter."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from subprocess import CompletedProcess

import pytest

from angular_doctor.analyzers.knip import (
    KnipAnalyzer,
    KnipConfigOverride,
    extract_failed_plugin,
    parse_knip_report,
)
from angular_doctor.core.errors import AnalyzerError

PLUGIN_FAILURE = "Error loading /repo/karma.config.js\nCannot find module 'karma'"


class SequenceRunner:
    """Return queued results and record every command."""

    def __init__(self, results: list[CompletedProcess[str]]) -> None:
        self.results = results
        self.commands: list[list[str]] = []

    async def __call__(self, args, options):
        self.commands.append(list(args))
        index = min(len(self.commands) - 1, len(self.results) - 1)
        return self.results[index]


def _ok(payload: dict[str, object]) -> CompletedProcess[str]:
    return CompletedProcess([], 0, stdout=json.dumps(payload), stderr="")


def _plugin_failure() -> CompletedProcess[str]:
    return CompletedProcess([], 2, stdout="", stderr=PLUGIN_FAILURE)


@pytest.fixture
def knip_project(tmp_path: Path, write_json) -> Path:
    write_json(tmp_path / "package.json", {"name": "shop"})
    (tmp_path / "node_modules").mkdir()
    return tmp_path


def test_report_translation(tmp_path: Path) -> None:
    payload = {
        "files": ["src/orphan.ts"],
        "issues": [
            {
                "file": "src/util.ts",
                "exports": [{"name": "helper", "line": 4, "col": 14}],
                "types": [{"name": "Shape", "line": 9, "col": 13}],
                "duplicates": [[{"name": "Foo"}, {"name": "default"}]],
            },
            {"file": "src/stale.ts", "files": [{"name": "src/stale.ts"}]},
        ],
    }

    diagnostics = parse_knip_report(payload, tmp_path, tmp_path)

    assert [(d.rule, d.file_path, d.message) for d in diagnostics] == [
        ("files", "src/orphan.ts", "Unused file"),
        ("files", "src/stale.ts", "Unused file"),
        ("exports", "src/util.ts", "Unused export: helper"),
        ("types", "src/util.ts", "Unused type: Shape"),
        ("duplicates", "src/util.ts", "Duplicate export: Foo, default"),
    ]
    assert all(d.plugin == "knip" and d.category == "Dead Code" for d in diagnostics)
    assert (diagnostics[2].line, diagnostics[2].column) == (4, 14)


def test_findings_in_sibling_projects_are_dropped(tmp_path: Path) -> None:
    scan_root = tmp_path / "app"
    sibling = tmp_path / "app-2"
    scan_root.mkdir()
    sibling.mkdir()
    payload = {
        "files": ["app-2/orphan.ts", "app/orphan.ts", "README.ts"],
        "issues": [{"file": "app-2/x.ts", "exports": [{"name": "leak"}]}],
    }

    diagnostics = parse_knip_report(payload, tmp_path, scan_root)

    assert [d.file_path for d in diagnostics] == ["orphan.ts"]


def test_non_object_report_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(AnalyzerError):
        parse_knip_report([], tmp_path, tmp_path)


def test_extract_failed_plugin() -> None:
    assert extract_failed_plugin(PLUGIN_FAILURE) == "karma"
    assert extract_failed_plugin("Error loading /x/vite-node.config.ts") == "vite-node"
    assert extract_failed_plugin("Something else") is None


def test_missing_node_modules_skips_knip(tmp_path: Path) -> None:
    runner = SequenceRunner([_ok({})])
    assert asyncio.run(KnipAnalyzer(runner=runner)(tmp_path)) == []
    assert runner.commands == []


def test_plugin_failure_disables_plugin_and_retries(knip_project: Path) -> None:
    runner = SequenceRunner([_plugin_failure(), _ok({"files": ["src/orphan.ts"], "issues": []})])

    diagnostics = asyncio.run(KnipAnalyzer(runner=runner)(knip_project))

    assert [d.file_path for d in diagnostics] == ["src/orphan.ts"]
    assert len(runner.commands) == 2
    assert "--config" not in runner.commands[0]
    config_path = Path(runner.commands[1][runner.commands[1].index("--config") + 1])
    assert json.loads(config_path.read_text(encoding="utf-8")) == {"karma": False}


def test_retries_stop_at_the_ceiling(knip_project: Path) -> None:
    runner = SequenceRunner([_plugin_failure()])

    with pytest.raises(AnalyzerError, match="karma"):
        asyncio.run(KnipAnalyzer(runner=runner)(knip_project))

    assert len(runner.commands) == 6


def test_custom_retry_ceiling(knip_project: Path) -> None:
    runner = SequenceRunner([_plugin_failure()])
    with pytest.raises(AnalyzerError):
        asyncio.run(KnipAnalyzer(runner=runner, max_retries=1)(knip_project))
    assert len(runner.commands) == 2


def test_unrelated_failure_is_not_retried(knip_project: Path) -> None:
    runner = SequenceRunner([CompletedProcess([], 2, stdout="", stderr="TypeError: cannot read")])
    with pytest.raises(AnalyzerError, match="TypeError"):
        asyncio.run(KnipAnalyzer(runner=runner)(knip_project))
    assert len(runner.commands) == 1


def test_unmergeable_user_config_is_not_overridden(knip_project: Path) -> None:
    (knip_project / "knip.ts").write_text("export default {};\n", encoding="utf-8")
    runner = SequenceRunner([_plugin_failure()])

    with pytest.raises(AnalyzerError):
        asyncio.run(KnipAnalyzer(runner=runner)(knip_project))

    assert len(runner.commands) == 1


def test_angular_workspace_gets_entry_points(tmp_path: Path, write_json) -> None:
    write_json(tmp_path / "angular.json", {"projects": {}})
    write_json(tmp_path / "knip.json", {"ignore": ["dist/**"]})

    override = KnipConfigOverride.for_directory(tmp_path)

    assert override.render() == {"ignore": ["dist/**"], "entry": ["**/*.module.ts", "**/*.routes.ts"]}


def test_configured_entry_points_are_kept(tmp_path: Path, write_json) -> None:
    write_json(tmp_path / "angular.json", {"projects": {}})
    write_json(tmp_path / "package.json", {"knip": {"entry": ["src/main.ts"]}})

    override = KnipConfigOverride.for_directory(tmp_path)

    assert override.can_override is True
    assert override.render() is None


def test_knip_runs_from_the_angular_workspace_root(tmp_path: Path, write_json) -> None:
    write_json(tmp_path / "angular.json", {"projects": {}})
    project = tmp_path / "projects" / "admin"
    (project / "node_modules").mkdir(parents=True)
    seen_cwd: list[Path] = []

    async def runner(args, options):
        seen_cwd.append(options.cwd)
        return _ok({"files": ["projects/admin/src/dead.ts", "projects/store/src/dead.ts"], "issues": []})

    diagnostics = asyncio.run(KnipAnalyzer(runner=runner)(project))

    assert seen_cwd == [tmp_path.resolve()]
    assert [d.file_path for d in diagnostics] == ["src/dead.ts"]
