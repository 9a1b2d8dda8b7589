# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for diff-mode change detection."""

from __future__ import annotations

from pathlib import Path
from subprocess import CompletedProcess

from angular_doctor.discovery.git import GitClient, count_source_files, filter_source_files, get_diff_info


def _fake_git(responses: dict[str, tuple[int, str]]) -> GitClient:
    def runner(args, cwd):
        returncode, stdout = responses.get(args[0], (1, ""))
        return CompletedProcess(["git", *args], returncode, stdout=stdout, stderr="")

    return GitClient(runner=runner)


def test_not_a_repository_yields_none(tmp_path: Path) -> None:
    assert get_diff_info(tmp_path, git=_fake_git({})) is None


def test_missing_git_binary_degrades_to_none(tmp_path: Path) -> None:
    def runner(args, cwd):
        raise FileNotFoundError("git")

    client = GitClient(runner=runner)
    assert client.current_branch(tmp_path) is None
    assert client.list_files(tmp_path) is None
    assert count_source_files(tmp_path, git=client) == 0


def test_status_parsing_handles_renames_and_quotes(tmp_path: Path) -> None:
    client = _fake_git({"status": (0, ' M src/a.ts\nR  src/old.ts -> src/new.ts\n?? "src/with space.ts"\n')})
    assert client.uncommitted_files(tmp_path) == ["src/a.ts", "src/new.ts", "src/with space.ts"]


def test_filter_source_files_keeps_typescript_only() -> None:
    files = ["a.ts", "b.html", "c.tsx", "d.spec.ts", "e.ts.orig", "f.scss"]
    assert filter_source_files(files) == ["a.ts", "d.spec.ts"]


def test_clean_main_branch_has_no_diff(git_repo) -> None:
    repo, _git = git_repo
    assert get_diff_info(repo) is None


def test_uncommitted_changes_are_selected(git_repo) -> None:
    repo, _git = git_repo
    (repo / "src" / "main.ts").write_text("export const main = 2;\n", encoding="utf-8")
    (repo / "src" / "new.ts").write_text("export const added = 1;\n", encoding="utf-8")

    diff = get_diff_info(repo)

    assert diff is not None
    assert diff.is_current_changes is True
    assert diff.current_branch == diff.base_branch == "main"
    assert sorted(diff.changed_files) == ["src/main.ts", "src/new.ts"]


def test_feature_branch_is_compared_with_main(git_repo) -> None:
    repo, git = git_repo
    git("checkout", "-q", "-b", "feature/cart")
    (repo / "src" / "cart.ts").write_text("export const cart = [];\n", encoding="utf-8")
    git("add", ".")
    git("commit", "-q", "-m", "cart")

    diff = get_diff_info(repo)

    assert diff is not None
    assert diff.is_current_changes is False
    assert diff.current_branch == "feature/cart"
    assert diff.base_branch == "main"
    assert diff.changed_files == ("src/cart.ts",)


def test_uncommitted_changes_beat_branch_candidates(git_repo) -> None:
    repo, git = git_repo
    git("checkout", "-q", "-b", "feature/cart")
    (repo / "src" / "cart.ts").write_text("export const cart = [];\n", encoding="utf-8")
    git("add", ".")
    git("commit", "-q", "-m", "cart")
    (repo / "src" / "wip.ts").write_text("export const wip = 1;\n", encoding="utf-8")

    diff = get_diff_info(repo)

    assert diff is not None
    assert diff.is_current_changes is True
    assert diff.changed_files == ("src/wip.ts",)


def test_explicit_base_branch(git_repo) -> None:
    repo, git = git_repo
    git("branch", "release")
    (repo / "src" / "fix.ts").write_text("export const fix = 1;\n", encoding="utf-8")
    git("add", ".")
    git("commit", "-q", "-m", "fix")

    diff = get_diff_info(repo, "release")

    assert diff is not None
    assert diff.base_branch == "release"
    assert diff.changed_files == ("src/fix.ts",)


def test_missing_explicit_base_yields_none(git_repo) -> None:
    repo, _git = git_repo
    (repo / "src" / "main.ts").write_text("changed\n", encoding="utf-8")
    assert get_diff_info(repo, "does-not-exist") is None


def test_changes_are_relative_to_the_project_directory(git_repo) -> None:
    repo, git = git_repo
    app = repo / "apps" / "web"
    app.mkdir(parents=True)
    (app / "index.ts").write_text("export {};\n", encoding="utf-8")
    (repo / "src" / "main.ts").write_text("changed\n", encoding="utf-8")

    diff = get_diff_info(app)

    assert diff is not None
    assert diff.changed_files == ("index.ts",)


def test_count_source_files_includes_untracked(git_repo) -> None:
    repo, _git = git_repo
    (repo / "src" / "extra.ts").write_text("export {};\n", encoding="utf-8")
    (repo / "src" / "styles.css").write_text("", encoding="utf-8")
    assert count_source_files(repo) == 2
