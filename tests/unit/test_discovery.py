from __future__ import annotations

# SPDX-License-Identifier: MIT

import subprocess
from pathlib import Path
from typing import Any

import pytest

from importgraph import discovery
from importgraph.discovery import find_source_files, join_root, list_git_files, walk_files
from importgraph.errors import InvalidRootError
from importgraph.settings import GraphSettings

EXPECTED_RELATIVE = ["main.ts", "src/app.ts", "src/config.js", "src/widgets/index.ts"]


def _relative(root: Path, paths: list[str]) -> list[str]:
    prefix = root.as_posix() + "/"
    return [path[len(prefix) :] if path.startswith(prefix) else path for path in paths]


def test_join_root_normalises_dot_root() -> None:
    assert join_root(".", "src/app.ts") == "src/app.ts"
    assert join_root("./pkg/", "./a/../b.ts") == "pkg/b.ts"
    assert join_root("/repo", "lib/x.js") == "/repo/lib/x.js"


def test_walk_files_is_sorted_and_honours_exclusions(sample_tree: Path) -> None:
    files = walk_files(sample_tree, exclude_dirs={"node_modules"}, extensions=(".ts", ".js"))

    assert _relative(sample_tree, files) == EXPECTED_RELATIVE


def test_walk_files_without_extension_filter_lists_everything(sample_tree: Path) -> None:
    files = _relative(sample_tree, walk_files(sample_tree))

    assert "src/widgets/README.md" in files
    assert "node_modules/express/index.js" in files


def test_find_source_files_without_git(sample_tree: Path) -> None:
    settings = GraphSettings(use_git=False)
    (sample_tree / "src" / "extra.ts").write_text("", encoding="utf-8")

    files = _relative(sample_tree, find_source_files(sample_tree, settings))

    assert files == ["main.ts", "src/app.ts", "src/config.js", "src/extra.ts", "src/widgets/index.ts"]


def test_find_source_files_filters_untracked_files(git_repo: Path) -> None:
    files = find_source_files(git_repo, GraphSettings())

    assert _relative(git_repo, files) == EXPECTED_RELATIVE


def test_list_git_files_joins_paths_onto_root(git_repo: Path) -> None:
    files = list_git_files(git_repo)

    assert files is not None
    assert (git_repo / "main.ts").as_posix() in files
    assert (git_repo / "src" / "untracked.ts").as_posix() not in files


def test_list_git_files_returns_none_when_git_is_missing(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    def _missing(*args: Any, **kwargs: Any) -> None:
        raise FileNotFoundError("git")

    monkeypatch.setattr(discovery.subprocess, "run", _missing)

    assert list_git_files(tmp_path) is None


def test_list_git_files_returns_none_outside_a_work_tree(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    def _failing(command: list[str], **kwargs: Any) -> None:
        raise subprocess.CalledProcessError(128, command, stderr="fatal: not a git repository")

    monkeypatch.setattr(discovery.subprocess, "run", _failing)

    assert list_git_files(tmp_path) is None


def test_find_source_files_falls_back_to_walk(
    monkeypatch: pytest.MonkeyPatch, sample_tree: Path
) -> None:
    monkeypatch.setattr(discovery, "list_git_files", lambda root: None)

    files = find_source_files(sample_tree, GraphSettings())

    assert _relative(sample_tree, files) == EXPECTED_RELATIVE


def test_find_source_files_rejects_missing_root(tmp_path: Path) -> None:
    with pytest.raises(InvalidRootError):
        find_source_files(tmp_path / "missing", GraphSettings())


def test_list_git_files_decodes_names_as_utf8_with_surrogates(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    seen: dict[str, Any] = {}
    raw_name = b"src/caf\xe9.ts".decode("utf-8", "surrogateescape")

    def _fake_run(command: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        seen.update(kwargs)
        return subprocess.CompletedProcess(command, 0, stdout=f"main.ts\0{raw_name}\0", stderr="")

    monkeypatch.setattr(discovery.subprocess, "run", _fake_run)

    files = list_git_files(tmp_path)

    assert seen["encoding"] == "utf-8"
    assert seen["errors"] == "surrogateescape"
    assert files == [join_root(tmp_path, "main.ts"), join_root(tmp_path, raw_name)]
