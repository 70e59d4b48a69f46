# SPDX-License-Identifier: MIT
"""Shared fixtures for the importgraph test-suite."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Callable, Iterator, Mapping

import pytest

SAMPLE_TREE: Mapping[str, str] = {
    "main.ts": 'import { start } from "./src/app";\nimport express from "express";\n',
    "src/app.ts": (
        "import config from './config.js';\n"
        "import * as widgets from './widgets';\n"
        "export function start() {}\n"
    ),
    "src/config.js": "export default {};\n",
    "src/widgets/index.ts": 'import type { Config } from "../config.js";\n',
    "src/widgets/README.md": "not a source file\n",
    "node_modules/express/index.js": "module.exports = {};\n",
}


@pytest.fixture
def write_tree() -> Callable[[Path, Mapping[str, str]], Path]:
    def _write(root: Path, files: Mapping[str, str]) -> Path:
        for relative, content in files.items():
            target = root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return root

    return _write


@pytest.fixture
def sample_tree(tmp_path: Path, write_tree: Callable[[Path, Mapping[str, str]], Path]) -> Path:
    return write_tree(tmp_path / "project", SAMPLE_TREE)


def _git(root: Path, *args: str) -> None:
    subprocess.run(
        ["git", *args],
        cwd=root,
        check=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )


@pytest.fixture
def git_repo(sample_tree: Path) -> Path:
    """The sample tree as a git work tree with everything but ``untracked.ts`` staged."""

    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    _git(sample_tree, "init", "-q")
    _git(sample_tree, "add", ".")
    (sample_tree / "src" / "untracked.ts").write_text("import x from './app';\n", encoding="utf-8")
    return sample_tree


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
