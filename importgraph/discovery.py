"""Locate the source files that make up an import graph."""

from __future__ import annotations

# SPDX-License-Identifier: MIT

import logging
import os
import posixpath
import subprocess
from pathlib import Path
from typing import Collection

from .errors import InvalidRootError
from .settings import GraphSettings

LOGGER = logging.getLogger(__name__)

GIT_LS_FILES = ("git", "ls-files", "-z")


def _as_posix(path: str | os.PathLike[str]) -> str:
    return Path(path).as_posix()


def join_root(root: str | os.PathLike[str], relative: str) -> str:
    """Join *relative* onto *root* the way node identifiers are spelled."""

    return posixpath.normpath(posixpath.join(_as_posix(root), relative))


def list_git_files(root: str | os.PathLike[str]) -> list[str] | None:
    """Return the files git tracks below *root*, or ``None`` if git cannot tell."""

    try:
        result = subprocess.run(
            list(GIT_LS_FILES),
            cwd=os.fspath(root),
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            encoding="utf-8",
            errors="surrogateescape",
        )
    except FileNotFoundError:
        LOGGER.warning("git is not available; falling back to a full directory walk.")
        return None
    except subprocess.CalledProcessError as exc:
        LOGGER.warning(
            "Unable to list git tracked files (%s); falling back to a full directory walk.",
            (exc.stderr or "").strip() or exc,
        )
        return None

    files = [join_root(root, line) for line in result.stdout.split("\0") if line]
    LOGGER.debug("git reports %d tracked file(s) below %s", len(files), root)
    return files


def walk_files(
    root: str | os.PathLike[str],
    exclude_dirs: Collection[str] = (),
    extensions: Collection[str] | None = None,
) -> list[str]:
    """Walk *root* in sorted order, skipping directories named in *exclude_dirs*."""

    excluded = set(exclude_dirs)
    suffixes = tuple(extensions) if extensions is not None else None
    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(name for name in dirnames if name not in excluded)
        for filename in sorted(filenames):
            if suffixes is not None and not filename.lower().endswith(suffixes):
                continue
            files.append(join_root(dirpath, filename))
    return files


def find_source_files(root: str | os.PathLike[str], settings: GraphSettings) -> list[str]:
    """Return tracked source files below *root* in walk order."""

    if not Path(root).is_dir():
        raise InvalidRootError(f"'{root}' is not a directory")

    candidates = walk_files(root, settings.exclude_dirs, settings.extensions)
    if not settings.use_git:
        LOGGER.debug("git filtering disabled; using %d walked file(s)", len(candidates))
        return candidates

    tracked = list_git_files(root)
    if tracked is None:
        return candidates

    tracked_set = set(tracked)
    files = [path for path in candidates if path in tracked_set]
    skipped = len(candidates) - len(files)
    if skipped:
        LOGGER.debug("Ignoring %d untracked source file(s)", skipped)
    return files


__all__ = ["find_source_files", "join_root", "list_git_files", "walk_files"]
