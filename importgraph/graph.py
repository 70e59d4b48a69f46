"""Build the in-memory dependency graph from a list of source files."""

from __future__ import annotations

# SPDX-License-Identifier: MIT

import logging
import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from .extract import extract_imports, normalize_import_path, resolve_import_target
from .settings import GraphSettings

LOGGER = logging.getLogger(__name__)

Reader = Callable[[str, str], str]


@dataclass(frozen=True, slots=True)
class ImportEdge:
    source: str
    target: str
    label: str = ""


@dataclass(slots=True)
class DependencyGraph:
    """Files grouped by directory plus the edges between tracked files."""

    files: list[str] = field(default_factory=list)
    directories: dict[str, list[str]] = field(default_factory=dict)
    edges: list[ImportEdge] = field(default_factory=list)

    def add_file(self, path: str) -> None:
        self.files.append(path)
        self.directories.setdefault(directory_of(path), []).append(path)


def directory_of(path: str) -> str:
    """Directory component of *path*; top-level files live in ``"."``."""

    return posixpath.dirname(path) or "."


def read_source(path: str, encoding: str) -> str:
    return Path(path).read_text(encoding=encoding)


def _load(path: str, reader: Reader, encoding: str) -> str | None:
    try:
        return reader(path, encoding)
    except UnicodeDecodeError as exc:
        LOGGER.warning("Skipping imports of %s: cannot decode as %s (%s)", path, encoding, exc.reason)
    except OSError as exc:
        LOGGER.warning("Skipping imports of %s: %s", path, exc.strerror or exc)
    return None


def build_graph(
    files: Sequence[str],
    settings: GraphSettings,
    reader: Reader = read_source,
) -> DependencyGraph:
    """Read every file in *files* and collect the edges between them.

    Imports whose target is not one of *files* (packages, untracked or
    missing files) are dropped.
    """

    graph = DependencyGraph()
    for path in files:
        graph.add_file(path)

    tracked = set(files)
    extensions = settings.extensions if settings.resolve_extensions else ()
    for directory, members in graph.directories.items():
        LOGGER.debug("Scanning %d file(s) in %s", len(members), directory)
        for path in members:
            content = _load(path, reader, settings.encoding)
            if content is None:
                continue
            for spec in extract_imports(content, include_reexports=settings.include_reexports):
                candidate = normalize_import_path(path, spec.path)
                target = resolve_import_target(candidate, tracked, extensions)
                if target is None:
                    LOGGER.debug("%s: ignoring untracked import %r", path, spec.path)
                    continue
                graph.edges.append(ImportEdge(path, target, spec.items))

    LOGGER.info(
        "Collected %d edge(s) across %d file(s) in %d director(ies)",
        len(graph.edges),
        len(graph.files),
        len(graph.directories),
    )
    return graph


__all__ = ["DependencyGraph", "ImportEdge", "build_graph", "directory_of", "read_source"]
