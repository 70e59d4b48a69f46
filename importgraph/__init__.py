"""Import dependency graphs for JavaScript and TypeScript source trees.

The package lists the files of a directory tree (through ``git ls-files``
when possible), extracts their ``import`` statements with regular
expressions and renders the resulting graph in the Graphviz DOT language.
The command line lives in :mod:`importgraph.cli`; the pieces below are
exported for programmatic use.
"""

# SPDX-License-Identifier: MIT

from .discovery import find_source_files
from .dot import render_dot
from .extract import ImportSpec, extract_imports, normalize_import_path
from .graph import DependencyGraph, ImportEdge, build_graph
from .settings import GraphSettings

__all__ = [
    "DependencyGraph",
    "GraphSettings",
    "ImportEdge",
    "ImportSpec",
    "build_graph",
    "extract_imports",
    "find_source_files",
    "normalize_import_path",
    "render_dot",
]
