"""Machine-readable JSON rendering of an import graph."""

from __future__ import annotations

# SPDX-License-Identifier: MIT

import json

from .graph import DependencyGraph


def render_json(graph: DependencyGraph) -> str:
    structured = {
        "files": list(graph.files),
        "directories": {directory: list(files) for directory, files in graph.directories.items()},
        "edges": [
            {"source": edge.source, "target": edge.target, "label": edge.label}
            for edge in graph.edges
        ],
    }
    return json.dumps(structured, indent=2)


__all__ = ["render_json"]
