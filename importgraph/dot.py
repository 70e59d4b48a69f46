"""Render a :class:`~importgraph.graph.DependencyGraph` as Graphviz DOT."""

from __future__ import annotations

# SPDX-License-Identifier: MIT

import posixpath
import re
from typing import Iterator

from .graph import DependencyGraph, ImportEdge
from .settings import GraphSettings

_NON_WORD = re.compile(r"\W", re.ASCII)


def escape_double_quotes(value: str) -> str:
    return value.replace('"', '\\"')


def cluster_name(directory: str) -> str:
    """Subgraph identifier; Graphviz draws a box around ``cluster_`` subgraphs."""

    return f"cluster_{_NON_WORD.sub('_', directory)}"


def node_label(path: str) -> str:
    """File name without directory and without anything after the first dot."""

    name = posixpath.basename(path)
    return name.split(".")[0] or name


def _edge_line(edge: ImportEdge) -> str:
    line = f'  "{escape_double_quotes(edge.source)}" -> "{escape_double_quotes(edge.target)}"'
    if edge.label:
        line += f' [label="{escape_double_quotes(edge.label)}"]'
    return line + ";"


def render_dot(graph: DependencyGraph, settings: GraphSettings | None = None) -> Iterator[str]:
    """Yield the DOT document line by line.

    Subgraphs (one per directory) come first, then every edge.
    """

    settings = settings or GraphSettings()
    color = escape_double_quotes(settings.cluster_color)

    yield f"strict digraph {settings.graph_name} {{"
    yield "  node [shape=box];"
    yield "  edge [fontsize=8];"
    yield f'  rankdir="{settings.rankdir}";'

    for directory, files in graph.directories.items():
        yield f"  subgraph {cluster_name(directory)} {{"
        yield f'    label = "{escape_double_quotes(directory)}";'
        yield f'    color = "{color}"; fontcolor="{color}";'
        for path in files:
            yield f'    "{escape_double_quotes(path)}"[label="{escape_double_quotes(node_label(path))}"];'
        yield "  }"

    for edge in graph.edges:
        yield _edge_line(edge)

    yield "}"


__all__ = ["cluster_name", "escape_double_quotes", "node_label", "render_dot"]
