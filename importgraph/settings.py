"""Configuration for import graph generation."""

from __future__ import annotations

# SPDX-License-Identifier: MIT

import re
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DOT_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class GraphSettings(BaseSettings):
    """Options controlling discovery, extraction and rendering.

    Every field can be supplied through an ``IMPORTGRAPH_`` prefixed
    environment variable; sequence fields expect a JSON array, for example
    ``IMPORTGRAPH_EXTENSIONS='[".ts", ".tsx"]'``.
    """

    model_config = SettingsConfigDict(env_prefix="IMPORTGRAPH_", extra="ignore")

    extensions: tuple[str, ...] = Field(
        (".ts", ".js"),
        min_length=1,
        description="File extensions treated as source files.",
    )
    use_git: bool = Field(
        True,
        description="Restrict the graph to files listed by 'git ls-files' when git is available.",
    )
    exclude_dirs: tuple[str, ...] = Field(
        (".git", "node_modules"),
        description="Directory names never descended into while walking the tree.",
    )
    resolve_extensions: bool = Field(
        True,
        description=(
            "Resolve extension-less specifiers such as './util' to './util.ts' or "
            "'./util/index.ts' when the literal path is not a tracked file."
        ),
    )
    include_reexports: bool = Field(
        False,
        description="Treat 'export ... from' statements as imports.",
    )
    encoding: str = Field("utf-8", min_length=1, description="Encoding used to read source files.")
    graph_name: str = Field("TypeScriptImports", description="Identifier of the emitted digraph.")
    rankdir: Literal["LR", "RL", "TB", "BT"] = "LR"
    cluster_color: str = Field("blue", min_length=1)

    @field_validator("extensions")
    @classmethod
    def _normalise_extensions(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        normalised: list[str] = []
        for raw in value:
            ext = raw.strip().lower()
            if not ext or ext == ".":
                raise ValueError("extensions must not be empty")
            if not ext.startswith("."):
                ext = f".{ext}"
            if ext not in normalised:
                normalised.append(ext)
        return tuple(normalised)

    @field_validator("graph_name")
    @classmethod
    def _validate_graph_name(cls, value: str) -> str:
        if not _DOT_IDENTIFIER.match(value):
            raise ValueError(f"graph_name must be a DOT identifier, got {value!r}")
        return value


__all__ = ["GraphSettings"]
