"""Regex based extraction of JavaScript/TypeScript import statements.

Statements are matched across line breaks, so multi-line named import lists
are handled. The parser is deliberately textual: imports inside comments or
string literals are reported as well.
"""

from __future__ import annotations

# SPDX-License-Identifier: MIT

import posixpath
import re
from dataclasses import dataclass
from typing import Collection, Iterable, Literal

# Two characters, a backslash and "n": a line break inside a DOT label.
LABEL_SEPARATOR = "\\n"

_IMPORT_PATTERN = re.compile(
    r"""
    \bimport\s+
    (?:type\s+)?
    (?:
        (?P<default>[\w$]+)(?:\s+as\s+(?P<alias>[\w$]+))?
        (?:\s*,\s*)?
    )?
    (?:
        \{(?P<named>[^{}]*)\}
        |\*\s*as\s+(?P<namespace>[\w$]+)
    )?
    \s*(?:from\s*)?
    ["'](?P<path>[^"']+)["']
    """,
    re.VERBOSE,
)

_REEXPORT_PATTERN = re.compile(
    r"""
    \bexport\s+
    (?:type\s+)?
    (?:
        \{(?P<named>[^{}]*)\}
        |\*(?:\s*as\s+(?P<namespace>[\w$]+))?
    )
    \s*from\s*
    ["'](?P<path>[^"']+)["']
    """,
    re.VERBOSE,
)


@dataclass(frozen=True, slots=True)
class ImportSpec:
    """A single import statement: the imported items and the module specifier."""

    items: str
    path: str
    kind: Literal["import", "reexport"] = "import"


def _split_named(named: str) -> list[str]:
    return [item.strip() for item in named.split(",") if item.strip()]


def _import_items(match: re.Match[str]) -> str:
    parts: list[str] = []
    default = match.group("default")
    if default:
        alias = match.group("alias")
        parts.append(f"{default} as {alias}" if alias else default)
    named = match.group("named")
    if named is not None:
        parts.extend(_split_named(named))
    namespace = match.group("namespace")
    if namespace:
        parts.append(f"* as {namespace}")
    return LABEL_SEPARATOR.join(parts)


def _reexport_items(match: re.Match[str]) -> str:
    named = match.group("named")
    if named is not None:
        return LABEL_SEPARATOR.join(_split_named(named))
    namespace = match.group("namespace")
    return f"* as {namespace}" if namespace else "*"


def extract_imports(content: str, *, include_reexports: bool = False) -> list[ImportSpec]:
    """Return the import statements found in *content* in source order."""

    found: list[tuple[int, ImportSpec]] = [
        (match.start(), ImportSpec(_import_items(match), match.group("path")))
        for match in _IMPORT_PATTERN.finditer(content)
    ]
    if include_reexports:
        found.extend(
            (match.start(), ImportSpec(_reexport_items(match), match.group("path"), "reexport"))
            for match in _REEXPORT_PATTERN.finditer(content)
        )
        found.sort(key=lambda entry: entry[0])
    return [spec for _, spec in found]


def normalize_import_path(base_path: str, import_path: str) -> str:
    """Resolve relative specifiers against the importing file's directory.

    Bare specifiers (package names, absolute URLs) are returned unchanged.
    """

    if import_path.startswith("."):
        return posixpath.normpath(posixpath.join(posixpath.dirname(base_path), import_path))
    return import_path


def _candidates(target: str, extensions: Iterable[str]) -> Iterable[str]:
    yield target
    for ext in extensions:
        yield f"{target}{ext}"
    for ext in extensions:
        yield posixpath.join(target, f"index{ext}")


def resolve_import_target(
    target: str,
    tracked: Collection[str],
    extensions: Iterable[str] = (),
) -> str | None:
    """Return the tracked file *target* refers to, or ``None`` when untracked.

    With no *extensions* only an exact match is accepted.
    """

    for candidate in _candidates(target, tuple(extensions)):
        if candidate in tracked:
            return candidate
    return None


__all__ = [
    "ImportSpec",
    "LABEL_SEPARATOR",
    "extract_imports",
    "normalize_import_path",
    "resolve_import_target",
]
