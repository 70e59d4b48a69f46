"""Print the import dependency graph of a JavaScript/TypeScript tree as DOT."""
from __future__ import annotations

# SPDX-License-Identifier: MIT

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Sequence

from pydantic import ValidationError
from pydantic_settings import SettingsError

from .discovery import find_source_files
from .dot import render_dot
from .errors import EnvironmentFileError, ImportGraphError, OutputError
from .exit_codes import EXIT_CODES
from .graph import DependencyGraph, build_graph
from .report import render_json
from .runtime import apply_environment, configure_logging, parse_env_file
from .settings import GraphSettings

LOGGER = logging.getLogger(__name__)
DEFAULT_ENV_PATHS = (Path(".importgraph.env"), Path(".env"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="importgraph", description=__doc__)
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Directory to scan (defaults to the current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (can be provided multiple times).",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="count",
        default=0,
        help="Decrease log verbosity (can be provided multiple times).",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Explicit path to an environment file. Defaults to .importgraph.env then .env.",
    )
    parser.add_argument(
        "--format",
        choices=("dot", "json"),
        default="dot",
        help="Output format (default: dot).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the graph to this file instead of stdout.",
    )
    parser.add_argument(
        "--ext",
        dest="extensions",
        action="append",
        default=None,
        metavar="EXT",
        help="Source file extension to include (repeatable, default: .ts and .js).",
    )
    parser.add_argument(
        "--no-git",
        dest="use_git",
        action="store_false",
        default=None,
        help="Do not filter files through 'git ls-files'.",
    )
    parser.add_argument(
        "--no-resolve",
        dest="resolve_extensions",
        action="store_false",
        default=None,
        help="Only link imports whose specifier names a tracked file exactly.",
    )
    parser.add_argument(
        "--include-reexports",
        dest="include_reexports",
        action="store_true",
        default=None,
        help="Also draw edges for 'export ... from' statements.",
    )
    parser.add_argument("--rankdir", choices=("LR", "RL", "TB", "BT"), default=None)
    parser.add_argument("--graph-name", dest="graph_name", default=None)
    return parser


def _determine_log_level(verbose: int, quiet: int) -> int:
    base_level = logging.INFO
    level = base_level - (verbose * 10) + (quiet * 10)
    return max(logging.DEBUG, min(logging.CRITICAL, level))


def _load_environment(env_file: Path | None) -> None:
    candidates = [env_file] if env_file else list(DEFAULT_ENV_PATHS)
    for candidate in candidates:
        if candidate is None:
            continue
        try:
            env = parse_env_file(candidate)
        except (OSError, UnicodeDecodeError) as exc:
            raise EnvironmentFileError(f"Unable to read environment file {candidate}: {exc}") from exc
        if env:
            apply_environment(env.variables)
            LOGGER.debug("Loaded environment overrides from %s", candidate)
            break
    else:
        if env_file is not None:
            LOGGER.warning("Environment file %s does not exist", env_file)


def _settings_from_args(args: argparse.Namespace) -> GraphSettings:
    overrides: dict[str, Any] = {}
    for name in (
        "extensions",
        "use_git",
        "resolve_extensions",
        "include_reexports",
        "rankdir",
        "graph_name",
    ):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = tuple(value) if isinstance(value, list) else value
    return GraphSettings(**overrides)


def _render(graph: DependencyGraph, settings: GraphSettings, output_format: str) -> str:
    if output_format == "json":
        return render_json(graph) + "\n"
    return "\n".join(render_dot(graph, settings)) + "\n"


def _detach_stdout() -> None:
    try:
        fileno = sys.stdout.fileno()
    except (AttributeError, OSError, ValueError):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, fileno)
    finally:
        os.close(devnull)


def _write(text: str, destination: Path | None) -> None:
    if destination is None:
        try:
            sys.stdout.write(text)
            sys.stdout.flush()
        except BrokenPipeError:
            # Reader went away; point stdout at devnull so the exit flush stays quiet.
            _detach_stdout()
            LOGGER.debug("stdout closed before the graph was fully written")
        return
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise OutputError(f"Unable to write {destination}: {exc}") from exc
    LOGGER.info("Wrote graph to %s", destination)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    configure_logging(_determine_log_level(args.verbose, args.quiet))

    try:
        _load_environment(args.env_file)
        settings = _settings_from_args(args)
        files = find_source_files(args.root, settings)
        LOGGER.info("Found %d source file(s) below %s", len(files), args.root)
        graph = build_graph(files, settings)
        _write(_render(graph, settings, args.format), args.output)
    except (ValidationError, SettingsError) as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return EXIT_CODES["invalid_arguments"]
    except ImportGraphError as exc:
        LOGGER.error("%s", exc)
        return exc.exit_code
    except KeyboardInterrupt:  # pragma: no cover - interactive interruption
        return EXIT_CODES["interrupted"]
    return EXIT_CODES["success"]


if __name__ == "__main__":  # pragma: no cover - exercised by CLI
    raise SystemExit(main())
