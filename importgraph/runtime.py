"""Runtime helpers shared by the ``importgraph`` command line."""
from __future__ import annotations

# SPDX-License-Identifier: MIT

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class UTCFormatter(logging.Formatter):
    """Format timestamps using ISO-8601 in UTC regardless of host settings."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.isoformat(timespec="seconds")


@dataclass(frozen=True)
class LoadedEnvironment:
    """Representation of key/value pairs sourced from ``.env`` style files."""

    variables: Mapping[str, str]
    source: Path


def configure_logging(level: int) -> None:
    """Initialise the logging stack with UTC ISO-8601 timestamps.

    Records go to stderr so that graph text written to stdout stays clean.
    """

    handler = logging.StreamHandler()
    handler.setFormatter(UTCFormatter(_LOG_FORMAT))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def parse_env_file(path: Path) -> LoadedEnvironment | None:
    """Parse a dotenv style file, returning ``None`` when it does not exist."""

    if not path.exists():
        return None

    variables: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if not key:
            continue
        variables[key] = value

    return LoadedEnvironment(variables=variables, source=path)


def apply_environment(overrides: Mapping[str, str], *, override: bool = False) -> None:
    """Update :data:`os.environ`; variables already set win unless *override*."""

    for key, value in overrides.items():
        if not override and key in os.environ:
            continue
        os.environ[key] = value


__all__ = [
    "LoadedEnvironment",
    "UTCFormatter",
    "apply_environment",
    "configure_logging",
    "parse_env_file",
]
