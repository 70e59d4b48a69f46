"""Exceptions raised while building an import graph."""

from __future__ import annotations

# SPDX-License-Identifier: MIT

from .exit_codes import EXIT_CODES


class ImportGraphError(RuntimeError):
    """Base class for failures carrying a deterministic exit code."""

    exit_code = EXIT_CODES["internal_error"]


class InvalidRootError(ImportGraphError):
    exit_code = EXIT_CODES["invalid_arguments"]


class EnvironmentFileError(ImportGraphError):
    exit_code = EXIT_CODES["invalid_arguments"]


class OutputError(ImportGraphError):
    exit_code = EXIT_CODES["io_failure"]


__all__ = ["EnvironmentFileError", "ImportGraphError", "InvalidRootError", "OutputError"]
