"""Exit codes returned by the ``importgraph`` command line."""

from __future__ import annotations

# SPDX-License-Identifier: MIT

EXIT_CODES: dict[str, int] = {
    "success": 0,
    "invalid_arguments": 64,
    "io_failure": 71,
    "internal_error": 1,
    "interrupted": 130,
}
