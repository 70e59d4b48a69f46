# SPDX-License-Identifier: MIT
"""Pytest environment setup.

Ensure the repository root is importable so tests can resolve the in-tree
``importgraph`` package without installing it.
"""

from __future__ import annotations

import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
