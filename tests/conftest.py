"""Pytest configuration and shared fixtures.

The repository uses a flat `src/` layout without an installed package. This conftest ensures tests
can import from the `src.*` namespace when running `pytest` locally.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure `import src...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from src.sheets.sample import SAMPLE_ROWS  # noqa: E402
from src.table.layout import Table  # noqa: E402


@pytest.fixture()
def employees() -> Table:
    """A fresh copy of the sample employee table (header + 5 rows)."""

    return [list(row) for row in SAMPLE_ROWS]
