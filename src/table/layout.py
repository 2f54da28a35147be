"""Positional layout of the employee table.

The layout is an explicit value passed into classification and filtering; nothing in the engine
reads it from the environment.
"""

from __future__ import annotations

from dataclasses import dataclass

Cell = str | None
Row = list[Cell]
Table = list[Row]


@dataclass(frozen=True)
class TableLayout:
    """Column positions (0-based) and default salary thresholds."""

    department_column: int = 2
    salary_column: int = 3
    hire_date_column: int = 4
    default_salary_above: int = 90_000
    default_salary_below: int = 80_000


DEFAULT_LAYOUT = TableLayout()
