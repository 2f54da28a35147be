"""Row predicate evaluator.

Converts a validated `Intent` into a per-row predicate and applies it to a table. The header row is
always kept first; data rows keep their order. Short rows and unparseable cells never raise, they
simply do not match.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from src.intent.numbers import cell_has_year, parse_int_cell
from src.intent.schema import Intent, IntentKind
from src.table.layout import DEFAULT_LAYOUT, Cell, Row, Table, TableLayout

RowPredicate = Callable[[Sequence[Cell]], bool]


def _cell(row: Sequence[Cell], index: int) -> Cell:
    if len(row) <= index:
        return None
    return row[index]


def _department_predicate(keyword: str, layout: TableLayout) -> RowPredicate:
    def predicate(row: Sequence[Cell]) -> bool:
        value = _cell(row, layout.department_column)
        return value is not None and keyword in str(value).lower()

    return predicate


def _salary_predicate(threshold: int, *, above: bool, layout: TableLayout) -> RowPredicate:
    def predicate(row: Sequence[Cell]) -> bool:
        salary = parse_int_cell(_cell(row, layout.salary_column))
        if salary is None:
            return False
        return salary > threshold if above else salary < threshold

    return predicate


def _hire_year_predicate(year: str, layout: TableLayout) -> RowPredicate:
    def predicate(row: Sequence[Cell]) -> bool:
        return cell_has_year(_cell(row, layout.hire_date_column), year)

    return predicate


def _include_all(_row: Sequence[Cell]) -> bool:
    return True


def build_predicate(intent: Intent, layout: TableLayout = DEFAULT_LAYOUT) -> RowPredicate:
    """Build the row predicate implied by `intent`."""

    if intent.kind == IntentKind.department:
        assert intent.department is not None
        return _department_predicate(intent.department, layout)

    if intent.kind == IntentKind.salary_above:
        assert intent.threshold is not None
        return _salary_predicate(intent.threshold, above=True, layout=layout)

    if intent.kind == IntentKind.salary_below:
        assert intent.threshold is not None
        return _salary_predicate(intent.threshold, above=False, layout=layout)

    if intent.kind == IntentKind.average_salary and intent.department is not None:
        return _department_predicate(intent.department, layout)

    if intent.kind == IntentKind.hire_date and intent.year is not None:
        return _hire_year_predicate(intent.year, layout)

    # roster, all_rows, and the unscoped average/hire-date variants keep every row.
    return _include_all


def filter_rows(table: Sequence[Row], intent: Intent, layout: TableLayout = DEFAULT_LAYOUT) -> Table:
    """Return the header plus every data row matching `intent`, in original order.

    An empty input table yields an empty list; a header-only result means nothing matched.
    """

    if not table:
        return []

    predicate = build_predicate(intent, layout)
    result: Table = [table[0]]
    result.extend(row for row in table[1:] if predicate(row))
    return result
