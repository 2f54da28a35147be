"""Sample employee sheet: seed data, schema description and the setup routine."""

from __future__ import annotations

import logging

from src.sheets.client import SheetsClient, TableSourceError
from src.table.layout import Table

logger = logging.getLogger(__name__)

SAMPLE_ROWS: Table = [
    ["Id", "Name", "Department", "Salary", "HireDate"],
    ["1", "Alice Johnson", "Engineering", "95000", "2022-01-15"],
    ["2", "Bob Smith", "Sales", "82000", "2021-11-30"],
    ["3", "Charlie Brown", "Engineering", "110000", "2020-05-20"],
    ["4", "Diana Prince", "Sales", "78000", "2022-08-01"],
    ["5", "Eve Adams", "HR", "65000", "2023-02-10"],
]

CLEAR_RANGE = "A:Z"


def sheet_schema(sheet_name: str = "Employees") -> str:
    """Describe the sheet for the query-description model call."""

    return f"""Google Sheet Structure:
Sheet Name: {sheet_name}
Columns:
- A: Id (INTEGER) - Employee ID number
- B: Name (TEXT) - Employee full name
- C: Department (TEXT) - Department (Engineering, Sales, HR)
- D: Salary (INTEGER) - Annual salary in USD
- E: HireDate (TEXT) - Date hired (YYYY-MM-DD format)

Sample Data Available:
- Departments: Engineering, Sales, HR
- Salary ranges from $65,000 to $110,000
- Hire dates from 2020 to 2023
- 5 employees total in the dataset

Supported Query Types:
- Filter by department (e.g., 'Who are the engineers?')
- Filter by salary (e.g., 'Who earns more than 90000?')
- Calculate averages (e.g., 'What is the average salary in Sales?')
- Filter by hire date (e.g., 'Who was hired in 2022?')
- General employee information queries
"""


def _resolve_sheet(client: SheetsClient, sheet_name: str) -> str:
    """Return the sheet to populate: the requested one, newly created, or the first existing one."""

    titles = client.sheet_titles()
    if sheet_name in titles:
        logger.info("using existing sheet=%s", sheet_name)
        return sheet_name

    try:
        client.add_sheet(sheet_name)
    except TableSourceError as exc:
        logger.warning("could not create sheet=%s reason=%s", sheet_name, exc)
        if not titles:
            raise TableSourceError("No sheets found in the spreadsheet") from exc
        logger.info("falling back to first sheet=%s", titles[0])
        return titles[0]

    logger.info("created sheet=%s", sheet_name)
    return sheet_name


def populate_sample_sheet(client: SheetsClient, sheet_name: str, rows: Table | None = None) -> str:
    """Make sure a sheet exists and overwrite it with the sample employee table.

    Returns the title of the sheet actually populated.

    Raises:
        TableSourceError: If the spreadsheet cannot be read or written.
    """

    actual = _resolve_sheet(client, sheet_name)
    client.clear(f"{actual}!{CLEAR_RANGE}")
    client.write_rows(f"{actual}!A1", rows if rows is not None else SAMPLE_ROWS)
    if actual != sheet_name:
        logger.info("using sheet=%s instead of requested=%s", actual, sheet_name)
    return actual


def setup_sample_sheet(client: SheetsClient, sheet_name: str, rows: Table | None = None) -> str:
    """Startup variant of `populate_sample_sheet` that never fails.

    If setup fails, the failure is logged and the requested `sheet_name` is returned so the chat
    can still try to read it.
    """

    try:
        return populate_sample_sheet(client, sheet_name, rows)
    except TableSourceError as exc:
        logger.error("sample sheet setup failed sheet=%s reason=%s", sheet_name, exc)
        return sheet_name
