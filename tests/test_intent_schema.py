"""Tests for the Intent Pydantic schema and its per-kind parameter invariants."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.intent.schema import Intent, IntentKind, Query


def test_department_requires_keyword() -> None:
    with pytest.raises(ValueError):
        Intent(kind=IntentKind.department)


def test_department_keyword_must_be_lower_case() -> None:
    with pytest.raises(ValueError):
        Intent(kind=IntentKind.department, department="Sales")


@pytest.mark.parametrize("kind", [IntentKind.salary_above, IntentKind.salary_below])
def test_salary_requires_threshold(kind: IntentKind) -> None:
    with pytest.raises(ValueError):
        Intent(kind=kind)


def test_threshold_forbidden_for_roster() -> None:
    with pytest.raises(ValueError):
        Intent(kind=IntentKind.roster, threshold=10)


def test_year_only_for_hire_date() -> None:
    with pytest.raises(ValueError):
        Intent(kind=IntentKind.all_rows, year="2022")
    assert Intent(kind=IntentKind.hire_date, year="2022").year == "2022"


def test_department_allowed_for_average_scope() -> None:
    assert Intent(kind=IntentKind.average_salary, department="sales").department == "sales"
    with pytest.raises(ValueError):
        Intent(kind=IntentKind.roster, department="sales")


def test_unknown_fields_are_rejected() -> None:
    with pytest.raises(ValidationError):
        Intent.model_validate({"kind": "roster", "limit": 3})


def test_intent_is_immutable() -> None:
    intent = Intent(kind=IntentKind.roster)
    with pytest.raises(ValidationError):
        intent.kind = IntentKind.all_rows  # type: ignore[misc]


def test_query_defaults_to_empty_text() -> None:
    query = Query()
    assert query.question == ""
    assert query.description == ""
