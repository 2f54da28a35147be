"""Rules-based intent classifier.

The classifier inspects the lower-cased question and model description and picks exactly one
intent. Rules are an ordered tuple evaluated top to bottom; the first rule whose `matches` holds
wins, and the final rule always matches.

Precedence matters: "What is the average salary for engineer roles?" is a department query, not an
average-salary query, because the department rule is evaluated first.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from src.intent.dictionaries import (
    AVERAGE_TERM,
    GREATER_DESCRIPTION_PHRASES,
    GREATER_QUESTION_PHRASES,
    HIRE_DESCRIPTION_PHRASES,
    HIRE_QUESTION_PHRASES,
    LESS_DESCRIPTION_PHRASES,
    LESS_QUESTION_PHRASES,
    ROSTER_DESCRIPTION_PHRASES,
    ROSTER_QUESTION_PHRASES,
    SALARY_TERM,
    contains_any,
    detect_average_scope,
    detect_department,
    detect_hire_year,
)
from src.intent.normalize import FoldedQuery
from src.intent.numbers import first_integer
from src.intent.schema import Intent, IntentKind, Query
from src.table.layout import DEFAULT_LAYOUT, TableLayout


@dataclass(frozen=True)
class Rule:
    """One classification rule: a trigger over the query and a parameter extractor."""

    kind: IntentKind
    matches: Callable[[FoldedQuery], bool]
    extract: Callable[[FoldedQuery, TableLayout], Intent]


def _mentions_department(query: FoldedQuery) -> bool:
    return detect_department(query) is not None


def _department_intent(query: FoldedQuery, _layout: TableLayout) -> Intent:
    term = detect_department(query)
    assert term is not None
    return Intent(kind=IntentKind.department, department=term.cell_keyword)


def _asks_salary_above(query: FoldedQuery) -> bool:
    return SALARY_TERM in query.question and (
            contains_any(query.question, GREATER_QUESTION_PHRASES)
            or contains_any(query.description, GREATER_DESCRIPTION_PHRASES)
    )


def _salary_above_intent(query: FoldedQuery, layout: TableLayout) -> Intent:
    threshold = first_integer(query.question)
    if threshold is None:
        threshold = layout.default_salary_above
    return Intent(kind=IntentKind.salary_above, threshold=threshold)


def _asks_salary_below(query: FoldedQuery) -> bool:
    return SALARY_TERM in query.question and (
            contains_any(query.question, LESS_QUESTION_PHRASES)
            or contains_any(query.description, LESS_DESCRIPTION_PHRASES)
    )


def _salary_below_intent(query: FoldedQuery, layout: TableLayout) -> Intent:
    threshold = first_integer(query.question)
    if threshold is None:
        threshold = layout.default_salary_below
    return Intent(kind=IntentKind.salary_below, threshold=threshold)


def _asks_average_salary(query: FoldedQuery) -> bool:
    return query.either_contains(AVERAGE_TERM) and SALARY_TERM in query.question


def _average_salary_intent(query: FoldedQuery, _layout: TableLayout) -> Intent:
    return Intent(kind=IntentKind.average_salary, department=detect_average_scope(query))


def _asks_roster(query: FoldedQuery) -> bool:
    return contains_any(query.question, ROSTER_QUESTION_PHRASES) or contains_any(
        query.description, ROSTER_DESCRIPTION_PHRASES
    )


def _asks_hire_date(query: FoldedQuery) -> bool:
    return contains_any(query.question, HIRE_QUESTION_PHRASES) or contains_any(
        query.description, HIRE_DESCRIPTION_PHRASES
    )


def _hire_date_intent(query: FoldedQuery, _layout: TableLayout) -> Intent:
    return Intent(kind=IntentKind.hire_date, year=detect_hire_year(query))


def _always(_query: FoldedQuery) -> bool:
    return True


def _plain(kind: IntentKind) -> Callable[[FoldedQuery, TableLayout], Intent]:
    def extract(_query: FoldedQuery, _layout: TableLayout) -> Intent:
        return Intent(kind=kind)

    return extract


DEPARTMENT_RULE = Rule(IntentKind.department, _mentions_department, _department_intent)
SALARY_ABOVE_RULE = Rule(IntentKind.salary_above, _asks_salary_above, _salary_above_intent)
SALARY_BELOW_RULE = Rule(IntentKind.salary_below, _asks_salary_below, _salary_below_intent)
AVERAGE_SALARY_RULE = Rule(IntentKind.average_salary, _asks_average_salary, _average_salary_intent)
ROSTER_RULE = Rule(IntentKind.roster, _asks_roster, _plain(IntentKind.roster))
HIRE_DATE_RULE = Rule(IntentKind.hire_date, _asks_hire_date, _hire_date_intent)
CATCH_ALL_RULE = Rule(IntentKind.all_rows, _always, _plain(IntentKind.all_rows))

RULES: tuple[Rule, ...] = (
    DEPARTMENT_RULE,
    SALARY_ABOVE_RULE,
    SALARY_BELOW_RULE,
    AVERAGE_SALARY_RULE,
    ROSTER_RULE,
    HIRE_DATE_RULE,
    CATCH_ALL_RULE,
)


def classify(
        question: str | None,
        description: str | None,
        *,
        layout: TableLayout = DEFAULT_LAYOUT,
        rules: tuple[Rule, ...] = RULES,
) -> Intent:
    """Classify a question and its model description into exactly one intent.

    Never raises for any text input; unrecognized queries fall through to `all_rows`.
    """

    folded = FoldedQuery.of(question, description)
    for rule in rules:
        if rule.matches(folded):
            return rule.extract(folded, layout)
    return Intent(kind=IntentKind.all_rows)


def classify_query(query: Query, *, layout: TableLayout = DEFAULT_LAYOUT) -> Intent:
    """Classify a `Query` model (convenience wrapper)."""

    return classify(query.question, query.description, layout=layout)
