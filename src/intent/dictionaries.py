"""Keyword dictionaries for the rules classifier.

Matching is plain lower-case substring containment. The tables are ordered: when several entries
match, the first one wins.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.intent.normalize import FoldedQuery


@dataclass(frozen=True)
class DepartmentTerm:
    """How a department is recognized in a query and matched against the Department column."""

    question_term: str
    description_term: str
    cell_keyword: str

    def matches(self, query: FoldedQuery) -> bool:
        return self.question_term in query.question or self.description_term in query.description


DEPARTMENT_TERMS: tuple[DepartmentTerm, ...] = (
    # "engineer" in the question also covers "engineers" and "engineering".
    DepartmentTerm(question_term="engineer", description_term="engineering", cell_keyword="engineering"),
    DepartmentTerm(question_term="sales", description_term="sales", cell_keyword="sales"),
    DepartmentTerm(question_term="hr", description_term="hr", cell_keyword="hr"),
)

# Departments an average-salary question can be scoped to.
AVERAGE_SCOPE_DEPARTMENTS: tuple[str, ...] = ("sales", "engineering")

HIRE_YEARS: tuple[str, ...] = ("2022", "2023")

SALARY_TERM = "salary"
AVERAGE_TERM = "average"

GREATER_QUESTION_PHRASES: tuple[str, ...] = ("more than", ">")
GREATER_DESCRIPTION_PHRASES: tuple[str, ...] = ("greater",)

LESS_QUESTION_PHRASES: tuple[str, ...] = ("less than", "<")
LESS_DESCRIPTION_PHRASES: tuple[str, ...] = ("less",)

ROSTER_QUESTION_PHRASES: tuple[str, ...] = ("who",)
ROSTER_DESCRIPTION_PHRASES: tuple[str, ...] = ("names", "employees")

HIRE_QUESTION_PHRASES: tuple[str, ...] = ("hired", "hire date")
HIRE_DESCRIPTION_PHRASES: tuple[str, ...] = ("date",)


def contains_any(text: str, phrases: tuple[str, ...]) -> bool:
    """Whether `text` contains at least one of `phrases`."""

    return any(phrase in text for phrase in phrases)


def detect_department(query: FoldedQuery) -> DepartmentTerm | None:
    """Return the first department mentioned by the query, if any."""

    for term in DEPARTMENT_TERMS:
        if term.matches(query):
            return term
    return None


def detect_average_scope(query: FoldedQuery) -> str | None:
    """Return the department an average-salary question is restricted to (`None` = all rows)."""

    for department in AVERAGE_SCOPE_DEPARTMENTS:
        if query.either_contains(department):
            return department
    return None


def detect_hire_year(query: FoldedQuery) -> str | None:
    """Return the hire year a query filters on (`None` = no year filter)."""

    for year in HIRE_YEARS:
        if query.either_contains(year):
            return year
    return None
