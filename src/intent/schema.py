"""Intent schema (Pydantic models).

This schema is the contract between the rules classifier and the row filter. Every intent kind
carries exactly the parameters its row predicate needs; anything else is rejected at construction.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, model_validator


class IntentKind(StrEnum):
    """Supported query intent categories, in classification order."""

    department = "department"
    salary_above = "salary_above"
    salary_below = "salary_below"
    average_salary = "average_salary"
    roster = "roster"
    hire_date = "hire_date"
    all_rows = "all_rows"


class Query(BaseModel):
    """A user question plus the model-derived query description."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    question: str = ""
    description: str = ""


class Intent(BaseModel):
    """A fully validated query intent."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    kind: IntentKind
    department: str | None = None
    threshold: int | None = None
    year: str | None = None

    @model_validator(mode="after")
    def validate_parameters(self) -> Intent:
        """Enforce which parameters each intent kind may carry."""

        if self.kind == IntentKind.department:
            if not self.department:
                raise ValueError("department is required for kind=department")
        elif self.kind != IntentKind.average_salary and self.department is not None:
            raise ValueError(f"department is not allowed for kind={self.kind}")

        if self.kind in {IntentKind.salary_above, IntentKind.salary_below}:
            if self.threshold is None:
                raise ValueError(f"threshold is required for kind={self.kind}")
        elif self.threshold is not None:
            raise ValueError(f"threshold is not allowed for kind={self.kind}")

        if self.year is not None and self.kind != IntentKind.hire_date:
            raise ValueError("year is only allowed for kind=hire_date")

        if self.department is not None and self.department != self.department.lower():
            raise ValueError("department keyword must be lower case")

        return self
