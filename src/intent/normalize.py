"""Text normalization for deterministic intent classification."""

from __future__ import annotations

from dataclasses import dataclass


def normalize_text(text: str | None) -> str:
    """Normalize text for keyword matching.

    Only case is folded. Punctuation and spacing are kept as-is because some rules match symbols
    (`>`, `<`) and multi-word phrases (`more than`, `hire date`) as plain substrings.
    """

    return (text or "").lower()


@dataclass(frozen=True)
class FoldedQuery:
    """Lower-cased view of a (question, description) pair used by the classification rules."""

    question: str
    description: str

    @classmethod
    def of(cls, question: str | None, description: str | None) -> FoldedQuery:
        return cls(question=normalize_text(question), description=normalize_text(description))

    def either_contains(self, term: str) -> bool:
        """Whether the question or the description contains `term`."""

        return term in self.question or term in self.description
