"""Chat turn orchestration.

One turn: model describes the question -> rows are fetched -> rules classify -> rows are filtered ->
filtered rows are rendered as TSV -> model answers from that text.

Table-source and model failures propagate as `TableSourceError` / `LLMError` so callers can tell
"could not reach the data" apart from "no data".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from time import monotonic
from typing import Literal, Protocol

from src.intent.rules import classify
from src.intent.schema import Intent
from src.llm.prompts import CompletionModel, describe_query, final_answer
from src.sheets.client import SheetTarget
from src.table.filter import filter_rows
from src.table.layout import DEFAULT_LAYOUT, Table, TableLayout
from src.table.render import render_tsv

logger = logging.getLogger(__name__)

ChatStatus = Literal["retrieved", "answered", "no_data"]


class TableSource(Protocol):
    def get_rows(self, range_spec: str) -> Table: ...


@dataclass(frozen=True)
class ChatResult:
    """Outcome of a chat turn (or of its retrieval half)."""

    status: ChatStatus
    description: str
    question: str = ""
    intent: Intent | None = None
    table_text: str = ""
    answer: str | None = None
    matched_rows: int = 0


class ChatPipeline:
    """Answer questions about one sheet using the rules engine and a language model."""

    def __init__(
            self,
            *,
            source: TableSource,
            model: CompletionModel,
            target: SheetTarget,
            schema: str,
            layout: TableLayout = DEFAULT_LAYOUT,
    ) -> None:
        self.source = source
        self.model = model
        self.target = target
        self.schema = schema
        self.layout = layout

    def retrieve(self, question: str) -> ChatResult:
        """Describe, fetch, classify and filter; stops before the answering model call.

        Returns a `retrieved` result carrying the rendered rows, or `no_data` if the sheet is empty.

        Raises:
            TableSourceError: If the sheet cannot be read.
            LLMError: If the description call fails.
        """

        description = describe_query(self.model, self.schema, question)

        rows = self.source.get_rows(self.target.a1())
        if not rows:
            logger.info("no data range=%s", self.target.a1())
            return ChatResult(status="no_data", description=description, question=question)

        intent = classify(question, description, layout=self.layout)
        filtered = filter_rows(rows, intent, self.layout)
        table_text = render_tsv(filtered)
        if not table_text.strip():
            logger.info("blank sheet range=%s", self.target.a1())
            return ChatResult(status="no_data", description=description, question=question, intent=intent)

        logger.info("retrieved intent=%s rows=%d matched=%d", intent.kind, len(rows) - 1, len(filtered) - 1)
        return ChatResult(
            status="retrieved",
            description=description,
            question=question,
            intent=intent,
            table_text=table_text,
            matched_rows=len(filtered) - 1,
        )

    def answer(self, retrieved: ChatResult) -> ChatResult:
        """Ask the model to answer from the retrieved rows. Non-`retrieved` results pass through.

        Raises:
            LLMError: If the answer call fails.
        """

        if retrieved.status != "retrieved":
            return retrieved
        answer = final_answer(self.model, retrieved.question, retrieved.table_text)
        return replace(retrieved, status="answered", answer=answer)

    def ask(self, question: str) -> ChatResult:
        """Run one full chat turn for `question`.

        Raises:
            TableSourceError: If the sheet cannot be read.
            LLMError: If either model call fails.
        """

        started = monotonic()
        result = self.answer(self.retrieve(question))
        latency_ms = int((monotonic() - started) * 1000)
        logger.info("handled status=%s latency_ms=%d", result.status, latency_ms)
        return result
