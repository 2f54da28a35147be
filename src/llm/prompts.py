"""Prompt templates for the two model calls of a chat turn."""

from __future__ import annotations

from functools import cache
from pathlib import Path
from typing import Protocol

DESCRIBE_TEMPERATURE = 0.0
ANSWER_TEMPERATURE = 0.2


class CompletionModel(Protocol):
    def complete(self, prompt: str, *, temperature: float = 0.0) -> str: ...


@cache
def _load_prompt(name: str) -> str:
    prompt_path = Path(__file__).resolve().parent / name
    return prompt_path.read_text(encoding="utf-8")


def describe_query(model: CompletionModel, schema: str, question: str) -> str:
    """Ask the model which rows and conditions the question is about."""

    prompt = _load_prompt("prompt_describe_query_v1.md").format(schema=schema, question=question)
    return model.complete(prompt, temperature=DESCRIBE_TEMPERATURE).strip()


def final_answer(model: CompletionModel, question: str, data: str) -> str:
    """Ask the model to answer the question from the filtered table text only."""

    prompt = _load_prompt("prompt_final_answer_v1.md").format(data=data, question=question)
    return model.complete(prompt, temperature=ANSWER_TEMPERATURE).strip()
