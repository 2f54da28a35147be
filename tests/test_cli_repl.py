"""Tests for the console chat loop."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import replace

import pytest

from src.chat.pipeline import ChatResult
from src.cli import repl as repl_module
from src.cli.repl import SETUP_HINTS, main, repl, run_turn
from src.llm.client import LLMError
from src.sheets.client import SheetsAuthError, SheetsConnectionError


class _FakePipeline:
    def __init__(
            self,
            result: ChatResult | None = None,
            error: Exception | None = None,
            answer_error: Exception | None = None,
    ) -> None:
        self.result = result
        self.error = error
        self.answer_error = answer_error
        self.questions: list[str] = []
        self.calls: list[str] = []

    def retrieve(self, question: str) -> ChatResult:
        self.questions.append(question)
        self.calls.append("retrieve")
        if self.error is not None:
            raise self.error
        assert self.result is not None
        return self.result

    def answer(self, retrieved: ChatResult) -> ChatResult:
        self.calls.append("answer")
        if self.answer_error is not None:
            raise self.answer_error
        return replace(retrieved, status="answered", answer="Alice.")


def _collect() -> tuple[list[str], Callable[[str], None]]:
    lines: list[str] = []
    return lines, lines.append


_RETRIEVED = ChatResult(status="retrieved", description="engineers", table_text="Id\n1\n")


def test_run_turn_prints_all_stages() -> None:
    lines, out = _collect()

    run_turn(_FakePipeline(_RETRIEVED), "Who are the engineers?", out)

    text = "\n".join(lines)
    assert "Query Logic: engineers" in text
    assert "Sheet Result:\nId\n1\n" in text
    assert "Answer: Alice." in text


def test_sheet_result_is_printed_before_the_answer_call() -> None:
    lines: list[str] = []
    pipeline = _FakePipeline(_RETRIEVED)

    def out(line: str) -> None:
        lines.append(f"{len(pipeline.calls)}:{line}")

    run_turn(pipeline, "q", out)

    # Only `retrieve` had run when the first two stages were printed.
    assert lines[0] == "1:\nQuery Logic: engineers"
    assert lines[1] == "1:Sheet Result:\nId\n1\n"
    assert lines[2].startswith("2:")


def test_answer_failure_keeps_the_retrieved_output() -> None:
    lines, out = _collect()

    run_turn(_FakePipeline(_RETRIEVED, answer_error=LLMError("timed out")), "q", out)

    text = "\n".join(lines)
    assert "Query Logic: engineers" in text
    assert "Sheet Result:\nId\n1\n" in text
    assert "language model is unavailable" in text
    assert "Answer:" not in text


def test_run_turn_no_data() -> None:
    lines, out = _collect()
    pipeline = _FakePipeline(ChatResult(status="no_data", description="d"))

    run_turn(pipeline, "q", out)

    assert any("couldn't find any data" in line for line in lines)
    assert not any("Answer:" in line for line in lines)
    assert pipeline.calls == ["retrieve"]


def test_run_turn_auth_error_prints_hints() -> None:
    lines, out = _collect()

    run_turn(_FakePipeline(error=SheetsAuthError("denied")), "q", out)

    assert any("Could not access the sheet" in line for line in lines)
    assert SETUP_HINTS in lines


def test_run_turn_source_and_model_errors_are_distinct() -> None:
    source_lines, source_out = _collect()
    model_lines, model_out = _collect()

    run_turn(_FakePipeline(error=SheetsConnectionError("down")), "q", source_out)
    run_turn(_FakePipeline(error=LLMError("down")), "q", model_out)

    assert any("Could not reach the data source" in line for line in source_lines)
    assert any("language model is unavailable" in line for line in model_lines)


def _reader(*inputs: str):
    it: Iterator[str] = iter(inputs)

    def read(_prompt: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read


def test_repl_stops_on_exit() -> None:
    pipeline = _FakePipeline(ChatResult(status="no_data", description="d"))
    _lines, out = _collect()

    repl(pipeline, _reader("Who are the engineers?", "EXIT", "never asked"), out)

    assert pipeline.questions == ["Who are the engineers?"]


def test_repl_stops_on_end_of_input() -> None:
    pipeline = _FakePipeline(ChatResult(status="no_data", description="d"))
    _lines, out = _collect()

    repl(pipeline, _reader("a", "b"), out)

    assert pipeline.questions == ["a", "b"]


def test_unexpected_errors_do_not_end_the_loop() -> None:
    pipeline = _FakePipeline(error=TimeoutError("timed out"))
    lines, out = _collect()

    repl(pipeline, _reader("a", "b"), out)

    assert pipeline.questions == ["a", "b"]
    assert sum("An error occurred: timed out" in line for line in lines) == 2


def test_main_leaves_log_level_to_the_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    levels: list[str | None] = []

    def _no_settings() -> None:
        raise RuntimeError("Invalid environment configuration")

    monkeypatch.setattr(repl_module, "configure_logging", levels.append)
    monkeypatch.setattr(repl_module, "load_settings", _no_settings)

    assert main([]) == 1
    assert main(["--log-level", "DEBUG"]) == 1
    assert levels == [None, "DEBUG"]
