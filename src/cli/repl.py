"""Interactive console chat over the employee sheet."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable

from src.app import create_app
from src.chat.pipeline import ChatPipeline, ChatResult
from src.config.logging import configure_logging
from src.config.settings import load_settings
from src.llm.client import LLMError
from src.sheets.client import SheetsAuthError, TableSourceError

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"

SETUP_HINTS = """Make sure you have:
1. Set LLM_API_KEY (or GEMINI_API_KEY) in the environment or .env
2. Set GOOGLE_SPREADSHEET_ID to the id from the sheet URL
3. Set GOOGLE_CREDENTIALS_FILE to a service account JSON key from Google Cloud Console
   (or GOOGLE_ACCESS_TOKEN to a short-lived OAuth token with the spreadsheets scope)
4. Shared the Google Sheet with the service account email"""

Output = Callable[[str], None]


def _guarded(step: Callable[[], ChatResult], output: Output) -> ChatResult | None:
    """Run one pipeline step, reporting failures to the user instead of raising."""

    try:
        return step()
    except SheetsAuthError as exc:
        output(f"\nCould not access the sheet: {exc}\n")
        output(SETUP_HINTS)
    except TableSourceError as exc:
        output(f"\nCould not reach the data source: {exc}\n")
    except LLMError as exc:
        output(f"\nThe language model is unavailable: {exc}\n")
    except Exception as exc:
        # Console boundary: report and keep the loop alive.
        logger.exception("turn failed")
        output(f"\nAn error occurred: {exc}\n")
    return None


def run_turn(pipeline: ChatPipeline, question: str, output: Output = print) -> None:
    """Answer one question, printing the query logic and sheet rows before the answer call."""

    retrieved = _guarded(lambda: pipeline.retrieve(question), output)
    if retrieved is None:
        return

    output(f"\nQuery Logic: {retrieved.description}")
    if retrieved.status == "no_data":
        output("I couldn't find any data for that query.\n")
        return
    output(f"Sheet Result:\n{retrieved.table_text}")

    answered = _guarded(lambda: pipeline.answer(retrieved), output)
    if answered is not None:
        output(f"\nAnswer: {answered.answer}\n")


def repl(pipeline: ChatPipeline, read: Callable[[str], str] = input, output: Output = print) -> None:
    """Read questions until `exit` (any case) or end of input."""

    while True:
        try:
            question = read("> ")
        except EOFError:
            break
        if question.strip().lower() == EXIT_COMMAND:
            break
        run_turn(pipeline, question, output)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Chat with the employee Google Sheet.")
    parser.add_argument("--no-seed", action="store_true", help="Do not overwrite the sheet with sample data")
    parser.add_argument("--log-level", default=None, help="Defaults to LOG_LEVEL, then INFO")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    try:
        settings = load_settings()
        print("Setting up Google Sheets...")
        app = create_app(settings, seed=False if args.no_seed else None)
    except (RuntimeError, TableSourceError) as exc:
        print(exc)
        print(SETUP_HINTS)
        return 1

    print("Google Sheets Schema:")
    print(app.pipeline.schema)
    print(f"\nChat with your Google Sheet! Type '{EXIT_COMMAND}' to quit.")

    repl(app.pipeline)
    logger.info("shutting down")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
