"""aiogram message handlers.

Contract: every incoming message produces exactly one text reply. Failures to reach the sheet or
the model get a reply that is distinct from "no matching data"; details only go to the logs.
"""

from __future__ import annotations

import asyncio
import logging
from time import monotonic

from aiogram.types import Message

from src.app import App
from src.llm.client import LLMError
from src.sheets.client import TableSourceError

logger = logging.getLogger(__name__)

USAGE_REPLY = (
    "Ask me about the employee sheet, for example: "
    "'Who are the engineers?' or 'Who was hired in 2022?'"
)
NO_DATA_REPLY = "I couldn't find any data for that query."
SOURCE_ERROR_REPLY = "I couldn't reach the employee sheet right now. Please try again later."
MODEL_ERROR_REPLY = "The language model is unavailable right now. Please try again later."
INTERNAL_ERROR_REPLY = "Something went wrong while answering. Please try again."


def _is_command_text(text: str) -> bool:
    return text.lstrip().startswith("/")


async def handle_message(message: Message, app: App) -> None:
    """Handle any incoming Telegram message and reply exactly once."""

    started = monotonic()
    reply = INTERNAL_ERROR_REPLY

    try:
        raw_text = (message.text or message.caption or "")
        if not raw_text.strip() or _is_command_text(raw_text):
            await message.answer(USAGE_REPLY)
            return

        # The pipeline makes blocking HTTP calls; keep the event loop free for other updates.
        result = await asyncio.to_thread(app.pipeline.ask, raw_text)
        if result.status == "no_data" or not result.answer:
            reply = NO_DATA_REPLY
        else:
            reply = result.answer

        latency_ms = int((monotonic() - started) * 1000)
        logger.info(
            "handled status=%s intent=%s matched=%d latency_ms=%d",
            result.status,
            result.intent.kind if result.intent else None,
            result.matched_rows,
            latency_ms,
        )
    except TableSourceError as exc:
        reply = SOURCE_ERROR_REPLY
        logger.warning("table source failed reason=%s", exc)
    except LLMError as exc:
        reply = MODEL_ERROR_REPLY
        logger.warning("model call failed reason=%s", exc)
    except Exception:
        # Handler boundary: any internal error still gets exactly one reply, without details.
        logger.exception("handler failed")

    await message.answer(reply)
