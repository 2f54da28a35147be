"""Bot router composition."""

from __future__ import annotations

from aiogram import Router

from src.bot.handlers import handle_message


def create_router() -> Router:
    """Build a fresh router sending every message to the chat handler.

    aiogram routers can be attached to only one dispatcher, so each dispatcher gets its own.
    """

    router = Router(name="sheets-chat")
    router.message.register(handle_message)
    return router
