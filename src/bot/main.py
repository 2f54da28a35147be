"""Telegram bot entrypoint: seed the sheet, then poll for messages."""

from __future__ import annotations

import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties

from src.app import App, create_app
from src.bot.router import create_router
from src.config.logging import configure_logging
from src.config.settings import Settings, load_settings

logger = logging.getLogger(__name__)


async def build_app(settings: Settings) -> App:
    """Create the app off the event loop; sample seeding and key loading do blocking I/O."""

    app = await asyncio.to_thread(create_app, settings)
    logger.info(
        "chat ready spreadsheet=%s range=%s",
        settings.google_spreadsheet_id,
        app.pipeline.target.a1(),
    )
    return app


async def main() -> None:
    """Run the Telegram bot polling loop."""

    configure_logging()
    settings = load_settings()
    if not settings.telegram_bot_token:
        raise RuntimeError("TELEGRAM_BOT_TOKEN is required to run the bot")

    app = await build_app(settings)

    bot = Bot(token=settings.telegram_bot_token, default=DefaultBotProperties(parse_mode=None))
    dp = Dispatcher()
    dp.include_router(create_router())

    try:
        await dp.start_polling(bot, app=app)
    finally:
        logger.info("bot stopped")
        await bot.session.close()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
