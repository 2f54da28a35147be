"""Logging configuration shared by the console chat, the seed CLI and the bot."""

from __future__ import annotations

import logging
import os

# Third-party loggers that are chatty at INFO/DEBUG.
_QUIET_LOGGERS: tuple[str, ...] = ("aiogram.event", "urllib3", "google.auth")


def configure_logging(level: str | None = None) -> None:
    """Configure Python logging for the process.

    `level` wins over the `LOG_LEVEL` environment variable, which wins over INFO. Logs go to stderr
    and are internal diagnostics; user-facing text is printed or sent separately.
    """

    log_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
