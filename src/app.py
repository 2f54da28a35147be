"""Application composition root.

This module wires together configuration, the Sheets table source and the language model for the
chat front-ends.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.chat.pipeline import ChatPipeline
from src.config.settings import Settings
from src.llm.client import ChatModel, llm_config_from_settings
from src.sheets.auth import token_source_from_settings
from src.sheets.client import SheetsClient, SheetsConfig, SheetTarget
from src.sheets.sample import setup_sample_sheet, sheet_schema


@dataclass(frozen=True)
class App:
    """Shared application dependencies for front-ends."""

    settings: Settings
    sheets: SheetsClient
    pipeline: ChatPipeline


def create_app(settings: Settings, *, seed: bool | None = None) -> App:
    """Create the application container.

    If seeding is enabled (`SEED_SAMPLE_DATA`, overridable by `seed`), the sample employee table is
    written first and the chat reads whichever sheet the setup actually populated.

    Raises:
        SheetsAuthError: If the service-account key file cannot be loaded.
    """

    sheets = SheetsClient(
        settings.google_spreadsheet_id,
        tokens=token_source_from_settings(settings),
        config=SheetsConfig(api_base=settings.sheets_api_base),
    )

    if seed is None:
        seed = settings.seed_sample_data

    sheet_name = settings.sheet_name
    if seed:
        sheet_name = setup_sample_sheet(sheets, sheet_name)

    target = SheetTarget(
        spreadsheet_id=settings.google_spreadsheet_id,
        sheet_name=sheet_name,
        column_range=settings.sheet_range,
    )
    pipeline = ChatPipeline(
        source=sheets,
        model=ChatModel(llm_config_from_settings(settings)),
        target=target,
        schema=sheet_schema(sheet_name),
    )
    return App(settings=settings, sheets=sheets, pipeline=pipeline)
