"""Populate the configured spreadsheet with the sample employee table."""

from __future__ import annotations

import argparse

from dotenv import load_dotenv

from src.config.logging import configure_logging
from src.config.settings import load_settings
from src.sheets.auth import token_source_from_settings
from src.sheets.client import SheetsClient, SheetsConfig, TableSourceError
from src.sheets.sample import populate_sample_sheet


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the employee sheet with sample data.")
    parser.add_argument("--sheet", default=None, help="Sheet title (defaults to SHEET_NAME)")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    load_dotenv(".env")
    configure_logging(args.log_level)
    settings = load_settings()

    requested = args.sheet or settings.sheet_name
    try:
        client = SheetsClient(
            settings.google_spreadsheet_id,
            tokens=token_source_from_settings(settings),
            config=SheetsConfig(api_base=settings.sheets_api_base),
        )
        actual = populate_sample_sheet(client, requested)
    except TableSourceError as exc:
        print(f"Could not set up the sheet: {exc}")
        return 1

    print(f"Sheet '{actual}' populated with sample data.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
