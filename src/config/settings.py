"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).

Only the front-ends read these settings. The classification engine receives plain values
(`TableLayout`, `SheetTarget`) and never touches the environment itself.
"""

from __future__ import annotations

from pydantic import AliasChoices, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SHEETS_API_BASE = "https://sheets.googleapis.com/v4"
DEFAULT_LLM_API_BASE = "https://generativelanguage.googleapis.com/v1beta/openai"
DEFAULT_LLM_MODEL = "gemini-1.5-flash"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    google_spreadsheet_id: str = Field(alias="GOOGLE_SPREADSHEET_ID")
    google_credentials_file: str | None = Field(default=None, alias="GOOGLE_CREDENTIALS_FILE")
    google_access_token: str | None = Field(default=None, alias="GOOGLE_ACCESS_TOKEN")
    sheet_name: str = Field(default="Employees", alias="SHEET_NAME")
    sheet_range: str = Field(default="A:E", alias="SHEET_RANGE")
    sheets_api_base: str = Field(default=DEFAULT_SHEETS_API_BASE, alias="SHEETS_API_BASE")
    seed_sample_data: bool = Field(default=True, alias="SEED_SAMPLE_DATA")

    llm_api_key: str = Field(validation_alias=AliasChoices("LLM_API_KEY", "GEMINI_API_KEY"))
    llm_model: str = Field(default=DEFAULT_LLM_MODEL, alias="LLM_MODEL")
    llm_api_base: str = Field(default=DEFAULT_LLM_API_BASE, alias="LLM_API_BASE")
    llm_timeout_s: float = Field(default=30.0, alias="LLM_TIMEOUT_S")

    telegram_bot_token: str | None = Field(default=None, alias="TELEGRAM_BOT_TOKEN")

    @field_validator("google_spreadsheet_id", "llm_api_key", "sheet_name")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        """Reject values that are present but empty."""

        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("google_credentials_file", "google_access_token")
    @classmethod
    def blank_as_unset(cls, value: str | None) -> str | None:
        """Treat an empty optional credential as not provided."""

        if value is None:
            return None
        return value.strip() or None

    @field_validator("sheet_range")
    @classmethod
    def validate_sheet_range(cls, value: str) -> str:
        """The range is a bare A1 column span; the sheet name is prefixed at query time."""

        value = value.strip()
        if not value or "!" in value:
            raise ValueError("SHEET_RANGE must be an A1 range without a sheet name (e.g. A:E)")
        return value

    @field_validator("llm_timeout_s")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("LLM_TIMEOUT_S must be positive")
        return value

    @model_validator(mode="after")
    def validate_sheets_credentials(self) -> Settings:
        """Sheets access needs a service-account key file or a static access token.

        A static token takes precedence; it is not refreshed, so it suits short sessions only.
        """

        if not self.google_credentials_file and not self.google_access_token:
            raise ValueError("GOOGLE_CREDENTIALS_FILE or GOOGLE_ACCESS_TOKEN is required")
        return self


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
