"""Access tokens for the Sheets API.

A service-account key file is the normal setup: its credentials are scoped to Spreadsheets and
refreshed whenever the cached token has expired. A static bearer token can override it for quick
local sessions.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any

from google.auth.exceptions import RefreshError, TransportError
from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2 import service_account

from src.config.settings import Settings
from src.sheets.client import SheetsAuthError, SheetsConnectionError, TokenSource

logger = logging.getLogger(__name__)

SHEETS_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/spreadsheets",)


@dataclass(frozen=True)
class StaticToken:
    """A bearer token used as-is (never refreshed)."""

    value: str

    def token(self) -> str:
        return self.value


class ServiceAccountTokens:
    """Hands out a valid access token from service-account credentials, refreshing on expiry."""

    def __init__(self, credentials: Any) -> None:
        self.credentials = credentials
        self._lock = threading.Lock()

    @classmethod
    def from_file(cls, path: str) -> ServiceAccountTokens:
        """Load a service-account JSON key scoped to Spreadsheets.

        Raises:
            SheetsAuthError: If the key file is missing or malformed.
        """

        try:
            credentials = service_account.Credentials.from_service_account_file(
                path, scopes=list(SHEETS_SCOPES)
            )
        except (OSError, ValueError) as exc:
            raise SheetsAuthError(f"Could not load service account key {path!r}: {exc}") from exc
        return cls(credentials)

    def token(self) -> str:
        with self._lock:
            if not self.credentials.valid:
                try:
                    self.credentials.refresh(GoogleAuthRequest())
                except RefreshError as exc:
                    raise SheetsAuthError(f"Service account token refresh failed: {exc}") from exc
                except TransportError as exc:
                    raise SheetsConnectionError(f"Token endpoint unreachable: {exc}") from exc
                logger.debug("refreshed service account token expiry=%s", self.credentials.expiry)
            return self.credentials.token


def token_source_from_settings(settings: Settings) -> TokenSource:
    """Pick the static token override if set, otherwise the service-account key file."""

    if settings.google_access_token:
        return StaticToken(settings.google_access_token)
    assert settings.google_credentials_file is not None
    return ServiceAccountTokens.from_file(settings.google_credentials_file)
