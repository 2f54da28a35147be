"""Google Sheets v4 REST client (table source).

The client covers exactly what the chat needs: read a range, write a range, clear a range, list
sheet titles and add a sheet. Calls are plain HTTPS requests authorized with a bearer token taken
from a `TokenSource` before every request.
"""

from __future__ import annotations

import http.client
import json
import logging
from dataclasses import dataclass
from typing import Any, Protocol
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen

from src.config.settings import DEFAULT_SHEETS_API_BASE
from src.table.layout import Table

logger = logging.getLogger(__name__)


class TableSourceError(RuntimeError):
    """Raised when the table source cannot be read or written."""


class SheetsAuthError(TableSourceError):
    """The access token was rejected or lacks access to the spreadsheet."""


class SheetsConnectionError(TableSourceError):
    """The Sheets API could not be reached."""


class SheetsHTTPError(TableSourceError):
    """The Sheets API answered with an error status or an unexpected payload."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


@dataclass(frozen=True)
class SheetTarget:
    """Which spreadsheet and which column span the chat reads."""

    spreadsheet_id: str
    sheet_name: str
    column_range: str = "A:E"

    def a1(self, column_range: str | None = None) -> str:
        """Return an A1 range prefixed with the sheet name, e.g. `Employees!A:E`."""

        return f"{self.sheet_name}!{column_range or self.column_range}"


@dataclass(frozen=True)
class SheetsConfig:
    """Connection settings for the Sheets REST API."""

    api_base: str = DEFAULT_SHEETS_API_BASE
    timeout_s: float = 30.0


class TokenSource(Protocol):
    def token(self) -> str: ...


class SheetsClient:
    """Minimal Google Sheets client bound to one spreadsheet."""

    def __init__(
            self,
            spreadsheet_id: str,
            *,
            tokens: TokenSource,
            config: SheetsConfig | None = None,
    ) -> None:
        self.spreadsheet_id = spreadsheet_id
        self.tokens = tokens
        self.config = config or SheetsConfig()

    def _url(self, path: str, query: dict[str, str] | None = None) -> str:
        url = f"{self.config.api_base.rstrip('/')}/spreadsheets/{quote(self.spreadsheet_id, safe='')}{path}"
        if query:
            url += "?" + urlencode(query)
        return url

    def _values_path(self, range_spec: str, suffix: str = "") -> str:
        return f"/values/{quote(range_spec, safe='')}{suffix}"

    def _request(self, method: str, url: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {self.tokens.token()}"}
        data = None
        if payload is not None:
            headers["Content-Type"] = "application/json"
            data = json.dumps(payload).encode()

        req = Request(url, method=method, headers=headers, data=data)
        try:
            with urlopen(req, timeout=self.config.timeout_s) as resp:  # noqa: S310 (fixed API host)
                body = resp.read()
        except HTTPError as exc:
            if exc.code in (401, 403):
                raise SheetsAuthError(
                    f"Sheets API rejected the credentials (HTTP {exc.code})"
                ) from exc
            raise SheetsHTTPError(f"Sheets API HTTP error: {exc.code}", status=exc.code) from exc
        except URLError as exc:
            raise SheetsConnectionError(f"Sheets API connection error: {exc.reason}") from exc
        except (TimeoutError, OSError, http.client.HTTPException) as exc:
            raise SheetsConnectionError(f"Sheets API request failed: {exc}") from exc

        if not body:
            return {}
        try:
            decoded = json.loads(body)
        except json.JSONDecodeError as exc:
            raise SheetsHTTPError("Sheets API returned invalid JSON") from exc
        if not isinstance(decoded, dict):
            raise SheetsHTTPError("Sheets API returned an unexpected payload")
        return decoded

    def get_rows(self, range_spec: str) -> Table:
        """Read a range as rows of text cells. A range with no data yields `[]`."""

        body = self._request("GET", self._url(self._values_path(range_spec)))
        values = body.get("values") or []
        if not isinstance(values, list):
            raise SheetsHTTPError("Sheets API returned malformed values")
        rows = [["" if cell is None else str(cell) for cell in row] for row in values]
        logger.debug("fetched range=%s rows=%d", range_spec, len(rows))
        return rows

    def write_rows(self, range_spec: str, rows: Table) -> None:
        """Overwrite a range starting at its top-left cell with raw (unparsed) values."""

        payload = {"range": range_spec, "majorDimension": "ROWS", "values": rows}
        self._request(
            "PUT",
            self._url(self._values_path(range_spec), {"valueInputOption": "RAW"}),
            payload,
        )
        logger.debug("wrote range=%s rows=%d", range_spec, len(rows))

    def clear(self, range_spec: str) -> None:
        """Clear all values in a range (formatting is kept)."""

        self._request("POST", self._url(self._values_path(range_spec, ":clear")), {})

    def sheet_titles(self) -> list[str]:
        """Return the titles of all sheets in the spreadsheet, in tab order."""

        body = self._request("GET", self._url("", {"fields": "sheets.properties.title"}))
        titles: list[str] = []
        for sheet in body.get("sheets") or []:
            title = (sheet.get("properties") or {}).get("title")
            if title:
                titles.append(str(title))
        return titles

    def add_sheet(self, title: str) -> None:
        """Add a new empty sheet named `title`."""

        payload = {"requests": [{"addSheet": {"properties": {"title": title}}}]}
        self._request("POST", self._url(":batchUpdate"), payload)
