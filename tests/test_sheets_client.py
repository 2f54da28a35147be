"""Tests for the Google Sheets REST client (network calls are faked)."""

from __future__ import annotations

import http.client
import json
from typing import Any
from urllib.error import HTTPError, URLError

import pytest

from src.sheets.auth import StaticToken
from src.sheets.client import (
    SheetsAuthError,
    SheetsClient,
    SheetsConfig,
    SheetsConnectionError,
    SheetsHTTPError,
    SheetTarget,
)


class _FakeResponse:
    def __init__(self, body: bytes) -> None:
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> _FakeResponse:
        return self

    def __exit__(self, *_exc: Any) -> None:
        return None


class _Recorder:
    def __init__(self, body: Any = None, error: Exception | None = None) -> None:
        self.body = b"" if body is None else json.dumps(body).encode()
        self.error = error
        self.requests: list[Any] = []

    def __call__(self, req: Any, timeout: float) -> _FakeResponse:
        self.requests.append(req)
        if self.error is not None:
            raise self.error
        return _FakeResponse(self.body)


def _client() -> SheetsClient:
    return SheetsClient("sheet-id", tokens=StaticToken("tok"))


def _install(monkeypatch: pytest.MonkeyPatch, recorder: _Recorder) -> _Recorder:
    monkeypatch.setattr("src.sheets.client.urlopen", recorder)
    return recorder


def test_get_rows_requests_encoded_range(monkeypatch: pytest.MonkeyPatch) -> None:
    rec = _install(monkeypatch, _Recorder({"values": [["Id", "Name"], ["1", "Alice"]]}))

    rows = _client().get_rows("Employees!A:E")

    assert rows == [["Id", "Name"], ["1", "Alice"]]
    req = rec.requests[0]
    assert req.get_method() == "GET"
    assert req.full_url == "https://sheets.googleapis.com/v4/spreadsheets/sheet-id/values/Employees%21A%3AE"
    assert req.get_header("Authorization") == "Bearer tok"


def test_get_rows_without_values_is_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _Recorder({"range": "Employees!A1:E1000"}))
    assert _client().get_rows("Employees!A:E") == []


def test_get_rows_stringifies_cells(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _Recorder({"values": [["Salary"], [95000], [None]]}))
    assert _client().get_rows("Employees!D:D") == [["Salary"], ["95000"], [""]]


def test_write_rows_uses_raw_input(monkeypatch: pytest.MonkeyPatch) -> None:
    rec = _install(monkeypatch, _Recorder({}))

    _client().write_rows("Employees!A1", [["Id"], ["1"]])

    req = rec.requests[0]
    assert req.get_method() == "PUT"
    assert req.full_url.endswith("/values/Employees%21A1?valueInputOption=RAW")
    assert json.loads(req.data) == {
        "range": "Employees!A1",
        "majorDimension": "ROWS",
        "values": [["Id"], ["1"]],
    }


def test_clear_and_add_sheet(monkeypatch: pytest.MonkeyPatch) -> None:
    rec = _install(monkeypatch, _Recorder({}))
    client = _client()

    client.clear("Employees!A:Z")
    client.add_sheet("Employees")

    clear_req, add_req = rec.requests
    assert clear_req.get_method() == "POST"
    assert clear_req.full_url.endswith("/values/Employees%21A%3AZ:clear")
    assert add_req.full_url.endswith("/spreadsheets/sheet-id:batchUpdate")
    assert json.loads(add_req.data) == {
        "requests": [{"addSheet": {"properties": {"title": "Employees"}}}]
    }


def test_sheet_titles(monkeypatch: pytest.MonkeyPatch) -> None:
    body = {"sheets": [{"properties": {"title": "Sheet1"}}, {"properties": {"title": "Employees"}}]}
    rec = _install(monkeypatch, _Recorder(body))

    assert _client().sheet_titles() == ["Sheet1", "Employees"]
    assert "fields=sheets.properties.title" in rec.requests[0].full_url


@pytest.mark.parametrize("status", [401, 403])
def test_auth_errors(monkeypatch: pytest.MonkeyPatch, status: int) -> None:
    error = HTTPError("https://example", status, "denied", {}, None)  # type: ignore[arg-type]
    _install(monkeypatch, _Recorder(error=error))
    with pytest.raises(SheetsAuthError):
        _client().get_rows("Employees!A:E")


def test_http_error_keeps_status(monkeypatch: pytest.MonkeyPatch) -> None:
    error = HTTPError("https://example", 404, "missing", {}, None)  # type: ignore[arg-type]
    _install(monkeypatch, _Recorder(error=error))
    with pytest.raises(SheetsHTTPError) as exc_info:
        _client().get_rows("Employees!A:E")
    assert exc_info.value.status == 404


def test_connection_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _Recorder(error=URLError("down")))
    with pytest.raises(SheetsConnectionError):
        _client().get_rows("Employees!A:E")


@pytest.mark.parametrize(
    "error",
    [
        TimeoutError("timed out"),
        ConnectionResetError("reset by peer"),
        http.client.RemoteDisconnected("closed"),
        http.client.IncompleteRead(b"partial"),
    ],
)
def test_socket_level_failures_are_connection_errors(
        monkeypatch: pytest.MonkeyPatch, error: Exception
) -> None:
    _install(monkeypatch, _Recorder(error=error))
    with pytest.raises(SheetsConnectionError) as exc_info:
        _client().get_rows("Employees!A:E")
    assert exc_info.value.__cause__ is error


def test_custom_api_base_and_token_source(monkeypatch: pytest.MonkeyPatch) -> None:
    class _CountingTokens:
        calls = 0

        def token(self) -> str:
            self.calls += 1
            return f"tok-{self.calls}"

    rec = _install(monkeypatch, _Recorder({}))
    tokens = _CountingTokens()
    client = SheetsClient("sheet-id", tokens=tokens, config=SheetsConfig(api_base="https://sheets.test/v4/"))

    client.get_rows("A:E")
    client.get_rows("A:E")

    assert rec.requests[0].full_url.startswith("https://sheets.test/v4/spreadsheets/sheet-id/")
    assert [r.get_header("Authorization") for r in rec.requests] == ["Bearer tok-1", "Bearer tok-2"]


def test_invalid_json(monkeypatch: pytest.MonkeyPatch) -> None:
    rec = _Recorder()
    rec.body = b"<html>"
    _install(monkeypatch, rec)
    with pytest.raises(SheetsHTTPError):
        _client().get_rows("Employees!A:E")


def test_sheet_target_a1() -> None:
    target = SheetTarget(spreadsheet_id="x", sheet_name="Employees")
    assert target.a1() == "Employees!A:E"
    assert target.a1("A:Z") == "Employees!A:Z"
