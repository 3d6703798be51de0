"""
Row sources returning one sheet as a 2-D list of strings (header row first).
"""

from __future__ import annotations

import io
import logging
from typing import Any, Dict, List, Optional, Protocol

import gspread
import requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials
from openpyxl import load_workbook

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets.readonly",
    "https://www.googleapis.com/auth/drive.readonly",
]

Rows = List[List[str]]


class SheetFetchError(RuntimeError):
    """Raised when a sheet cannot be fetched or read."""


class RowSource(Protocol):
    def fetch_rows(self, spreadsheet_id: str, sheet_name: str) -> Rows:
        ...


def cell_to_str(value: Any) -> str:
    """Render a workbook cell the way the Sheets API returns it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _normalize_rows(values: Any) -> Rows:
    if not isinstance(values, list):
        raise SheetFetchError(f"Expected a list of rows, got {type(values).__name__}")
    rows: Rows = []
    for row in values:
        if not isinstance(row, list):
            raise SheetFetchError(f"Expected each row to be a list, got {type(row).__name__}")
        rows.append([cell_to_str(cell) for cell in row])
    return rows


class GSpreadRowSource:
    """Reads worksheets with a Google service account."""

    def __init__(self, credentials_file: str, client: Optional[gspread.Client] = None) -> None:
        self.credentials_file = credentials_file
        self._client = client

    def _get_client(self) -> gspread.Client:
        if self._client is None:
            credentials = Credentials.from_service_account_file(self.credentials_file, scopes=SCOPES)
            self._client = gspread.authorize(credentials)
        return self._client

    def fetch_rows(self, spreadsheet_id: str, sheet_name: str) -> Rows:
        logger.info("Fetching sheet '%s' from spreadsheet %s", sheet_name, spreadsheet_id)
        try:
            ws = self._get_client().open_by_key(spreadsheet_id).worksheet(sheet_name)
            values = ws.get_all_values()
        except gspread.WorksheetNotFound as exc:
            raise SheetFetchError(f"Sheet '{sheet_name}' not found in spreadsheet") from exc
        except (gspread.exceptions.GSpreadException, GoogleAuthError, OSError, ValueError) as exc:
            raise SheetFetchError(f"Failed to fetch data from Google Sheets: {exc}") from exc
        return _normalize_rows(values)


class HttpRowSource:
    """
    Reads sheets through an HTTP proxy that answers GET requests with a JSON
    array of rows.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    def fetch_rows(self, spreadsheet_id: str, sheet_name: str) -> Rows:
        logger.info("Fetching sheet '%s' via %s", sheet_name, self.base_url)
        try:
            response = self._session.get(
                self.base_url,
                params={"spreadsheetId": spreadsheet_id, "sheetName": sheet_name},
                headers={"Cache-Control": "no-store"},
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise SheetFetchError(f"Request to sheet API failed: {exc}") from exc
        if not response.ok:
            raise SheetFetchError(f"HTTP error! status: {response.status_code}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise SheetFetchError("Sheet API returned invalid JSON") from exc
        return _normalize_rows(payload)


def read_workbook_rows(content: bytes) -> Dict[str, Rows]:
    """Read every sheet of an .xlsx workbook into per-sheet row arrays."""
    try:
        wb = load_workbook(filename=io.BytesIO(content), read_only=True, data_only=True)
    except Exception as exc:
        # openpyxl surfaces zip, xml and key errors for unreadable files
        raise SheetFetchError(f"Could not read workbook: {exc}") from exc

    sheets: Dict[str, Rows] = {}
    try:
        for ws in wb.worksheets:
            sheets[ws.title] = [
                [cell_to_str(value) for value in row]
                for row in ws.iter_rows(values_only=True)
            ]
    finally:
        wb.close()
    logger.info("Read workbook with sheets: %s", list(sheets))
    return sheets
