"""Unit tests for the sheet row sources."""

import io
from unittest.mock import MagicMock

import gspread
import pytest
import requests
from openpyxl import Workbook

from maturity_dashboard.data.sources import (
    GSpreadRowSource,
    HttpRowSource,
    SheetFetchError,
    cell_to_str,
    read_workbook_rows,
)


def _response(status: int = 200, payload=None, json_error: bool = False) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    if json_error:
        response.json.side_effect = ValueError("bad json")
    else:
        response.json.return_value = payload
    return response


# =============================================================================
# Cell Rendering Tests
# =============================================================================


@pytest.mark.parametrize(
    "value,expected",
    [(None, ""), (True, "TRUE"), (False, "FALSE"), (3.0, "3"), (2.5, "2.5"), (7, "7"), ("x", "x")],
)
def test_cell_to_str(value, expected) -> None:
    """Test that cells render the way the Sheets API returns them."""
    assert cell_to_str(value) == expected


# =============================================================================
# HTTP Row Source Tests
# =============================================================================


def test_http_source_fetches_rows() -> None:
    """Test the request parameters and the returned rows."""
    session = MagicMock()
    session.get.return_value = _response(payload=[["id", "name"], ["U1", "A"]])
    source = HttpRowSource("https://sheets.example.com/api", session=session)

    rows = source.fetch_rows("abc", "Use Cases")

    assert rows == [["id", "name"], ["U1", "A"]]
    _, kwargs = session.get.call_args
    assert kwargs["params"] == {"spreadsheetId": "abc", "sheetName": "Use Cases"}
    assert kwargs["headers"] == {"Cache-Control": "no-store"}


def test_http_source_non_success_status() -> None:
    """Test that a non-2xx response carries the status code."""
    session = MagicMock()
    session.get.return_value = _response(status=403)
    source = HttpRowSource("https://sheets.example.com/api", session=session)
    with pytest.raises(SheetFetchError, match="HTTP error! status: 403"):
        source.fetch_rows("abc", "Tab")


def test_http_source_invalid_json() -> None:
    """Test that an unparsable body is reported as a fetch error."""
    session = MagicMock()
    session.get.return_value = _response(json_error=True)
    source = HttpRowSource("https://sheets.example.com/api", session=session)
    with pytest.raises(SheetFetchError, match="invalid JSON"):
        source.fetch_rows("abc", "Tab")


def test_http_source_unexpected_shape() -> None:
    """Test that a non-array payload is rejected."""
    session = MagicMock()
    session.get.return_value = _response(payload={"rows": []})
    source = HttpRowSource("https://sheets.example.com/api", session=session)
    with pytest.raises(SheetFetchError, match="list of rows"):
        source.fetch_rows("abc", "Tab")


def test_http_source_connection_error() -> None:
    """Test that transport exceptions are wrapped."""
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("refused")
    source = HttpRowSource("https://sheets.example.com/api", session=session)
    with pytest.raises(SheetFetchError, match="refused"):
        source.fetch_rows("abc", "Tab")


# =============================================================================
# gspread Row Source Tests
# =============================================================================


def test_gspread_source_fetches_rows() -> None:
    """Test reading a worksheet through an injected client."""
    client = MagicMock()
    worksheet = client.open_by_key.return_value.worksheet.return_value
    worksheet.get_all_values.return_value = [["id", "name"], ["U1", "A"]]
    source = GSpreadRowSource("unused.json", client=client)

    assert source.fetch_rows("abc", "Use Cases") == [["id", "name"], ["U1", "A"]]
    client.open_by_key.assert_called_once_with("abc")
    client.open_by_key.return_value.worksheet.assert_called_once_with("Use Cases")


def test_gspread_source_missing_worksheet() -> None:
    """Test that a missing tab is reported by name."""
    client = MagicMock()
    client.open_by_key.return_value.worksheet.side_effect = gspread.WorksheetNotFound("Tab")
    source = GSpreadRowSource("unused.json", client=client)
    with pytest.raises(SheetFetchError, match="Sheet 'Tab' not found"):
        source.fetch_rows("abc", "Tab")


def test_gspread_source_missing_credentials_file(tmp_path) -> None:
    """Test that an unreadable credentials file surfaces as a fetch error."""
    source = GSpreadRowSource(str(tmp_path / "missing.json"))
    with pytest.raises(SheetFetchError):
        source.fetch_rows("abc", "Tab")


# =============================================================================
# Workbook Reader Tests
# =============================================================================


def test_read_workbook_rows() -> None:
    """Test that every worksheet is read with cells rendered as strings."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Use Cases"
    ws.append(["id", "name", "cur"])
    ws.append(["U1", "A", 2])
    other = wb.create_sheet("Channel Automation")
    other.append(["ID", "Use Case", "Email"])
    other.append(["U1", "A", True])
    buffer = io.BytesIO()
    wb.save(buffer)

    sheets = read_workbook_rows(buffer.getvalue())

    assert list(sheets) == ["Use Cases", "Channel Automation"]
    assert sheets["Use Cases"] == [["id", "name", "cur"], ["U1", "A", "2"]]
    assert sheets["Channel Automation"][1] == ["U1", "A", "TRUE"]


def test_read_workbook_rows_rejects_garbage() -> None:
    """Test that non-xlsx content raises a fetch error."""
    with pytest.raises(SheetFetchError, match="Could not read workbook"):
        read_workbook_rows(b"plain text")
