"""Unit tests for the JSON file store and reporting persistence."""

import json

from maturity_dashboard.config import REPORTING_STORAGE_KEY
from maturity_dashboard.data.models import ReportingData
from maturity_dashboard.storage import JsonFileStore, load_reporting_data, save_reporting_data


def test_json_file_store_round_trip(tmp_path) -> None:
    """Test that values survive a new store instance on the same file."""
    path = tmp_path / "nested" / "store.json"
    JsonFileStore(path).set("greeting", "hello")
    assert JsonFileStore(path).get("greeting") == "hello"
    assert JsonFileStore(path).get("missing") is None


def test_json_file_store_keeps_other_keys(tmp_path) -> None:
    """Test that setting one key does not drop the others."""
    store = JsonFileStore(tmp_path / "store.json")
    store.set("a", "1")
    store.set("b", "2")
    assert json.loads((tmp_path / "store.json").read_text()) == {"a": "1", "b": "2"}


def test_json_file_store_corrupt_file(tmp_path) -> None:
    """Test that a corrupt store reads as empty."""
    path = tmp_path / "store.json"
    path.write_text("{not json")
    assert JsonFileStore(path).get(REPORTING_STORAGE_KEY) is None


def test_reporting_data_persistence(memory_store) -> None:
    """Test saving and loading the reporting collection."""
    records = [
        ReportingData(id="R1", use_case_id="U1", year="2024", month="Jan", revenue=10.0, impact=2.0),
        ReportingData(year="2024", month="Feb", investment=5.0),
    ]
    save_reporting_data(memory_store, records)
    assert load_reporting_data(memory_store) == records


def test_load_reporting_data_missing_or_invalid(memory_store) -> None:
    """Test that absent, corrupt or non-list payloads yield no rows."""
    assert load_reporting_data(memory_store) == []
    memory_store.set(REPORTING_STORAGE_KEY, "{broken")
    assert load_reporting_data(memory_store) == []
    memory_store.set(REPORTING_STORAGE_KEY, json.dumps({"id": "R1"}))
    assert load_reporting_data(memory_store) == []


def test_load_reporting_data_coerces_fields(memory_store) -> None:
    """Test that stored figures saved as strings are coerced back."""
    memory_store.set(
        REPORTING_STORAGE_KEY,
        json.dumps([{"id": "R1", "useCaseId": "", "year": 2024, "month": "Mar", "revenue": "12.5"}]),
    )
    (record,) = load_reporting_data(memory_store)
    assert record.use_case_id is None
    assert record.year == "2024"
    assert record.revenue == 12.5
    assert record.impact == 0.0
