"""Shared fixtures for the maturity dashboard tests."""

from typing import Dict, List, Optional

import pytest

from maturity_dashboard.data.models import ProductionStatus, UseCase


class MemoryStore:
    """Dict-backed stand-in for the JSON file store."""

    def __init__(self) -> None:
        self.values: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


class FakeRowSource:
    """Serves canned rows per sheet name and records every fetch."""

    def __init__(self, sheets: Dict[str, List[List[str]]], error: Optional[Exception] = None) -> None:
        self.sheets = sheets
        self.error = error
        self.calls: List[tuple] = []

    def fetch_rows(self, spreadsheet_id: str, sheet_name: str) -> List[List[str]]:
        self.calls.append((spreadsheet_id, sheet_name))
        if self.error is not None:
            raise self.error
        return self.sheets.get(sheet_name, [])


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def use_case_header() -> List[str]:
    return ["id", "name", "desc", "cat", "cur", "tgt", "prod", "year"]


@pytest.fixture
def existing_use_cases() -> List[UseCase]:
    return [
        UseCase(
            id="U1",
            name="Churn Prediction",
            description="Flag customers likely to leave",
            category="Retention",
            current_level=1,
            target_level=3,
            production_status=ProductionStatus.IN_PRODUCTION,
            development_year=2022,
        ),
        UseCase(
            id="U2",
            name="Lead Scoring",
            category="Sales",
            current_level=2,
            target_level=None,
            production_status=ProductionStatus.NOT_IN_PRODUCTION,
            development_year=2023,
        ),
    ]
