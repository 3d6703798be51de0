"""
Import orchestration: validate the request, fetch rows, parse, merge, and
report a single user-facing outcome.

Nothing raised while fetching, parsing or storing escapes ``SheetImporter``;
failures are reported through ``ImportResult``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from maturity_dashboard.config import REPORTING_SHEET, TARGET_LEVELS_SHEET, USE_CASES_SHEET
from maturity_dashboard.data.merge import merge_updates, merge_use_cases
from maturity_dashboard.data.models import ReportingData, UseCase
from maturity_dashboard.data.parsers import (
    channel_level_updates,
    parse_reporting_data,
    parse_target_levels,
    parse_use_cases,
)
from maturity_dashboard.data.schema import SheetSchemaError
from maturity_dashboard.data.sources import RowSource, SheetFetchError, read_workbook_rows
from maturity_dashboard.storage import KeyValueStore, save_reporting_data

logger = logging.getLogger(__name__)


class ImportCategory(str, Enum):
    USE_CASES = "useCases"
    TARGET_LEVELS = "targetLevels"
    CHANNEL_LEVELS = "channelLevels"
    REPORTING_DATA = "reportingData"

    @property
    def label(self) -> str:
        return {
            ImportCategory.USE_CASES: "use case metadata",
            ImportCategory.TARGET_LEVELS: "target automation levels",
            ImportCategory.CHANNEL_LEVELS: "channel automation levels",
            ImportCategory.REPORTING_DATA: "reporting data",
        }[self]


class ImportOutcome(str, Enum):
    FIELD_REQUIRED = "field_required"
    NO_DATA = "no_data"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ImportRequest:
    category: ImportCategory
    spreadsheet_id: str
    sheet_name: str


@dataclass(frozen=True)
class ImportResult:
    outcome: ImportOutcome
    title: str
    message: str
    count: int = 0
    use_cases: Optional[List[UseCase]] = None
    reporting_data: Optional[List[ReportingData]] = None

    @property
    def ok(self) -> bool:
        return self.outcome is ImportOutcome.SUCCESS


def _field_required(title: str, message: str) -> ImportResult:
    return ImportResult(outcome=ImportOutcome.FIELD_REQUIRED, title=title, message=message)


def _no_data(category: ImportCategory) -> ImportResult:
    noun = "use cases" if category is ImportCategory.USE_CASES else category.label
    return ImportResult(
        outcome=ImportOutcome.NO_DATA,
        title="No data found",
        message=f"Could not find any valid {noun} in the sheet",
    )


def _failed(exc: Exception) -> ImportResult:
    message = str(exc) or "Failed to import data from Google Sheet"
    return ImportResult(outcome=ImportOutcome.FAILED, title="Import failed", message=message)


class SheetImporter:
    """
    Drives one import per call against a row source.

    ``source`` is only needed for sheet imports (workbook uploads carry their
    own rows). ``store`` receives the reporting collection when one is
    imported.
    """

    def __init__(self, source: Optional[RowSource] = None, store: Optional[KeyValueStore] = None) -> None:
        self.source = source
        self.store = store

    def run(self, request: ImportRequest, use_cases: Sequence[UseCase]) -> ImportResult:
        spreadsheet_id = (request.spreadsheet_id or "").strip()
        sheet_name = (request.sheet_name or "").strip()
        if not spreadsheet_id:
            return _field_required("Sheet ID required", "Please enter a Google Sheet ID")
        if not sheet_name:
            return _field_required(
                "Sheet name required",
                f"Please enter a sheet name for {request.category.label}",
            )

        if self.source is None:
            return _failed(SheetFetchError("No Google Sheets source is configured"))

        try:
            rows = self.source.fetch_rows(spreadsheet_id, sheet_name)
            return self._apply(request.category, rows, use_cases)
        except (SheetFetchError, SheetSchemaError, OSError, ValueError) as exc:
            logger.error("Error importing %s from '%s': %s", request.category.value, sheet_name, exc)
            return _failed(exc)
        except Exception as exc:
            logger.exception("Unexpected error importing %s from '%s'", request.category.value, sheet_name)
            return _failed(exc)

    def _apply(
        self,
        category: ImportCategory,
        rows: List[List[str]],
        use_cases: Sequence[UseCase],
    ) -> ImportResult:
        if category is ImportCategory.USE_CASES:
            imported = parse_use_cases(rows)
            if not imported:
                return _no_data(category)
            return ImportResult(
                outcome=ImportOutcome.SUCCESS,
                title="Data imported successfully",
                message=f"Imported {len(imported)} use cases from Google Sheet",
                count=len(imported),
                use_cases=merge_use_cases(use_cases, imported),
            )

        if category is ImportCategory.TARGET_LEVELS:
            updates = parse_target_levels(rows)
            if not updates:
                return _no_data(category)
            known = {use_case.id for use_case in use_cases}
            matched = sum(1 for update in updates if update.id in known)
            return ImportResult(
                outcome=ImportOutcome.SUCCESS,
                title="Target levels imported successfully",
                message=f"Updated target automation levels for {matched} use case(s)",
                count=matched,
                use_cases=merge_updates(use_cases, updates),
            )

        if category is ImportCategory.CHANNEL_LEVELS:
            updates = channel_level_updates(rows)
            if not updates:
                return _no_data(category)
            known = {use_case.id for use_case in use_cases}
            matched = sum(1 for update in updates if update.id in known)
            return ImportResult(
                outcome=ImportOutcome.SUCCESS,
                title="Channel levels imported successfully",
                message=f"Updated channel automation levels for {matched} use case(s)",
                count=matched,
                use_cases=merge_updates(use_cases, updates),
            )

        reporting = parse_reporting_data(rows)
        if not reporting:
            return _no_data(category)
        if self.store is not None:
            save_reporting_data(self.store, reporting)
        return ImportResult(
            outcome=ImportOutcome.SUCCESS,
            title="Reporting data imported successfully",
            message=f"Imported {len(reporting)} reporting rows from Google Sheet",
            count=len(reporting),
            reporting_data=reporting,
        )

    def import_workbook(self, content: bytes, use_cases: Sequence[UseCase]) -> ImportResult:
        """Import the use case, target level and reporting tabs of an uploaded workbook."""
        try:
            sheets = read_workbook_rows(content)
            parsed = parse_use_cases(sheets.get(USE_CASES_SHEET, []))
            targets = parse_target_levels(sheets.get(TARGET_LEVELS_SHEET, []))
            reporting = parse_reporting_data(sheets.get(REPORTING_SHEET, []))

            if not parsed and not reporting:
                return ImportResult(
                    outcome=ImportOutcome.NO_DATA,
                    title="No data found",
                    message="Could not find any valid use cases or reporting data in the workbook",
                )

            merged: Optional[List[UseCase]] = None
            if parsed:
                merged = merge_use_cases(use_cases, merge_updates(parsed, targets))
            if reporting and self.store is not None:
                save_reporting_data(self.store, reporting)
        except (SheetFetchError, SheetSchemaError, OSError, ValueError) as exc:
            logger.error("Error parsing workbook: %s", exc)
            return _failed(exc)
        except Exception as exc:
            logger.exception("Unexpected error parsing workbook")
            return _failed(exc)

        return ImportResult(
            outcome=ImportOutcome.SUCCESS,
            title="Data imported successfully",
            message=f"Imported {len(parsed)} use cases and {len(reporting)} reporting rows from workbook",
            count=len(parsed) + len(reporting),
            use_cases=merged,
            reporting_data=reporting or None,
        )
