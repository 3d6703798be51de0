"""
Parsers turning raw sheet rows (header first) into typed records.

All parsers are pure: the same rows always produce the same records, in input
order, without network or storage access.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from maturity_dashboard.config import CHANNEL_COLUMN_START
from maturity_dashboard.data.coercion import (
    deployed_level,
    to_development_time,
    to_float,
    to_int,
    to_list,
    to_optional_float,
    to_optional_str,
    to_production_status,
    to_text,
)
from maturity_dashboard.data.models import (
    ChannelLevelsUpdate,
    ReportingData,
    TargetLevelUpdate,
    UseCase,
)
from maturity_dashboard.data.schema import (
    REPORTING_SCHEMA,
    TARGET_LEVEL_SCHEMA,
    USE_CASE_SCHEMA,
    ColumnMap,
)

logger = logging.getLogger(__name__)

Rows = Sequence[Sequence[Any]]


def _is_blank(row: Sequence[Any]) -> bool:
    return all(not to_text(cell) for cell in row)


def _data_rows(rows: Rows) -> List[Sequence[Any]]:
    return [row for row in rows[1:] if not _is_blank(row)]


def _use_case_from_row(row: Sequence[Any], columns: ColumnMap) -> Optional[UseCase]:
    use_case_id = to_text(columns.get(row, "id"))
    name = to_text(columns.get(row, "name"))
    if not use_case_id or not name:
        return None
    return UseCase(
        id=use_case_id,
        name=name,
        description=to_text(columns.get(row, "description")),
        category=to_text(columns.get(row, "category")),
        business_unit=to_text(columns.get(row, "business_unit")),
        current_level=to_int(columns.get(row, "current_level"), default=0),
        target_level=to_int(columns.get(row, "target_level"), default=None),
        production_status=to_production_status(columns.get(row, "in_production")),
        development_year=to_int(columns.get(row, "development_year"), default=None),
        development_time=to_development_time(columns.get(row, "development_time")),
        monthly_reach=to_int(columns.get(row, "monthly_reach"), default=0),
        channel_costs=to_optional_str(columns.get(row, "channel_costs")),
        time_to_develop=to_int(columns.get(row, "time_to_develop"), default=None),
        time_to_optimize=to_int(columns.get(row, "time_to_optimize"), default=None),
        channels=to_list(columns.get(row, "channels")),
        process_steps=to_list(columns.get(row, "process_steps")),
        stakeholders=to_list(columns.get(row, "stakeholders")),
        benefits=to_list(columns.get(row, "benefits")),
        revenue_impact=to_optional_float(columns.get(row, "revenue_impact")),
        implementation_cost=to_optional_float(columns.get(row, "implementation_cost")),
    )


def parse_use_cases(rows: Rows) -> List[UseCase]:
    if not rows:
        return []
    columns = USE_CASE_SCHEMA.resolve(rows[0])
    parsed: List[UseCase] = []
    for row in _data_rows(rows):
        use_case = _use_case_from_row(row, columns)
        if use_case is None:
            logger.debug("Skipping use case row without id or name: %s", list(row))
            continue
        parsed.append(use_case)
    logger.info("Parsed %d use case(s) from %d row(s)", len(parsed), max(len(rows) - 1, 0))
    return parsed


def parse_target_levels(rows: Rows) -> List[TargetLevelUpdate]:
    if not rows:
        return []
    columns = TARGET_LEVEL_SCHEMA.resolve(rows[0])
    return [
        TargetLevelUpdate(
            id=to_text(columns.get(row, "id")),
            target_level=to_int(columns.get(row, "target_level"), default=None),
        )
        for row in _data_rows(rows)
    ]


def parse_channel_levels(
    rows: Rows,
    start: int = CHANNEL_COLUMN_START,
    end: Optional[int] = None,
) -> Dict[str, Dict[str, int]]:
    """
    Read the per-channel automation matrix.

    Header cells ``[start:end]`` name the channels; each data row is keyed by
    its first cell and every channel cell maps through ``deployed_level``.
    """
    if not rows:
        return {}
    header = list(rows[0])
    stop = len(header) if end is None else min(end, len(header))
    channels = [(idx, to_text(header[idx])) for idx in range(start, stop) if to_text(header[idx])]

    matrix: Dict[str, Dict[str, int]] = {}
    for row in _data_rows(rows):
        use_case_id = to_text(row[0]) if row else ""
        if not use_case_id:
            continue
        matrix[use_case_id] = {
            channel: deployed_level(row[idx] if idx < len(row) else None)
            for idx, channel in channels
        }
    return matrix


def channel_level_updates(
    rows: Rows,
    start: int = CHANNEL_COLUMN_START,
    end: Optional[int] = None,
) -> List[ChannelLevelsUpdate]:
    matrix = parse_channel_levels(rows, start=start, end=end)
    return [ChannelLevelsUpdate(id=use_case_id, channel_levels=levels) for use_case_id, levels in matrix.items()]


def parse_reporting_data(rows: Rows) -> List[ReportingData]:
    if not rows:
        return []
    columns = REPORTING_SCHEMA.resolve(rows[0])
    return [
        ReportingData(
            id=to_optional_str(columns.get(row, "id")),
            use_case_id=to_optional_str(columns.get(row, "use_case_id")),
            year=to_text(columns.get(row, "year")),
            month=to_text(columns.get(row, "month")),
            revenue=to_float(columns.get(row, "revenue")),
            impact=to_float(columns.get(row, "impact")),
            investment=to_float(columns.get(row, "investment")),
        )
        for row in _data_rows(rows)
    ]
