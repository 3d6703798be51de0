"""
Aggregations over the use case and reporting collections for the dashboard pages.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from maturity_dashboard.config import MATRIX_CHANNELS, MAX_AUTOMATION_LEVEL, STATUS_LEVELS
from maturity_dashboard.data.models import ChannelLevelsUpdate, ProductionStatus, ReportingData, UseCase

MONTH_ORDER = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

USE_CASE_COLUMNS = [
    "id", "name", "category", "business_unit", "current_level", "target_level",
    "in_production", "development_year", "development_time", "monthly_reach",
]
REPORTING_COLUMNS = ["id", "use_case_id", "year", "month", "revenue", "impact", "investment"]
LEVEL_BY_STATUS_LABEL = {label: level for level, (label, _) in STATUS_LEVELS.items()}


def use_cases_frame(use_cases: Sequence[UseCase]) -> pd.DataFrame:
    if not use_cases:
        return pd.DataFrame(columns=USE_CASE_COLUMNS)
    records = []
    for use_case in use_cases:
        records.append(
            {
                "id": use_case.id,
                "name": use_case.name,
                "category": use_case.category,
                "business_unit": use_case.business_unit,
                "current_level": use_case.current_level,
                "target_level": use_case.target_level,
                "in_production": use_case.production_status.label,
                "development_year": use_case.development_year,
                "development_time": use_case.development_time.value if use_case.development_time else None,
                "monthly_reach": use_case.monthly_reach,
            }
        )
    return pd.DataFrame.from_records(records, columns=USE_CASE_COLUMNS)


def reporting_frame(reporting_data: Sequence[ReportingData]) -> pd.DataFrame:
    if not reporting_data:
        return pd.DataFrame(columns=REPORTING_COLUMNS)
    return pd.DataFrame.from_records([asdict(row) for row in reporting_data], columns=REPORTING_COLUMNS)


def average_levels(use_cases: Sequence[UseCase]) -> Tuple[float, float]:
    """Average current and target level; a missing target counts as 0."""
    count = len(use_cases) or 1
    current = sum(use_case.current_level for use_case in use_cases) / count
    target = sum(use_case.target_level or 0 for use_case in use_cases) / count
    return current, target


def level_distribution(use_cases: Sequence[UseCase]) -> pd.DataFrame:
    counts = [0] * (MAX_AUTOMATION_LEVEL + 1)
    for use_case in use_cases:
        level = min(max(use_case.current_level, 0), MAX_AUTOMATION_LEVEL)
        counts[level] += 1
    return pd.DataFrame(
        {
            "level": [f"Level {idx}" for idx in range(len(counts))],
            "count": counts,
        }
    )


def category_summary(use_cases: Sequence[UseCase]) -> pd.DataFrame:
    df = use_cases_frame(use_cases)
    if df.empty:
        return pd.DataFrame(columns=["category", "count", "avg_level"])
    summary = (
        df.groupby("category", dropna=False)
        .agg(count=("id", "size"), avg_level=("current_level", "mean"))
        .reset_index()
    )
    summary["avg_level"] = summary["avg_level"].astype(float).round(1)
    return summary.sort_values("count", ascending=False, kind="stable").reset_index(drop=True)


def portfolio_impact(
    reporting_data: Sequence[ReportingData],
    use_cases: Sequence[UseCase],
) -> pd.DataFrame:
    """
    Yearly impact split by the development year of the attributed use case,
    with total investment and the running net benefit.

    Rows without a year are ignored. Impact attributed to an unknown use case,
    or one without a development year, is not counted; its investment is.
    """
    dev_year_by_id = {uc.id: uc.development_year for uc in use_cases if uc.development_year}
    rows = [row for row in reporting_data if row.year]
    if not rows:
        return pd.DataFrame(columns=["year", "investment", "cumulative_net_benefit"])

    by_year = {}
    for row in rows:
        bucket = by_year.setdefault(row.year, {"year": row.year, "investment": 0.0})
        dev_year = dev_year_by_id.get(row.use_case_id) if row.use_case_id else None
        if dev_year:
            key = f"impact_{dev_year}"
            bucket[key] = bucket.get(key, 0.0) + row.impact
        bucket["investment"] += row.investment

    df = pd.DataFrame(sorted(by_year.values(), key=lambda item: item["year"]))
    impact_cols = sorted(col for col in df.columns if col.startswith("impact_"))
    total_impact = 0.0
    if impact_cols:
        df[impact_cols] = df[impact_cols].fillna(0.0)
        total_impact = df[impact_cols].sum(axis=1)
    df["cumulative_net_benefit"] = (total_impact - df["investment"]).cumsum()
    return df[["year", *impact_cols, "investment", "cumulative_net_benefit"]]


def _month_sort_key(month: str) -> Tuple[int, str]:
    try:
        return MONTH_ORDER.index(month[:3].title()), month
    except ValueError:
        return len(MONTH_ORDER), month


def monthly_revenue(reporting_data: Sequence[ReportingData]) -> pd.DataFrame:
    totals = {}
    for row in reporting_data:
        if row.month and row.revenue:
            totals[row.month] = totals.get(row.month, 0.0) + row.revenue
    ordered = sorted(totals.items(), key=lambda item: _month_sort_key(item[0]))
    return pd.DataFrame(ordered, columns=["month", "revenue"])


def total_monthly_reach(use_cases: Sequence[UseCase]) -> int:
    return sum(use_case.monthly_reach for use_case in use_cases)


def filter_use_cases(
    use_cases: Sequence[UseCase],
    production: Optional[ProductionStatus] = None,
    channels: Iterable[str] = (),
    development_times: Iterable[str] = (),
) -> List[UseCase]:
    channel_set = set(channels)
    time_set = set(development_times)
    result = list(use_cases)
    if production is not None:
        result = [uc for uc in result if uc.production_status is production]
    if channel_set:
        result = [uc for uc in result if channel_set.intersection(uc.channels)]
    if time_set:
        result = [
            uc for uc in result
            if uc.development_time is not None and uc.development_time.value in time_set
        ]
    return result


def matrix_channels(use_cases: Sequence[UseCase]) -> List[str]:
    """The fixed matrix channels followed by any other channel an import brought in."""
    channels = list(MATRIX_CHANNELS)
    for use_case in use_cases:
        for channel in use_case.channel_levels:
            if channel not in channels:
                channels.append(channel)
    return channels


def channel_matrix_frame(use_cases: Sequence[UseCase], channels: Sequence[str]) -> pd.DataFrame:
    rows = []
    for use_case in use_cases:
        row = {"ID": use_case.id, "Use Case": use_case.name}
        for channel in channels:
            level = use_case.channel_levels.get(channel, 0)
            row[channel] = STATUS_LEVELS.get(level, STATUS_LEVELS[0])[0]
        rows.append(row)
    return pd.DataFrame(rows, columns=["ID", "Use Case", *channels])


def channel_updates_from_matrix(
    edited: pd.DataFrame,
    use_cases: Sequence[UseCase],
    channels: Sequence[str],
) -> List[ChannelLevelsUpdate]:
    """
    Turn an edited status matrix back into channel level updates.

    Each update starts from the use case's stored levels and overlays the
    matrix cells, so channels outside ``channels`` are kept and a channel the
    use case never had is only added when set above "not planned".
    """
    by_id = {use_case.id: use_case for use_case in use_cases}
    updates = []
    for _, row in edited.iterrows():
        use_case = by_id.get(str(row["ID"]))
        levels = dict(use_case.channel_levels) if use_case else {}
        for channel in channels:
            level = LEVEL_BY_STATUS_LABEL.get(row[channel], 0)
            if channel in levels or level:
                levels[channel] = level
        updates.append(ChannelLevelsUpdate(id=str(row["ID"]), channel_levels=levels))
    return updates
