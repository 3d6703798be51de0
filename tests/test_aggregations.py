"""Unit tests for dashboard aggregations."""

import pytest

from maturity_dashboard.config import MATRIX_CHANNELS
from maturity_dashboard.data.aggregations import (
    average_levels,
    category_summary,
    channel_matrix_frame,
    channel_updates_from_matrix,
    filter_use_cases,
    level_distribution,
    matrix_channels,
    monthly_revenue,
    portfolio_impact,
    total_monthly_reach,
    use_cases_frame,
)
from maturity_dashboard.data.merge import merge_updates
from maturity_dashboard.data.models import DevelopmentTime, ProductionStatus, ReportingData, UseCase


@pytest.fixture
def portfolio() -> list:
    return [
        UseCase(
            id="U1",
            name="A",
            category="Sales",
            current_level=1,
            target_level=3,
            production_status=ProductionStatus.IN_PRODUCTION,
            development_year=2023,
            development_time=DevelopmentTime.SMALL,
            monthly_reach=100,
            channels=("Email",),
        ),
        UseCase(
            id="U2",
            name="B",
            category="Sales",
            current_level=2,
            target_level=None,
            production_status=ProductionStatus.NOT_IN_PRODUCTION,
            development_year=2024,
            development_time=DevelopmentTime.LARGE,
            monthly_reach=50,
            channels=("SMS", "Web"),
        ),
        UseCase(id="U3", name="C", category="Ops", current_level=9),
    ]


def test_average_levels(portfolio) -> None:
    """Test that missing targets count as zero."""
    current, target = average_levels(portfolio)
    assert current == pytest.approx(12 / 3)
    assert target == pytest.approx(1.0)
    assert average_levels([]) == (0.0, 0.0)


def test_level_distribution_clamps(portfolio) -> None:
    """Test that out-of-range levels are clamped into the histogram."""
    df = level_distribution(portfolio)
    assert list(df["level"]) == [f"Level {i}" for i in range(6)]
    assert list(df["count"]) == [0, 1, 1, 0, 0, 1]


def test_category_summary(portfolio) -> None:
    """Test counts and average level per category."""
    df = category_summary(portfolio)
    assert list(df["category"]) == ["Sales", "Ops"]
    assert list(df["count"]) == [2, 1]
    assert list(df["avg_level"]) == [1.5, 9.0]


def test_use_cases_frame_labels_status(portfolio) -> None:
    """Test that the table frame shows the status label."""
    df = use_cases_frame(portfolio)
    assert list(df["in_production"]) == ["Yes", "No", "Unknown"]
    assert list(df["development_time"][:2]) == ["S", "L"]


def test_portfolio_impact(portfolio) -> None:
    """Test impact split by development year and the running net benefit."""
    reporting = [
        ReportingData(use_case_id="U1", year="2024", month="Jan", impact=100.0, investment=30.0),
        ReportingData(use_case_id="U2", year="2024", month="Feb", impact=50.0),
        ReportingData(use_case_id="U9", year="2025", month="Jan", impact=999.0, investment=20.0),
        ReportingData(use_case_id="U1", year="", month="Jan", impact=1.0),
    ]
    df = portfolio_impact(reporting, portfolio)
    assert list(df.columns) == ["year", "impact_2023", "impact_2024", "investment", "cumulative_net_benefit"]
    assert list(df["year"]) == ["2024", "2025"]
    assert list(df["impact_2023"]) == [100.0, 0.0]
    assert list(df["cumulative_net_benefit"]) == [120.0, 100.0]


def test_portfolio_impact_empty() -> None:
    """Test that no dated rows give an empty frame."""
    assert portfolio_impact([ReportingData(month="Jan")], []).empty


def test_monthly_revenue_in_calendar_order() -> None:
    """Test that months sort by calendar and zero revenue is skipped."""
    reporting = [
        ReportingData(year="2024", month="Mar", revenue=5.0),
        ReportingData(year="2024", month="Jan", revenue=2.0),
        ReportingData(year="2023", month="Jan", revenue=3.0),
        ReportingData(year="2024", month="Feb", revenue=0.0),
    ]
    df = monthly_revenue(reporting)
    assert list(df["month"]) == ["Jan", "Mar"]
    assert list(df["revenue"]) == [5.0, 5.0]


def test_filter_use_cases(portfolio) -> None:
    """Test production, channel and development time filters."""
    assert [uc.id for uc in filter_use_cases(portfolio, production=ProductionStatus.IN_PRODUCTION)] == ["U1"]
    assert [uc.id for uc in filter_use_cases(portfolio, channels=["Web", "Email"])] == ["U1", "U2"]
    assert [uc.id for uc in filter_use_cases(portfolio, development_times=["L"])] == ["U2"]
    assert filter_use_cases(portfolio) == portfolio
    assert total_monthly_reach(portfolio) == 150


# =============================================================================
# Channel Matrix Tests
# =============================================================================


def test_matrix_channels_include_imported_channels() -> None:
    """Test that channels outside the fixed list get their own columns."""
    use_cases = [UseCase(id="U1", name="A", channel_levels={"Email": 3, "Push": 3})]
    channels = matrix_channels(use_cases)
    assert channels[: len(MATRIX_CHANNELS)] == MATRIX_CHANNELS
    assert channels[len(MATRIX_CHANNELS):] == ["Push"]


def test_matrix_save_without_edits_keeps_channel_levels() -> None:
    """Test that saving an untouched matrix leaves every use case unchanged."""
    use_cases = [
        UseCase(id="U1", name="A", channel_levels={"Email": 3, "Push": 3}),
        UseCase(id="U2", name="B"),
    ]
    channels = matrix_channels(use_cases)
    frame = channel_matrix_frame(use_cases, channels)

    updates = channel_updates_from_matrix(frame, use_cases, channels)

    assert merge_updates(use_cases, updates) == use_cases


def test_matrix_save_keeps_channels_missing_from_frame() -> None:
    """Test that only the channels shown in the editor are overwritten."""
    use_cases = [UseCase(id="U1", name="A", channel_levels={"Email": 3, "Push": 3})]
    frame = channel_matrix_frame(use_cases, ["Email", "SMS"])
    frame.loc[0, "Email"] = "Backlog"
    frame.loc[0, "SMS"] = "On roadmap"

    (update,) = channel_updates_from_matrix(frame, use_cases, ["Email", "SMS"])

    assert update.channel_levels == {"Email": 1, "Push": 3, "SMS": 2}
