"""
Static use cases for demos and local development.

Only loaded when USE_SAMPLE_DATA is enabled.
"""

from __future__ import annotations

from typing import List

from maturity_dashboard.data.models import DevelopmentTime, ProductionStatus, UseCase


def sample_use_cases() -> List[UseCase]:
    return [
        UseCase(
            id="UC-001",
            name="Customer Journey Mapping",
            description="Map touchpoints across channels to personalise outreach.",
            category="Customer Experience",
            business_unit="Marketing",
            current_level=3,
            target_level=4,
            production_status=ProductionStatus.IN_PRODUCTION,
            development_year=2023,
            development_time=DevelopmentTime.MEDIUM,
            monthly_reach=120000,
            channels=("Email", "Web"),
            channel_levels={"Email": 3, "Web": 2},
        ),
        UseCase(
            id="UC-002",
            name="Email Marketing Optimization",
            description="Send-time and subject optimisation for campaign emails.",
            category="Marketing",
            business_unit="Marketing",
            current_level=2,
            target_level=4,
            production_status=ProductionStatus.IN_PRODUCTION,
            development_year=2023,
            development_time=DevelopmentTime.SMALL,
            monthly_reach=85000,
            channels=("Email",),
            channel_levels={"Email": 3},
        ),
        UseCase(
            id="UC-003",
            name="Customer Retention",
            description="Churn scoring with automated win-back offers.",
            category="Customer Experience",
            business_unit="Sales",
            current_level=1,
            target_level=3,
            production_status=ProductionStatus.NOT_IN_PRODUCTION,
            development_year=2024,
            development_time=DevelopmentTime.LARGE,
            monthly_reach=40000,
            channels=("SMS", "Email"),
            channel_levels={"Churn": 2, "SMS": 1},
        ),
        UseCase(
            id="UC-004",
            name="Investment Planning",
            description="Forecast-driven budget allocation across channels.",
            category="Finance",
            business_unit="Finance",
            current_level=2,
            target_level=5,
            production_status=ProductionStatus.UNKNOWN,
            development_year=2024,
            development_time=DevelopmentTime.MEDIUM,
            channels=("Other",),
        ),
    ]
