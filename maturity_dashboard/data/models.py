"""
Typed records produced by the sheet parsers and consumed by the dashboard pages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


class ProductionStatus(str, Enum):
    IN_PRODUCTION = "in_production"
    NOT_IN_PRODUCTION = "not_in_production"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        return {
            ProductionStatus.IN_PRODUCTION: "Yes",
            ProductionStatus.NOT_IN_PRODUCTION: "No",
            ProductionStatus.UNKNOWN: "Unknown",
        }[self]


class DevelopmentTime(str, Enum):
    SMALL = "S"
    MEDIUM = "M"
    LARGE = "L"


@dataclass(frozen=True)
class UseCase:
    id: str
    name: str
    description: str = ""
    category: str = ""
    business_unit: str = ""
    current_level: int = 0
    target_level: Optional[int] = None
    production_status: ProductionStatus = ProductionStatus.UNKNOWN
    development_year: Optional[int] = None
    development_time: Optional[DevelopmentTime] = None
    monthly_reach: int = 0
    channel_costs: Optional[str] = None
    time_to_develop: Optional[int] = None
    time_to_optimize: Optional[int] = None
    channels: Tuple[str, ...] = ()
    channel_levels: Dict[str, int] = field(default_factory=dict)
    process_steps: Tuple[str, ...] = ()
    stakeholders: Tuple[str, ...] = ()
    benefits: Tuple[str, ...] = ()
    revenue_impact: Optional[float] = None
    implementation_cost: Optional[float] = None

    @property
    def title(self) -> str:
        return self.name

    @property
    def purpose(self) -> str:
        return self.description

    @property
    def in_production(self) -> bool:
        return self.production_status is ProductionStatus.IN_PRODUCTION

    @property
    def level_gap(self) -> int:
        if self.target_level is None:
            return 0
        return max(self.target_level - self.current_level, 0)


@dataclass(frozen=True)
class TargetLevelUpdate:
    id: str
    target_level: Optional[int] = None

    def changes(self) -> Dict[str, Any]:
        return {"target_level": self.target_level}


@dataclass(frozen=True)
class ChannelLevelsUpdate:
    id: str
    channel_levels: Dict[str, int] = field(default_factory=dict)

    def changes(self) -> Dict[str, Any]:
        return {"channel_levels": dict(self.channel_levels)}


@dataclass(frozen=True)
class ReportingData:
    id: Optional[str] = None
    use_case_id: Optional[str] = None
    year: str = ""
    month: str = ""
    revenue: float = 0.0
    impact: float = 0.0
    investment: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Serialise using the camelCase keys of the persisted JSON payload."""
        return {
            "id": self.id,
            "useCaseId": self.use_case_id,
            "year": self.year,
            "month": self.month,
            "revenue": self.revenue,
            "impact": self.impact,
            "investment": self.investment,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ReportingData":
        # coercion imports this module
        from maturity_dashboard.data.coercion import to_float, to_optional_str, to_text

        return cls(
            id=to_optional_str(payload.get("id")),
            use_case_id=to_optional_str(payload.get("useCaseId")),
            year=to_text(payload.get("year")),
            month=to_text(payload.get("month")),
            revenue=to_float(payload.get("revenue")),
            impact=to_float(payload.get("impact")),
            investment=to_float(payload.get("investment")),
        )
