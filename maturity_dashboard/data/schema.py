"""
Named column maps for the spreadsheet tabs.

Each sheet schema lists its columns with the header labels that identify them
and the position they occupy by convention. The map is resolved once from the
header row so parsers read cells by name rather than by raw index.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


class SheetSchemaError(ValueError):
    """Raised when a labelled header is missing a required column."""


def normalize_label(label: Any) -> str:
    if label is None:
        return ""
    return re.sub(r"[^0-9a-z]", "", str(label).lower())


@dataclass(frozen=True)
class Column:
    name: str
    aliases: Tuple[str, ...]
    position: Optional[int] = None
    required: bool = False

    def matches(self, label: str) -> bool:
        return label in {normalize_label(alias) for alias in (self.name,) + self.aliases}


@dataclass(frozen=True)
class ColumnMap:
    """Resolved label -> index lookup for one sheet."""

    sheet: str
    indices: Dict[str, int]
    positional: bool = False

    def get(self, row: Sequence[Any], name: str) -> Any:
        index = self.indices.get(name)
        if index is None or index >= len(row):
            return None
        return row[index]

    def has(self, name: str) -> bool:
        return name in self.indices


@dataclass(frozen=True)
class SheetSchema:
    sheet: str
    columns: Tuple[Column, ...]

    def resolve(self, header: Sequence[Any]) -> ColumnMap:
        """
        Resolve column indices from ``header``.

        A header whose labels match none of the known aliases is treated as
        labels-only and falls back to the conventional positions. Otherwise
        every required column must be present by label, and an unmatched
        optional column takes its conventional position when no other column
        claimed that cell.
        """
        labels = [normalize_label(cell) for cell in header]
        indices: Dict[str, int] = {}
        for column in self.columns:
            for idx, label in enumerate(labels):
                if label and idx not in indices.values() and column.matches(label):
                    indices[column.name] = idx
                    break

        if not indices:
            positional = {
                column.name: column.position
                for column in self.columns
                if column.position is not None
            }
            return ColumnMap(sheet=self.sheet, indices=positional, positional=True)

        missing = [column.name for column in self.columns if column.required and column.name not in indices]
        if missing:
            raise SheetSchemaError(
                f"Sheet '{self.sheet}' is missing required column(s): {', '.join(missing)}. "
                f"Found headers: {[str(cell) for cell in header]}"
            )

        claimed = set(indices.values())
        for column in self.columns:
            position = column.position
            if column.name in indices or position is None or position >= len(labels) or position in claimed:
                continue
            indices[column.name] = position
            claimed.add(position)
            logger.warning(
                "Sheet '%s': header '%s' not recognised, reading it as %s by position",
                self.sheet,
                header[position],
                column.name,
            )
        return ColumnMap(sheet=self.sheet, indices=indices)


USE_CASE_SCHEMA = SheetSchema(
    sheet="Use Cases",
    columns=(
        Column("id", ("use case id", "usecaseid", "uc id", "key"), position=0, required=True),
        Column("name", ("title", "use case", "use case name"), position=1, required=True),
        Column("description", ("desc", "purpose", "summary"), position=2),
        Column("category", ("cat", "domain", "area"), position=3),
        Column(
            "current_level",
            ("cur", "current", "current automation level", "current maturity", "maturity", "level"),
            position=4,
        ),
        Column("target_level", ("tgt", "target", "target automation level", "target maturity"), position=5),
        Column("in_production", ("prod", "production", "live", "deployed"), position=6),
        Column("development_year", ("year", "dev year", "developed"), position=7),
        Column("business_unit", ("bu", "unit")),
        Column("monthly_reach", ("reach",)),
        Column("channel_costs", ("costs", "channel cost")),
        Column("time_to_develop", ("development weeks",)),
        Column("time_to_optimize", ("optimization weeks",)),
        Column("channels", ("channel list",)),
        Column("development_time", ("dev time", "size", "t-shirt size")),
        Column("process_steps", ("steps",)),
        Column("stakeholders", ("owners",)),
        Column("benefits", ("expected benefits",)),
        Column("revenue_impact", ("revenue",)),
        Column("implementation_cost", ("cost", "investment")),
    ),
)

TARGET_LEVEL_SCHEMA = SheetSchema(
    sheet="Target Automation Levels",
    columns=(
        Column("id", ("use case id", "usecaseid", "use case", "key"), position=0, required=True),
        Column("target_level", ("target", "tgt", "target automation level", "level"), position=1, required=True),
    ),
)

REPORTING_SCHEMA = SheetSchema(
    sheet="Reporting Data",
    columns=(
        Column("id", ("row id", "record id"), position=0),
        Column("use_case_id", ("use case", "use case ref"), position=1),
        Column("year", ("yr", "fiscal year"), position=2, required=True),
        Column("month", ("mon", "period"), position=3, required=True),
        Column("revenue", ("rev", "sales"), position=4),
        Column("impact", ("revenue impact", "benefit"), position=5),
        Column("investment", ("cost", "spend"), position=6),
    ),
)
