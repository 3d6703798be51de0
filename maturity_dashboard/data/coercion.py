"""
Best-effort conversion of raw spreadsheet cells into typed values.

Every helper degrades to a default instead of raising so a single malformed
cell never aborts an otherwise valid row or sheet.
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional, Tuple

from maturity_dashboard.data.models import DevelopmentTime, ProductionStatus

_INT_PATTERN = re.compile(r"^[+-]?[0-9]+$")
_THOUSANDS_PATTERN = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d+)?$")
_LIST_SEPARATORS = re.compile(r"[,;\n]")

DEPLOYED_LEVEL = 3
NOT_PLANNED_LEVEL = 0

POSITIVE_STATUS_TOKENS = {"yes", "y", "1", "live", "deployed"}
NEGATIVE_STATUS_TOKENS = {"false", "no", "n", "0"}

DEVELOPMENT_TIME_TOKENS = {
    "s": DevelopmentTime.SMALL,
    "small": DevelopmentTime.SMALL,
    "m": DevelopmentTime.MEDIUM,
    "medium": DevelopmentTime.MEDIUM,
    "l": DevelopmentTime.LARGE,
    "large": DevelopmentTime.LARGE,
}


def to_text(cell: Any) -> str:
    if cell is None:
        return ""
    return str(cell).strip()


def to_optional_str(cell: Any) -> Optional[str]:
    text = to_text(cell)
    return text or None


def to_int(cell: Any, default: Optional[int] = 0) -> Optional[int]:
    """Parse a base-10 integer cell; anything else yields ``default``."""
    if isinstance(cell, bool):
        return default
    if isinstance(cell, int):
        return cell
    text = to_text(cell)
    if not _INT_PATTERN.match(text):
        return default
    return int(text)


def to_float(cell: Any, default: float = 0.0) -> float:
    if isinstance(cell, bool) or cell is None:
        return default
    if isinstance(cell, (int, float)):
        value = float(cell)
    else:
        text = to_text(cell)
        if not text:
            return default
        if "," in text:
            # thousands separators only; "1,5" reads as default
            if not _THOUSANDS_PATTERN.match(text):
                return default
            text = text.replace(",", "")
        try:
            value = float(text)
        except (ValueError, OverflowError):
            return default
    if not math.isfinite(value):
        return default
    return value


def to_optional_float(cell: Any) -> Optional[float]:
    if not to_text(cell):
        return None
    value = to_float(cell, default=math.nan)
    return None if math.isnan(value) else value


def to_bool(cell: Any) -> bool:
    return to_text(cell).lower() == "true"


def to_list(cell: Any) -> Tuple[str, ...]:
    text = to_text(cell)
    if not text:
        return ()
    return tuple(part.strip() for part in _LIST_SEPARATORS.split(text) if part.strip())


def deployed_level(cell: Any) -> int:
    """Channel matrix rule: only the literal ``TRUE`` marks a deployed channel."""
    return DEPLOYED_LEVEL if to_text(cell) == "TRUE" else NOT_PLANNED_LEVEL


def to_production_status(cell: Any) -> ProductionStatus:
    if to_bool(cell):
        return ProductionStatus.IN_PRODUCTION
    token = to_text(cell).lower()
    if token in POSITIVE_STATUS_TOKENS:
        return ProductionStatus.IN_PRODUCTION
    if token in NEGATIVE_STATUS_TOKENS:
        return ProductionStatus.NOT_IN_PRODUCTION
    return ProductionStatus.UNKNOWN


def to_development_time(cell: Any) -> Optional[DevelopmentTime]:
    return DEVELOPMENT_TIME_TOKENS.get(to_text(cell).lower())
