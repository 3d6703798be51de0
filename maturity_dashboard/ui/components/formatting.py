"""
Display formatting for counts, euro amounts and automation levels.
"""

from __future__ import annotations

from typing import Optional

from maturity_dashboard.config import MAX_AUTOMATION_LEVEL

MISSING = "–"
SCALE_FACTORS = [
    (1_000_000, "M"),
    (1_000, "K"),
]


def format_number(value: Optional[float], decimals: int = 0) -> str:
    if value is None:
        return MISSING
    try:
        return f"{value:,.{decimals}f}"
    except (TypeError, ValueError):
        return MISSING


def format_currency(
    value: Optional[float],
    currency: str = "€",
    decimals: int = 0,
    compact: bool = True,
) -> str:
    """Euro-style amount, e.g. ``€1.2M`` when compact or ``€1,200,000`` otherwise."""
    if value is None:
        return MISSING
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return MISSING
    sign = "-" if amount < 0 else ""
    amount = abs(amount)
    if compact:
        for factor, suffix in SCALE_FACTORS:
            if amount >= factor:
                return f"{sign}{currency}{amount / factor:,.{decimals or 1}f}{suffix}"
    return f"{sign}{currency}{amount:,.{decimals}f}"


def format_level(value: Optional[float], decimals: int = 1) -> str:
    if value is None:
        return MISSING
    return f"Level {value:.{decimals}f} / {MAX_AUTOMATION_LEVEL}"


def format_level_gap(current: float, target: float) -> str:
    gap = target - current
    if gap <= 0:
        return "At target"
    return f"{gap:+.1f} to target"


def format_share(part: int, total: int) -> str:
    if not total:
        return "0 of 0"
    return f"{part} of {total} ({part / total:.0%})"
