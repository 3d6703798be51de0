from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import streamlit as st

from maturity_dashboard.ui.components.formatting import format_currency, format_level, format_number


@dataclass
class KpiCard:
    """One ``st.metric`` tile; ``kind`` is ``count``, ``currency`` or ``level``."""

    label: str
    value: Optional[float] = None
    kind: str = "count"
    value_display: Optional[str] = None
    decimals: int = 0
    delta_display: Optional[str] = None
    help_text: Optional[str] = None


def _format_value(card: KpiCard) -> str:
    if card.value_display is not None:
        return card.value_display
    if card.kind == "currency":
        return format_currency(card.value, decimals=card.decimals)
    if card.kind == "level":
        return format_level(card.value)
    return format_number(card.value, decimals=card.decimals)


def render_kpi_cards(cards: Sequence[KpiCard], columns: int = 3) -> None:
    cards = list(cards)
    if not cards:
        return

    for start in range(0, len(cards), max(columns, 1)):
        row_cards = cards[start: start + columns]
        for col, card in zip(st.columns(len(row_cards)), row_cards):
            col.metric(
                label=card.label,
                value=_format_value(card),
                delta=card.delta_display,
                delta_color="off",
                help=card.help_text,
            )
