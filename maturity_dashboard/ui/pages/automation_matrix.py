from __future__ import annotations

from collections import OrderedDict
from typing import List

import streamlit as st

from maturity_dashboard.config import STATUS_LEVELS
from maturity_dashboard.data.aggregations import (
    channel_matrix_frame,
    channel_updates_from_matrix,
    matrix_channels,
)
from maturity_dashboard.data.merge import merge_updates
from maturity_dashboard.data.models import UseCase
from maturity_dashboard.state import replace_use_cases
from maturity_dashboard.ui.pages.context import PageContext


def _group_by_category(use_cases: List[UseCase]) -> "OrderedDict[str, List[UseCase]]":
    grouped: "OrderedDict[str, List[UseCase]]" = OrderedDict()
    for use_case in use_cases:
        grouped.setdefault(use_case.category or "Uncategorised", []).append(use_case)
    return grouped


def _legend() -> None:
    cols = st.columns(len(STATUS_LEVELS))
    for col, (level, (label, color)) in zip(cols, STATUS_LEVELS.items()):
        with col:
            st.markdown(
                f"<span style='display:inline-block;width:12px;height:12px;background:{color};"
                f"border:1px solid #d1d5db;border-radius:2px'></span> {level} · {label}",
                unsafe_allow_html=True,
            )


def render(context: PageContext) -> None:
    st.subheader("Target Automation Level")
    _legend()

    grouped = _group_by_category(context.state.use_cases)
    if not grouped:
        st.info("No use cases available. Import data to get started.")
        return

    channels = matrix_channels(context.state.use_cases)
    status_options = [label for label, _ in STATUS_LEVELS.values()]
    column_config = {
        channel: st.column_config.SelectboxColumn(channel, options=status_options, required=True)
        for channel in channels
    }

    tabs = st.tabs(list(grouped))
    for tab, (category, use_cases) in zip(tabs, grouped.items()):
        with tab:
            edited = st.data_editor(
                channel_matrix_frame(use_cases, channels),
                column_config=column_config,
                disabled=["ID", "Use Case"],
                hide_index=True,
                use_container_width=True,
                key=f"matrix_{category}",
            )
            if st.button("Save channel levels", key=f"matrix_save_{category}"):
                updates = channel_updates_from_matrix(edited, use_cases, channels)
                replace_use_cases(context.state, merge_updates(context.state.use_cases, updates))
                st.success(f"Channel levels saved for {len(use_cases)} use case(s) in {category}.")
