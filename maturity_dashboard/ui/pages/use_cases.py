from __future__ import annotations

from dataclasses import replace
from typing import List

import streamlit as st

from maturity_dashboard.config import LEVEL_DESCRIPTIONS, MAX_AUTOMATION_LEVEL
from maturity_dashboard.data.aggregations import filter_use_cases, use_cases_frame
from maturity_dashboard.data.models import UseCase
from maturity_dashboard.state import replace_use_cases
from maturity_dashboard.ui.components.tables import render_table
from maturity_dashboard.ui.pages.context import PageContext

COLUMN_LABELS = {
    "id": "ID",
    "name": "Use Case",
    "category": "Category",
    "business_unit": "Business Unit",
    "current_level": "Current Level",
    "target_level": "Target Level",
    "in_production": "In Production",
    "development_year": "Dev Year",
    "development_time": "Dev Time",
    "monthly_reach": "Monthly Reach",
}


def _card(use_case: UseCase) -> None:
    with st.container(border=True):
        st.markdown(f"**{use_case.name}**  \n`{use_case.id}` · {use_case.category or 'Uncategorised'}")
        if use_case.description:
            st.caption(use_case.description)
        target = use_case.target_level if use_case.target_level is not None else "–"
        st.write(f"Level {use_case.current_level} → {target} · In production: {use_case.production_status.label}")
        if use_case.channels:
            st.caption("Channels: " + ", ".join(use_case.channels))


def _level_mapper(use_cases: List[UseCase], context: PageContext) -> None:
    """Adjust the current level of one use case in the session collection."""
    with st.expander("Map automation level", expanded=False):
        options = {f"{uc.name} ({uc.id})": uc for uc in use_cases}
        choice = st.selectbox("Use case", list(options), key="mapper_use_case")
        selected = options[choice]
        level = st.slider(
            "Current level",
            min_value=0,
            max_value=MAX_AUTOMATION_LEVEL,
            value=min(max(selected.current_level, 0), MAX_AUTOMATION_LEVEL),
            key=f"mapper_level_{selected.id}",
        )
        st.caption(LEVEL_DESCRIPTIONS[level])
        if st.button("Save Mapping", key="mapper_save"):
            updated = [
                replace(uc, current_level=level) if uc.id == selected.id else uc
                for uc in context.state.use_cases
            ]
            replace_use_cases(context.state, updated)
            st.success("The use case automation level has been successfully updated.")


def render(context: PageContext) -> None:
    st.subheader("Use Cases")
    filters = context.filters
    use_cases = filter_use_cases(
        context.state.use_cases,
        production=filters.production,
        channels=filters.channels,
        development_times=filters.development_times,
    )
    if filters.active:
        st.caption(f"Showing {len(use_cases)} of {len(context.state.use_cases)} use cases after filters.")
    if not use_cases:
        st.info("No use cases match the current filters.")
        return

    view = st.radio("View", ["Grid", "Table"], horizontal=True, key="uc_view")
    if view == "Table":
        render_table(
            use_cases_frame(use_cases),
            column_types={"current_level": "level", "target_level": "level", "monthly_reach": "number"},
            column_labels=COLUMN_LABELS,
            export_file_name="use_cases.csv",
        )
    else:
        cols = st.columns(3)
        for idx, use_case in enumerate(use_cases):
            with cols[idx % 3]:
                _card(use_case)

    _level_mapper(use_cases, context)
