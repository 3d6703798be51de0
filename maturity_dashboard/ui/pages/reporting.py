from __future__ import annotations

import pandas as pd
import streamlit as st

from maturity_dashboard.data.aggregations import reporting_frame
from maturity_dashboard.ui.components.kpi import KpiCard, render_kpi_cards
from maturity_dashboard.ui.components.tables import render_table
from maturity_dashboard.ui.pages.context import PageContext

AMOUNT_COLUMNS = {"revenue": "currency", "impact": "currency", "investment": "currency"}


def render(context: PageContext) -> None:
    st.subheader("Reporting Data")
    df = reporting_frame(context.state.reporting_data)
    if df.empty:
        st.info("No reporting data imported yet. Use the Admin tab to import a reporting sheet.")
        return

    known_ids = {uc.id for uc in context.state.use_cases}
    unmatched = df["use_case_id"].notna() & ~df["use_case_id"].isin(known_ids)
    render_kpi_cards(
        [
            KpiCard(label="Revenue", value=float(df["revenue"].sum()), kind="currency"),
            KpiCard(label="Impact", value=float(df["impact"].sum()), kind="currency"),
            KpiCard(label="Investment", value=float(df["investment"].sum()), kind="currency"),
            KpiCard(
                label="Unattributed Rows",
                value=int(unmatched.sum()),
                help_text="Rows referencing a use case that is not loaded",
            ),
        ],
        columns=4,
    )

    by_use_case = (
        df.assign(use_case_id=df["use_case_id"].fillna("–"))
        .groupby("use_case_id", as_index=False)[["revenue", "impact", "investment"]]
        .sum()
    )
    names = pd.Series({uc.id: uc.name for uc in context.state.use_cases}, dtype=object)
    by_use_case.insert(1, "name", by_use_case["use_case_id"].map(names).fillna(""))

    st.markdown("#### Totals by Use Case")
    render_table(
        by_use_case,
        column_types=AMOUNT_COLUMNS,
        export_file_name="reporting_by_use_case.csv",
    )

    st.markdown("#### Imported Rows")
    render_table(
        df,
        column_types=AMOUNT_COLUMNS,
        export_file_name="reporting_data.csv",
    )
