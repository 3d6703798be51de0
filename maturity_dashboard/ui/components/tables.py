"""
Table rendering with Streamlit column types for levels, amounts and counts.
"""

from __future__ import annotations

from typing import Dict, Optional

import pandas as pd
import streamlit as st

from maturity_dashboard.config import MAX_AUTOMATION_LEVEL


def _column(kind: str, label: str):
    if kind == "currency":
        return st.column_config.NumberColumn(label, format="€%.0f")
    if kind == "level":
        return st.column_config.ProgressColumn(label, min_value=0, max_value=MAX_AUTOMATION_LEVEL, format="%d")
    if kind == "number":
        return st.column_config.NumberColumn(label, format="%d")
    return st.column_config.Column(label)


def render_table(
    df: pd.DataFrame,
    column_types: Optional[Dict[str, str]] = None,
    column_labels: Optional[Dict[str, str]] = None,
    height: int = 400,
    export_file_name: str = "export.csv",
) -> None:
    """
    Show ``df`` with typed columns and offer the raw frame as a CSV download.

    ``column_types`` maps a column to ``currency``, ``level`` or ``number``;
    ``column_labels`` renames headers for display only.
    """
    if df.empty:
        st.info("No rows to display.")
        return

    labels = column_labels or {}
    column_config = {
        column: _column((column_types or {}).get(column, "text"), labels.get(column, column))
        for column in df.columns
        if column in labels or column in (column_types or {})
    }
    st.dataframe(
        df,
        column_config=column_config,
        use_container_width=True,
        height=height,
        hide_index=True,
    )
    st.download_button(
        "Download CSV",
        data=df.to_csv(index=False).encode("utf-8"),
        file_name=export_file_name,
        mime="text/csv",
        key=f"download_{export_file_name}",
    )
