"""
Plotly figures for the maturity dashboard, sharing one layout style.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from maturity_dashboard.data.aggregations import MONTH_ORDER

TEMPLATE = "plotly_white"
NAVY = "#003158"
BENEFIT_GREEN = "#22c55e"
INVESTMENT_RED = "rgba(239, 68, 68, 0.25)"
LEVEL_COLORS = ["#e5e7eb", "#bfdbfe", "#93c5fd", "#60a5fa", "#2563eb", "#1e3a8a"]


def _style(fig: go.Figure, title: Optional[str], yaxis_title: str, hovermode: str = "closest") -> go.Figure:
    fig.update_layout(
        template=TEMPLATE,
        title=title,
        hovermode=hovermode,
        margin=dict(l=40, r=20, t=60, b=40),
    )
    fig.update_xaxes(showgrid=False, title=None)
    fig.update_yaxes(showgrid=True, zeroline=True, title=yaxis_title)
    return fig


def render_plotly(fig: go.Figure) -> None:
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})


def category_chart(summary: pd.DataFrame, title: Optional[str] = None) -> go.Figure:
    """Use case count per category, coloured by the category's average level."""
    fig = px.bar(
        summary,
        x="category",
        y="count",
        color="avg_level",
        color_continuous_scale=LEVEL_COLORS[1:],
        range_color=(0, len(LEVEL_COLORS) - 1),
        text_auto=True,
        hover_data={"avg_level": ":.1f"},
        labels={"avg_level": "Avg level"},
    )
    fig.update_traces(textposition="outside", cliponaxis=False)
    return _style(fig, title, "Use cases")


def monthly_revenue_chart(revenue: pd.DataFrame, title: Optional[str] = None) -> go.Figure:
    fig = px.line(
        revenue,
        x="month",
        y="revenue",
        markers=True,
        category_orders={"month": MONTH_ORDER},
    )
    fig.update_traces(line=dict(color=NAVY, width=3))
    fig.update_yaxes(tickprefix="€")
    return _style(fig, title, "Revenue", hovermode="x unified")


def level_distribution_chart(df: pd.DataFrame, title: Optional[str] = None) -> go.Figure:
    fig = go.Figure(
        go.Bar(
            x=df["level"],
            y=df["count"],
            marker_color=LEVEL_COLORS[: len(df)],
            text=df["count"],
            textposition="outside",
            cliponaxis=False,
        )
    )
    return _style(fig, title, "Use cases")


def portfolio_impact_chart(df: pd.DataFrame, title: Optional[str] = None) -> go.Figure:
    """Stacked impact bars per development cohort over investment, with the net benefit line."""
    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=df["year"],
            y=df["investment"],
            name="Investment",
            marker_color=INVESTMENT_RED,
        )
    )
    impact_cols = [col for col in df.columns if col.startswith("impact_")]
    for idx, col in enumerate(impact_cols):
        fig.add_trace(
            go.Bar(
                x=df["year"],
                y=df[col],
                name=f"Impact {col.split('_', 1)[1]} cohort",
                marker_color=LEVEL_COLORS[(idx + 2) % len(LEVEL_COLORS)],
            )
        )
    fig.add_trace(
        go.Scatter(
            x=df["year"],
            y=df["cumulative_net_benefit"],
            name="Cumulative net benefit",
            mode="lines+markers",
            line=dict(color=BENEFIT_GREEN, width=3),
        )
    )
    fig.update_layout(barmode="stack", legend_title="Series")
    return _style(fig, title, "Amount", hovermode="x unified")
