from __future__ import annotations

import streamlit as st

from maturity_dashboard.data.aggregations import (
    average_levels,
    category_summary,
    level_distribution,
    monthly_revenue,
    portfolio_impact,
    total_monthly_reach,
)
from maturity_dashboard.ui.components.charts import (
    category_chart,
    level_distribution_chart,
    monthly_revenue_chart,
    portfolio_impact_chart,
    render_plotly,
)
from maturity_dashboard.ui.components.formatting import format_level_gap, format_share
from maturity_dashboard.ui.components.kpi import KpiCard, render_kpi_cards
from maturity_dashboard.ui.pages.context import PageContext


def _kpis(context: PageContext) -> list[KpiCard]:
    use_cases = context.state.use_cases
    avg_current, avg_target = average_levels(use_cases)
    revenue = monthly_revenue(context.state.reporting_data)
    latest_revenue = float(revenue["revenue"].iloc[-1]) if not revenue.empty else None
    in_production = sum(1 for uc in use_cases if uc.in_production)
    return [
        KpiCard(label="Automation Portfolio", value=len(use_cases), help_text="Use cases tracked"),
        KpiCard(
            label="Average Level",
            value=avg_current,
            kind="level",
            delta_display=format_level_gap(avg_current, avg_target),
            help_text=f"Average target level {avg_target:.1f}",
        ),
        KpiCard(
            label="In Production",
            value_display=format_share(in_production, len(use_cases)),
        ),
        KpiCard(label="Monthly Reach", value=total_monthly_reach(use_cases)),
        KpiCard(
            label="Latest Monthly Revenue",
            value=latest_revenue,
            kind="currency",
            help_text=f"Month: {revenue['month'].iloc[-1]}" if latest_revenue is not None else None,
        ),
    ]


def render(context: PageContext) -> None:
    st.subheader("Automation Maturity Overview")
    render_kpi_cards(_kpis(context), columns=5)

    use_cases = context.state.use_cases
    if not use_cases:
        st.info("No use cases available. Import data to get started.")
        return

    col_levels, col_categories = st.columns(2)
    with col_levels:
        render_plotly(level_distribution_chart(level_distribution(use_cases), title="Use Cases by Current Level"))
    with col_categories:
        render_plotly(category_chart(category_summary(use_cases), title="Use Cases by Category"))

    st.markdown("#### Portfolio Impact")
    impact = portfolio_impact(context.state.reporting_data, use_cases)
    if impact.empty:
        st.info("Import reporting data to see revenue impact and investment per year.")
    else:
        render_plotly(portfolio_impact_chart(impact, title="Impact by Development Cohort vs Investment"))

    revenue = monthly_revenue(context.state.reporting_data)
    if not revenue.empty:
        render_plotly(monthly_revenue_chart(revenue, title="Monthly Automation Revenue"))
