"""
Layout helpers for the Streamlit application (page config and sidebar).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import streamlit as st

from maturity_dashboard.config import DEVELOPMENT_TIMES, FILTER_CHANNELS
from maturity_dashboard.data.models import ProductionStatus

PRODUCTION_OPTIONS = {
    "All": None,
    "In production": ProductionStatus.IN_PRODUCTION,
    "Not in production": ProductionStatus.NOT_IN_PRODUCTION,
    "Unknown": ProductionStatus.UNKNOWN,
}


@dataclass
class UseCaseFilters:
    production: Optional[ProductionStatus] = None
    channels: List[str] = field(default_factory=list)
    development_times: List[str] = field(default_factory=list)

    @property
    def active(self) -> bool:
        return bool(self.production or self.channels or self.development_times)


def setup_page() -> None:
    """Set Streamlit page configuration."""
    st.set_page_config(
        page_title="Automation Maturity Dashboard",
        layout="wide",
        page_icon=":robot_face:",
    )


def sidebar_filters_ui() -> UseCaseFilters:
    """
    Render the sidebar filter controls and return the selected values.
    """
    st.sidebar.header("Filters")
    production_label = st.sidebar.selectbox(
        "Production status",
        list(PRODUCTION_OPTIONS),
        index=0,
        key="uc_production",
    )
    channels = st.sidebar.multiselect(
        "Channels",
        options=FILTER_CHANNELS,
        default=[],
        key="uc_channels",
    )
    development_times = st.sidebar.multiselect(
        "Development time",
        options=DEVELOPMENT_TIMES,
        default=[],
        key="uc_dev_time",
        help="S, M or L effort estimate.",
    )
    return UseCaseFilters(
        production=PRODUCTION_OPTIONS[production_label],
        channels=list(channels),
        development_times=list(development_times),
    )
