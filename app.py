import logging

import streamlit as st

from maturity_dashboard.bootstrap_env import ensure_env
from maturity_dashboard.config import TABS, Settings, configure_logging
from maturity_dashboard.data.loader import _load_use_cases_impl, load_use_cases
from maturity_dashboard.data.sample import sample_use_cases
from maturity_dashboard.data.schema import SheetSchemaError
from maturity_dashboard.data.sources import SheetFetchError
from maturity_dashboard.state import AppState, get_app_state, replace_reporting_data, replace_use_cases
from maturity_dashboard.storage import JsonFileStore, load_reporting_data
from maturity_dashboard.ui.layout import UseCaseFilters, setup_page, sidebar_filters_ui
from maturity_dashboard.ui.pages import admin, automation_matrix, overview, reporting, use_cases
from maturity_dashboard.ui.pages.context import PageContext

logger = logging.getLogger(__name__)


PAGE_RENDERERS = {
    "overview": overview.render,
    "use_cases": use_cases.render,
    "automation_matrix": automation_matrix.render,
    "reporting": reporting.render,
    "admin": admin.render,
}


def _load_collections(state: AppState, settings: Settings, store: JsonFileStore) -> None:
    if settings.use_sample_data:
        replace_use_cases(state, sample_use_cases())
    else:
        try:
            with st.spinner("Loading use cases from Google Sheets..."):
                replace_use_cases(state, load_use_cases(settings))
        except (RuntimeError, FileNotFoundError, SheetFetchError, SheetSchemaError) as exc:
            logger.error("Failed to load use cases: %s", exc)
            st.error(f"Could not load use cases: {exc}")
    replace_reporting_data(state, load_reporting_data(store))
    state.loaded = True


def _active_filter_summary(filters: UseCaseFilters, total: int) -> None:
    badges = []
    if filters.production is not None:
        badges.append(f"Production: {filters.production.label}")
    if filters.channels:
        badges.append("Channels: " + ", ".join(filters.channels))
    if filters.development_times:
        badges.append("Dev time: " + ", ".join(filters.development_times))
    summary_text = "Active Filters: " + " | ".join(badges) if badges else "Active Filters: All use cases"
    st.markdown(f"**{summary_text}**")
    st.caption(f"{total} use cases loaded.")


def main() -> None:
    ensure_env()  # must run before Settings reads env/secrets
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    setup_page()
    st.title("Automation Maturity Dashboard")

    state = get_app_state(st.session_state)
    store = JsonFileStore(settings.store_path)

    if st.sidebar.button("🔄 Refresh Data"):
        _load_use_cases_impl.clear()  # type: ignore[attr-defined]
        state.loaded = False

    if not state.loaded:
        _load_collections(state, settings, store)

    filters = sidebar_filters_ui()
    if not state.use_cases:
        st.warning("No use cases loaded. Check the Google Sheet settings or import data from the Admin tab.")
    else:
        _active_filter_summary(filters, len(state.use_cases))

    context = PageContext(
        state=state,
        settings=settings,
        store=store,
        filters=filters,
    )

    tab_labels = [tab.label for tab in TABS]
    streamlit_tabs = st.tabs(tab_labels)

    for streamlit_tab, tab_config in zip(streamlit_tabs, TABS):
        renderer = PAGE_RENDERERS.get(tab_config.key)
        if renderer is None:
            continue
        with streamlit_tab:
            renderer(context)


if __name__ == "__main__":
    main()
