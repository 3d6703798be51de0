from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

import streamlit as st

from maturity_dashboard.config import CHANNEL_LEVELS_SHEET
from maturity_dashboard.data.importer import (
    ImportCategory,
    ImportOutcome,
    ImportRequest,
    ImportResult,
    SheetImporter,
)
from maturity_dashboard.data.loader import build_row_source
from maturity_dashboard.data.sources import RowSource
from maturity_dashboard.state import (
    finish_import,
    queue_import,
    replace_reporting_data,
    replace_use_cases,
    take_pending_import,
)
from maturity_dashboard.ui.components.kpi import KpiCard, render_kpi_cards
from maturity_dashboard.ui.pages.context import PageContext

logger = logging.getLogger(__name__)

CATEGORY_LABELS = {
    ImportCategory.USE_CASES: "Use Case Metadata",
    ImportCategory.TARGET_LEVELS: "Target Automation Levels",
    ImportCategory.CHANNEL_LEVELS: "Channel Automation Levels",
    ImportCategory.REPORTING_DATA: "Reporting Data",
}
CATEGORY_HINTS = {
    ImportCategory.USE_CASES: "This sheet should contain columns for id, title, description, category, etc.",
    ImportCategory.TARGET_LEVELS: "This sheet should contain columns for use case id and target automation level.",
    ImportCategory.CHANNEL_LEVELS: "First column is the use case id; channel columns hold TRUE when deployed.",
    ImportCategory.REPORTING_DATA: "This sheet should contain reporting data such as revenue impact, time periods, etc.",
}


def _default_sheet_name(context: PageContext, category: ImportCategory) -> str:
    settings = context.settings
    return {
        ImportCategory.USE_CASES: settings.use_cases_sheet,
        ImportCategory.TARGET_LEVELS: settings.target_levels_sheet,
        ImportCategory.CHANNEL_LEVELS: settings.channel_levels_sheet or CHANNEL_LEVELS_SHEET,
        ImportCategory.REPORTING_DATA: settings.reporting_sheet,
    }[category]


def _row_source(context: PageContext) -> Optional[RowSource]:
    try:
        return build_row_source(context.settings)
    except FileNotFoundError as exc:
        logger.warning("Sheet imports unavailable: %s", exc)
        return None


def _report(result: ImportResult) -> None:
    if result.outcome is ImportOutcome.SUCCESS:
        st.success(f"**{result.title}**  \n{result.message}")
        st.toast(result.message)
    elif result.outcome is ImportOutcome.FAILED:
        st.error(f"**{result.title}**  \n{result.message}")
    else:
        st.warning(f"**{result.title}**  \n{result.message}")


def _apply(context: PageContext, result: ImportResult) -> None:
    if not result.ok:
        return
    if result.use_cases is not None:
        replace_use_cases(context.state, result.use_cases)
    if result.reporting_data is not None:
        replace_reporting_data(context.state, result.reporting_data)


def _run_pending(context: PageContext) -> None:
    """Run an import queued on the previous script run, with the triggers disabled."""
    job = take_pending_import(st.session_state, context.state)
    if job is None:
        return
    kind, payload = job
    try:
        with st.spinner("Importing..."):
            if kind == "workbook":
                result = SheetImporter(store=context.store).import_workbook(payload, context.state.use_cases)
            else:
                importer = SheetImporter(_row_source(context), store=context.store)
                result = importer.run(payload, context.state.use_cases)
    finally:
        finish_import(context.state)
    _apply(context, result)
    _report(result)


def _queue(context: PageContext, job: Tuple[str, Any]) -> None:
    if not queue_import(st.session_state, context.state, job):
        st.info("An import is already running.")
        return
    st.rerun()


def _stats(context: PageContext) -> None:
    use_cases = context.state.use_cases
    render_kpi_cards(
        [
            KpiCard(label="Total Use Cases", value=len(use_cases), help_text="Number of use cases in the system"),
            KpiCard(
                label="Categories",
                value=len({uc.category for uc in use_cases}),
                help_text="Unique categories",
            ),
            KpiCard(
                label="In Production",
                value=sum(1 for uc in use_cases if uc.in_production),
                help_text="Use cases deployed to production",
            ),
        ],
        columns=3,
    )
    diagnostics = st.session_state.get("data_diagnostics")
    if diagnostics:
        with st.expander("Load diagnostics", expanded=False):
            for key, value in diagnostics.items():
                st.write(f"- **{key.replace('_', ' ').title()}**: {value}")


def _sheet_import_form(context: PageContext) -> None:
    st.markdown("#### Import from Google Sheets")
    category = st.radio(
        "Data to import",
        list(CATEGORY_LABELS),
        format_func=lambda c: CATEGORY_LABELS[c],
        horizontal=True,
        key="import_category",
    )
    with st.form("sheet_import"):
        sheet_id = st.text_input(
            "Sheet ID",
            value=context.settings.spreadsheet_id or "",
            placeholder="1xxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxx",
        )
        sheet_name = st.text_input(
            "Sheet Name",
            placeholder=_default_sheet_name(context, category),
            key=f"sheet_name_{category.value}",
        )
        st.caption(CATEGORY_HINTS[category])
        submitted = st.form_submit_button(
            "Import Data",
            disabled=context.state.import_in_progress,
        )

    if submitted:
        request = ImportRequest(category=category, spreadsheet_id=sheet_id, sheet_name=sheet_name)
        _queue(context, ("sheet", request))


def _workbook_import(context: PageContext) -> None:
    st.markdown("#### Import from Workbook")
    st.caption("Upload an .xlsx export with 'Use Cases', 'Target Automation Levels' and 'Reporting Data' sheets.")
    uploaded = st.file_uploader("Workbook", type=["xlsx"], key="workbook_upload")
    if uploaded is None:
        return
    if not st.button("Import Workbook", disabled=context.state.import_in_progress, key="workbook_import"):
        return
    _queue(context, ("workbook", uploaded.getvalue()))


def render(context: PageContext) -> None:
    st.subheader("Admin")
    st.caption("Manage project settings and import data")
    _stats(context)
    st.divider()
    _sheet_import_form(context)
    st.divider()
    _workbook_import(context)
    _run_pending(context)
