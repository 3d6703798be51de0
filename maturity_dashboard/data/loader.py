import json
import logging
import os
import re
import tempfile
from collections import Counter
from typing import Any, Dict, List, Optional

import streamlit as st

from maturity_dashboard.config import Settings
from maturity_dashboard.data.merge import merge_updates
from maturity_dashboard.data.models import UseCase
from maturity_dashboard.data.parsers import channel_level_updates, parse_target_levels, parse_use_cases
from maturity_dashboard.data.sources import GSpreadRowSource, HttpRowSource, RowSource, SheetFetchError

logger = logging.getLogger(__name__)


_PRIVATE_KEY_VALUE = re.compile(r'"private_key"\s*:\s*"(.*?)"', re.DOTALL)


def _escape_private_key_newlines(text: str) -> str:
    """Escape raw line breaks inside the ``private_key`` value of pasted credentials JSON."""
    match = _PRIVATE_KEY_VALUE.search(text)
    if match is None:
        return text
    key = match.group(1).replace("\r\n", "\n").replace("\n", "\\n")
    return text[: match.start(1)] + key + text[match.end(1) :]


def _materialize_creds_if_inline(path_or_json: str) -> str:
    """If GOOGLE_APPLICATION_CREDENTIALS holds JSON content, write it to a temp file and return the path."""
    if os.path.exists(path_or_json):
        return path_or_json
    text = path_or_json.strip()
    if not (text.startswith("{") and text.endswith("}")):
        return path_or_json
    content = text
    try:
        json.loads(content)
    except json.JSONDecodeError:
        repaired = _escape_private_key_newlines(content)
        try:
            json.loads(repaired)
            content = repaired
        except json.JSONDecodeError:
            logger.warning("Inline credentials are not valid JSON; writing them unchanged")
    tmp_path = os.path.join(tempfile.gettempdir(), "maturity-dashboard-inline-credentials.json")
    with open(tmp_path, "w", encoding="utf-8") as f:
        f.write(content)
    return tmp_path


def build_row_source(settings: Settings) -> RowSource:
    """Prefer the HTTP proxy when configured, else read Sheets directly."""
    if settings.sheets_api_url:
        return HttpRowSource(settings.sheets_api_url)
    service_account_file = _materialize_creds_if_inline(settings.credentials_file)
    if not os.path.exists(service_account_file):
        raise FileNotFoundError(f"Service account file not found: {service_account_file}")
    return GSpreadRowSource(service_account_file)


def load_use_cases(settings: Settings) -> List[UseCase]:
    """Wrapper that validates config and calls the cached implementation."""
    if not settings.spreadsheet_id:
        raise RuntimeError("SPREADSHEET_ID env var missing (env or secrets).")

    credentials_file = "" if settings.sheets_api_url else _materialize_creds_if_inline(settings.credentials_file)
    if credentials_file and not os.path.exists(credentials_file):
        raise FileNotFoundError(f"Service account file not found: {credentials_file}")

    # Explicit params keep the cache keyed on everything that changes the result
    return _load_use_cases_impl(
        settings.spreadsheet_id,
        settings.use_cases_sheet,
        settings.target_levels_sheet,
        settings.channel_levels_sheet,
        credentials_file,
        settings.sheets_api_url,
    )


def _optional_rows(source: RowSource, spreadsheet_id: str, sheet_name: Optional[str]) -> List[List[str]]:
    if not sheet_name:
        return []
    try:
        return source.fetch_rows(spreadsheet_id, sheet_name)
    except SheetFetchError as exc:
        logger.warning("Skipping optional sheet '%s': %s", sheet_name, exc)
        return []


@st.cache_data(show_spinner=False, ttl=600)
def _load_use_cases_impl(
    spreadsheet_id: str,
    use_cases_sheet: str,
    target_levels_sheet: str,
    channel_levels_sheet: Optional[str],
    credentials_file: str,
    sheets_api_url: Optional[str],
) -> List[UseCase]:
    """Load the use case collection with target and channel levels merged in.
    Cached by every sheet coordinate and the credentials in use.
    """
    source: RowSource = HttpRowSource(sheets_api_url) if sheets_api_url else GSpreadRowSource(credentials_file)

    use_case_rows = source.fetch_rows(spreadsheet_id, use_cases_sheet)
    target_rows = _optional_rows(source, spreadsheet_id, target_levels_sheet)
    channel_rows = _optional_rows(source, spreadsheet_id, channel_levels_sheet)

    use_cases = parse_use_cases(use_case_rows)
    target_updates = parse_target_levels(target_rows)
    use_cases = merge_updates(use_cases, target_updates)
    if channel_rows:
        use_cases = merge_updates(use_cases, channel_level_updates(channel_rows))

    id_counts = Counter(use_case.id for use_case in use_cases)
    diagnostics: Dict[str, Any] = {
        "raw_row_count": max(len(use_case_rows) - 1, 0),
        "use_case_count": len(use_cases),
        "duplicate_use_case_ids": sorted(uid for uid, count in id_counts.items() if count > 1),
        "target_level_rows": len(target_updates),
        "channel_matrix_rows": max(len(channel_rows) - 1, 0),
        "sheet_names": [name for name in (use_cases_sheet, target_levels_sheet, channel_levels_sheet) if name],
    }
    # Store into session state for pages to optionally display
    try:
        st.session_state["data_diagnostics"] = diagnostics
    except Exception:
        # No session state outside a Streamlit script run
        pass
    return use_cases
