"""
Application-wide configuration constants and helper utilities.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

import streamlit as st


@dataclass(frozen=True)
class TabConfig:
    key: str
    label: str


# Ordered tab definitions for the dashboard
TABS: List[TabConfig] = [
    TabConfig("overview", "Dashboard"),
    TabConfig("use_cases", "Use Cases"),
    TabConfig("automation_matrix", "Automation Matrix"),
    TabConfig("reporting", "Reporting"),
    TabConfig("admin", "Admin"),
]

# Sheet names inside an exported workbook
USE_CASES_SHEET = "Use Cases"
TARGET_LEVELS_SHEET = "Target Automation Levels"
REPORTING_SHEET = "Reporting Data"
CHANNEL_LEVELS_SHEET = "Channel Automation"

# Key under which the reporting collection is persisted
REPORTING_STORAGE_KEY = "reportingData"

# Channel matrix: columns from this offset onwards hold channel labels
CHANNEL_COLUMN_START = 2

MATRIX_CHANNELS = [
    "Reach", "SOME", "Google", "AI/ML", "Web", "Email", "SMS", "Rådgiv",
    "Kunfej", "Rapport", "CLV", "Kanalpr.", "Churn", "Offering", "Pricing",
]
FILTER_CHANNELS = ["Email", "SMS", "Meta", "Google", "App", "Web", "Other"]
DEVELOPMENT_TIMES = ["S", "M", "L"]

STATUS_LEVELS = {
    0: ("Not planned", "#ffffff"),
    1: ("Backlog", "#fde68a"),
    2: ("On roadmap", "#f59e0b"),
    3: ("Deployed", "#22c55e"),
}

LEVEL_DESCRIPTIONS = [
    "Manual: Entirely human-operated process with no automation",
    "Assisted: Basic tools support the manual process",
    "Partial: Key parts of the process are automated",
    "Conditional: Automation with human supervision",
    "Supervised: Mostly automated with minimal human intervention",
    "Autonomous: Fully automated end-to-end process",
]
MAX_AUTOMATION_LEVEL = len(LEVEL_DESCRIPTIONS) - 1

TRUTHY = {"1", "true", "yes", "on"}


def get_secret(name: str, default: Optional[str] = None) -> Optional[str]:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except Exception:
        # st.secrets raises when no secrets.toml exists
        pass
    return default


def env_flag(name: str, default: bool = False) -> bool:
    raw = get_secret(name)
    if raw is None:
        return default
    return raw.strip().lower() in TRUTHY


@dataclass(frozen=True)
class Settings:
    spreadsheet_id: Optional[str]
    use_cases_sheet: str
    target_levels_sheet: str
    channel_levels_sheet: Optional[str]
    reporting_sheet: str
    credentials_file: str
    sheets_api_url: Optional[str]
    store_path: str
    use_sample_data: bool
    log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            spreadsheet_id=get_secret("SPREADSHEET_ID"),
            use_cases_sheet=get_secret("USE_CASES_SHEET", USE_CASES_SHEET) or USE_CASES_SHEET,
            target_levels_sheet=get_secret("TARGET_LEVELS_SHEET", TARGET_LEVELS_SHEET) or TARGET_LEVELS_SHEET,
            channel_levels_sheet=get_secret("CHANNEL_LEVELS_SHEET"),
            reporting_sheet=get_secret("REPORTING_SHEET", REPORTING_SHEET) or REPORTING_SHEET,
            credentials_file=get_secret("GOOGLE_APPLICATION_CREDENTIALS", "google-credentials.json")
            or "google-credentials.json",
            sheets_api_url=get_secret("SHEETS_API_URL"),
            store_path=get_secret("REPORTING_STORE_PATH", ".data/store.json") or ".data/store.json",
            use_sample_data=env_flag("USE_SAMPLE_DATA"),
            log_level=(get_secret("LOG_LEVEL", "INFO") or "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler once; Streamlit reruns the script on every interaction."""
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
