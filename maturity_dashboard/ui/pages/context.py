from __future__ import annotations

from dataclasses import dataclass

from maturity_dashboard.config import Settings
from maturity_dashboard.state import AppState
from maturity_dashboard.storage import KeyValueStore
from maturity_dashboard.ui.layout import UseCaseFilters


@dataclass
class PageContext:
    state: AppState
    settings: Settings
    store: KeyValueStore
    filters: UseCaseFilters
