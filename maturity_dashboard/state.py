"""
Single application-level container for the use case and reporting collections.

Pages read the state through ``PageContext`` and only replace collections by
assignment, never by mutating them in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, MutableMapping, Optional

from maturity_dashboard.data.models import ReportingData, UseCase

STATE_KEY = "app_state"
PENDING_IMPORT_KEY = "pending_import"


@dataclass
class AppState:
    use_cases: List[UseCase] = field(default_factory=list)
    reporting_data: List[ReportingData] = field(default_factory=list)
    import_in_progress: bool = False
    loaded: bool = False


def get_app_state(session: MutableMapping[str, Any]) -> AppState:
    state = session.get(STATE_KEY)
    if not isinstance(state, AppState):
        state = AppState()
        session[STATE_KEY] = state
    return state


def replace_use_cases(state: AppState, use_cases: List[UseCase]) -> None:
    state.use_cases = list(use_cases)


def replace_reporting_data(state: AppState, reporting_data: List[ReportingData]) -> None:
    state.reporting_data = list(reporting_data)


def queue_import(session: MutableMapping[str, Any], state: AppState, job: Any) -> bool:
    """
    Park ``job`` for the next script run and mark an import as in progress.

    Returns False, leaving the queue untouched, while another import is pending.
    """
    if state.import_in_progress:
        return False
    state.import_in_progress = True
    session[PENDING_IMPORT_KEY] = job
    return True


def take_pending_import(session: MutableMapping[str, Any], state: AppState) -> Optional[Any]:
    job = session.pop(PENDING_IMPORT_KEY, None)
    if job is None:
        state.import_in_progress = False
    return job


def finish_import(state: AppState) -> None:
    state.import_in_progress = False
