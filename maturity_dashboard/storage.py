"""
Small key-value store used to keep the imported reporting collection between
sessions.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol

from maturity_dashboard.config import REPORTING_STORAGE_KEY
from maturity_dashboard.data.models import ReportingData

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class JsonFileStore:
    """String values kept in a single JSON object on disk."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Failed to read store %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self.path)


def save_reporting_data(store: KeyValueStore, records: Iterable[ReportingData]) -> None:
    payload = [record.to_dict() for record in records]
    store.set(REPORTING_STORAGE_KEY, json.dumps(payload))
    logger.info("Stored %d reporting row(s) under '%s'", len(payload), REPORTING_STORAGE_KEY)


def load_reporting_data(store: KeyValueStore) -> List[ReportingData]:
    raw = store.get(REPORTING_STORAGE_KEY)
    if not raw:
        return []
    try:
        payload: Any = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.error("Failed to parse stored reporting data: %s", exc)
        return []
    if not isinstance(payload, list):
        logger.error("Stored reporting data is not a list; ignoring it")
        return []
    return [ReportingData.from_dict(item) for item in payload if isinstance(item, dict)]
