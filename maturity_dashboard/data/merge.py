"""
Merge helpers combining imported records with the current use case collection.

Inputs are never mutated; every function returns a new list.
"""

from __future__ import annotations

from dataclasses import fields, replace
from typing import Any, Dict, Iterable, List, Protocol, Sequence

from maturity_dashboard.data.models import ProductionStatus, UseCase


class UseCaseUpdate(Protocol):
    id: str

    def changes(self) -> Dict[str, Any]:
        ...


def _first_by_id(records: Iterable[Any]) -> Dict[str, Any]:
    index: Dict[str, Any] = {}
    for record in records:
        index.setdefault(record.id, record)
    return index


def merge_updates(base: Sequence[UseCase], updates: Iterable[UseCaseUpdate]) -> List[UseCase]:
    """
    Overlay partial updates onto ``base`` by id.

    Only the fields named by ``update.changes()`` are replaced, and ``None``
    values keep the base value. Base records without a matching update are
    returned as-is and updates matching no base record are dropped.
    """
    by_id = _first_by_id(updates)
    merged: List[UseCase] = []
    for use_case in base:
        update = by_id.get(use_case.id)
        if update is None:
            merged.append(use_case)
            continue
        changes = {key: value for key, value in update.changes().items() if value is not None}
        merged.append(replace(use_case, **changes) if changes else use_case)
    return merged


def _is_empty(value: Any) -> bool:
    if value is ProductionStatus.UNKNOWN:
        return True
    return value is None or value == "" or value == () or value == {}


def _overlay(existing: UseCase, imported: UseCase) -> UseCase:
    changes = {
        item.name: getattr(imported, item.name)
        for item in fields(UseCase)
        if not _is_empty(getattr(imported, item.name))
    }
    return replace(existing, **changes)


def merge_use_cases(existing: Sequence[UseCase], imported: Sequence[UseCase]) -> List[UseCase]:
    """
    Apply a use case import onto the current collection.

    Imported records overlay the existing record with the same id (blank
    imported fields keep the existing value); imported records with a new id
    are appended in import order.
    """
    incoming = _first_by_id(imported)
    existing_ids = {use_case.id for use_case in existing}

    merged = [
        _overlay(use_case, incoming[use_case.id]) if use_case.id in incoming else use_case
        for use_case in existing
    ]
    appended = set()
    for use_case in imported:
        if use_case.id in existing_ids or use_case.id in appended:
            continue
        appended.add(use_case.id)
        merged.append(use_case)
    return merged
