# backend/mission_control/optimistic.py
"""
Optimistic list mutations with exact rollback.

    result = mutate(rows, remove_by_id(ms_id), lambda: client.delete_milestone(m_id, ms_id),
                    on_change=page.set_milestones)

The local change is published before the remote call runs. If the call raises
RemoteError the deep-copied snapshot is published instead, so the list is
restored exactly (same rows, same order). Nothing is de-duplicated: two
overlapping mutations on the same row race, and the later answer wins.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

from mission_control.client import RemoteError

log = logging.getLogger(__name__)

T = TypeVar("T")
Applier = Callable[[List[T]], List[T]]


@dataclass
class MutationResult(Generic[T]):
    ok: bool
    items: List[T]
    value: Any = None
    error: Optional[str] = None
    snapshot: List[T] = field(default_factory=list)

    @property
    def rolled_back(self) -> bool:
        return not self.ok


def mutate(
    items: Sequence[T],
    apply_local: Applier,
    remote_call: Callable[[], Any],
    on_change: Optional[Callable[[List[T]], None]] = None,
) -> MutationResult[T]:
    snapshot = copy.deepcopy(list(items))
    optimistic = apply_local(list(items))
    if on_change:
        on_change(optimistic)

    try:
        value = remote_call()
    except RemoteError as e:
        log.warning("remote write failed, rolling back: %s", e.message)
        restored = copy.deepcopy(snapshot)
        if on_change:
            on_change(restored)
        return MutationResult(ok=False, items=restored, error=e.message, snapshot=snapshot)

    return MutationResult(ok=True, items=optimistic, value=value, snapshot=snapshot)


# ----------------------------------------------------------------------
# Local appliers (each returns a new list)
# ----------------------------------------------------------------------
def _replace(row, **changes):
    if hasattr(row, "model_copy"):
        return row.model_copy(update=changes)
    if isinstance(row, dict):
        return {**row, **changes}
    new = copy.copy(row)
    for k, v in changes.items():
        setattr(new, k, v)
    return new


def _id_of(row):
    return row["id"] if isinstance(row, dict) else row.id


def _status_of(row):
    return row["status"] if isinstance(row, dict) else row.status


def set_status(row_id, status: str) -> Applier:
    def apply(items):
        return [_replace(r, status=status) if _id_of(r) == row_id else r for r in items]
    return apply


def toggle_status(row_id, done: str = "completed", undone: str = "active") -> Applier:
    def apply(items):
        out = []
        for r in items:
            if _id_of(r) == row_id:
                r = _replace(r, status=undone if _status_of(r) == done else done)
            out.append(r)
        return out
    return apply


def remove_by_id(row_id) -> Applier:
    def apply(items):
        return [r for r in items if _id_of(r) != row_id]
    return apply


def append_row(row) -> Applier:
    def apply(items):
        return items + [row]
    return apply


def prepend_row(row) -> Applier:
    def apply(items):
        return [row] + items
    return apply


def merge_row(items: Sequence[T], row: T) -> List[T]:
    """Swap in the server's copy of a row (same id); append if absent."""
    out, found = [], False
    for r in items:
        if _id_of(r) == _id_of(row):
            out.append(row)
            found = True
        else:
            out.append(r)
    if not found:
        out.append(row)
    return out
