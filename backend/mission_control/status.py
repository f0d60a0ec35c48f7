# backend/mission_control/status.py
"""
Status derivation for missions and milestones.

Stored statuses are lowercase (missions: active/completed/expired, milestones:
active/completed). Display labels and the milestone "unsatisfied" bucket are
derived here and never persisted.

"Today" is always the local calendar date. Callers compute it once per refresh
and pass it in, so the expiry pass and milestone bucketing agree.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional, TypeVar, Union

DateLike = Union[date, str]
T = TypeVar("T")

MISSION_LABELS = {"completed": "COMPLETED", "expired": "UNSATISFIED"}
MISSION_BUCKETS = ("active", "completed", "unsatisfied")
MILESTONE_BUCKETS = ("active", "completed", "unsatisfied")


def local_today(now: Optional[datetime] = None) -> date:
    """Local wall-clock date (not UTC)."""
    return (now or datetime.now()).date()


def as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def is_before(a: DateLike, b: DateLike) -> bool:
    return as_date(a) < as_date(b)


# ----------------------------------------------------------------------
# Missions
# ----------------------------------------------------------------------
def mission_display_label(status: str) -> str:
    return MISSION_LABELS.get(status, "ACTIVE")


def mission_is_locked(status: str) -> bool:
    return mission_display_label(status) != "ACTIVE"


def mission_is_overdue(status: str, end_date: DateLike, today: DateLike) -> bool:
    """True for a stored-active mission whose end date is strictly before today."""
    return status == "active" and is_before(end_date, today)


def mission_bucket(status: str) -> str:
    if status == "completed":
        return "completed"
    if status == "expired":
        return "unsatisfied"
    return "active"


def bucket_missions(missions: Iterable[T], status_of: Callable[[T], str] = lambda m: m.status) -> Dict[str, List[T]]:
    out: Dict[str, List[T]] = {b: [] for b in MISSION_BUCKETS}
    for m in missions:
        out[mission_bucket(status_of(m))].append(m)
    return out


# ----------------------------------------------------------------------
# Milestones
# ----------------------------------------------------------------------
def milestone_bucket(status: str, deadline: DateLike, parent_locked: bool, today: DateLike) -> str:
    if status == "completed":
        return "completed"
    if parent_locked or is_before(deadline, today):
        return "unsatisfied"
    return "active"


def bucket_milestones(milestones: Iterable[T], parent_locked: bool, today: DateLike) -> Dict[str, List[T]]:
    """Group milestones into active/completed/unsatisfied, keeping input order."""
    out: Dict[str, List[T]] = {b: [] for b in MILESTONE_BUCKETS}
    for ms in milestones:
        out[milestone_bucket(ms.status, ms.deadline, parent_locked, today)].append(ms)
    return out


def milestone_status_label(bucket: str) -> str:
    return {"completed": "COMPLETED", "unsatisfied": "EXPIRED"}.get(bucket, "ACTIVE")


def priority_label(priority: str) -> str:
    return (priority or "medium").upper()


# ----------------------------------------------------------------------
# Display text
# ----------------------------------------------------------------------
def format_dmy(value: DateLike) -> str:
    return as_date(value).strftime("%d/%m/%Y")


def format_date_range(start: DateLike, end: DateLike) -> str:
    return f"{format_dmy(start)} - {format_dmy(end)}"


def format_log_timestamp(ts: datetime) -> str:
    """'DD/MM/YYYY, HH:MM:SS' in local time; naive values are taken as UTC."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone().strftime("%d/%m/%Y, %H:%M:%S")


def milestones_text(done: int, total: int) -> str:
    return f"{done} / {total} Milestones"


def logs_text(count: int) -> str:
    return f"{count} log" if count == 1 else f"{count} logs"
