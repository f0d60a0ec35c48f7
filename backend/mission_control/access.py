# backend/mission_control/access.py
"""Row-level rules shared by the routers.

A mission is visible to its owner and to every user holding a watcher row for
it. Rows the caller cannot see answer 404 so their existence is not leaked.
Writes are owner-only; a locked mission (completed or expired) refuses
milestone and log changes other than deletion.
"""
from fastapi import HTTPException
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from mission_control.models.mission import Mission
from mission_control.models.watcher import Watcher
from mission_control.status import mission_is_locked


def visible_to(user_id: str):
    """WHERE clause selecting missions the user owns or watches."""
    watched = select(Watcher.mission_id).where(Watcher.watcher_id == user_id)
    return or_(Mission.owner_id == user_id, Mission.id.in_(watched))


def is_watching(db: Session, mission_id: str, user_id: str) -> bool:
    return db.scalar(
        select(Watcher.id).where(Watcher.mission_id == mission_id, Watcher.watcher_id == user_id)
    ) is not None


def visible_mission(db: Session, mission_id: str, user_id: str) -> Mission:
    mission = db.get(Mission, mission_id)
    if not mission:
        raise HTTPException(status_code=404, detail="Mission not found")
    if mission.owner_id != user_id and not is_watching(db, mission_id, user_id):
        raise HTTPException(status_code=404, detail="Mission not found")
    return mission


def owned_mission(db: Session, mission_id: str, user_id: str) -> Mission:
    mission = visible_mission(db, mission_id, user_id)
    if mission.owner_id != user_id:
        raise HTTPException(status_code=403, detail="Only the mission owner can do that")
    return mission


def require_unlocked(mission: Mission) -> None:
    if mission_is_locked(mission.status):
        raise HTTPException(status_code=409, detail="Mission is locked")
