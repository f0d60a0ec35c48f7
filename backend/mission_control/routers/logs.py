# backend/mission_control/routers/logs.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from mission_control.access import owned_mission, require_unlocked, visible_to
from mission_control.db import get_db
from mission_control.deps import get_current_user
from mission_control.models.log import Log
from mission_control.models.milestone import Milestone
from mission_control.models.mission import Mission
from mission_control.models.user import User
from mission_control.schemas.log import LogCreate, LogOut

router = APIRouter(prefix="/logs", tags=["logs"])


@router.get("", response_model=List[LogOut])
def list_logs(
    milestone_id: List[str] = Query(default=[]),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    GET /logs?milestone_id=a&milestone_id=b
    Newest first; rows on missions the caller cannot see are left out.
    """
    if not milestone_id:
        return []
    return db.scalars(
        select(Log)
        .join(Milestone, Milestone.id == Log.milestone_id)
        .join(Mission, Mission.id == Milestone.mission_id)
        .where(Log.milestone_id.in_(milestone_id), visible_to(user.id))
        .order_by(Log.created_at.desc(), Log.id)
    ).all()


@router.post("", response_model=LogOut, status_code=201)
def create_log(payload: LogCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    ms = db.get(Milestone, payload.milestone_id)
    if not ms:
        raise HTTPException(status_code=404, detail="Milestone not found")
    mission = owned_mission(db, ms.mission_id, user.id)
    require_unlocked(mission)

    entry = Log(milestone_id=ms.id, content=payload.content)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry
