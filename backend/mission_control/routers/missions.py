# backend/mission_control/routers/missions.py
import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, insert, update
from sqlalchemy.orm import Session

from mission_control.access import owned_mission, require_unlocked, visible_mission
from mission_control.db import get_db
from mission_control.deps import get_current_user
from mission_control.models.mission import Mission
from mission_control.models.user import User
from mission_control.models.watcher import Watcher
from mission_control.schemas.mission import ExpireResult, MissionCreate, MissionOut, MissionUpdate

log = logging.getLogger(__name__)

router = APIRouter(prefix="/missions", tags=["missions"])


# ----------------------------------------------------------------------
# Lists
# ----------------------------------------------------------------------
@router.get("", response_model=List[MissionOut])
def list_my_missions(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """Missions owned by the caller, newest first."""
    return db.scalars(
        select(Mission)
        .where(Mission.owner_id == user.id)
        .order_by(Mission.created_at.desc(), Mission.id)
    ).all()


@router.get("/watching", response_model=List[MissionOut])
def list_watched_missions(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """Missions the caller watches, newest first."""
    return db.scalars(
        select(Mission)
        .join(Watcher, Watcher.mission_id == Mission.id)
        .where(Watcher.watcher_id == user.id)
        .order_by(Mission.created_at.desc(), Mission.id)
    ).all()


@router.post("/expire", response_model=ExpireResult)
def expire_overdue_missions(
    today: date = Query(..., description="Caller's local date, YYYY-MM-DD"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Conditional update: every active mission of the caller whose end_date is
    strictly before `today` becomes expired. Running it again is a no-op.
    """
    res = db.execute(
        update(Mission)
        .where(
            Mission.owner_id == user.id,
            Mission.status == "active",
            Mission.end_date < today,
        )
        .values(status="expired")
        .execution_options(synchronize_session=False)
    )
    db.commit()
    if res.rowcount:
        log.info("expired %d mission(s) for %s (today=%s)", res.rowcount, user.id, today)
    return ExpireResult(expired=res.rowcount or 0)


# ----------------------------------------------------------------------
# Missions CRUD
# ----------------------------------------------------------------------
@router.get("/{mission_id}", response_model=MissionOut)
def get_mission(mission_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return visible_mission(db, mission_id, user.id)


@router.post("", response_model=MissionOut, status_code=201)
def create_mission(payload: MissionCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """Create a mission owned by the caller. Status always starts as active."""
    if payload.end_date < payload.start_date:
        raise HTTPException(status_code=400, detail="end_date must be on/after start_date")

    new_id = db.execute(
        insert(Mission).values(
            owner_id=user.id,
            name=payload.name,
            description=payload.description,
            start_date=payload.start_date,
            end_date=payload.end_date,
            status="active",
        ).returning(Mission.id)
    ).scalar_one()
    db.commit()
    return db.get(Mission, new_id)


@router.patch("/{mission_id}", response_model=MissionOut)
def update_mission(
    mission_id: str,
    payload: MissionUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Change status (e.g. mark satisfied). Only active missions can move."""
    mission = owned_mission(db, mission_id, user.id)
    if payload.status == mission.status:
        return mission
    require_unlocked(mission)

    mission.status = payload.status
    db.commit()
    db.refresh(mission)
    return mission


@router.delete("/{mission_id}", status_code=204)
def delete_mission(mission_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """Delete a mission with its milestones, logs and watcher rows."""
    mission = owned_mission(db, mission_id, user.id)
    db.delete(mission)
    db.commit()
    return None
