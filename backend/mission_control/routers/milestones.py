# backend/mission_control/routers/milestones.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from mission_control.access import owned_mission, require_unlocked, visible_mission, visible_to
from mission_control.db import get_db
from mission_control.deps import get_current_user
from mission_control.models.milestone import Milestone
from mission_control.models.mission import Mission
from mission_control.models.user import User
from mission_control.schemas.milestone import MilestoneCreate, MilestoneOut, MilestoneUpdate

router = APIRouter(tags=["milestones"])


def _milestone_in_mission(db: Session, mission_id: str, milestone_id: str) -> Milestone:
    ms = db.scalar(
        select(Milestone).where(Milestone.id == milestone_id, Milestone.mission_id == mission_id)
    )
    if not ms:
        raise HTTPException(status_code=404, detail="Milestone not found")
    return ms


@router.get("/missions/{mission_id}/milestones", response_model=List[MilestoneOut])
def list_milestones(mission_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    visible_mission(db, mission_id, user.id)
    return db.scalars(
        select(Milestone)
        .where(Milestone.mission_id == mission_id)
        .order_by(Milestone.deadline, Milestone.created_at, Milestone.id)
    ).all()


@router.get("/milestones", response_model=List[MilestoneOut])
def list_milestones_for_missions(
    mission_id: List[str] = Query(default=[]),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Milestones across a set of visible missions (used for card counts)."""
    if not mission_id:
        return []
    return db.scalars(
        select(Milestone)
        .join(Mission, Mission.id == Milestone.mission_id)
        .where(Milestone.mission_id.in_(mission_id), visible_to(user.id))
        .order_by(Milestone.deadline, Milestone.created_at, Milestone.id)
    ).all()


@router.post("/missions/{mission_id}/milestones", response_model=MilestoneOut, status_code=201)
def create_milestone(
    mission_id: str,
    payload: MilestoneCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Milestones can only be added while the mission is active."""
    mission = owned_mission(db, mission_id, user.id)
    require_unlocked(mission)

    ms = Milestone(
        mission_id=mission_id,
        name=payload.name,
        notes=payload.notes,
        deadline=payload.deadline,
        priority=payload.priority,
        status="active",
    )
    db.add(ms)
    db.commit()
    db.refresh(ms)
    return ms


@router.patch("/missions/{mission_id}/milestones/{milestone_id}", response_model=MilestoneOut)
def update_milestone(
    mission_id: str,
    milestone_id: str,
    payload: MilestoneUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    mission = owned_mission(db, mission_id, user.id)
    require_unlocked(mission)
    ms = _milestone_in_mission(db, mission_id, milestone_id)

    ms.status = payload.status
    db.commit()
    db.refresh(ms)
    return ms


@router.delete("/missions/{mission_id}/milestones/{milestone_id}", status_code=204)
def delete_milestone(
    mission_id: str,
    milestone_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Allowed even on locked missions. Logs go with the milestone."""
    owned_mission(db, mission_id, user.id)
    res = db.execute(
        delete(Milestone).where(Milestone.id == milestone_id, Milestone.mission_id == mission_id)
    )
    if res.rowcount == 0:
        raise HTTPException(status_code=404, detail="Milestone not found")
    db.commit()
    return None
