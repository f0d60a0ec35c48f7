# backend/mission_control/routers/watchers.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, insert, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mission_control.access import owned_mission, visible_mission
from mission_control.db import get_db
from mission_control.deps import get_current_user
from mission_control.models.mission import Mission
from mission_control.models.user import User
from mission_control.models.watcher import Watcher
from mission_control.schemas.watcher import WatcherCreate, WatcherOut

log = logging.getLogger(__name__)

router = APIRouter(tags=["watchers"])


@router.get("/missions/{mission_id}/watchers", response_model=List[WatcherOut])
def list_watchers(mission_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """Owner sees every watcher row; a watcher sees only their own."""
    mission = visible_mission(db, mission_id, user.id)
    q = select(Watcher).where(Watcher.mission_id == mission_id).order_by(Watcher.created_at, Watcher.id)
    if mission.owner_id != user.id:
        q = q.where(Watcher.watcher_id == user.id)
    return db.scalars(q).all()


@router.get("/watchers", response_model=List[WatcherOut])
def list_watchers_for_missions(
    mission_id: List[str] = Query(default=[]),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Watcher rows for a set of missions: all rows on owned missions, own rows elsewhere."""
    if not mission_id:
        return []
    owned = select(Mission.id).where(Mission.owner_id == user.id)
    return db.scalars(
        select(Watcher)
        .where(Watcher.mission_id.in_(mission_id))
        .where((Watcher.mission_id.in_(owned)) | (Watcher.watcher_id == user.id))
        .order_by(Watcher.created_at, Watcher.id)
    ).all()


@router.get("/missions/{mission_id}/watchers/{watcher_id}", response_model=WatcherOut)
def get_watcher(
    mission_id: str,
    watcher_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Existence check for one (mission, watcher) pair."""
    mission = visible_mission(db, mission_id, user.id)
    if mission.owner_id != user.id and watcher_id != user.id:
        raise HTTPException(status_code=404, detail="Watcher not found")
    row = db.scalar(
        select(Watcher).where(Watcher.mission_id == mission_id, Watcher.watcher_id == watcher_id)
    )
    if not row:
        raise HTTPException(status_code=404, detail="Watcher not found")
    return row


@router.post("/missions/{mission_id}/watchers", response_model=WatcherOut, status_code=201)
def add_watcher(
    mission_id: str,
    payload: WatcherCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    mission = owned_mission(db, mission_id, user.id)
    if payload.watcher_id == mission.owner_id:
        raise HTTPException(status_code=400, detail="Owner cannot watch their own mission")
    if not db.get(User, payload.watcher_id):
        raise HTTPException(status_code=400, detail="watcher_id does not exist")

    try:
        new_id = db.execute(
            insert(Watcher).values(mission_id=mission_id, watcher_id=payload.watcher_id).returning(Watcher.id)
        ).scalar_one()
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="User is already watching this mission")
    return db.get(Watcher, new_id)


@router.delete("/missions/{mission_id}/watchers/{watcher_id}", status_code=204)
def remove_watcher(
    mission_id: str,
    watcher_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """A watcher can stop watching; the owner can remove anyone."""
    mission = visible_mission(db, mission_id, user.id)
    if user.id not in (watcher_id, mission.owner_id):
        raise HTTPException(status_code=403, detail="Cannot remove another user's watch")

    res = db.execute(
        delete(Watcher).where(Watcher.mission_id == mission_id, Watcher.watcher_id == watcher_id)
    )
    if res.rowcount == 0:
        raise HTTPException(status_code=404, detail="Watcher not found")
    db.commit()
    log.info("watcher %s removed from mission %s by %s", watcher_id, mission_id, user.id)
    return None
