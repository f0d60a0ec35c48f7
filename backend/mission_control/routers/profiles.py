# backend/mission_control/routers/profiles.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from mission_control.db import get_db
from mission_control.deps import get_current_user
from mission_control.models.profile import Profile
from mission_control.models.user import User
from mission_control.schemas.profile import ProfileOut, ProfileUpdate

router = APIRouter(prefix="/profiles", tags=["profiles"])


def upsert_profile(db: Session, user_id: str, name: Optional[str], email: str) -> Profile:
    """Insert or refresh the profile row for a user. Caller commits."""
    profile = db.get(Profile, user_id)
    if profile is None:
        profile = Profile(id=user_id, name=name, email=email)
        db.add(profile)
    else:
        profile.name = name
        profile.email = email
    return profile


@router.get("", response_model=List[ProfileOut])
def list_profiles(
    id: List[str] = Query(default=[]),
    db: Session = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    """Profiles for a set of user ids (name lookup)."""
    if not id:
        return []
    return db.scalars(select(Profile).where(Profile.id.in_(id))).all()


@router.get("/by-email", response_model=ProfileOut)
def profile_by_email(
    email: str = Query(..., min_length=3),
    db: Session = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    profile = db.scalar(select(Profile).where(func.lower(Profile.email) == email.strip().lower()))
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.put("/me", response_model=ProfileOut)
def update_my_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    name = payload.name.strip() if payload.name else None
    profile = upsert_profile(db, user.id, name or None, user.email)
    db.commit()
    return profile
