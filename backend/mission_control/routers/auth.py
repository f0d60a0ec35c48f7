# backend/mission_control/routers/auth.py
import logging
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from mission_control.db import get_db
from mission_control.deps import get_current_session, get_current_user
from mission_control.models.auth_session import AuthSession
from mission_control.models.user import User
from mission_control.routers.profiles import upsert_profile
from mission_control.schemas.auth import SignInRequest, SignUpRequest, SessionOut, UserOut
from mission_control.security import check_password, hash_password, new_token

log = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _open_session(request: Request, db: Session, user: User) -> SessionOut:
    ttl_days = request.app.state.settings.session_ttl_days
    session = AuthSession(
        token=new_token(),
        user_id=user.id,
        expires_at=datetime.now(timezone.utc) + timedelta(days=ttl_days),
    )
    db.add(session)
    db.commit()
    return SessionOut(
        access_token=session.token,
        expires_at=session.expires_at,
        user=UserOut.model_validate(user),
    )


@router.post("/sign-up", response_model=SessionOut, status_code=201)
def sign_up(payload: SignUpRequest, request: Request, db: Session = Depends(get_db)):
    """Create an account, its profile row, and a first session."""
    email = payload.email.strip().lower()
    exists = db.scalar(select(User.id).where(func.lower(User.email) == email))
    if exists:
        raise HTTPException(status_code=409, detail="Email already registered")

    user = User(email=email, password_hash=hash_password(payload.password))
    db.add(user)
    db.flush()
    upsert_profile(db, user.id, payload.name.strip(), email)
    db.commit()
    log.info("signed up user %s", user.id)
    return _open_session(request, db, user)


@router.post("/sign-in", response_model=SessionOut)
def sign_in(payload: SignInRequest, request: Request, db: Session = Depends(get_db)):
    email = payload.email.strip().lower()
    user = db.scalar(select(User).where(func.lower(User.email) == email))
    if not user or not check_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid login credentials")
    return _open_session(request, db, user)


@router.post("/sign-out", status_code=204)
def sign_out(session: AuthSession = Depends(get_current_session), db: Session = Depends(get_db)):
    db.delete(session)
    db.commit()
    return None


@router.get("/session", response_model=SessionOut)
def current_session(
    session: AuthSession = Depends(get_current_session),
    user: User = Depends(get_current_user),
):
    return SessionOut(
        access_token=session.token,
        expires_at=session.expires_at,
        user=UserOut.model_validate(user),
    )


@router.get("/user", response_model=UserOut)
def current_user(user: User = Depends(get_current_user)):
    return user
