# backend/mission_control/deps.py
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from mission_control.db import get_db
from mission_control.models.auth_session import AuthSession
from mission_control.models.user import User
from mission_control.security import as_utc


def bearer_token(authorization: Optional[str] = Header(default=None)) -> str:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Not logged in")
    return authorization.split(" ", 1)[1].strip()


def get_current_session(
    token: str = Depends(bearer_token),
    db: Session = Depends(get_db),
) -> AuthSession:
    session = db.get(AuthSession, token)
    if not session:
        raise HTTPException(status_code=401, detail="Invalid session")
    if as_utc(session.expires_at) < datetime.now(timezone.utc):
        raise HTTPException(status_code=401, detail="Session expired")
    return session


def get_current_user(
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
) -> User:
    user = db.get(User, session.user_id)
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user
