# backend/mission_control/models/__init__.py
from mission_control.db import Base

# import all model modules so tables get registered on Base.metadata
from .user import User
from .auth_session import AuthSession
from .profile import Profile
from .mission import Mission, MISSION_STATUSES
from .milestone import Milestone, MILESTONE_STATUSES, PRIORITIES
from .log import Log
from .watcher import Watcher


__all__ = [
    "Base",
    "User",
    "AuthSession",
    "Profile",
    "Mission",
    "Milestone",
    "Log",
    "Watcher",
    "MISSION_STATUSES",
    "MILESTONE_STATUSES",
    "PRIORITIES",
]
