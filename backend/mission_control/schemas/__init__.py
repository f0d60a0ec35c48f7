# backend/mission_control/schemas/__init__.py

# Auth
from .auth import SignUpRequest, SignInRequest, UserOut, SessionOut

# Missions
from .mission import (
    MissionStatus,
    MissionCreate,
    MissionUpdate,
    MissionOut,
    ExpireResult,
)

# Milestones
from .milestone import (
    MilestoneStatus,
    Priority,
    MilestoneCreate,
    MilestoneUpdate,
    MilestoneOut,
)

# Logs, watchers, profiles
from .log import LogCreate, LogOut
from .watcher import WatcherCreate, WatcherOut
from .profile import ProfileUpdate, ProfileOut

__all__ = [
    "SignUpRequest", "SignInRequest", "UserOut", "SessionOut",
    "MissionStatus", "MissionCreate", "MissionUpdate", "MissionOut", "ExpireResult",
    "MilestoneStatus", "Priority", "MilestoneCreate", "MilestoneUpdate", "MilestoneOut",
    "LogCreate", "LogOut",
    "WatcherCreate", "WatcherOut",
    "ProfileUpdate", "ProfileOut",
]
