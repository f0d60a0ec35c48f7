# backend/mission_control/roles.py
import re
from dataclasses import dataclass
from typing import Optional

OWNER = "owner"
WATCHER = "watcher"

PLACEHOLDER_LEN = 6


def resolve_role(viewer_id: Optional[str], owner_id: Optional[str]) -> Optional[str]:
    """None until both ids are known; the page shows loading instead of guessing."""
    if not viewer_id or not owner_id:
        return None
    return OWNER if viewer_id == owner_id else WATCHER


def watcher_placeholder(user_id: str) -> str:
    return re.sub(r"[^A-Za-z0-9]", "", user_id or "")[:PLACEHOLDER_LEN].upper()


def display_name(profile_name: Optional[str], user_id: str) -> str:
    name = (profile_name or "").strip()
    return name or watcher_placeholder(user_id)


def chip_initial(name: str) -> str:
    return name[:1].upper() if name else "?"


@dataclass(frozen=True)
class MilestoneControls:
    checkbox: bool = False
    add_log: bool = False
    delete: bool = False


@dataclass(frozen=True)
class MissionActions:
    add_watcher: bool = False
    mark_satisfied: bool = False
    delete_mission: bool = False
    add_milestone: bool = False
    stop_watching: bool = False


NO_CONTROLS = MilestoneControls()


def milestone_controls(role: Optional[str], mission_locked: bool) -> MilestoneControls:
    """Watchers (and unresolved viewers) get nothing, whatever the statuses are."""
    if role != OWNER:
        return NO_CONTROLS
    editable = not mission_locked
    return MilestoneControls(checkbox=editable, add_log=editable, delete=True)


def mission_actions(role: Optional[str], label: str) -> MissionActions:
    if role == OWNER:
        active = label == "ACTIVE"
        return MissionActions(
            add_watcher=True,
            mark_satisfied=active,
            delete_mission=True,
            add_milestone=active,
        )
    if role == WATCHER:
        return MissionActions(stop_watching=True)
    return MissionActions()
