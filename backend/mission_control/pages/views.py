# backend/mission_control/pages/views.py
"""Render output of the pages: plain data, no markup."""
from typing import List, Optional
from pydantic import BaseModel, Field


class WatcherChip(BaseModel):
    user_id: str
    initial: str
    name: str


# ----------------------------------------------------------------------
# Mission list
# ----------------------------------------------------------------------
class MissionCard(BaseModel):
    id: str
    title: str
    status_label: str
    date_range_text: str
    milestones_text: str
    watchers: List[WatcherChip] = Field(default_factory=list)


class MissionSection(BaseModel):
    active: List[MissionCard] = Field(default_factory=list)
    completed: List[MissionCard] = Field(default_factory=list)
    unsatisfied: List[MissionCard] = Field(default_factory=list)


class MissionListView(BaseModel):
    loading: bool = False
    error: Optional[str] = None
    mine: MissionSection = Field(default_factory=MissionSection)
    watching: MissionSection = Field(default_factory=MissionSection)


# ----------------------------------------------------------------------
# Mission detail
# ----------------------------------------------------------------------
class LogItem(BaseModel):
    id: str
    content: str
    timestamp_text: str


class MilestoneCardView(BaseModel):
    id: str
    title: str
    notes: Optional[str] = None
    bucket: str
    status_label: str
    deadline_text: str
    priority_label: str
    logs_text: str
    checked: bool
    can_toggle: bool = False
    can_add_log: bool = False
    can_delete: bool = False
    logs: List[LogItem] = Field(default_factory=list)


class MilestoneBuckets(BaseModel):
    active: List[MilestoneCardView] = Field(default_factory=list)
    completed: List[MilestoneCardView] = Field(default_factory=list)
    unsatisfied: List[MilestoneCardView] = Field(default_factory=list)


class MissionHeader(BaseModel):
    id: str
    title: str
    status_label: str
    start_date_text: str
    end_date_text: str
    description: Optional[str] = None
    watching_owner: Optional[WatcherChip] = None


class MissionActionsView(BaseModel):
    add_watcher: bool = False
    mark_satisfied: bool = False
    delete_mission: bool = False
    add_milestone: bool = False
    stop_watching: bool = False


class MissionDetailView(BaseModel):
    loading: bool = False
    error: Optional[str] = None
    not_found: bool = False
    role: Optional[str] = None
    header: Optional[MissionHeader] = None
    watchers: List[WatcherChip] = Field(default_factory=list)
    actions: MissionActionsView = Field(default_factory=MissionActionsView)
    milestones: MilestoneBuckets = Field(default_factory=MilestoneBuckets)
