# backend/mission_control/pages/mission_detail.py
"""
Mission detail page.

The owner gets the watcher list and every control. A watcher gets a read-only
view with a single "stop watching" action. The role is only known once both
the viewer id and the mission's owner id are in; until then view() reports
loading.

Milestone toggle/delete and "mark satisfied" go through optimistic.mutate:
the local list changes first and is restored verbatim if the write fails.
"""
import logging
from collections import defaultdict
from datetime import date
from typing import Callable, Dict, List, Optional, get_args

from mission_control.client import AuthError, MissionControlClient, NotFoundError, RemoteError
from mission_control.optimistic import merge_row, mutate, remove_by_id, set_status
from mission_control.pages.auth import valid_email
from mission_control.pages.base import Page
from mission_control.pages.views import (
    LogItem,
    MilestoneBuckets,
    MilestoneCardView,
    MissionActionsView,
    MissionDetailView,
    MissionHeader,
    WatcherChip,
)
from mission_control.roles import (
    OWNER,
    WATCHER,
    chip_initial,
    display_name,
    milestone_controls,
    mission_actions,
    resolve_role,
)
from mission_control.schemas.log import LogOut
from mission_control.schemas.milestone import MilestoneOut, Priority
from mission_control.schemas.mission import MissionOut
from mission_control.schemas.profile import ProfileOut
from mission_control.schemas.watcher import WatcherOut
from mission_control.status import (
    as_date,
    bucket_milestones,
    format_dmy,
    format_log_timestamp,
    local_today,
    logs_text,
    milestone_status_label,
    mission_display_label,
    mission_is_locked,
    priority_label,
)

log = logging.getLogger(__name__)

ALREADY_WATCHING = "That user is already watching this mission."
OWNER_ONLY = "Only the mission owner can do that."
LOCKED = "This mission is locked."


class MissionDetailPage(Page):
    def __init__(
        self,
        client: MissionControlClient,
        mission_id: str,
        today: Callable[[], date] = local_today,
    ):
        super().__init__()
        self.client = client
        self.mission_id = mission_id
        self.today = today
        self.today_value: date = today()

        self.viewer_id: Optional[str] = None
        self.viewer_email: Optional[str] = None
        self.mission: Optional[MissionOut] = None
        self.not_found = False
        self.deleted = False
        self.stopped_watching = False

        self.watchers: List[WatcherOut] = []
        self.profiles: Dict[str, ProfileOut] = {}
        self.milestones: List[MilestoneOut] = []
        self.logs: List[LogOut] = []

    # ------------------------------------------------------------------
    # derived state
    # ------------------------------------------------------------------
    @property
    def role(self) -> Optional[str]:
        return resolve_role(self.viewer_id, self.mission.owner_id if self.mission else None)

    @property
    def is_owner(self) -> bool:
        return self.role == OWNER

    @property
    def locked(self) -> bool:
        return self.mission is not None and mission_is_locked(self.mission.status)

    def set_milestones(self, items: List[MilestoneOut]) -> None:
        self._set(milestones=items)

    # ------------------------------------------------------------------
    # loading
    # ------------------------------------------------------------------
    def load(self) -> None:
        self._set(loading=True, error=None, not_found=False, today_value=self.today())

        try:
            user = self.client.get_user()
        except AuthError:
            self._set(loading=False)
            self._fail("You must be logged in to view this mission.")
            return
        except RemoteError as e:
            self._set(loading=False)
            self._fail(e.message)
            return
        self._set(viewer_id=user.id, viewer_email=user.email)

        try:
            mission = self.client.mission(self.mission_id)
        except NotFoundError:
            self._set(mission=None, not_found=True, loading=False)
            return
        except RemoteError as e:
            self._set(loading=False)
            self._fail(e.message)
            return
        self._set(mission=mission)
        if self.closed:
            return

        if self.role == OWNER:
            self._load_watchers()
        else:
            try:
                own_row = self.client.watcher(self.mission_id, self.viewer_id)
            except RemoteError as e:
                self._set(loading=False)
                self._fail(e.message)
                return
            if own_row is None:
                self._set(mission=None, not_found=True, loading=False)
                return
            self._load_owner_profile()

        self._load_milestones()
        self._set(loading=False)

    def _load_watchers(self) -> None:
        try:
            rows = self.client.watchers_by_mission(self.mission_id)
        except RemoteError as e:
            log.warning("could not load watchers for %s: %s", self.mission_id, e.message)
            rows = []
        self._set(watchers=rows)
        self._load_profiles([w.watcher_id for w in rows])

    def _load_owner_profile(self) -> None:
        self._set(watchers=[])
        self._load_profiles([self.mission.owner_id])

    def _load_profiles(self, user_ids: List[str]) -> None:
        if not user_ids:
            return
        try:
            found = self.client.profiles_by_ids(user_ids)
        except RemoteError as e:
            log.warning("could not load profiles: %s", e.message)
            return
        self._set(profiles={**self.profiles, **{p.id: p for p in found}})

    def _load_milestones(self) -> None:
        try:
            rows = self.client.milestones_by_mission(self.mission_id)
        except RemoteError as e:
            log.warning("could not load milestones for %s: %s", self.mission_id, e.message)
            rows = []
        self._set(milestones=rows)

        try:
            logs = self.client.logs_for_milestones([m.id for m in rows])
        except RemoteError as e:
            log.warning("could not load logs for %s: %s", self.mission_id, e.message)
            logs = []
        self._set(logs=logs)

    # ------------------------------------------------------------------
    # guards
    # ------------------------------------------------------------------
    def _owner_check(self, needs_unlocked: bool = False) -> Optional[str]:
        if self.mission is None:
            return "Mission not loaded."
        if not self.is_owner:
            return OWNER_ONLY
        if needs_unlocked and self.locked:
            return LOCKED
        return None

    # ------------------------------------------------------------------
    # mission actions
    # ------------------------------------------------------------------
    def add_watcher(self, email: str) -> bool:
        problem = self._owner_check()
        if problem:
            return self._fail(problem)
        if not valid_email(email):
            return self._fail("Please enter a valid email.")

        email = email.strip()
        self._set(error=None)
        try:
            profile = self.client.profile_by_email(email)
        except RemoteError as e:
            return self._fail(e.message)
        if profile is None:
            return self._fail("No user found with that email.")
        if profile.id == self.viewer_id:
            return self._fail("You already own this mission.")

        try:
            row = self.client.insert_watcher(self.mission_id, profile.id)
        except RemoteError as e:
            if e.status_code == 409:
                return self._fail(ALREADY_WATCHING)
            return self._fail(e.message)

        self._set(
            watchers=self.watchers + [row],
            profiles={**self.profiles, profile.id: profile},
        )
        return True

    def remove_watcher(self, watcher_id: str) -> bool:
        problem = self._owner_check()
        if problem:
            return self._fail(problem)

        def drop(items):
            return [w for w in items if w.watcher_id != watcher_id]

        result = mutate(
            self.watchers,
            drop,
            lambda: self.client.delete_watcher(self.mission_id, watcher_id),
            on_change=lambda items: self._set(watchers=items),
        )
        if not result.ok:
            return self._fail(result.error)
        return True

    def mark_satisfied(self) -> bool:
        problem = self._owner_check(needs_unlocked=True)
        if problem:
            return self._fail(problem)

        self._set(error=None)
        result = mutate(
            [self.mission],
            set_status(self.mission.id, "completed"),
            lambda: self.client.update_mission_status(self.mission_id, "completed"),
            on_change=lambda items: self._set(mission=items[0]),
        )
        if not result.ok:
            return self._fail(result.error)
        return True

    def delete_mission(self) -> bool:
        problem = self._owner_check()
        if problem:
            return self._fail(problem)
        try:
            self.client.delete_mission(self.mission_id)
        except RemoteError as e:
            return self._fail(e.message)
        self._set(deleted=True)
        return True

    def stop_watching(self) -> bool:
        if self.role != WATCHER:
            return self._fail("Only watchers can stop watching.")
        try:
            self.client.delete_watcher(self.mission_id, self.viewer_id)
        except RemoteError as e:
            return self._fail(e.message)
        self._set(stopped_watching=True)
        return True

    # ------------------------------------------------------------------
    # milestone actions
    # ------------------------------------------------------------------
    def add_milestone(self, name: str, deadline, priority: str = "medium", notes: Optional[str] = None) -> Optional[MilestoneOut]:
        problem = self._owner_check(needs_unlocked=True)
        if problem:
            self._fail(problem)
            return None
        name = (name or "").strip()
        if not name or not deadline:
            self._fail("Please fill the required fields.")
            return None
        if priority not in get_args(Priority):
            self._fail("Priority must be low, medium or high.")
            return None
        try:
            deadline = as_date(deadline)
        except ValueError:
            self._fail("Please enter a valid deadline.")
            return None

        self._set(error=None)
        try:
            row = self.client.insert_milestone(
                self.mission_id, name, deadline, priority, (notes or "").strip() or None
            )
        except RemoteError as e:
            self._fail(e.message)
            return None
        # keep the server ordering (deadline first)
        self.set_milestones(sorted(merge_row(self.milestones, row), key=lambda m: m.deadline))
        return row

    def toggle_milestone(self, milestone_id: str) -> bool:
        problem = self._owner_check(needs_unlocked=True)
        if problem:
            return self._fail(problem)
        current = next((m for m in self.milestones if m.id == milestone_id), None)
        if current is None:
            return self._fail("Milestone not found.")

        new_status = "active" if current.status == "completed" else "completed"
        self._set(error=None)
        result = mutate(
            self.milestones,
            set_status(milestone_id, new_status),
            lambda: self.client.update_milestone_status(self.mission_id, milestone_id, new_status),
            on_change=self.set_milestones,
        )
        if not result.ok:
            return self._fail(result.error)
        return True

    def delete_milestone(self, milestone_id: str) -> bool:
        problem = self._owner_check()
        if problem:
            return self._fail(problem)

        self._set(error=None)
        result = mutate(
            self.milestones,
            remove_by_id(milestone_id),
            lambda: self.client.delete_milestone(self.mission_id, milestone_id),
            on_change=self.set_milestones,
        )
        if not result.ok:
            return self._fail(result.error)
        self._set(logs=[entry for entry in self.logs if entry.milestone_id != milestone_id])
        return True

    def add_log(self, milestone_id: str, content: str) -> Optional[LogOut]:
        problem = self._owner_check(needs_unlocked=True)
        if problem:
            self._fail(problem)
            return None
        content = (content or "").strip()
        if not content:
            self._fail("Please fill the required field.")
            return None
        if not any(m.id == milestone_id for m in self.milestones):
            self._fail("Milestone not found.")
            return None

        self._set(error=None)
        try:
            entry = self.client.insert_log(milestone_id, content)
        except RemoteError as e:
            self._fail(e.message)
            return None
        self._set(logs=[entry] + self.logs)
        return entry

    # ------------------------------------------------------------------
    # render
    # ------------------------------------------------------------------
    def _chip(self, user_id: str) -> WatcherChip:
        profile = self.profiles.get(user_id)
        name = display_name(profile.name if profile else None, user_id)
        return WatcherChip(user_id=user_id, initial=chip_initial(name), name=name)

    def _milestone_card(self, ms: MilestoneOut, bucket: str, logs: List[LogOut]) -> MilestoneCardView:
        controls = milestone_controls(self.role, self.locked)
        return MilestoneCardView(
            id=ms.id,
            title=ms.name,
            notes=ms.notes,
            bucket=bucket,
            status_label=milestone_status_label(bucket),
            deadline_text=format_dmy(ms.deadline),
            priority_label=priority_label(ms.priority),
            logs_text=logs_text(len(logs)),
            checked=ms.status == "completed",
            can_toggle=controls.checkbox,
            can_add_log=controls.add_log,
            can_delete=controls.delete,
            logs=[
                LogItem(id=entry.id, content=entry.content, timestamp_text=format_log_timestamp(entry.created_at))
                for entry in logs
            ],
        )

    def view(self) -> MissionDetailView:
        if self.error and self.mission is None:
            return MissionDetailView(error=self.error)
        if self.not_found:
            return MissionDetailView(not_found=True)
        role = self.role
        if self.loading or role is None:
            return MissionDetailView(loading=True, error=self.error)

        m = self.mission
        label = mission_display_label(m.status)

        logs_by_ms: Dict[str, List[LogOut]] = defaultdict(list)
        for entry in self.logs:
            logs_by_ms[entry.milestone_id].append(entry)

        buckets = bucket_milestones(self.milestones, self.locked, self.today_value)
        milestones = MilestoneBuckets(
            **{
                name: [self._milestone_card(ms, name, logs_by_ms.get(ms.id, [])) for ms in rows]
                for name, rows in buckets.items()
            }
        )

        header = MissionHeader(
            id=m.id,
            title=m.name,
            status_label=label,
            start_date_text=format_dmy(m.start_date),
            end_date_text=format_dmy(m.end_date),
            description=m.description,
            watching_owner=self._chip(m.owner_id) if role == WATCHER else None,
        )
        actions = mission_actions(role, label)

        return MissionDetailView(
            error=self.error,
            role=role,
            header=header,
            watchers=[self._chip(w.watcher_id) for w in self.watchers] if role == OWNER else [],
            actions=MissionActionsView(
                add_watcher=actions.add_watcher,
                mark_satisfied=actions.mark_satisfied,
                delete_mission=actions.delete_mission,
                add_milestone=actions.add_milestone,
                stop_watching=actions.stop_watching,
            ),
            milestones=milestones,
        )
