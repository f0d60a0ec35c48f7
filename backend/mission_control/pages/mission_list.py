# backend/mission_control/pages/mission_list.py
"""
Mission list page: MY MISSIONS and WATCHING, each split into
ACTIVE / COMPLETED / UNSATISFIED.

load() runs the expiry pass for the viewer before fetching, using the same
local date the page was given. The pass is best-effort: a failed write is
logged and the list is fetched anyway.
"""
import logging
from collections import defaultdict
from datetime import date
from typing import Callable, Dict, List, Optional

from mission_control.client import AuthError, MissionControlClient, RemoteError
from mission_control.pages.base import Page
from mission_control.pages.views import MissionCard, MissionListView, MissionSection, WatcherChip
from mission_control.roles import chip_initial, display_name
from mission_control.schemas.auth import UserOut
from mission_control.schemas.milestone import MilestoneOut
from mission_control.schemas.mission import MissionOut
from mission_control.schemas.profile import ProfileOut
from mission_control.schemas.watcher import WatcherOut
from mission_control.status import (
    as_date,
    bucket_missions,
    format_date_range,
    local_today,
    mission_display_label,
    milestones_text,
)

log = logging.getLogger(__name__)


class MissionListPage(Page):
    def __init__(self, client: MissionControlClient, today: Callable[[], date] = local_today):
        super().__init__()
        self.client = client
        self.today = today
        self.user: Optional[UserOut] = None
        self.missions: List[MissionOut] = []
        self.watching: List[MissionOut] = []
        self.milestones: Dict[str, List[MilestoneOut]] = {}
        self.watchers: Dict[str, List[WatcherOut]] = {}
        self.profiles: Dict[str, ProfileOut] = {}

    # ------------------------------------------------------------------
    # loading
    # ------------------------------------------------------------------
    def load(self) -> None:
        self._set(loading=True, error=None)

        try:
            user = self.client.get_user()
        except AuthError:
            self._set(user=None, missions=[], watching=[], loading=False)
            self._fail("You must be logged in to see your missions.")
            return
        except RemoteError as e:
            self._set(user=None, missions=[], watching=[], loading=False)
            self._fail(e.message)
            return
        self._set(user=user)

        today = self.today()
        try:
            self.client.expire_missions(today)
        except RemoteError as e:
            log.warning("expiry pass failed for %s: %s", user.id, e.message)

        try:
            missions = self.client.missions_by_owner()
        except RemoteError as e:
            self._set(missions=[], loading=False)
            self._fail(e.message)
            return

        try:
            watching = self.client.missions_watching()
        except RemoteError as e:
            log.warning("could not load watched missions: %s", e.message)
            watching = []

        self._set(missions=missions, watching=watching)
        self._load_card_details()
        self._set(loading=False)

    def _load_card_details(self) -> None:
        """Milestone counts and watcher chips; each degrades to empty on failure."""
        all_ids = [m.id for m in self.missions] + [m.id for m in self.watching]

        by_mission: Dict[str, List[MilestoneOut]] = defaultdict(list)
        try:
            for ms in self.client.milestones_for_missions(all_ids):
                by_mission[ms.mission_id].append(ms)
        except RemoteError as e:
            log.warning("could not load milestone counts: %s", e.message)
            by_mission.clear()

        watchers: Dict[str, List[WatcherOut]] = defaultdict(list)
        profiles: Dict[str, ProfileOut] = {}
        try:
            for w in self.client.watchers_for_missions([m.id for m in self.missions]):
                watchers[w.mission_id].append(w)
            user_ids = {w.watcher_id for rows in watchers.values() for w in rows}
            user_ids.update(m.owner_id for m in self.watching)
            profiles = {p.id: p for p in self.client.profiles_by_ids(sorted(user_ids))}
        except RemoteError as e:
            log.warning("could not load watchers: %s", e.message)
            watchers.clear()

        self._set(milestones=dict(by_mission), watchers=dict(watchers), profiles=profiles)

    # ------------------------------------------------------------------
    # actions
    # ------------------------------------------------------------------
    def create_mission(self, name: str, start_date, end_date, description: str = "") -> Optional[MissionOut]:
        name = (name or "").strip()
        if not name or not start_date or not end_date:
            self._fail("Please fill the required fields.")
            return None
        try:
            if as_date(end_date) < as_date(start_date):
                self._fail("End date must be after start date.")
                return None
        except ValueError:
            self._fail("Please enter valid dates.")
            return None
        if self.user is None:
            self._fail("You must be logged in to create a mission.")
            return None

        self._set(error=None)
        try:
            row = self.client.insert_mission(
                name, as_date(start_date), as_date(end_date), (description or "").strip() or None
            )
        except RemoteError as e:
            self._fail(e.message)
            return None

        # newest first, same as the server ordering
        self._set(missions=[row] + [m for m in self.missions if m.id != row.id])
        return row

    def sign_out(self) -> None:
        try:
            self.client.sign_out()
        except RemoteError as e:
            log.error("sign-out failed: %s", e.message)
        self._set(user=None, missions=[], watching=[])

    # ------------------------------------------------------------------
    # render
    # ------------------------------------------------------------------
    def _chips(self, user_ids: List[str]) -> List[WatcherChip]:
        chips = []
        for uid in user_ids:
            profile = self.profiles.get(uid)
            name = display_name(profile.name if profile else None, uid)
            chips.append(WatcherChip(user_id=uid, initial=chip_initial(name), name=name))
        return chips

    def _card(self, m: MissionOut, with_watchers: bool) -> MissionCard:
        rows = self.milestones.get(m.id, [])
        done = sum(1 for ms in rows if ms.status == "completed")
        watchers = [w.watcher_id for w in self.watchers.get(m.id, [])] if with_watchers else []
        return MissionCard(
            id=m.id,
            title=m.name,
            status_label=mission_display_label(m.status),
            date_range_text=format_date_range(m.start_date, m.end_date),
            milestones_text=milestones_text(done, len(rows)),
            watchers=self._chips(watchers),
        )

    def _section(self, missions: List[MissionOut], with_watchers: bool) -> MissionSection:
        buckets = bucket_missions(missions)
        return MissionSection(
            **{name: [self._card(m, with_watchers) for m in rows] for name, rows in buckets.items()}
        )

    def view(self) -> MissionListView:
        return MissionListView(
            loading=self.loading,
            error=self.error,
            mine=self._section(self.missions, with_watchers=True),
            watching=self._section(self.watching, with_watchers=False),
        )
