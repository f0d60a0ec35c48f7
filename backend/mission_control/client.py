# backend/mission_control/client.py
"""
HTTP client for the Mission Control row service.

One client is constructed per app session and passed to the pages that need
it; nothing here is module-global. Every response body is parsed into the
typed schema for that query before it reaches page state, and any non-2xx
answer raises RemoteError.

The transport is a `requests.Session` by default. Anything exposing the same
`request(method, url, ...)` call and a response with `status_code` and
`json()` works too (FastAPI's TestClient, for instance).
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, List, Optional

import requests

from mission_control.schemas.auth import SessionOut, UserOut
from mission_control.schemas.log import LogOut
from mission_control.schemas.milestone import MilestoneOut
from mission_control.schemas.mission import ExpireResult, MissionOut
from mission_control.schemas.profile import ProfileOut
from mission_control.schemas.watcher import WatcherOut

log = logging.getLogger(__name__)


class RemoteError(Exception):
    """A call to the row service failed (non-2xx or transport error)."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class AuthError(RemoteError):
    pass


class NotFoundError(RemoteError):
    pass


def _detail(resp) -> str:
    try:
        body = resp.json()
    except ValueError:
        return getattr(resp, "text", "") or f"HTTP {resp.status_code}"
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, list):
        # FastAPI validation errors
        return "; ".join(str(d.get("msg", d)) for d in detail if d)
    return str(detail) if detail else f"HTTP {resp.status_code}"


def _iso(value) -> str:
    return value.isoformat() if isinstance(value, date) else str(value)


class MissionControlClient:
    def __init__(self, base_url: str, http=None, timeout: Optional[float] = None):
        self.base_url = base_url.rstrip("/")
        self._owns_http = http is None
        self.http = http if http is not None else requests.Session()
        self.timeout = timeout
        self.access_token: Optional[str] = None
        self.closed = False

    @classmethod
    def from_settings(cls, settings, http=None) -> "MissionControlClient":
        return cls(settings.api_url, http=http)

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "MissionControlClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ------------------------------------------------------------------
    # transport
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, *, json: Any = None, params: Any = None):
        if self.closed:
            raise RemoteError(0, "Client is closed")
        headers = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        kwargs = {}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout

        try:
            resp = self.http.request(
                method, self.base_url + path, json=json, params=params, headers=headers, **kwargs
            )
        except requests.RequestException as e:
            log.warning("%s %s failed: %s", method, path, e)
            raise RemoteError(0, str(e)) from e

        if resp.status_code >= 400:
            message = _detail(resp)
            log.debug("%s %s -> %s %s", method, path, resp.status_code, message)
            if resp.status_code == 401:
                raise AuthError(resp.status_code, message)
            if resp.status_code == 404:
                raise NotFoundError(resp.status_code, message)
            raise RemoteError(resp.status_code, message)
        if resp.status_code == 204:
            return None
        return resp.json()

    # ------------------------------------------------------------------
    # auth
    # ------------------------------------------------------------------
    def sign_up(self, email: str, password: str, name: str) -> SessionOut:
        data = self._request("POST", "/auth/sign-up", json={"email": email, "password": password, "name": name})
        session = SessionOut.model_validate(data)
        self.access_token = session.access_token
        return session

    def sign_in(self, email: str, password: str) -> SessionOut:
        data = self._request("POST", "/auth/sign-in", json={"email": email, "password": password})
        session = SessionOut.model_validate(data)
        self.access_token = session.access_token
        return session

    def sign_out(self) -> None:
        try:
            self._request("POST", "/auth/sign-out")
        finally:
            self.access_token = None

    def get_session(self) -> SessionOut:
        if not self.access_token:
            raise AuthError(401, "Not logged in")
        return SessionOut.model_validate(self._request("GET", "/auth/session"))

    def get_user(self) -> UserOut:
        if not self.access_token:
            raise AuthError(401, "Not logged in")
        return UserOut.model_validate(self._request("GET", "/auth/user"))

    # ------------------------------------------------------------------
    # missions
    # ------------------------------------------------------------------
    def missions_by_owner(self) -> List[MissionOut]:
        return [MissionOut.model_validate(r) for r in self._request("GET", "/missions")]

    def missions_watching(self) -> List[MissionOut]:
        return [MissionOut.model_validate(r) for r in self._request("GET", "/missions/watching")]

    def mission(self, mission_id: str) -> MissionOut:
        return MissionOut.model_validate(self._request("GET", f"/missions/{mission_id}"))

    def insert_mission(
        self,
        name: str,
        start_date,
        end_date,
        description: Optional[str] = None,
    ) -> MissionOut:
        body = {
            "name": name,
            "description": description,
            "start_date": _iso(start_date),
            "end_date": _iso(end_date),
        }
        return MissionOut.model_validate(self._request("POST", "/missions", json=body))

    def update_mission_status(self, mission_id: str, status: str) -> MissionOut:
        return MissionOut.model_validate(
            self._request("PATCH", f"/missions/{mission_id}", json={"status": status})
        )

    def delete_mission(self, mission_id: str) -> None:
        self._request("DELETE", f"/missions/{mission_id}")

    def expire_missions(self, today) -> int:
        data = self._request("POST", "/missions/expire", params={"today": _iso(today)})
        return ExpireResult.model_validate(data).expired

    # ------------------------------------------------------------------
    # watchers
    # ------------------------------------------------------------------
    def watchers_by_mission(self, mission_id: str) -> List[WatcherOut]:
        return [WatcherOut.model_validate(r) for r in self._request("GET", f"/missions/{mission_id}/watchers")]

    def watchers_for_missions(self, mission_ids: Iterable[str]) -> List[WatcherOut]:
        ids = list(mission_ids)
        if not ids:
            return []
        return [WatcherOut.model_validate(r) for r in self._request("GET", "/watchers", params={"mission_id": ids})]

    def watcher(self, mission_id: str, watcher_id: str) -> Optional[WatcherOut]:
        try:
            data = self._request("GET", f"/missions/{mission_id}/watchers/{watcher_id}")
        except NotFoundError:
            return None
        return WatcherOut.model_validate(data)

    def insert_watcher(self, mission_id: str, watcher_id: str) -> WatcherOut:
        return WatcherOut.model_validate(
            self._request("POST", f"/missions/{mission_id}/watchers", json={"watcher_id": watcher_id})
        )

    def delete_watcher(self, mission_id: str, watcher_id: str) -> None:
        self._request("DELETE", f"/missions/{mission_id}/watchers/{watcher_id}")

    # ------------------------------------------------------------------
    # milestones
    # ------------------------------------------------------------------
    def milestones_by_mission(self, mission_id: str) -> List[MilestoneOut]:
        return [MilestoneOut.model_validate(r) for r in self._request("GET", f"/missions/{mission_id}/milestones")]

    def milestones_for_missions(self, mission_ids: Iterable[str]) -> List[MilestoneOut]:
        ids = list(mission_ids)
        if not ids:
            return []
        return [MilestoneOut.model_validate(r) for r in self._request("GET", "/milestones", params={"mission_id": ids})]

    def insert_milestone(
        self,
        mission_id: str,
        name: str,
        deadline,
        priority: str = "medium",
        notes: Optional[str] = None,
    ) -> MilestoneOut:
        body = {"name": name, "notes": notes, "deadline": _iso(deadline), "priority": priority}
        return MilestoneOut.model_validate(self._request("POST", f"/missions/{mission_id}/milestones", json=body))

    def update_milestone_status(self, mission_id: str, milestone_id: str, status: str) -> MilestoneOut:
        return MilestoneOut.model_validate(
            self._request("PATCH", f"/missions/{mission_id}/milestones/{milestone_id}", json={"status": status})
        )

    def delete_milestone(self, mission_id: str, milestone_id: str) -> None:
        self._request("DELETE", f"/missions/{mission_id}/milestones/{milestone_id}")

    # ------------------------------------------------------------------
    # logs
    # ------------------------------------------------------------------
    def logs_for_milestones(self, milestone_ids: Iterable[str]) -> List[LogOut]:
        ids = list(milestone_ids)
        if not ids:
            return []
        return [LogOut.model_validate(r) for r in self._request("GET", "/logs", params={"milestone_id": ids})]

    def insert_log(self, milestone_id: str, content: str) -> LogOut:
        return LogOut.model_validate(
            self._request("POST", "/logs", json={"milestone_id": milestone_id, "content": content})
        )

    # ------------------------------------------------------------------
    # profiles
    # ------------------------------------------------------------------
    def profiles_by_ids(self, user_ids: Iterable[str]) -> List[ProfileOut]:
        ids = list(user_ids)
        if not ids:
            return []
        return [ProfileOut.model_validate(r) for r in self._request("GET", "/profiles", params={"id": ids})]

    def profile_by_email(self, email: str) -> Optional[ProfileOut]:
        try:
            data = self._request("GET", "/profiles/by-email", params={"email": email})
        except NotFoundError:
            return None
        return ProfileOut.model_validate(data)

    def update_profile(self, name: Optional[str]) -> ProfileOut:
        return ProfileOut.model_validate(self._request("PUT", "/profiles/me", json={"name": name}))
