# backend/mission_control/pages/auth.py
import logging
from typing import Optional

from mission_control.client import MissionControlClient, RemoteError
from mission_control.pages.base import Page
from mission_control.schemas.auth import SessionOut

log = logging.getLogger(__name__)

EMAIL, LOGIN, SIGNUP = "email", "login", "signup"


def valid_email(email: str) -> bool:
    email = (email or "").strip()
    return bool(email) and "@" in email


class AuthFlow(Page):
    """Email step, then either login or signup."""

    def __init__(self, client: MissionControlClient):
        super().__init__()
        self.client = client
        self.loading = False
        self.step = EMAIL
        self.email = ""
        self.session: Optional[SessionOut] = None

    # -- navigation ---------------------------------------------------------
    def continue_with_email(self, email: str) -> bool:
        if not valid_email(email):
            return self._fail("Please enter a valid email.")
        self._set(email=email.strip(), step=LOGIN, error=None)
        return True

    def start_signup(self) -> None:
        self._set(step=SIGNUP, error=None)

    def back_to_email(self) -> None:
        self._set(step=EMAIL, error=None)

    # -- actions --------------------------------------------------------------
    def login(self, password: str) -> bool:
        if not valid_email(self.email):
            self._set(step=EMAIL)
            return self._fail("Please enter a valid email.")
        if not password:
            return self._fail("Please enter your password.")

        self._set(loading=True, error=None)
        try:
            session = self.client.sign_in(self.email, password)
        except RemoteError as e:
            self._set(loading=False)
            return self._fail(e.message)
        self._set(session=session, loading=False)
        return True

    def signup(self, name: str, email: str, password: str, confirm_password: str) -> bool:
        name = (name or "").strip()
        if not name:
            return self._fail("Please enter your name.")
        if not valid_email(email):
            return self._fail("Please enter a valid email.")
        if not password:
            return self._fail("Please enter a password.")
        if password != confirm_password:
            return self._fail("Passwords do not match.")

        self._set(loading=True, error=None, email=email.strip())
        try:
            session = self.client.sign_up(email.strip(), password, name)
        except RemoteError as e:
            self._set(loading=False)
            return self._fail(e.message)
        log.info("signed up %s", session.user.id)
        self._set(session=session, loading=False)
        return True

    def check_session(self) -> bool:
        try:
            session = self.client.get_session()
        except RemoteError:
            self._set(session=None)
            return False
        self._set(session=session)
        return True

    def logout(self) -> None:
        try:
            self.client.sign_out()
        except RemoteError as e:
            log.error("sign-out failed: %s", e.message)
        self._set(session=None, step=EMAIL, email="")
