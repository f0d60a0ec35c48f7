from mission_control.client import MissionControlClient
from mission_control.pages import AuthFlow
from mission_control.pages.auth import EMAIL, LOGIN, SIGNUP

from conftest import PASSWORD


def _flow(http):
    return AuthFlow(MissionControlClient("http://testserver", http=http))


def test_email_step_validates(http):
    flow = _flow(http)
    assert flow.continue_with_email("not-an-email") is False
    assert flow.error == "Please enter a valid email."
    assert flow.step == EMAIL

    assert flow.continue_with_email("  new@mail.com ") is True
    assert flow.step == LOGIN
    assert flow.email == "new@mail.com"
    assert flow.error is None


def test_signup_validation_messages(http):
    flow = _flow(http)
    flow.start_signup()
    assert flow.step == SIGNUP

    assert not flow.signup("", "a@mail.com", "secret1", "secret1")
    assert flow.error == "Please enter your name."
    assert not flow.signup("Ann", "a@mail.com", "", "")
    assert flow.error == "Please enter a password."
    assert not flow.signup("Ann", "a@mail.com", "secret1", "secret2")
    assert flow.error == "Passwords do not match."


def test_signup_then_login(http):
    flow = _flow(http)
    assert flow.signup("Ann", "ann@mail.com", PASSWORD, PASSWORD)
    assert flow.session.user.email == "ann@mail.com"
    assert flow.check_session()

    flow.logout()
    assert flow.session is None
    assert flow.step == EMAIL
    assert flow.check_session() is False

    flow.continue_with_email("ann@mail.com")
    assert not flow.login("")
    assert flow.error == "Please enter your password."
    assert not flow.login("wrong-password")
    assert flow.error == "Invalid login credentials"
    assert flow.login(PASSWORD)
    assert flow.error is None
    assert flow.session is not None


def test_duplicate_signup_surfaces_server_message(http, owner):
    flow = _flow(http)
    assert not flow.signup("Again", "owner@mail.com", PASSWORD, PASSWORD)
    assert flow.error == "Email already registered"
    assert flow.loading is False
